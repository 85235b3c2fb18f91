"""
One classifier and one composer for every format.

A bit pattern is split into sign/exponent/mantissa according to its
FormatSpec and tagged as one of:

    Zero, Subnormal, Normal, Infinity, QuietNaN, SignalingNaN

Both directions (decoder and encoder) work on these values, so the special
cases of each format are expressed through FormatSpec data only.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, Union

from .formats import FormatSpec


@dataclass(frozen=True)
class Zero:
    sign: int


@dataclass(frozen=True)
class Subnormal:
    sign: int
    mantissa: int


@dataclass(frozen=True)
class Normal:
    sign: int
    exponent: int   # unbiased
    mantissa: int   # field bits, no implicit one


@dataclass(frozen=True)
class Infinity:
    sign: int


@dataclass(frozen=True)
class QuietNaN:
    sign: int
    payload: int    # full mantissa field


@dataclass(frozen=True)
class SignalingNaN:
    sign: int
    payload: int


Classified = Union[Zero, Subnormal, Normal, Infinity, QuietNaN, SignalingNaN]
NaN = (QuietNaN, SignalingNaN)


def fields(bits: int, fmt: FormatSpec) -> Tuple[int, int, int]:
    """Split `bits` into (sign, exponent field, mantissa field)."""
    bits &= fmt.mask
    sign = bits >> (fmt.width - 1)
    exponent = (bits >> fmt.mantissa_bits) & fmt.exponent_field_max
    mantissa = bits & fmt.mantissa_mask
    return sign, exponent, mantissa


def pack(sign: int, exponent: int, mantissa: int, fmt: FormatSpec) -> int:
    return ((sign & 1) << (fmt.width - 1)) | (exponent << fmt.mantissa_bits) | mantissa


def classify(bits: int, fmt: FormatSpec) -> Classified:
    sign, exponent, mantissa = fields(bits, fmt)
    if exponent == 0:
        if mantissa == 0:
            return Zero(sign)
        return Subnormal(sign, mantissa)
    if fmt.is_nan_field(exponent, mantissa):
        # formats without a signaling NaN only have the all-ones pattern,
        # whose top mantissa bit is set, so they always land on QuietNaN
        if mantissa & fmt.quiet_bit:
            return QuietNaN(sign, mantissa)
        return SignalingNaN(sign, mantissa)
    if exponent == fmt.exponent_field_max and fmt.has_infinity:
        return Infinity(sign)
    return Normal(sign, exponent - fmt.exponent_bias, mantissa)


def compose(value: Classified, fmt: FormatSpec) -> int:
    """Inverse of classify(). Fields must already fit `fmt`."""
    if isinstance(value, Zero):
        return pack(value.sign, 0, 0, fmt)
    if isinstance(value, Subnormal):
        return pack(value.sign, 0, value.mantissa, fmt)
    if isinstance(value, Normal):
        return pack(value.sign, value.exponent + fmt.exponent_bias, value.mantissa, fmt)
    if isinstance(value, Infinity):
        return pack(value.sign, fmt.exponent_field_max, 0, fmt)
    if isinstance(value, NaN):
        if not fmt.has_signaling_nan:
            return pack(value.sign, fmt.exponent_field_max, fmt.mantissa_mask, fmt)
        return pack(value.sign, fmt.exponent_field_max, value.payload, fmt)
    raise TypeError(f"not a classified value: {value!r}")


def significand(value: Classified, fmt: FormatSpec) -> Tuple[int, int]:
    """Finite nonzero value as (sig, exp) with value == sig * 2**exp exactly."""
    if isinstance(value, Normal):
        return (1 << fmt.mantissa_bits) | value.mantissa, value.exponent - fmt.mantissa_bits
    if isinstance(value, Subnormal):
        return value.mantissa, fmt.min_normal_exponent - fmt.mantissa_bits
    raise TypeError(f"no significand for {value!r}")


def describe(bits: int, fmt: FormatSpec) -> str:
    """Short human-readable dump, e.g. 'e5m2 0x7d s=0 e=0x1f m=0x1 SignalingNaN'."""
    sign, exponent, mantissa = fields(bits, fmt)
    digits = (fmt.width + 3) // 4
    kind = type(classify(bits, fmt)).__name__
    return f"{fmt.name} 0x{bits & fmt.mask:0{digits}x} s={sign} e=0x{exponent:x} m=0x{mantissa:x} {kind}"
