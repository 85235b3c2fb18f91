"""
encoder.py — narrow F32 bits to F16 / E5M2 / E4M3 bits.

Rounding is round-to-nearest, ties-to-even, decided once per hop from the
exact discarded remainder (no +0.5 tricks, no float math). Special values:
- overflow          -> inf, or max finite for formats without inf (e4m3)
- inf input         -> same policy as overflow
- too small         -> signed zero
- NaN               -> NaN of the same sign, payload truncated, quiet bit set

The 8-bit formats name F16 as their staging format: an F32 input is rounded
onto the half grid first and then onto the 8-bit grid. That makes
encode(x, e4m3) identical to encode(decode(encode(x, f16)), e4m3) for every x.
"""

from __future__ import annotations

from .classify import (
    Classified, Infinity, NaN, Normal, QuietNaN, Subnormal, Zero,
    classify, compose, pack, significand,
)
from .decoder import decode
from .formats import F32, FormatSpec, get_format


def round_half_even(value: int, shift: int) -> int:
    """value / 2**shift rounded to nearest, ties to even. shift <= 0 scales up."""
    if shift <= 0:
        return value << -shift
    kept = value >> shift
    rest = value & ((1 << shift) - 1)
    half = 1 << (shift - 1)
    if rest > half or (rest == half and kept & 1):
        kept += 1
    return kept


def _overflow(sign: int, dst: FormatSpec) -> int:
    if dst.has_infinity:
        return compose(Infinity(sign), dst)
    return pack(sign, 0, 0, dst) | dst.max_finite


def _round_finite(sign: int, sig: int, exp: int, dst: FormatSpec) -> int:
    # value = sig * 2**exp, sig > 0
    m = dst.mantissa_bits
    top = sig.bit_length() - 1 + exp
    e = max(top, dst.min_normal_exponent)   # below min normal -> subnormal grid
    kept = round_half_even(sig, (e - m) - exp)

    if kept >> (m + 1):
        # mantissa overflowed into the next binade
        kept >>= 1
        e += 1
    if kept == 0:
        return compose(Zero(sign), dst)
    if kept < (1 << m):
        return compose(Subnormal(sign, kept), dst)

    exponent_field = e + dst.exponent_bias
    mantissa = kept & dst.mantissa_mask
    if exponent_field > dst.max_exponent_field:
        return _overflow(sign, dst)
    if exponent_field == dst.max_exponent_field and mantissa > dst.max_mantissa:
        return _overflow(sign, dst)
    return compose(Normal(sign, e, mantissa), dst)


def narrow(value: Classified, src: FormatSpec, dst: FormatSpec) -> int:
    """Round a value classified in `src` to a `dst` bit pattern (single hop)."""
    if isinstance(value, Zero):
        return compose(value, dst)
    if isinstance(value, Infinity):
        return _overflow(value.sign, dst)
    if isinstance(value, NaN):
        drop = src.mantissa_bits - dst.mantissa_bits
        payload = value.payload >> drop if drop >= 0 else value.payload << -drop
        return compose(QuietNaN(value.sign, payload | dst.quiet_bit), dst)
    sig, exp = significand(value, src)
    return _round_finite(value.sign, sig, exp, dst)


def convert(bits: int, src, dst) -> int:
    """Convert a `src` pattern to a `dst` pattern (any direction)."""
    src, dst = get_format(src), get_format(dst)
    if dst == F32:
        return decode(bits, src)
    if dst.staging is not None:
        stage = get_format(dst.staging)
        if src.mantissa_bits > stage.mantissa_bits:
            bits, src = convert(bits, src, stage), stage
    return narrow(classify(bits, src), src, dst)


def encode(bits: int, fmt) -> int:
    """F32 bit pattern (as int) -> narrow pattern in `fmt`."""
    return convert(bits, F32, fmt)
