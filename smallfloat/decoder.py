"""
Widen any format to F32 bits. Exact, no rounding.

F32's exponent and mantissa ranges contain those of every narrow format, so
each narrow pattern maps to exactly one F32 pattern:
- subnormals are normalized (F32 normals reach far below 2^-24)
- normals are re-biased and their mantissa left-justified
- NaN payloads are left-justified, the signaling bit is copied as is
"""

from __future__ import annotations

from .classify import (
    Normal, QuietNaN, SignalingNaN, Subnormal,
    classify, compose,
)
from .formats import F32, FormatSpec, get_format


def widen(bits: int, fmt: FormatSpec):
    """Classify `bits` in `fmt` and restate the value in F32 terms."""
    value = classify(bits, fmt)
    if fmt == F32:
        return value
    shift = F32.mantissa_bits - fmt.mantissa_bits

    if isinstance(value, Subnormal):
        # move the leading one up to the implicit-bit position
        lead = value.mantissa.bit_length() - 1
        norm = fmt.mantissa_bits - lead
        mantissa = (value.mantissa << norm) & fmt.mantissa_mask
        return Normal(value.sign, fmt.min_normal_exponent - norm, mantissa << shift)
    if isinstance(value, Normal):
        return Normal(value.sign, value.exponent, value.mantissa << shift)
    if isinstance(value, QuietNaN):
        return QuietNaN(value.sign, value.payload << shift)
    if isinstance(value, SignalingNaN):
        return SignalingNaN(value.sign, value.payload << shift)
    # Zero / Infinity carry only the sign
    return value


def decode(bits: int, fmt) -> int:
    """Narrow pattern -> F32 bit pattern (as int)."""
    fmt = get_format(fmt)
    return compose(widen(bits, fmt), F32)
