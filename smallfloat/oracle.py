"""
oracle.py — slow but obviously-right reference built on mpmath.

exact_value() turns a finite bit pattern into an exact mpf by plain
arithmetic on its fields. reference_encode() rounds such a value by looking
up its neighbours in the full sorted list of the target's finite values,
so it shares no rounding code with the encoder. Only meant for small
targets (the 8-bit formats, maybe F16).
"""

from __future__ import annotations
from bisect import bisect_left
from functools import lru_cache
from typing import List, Optional, Tuple

import mpmath as mp

from .formats import FormatSpec, get_format


def set_oracle(bits=200):
    mp.mp.prec = int(bits)


def exact_value(bits: int, fmt) -> Optional[mp.mpf]:
    """Exact value of a finite pattern, None for inf/NaN. Zeros keep their sign."""
    fmt = get_format(fmt)
    bits &= fmt.mask
    sign = -1 if bits & fmt.sign_mask else 1
    e = (bits >> fmt.mantissa_bits) & fmt.exponent_field_max
    m = bits & fmt.mantissa_mask
    if e == fmt.exponent_field_max and (fmt.has_infinity or fmt.is_nan_field(e, m)):
        return None
    if e == 0:
        # mpmath has no negative zero; sign of zero is read from the bits
        return sign * mp.ldexp(mp.mpf(m), fmt.min_normal_exponent - fmt.mantissa_bits)
    sig = (1 << fmt.mantissa_bits) + m
    return sign * mp.ldexp(mp.mpf(sig), e - fmt.exponent_bias - fmt.mantissa_bits)


@lru_cache(maxsize=None)
def _grid(fmt: FormatSpec) -> Tuple[List[mp.mpf], List[int]]:
    """Positive finite values of `fmt` (with +0), ascending, plus their patterns."""
    values, patterns = [], []
    for bits in range(fmt.max_finite + 1):
        v = exact_value(bits, fmt)
        if v is not None:
            values.append(v)
            patterns.append(bits)
    return values, patterns


def _nearest_even(x: mp.mpf, fmt: FormatSpec) -> Optional[int]:
    """Pattern of the grid point nearest to x >= 0; None when x rounds past max."""
    values, patterns = _grid(fmt)
    i = bisect_left(values, x)
    if i < len(values) and values[i] == x:
        return patterns[i]
    if i == len(values):
        # above max finite: the next step would be one ulp of the top binade
        top = values[-1]
        ulp = mp.ldexp(1, fmt.max_exponent - fmt.mantissa_bits)
        mid = top + ulp / 2
        if x < mid or (x == mid and patterns[-1] % 2 == 0):
            return patterns[-1]
        return None
    lo, hi = values[i - 1], values[i]
    if x - lo < hi - x:
        return patterns[i - 1]
    if x - lo > hi - x:
        return patterns[i]
    return patterns[i - 1] if patterns[i - 1] % 2 == 0 else patterns[i]


def reference_encode(bits: int, src, dst) -> int:
    """Round the `src` pattern `bits` into `dst`, independently of encoder.py."""
    src, dst = get_format(src), get_format(dst)
    bits &= src.mask
    sign = 1 if bits & src.sign_mask else 0
    sign_bit = dst.sign_mask if sign else 0
    inf_bits = dst.exponent_field_max << dst.mantissa_bits

    e = (bits >> src.mantissa_bits) & src.exponent_field_max
    m = bits & src.mantissa_mask
    if src.is_nan_field(e, m):
        if not dst.has_signaling_nan:
            return sign_bit | dst.nan
        drop = src.mantissa_bits - dst.mantissa_bits
        payload = m >> drop if drop >= 0 else m << -drop
        return sign_bit | inf_bits | payload | dst.quiet_bit

    x = exact_value(bits, src)
    if x is None:
        # infinity
        return sign_bit | (inf_bits if dst.has_infinity else dst.max_finite)
    found = _nearest_even(abs(x), dst)
    if found is None:
        return sign_bit | (inf_bits if dst.has_infinity else dst.max_finite)
    return sign_bit | found


set_oracle()
