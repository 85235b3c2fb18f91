"""
Reinterpret bits as floats and back. No conversion happens here.

This is the only place that touches real float objects. It uses numpy views
(the same `.view(np.uint32)` trick the quantizers rely on), so the bits go
through untouched. The codec itself never calls these; they are for feeding
values in and reading results out.

Note: to_float() returns a Python float, which is float64. Every F32 value is
exact in float64, but a signaling NaN may come back quieted depending on the
platform. Use bits_to_f32() and stay in numpy when NaN bits matter.
"""

from __future__ import annotations
import numpy as np

from .decoder import decode
from .encoder import encode
from .formats import F32, get_format


def f32_to_bits(x) -> int:
    """float -> uint32 bits. Python floats are first rounded to float32 by numpy."""
    return int(np.asarray(x, dtype=np.float32).reshape(1).view(np.uint32)[0])


def bits_to_f32(u: int) -> np.float32:
    return np.asarray([u & 0xFFFFFFFF], dtype=np.uint32).view(np.float32)[0]


def f16_to_bits(x) -> int:
    return int(np.asarray(x, dtype=np.float16).reshape(1).view(np.uint16)[0])


def bits_to_f16(u: int) -> np.float16:
    return np.asarray([u & 0xFFFF], dtype=np.uint16).view(np.float16)[0]


def to_float(bits: int, fmt) -> float:
    """Pattern in `fmt` -> Python float (exact for every format here)."""
    return float(bits_to_f32(decode(bits, fmt)))


def from_float(x, fmt) -> int:
    """Python/numpy float -> pattern in `fmt`.

    `x` is taken as a float32 value first, so a float64 input is rounded to
    float32 by numpy before the codec sees it.
    """
    fmt = get_format(fmt)
    bits = f32_to_bits(x)
    return bits if fmt == F32 else encode(bits, fmt)
