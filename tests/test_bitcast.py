from __future__ import annotations

import math

import numpy as np

from smallfloat.bitcast import bits_to_f16, bits_to_f32, f16_to_bits, f32_to_bits, from_float, to_float


def test_f32_bits():
    assert f32_to_bits(1.0) == 0x3F800000
    assert f32_to_bits(-0.0) == 0x80000000
    assert f32_to_bits(np.float32(np.inf)) == 0x7F800000
    assert bits_to_f32(0x40490FDB) == np.float32(math.pi)
    assert f32_to_bits(bits_to_f32(0x00000001)) == 0x00000001


def test_f16_bits():
    assert f16_to_bits(np.float16(1.0)) == 0x3C00
    assert bits_to_f16(0x7BFF) == np.float16(65504.0)


def test_to_float():
    assert to_float(0x7E, "e4m3") == 448.0
    assert to_float(0x01, "e4m3") == 2.0 ** -9
    assert to_float(0xC0, "e5m2") == -2.0
    assert to_float(0x7C, "e5m2") == math.inf
    assert math.isnan(to_float(0x7F, "e4m3"))
    assert math.copysign(1.0, to_float(0x80, "e4m3")) == -1.0


def test_from_float():
    assert from_float(448.0, "e4m3") == 0x7E
    assert from_float(-0.0, "e4m3") == 0x80
    assert from_float(math.inf, "e5m2") == 0x7C
    assert from_float(1.0, "f32") == 0x3F800000
    assert from_float(np.float16(0.5), "f16") == 0x3800
    assert math.isnan(to_float(from_float(math.nan, "e5m2"), "e5m2"))
