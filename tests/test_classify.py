from __future__ import annotations

import pytest

from smallfloat.classify import (
    Infinity, Normal, QuietNaN, SignalingNaN, Subnormal, Zero,
    classify, compose, describe, fields, significand,
)
from smallfloat.formats import F16, F32, F8_E4M3, F8_E5M2


@pytest.mark.parametrize("bits,fmt,expected", [
    (0x00, F8_E4M3, Zero(0)),
    (0x80, F8_E4M3, Zero(1)),
    (0x01, F8_E4M3, Subnormal(0, 1)),
    (0x87, F8_E4M3, Subnormal(1, 7)),
    (0x38, F8_E4M3, Normal(0, 0, 0)),
    (0x78, F8_E4M3, Normal(0, 8, 0)),
    (0x7E, F8_E4M3, Normal(0, 8, 6)),
    (0x7F, F8_E4M3, QuietNaN(0, 7)),
    (0xFF, F8_E4M3, QuietNaN(1, 7)),
    (0x7C, F8_E5M2, Infinity(0)),
    (0xFC, F8_E5M2, Infinity(1)),
    (0x7D, F8_E5M2, SignalingNaN(0, 1)),
    (0x7E, F8_E5M2, QuietNaN(0, 2)),
    (0x7F, F8_E5M2, QuietNaN(0, 3)),
    (0x7C00, F16, Infinity(0)),
    (0x7D00, F16, SignalingNaN(0, 0x100)),
    (0x3C00, F16, Normal(0, 0, 0)),
    (0x7FA00000, F32, SignalingNaN(0, 0x200000)),
    (0xFFC00000, F32, QuietNaN(1, 0x400000)),
    (0x00000001, F32, Subnormal(0, 1)),
])
def test_classify(bits, fmt, expected):
    assert classify(bits, fmt) == expected


@pytest.mark.parametrize("fmt", [F8_E4M3, F8_E5M2, F16])
def test_compose_inverts_classify(fmt):
    for x in range(1 << fmt.width):
        assert compose(classify(x, fmt), fmt) == x


def test_fields_masks_to_width():
    assert fields(0x17D, F8_E5M2) == (0, 0x1F, 1)
    assert fields(0xB8, F8_E4M3) == (1, 7, 0)


def test_significand():
    assert significand(Normal(0, 0, 0), F8_E4M3) == (8, -3)
    assert significand(Normal(0, 8, 6), F8_E4M3) == (14, 5)      # 14 * 32 = 448
    assert significand(Subnormal(0, 1), F8_E4M3) == (1, -9)
    assert significand(Subnormal(0, 1), F16) == (1, -24)
    with pytest.raises(TypeError):
        significand(Zero(0), F16)


def test_compose_rejects_garbage():
    with pytest.raises(TypeError):
        compose(object(), F16)


def test_describe():
    assert describe(0x7D, F8_E5M2) == "e5m2 0x7d s=0 e=0x1f m=0x1 SignalingNaN"
    assert describe(0xBC00, F16) == "f16 0xbc00 s=1 e=0xf m=0x0 Normal"
