"""
formats.py — bit-layout metadata for the formats we convert between.

Everything the decoder/encoder needs to know about a format lives here as
data, so there is one classifier and one rounding routine for all of them.

Key ideas:
- F32        -> reference format, 1/8/23, bias 127
- F16        -> IEEE half, 1/5/10, bias 15
- F8_E5M2    -> 1/5/2, bias 15, has inf, IEEE-style NaNs
- F8_E4M3    -> 1/4/3, bias 7, no inf, only S.1111.111 is NaN (saturates)
- get_format("e4m3") -> F8_E4M3
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional, Union

# nan_rule values
NAN_IEEE = "ieee"          # exp all ones + mantissa != 0, msb of mantissa = quiet
NAN_ALL_ONES = "all_ones"  # only exp all ones + mantissa all ones


@dataclass(frozen=True)
class FormatSpec:
    name: str
    exponent_bits: int
    mantissa_bits: int
    exponent_bias: int
    has_infinity: bool
    nan_rule: str = NAN_IEEE
    staging: Optional[str] = None  # format an F32 input is rounded through first
    sign_bits: int = 1

    @property
    def width(self) -> int:
        return self.sign_bits + self.exponent_bits + self.mantissa_bits

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    @property
    def sign_mask(self) -> int:
        return 1 << (self.width - 1)

    @property
    def mantissa_mask(self) -> int:
        return (1 << self.mantissa_bits) - 1

    @property
    def exponent_field_max(self) -> int:
        """Value of an all-ones exponent field."""
        return (1 << self.exponent_bits) - 1

    @property
    def quiet_bit(self) -> int:
        return 1 << (self.mantissa_bits - 1)

    @property
    def has_signaling_nan(self) -> bool:
        return self.nan_rule == NAN_IEEE

    @property
    def max_exponent_field(self) -> int:
        """Largest exponent field that still encodes finite values."""
        if self.nan_rule == NAN_ALL_ONES:
            return self.exponent_field_max
        return self.exponent_field_max - 1

    @property
    def max_mantissa(self) -> int:
        """Largest mantissa field allowed at max_exponent_field."""
        if self.nan_rule == NAN_ALL_ONES:
            return self.mantissa_mask - 1
        return self.mantissa_mask

    @property
    def min_normal_exponent(self) -> int:
        return 1 - self.exponent_bias

    @property
    def max_exponent(self) -> int:
        return self.max_exponent_field - self.exponent_bias

    @property
    def max_finite(self) -> int:
        """Bit pattern of the largest positive finite value."""
        return (self.max_exponent_field << self.mantissa_bits) | self.max_mantissa

    @property
    def nan(self) -> int:
        """Canonical positive quiet NaN pattern."""
        exp = self.exponent_field_max << self.mantissa_bits
        if self.nan_rule == NAN_ALL_ONES:
            return exp | self.mantissa_mask
        return exp | self.quiet_bit

    def is_nan_field(self, exponent: int, mantissa: int) -> bool:
        if exponent != self.exponent_field_max:
            return False
        if self.nan_rule == NAN_ALL_ONES:
            return mantissa == self.mantissa_mask
        return mantissa != 0

    def __str__(self) -> str:
        return self.name


F32 = FormatSpec("f32", exponent_bits=8, mantissa_bits=23, exponent_bias=127, has_infinity=True)
F16 = FormatSpec("f16", exponent_bits=5, mantissa_bits=10, exponent_bias=15, has_infinity=True)
F8_E5M2 = FormatSpec("e5m2", exponent_bits=5, mantissa_bits=2, exponent_bias=15,
                     has_infinity=True, staging="f16")
F8_E4M3 = FormatSpec("e4m3", exponent_bits=4, mantissa_bits=3, exponent_bias=7,
                     has_infinity=False, nan_rule=NAN_ALL_ONES, staging="f16")

FORMATS: Dict[str, FormatSpec] = {f.name: f for f in (F32, F16, F8_E5M2, F8_E4M3)}

_ALIASES = {
    "fp32": "f32", "float32": "f32",
    "fp16": "f16", "float16": "f16", "half": "f16",
    "f8_e5m2": "e5m2", "fp8_e5m2": "e5m2",
    "f8_e4m3": "e4m3", "fp8_e4m3": "e4m3", "e4m3fn": "e4m3",
}


def get_format(fmt: Union[str, FormatSpec]) -> FormatSpec:
    """'E4M3' -> F8_E4M3. FormatSpec instances pass straight through."""
    if isinstance(fmt, FormatSpec):
        return fmt
    key = str(fmt).lower()
    key = _ALIASES.get(key, key)
    if key not in FORMATS:
        raise ValueError(f"Unknown format '{fmt}' (expected one of {list(FORMATS)})")
    return FORMATS[key]


def narrow_formats() -> list[FormatSpec]:
    return [f for f in FORMATS.values() if f is not F32]
