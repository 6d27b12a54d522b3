#    Copyright 2026 Two Sigma Open Source, LLC
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

"""Tests for Unsigned and Signed fixed-width integers."""

import pytest

from sigprelude.encoders import BitPattern, pack, unpack
from sigprelude.exceptions import (
    ElementTypeError,
    InvalidParameterError,
    UndefinedBitError,
    WidthMismatchError,
)
from sigprelude.sized import SaturationMode, Signed, Unsigned


def _signed_residue(value: int, width: int) -> int:
    half = 1 << (width - 1)
    return (value + half) % (1 << width) - half


class TestConstruction:
    def test_specializations_are_cached(self):
        assert Unsigned[8] is Unsigned[8]
        assert Unsigned[8] is not Signed[8]
        assert Unsigned[8].__name__ == "Unsigned[8]"

    def test_literals_wrap(self):
        assert Unsigned[8](256) == 0
        assert Unsigned[8](-1) == 255
        assert Signed[4](8) == -8

    def test_repr(self):
        assert repr(Unsigned[8](5)) == "Unsigned[8](5)"
        assert repr(Signed[4](-3)) == "Signed[4](-3)"

    def test_unsized_family_rejected(self):
        with pytest.raises(InvalidParameterError):
            Unsigned(3)

    @pytest.mark.parametrize("width", [-1, 2.5, "8", True])
    def test_bad_width_rejected(self, width):
        with pytest.raises(InvalidParameterError):
            Unsigned[width]

    @pytest.mark.parametrize("value", [True, 1.0, "3", None])
    def test_non_int_literal_rejected(self, value):
        with pytest.raises(ElementTypeError):
            Unsigned[8](value)

    def test_fixed_width_literal_read_by_value(self):
        assert Unsigned[8](Unsigned[8](5)) == Unsigned[8](5)
        assert Unsigned[4](Signed[8](-1)) == Unsigned[4](15)

    def test_zero_width(self):
        assert Unsigned[0](5) == 0
        assert Signed[0].min_bound() == 0
        assert pack(Unsigned[0](0)).width == 0

    def test_bounds(self):
        assert Unsigned[8].min_bound() == 0
        assert Unsigned[8].max_bound() == 255
        assert Signed[8].min_bound() == -128
        assert Signed[8].max_bound() == 127


class TestWrappingArithmetic:
    def test_unsigned_overflow(self):
        assert Unsigned[8](250) + 10 == Unsigned[8](4)
        assert Unsigned[8](0) - 1 == 255
        assert Unsigned[8](16) * 16 == 0

    def test_signed_overflow(self):
        assert Signed[4](7) + 1 == Signed[4](-8)
        assert -Signed[4](-8) == -8
        assert abs(Signed[4](-8)) == -8

    def test_reflected_int_operand(self):
        result = 10 - Unsigned[8](3)
        assert result == 7
        assert type(result) is Unsigned[8]

    @pytest.mark.parametrize("width", [1, 3, 8, 13])
    @pytest.mark.parametrize("a, b", [(0, 0), (1, 1), (100, 200), (4095, 7), (-5, 3)])
    def test_unsigned_add_is_modular(self, width, a, b):
        x, y = Unsigned[width](a), Unsigned[width](b)
        assert (x + y).value == (x.value + y.value) % (1 << width)

    @pytest.mark.parametrize("width", [1, 3, 8, 13])
    @pytest.mark.parametrize("a, b", [(0, 0), (-1, -1), (100, 200), (-4096, -7), (-5, 3)])
    def test_signed_add_is_modular(self, width, a, b):
        x, y = Signed[width](a), Signed[width](b)
        assert (x + y).value == _signed_residue(x.value + y.value, width)

    def test_truncating_division(self):
        assert Signed[8](-7).quot(2) == -3
        assert Signed[8](-7).rem(2) == -1
        assert Signed[8](-7) // 2 == -4
        assert Signed[8](-7) % 2 == 1

    def test_mixed_widths_rejected(self):
        with pytest.raises(WidthMismatchError) as exc_info:
            Unsigned[8](1) + Unsigned[4](1)
        assert exc_info.value.expected == "Unsigned[8]"
        assert exc_info.value.actual == "Unsigned[4]"

    def test_mixed_families_rejected(self):
        with pytest.raises(WidthMismatchError):
            Unsigned[8](1) + Signed[8](1)


class TestComparison:
    def test_equality_across_types_is_false(self):
        assert Unsigned[8](3) != Signed[8](3)
        assert Unsigned[8](3) != Unsigned[4](3)

    def test_ordering(self):
        assert Signed[8](-1) < Signed[8](0)
        assert Unsigned[8](3) <= 3
        assert Unsigned[8](9).compare(Unsigned[8](3)) == 1

    def test_ordering_across_types_rejected(self):
        with pytest.raises(WidthMismatchError):
            Unsigned[8](3) < Unsigned[4](4)

    def test_hashable(self):
        assert len({Unsigned[8](1), Unsigned[8](1), Unsigned[8](2)}) == 2


class TestResize:
    def test_narrowing_truncates(self):
        result = Unsigned[8](0b1111_0011).resize(4)
        assert result == Unsigned[4](0b0011)
        assert type(result) is Unsigned[4]

    def test_widening_zero_extends_unsigned(self):
        assert Unsigned[4](15).resize(8) == Unsigned[8](15)

    def test_widening_sign_extends_signed(self):
        assert Signed[4](-3).resize(8) == Signed[8](-3)

    def test_signed_narrowing_keeps_low_bits(self):
        assert Signed[8](0b0000_1100).resize(4) == Signed[4](-4)

    def test_reinterpretation(self):
        assert Unsigned[8](255).to_signed() == Signed[8](-1)
        assert Signed[8](-128).to_unsigned() == Unsigned[8](128)


class TestExtendingArithmetic:
    def test_plus_grows_one_bit(self):
        result = Unsigned[8](255).plus(Unsigned[4](15))
        assert type(result) is Unsigned[9]
        assert result == 270

    def test_minus_wraps_in_wider_type(self):
        assert Unsigned[4](3).minus(Unsigned[4](5)) == Unsigned[5](30)
        assert Signed[4](-8).minus(Signed[4](7)) == Signed[5](-15)

    def test_times_sums_widths(self):
        assert Unsigned[8](255).times(Unsigned[8](255)) == Unsigned[16](65025)
        assert Signed[4](-8).times(Signed[4](-8)) == Signed[8](64)

    def test_families_must_match(self):
        with pytest.raises(WidthMismatchError):
            Unsigned[4](1).plus(Signed[4](1))


class TestSaturation:
    def test_bound(self):
        assert Unsigned[8](250).sat_add(10) == 255
        assert Unsigned[8](5).sat_sub(10) == 0
        assert Signed[8](-128).sat_sub(1) == -128
        assert Signed[8](100).sat_mul(2) == 127

    def test_wrap_matches_plain_operator(self):
        assert Unsigned[8](250).sat_add(10, SaturationMode.WRAP) == Unsigned[8](250) + 10

    def test_zero(self):
        assert Unsigned[8](250).sat_add(10, SaturationMode.ZERO) == 0
        assert Unsigned[8](200).sat_add(10, SaturationMode.ZERO) == 210

    def test_symmetric(self):
        assert Signed[8](-100).sat_sub(100, SaturationMode.SYMMETRIC) == -127
        assert Signed[8](-100).sat_sub(100, SaturationMode.BOUND) == -128

    def test_bad_operand(self):
        with pytest.raises(ElementTypeError):
            Unsigned[8](1).sat_add("x")


class TestBitwise:
    def test_logic_ops(self):
        assert Unsigned[4](0b1100) & 0b1010 == 0b1000
        assert Unsigned[4](0b1100) | 0b1010 == 0b1110
        assert Unsigned[4](0b1100) ^ 0b1010 == 0b0110
        assert ~Unsigned[4](0) == 15
        assert ~Signed[4](0) == -1

    def test_shifts(self):
        assert Unsigned[4](0b1001) << 1 == 0b0010
        assert Unsigned[4](0b1001) >> 1 == 0b0100
        assert Signed[4](-8) >> 1 == -4


class TestPacking:
    @pytest.mark.parametrize(
        "value",
        [
            Unsigned[1](0),
            Unsigned[1](1),
            Unsigned[8](0),
            Unsigned[8](255),
            Unsigned[13](4095),
            Signed[1](-1),
            Signed[8](-128),
            Signed[8](127),
            Signed[8](-1),
            Signed[8](0),
        ],
        ids=repr,
    )
    def test_round_trip_at_boundaries(self, value):
        assert unpack(type(value), pack(value)) == value

    def test_twos_complement_encoding(self):
        assert pack(Signed[4](-1)) == BitPattern("1111")
        assert pack(Signed[4](-8)) == BitPattern("1000")
        assert pack(Unsigned[4](5)) == BitPattern("0101")

    def test_unpack_checks_width(self):
        with pytest.raises(WidthMismatchError):
            unpack(Unsigned[8], BitPattern("101"))

    def test_unpack_rejects_undefined_bits(self):
        with pytest.raises(UndefinedBitError):
            unpack(Signed[2], BitPattern("1X"))
