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

"""Tests for bounded Index values."""

import pytest

from sigprelude.encoders import BitPattern, bit_size, pack, unpack
from sigprelude.exceptions import (
    ElementTypeError,
    InvalidParameterError,
    RangeError,
    WidthMismatchError,
)
from sigprelude.sized import Index, Unsigned


class TestIndexConstruction:
    def test_in_range(self):
        assert Index[5](4).value == 4
        assert Index[5].bound() == 5

    @pytest.mark.parametrize("value", [-1, 5, 100])
    def test_out_of_range_raises(self, value):
        with pytest.raises(RangeError) as exc_info:
            Index[5](value)
        assert exc_info.value.value == value
        assert exc_info.value.bound == 5

    @pytest.mark.parametrize("bound", [0, -3])
    def test_bound_must_be_positive(self, bound):
        with pytest.raises(InvalidParameterError):
            Index[bound]

    def test_bounds(self):
        assert Index[7].min_bound() == 0
        assert Index[7].max_bound() == 6


class TestIndexArithmetic:
    def test_add_reduces_modulo_bound(self):
        assert Index[5](3) + Index[5](4) == Index[5](2)

    def test_sub_and_mul_reduce_modulo_bound(self):
        assert Index[5](0) - 1 == Index[5](4)
        assert Index[5](3) * Index[5](4) == Index[5](2)

    def test_int_operand_must_be_in_range(self):
        with pytest.raises(RangeError):
            Index[5](1) + 7

    def test_different_bounds_rejected(self):
        with pytest.raises(WidthMismatchError):
            Index[5](1) + Index[6](1)

    def test_plus_widens_bound(self):
        result = Index[5](4).plus(Index[3](2))
        assert type(result) is Index[7]
        assert result == 6

    def test_times_widens_bound(self):
        result = Index[5](4).times(Index[3](2))
        assert type(result) is Index[9]
        assert result == 8

    def test_plus_needs_index(self):
        with pytest.raises(ElementTypeError):
            Index[5](1).plus(Unsigned[3](1))


class TestIndexResize:
    def test_narrowing_out_of_range_raises(self):
        with pytest.raises(RangeError) as exc_info:
            Index[10](7).resize(5)
        assert exc_info.value.value == 7
        assert exc_info.value.bound == 5

    def test_narrowing_in_range(self):
        assert Index[10](3).resize(5) == Index[5](3)

    def test_widening(self):
        assert Index[5](4).resize(16) == Index[16](4)

    def test_to_unsigned(self):
        assert Index[5](4).to_unsigned() == Unsigned[3](4)


class TestIndexPacking:
    def test_bit_size_is_clog2_of_bound(self):
        assert bit_size(Index[5]) == 3
        assert bit_size(Index[8]) == 3
        assert bit_size(Index[1]) == 0

    def test_round_trip(self):
        for value in range(5):
            assert unpack(Index[5], pack(Index[5](value))) == value

    def test_encoding(self):
        assert pack(Index[5](4)) == BitPattern("100")

    def test_unused_code_rejected(self):
        with pytest.raises(RangeError):
            unpack(Index[5], BitPattern("111"))
