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

"""Tests for length-indexed vectors."""

import operator

import pytest

from sigprelude.encoders import BitPattern, bit_size, pack, unpack
from sigprelude.exceptions import (
    ElementTypeError,
    InvalidParameterError,
    LengthMismatchError,
    RangeError,
)
from sigprelude.sized import Index, Signed, Unsigned, Vec


class TestConstruction:
    def test_literal_elements_coerced(self):
        v = Vec[3, Unsigned[8]]([1, 2, 3])
        assert v[0] == Unsigned[8](1)
        assert type(v[0]) is Unsigned[8]

    def test_wrong_length(self):
        with pytest.raises(LengthMismatchError) as exc_info:
            Vec[3, Unsigned[8]]([1, 2])
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 2

    def test_wrong_element_type(self):
        with pytest.raises(ElementTypeError):
            Vec[2, Unsigned[8]](["a", "b"])

    def test_unsized(self):
        with pytest.raises(InvalidParameterError):
            Vec([1, 2])
        with pytest.raises(InvalidParameterError):
            Vec[-1]

    def test_of_infers_shape(self):
        v = Vec.of(Unsigned[4](1), Unsigned[4](2))
        assert type(v) is Vec[2, Unsigned[4]]
        assert type(Vec.of(1, "a")) is Vec[2]

    def test_generators(self):
        assert Vec[4, int].generate(lambda i: i * i).to_list() == [0, 1, 4, 9]
        assert Vec[3, int].replicate(7).to_list() == [7, 7, 7]
        assert Vec[4, int].iterate(lambda x: x * 2, 1).to_list() == [1, 2, 4, 8]

    def test_text(self):
        v = Vec[3, int]([1, 2, 3])
        assert str(v) == "<1,2,3>"
        assert repr(v) == "Vec[3, int]([1, 2, 3])"


class TestIndexing:
    def test_index_typed_access(self):
        v = Vec.of(10, 20, 30)
        assert v[Index[3](2)] == 30

    def test_index_bound_must_match_length(self):
        with pytest.raises(LengthMismatchError):
            Vec.of(10, 20, 30)[Index[4](1)]

    def test_int_access_is_checked(self):
        with pytest.raises(RangeError):
            Vec.of(10, 20, 30)[3]

    def test_other_index_types_rejected(self):
        with pytest.raises(ElementTypeError):
            Vec.of(10, 20, 30)["0"]

    def test_replace(self):
        assert Vec.of(1, 2, 3).replace(Index[3](1), 9) == Vec.of(1, 9, 3)


class TestLengthAlgebra:
    @pytest.mark.parametrize("n, m", [(0, 0), (0, 3), (2, 0), (3, 4)])
    def test_append_then_split_is_identity(self, n, m):
        v = Vec[n, Unsigned[4]].generate(lambda i: i)
        w = Vec[m, Unsigned[4]].generate(lambda i: i + 5)
        joined = v.append(w)
        assert type(joined) is Vec[n + m, Unsigned[4]]
        assert joined.split_at(n) == (v, w)

    def test_split_beyond_length(self):
        with pytest.raises(LengthMismatchError):
            Vec.of(1, 2, 3).split_at(4)

    def test_append_element_types_must_agree(self):
        with pytest.raises(ElementTypeError):
            Vec.of(Unsigned[4](1)).append(Vec.of(Signed[4](1)))

    def test_take_drop(self):
        v = Vec.of(1, 2, 3, 4)
        assert v.take(1) == Vec.of(1)
        assert v.drop(1) == Vec.of(2, 3, 4)

    def test_head_tail_last_init(self):
        v = Vec.of(1, 2, 3)
        assert v.head() == 1
        assert v.last() == 3
        assert v.tail() == Vec.of(2, 3)
        assert v.init() == Vec.of(1, 2)

    def test_empty_accessors(self):
        with pytest.raises(LengthMismatchError):
            Vec[0]().head()

    def test_concat(self):
        nested = Vec.of(Vec.of(1, 2), Vec.of(3, 4))
        assert nested.concat() == Vec.of(1, 2, 3, 4)

    def test_reverse_and_rotate(self):
        v = Vec.of(1, 2, 3)
        assert v.reverse() == Vec.of(3, 2, 1)
        assert v.rotate_left(1) == Vec.of(2, 3, 1)
        assert v.rotate_right(1) == Vec.of(3, 1, 2)


class TestElementWise:
    def test_map_infers_element_type(self):
        v = Vec.of(1, 2).map(Unsigned[8])
        assert type(v) is Vec[2, Unsigned[8]]

    def test_zip_with(self):
        assert Vec.of(1, 2).zip_with(operator.add, Vec.of(10, 20)) == Vec.of(11, 22)

    def test_zip_with_length_mismatch(self):
        with pytest.raises(LengthMismatchError):
            Vec.of(1, 2).zip_with(operator.add, Vec.of(1, 2, 3))

    def test_zip_unzip(self):
        a, b = Vec.of(1, 2), Vec.of("x", "y")
        assert a.zip(b).unzip() == (a, b)


class TestFolds:
    def test_tree_fold(self):
        assert Vec.of(1, 2, 3, 4, 5).fold(operator.add) == 15

    def test_tree_fold_keeps_order(self):
        assert Vec.of("a", "b", "c", "d", "e").fold(operator.add) == "abcde"

    def test_empty_fold_needs_identity(self):
        with pytest.raises(LengthMismatchError):
            Vec[0]().fold(operator.add)
        assert Vec[0]().fold(operator.add, 0) == 0

    def test_directional_folds(self):
        assert Vec.of(1, 2, 3).foldl(operator.sub, 0) == -6
        assert Vec.of(1, 2, 3).foldr(operator.sub, 0) == 2


class TestOrdering:
    def test_lexicographic(self):
        assert Vec.of(1, 2) < Vec.of(1, 3)
        assert Vec.of(2, 0) > Vec.of(1, 9)

    def test_lengths_must_match(self):
        with pytest.raises(LengthMismatchError):
            Vec.of(1) < Vec.of(1, 2)


class TestPacking:
    def test_element_zero_most_significant(self):
        v = Vec[2, Unsigned[4]]([1, 2])
        assert pack(v) == BitPattern("00010010")
        assert unpack(Vec[2, Unsigned[4]], pack(v)) == v

    def test_bit_size(self):
        assert bit_size(Vec[3, Signed[5]]) == 15
        assert bit_size(Vec[0, Signed[5]]) == 0

    def test_nested_round_trip(self):
        v = Vec[2, Vec[2, Signed[3]]]([Vec[2, Signed[3]]([-4, 3]), Vec[2, Signed[3]]([0, -1])])
        assert unpack(type(v), pack(v)) == v
