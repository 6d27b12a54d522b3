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

"""Tests for product and sum types."""

import pytest

from sigprelude.encoders import (
    BitPattern,
    Product,
    Unit,
    bit_size,
    define_enum,
    define_struct,
    define_sum,
    pack,
    unpack,
)
from sigprelude.exceptions import (
    ElementTypeError,
    InvalidEncodingError,
    InvalidParameterError,
    LengthMismatchError,
)
from sigprelude.sized import Signed, Unsigned

Maybe = define_sum("Maybe", [("Nothing", None), ("Just", Unsigned[8])])
Color = define_enum("Color", ["Red", "Green", "Blue"])
Pixel = define_struct("Pixel", [("r", Unsigned[8]), ("g", Unsigned[8])])


class TestUnit:
    def test_single_zero_width_value(self):
        assert Unit() is Unit()
        assert bit_size(Unit) == 0
        assert unpack(Unit, pack(Unit())) == Unit()


class TestProduct:
    def test_fields_coerced_from_literals(self):
        value = Product[Unsigned[4], Signed[3]](5, -1)
        assert value[0] == Unsigned[4](5)
        assert value[1] == Signed[3](-1)

    def test_encoding_first_field_most_significant(self):
        value = Product[Unsigned[4], Signed[3]](5, -1)
        assert bit_size(type(value)) == 7
        assert pack(value) == BitPattern("0101111")
        assert unpack(type(value), pack(value)) == value

    def test_types_cached(self):
        assert Product[Unsigned[4], bool] is Product[Unsigned[4], bool]

    def test_wrong_arity(self):
        with pytest.raises(LengthMismatchError):
            Product[Unsigned[4]](1, 2)

    def test_unsized_product(self):
        with pytest.raises(InvalidParameterError):
            Product(1, 2)


class TestStruct:
    def test_named_fields(self):
        pixel = Pixel(r=1, g=2)
        assert pixel.r == Unsigned[8](1)
        assert pixel[1] == Unsigned[8](2)

    def test_encoding(self):
        pixel = Pixel(1, 2)
        assert pack(pixel) == BitPattern("0000000100000010")
        assert unpack(Pixel, pack(pixel)) == pixel

    def test_bad_field_type(self):
        with pytest.raises(ElementTypeError):
            Pixel("red", 2)


class TestSum:
    def test_layout(self):
        assert Maybe.tag_size() == 1
        assert Maybe.payload_size() == 8
        assert bit_size(Maybe) == 9

    def test_encoding_tag_then_payload(self):
        assert pack(Maybe.Just(7)) == BitPattern("100000111")
        assert pack(Maybe.Nothing()) == BitPattern("0XXXXXXXX")

    def test_round_trip(self):
        for value in (Maybe.Nothing(), Maybe.Just(0), Maybe.Just(255)):
            assert unpack(Maybe, pack(value)) == value

    def test_padding_is_ignored(self):
        assert unpack(Maybe, BitPattern("011111111")) == Maybe.Nothing()

    def test_accessors(self):
        value = Maybe.Just(3)
        assert value.constructor == "Just"
        assert value.tag == 1
        assert value.payload == Unsigned[8](3)
        assert value.is_("Just")
        assert repr(value) == "Maybe.Just(Unsigned[8](3))"

    def test_payload_checks(self):
        with pytest.raises(ElementTypeError):
            Maybe.Just()
        with pytest.raises(ElementTypeError):
            Maybe.Nothing(3)
        with pytest.raises(InvalidParameterError):
            Maybe("Other")

    def test_invalid_alternative_names(self):
        with pytest.raises(InvalidParameterError):
            define_sum("Twice", [("A", None), ("A", None)])
        with pytest.raises(InvalidParameterError):
            define_sum("Shadowed", [("pack", None)])
        with pytest.raises(InvalidParameterError):
            define_sum("Empty", [])


class TestEnum:
    def test_tag_only_encoding(self):
        assert bit_size(Color) == 2
        assert pack(Color.Blue()) == BitPattern("10")
        assert unpack(Color, BitPattern("01")) == Color.Green()

    def test_unused_tag_rejected(self):
        with pytest.raises(InvalidEncodingError):
            unpack(Color, BitPattern("11"))

    def test_single_alternative_has_no_tag_bits(self):
        Only = define_enum("Only", ["It"])
        assert bit_size(Only) == 0
        assert unpack(Only, BitPattern("")) == Only.It()
