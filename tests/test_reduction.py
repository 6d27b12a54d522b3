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

"""Tests for bit reductions over packed values."""

from sigprelude.encoders import Bit, define_sum, reduce_and, reduce_or, reduce_xor
from sigprelude.sized import Signed, Unsigned, Vec


def test_reduce_and():
    assert reduce_and(Signed[6](-2)) == Bit("0")
    assert reduce_and(Signed[6](-1)) == Bit("1")


def test_reduce_or():
    assert reduce_or(Signed[6](5)) == Bit("1")
    assert reduce_or(Unsigned[4](0)) == Bit("0")


def test_reduce_xor():
    assert reduce_xor(Signed[6](28)) == Bit("1")
    assert reduce_xor(Vec[2, Unsigned[2]]([3, 3])) == Bit("0")


def test_bool_and_padding():
    assert reduce_or(True) == Bit("1")
    Maybe = define_sum("Maybe", [("Nothing", None), ("Just", Unsigned[2])])
    assert reduce_or(Maybe.Nothing()) == Bit("X")
    assert reduce_or(Maybe.Just(0)) == Bit("1")
