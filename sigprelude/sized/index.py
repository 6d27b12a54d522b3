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

"""Bounded natural numbers used as always-valid positions.

Index
=====

``Index[B]`` holds a value in ``[0, B)`` where ``B`` is a bound, not a bit
count. It differs from ``Unsigned`` in three ways:

    1. Arithmetic reduces modulo ``B``, which need not be a power of two:
       ``Index[5](3) + Index[5](4) == Index[5](2)``.
    2. Construction outside ``[0, B)`` raises RangeError; an Index must
       always denote a valid position.
    3. Narrowing with ``resize`` raises RangeError when the value does not
       fit the new bound, because narrowing changes the legal value set.

Its encoding is ``clog2(B)`` bits wide. Indexing a ``Vec[B, A]`` with an
``Index[B]`` can never be out of range.
"""

from __future__ import annotations

from typing import Any

from sigprelude.encoders.bit_pattern import BitPattern
from sigprelude.exceptions import ElementTypeError, RangeError
from sigprelude.sized.fixed_int import FixedWidthInt, Unsigned, _specialize
from sigprelude.utils.bit_utils import clog2
from sigprelude.utils.validation import ensure_bound_param, ensure_in_range, ensure_same_width


class Index(FixedWidthInt):
    """Natural number below ``WIDTH`` (the bound)."""

    __slots__ = ()
    FAMILY = "Index"

    @staticmethod
    def _check_param(bound: int) -> int:
        return ensure_bound_param(bound, "Index")

    @classmethod
    def bound(cls) -> int:
        """The exclusive upper bound ``B``."""
        return cls._require_sized()

    @classmethod
    def _reduce(cls, value: int) -> int:
        return value % cls.WIDTH

    @classmethod
    def _from_int(cls, value: int) -> int:
        return ensure_in_range(value, cls.WIDTH, f"{cls.__name__} value")

    @classmethod
    def min_bound(cls) -> Index:
        cls._require_sized()
        return cls._make(0)

    @classmethod
    def max_bound(cls) -> Index:
        return cls._make(cls._require_sized() - 1)

    def resize(self, bound: int) -> Index:
        """Change the bound, keeping the value.

        Raises:
            RangeError: If the value is not below the new bound
        """
        target = _specialize(Index, bound)
        if self._value >= target.WIDTH:
            raise RangeError(
                f"cannot narrow {self!r} to {target.__name__}",
                value=self._value,
                bound=target.WIDTH,
            )
        return target._make(self._value)

    def plus(self, other: Index) -> Index:
        """Sum in ``Index[B + M - 1]``, the smallest bound that cannot overflow."""
        other = self._index_operand(other, "plus")
        return _specialize(Index, self.WIDTH + other.WIDTH - 1)._make(self._value + other._value)

    def times(self, other: Index) -> Index:
        """Product in ``Index[(B - 1) * (M - 1) + 1]``."""
        other = self._index_operand(other, "times")
        bound = (self.WIDTH - 1) * (other.WIDTH - 1) + 1
        return _specialize(Index, bound)._make(self._value * other._value)

    def _index_operand(self, other: Any, operation: str) -> Index:
        if not isinstance(other, Index):
            raise ElementTypeError(
                f"{operation} needs an Index operand, got {type(other).__name__}",
                expected="Index",
                actual=type(other).__name__,
            )
        return other

    def to_unsigned(self) -> Unsigned:
        """Same value as ``Unsigned[clog2(B)]``."""
        return Unsigned[self.bit_size()]._make(self._value)

    # ------------------------------------------------------------------
    # BitPack
    # ------------------------------------------------------------------

    @classmethod
    def bit_size(cls) -> int:
        return clog2(cls._require_sized())

    def pack(self) -> BitPattern:
        return BitPattern.from_int(self._value, self.bit_size())

    @classmethod
    def unpack(cls, bits: BitPattern) -> Index:
        ensure_same_width(cls.bit_size(), bits.width, f"unpack {cls.__name__}")
        return cls._make(ensure_in_range(bits.to_int(), cls.WIDTH, f"{cls.__name__} encoding"))


