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

"""Fixed-width unsigned and signed integers with hardware overflow semantics.

Fixed-Width Integers
====================

This module implements ``Unsigned[W]`` and ``Signed[W]``: immutable integers
whose stored value is always the representative of its residue class,
``0 <= v < 2**W`` or ``-2**(W-1) <= v < 2**(W-1)``. ``Index[B]`` (module
``sized.index``) shares the ``FixedWidthInt`` base.

Semantics:
    - Arithmetic is computed on unbounded ints and reduced back into the
      type (wraparound). Overflow is defined behaviour, never an error.
    - Binary operators need operands of the *same* specialization;
      ``Unsigned[8] + Unsigned[4]`` raises WidthMismatchError. A plain
      ``int`` operand is a literal of the other operand's type.
    - ``resize`` changes the width: zero-extension for Unsigned,
      sign-extension for Signed, low-order truncation when narrowing.
    - Saturating arithmetic is separate and explicitly named
      (``sat_add``/``sat_sub``/``sat_mul``), parameterized by a
      ``SaturationMode``.
    - ``plus``/``minus``/``times`` grow the result width so no overflow can
      occur.

Types are created by subscription and cached, so ``Unsigned[8] is
Unsigned[8]``::

    >>> a = Unsigned[8](250)
    >>> a + 10
    Unsigned[8](4)
    >>> Signed[4](7) + 1
    Signed[4](-8)
    >>> Unsigned[8](0b1111_0011).resize(4)
    Unsigned[4](3)
"""

from __future__ import annotations

import functools
from enum import Enum
from typing import Any

from sigprelude.encoders.bit_pattern import BitPattern
from sigprelude.encoders.bitpack import BitPack
from sigprelude.exceptions import ElementTypeError, InvalidParameterError
from sigprelude.utils.bit_utils import wrap_signed, wrap_unsigned
from sigprelude.utils.validation import ensure_same_type, ensure_same_width, ensure_width_param


class SaturationMode(Enum):
    """Overflow policy for the ``sat_*`` operations.

    WRAP: Same as the plain operators
    BOUND: Clamp to the nearest of min/max bound
    ZERO: Replace any overflowing result with zero
    SYMMETRIC: Like BOUND, but the negative limit is ``-max_bound`` so the
        range is symmetric (only differs from BOUND for Signed)
    """

    WRAP = "wrap"
    BOUND = "bound"
    ZERO = "zero"
    SYMMETRIC = "symmetric"


class FixedWidthInt(BitPack):
    """Common base of Unsigned, Signed and Index.

    Subclasses provide ``_reduce`` (arithmetic wraparound), ``_from_int``
    (literal construction policy) and the range bounds; everything else is
    shared.

    Attributes:
        WIDTH: The static parameter (bit count, or bound for Index); None on
            the unparameterized family class
    """

    __slots__ = ("_value",)

    WIDTH: int | None = None
    FAMILY = "FixedWidthInt"

    def __init__(self, value: int | FixedWidthInt) -> None:
        """Construct from an integer literal.

        Args:
            value: Any int (or fixed-width int, read by value). Unsigned and
                Signed wrap out-of-range literals; Index rejects them.
        """
        cls = type(self)
        cls._require_sized()
        if isinstance(value, FixedWidthInt):
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ElementTypeError(
                f"{cls.__name__} literal must be an int, got {type(value).__name__}",
                expected="int",
                actual=type(value).__name__,
            )
        self._value = cls._from_int(int(value))

    def __class_getitem__(cls, width: int) -> type:
        return _specialize(cls._family(), width)

    @classmethod
    def _family(cls) -> type:
        """The unparameterized class this type specializes."""
        for klass in cls.__mro__:
            if "FAMILY" in vars(klass):
                return klass
        return cls

    @classmethod
    def _require_sized(cls) -> int:
        if cls.WIDTH is None:
            raise InvalidParameterError(
                f"{cls.__name__} needs a width; use {cls.__name__}[W]",
                family=cls.__name__,
            )
        return cls.WIDTH

    @classmethod
    def _make(cls, raw: int) -> Any:
        """Build directly from an already reduced value."""
        obj = object.__new__(cls)
        obj._value = raw
        return obj

    @classmethod
    def _wrap(cls, raw: int) -> Any:
        return cls._make(cls._reduce(raw))

    @classmethod
    def _from_int(cls, value: int) -> int:
        return cls._reduce(value)

    @classmethod
    def _reduce(cls, value: int) -> int:
        raise NotImplementedError

    @classmethod
    def _specialize_like(cls, width: int) -> Any:
        return _specialize(cls._family(), width)

    @classmethod
    def from_literal(cls, value: Any) -> Any:
        return cls(value)

    @classmethod
    def min_bound(cls) -> Any:
        raise NotImplementedError

    @classmethod
    def max_bound(cls) -> Any:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    @property
    def value(self) -> int:
        """The represented integer."""
        return self._value

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __format__(self, spec: str) -> str:
        return format(self._value, spec)

    def __hash__(self) -> int:
        return hash(self._value)

    # ------------------------------------------------------------------
    # Operand handling
    # ------------------------------------------------------------------

    def _operand(self, other: Any, operation: str) -> Any:
        """Return ``other`` as this type, or NotImplemented."""
        if isinstance(other, FixedWidthInt):
            ensure_same_type(type(self), type(other), operation)
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return type(self)(other)
        return NotImplemented

    def _binary(self, other: Any, operation: str, fn) -> Any:
        rhs = self._operand(other, operation)
        if rhs is NotImplemented:
            return NotImplemented
        return type(self)._wrap(fn(self._value, rhs._value))

    def _rbinary(self, other: Any, operation: str, fn) -> Any:
        lhs = self._operand(other, operation)
        if lhs is NotImplemented:
            return NotImplemented
        return type(self)._wrap(fn(lhs._value, self._value))

    # ------------------------------------------------------------------
    # Arithmetic (wrapping)
    # ------------------------------------------------------------------

    def __add__(self, other: Any) -> Any:
        return self._binary(other, "add", lambda a, b: a + b)

    def __radd__(self, other: Any) -> Any:
        return self._rbinary(other, "add", lambda a, b: a + b)

    def __sub__(self, other: Any) -> Any:
        return self._binary(other, "sub", lambda a, b: a - b)

    def __rsub__(self, other: Any) -> Any:
        return self._rbinary(other, "sub", lambda a, b: a - b)

    def __mul__(self, other: Any) -> Any:
        return self._binary(other, "mul", lambda a, b: a * b)

    def __rmul__(self, other: Any) -> Any:
        return self._rbinary(other, "mul", lambda a, b: a * b)

    def __neg__(self) -> Any:
        return type(self)._wrap(-self._value)

    def __pos__(self) -> Any:
        return self

    def add(self, other: Any) -> Any:
        return self + other

    def sub(self, other: Any) -> Any:
        return self - other

    def mul(self, other: Any) -> Any:
        return self * other

    def __floordiv__(self, other: Any) -> Any:
        return self._binary(other, "div", lambda a, b: a // b)

    def __mod__(self, other: Any) -> Any:
        return self._binary(other, "mod", lambda a, b: a % b)

    def quot(self, other: Any) -> Any:
        """Division truncating toward zero, as a hardware divider does."""
        return self._binary(other, "quot", _quot)

    def rem(self, other: Any) -> Any:
        """Remainder matching ``quot`` (takes the sign of the dividend)."""
        return self._binary(other, "rem", lambda a, b: a - _quot(a, b) * b)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FixedWidthInt):
            return type(self) is type(other) and self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def _compare_value(self, other: Any, operation: str) -> int | Any:
        if isinstance(other, FixedWidthInt):
            ensure_same_type(type(self), type(other), operation)
            return other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return other
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        rhs = self._compare_value(other, "lt")
        return rhs if rhs is NotImplemented else self._value < rhs

    def __le__(self, other: Any) -> bool:
        rhs = self._compare_value(other, "le")
        return rhs if rhs is NotImplemented else self._value <= rhs

    def __gt__(self, other: Any) -> bool:
        rhs = self._compare_value(other, "gt")
        return rhs if rhs is NotImplemented else self._value > rhs

    def __ge__(self, other: Any) -> bool:
        rhs = self._compare_value(other, "ge")
        return rhs if rhs is NotImplemented else self._value >= rhs

    def compare(self, other: Any) -> int:
        """Total order on the represented value: -1, 0 or 1."""
        rhs = self._compare_value(other, "compare")
        if rhs is NotImplemented:
            raise ElementTypeError(
                f"cannot compare {type(self).__name__} with {type(other).__name__}",
                expected=type(self).__name__,
                actual=type(other).__name__,
            )
        return (self._value > rhs) - (self._value < rhs)

    # ------------------------------------------------------------------
    # Saturating arithmetic
    # ------------------------------------------------------------------

    def _saturate(self, raw: int, mode: SaturationMode) -> Any:
        cls = type(self)
        lo, hi = cls.min_bound()._value, cls.max_bound()._value
        if mode is SaturationMode.SYMMETRIC:
            lo = max(lo, -hi)
        if lo <= raw <= hi:
            return cls._make(raw)
        if mode is SaturationMode.WRAP:
            return cls._wrap(raw)
        if mode is SaturationMode.ZERO:
            return cls._make(cls._reduce(0))
        return cls._make(hi if raw > hi else lo)

    def _strict_operand(self, other: Any, operation: str) -> Any:
        rhs = self._operand(other, operation)
        if rhs is NotImplemented:
            raise ElementTypeError(
                f"{operation} needs a {type(self).__name__} or int operand",
                expected=type(self).__name__,
                actual=type(other).__name__,
            )
        return rhs

    def sat_add(self, other: Any, mode: SaturationMode = SaturationMode.BOUND) -> Any:
        """Addition with an explicit overflow policy."""
        rhs = self._strict_operand(other, "sat_add")
        return self._saturate(self._value + rhs._value, mode)

    def sat_sub(self, other: Any, mode: SaturationMode = SaturationMode.BOUND) -> Any:
        """Subtraction with an explicit overflow policy."""
        rhs = self._strict_operand(other, "sat_sub")
        return self._saturate(self._value - rhs._value, mode)

    def sat_mul(self, other: Any, mode: SaturationMode = SaturationMode.BOUND) -> Any:
        """Multiplication with an explicit overflow policy."""
        rhs = self._strict_operand(other, "sat_mul")
        return self._saturate(self._value * rhs._value, mode)


def _quot(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


class _BitsInt(FixedWidthInt):
    """Shared behaviour of the two's-complement families (Unsigned, Signed)."""

    __slots__ = ()

    # ------------------------------------------------------------------
    # Width changes
    # ------------------------------------------------------------------

    def resize(self, width: int) -> Any:
        """Change width: extend (zero/sign by family) or keep the low bits.

        Narrowing may change the represented value; that is hardware
        truncation, not an error.
        """
        return self._specialize_like(width)._wrap(self._value)

    def plus(self, other: _BitsInt) -> Any:
        """Sum in a type one bit wider than the wider operand; never overflows."""
        return self._extending(other, "plus", lambda m, n: max(m, n) + 1, lambda a, b: a + b)

    def minus(self, other: _BitsInt) -> Any:
        """Difference in a type one bit wider than the wider operand.

        For Unsigned a negative difference wraps in the wider type.
        """
        return self._extending(other, "minus", lambda m, n: max(m, n) + 1, lambda a, b: a - b)

    def times(self, other: _BitsInt) -> Any:
        """Product in a type as wide as both operands together; never overflows."""
        return self._extending(other, "times", lambda m, n: m + n, lambda a, b: a * b)

    def _extending(self, other: _BitsInt, operation: str, width_fn, fn) -> Any:
        """Operands of one family but any widths; result width from ``width_fn``."""
        if not isinstance(other, _BitsInt):
            raise ElementTypeError(
                f"{operation} needs a fixed-width operand, got {type(other).__name__}",
                expected=type(self).__name__,
                actual=type(other).__name__,
            )
        ensure_same_type(type(self)._family(), type(other)._family(), operation)
        width = width_fn(self.WIDTH, other.WIDTH)
        return self._specialize_like(width)._wrap(fn(self._value, other._value))

    # ------------------------------------------------------------------
    # Bitwise operators and shifts
    # ------------------------------------------------------------------

    def __and__(self, other: Any) -> Any:
        return self._binary(other, "and", lambda a, b: a & b)

    def __rand__(self, other: Any) -> Any:
        return self._rbinary(other, "and", lambda a, b: a & b)

    def __or__(self, other: Any) -> Any:
        return self._binary(other, "or", lambda a, b: a | b)

    def __ror__(self, other: Any) -> Any:
        return self._rbinary(other, "or", lambda a, b: a | b)

    def __xor__(self, other: Any) -> Any:
        return self._binary(other, "xor", lambda a, b: a ^ b)

    def __rxor__(self, other: Any) -> Any:
        return self._rbinary(other, "xor", lambda a, b: a ^ b)

    def __invert__(self) -> Any:
        return type(self)._wrap(~self._value)

    def __lshift__(self, amount: int) -> Any:
        return type(self)._wrap(self._value << int(amount))

    def __rshift__(self, amount: int) -> Any:
        # Python's >> is arithmetic on negatives, logical on non-negatives
        return type(self)._wrap(self._value >> int(amount))

    # ------------------------------------------------------------------
    # BitPack
    # ------------------------------------------------------------------

    @classmethod
    def bit_size(cls) -> int:
        return cls._require_sized()

    def pack(self) -> BitPattern:
        return BitPattern.from_int(self._value, self.WIDTH)

    @classmethod
    def unpack(cls, bits: BitPattern) -> Any:
        ensure_same_width(cls.bit_size(), bits.width, f"unpack {cls.__name__}")
        return cls._wrap(bits.to_int())


class Unsigned(_BitsInt):
    """Unsigned integer of ``WIDTH`` bits, ``0 <= v < 2**WIDTH``."""

    __slots__ = ()
    FAMILY = "Unsigned"

    @classmethod
    def _reduce(cls, value: int) -> int:
        return wrap_unsigned(value, cls.WIDTH)

    @classmethod
    def min_bound(cls) -> Unsigned:
        cls._require_sized()
        return cls._make(0)

    @classmethod
    def max_bound(cls) -> Unsigned:
        return cls._make((1 << cls._require_sized()) - 1)

    def to_signed(self) -> Signed:
        """Reinterpret the same bits as ``Signed[WIDTH]``."""
        return Signed[self.WIDTH]._wrap(self._value)


class Signed(_BitsInt):
    """Two's complement integer of ``WIDTH`` bits."""

    __slots__ = ()
    FAMILY = "Signed"

    @classmethod
    def _reduce(cls, value: int) -> int:
        return wrap_signed(value, cls.WIDTH)

    @classmethod
    def min_bound(cls) -> Signed:
        width = cls._require_sized()
        return cls._make(-(1 << (width - 1)) if width else 0)

    @classmethod
    def max_bound(cls) -> Signed:
        width = cls._require_sized()
        return cls._make((1 << (width - 1)) - 1 if width else 0)

    def __abs__(self) -> Signed:
        # abs(min_bound) wraps back to min_bound, as in hardware
        return type(self)._wrap(abs(self._value))

    def to_unsigned(self) -> Unsigned:
        """Reinterpret the same bits as ``Unsigned[WIDTH]``."""
        return Unsigned[self.WIDTH]._wrap(self._value)


@functools.cache
def _specialize(family: type, param: int) -> type:
    """Create (once) the ``family[param]`` subclass."""
    check = getattr(family, "_check_param", None)
    param = check(param) if check else ensure_width_param(param, family.__name__)
    name = f"{family.__name__}[{param}]"
    return type(name, (family,), {"__slots__": (), "WIDTH": param, "__qualname__": name})
