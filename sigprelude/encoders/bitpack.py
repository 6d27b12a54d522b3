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

"""The BitPack capability: conversion to and from fixed-width bit patterns.

BitPack
=======

Every type that can cross into hardware has a BitPack binding: a bit size
known from the type alone, a ``pack`` producing a pattern of exactly that
width, and an ``unpack`` inverting it::

    unpack(T, pack(x)) == x          for every valid x of type T

Bindings come from two places:

    1. Classes implementing the ``BitPack`` interface (fixed-width integers,
       ``Vec``, ``BitPattern``, and the product/sum types built by
       ``encoders.composite``).
    2. A registry for Python types the library does not own (``bool``,
       ``None``), populated with ``register_bitpack``.

Nothing here inspects annotations or fields at runtime: a composite type
declares its layout explicitly when it is built.

Free functions
--------------
bit_size(T)        Bits occupied by values of type T
pack(x)            Pattern of width ``bit_size(type(x))``
unpack(T, bits)    Inverse of pack; checks the pattern width first
bit_coerce(T, x)   Reinterpret the bits of x as a T of the same size
coerce(T, x)       x as a T, converting int literals where T allows it
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from sigprelude.encoders.bit_pattern import BitPattern
from sigprelude.exceptions import ElementTypeError, InvalidParameterError, NotRepresentableError
from sigprelude.utils.validation import ensure_same_width

T = TypeVar("T")


class BitPack(ABC):
    """Interface for types with a fixed-width bit encoding."""

    __slots__ = ()

    @classmethod
    @abstractmethod
    def bit_size(cls) -> int:
        """Number of bits in the encoding of any value of this type."""

    @abstractmethod
    def pack(self) -> BitPattern:
        """Encode this value."""

    @classmethod
    @abstractmethod
    def unpack(cls, bits: BitPattern) -> Any:
        """Decode a pattern of exactly ``bit_size()`` bits."""

    @classmethod
    def from_literal(cls, value: Any) -> Any:
        """Convert a plain Python literal to this type.

        The default accepts nothing; numeric types override it so that
        ``Vec[3, Unsigned[8]]([1, 2, 3])`` works.
        """
        raise ElementTypeError(
            f"{cls.__name__} has no literal form for {type(value).__name__}",
            expected=cls.__name__,
            actual=type(value).__name__,
        )


BitPack.register(BitPattern)


@dataclass(frozen=True)
class ForeignBinding:
    """BitPack binding for a Python type the library does not own."""

    size: int
    pack: Callable[[Any], BitPattern]
    unpack: Callable[[BitPattern], Any]


_FOREIGN: dict[type, ForeignBinding] = {}


def register_bitpack(
    py_type: type,
    size: int,
    pack_fn: Callable[[Any], BitPattern],
    unpack_fn: Callable[[BitPattern], Any],
) -> None:
    """Give an existing Python type a BitPack binding.

    Args:
        py_type: Type to bind (exact type, subclasses are not matched)
        size: Bit size of every encoding
        pack_fn: Value → pattern of ``size`` bits
        unpack_fn: Pattern of ``size`` bits → value
    """
    _FOREIGN[py_type] = ForeignBinding(size, pack_fn, unpack_fn)


def is_representable(ty: Any) -> bool:
    """True if ``ty`` has a BitPack binding with a known size."""
    if ty in _FOREIGN:
        return True
    if isinstance(ty, type) and issubclass(ty, BitPack):
        try:
            ty.bit_size()
        except (NotRepresentableError, InvalidParameterError):
            return False
        return True
    return False


def bit_size(ty: Any) -> int:
    """Bits occupied by every value of ``ty``.

    Raises:
        NotRepresentableError: If ``ty`` has no BitPack binding
    """
    if ty in _FOREIGN:
        return _FOREIGN[ty].size
    if isinstance(ty, type) and issubclass(ty, BitPack):
        return ty.bit_size()
    raise NotRepresentableError(
        f"{getattr(ty, '__name__', ty)} has no BitPack binding", type=ty
    )


def pack(value: Any) -> BitPattern:
    """Encode a value of any representable type."""
    binding = _FOREIGN.get(type(value))
    if binding is not None:
        bits = binding.pack(value)
        ensure_same_width(binding.size, bits.width, f"pack {type(value).__name__}")
        return bits
    if isinstance(value, BitPack):
        return value.pack()
    raise NotRepresentableError(
        f"{type(value).__name__} has no BitPack binding", value=value
    )


def unpack(ty: type[T], bits: BitPattern) -> T:
    """Decode ``bits`` as a value of ``ty``.

    Raises:
        WidthMismatchError: If ``bits`` is not exactly ``bit_size(ty)`` wide
    """
    expected = bit_size(ty)
    ensure_same_width(expected, bits.width, f"unpack {getattr(ty, '__name__', ty)}")
    binding = _FOREIGN.get(ty)
    if binding is not None:
        return binding.unpack(bits)
    return ty.unpack(bits)


def bit_coerce(ty: type[T], value: Any) -> T:
    """Reinterpret the encoding of ``value`` as a ``ty`` of the same bit size.

    Example:
        >>> bit_coerce(Signed[8], Unsigned[8](255))
        Signed[8](-1)
    """
    return unpack(ty, pack(value))


def coerce(ty: type[T], value: Any, what: str = "value") -> T:
    """Return ``value`` as a ``ty``, converting literals where ``ty`` allows it.

    ``object`` accepts anything. BitPack types convert non-instances through
    ``from_literal``; other types require an instance.

    Raises:
        ElementTypeError: If ``value`` is neither a ``ty`` nor convertible
    """
    if ty is object or isinstance(value, ty):
        return value
    if isinstance(ty, type) and issubclass(ty, BitPack) and not isinstance(value, BitPack):
        return ty.from_literal(value)
    raise ElementTypeError(
        f"{what} must be {ty.__name__}, got {type(value).__name__}",
        expected=ty.__name__,
        actual=type(value).__name__,
    )


# Built-in foreign bindings
register_bitpack(
    bool,
    1,
    lambda b: BitPattern.from_int(int(b), 1),
    lambda bits: bool(bits.to_int()),
)
register_bitpack(
    type(None),
    0,
    lambda _: BitPattern.from_int(0, 0),
    lambda _: None,
)
