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

"""Immutable vectors whose length is part of their type.

Vec
===

``Vec[N, A]`` is an ordered, immutable sequence of exactly ``N`` elements of
type ``A`` (``Vec[N]`` leaves the element type open as ``object``). Every
shape-changing operation states its length algebra and returns a value of
the correspondingly sized type:

    ==========================  =======================================
    operation                   result type
    ==========================  =======================================
    v.map(f)                    Vec[N, B]
    v.zip_with(f, w)            Vec[N, C]        (w must be Vec[N, _])
    v.append(w)                 Vec[N + M, A]    (w is Vec[M, A])
    v.split_at(k)               (Vec[k, A], Vec[N - k, A]), k <= N
    v.take(k) / v.drop(k)       Vec[k, A] / Vec[N - k, A]
    v.concat()                  Vec[N * M, A]    (v is Vec[N, Vec[M, A]])
    ==========================  =======================================

Violations raise LengthMismatchError with the expected and actual lengths
before any element is touched. Indexing with ``Index[N]`` is always in
range; plain ints are range-checked.

Elements of a BitPack element type may be given as literals:
``Vec[3, Unsigned[8]]([1, 2, 3])`` converts each int.

Encoding:
    ``N * bit_size(A)`` bits, element 0 in the most significant position.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from sigprelude.encoders.bit_pattern import BitPattern
from sigprelude.encoders.bitpack import BitPack, bit_size, coerce, pack, unpack
from sigprelude.exceptions import ElementTypeError, InvalidParameterError, LengthMismatchError
from sigprelude.sized.index import Index
from sigprelude.utils.validation import (
    ensure_in_range,
    ensure_length_param,
    ensure_same_length,
    ensure_same_width,
)

_NO_IDENTITY = object()


def _common_type(items: Iterable[Any]) -> type:
    """The shared type of ``items``, or ``object`` if they differ or are absent."""
    types = {type(x) for x in items}
    return types.pop() if len(types) == 1 else object


class Vec(BitPack):
    """Fixed-length immutable vector.

    Attributes:
        LENGTH: Element count fixed by the specialization
        ELEMENT: Element type (``object`` when unconstrained)
    """

    __slots__ = ("_items",)

    LENGTH: int | None = None
    ELEMENT: type = object

    def __init__(self, items: Iterable[Any] = ()) -> None:
        """Build from exactly ``LENGTH`` elements.

        Raises:
            LengthMismatchError: If the number of items differs from LENGTH
            ElementTypeError: If an item is not an ELEMENT (or its literal)
        """
        cls = type(self)
        length = cls._require_sized()
        items = tuple(items)
        ensure_same_length(length, len(items), f"{cls.__name__} literal")
        self._items = tuple(coerce(cls.ELEMENT, x, "Vec element") for x in items)

    def __class_getitem__(cls, params: Any) -> type[Vec]:
        if isinstance(params, tuple):
            if len(params) != 2:
                raise InvalidParameterError("Vec takes Vec[N] or Vec[N, A]", params=params)
            length, element = params
        else:
            length, element = params, object
        return _vec_type(length, element)

    @classmethod
    def _require_sized(cls) -> int:
        if cls.LENGTH is None:
            raise InvalidParameterError("Vec needs a length; use Vec[N, A] or Vec.of(...)")
        return cls.LENGTH

    @classmethod
    def _build(cls, items: Iterable[Any], element: type | None = None) -> Vec:
        items = tuple(items)
        if element is None:
            element = _common_type(items)
        return _vec_type(len(items), element)(items)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, *items: Any) -> Vec:
        """Vector of the given items; length and element type are inferred."""
        return cls._build(items)

    @classmethod
    def generate(cls, fn: Callable[[int], Any]) -> Vec:
        """``Vec[N, A]`` whose element ``i`` is ``fn(i)``."""
        return cls(fn(i) for i in range(cls._require_sized()))

    @classmethod
    def replicate(cls, value: Any) -> Vec:
        """``Vec[N, A]`` with every element equal to ``value``."""
        return cls(value for _ in range(cls._require_sized()))

    @classmethod
    def iterate(cls, fn: Callable[[Any], Any], start: Any) -> Vec:
        """``[start, fn(start), fn(fn(start)), ...]`` of length N."""
        items = []
        value = start
        for _ in range(cls._require_sized()):
            items.append(value)
            value = fn(value)
        return cls(items)

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def _position(self, index: Index | int) -> int:
        if isinstance(index, Index):
            ensure_same_length(len(self._items), index.bound(), "index")
            return index.value
        if isinstance(index, int) and not isinstance(index, bool):
            return ensure_in_range(index, len(self._items), "vector index")
        raise ElementTypeError(
            f"vector index must be Index[{len(self._items)}] or int, got {type(index).__name__}",
            expected=f"Index[{len(self._items)}]",
            actual=type(index).__name__,
        )

    def __getitem__(self, index: Index | int) -> Any:
        return self._items[self._position(index)]

    def to_list(self) -> list[Any]:
        return list(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"

    def __str__(self) -> str:
        return "<" + ",".join(str(x) for x in self._items) + ">"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def _ordered(self, other: Any, operation: str) -> tuple | Any:
        if not isinstance(other, Vec):
            return NotImplemented
        ensure_same_length(len(self._items), len(other._items), operation)
        return other._items

    def __lt__(self, other: Any) -> bool:
        rhs = self._ordered(other, "lt")
        return rhs if rhs is NotImplemented else self._items < rhs

    def __le__(self, other: Any) -> bool:
        rhs = self._ordered(other, "le")
        return rhs if rhs is NotImplemented else self._items <= rhs

    def __gt__(self, other: Any) -> bool:
        rhs = self._ordered(other, "gt")
        return rhs if rhs is NotImplemented else self._items > rhs

    def __ge__(self, other: Any) -> bool:
        rhs = self._ordered(other, "ge")
        return rhs if rhs is NotImplemented else self._items >= rhs

    # ------------------------------------------------------------------
    # Element-wise operations
    # ------------------------------------------------------------------

    def map(self, fn: Callable[[Any], Any], element: type | None = None) -> Vec:
        """Apply ``fn`` to each element: ``Vec[N, A] -> Vec[N, B]``.

        Args:
            fn: Element transformer
            element: Result element type; inferred from the results if omitted
        """
        return Vec._build((fn(x) for x in self._items), element)

    def zip_with(self, fn: Callable[[Any, Any], Any], other: Vec, element: type | None = None) -> Vec:
        """Combine pairwise: ``Vec[N, A] x Vec[N, B] -> Vec[N, C]``.

        Raises:
            LengthMismatchError: If ``other`` is not of length N
        """
        ensure_same_length(len(self._items), len(other), "zip_with")
        return Vec._build((fn(a, b) for a, b in zip(self._items, other)), element)

    def zip(self, other: Vec) -> Vec:
        """Pair up elements: ``Vec[N, A] x Vec[N, B] -> Vec[N, tuple]``."""
        return self.zip_with(lambda a, b: (a, b), other, tuple)

    def unzip(self) -> tuple[Vec, Vec]:
        """Inverse of ``zip``."""
        return Vec._build(a for a, _ in self._items), Vec._build(b for _, b in self._items)

    def replace(self, index: Index | int, value: Any) -> Vec:
        """Copy with one element replaced."""
        pos = self._position(index)
        items = list(self._items)
        items[pos] = value
        return type(self)(items)

    # ------------------------------------------------------------------
    # Shape operations
    # ------------------------------------------------------------------

    def _joined_element(self, other: Vec) -> type:
        mine, theirs = type(self).ELEMENT, type(other).ELEMENT
        if mine is theirs:
            return mine
        if mine is object or theirs is object:
            return object
        raise ElementTypeError(
            f"cannot append Vec of {theirs.__name__} to Vec of {mine.__name__}",
            expected=mine.__name__,
            actual=theirs.__name__,
        )

    def append(self, other: Vec) -> Vec:
        """``Vec[N, A] x Vec[M, A] -> Vec[N + M, A]``."""
        if not isinstance(other, Vec):
            raise ElementTypeError(
                f"append needs a Vec, got {type(other).__name__}",
                expected="Vec",
                actual=type(other).__name__,
            )
        return _vec_type(len(self._items) + len(other), self._joined_element(other))(
            self._items + other._items
        )

    def split_at(self, k: int) -> tuple[Vec, Vec]:
        """``Vec[N, A] -> (Vec[k, A], Vec[N - k, A])`` for ``0 <= k <= N``.

        Raises:
            LengthMismatchError: If ``k`` is negative or larger than N
        """
        n = len(self._items)
        if not 0 <= k <= n:
            raise LengthMismatchError(
                f"split_at({k}) on a vector of length {n}",
                expected=f"0..{n}",
                actual=k,
                operation="split_at",
            )
        element = type(self).ELEMENT
        return (
            _vec_type(k, element)(self._items[:k]),
            _vec_type(n - k, element)(self._items[k:]),
        )

    def take(self, k: int) -> Vec:
        return self.split_at(k)[0]

    def drop(self, k: int) -> Vec:
        return self.split_at(k)[1]

    def _nonempty(self, operation: str) -> int:
        n = len(self._items)
        if n == 0:
            raise LengthMismatchError(
                f"{operation} of an empty vector", expected=">= 1", actual=0, operation=operation
            )
        return n

    def head(self) -> Any:
        self._nonempty("head")
        return self._items[0]

    def last(self) -> Any:
        self._nonempty("last")
        return self._items[-1]

    def tail(self) -> Vec:
        """``Vec[N, A] -> Vec[N - 1, A]``, dropping element 0."""
        self._nonempty("tail")
        return self.drop(1)

    def init(self) -> Vec:
        """``Vec[N, A] -> Vec[N - 1, A]``, dropping the last element."""
        n = self._nonempty("init")
        return self.take(n - 1)

    def reverse(self) -> Vec:
        return type(self)(self._items[::-1])

    def rotate_left(self, n: int) -> Vec:
        """Element ``i`` moves to ``i - n`` (mod N)."""
        if not self._items:
            return self
        n %= len(self._items)
        return type(self)(self._items[n:] + self._items[:n])

    def rotate_right(self, n: int) -> Vec:
        """Element ``i`` moves to ``i + n`` (mod N)."""
        if not self._items:
            return self
        return self.rotate_left(len(self._items) - n % len(self._items))

    def concat(self) -> Vec:
        """Flatten ``Vec[N, Vec[M, A]]`` into ``Vec[N * M, A]``."""
        inner_lengths = {len(v) for v in self._items if isinstance(v, Vec)}
        if len(inner_lengths) > 1 or not all(isinstance(v, Vec) for v in self._items):
            raise ElementTypeError(
                "concat needs a vector of equally sized vectors",
                expected="Vec[M, A]",
                actual=sorted(inner_lengths),
            )
        element = type(self).ELEMENT
        inner_element = element.ELEMENT if issubclass(element, Vec) else None
        return Vec._build((x for v in self._items for x in v), inner_element)

    # ------------------------------------------------------------------
    # Folds
    # ------------------------------------------------------------------

    def fold(self, fn: Callable[[Any, Any], Any], identity: Any = _NO_IDENTITY) -> Any:
        """Reduce with an associative operator as a balanced tree.

        The tree has depth ``ceil(log2(N))``, mirroring the adder tree a
        synthesizer would build. Element order is preserved, so ``fn`` need
        not be commutative.

        Args:
            fn: Associative binary operator
            identity: Result for ``N == 0``; required only then

        Raises:
            LengthMismatchError: For an empty vector without ``identity``
        """
        if not self._items:
            if identity is _NO_IDENTITY:
                raise LengthMismatchError(
                    "fold of an empty vector needs an identity element",
                    expected=">= 1",
                    actual=0,
                    operation="fold",
                )
            return identity
        level = list(self._items)
        while len(level) > 1:
            paired = [fn(level[i], level[i + 1]) for i in range(0, len(level) - 1, 2)]
            if len(level) % 2:
                paired.append(level[-1])
            level = paired
        return level[0]

    def foldl(self, fn: Callable[[Any, Any], Any], initial: Any) -> Any:
        """Left fold: ``fn(fn(fn(initial, v0), v1), v2) ...``"""
        return functools.reduce(fn, self._items, initial)

    def foldr(self, fn: Callable[[Any, Any], Any], initial: Any) -> Any:
        """Right fold: ``fn(v0, fn(v1, fn(v2, initial))) ...``"""
        acc = initial
        for x in reversed(self._items):
            acc = fn(x, acc)
        return acc

    # ------------------------------------------------------------------
    # BitPack
    # ------------------------------------------------------------------

    @classmethod
    def bit_size(cls) -> int:
        return cls._require_sized() * bit_size(cls.ELEMENT)

    def pack(self) -> BitPattern:
        type(self).bit_size()
        return BitPattern.from_int(0, 0).concat(*(pack(x) for x in self._items))

    @classmethod
    def unpack(cls, bits: BitPattern) -> Vec:
        ensure_same_width(cls.bit_size(), bits.width, f"unpack {cls.__name__}")
        size = bit_size(cls.ELEMENT)
        items = []
        rest = bits
        for _ in range(cls.LENGTH):
            chunk, rest = rest.split_at(size)
            items.append(unpack(cls.ELEMENT, chunk))
        return cls(items)


@functools.cache
def _vec_type(length: int, element: type) -> type[Vec]:
    """Create (once) the ``Vec[length, element]`` subclass."""
    length = ensure_length_param(length, "Vec")
    if not isinstance(element, type):
        raise InvalidParameterError("Vec element type must be a class", element=element)
    name = f"Vec[{length}]" if element is object else f"Vec[{length}, {element.__name__}]"
    return type(name, (Vec,), {"__slots__": (), "LENGTH": length, "ELEMENT": element, "__qualname__": name})
