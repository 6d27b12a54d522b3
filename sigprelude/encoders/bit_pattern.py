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

"""Fixed-width patterns of 0, 1 and unknown bits.

Bit Pattern
===========

A ``BitPattern`` is an immutable, MSB-first sequence of bits, each of which
is ``0``, ``1`` or undefined (``X``). It is the common encoding target of
``pack`` and the common source of ``unpack``.

Bit values are modelled with ``cocotb.types.Logic`` so that bitwise
operators propagate unknowns exactly as a cocotb testbench would see them
on a real bus:

    ========  =====  =====  =====
    op          0      1      X
    ========  =====  =====  =====
    X & b       0      X      X
    X | b       X      1      X
    X ^ b       X      X      X
    ========  =====  =====  =====

Bit indices count from the least significant bit (index 0), matching
hardware ``[hi:lo]`` notation, while iteration and the textual form run
MSB first.

Widths:
    ``BitPattern`` values always know their width. ``BitPattern[N]`` is the
    width-N specialization used wherever a type is needed (struct fields,
    ``unpack`` targets); its constructor rejects literals of any other width.

Example:
    >>> p = BitPattern.from_int(0b1111_0011, 8)
    >>> str(p.slice(3, 0))
    '0011'
    >>> str(p.concat(BitPattern("X1")))
    '11110011X1'
"""

from __future__ import annotations

import functools
from collections.abc import Iterable, Iterator

from cocotb.types import Logic

from sigprelude.config import BIT_CHARS, BIT_LITERAL_SEPARATORS, BIT_ONE, BIT_UNDEFINED, BIT_ZERO
from sigprelude.exceptions import InvalidParameterError, RangeError, UndefinedBitError
from sigprelude.prelude_types import BitIndex
from sigprelude.utils.bit_utils import sign_extend, wrap_unsigned
from sigprelude.utils.validation import ensure_in_range, ensure_same_width, ensure_width_param

_LOGIC = {char: Logic(char) for char in BIT_CHARS}

# Nine-valued logic characters folded onto the three bit values we model
_CHAR_MAP = {
    "0": BIT_ZERO,
    "1": BIT_ONE,
    "L": BIT_ZERO,
    "H": BIT_ONE,
    "X": BIT_UNDEFINED,
    "Z": BIT_UNDEFINED,
    "U": BIT_UNDEFINED,
    "W": BIT_UNDEFINED,
    "-": BIT_UNDEFINED,
}


def _bit_char(bit: Logic | str | int) -> str:
    """Normalize one bit to ``"0"``, ``"1"`` or ``"X"``."""
    if isinstance(bit, int):
        if bit not in (0, 1):
            raise InvalidParameterError("integer bits must be 0 or 1", bit=bit)
        return BIT_ONE if bit else BIT_ZERO
    char = str(bit).upper()
    if char not in _CHAR_MAP:
        raise InvalidParameterError("unrecognized bit value", bit=bit)
    return _CHAR_MAP[char]


def _check_shift(n: int) -> None:
    if n < 0:
        raise InvalidParameterError("shift amount must be non-negative", shift=n)


class BitPattern:
    """Immutable fixed-width bit string.

    Attributes:
        WIDTH: Width fixed by a ``BitPattern[N]`` specialization, or None on
            the unsized base class
    """

    __slots__ = ("_bits",)

    WIDTH: int | None = None

    def __init__(self, bits: str | Iterable[Logic | str | int] = "") -> None:
        """Build a pattern from MSB-first bits.

        Args:
            bits: A string such as ``"1010_X1"`` (``_`` and spaces ignored) or
                an iterable of ``Logic`` values, single characters or 0/1 ints
        """
        if isinstance(bits, str):
            bits = [c for c in bits if c not in BIT_LITERAL_SEPARATORS]
        self._bits = "".join(_bit_char(b) for b in bits)
        if type(self).WIDTH is not None:
            ensure_same_width(type(self).WIDTH, len(self._bits), "BitPattern literal")

    def __class_getitem__(cls, width: int) -> type[BitPattern]:
        return _sized_bit_pattern(width)

    @classmethod
    def _make(cls, bits: str) -> BitPattern:
        pattern = object.__new__(BitPattern)
        pattern._bits = bits
        return pattern

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_int(cls, value: int, width: int | None = None) -> BitPattern:
        """Encode an integer as its low ``width`` bits (two's complement).

        Args:
            value: Any int; negative values are encoded in two's complement
            width: Pattern width; defaults to the specialization's WIDTH

        Returns:
            The encoded pattern
        """
        width = cls._resolve_width(width)
        if width == 0:
            return cls._make("")
        return cls._make(format(wrap_unsigned(value, width), f"0{width}b"))

    @classmethod
    def zeros(cls, width: int | None = None) -> BitPattern:
        """All-zero pattern."""
        return cls._make(BIT_ZERO * cls._resolve_width(width))

    @classmethod
    def ones(cls, width: int | None = None) -> BitPattern:
        """All-one pattern."""
        return cls._make(BIT_ONE * cls._resolve_width(width))

    @classmethod
    def undefined(cls, width: int | None = None) -> BitPattern:
        """All-X pattern, the encoding of "don't care"."""
        return cls._make(BIT_UNDEFINED * cls._resolve_width(width))

    @classmethod
    def from_logic(cls, bits: Iterable[Logic]) -> BitPattern:
        """Build a pattern from MSB-first cocotb ``Logic`` values (Z reads as X)."""
        return cls(bits)

    @classmethod
    def _resolve_width(cls, width: int | None) -> int:
        if width is None:
            width = cls.WIDTH
            if width is None:
                raise InvalidParameterError(
                    "width required for unsized BitPattern; pass width or use BitPattern[N]"
                )
        return ensure_width_param(width, "BitPattern")

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        """Number of bits."""
        return len(self._bits)

    def __len__(self) -> int:
        return len(self._bits)

    def __iter__(self) -> Iterator[BitPattern]:
        """Iterate single-bit patterns, MSB first."""
        return (BitPattern._make(c) for c in self._bits)

    def __str__(self) -> str:
        return self._bits

    def __repr__(self) -> str:
        return f"BitPattern('{self._bits}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitPattern):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(("BitPattern", self._bits))

    @property
    def is_defined(self) -> bool:
        """True when no bit is X."""
        return BIT_UNDEFINED not in self._bits

    def to_int(self) -> int:
        """Read the pattern as an unsigned integer.

        Raises:
            UndefinedBitError: If any bit is X
        """
        if not self.is_defined:
            raise UndefinedBitError(
                "cannot read an integer from a pattern with undefined bits",
                pattern=self._bits,
            )
        return int(self._bits, 2) if self._bits else 0

    def to_signed(self) -> int:
        """Read the pattern as a two's complement integer."""
        return sign_extend(self.to_int(), self.width)

    def to_logic(self) -> tuple[Logic, ...]:
        """MSB-first tuple of cocotb ``Logic`` values."""
        return tuple(_LOGIC[c] for c in self._bits)

    # ------------------------------------------------------------------
    # Bit access and slicing
    # ------------------------------------------------------------------

    def _pos(self, index: int) -> int:
        """String position of bit ``index`` (LSB = 0)."""
        ensure_in_range(index, self.width, "bit index")
        return self.width - 1 - index

    def __getitem__(self, index: BitIndex) -> BitPattern:
        """Single bit at ``index`` (0 = LSB) as a one-bit pattern."""
        return BitPattern._make(self._bits[self._pos(index)])

    def slice(self, hi: BitIndex, lo: BitIndex) -> BitPattern:
        """Bits ``[hi:lo]`` inclusive, width ``hi - lo + 1``.

        Raises:
            RangeError: If ``hi`` or ``lo`` lies outside the pattern or
                ``hi < lo``
        """
        if hi < lo:
            raise RangeError(f"slice [{hi}:{lo}] is reversed", value=lo, bound=hi + 1)
        start = self._pos(hi)
        end = self._pos(lo) + 1
        return BitPattern._make(self._bits[start:end])

    def split_at(self, n: int) -> tuple[BitPattern, BitPattern]:
        """Split into the top ``n`` bits and the remaining low bits."""
        ensure_in_range(n, self.width + 1, "split point")
        return BitPattern._make(self._bits[:n]), BitPattern._make(self._bits[n:])

    def msb(self) -> BitPattern:
        """Most significant bit."""
        return self[self.width - 1]

    def lsb(self) -> BitPattern:
        """Least significant bit."""
        return self[0]

    def replace_bit(self, index: BitIndex, bit: Logic | str | int) -> BitPattern:
        """Copy with bit ``index`` (0 = LSB) replaced."""
        pos = self._pos(index)
        return BitPattern._make(self._bits[:pos] + _bit_char(bit) + self._bits[pos + 1 :])

    # ------------------------------------------------------------------
    # Structural operations
    # ------------------------------------------------------------------

    def concat(self, *others: BitPattern) -> BitPattern:
        """Concatenate, ``self`` in the most significant position."""
        return BitPattern._make(self._bits + "".join(o._bits for o in others))

    def reverse(self) -> BitPattern:
        """Reverse bit order."""
        return BitPattern._make(self._bits[::-1])

    def shift_left(self, n: int) -> BitPattern:
        """Logical left shift, zeros in at the bottom."""
        _check_shift(n)
        n = min(n, self.width)
        return BitPattern._make(self._bits[n:] + BIT_ZERO * n)

    def shift_right(self, n: int, arithmetic: bool = False) -> BitPattern:
        """Right shift; ``arithmetic`` replicates the MSB instead of zero-filling."""
        _check_shift(n)
        n = min(n, self.width)
        fill = self._bits[0] if arithmetic and self._bits else BIT_ZERO
        return BitPattern._make(fill * n + self._bits[: self.width - n])

    def rotate_left(self, n: int) -> BitPattern:
        if not self._bits:
            return self
        n %= self.width
        return BitPattern._make(self._bits[n:] + self._bits[:n])

    def rotate_right(self, n: int) -> BitPattern:
        if not self._bits:
            return self
        return self.rotate_left(self.width - n % self.width)

    # ------------------------------------------------------------------
    # Bitwise operators and reductions
    # ------------------------------------------------------------------

    def _zip_logic(self, other: BitPattern, op, name: str) -> BitPattern:
        if not isinstance(other, BitPattern):
            return NotImplemented
        ensure_same_width(self.width, other.width, name)
        return BitPattern._make(
            "".join(str(op(_LOGIC[a], _LOGIC[b])) for a, b in zip(self._bits, other._bits))
        )

    def __and__(self, other: BitPattern) -> BitPattern:
        return self._zip_logic(other, lambda a, b: a & b, "and")

    def __or__(self, other: BitPattern) -> BitPattern:
        return self._zip_logic(other, lambda a, b: a | b, "or")

    def __xor__(self, other: BitPattern) -> BitPattern:
        return self._zip_logic(other, lambda a, b: a ^ b, "xor")

    def __invert__(self) -> BitPattern:
        return BitPattern._make("".join(str(~_LOGIC[c]) for c in self._bits))

    def _reduce(self, op, identity: str) -> BitPattern:
        acc = _LOGIC[identity]
        for c in self._bits:
            acc = op(acc, _LOGIC[c])
        return BitPattern._make(str(acc))

    def reduce_and(self) -> BitPattern:
        """Are all bits set to 1? (1 for the empty pattern)"""
        return self._reduce(lambda a, b: a & b, BIT_ONE)

    def reduce_or(self) -> BitPattern:
        """Is at least one bit set to 1?"""
        return self._reduce(lambda a, b: a | b, BIT_ZERO)

    def reduce_xor(self) -> BitPattern:
        """Is the number of 1 bits odd?"""
        return self._reduce(lambda a, b: a ^ b, BIT_ZERO)

    # ------------------------------------------------------------------
    # BitPack binding (registered on BitPack in encoders.bitpack)
    # ------------------------------------------------------------------

    @classmethod
    def bit_size(cls) -> int:
        return cls._resolve_width(None)

    def pack(self) -> BitPattern:
        return self

    @classmethod
    def unpack(cls, bits: BitPattern) -> BitPattern:
        ensure_same_width(cls.bit_size(), bits.width, f"unpack {cls.__name__}")
        return bits

    @classmethod
    def from_literal(cls, value: int) -> BitPattern:
        return cls.from_int(value)


@functools.cache
def _sized_bit_pattern(width: int) -> type[BitPattern]:
    width = ensure_width_param(width, "BitPattern")
    name = f"BitPattern[{width}]"
    return type(name, (BitPattern,), {"__slots__": (), "WIDTH": width, "__qualname__": name})


Bit = BitPattern[1]
"""A single bit; the result type of the reductions."""
