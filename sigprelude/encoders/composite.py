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

"""Product and sum types with explicitly declared bit layouts.

Composite Encoders
==================

User-defined types get a BitPack binding by declaring their structure to a
builder; no annotations or attributes are inspected at runtime.

Products
--------
``Product[A, B, ...]``
    Anonymous typed tuple. ``Product[Unsigned[4], Signed[3]](5, -1)``.

``define_struct(name, [(field, type), ...])``
    Named product built on ``collections.namedtuple``; fields are
    accessible by name and position.

Encoding: field encodings concatenated in declared order, first field in the
most significant bits; ``bit_size`` is the sum of the field sizes.

Sums
----
``define_sum(name, [(alternative, payload_type_or_None), ...])``
    Tagged union. Each alternative becomes a constructor on the class::

        Maybe = define_sum("Maybe", [("Nothing", None), ("Just", Unsigned[8])])
        Maybe.Just(3)
        Maybe.Nothing()

``define_enum(name, [alternative, ...])``
    Sum whose alternatives carry no payload.

Encoding (``k`` alternatives, widest payload ``P`` bits)::

    [ tag: clog2(k) bits ][ X padding ][ payload ]
      MSB                                     LSB

Shorter payloads sit in the low-order bits; the padding between tag and
payload is undefined (don't care) and ignored by ``unpack``.

Degenerate
----------
``Unit`` has a single value and a zero-width encoding.
"""

from __future__ import annotations

import collections
import functools
from collections.abc import Iterable, Sequence
from typing import Any

from sigprelude.encoders.bit_pattern import BitPattern
from sigprelude.encoders.bitpack import BitPack, bit_size, coerce, pack, unpack
from sigprelude.exceptions import ElementTypeError, InvalidEncodingError, InvalidParameterError
from sigprelude.utils.bit_utils import clog2
from sigprelude.utils.validation import ensure_same_length, ensure_same_width

_MISSING = object()


class Unit(BitPack):
    """The type with exactly one value; encodes to zero bits."""

    __slots__ = ()
    _instance: Unit | None = None

    def __new__(cls) -> Unit:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Unit()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Unit)

    def __hash__(self) -> int:
        return hash(Unit)

    @classmethod
    def bit_size(cls) -> int:
        return 0

    def pack(self) -> BitPattern:
        return BitPattern.from_int(0, 0)

    @classmethod
    def unpack(cls, bits: BitPattern) -> Unit:
        ensure_same_width(0, bits.width, "unpack Unit")
        return cls()


# ----------------------------------------------------------------------
# Products
# ----------------------------------------------------------------------


class ProductBase(tuple, BitPack):
    """Typed tuple with a concatenated encoding.

    Attributes:
        FIELDS: Field types in declaration order
    """

    __slots__ = ()

    FIELDS: tuple[type, ...] = ()

    @classmethod
    def _coerce_fields(cls, values: Sequence[Any]) -> tuple[Any, ...]:
        ensure_same_length(len(cls.FIELDS), len(values), f"{cls.__name__} fields")
        names = getattr(cls, "_fields", None) or [str(i) for i in range(len(cls.FIELDS))]
        return tuple(
            coerce(ty, value, f"{cls.__name__}.{name}")
            for ty, value, name in zip(cls.FIELDS, values, names)
        )

    @classmethod
    def bit_size(cls) -> int:
        return sum(bit_size(ty) for ty in cls.FIELDS)

    def pack(self) -> BitPattern:
        return BitPattern.from_int(0, 0).concat(*(pack(value) for value in self))

    @classmethod
    def unpack(cls, bits: BitPattern) -> Any:
        ensure_same_width(cls.bit_size(), bits.width, f"unpack {cls.__name__}")
        values = []
        rest = bits
        for ty in cls.FIELDS:
            chunk, rest = rest.split_at(bit_size(ty))
            values.append(unpack(ty, chunk))
        return cls(*values)


class Product(ProductBase):
    """Anonymous product; specialize with ``Product[A, B, ...]``."""

    __slots__ = ()

    def __new__(cls, *values: Any) -> Product:
        if cls is Product:
            raise InvalidParameterError("Product needs field types; use Product[A, B, ...]")
        return super().__new__(cls, cls._coerce_fields(values))

    def __class_getitem__(cls, params: Any) -> type[Product]:
        if not isinstance(params, tuple):
            params = (params,)
        return _product_type(params)

    def __repr__(self) -> str:
        return f"{type(self).__name__}{tuple.__repr__(self)}"


@functools.cache
def _product_type(fields: tuple[type, ...]) -> type[Product]:
    for ty in fields:
        if not isinstance(ty, type):
            raise InvalidParameterError("Product field types must be classes", field=ty)
    name = f"Product[{', '.join(ty.__name__ for ty in fields)}]"
    return type(name, (Product,), {"__slots__": (), "FIELDS": fields, "__qualname__": name})


def define_struct(name: str, fields: Iterable[tuple[str, type]]) -> type[ProductBase]:
    """Build a named product type from an explicit field list.

    Args:
        name: Class name
        fields: ``(field_name, field_type)`` pairs; the first field is the
            most significant in the encoding

    Returns:
        A namedtuple-based class with a BitPack binding

    Example:
        >>> Pixel = define_struct("Pixel", [("r", Unsigned[8]), ("g", Unsigned[8])])
        >>> Pixel(r=1, g=2).pack().width
        16
    """
    fields = list(fields)
    names = [field_name for field_name, _ in fields]
    types = tuple(field_type for _, field_type in fields)
    base = collections.namedtuple(name, names)

    def __new__(cls, *args: Any, **kwargs: Any) -> Any:
        bound = base.__new__(cls, *args, **kwargs)
        return tuple.__new__(cls, cls._coerce_fields(bound))

    return type(name, (base, ProductBase), {"__slots__": (), "FIELDS": types, "__new__": __new__})


# ----------------------------------------------------------------------
# Sums
# ----------------------------------------------------------------------


class _Constructor:
    """Callable building one alternative of a sum type."""

    def __init__(self, tag: int, name: str, payload_type: type | None) -> None:
        self.tag = tag
        self.name = name
        self.payload_type = payload_type
        self.owner: type[SumBase] | None = None

    def __call__(self, payload: Any = _MISSING) -> SumBase:
        return self.owner(self.name, payload)

    def __repr__(self) -> str:
        return f"<constructor {self.owner.__name__}.{self.name}>"


class SumBase(BitPack):
    """Tagged union of explicitly listed alternatives.

    Attributes:
        ALTERNATIVES: ``(name, payload_type_or_None)`` pairs in tag order
    """

    __slots__ = ("_tag", "_payload")

    ALTERNATIVES: tuple[tuple[str, type | None], ...] = ()

    def __init__(self, constructor: str, payload: Any = _MISSING) -> None:
        """Build the alternative named ``constructor``.

        Raises:
            ElementTypeError: If the payload is missing, unexpected, or of the
                wrong type
        """
        cls = type(self)
        names = [alt for alt, _ in cls.ALTERNATIVES]
        if constructor not in names:
            raise InvalidParameterError(
                f"{cls.__name__} has no alternative {constructor!r}", alternatives=names
            )
        self._tag = names.index(constructor)
        payload_type = cls.ALTERNATIVES[self._tag][1]
        if payload_type is None:
            if payload is not _MISSING and payload is not None:
                raise ElementTypeError(
                    f"{cls.__name__}.{constructor} takes no payload",
                    expected=None,
                    actual=type(payload).__name__,
                )
            self._payload = None
        else:
            if payload is _MISSING:
                raise ElementTypeError(
                    f"{cls.__name__}.{constructor} needs a {payload_type.__name__} payload",
                    expected=payload_type.__name__,
                    actual=None,
                )
            self._payload = coerce(payload_type, payload, f"{cls.__name__}.{constructor}")

    @property
    def tag(self) -> int:
        """Position of the alternative in declaration order."""
        return self._tag

    @property
    def constructor(self) -> str:
        """Name of the alternative."""
        return type(self).ALTERNATIVES[self._tag][0]

    @property
    def payload(self) -> Any:
        return self._payload

    def is_(self, constructor: str) -> bool:
        return self.constructor == constructor

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._tag == other._tag and self._payload == other._payload

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._tag, self._payload))

    def __repr__(self) -> str:
        args = "" if self._payload is None else repr(self._payload)
        return f"{type(self).__name__}.{self.constructor}({args})"

    # ------------------------------------------------------------------
    # BitPack
    # ------------------------------------------------------------------

    @classmethod
    def tag_size(cls) -> int:
        return clog2(len(cls.ALTERNATIVES))

    @classmethod
    def _payload_size(cls, payload_type: type | None) -> int:
        return 0 if payload_type is None else bit_size(payload_type)

    @classmethod
    def payload_size(cls) -> int:
        """Width of the widest payload."""
        return max((cls._payload_size(ty) for _, ty in cls.ALTERNATIVES), default=0)

    @classmethod
    def bit_size(cls) -> int:
        return cls.tag_size() + cls.payload_size()

    def pack(self) -> BitPattern:
        cls = type(self)
        payload_type = cls.ALTERNATIVES[self._tag][1]
        payload_bits = BitPattern.from_int(0, 0) if payload_type is None else pack(self._payload)
        padding = BitPattern.undefined(cls.payload_size() - payload_bits.width)
        return BitPattern.from_int(self._tag, cls.tag_size()).concat(padding, payload_bits)

    @classmethod
    def unpack(cls, bits: BitPattern) -> SumBase:
        ensure_same_width(cls.bit_size(), bits.width, f"unpack {cls.__name__}")
        tag_bits, body = bits.split_at(cls.tag_size())
        tag = tag_bits.to_int()
        if tag >= len(cls.ALTERNATIVES):
            raise InvalidEncodingError(
                f"tag {tag} names no alternative of {cls.__name__}",
                tag=tag,
                alternatives=len(cls.ALTERNATIVES),
            )
        name, payload_type = cls.ALTERNATIVES[tag]
        if payload_type is None:
            return cls(name)
        _, payload_bits = body.split_at(body.width - bit_size(payload_type))
        return cls(name, unpack(payload_type, payload_bits))


def define_sum(name: str, alternatives: Iterable[tuple[str, type | None]]) -> type[SumBase]:
    """Build a tagged union from an explicit list of alternatives.

    Args:
        name: Class name
        alternatives: ``(constructor_name, payload_type)`` pairs; use None
            for an alternative without payload. Tags follow list order.

    Returns:
        A SumBase subclass with one constructor attribute per alternative
    """
    alternatives = tuple(alternatives)
    if not alternatives:
        raise InvalidParameterError(f"sum type {name} needs at least one alternative")
    namespace: dict[str, Any] = {"__slots__": (), "ALTERNATIVES": alternatives}
    constructors = []
    for tag, (alt, payload_type) in enumerate(alternatives):
        if alt.startswith("_") or hasattr(SumBase, alt) or alt in namespace:
            raise InvalidParameterError(
                f"invalid or duplicate alternative name {alt!r} in {name}", alternative=alt
            )
        constructor = _Constructor(tag, alt, payload_type)
        namespace[alt] = constructor
        constructors.append(constructor)
    cls = type(name, (SumBase,), namespace)
    for constructor in constructors:
        constructor.owner = cls
    return cls


def define_enum(name: str, alternatives: Iterable[str]) -> type[SumBase]:
    """Sum type whose alternatives carry no payload (encoded as the tag only)."""
    return define_sum(name, [(alt, None) for alt in alternatives])
