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

"""Bit-level encoding of structured values.

This package provides the representation layer every hardware-facing value
is reduced to, and the BitPack mechanism that gets it there.

Encoding Rules
--------------
- Unsigned/Signed[W]: W bits, two's complement
- Index[B]: clog2(B) bits
- Products (Product[...], define_struct): fields concatenated, first field
  most significant
- Vec[N, A]: N x bit_size(A), element 0 most significant
- Sums (define_sum, define_enum): clog2(k) tag bits, then the payload in the
  low-order bits, undefined padding in between
- bool: 1 bit; None and Unit: 0 bits

Modules
-------
bit_pattern
    ``BitPattern``: immutable 0/1/X bit strings backed by cocotb ``Logic``
    values; concatenation, slicing, bitwise operators, reductions, shifts

bitpack
    The ``BitPack`` interface and the ``bit_size``/``pack``/``unpack``/
    ``bit_coerce`` free functions; registry for foreign Python types

composite
    Builders for product and sum types with explicit layouts

reduction
    ``reduce_and``/``reduce_or``/``reduce_xor`` over any representable value

Usage
-----
::

    from sigprelude.encoders import define_sum, pack, unpack

    Maybe = define_sum("Maybe", [("Nothing", None), ("Just", Unsigned[8])])
    bits = pack(Maybe.Just(7))        # BitPattern('100000111')
    assert unpack(Maybe, bits) == Maybe.Just(7)
"""

from sigprelude.encoders.bit_pattern import Bit, BitPattern
from sigprelude.encoders.bitpack import (
    BitPack,
    bit_coerce,
    bit_size,
    is_representable,
    pack,
    register_bitpack,
    unpack,
)
from sigprelude.encoders.composite import (
    Product,
    ProductBase,
    SumBase,
    Unit,
    define_enum,
    define_struct,
    define_sum,
)
from sigprelude.encoders.reduction import reduce_and, reduce_or, reduce_xor

__all__ = [
    "Bit",
    "BitPattern",
    "BitPack",
    "bit_coerce",
    "bit_size",
    "is_representable",
    "pack",
    "register_bitpack",
    "unpack",
    "Product",
    "ProductBase",
    "SumBase",
    "Unit",
    "define_enum",
    "define_struct",
    "define_sum",
    "reduce_and",
    "reduce_or",
    "reduce_xor",
]
