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

"""Single-bit summaries over the encoding of any representable value.

Bit Reduction
=============

Each function packs its argument and folds the resulting pattern into one
bit, the way a wide AND/OR/XOR gate does::

    >>> reduce_and(Signed[6](-2))     # pack: 111110
    BitPattern('0')
    >>> reduce_and(Signed[6](-1))     # pack: 111111
    BitPattern('1')
    >>> reduce_or(Signed[6](5))       # pack: 000101
    BitPattern('1')
    >>> reduce_xor(Signed[6](28))     # pack: 011100
    BitPattern('1')

Undefined bits propagate per cocotb ``Logic`` rules: ``reduce_or`` of
``"X1"`` is ``1`` but of ``"X0"`` is ``X``.
"""

from typing import Any

from sigprelude.encoders.bit_pattern import BitPattern
from sigprelude.encoders.bitpack import pack

__all__ = ["reduce_and", "reduce_or", "reduce_xor"]


def reduce_and(value: Any) -> BitPattern:
    """Are all bits set to 1?"""
    return pack(value).reduce_and()


def reduce_or(value: Any) -> BitPattern:
    """Is there at least one bit set to 1?"""
    return pack(value).reduce_or()


def reduce_xor(value: Any) -> BitPattern:
    """Is the number of bits set to 1 odd?"""
    return pack(value).reduce_xor()
