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

"""Bit-precise numeric types and length-indexed vectors.

This package contains the value types whose shape is a static property of
their type: a width, a bound or a length fixed at specialization time.

Modules
-------
fixed_int
    ``Unsigned[W]`` and ``Signed[W]``:
    - Wrapping add/sub/mul matching hardware adders and multipliers
    - Width-extending ``plus``/``minus``/``times``
    - Explicitly named saturating arithmetic (``SaturationMode``)
    - ``resize`` with zero/sign extension and low-order truncation

index
    ``Index[B]``:
    - True modulo-B arithmetic (B need not be a power of two)
    - RangeError on out-of-range construction or narrowing

vector
    ``Vec[N, A]``:
    - Length algebra for append, split_at, take, drop, zip_with, concat
    - Tree-shaped ``fold`` plus ``foldl``/``foldr``
    - Always-in-range indexing with ``Index[N]``

Usage
-----
::

    from sigprelude.sized import Index, Signed, Unsigned, Vec

    Unsigned[8](200) + 100                  # Unsigned[8](44)
    Index[5](3) + Index[5](4)               # Index[5](2)
    Vec[3, Unsigned[4]]([1, 2, 3]).append(Vec[1, Unsigned[4]]([4]))
"""

from sigprelude.sized.fixed_int import FixedWidthInt, SaturationMode, Signed, Unsigned
from sigprelude.sized.index import Index
from sigprelude.sized.vector import Vec

__all__ = [
    "FixedWidthInt",
    "SaturationMode",
    "Signed",
    "Unsigned",
    "Index",
    "Vec",
]
