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

"""sigprelude: bit-precise types and clocked signals for hardware modelling.

This package provides the core vocabulary for describing synchronous
digital circuits in Python: fixed-width integers, length-indexed vectors,
explicit bit encodings, and discrete-time signals with registers.

Package Structure
-----------------

Subpackages:
    sized
        ``Unsigned[W]``, ``Signed[W]``, ``Index[B]`` and ``Vec[N, A]``

    encoders
        ``BitPattern`` (0/1/X bits), the ``BitPack`` interface, product and
        sum type builders, bit reductions

    signals
        ``Signal`` graphs, ``register``, ``Simulator``, ``mealy``/``moore``

    utils
        Bit manipulation helpers, shape validation and simulation logging

Modules:
    config
        Central configuration constants (bit characters, tick limits, etc.)

    prelude_types
        Type aliases for type safety (Width, Bound, Length, etc.)

    exceptions
        Custom exception hierarchy for shape, range and graph errors

Quick Start
-----------
::

    from sigprelude import Index, Unsigned, mealy, pack, simulate

    Unsigned[8](0b1111_0011).resize(4)       # Unsigned[4](3)
    Index[5](3) + Index[5](4)                # Index[5](2)
    pack(Unsigned[4](5))                     # BitPattern('0101')

    counter = lambda inp: mealy(lambda n, _: (n + 1, n), Unsigned[8](0), inp)
    simulate(counter, [0] * 5)               # 0, 1, 2, 3, 4
"""

# Re-export commonly used types for convenience
from sigprelude.encoders import (
    Bit,
    BitPack,
    BitPattern,
    Product,
    Unit,
    bit_coerce,
    bit_size,
    define_enum,
    define_struct,
    define_sum,
    pack,
    reduce_and,
    reduce_or,
    reduce_xor,
    unpack,
)
from sigprelude.exceptions import PreludeError, RangeError
from sigprelude.signals import (
    Signal,
    Simulator,
    bundle,
    external,
    feedback,
    lift,
    mealy,
    moore,
    mux,
    pure,
    register,
    sample,
    simulate,
    unbundle,
)
from sigprelude.sized import Index, SaturationMode, Signed, Unsigned, Vec

__version__ = "0.1.0"

__all__ = [
    "Bit",
    "BitPack",
    "BitPattern",
    "Product",
    "Unit",
    "bit_coerce",
    "bit_size",
    "define_enum",
    "define_struct",
    "define_sum",
    "pack",
    "reduce_and",
    "reduce_or",
    "reduce_xor",
    "unpack",
    "PreludeError",
    "RangeError",
    "Signal",
    "Simulator",
    "bundle",
    "external",
    "feedback",
    "lift",
    "mealy",
    "moore",
    "mux",
    "pure",
    "register",
    "sample",
    "simulate",
    "unbundle",
    "Index",
    "SaturationMode",
    "Signed",
    "Unsigned",
    "Vec",
]
