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

"""Utility functions shared by the sigprelude layers.

This package provides helper functions used throughout the library for
integer reduction, shape validation and simulation logging.

Modules
-------
bit_utils
    Fixed-width integer conversions:
    - Masks and sign extension for arbitrary bit widths
    - Wraparound into unsigned and signed residue classes
    - ``clog2`` for index encodings

validation
    Shape and range checks:
    - Type parameter validation (widths, bounds, lengths)
    - Width/length agreement with expected vs. actual in the error
    - Range checks raising RangeError

sim_logger
    Structured logging for simulation:
    - Per-tick output values and register updates
    - Graph scheduling and run summaries

Usage
-----
Import utilities as needed::

    from sigprelude.utils.bit_utils import wrap_signed
    from sigprelude.utils.validation import ensure_in_range

    wrap_signed(0x80, bits=8)   # -128
    ensure_in_range(7, 5)        # raises RangeError
"""

from sigprelude.utils.bit_utils import clog2, mask, sign_extend, wrap_signed, wrap_unsigned
from sigprelude.utils.sim_logger import SimulationLogger

__all__ = [
    "clog2",
    "mask",
    "sign_extend",
    "wrap_signed",
    "wrap_unsigned",
    "SimulationLogger",
]
