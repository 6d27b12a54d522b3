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

"""Central configuration constants for sigprelude.

Config
======

Constants shared across the numeric, encoding and simulation layers.
Nothing here is read from the environment; change behaviour by passing
explicit arguments to the functions that consume these defaults.
"""

# Bit characters (MSB-first textual form of a BitPattern)
BIT_ZERO = "0"
BIT_ONE = "1"
BIT_UNDEFINED = "X"
BIT_CHARS = BIT_ZERO + BIT_ONE + BIT_UNDEFINED

# Separators accepted (and ignored) in bit-string literals, e.g. "1111_0011"
BIT_LITERAL_SEPARATORS = "_ "

# Simulation
MAX_SIMULATION_TICKS = 1_000_000
"""Upper bound on ticks for predicate-driven runs with no explicit limit."""

DEFAULT_INPUT_NAME = "in"
"""Name of the external input created by ``simulate`` for a one-input circuit."""

# Logging
LOGGER_NAME = "sigprelude"
SIMULATION_LOGGER_NAME = f"{LOGGER_NAME}.simulation"
