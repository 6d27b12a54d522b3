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

"""Type aliases and custom types for sigprelude.

Types
=====

This module defines NewTypes for the static parameters and time values
threaded through the library, for better type safety and code clarity.
"""

from typing import NewType

# Static shape parameters
Width = NewType("Width", int)
"""Bit count of an Unsigned, Signed or BitPattern type (>= 0)."""

Bound = NewType("Bound", int)
"""Exclusive upper bound of an Index type (>= 1)."""

Length = NewType("Length", int)
"""Element count of a Vec type (>= 0)."""

BitIndex = NewType("BitIndex", int)
"""Bit position within a pattern, 0 being the least significant bit."""

# Simulation time
Tick = NewType("Tick", int)
"""Discrete clock tick, starting at 0."""
