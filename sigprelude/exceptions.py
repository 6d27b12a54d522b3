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

"""Custom exceptions for sigprelude.

Exceptions
==========

This module defines a hierarchy of exception types for the failure modes of
the numeric, encoding and signal layers. Every error carries a ``context``
dict (expected/actual shapes, offending values, bounds) that is also
rendered into the message, so a failure can be diagnosed from the traceback
alone.

Shape errors inherit from ``TypeError`` and value errors from ``ValueError``
so that callers using the built-in categories still catch them.

Numeric overflow is never an error: Unsigned and Signed arithmetic wraps.
"""

from typing import Any


class PreludeError(Exception):
    """Base exception for all sigprelude failures.

    All library-specific exceptions inherit from this base class, allowing
    callers to catch every sigprelude error with a single handler.
    """

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize with message and context.

        Args:
            message: Error description
            context: Structured details, kept on ``self.context`` and appended
                to the message one ``key: value`` per line
        """
        self.context = context
        context_str = "\n".join(f"  {k}: {v}" for k, v in context.items())
        super().__init__(f"{message}\nContext:\n{context_str}" if context else message)


class InvalidParameterError(PreludeError, ValueError):
    """Invalid static parameter.

    Raised when a width, bound or length parameter is negative or otherwise
    unusable, or when an unparameterized base class (``Unsigned`` rather
    than ``Unsigned[8]``) is used where a concrete shape is needed.
    """

    pass


class ShapeMismatchError(PreludeError, TypeError):
    """Two shapes that must agree do not.

    Attributes:
        expected: The shape the operation required
        actual: The shape it was given
    """

    def __init__(self, message: str, expected: Any = None, actual: Any = None, **context: Any):
        """Initialize shape mismatch with the two shapes.

        Args:
            message: Error description
            expected: Required width/length/type
            actual: Supplied width/length/type
            context: Additional details (operation name, etc.)
        """
        super().__init__(message, expected=expected, actual=actual, **context)
        self.expected = expected
        self.actual = actual


class WidthMismatchError(ShapeMismatchError):
    """Operands of different width or bound.

    Raised for binary operators on integers of different types, bitwise
    operators on patterns of different width, and unpacking a pattern whose
    width differs from the target type's bit size.
    """

    pass


class LengthMismatchError(ShapeMismatchError):
    """Vector length does not satisfy an operation's length algebra.

    Raised when a literal has the wrong number of elements, when
    ``zip_with`` combines vectors of different lengths, or when a split
    point lies beyond the vector.
    """

    pass


class ElementTypeError(PreludeError, TypeError):
    """Element or field of the wrong type.

    Raised when a vector element, product field or sum payload is neither an
    instance of the declared type nor a literal convertible to it.
    """

    pass


class RangeError(PreludeError, ValueError):
    """Value outside its legal range.

    Raised when constructing an Index outside its bound, narrowing an Index
    below a value it must still represent, or indexing a vector with an
    out-of-range integer.
    """

    def __init__(self, message: str, value: int | None = None, bound: int | None = None, **context: Any):
        """Initialize range error with the offending value.

        Args:
            message: Error description
            value: The out-of-range value
            bound: The exclusive upper bound of the valid range
            context: Additional details
        """
        super().__init__(message, value=value, bound=bound, **context)
        self.value = value
        self.bound = bound


class UndefinedBitError(PreludeError, ValueError):
    """Undefined (X) bit read as a number.

    Raised when converting a BitPattern that contains unknown bits to an
    integer, for example when unpacking a numeric field.
    """

    pass


class InvalidEncodingError(PreludeError, ValueError):
    """Bit pattern is not a valid encoding of the target type.

    Raised when a sum type's tag field names no alternative.
    """

    pass


class NotRepresentableError(PreludeError, TypeError):
    """Type has no BitPack binding.

    Raised by ``bit_size``, ``pack`` and ``unpack`` for values or types that
    cannot be given a hardware representation.
    """

    pass


class SignalGraphError(PreludeError):
    """Base class for malformed signal graphs."""

    pass


class CombinationalLoopError(SignalGraphError):
    """Same-tick cycle in a signal graph.

    Raised when connecting a feedback wire would close a loop that does not
    pass through a register.

    Attributes:
        cycle: Names of the signals along the loop, starting at the wire
    """

    def __init__(self, message: str, cycle: list[str] | None = None):
        """Initialize with the names along the offending loop.

        Args:
            message: Error description
            cycle: Signal names forming the combinational loop
        """
        super().__init__(message, cycle=" -> ".join(cycle or []))
        self.cycle = cycle or []


class UnconnectedSignalError(SignalGraphError):
    """Feedback wire was declared but never driven."""

    pass


class FeedbackAlreadyConnectedError(SignalGraphError):
    """Feedback wire already has a driver."""

    pass


class SimulationError(PreludeError):
    """Base class for failures while running a simulation."""

    pass


class MissingInputError(SimulationError):
    """External input has no value stream."""

    pass


class InputExhaustedError(SimulationError):
    """Input stream ended before the requested tick.

    Attributes:
        input_name: Name of the exhausted input
        tick: Tick at which a value was needed
    """

    def __init__(self, message: str, input_name: str | None = None, tick: int | None = None):
        """Initialize with the exhausted input and tick.

        Args:
            message: Error description
            input_name: External input that ran out
            tick: Tick that could not be evaluated
        """
        super().__init__(message, input_name=input_name, tick=tick)
        self.input_name = input_name
        self.tick = tick
