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

"""Shape and range checks with rich error reporting.

Validation Utilities
====================

This module provides the checks that stand in for compile-time shape
checking. Each helper raises the matching exception from
``sigprelude.exceptions`` with structured context (expected, actual,
operation, bound) instead of a bare assertion.

Provided Utilities:

    Parameter checks:
        - ensure_width_param(): Width parameter is an int >= 0
        - ensure_bound_param(): Index bound is an int >= 1
        - ensure_length_param(): Vec length is an int >= 0

    Shape checks:
        - ensure_same_width(): Two widths agree (WidthMismatchError)
        - ensure_same_length(): Two lengths agree (LengthMismatchError)
        - ensure_same_type(): Two operand types agree (WidthMismatchError)

    Range checks:
        - ensure_in_range(): Value within [0, bound) (RangeError)

Example:
    >>> try:
    ...     ensure_same_width(8, 4, "and")
    ... except WidthMismatchError as e:
    ...     print(e.expected, e.actual)
    8 4
"""

from typing import Any

from sigprelude.exceptions import (
    InvalidParameterError,
    LengthMismatchError,
    RangeError,
    WidthMismatchError,
)
from sigprelude.prelude_types import Bound, Length, Width


def _is_plain_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def ensure_width_param(width: Any, family: str) -> Width:
    """Validate a bit-width type parameter."""
    if not _is_plain_int(width) or width < 0:
        raise InvalidParameterError(
            f"{family} width must be a non-negative int", family=family, width=width
        )
    return Width(width)


def ensure_bound_param(bound: Any, family: str) -> Bound:
    """Validate an Index bound type parameter."""
    if not _is_plain_int(bound) or bound < 1:
        raise InvalidParameterError(
            f"{family} bound must be a positive int", family=family, bound=bound
        )
    return Bound(bound)


def ensure_length_param(length: Any, family: str) -> Length:
    """Validate a vector length type parameter."""
    if not _is_plain_int(length) or length < 0:
        raise InvalidParameterError(
            f"{family} length must be a non-negative int", family=family, length=length
        )
    return Length(length)


def ensure_same_width(expected: int, actual: int, operation: str) -> None:
    """Assert two bit widths agree."""
    if expected != actual:
        raise WidthMismatchError(
            f"{operation}: width mismatch, expected {expected} bits, got {actual}",
            expected=expected,
            actual=actual,
            operation=operation,
        )


def ensure_same_length(expected: int, actual: int, operation: str) -> None:
    """Assert two vector lengths agree."""
    if expected != actual:
        raise LengthMismatchError(
            f"{operation}: length mismatch, expected {expected} elements, got {actual}",
            expected=expected,
            actual=actual,
            operation=operation,
        )


def ensure_same_type(expected: type, actual: type, operation: str) -> None:
    """Assert two operand types are the same specialization.

    Used for binary operators on fixed-width integers, where ``Unsigned[8]``
    and ``Unsigned[4]`` (or ``Unsigned[8]`` and ``Signed[8]``) never mix.
    """
    if expected is not actual:
        raise WidthMismatchError(
            f"{operation}: operand type mismatch, expected {expected.__name__}, "
            f"got {actual.__name__}",
            expected=expected.__name__,
            actual=actual.__name__,
            operation=operation,
        )


def ensure_in_range(value: int, bound: int, name: str = "value") -> int:
    """Assert ``0 <= value < bound``.

    Returns:
        The value, unchanged
    """
    if not 0 <= value < bound:
        raise RangeError(
            f"{name} {value} out of range [0, {bound})",
            value=value,
            bound=bound,
        )
    return value
