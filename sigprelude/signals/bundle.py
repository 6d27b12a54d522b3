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

"""Conversion between signals of containers and containers of signals.

Bundle
======

``bundle`` turns a ``Vec`` of N signals into one signal of ``Vec`` values;
``unbundle`` goes the other way. Both are purely combinational, so
``unbundle(bundle(v))`` observes the same values as ``v`` at every tick.
``bundle_tuple``/``unbundle_tuple`` do the same for heterogeneous tuples.
"""

from __future__ import annotations

import operator
from collections.abc import Sequence
from typing import Any

from sigprelude.exceptions import ElementTypeError, InvalidParameterError
from sigprelude.signals.signal import Signal, as_signal, lift
from sigprelude.sized.vector import Vec
from sigprelude.utils.validation import ensure_length_param, ensure_same_length


def _element_dtype(signals: Sequence[Signal]) -> type:
    dtypes = {s.dtype for s in signals}
    if len(dtypes) == 1:
        dtype = dtypes.pop()
        if dtype is not None:
            return dtype
    return object


def bundle(signals: Vec | Sequence[Signal], name: str | None = None) -> Signal:
    """Signal of ``Vec[N, A]`` values from N signals of ``A``.

    Args:
        signals: A Vec (or plain sequence) of signals; constants are lifted
            with ``pure``
        name: Optional name for the resulting signal

    Returns:
        Signal whose value at tick t is the Vec of every input's value at t
    """
    if isinstance(signals, Signal):
        raise ElementTypeError("bundle expects a collection of signals, not a single Signal")
    members = [as_signal(s) for s in signals]
    vec_type = Vec[len(members), _element_dtype(members)]
    return lift(lambda *values: vec_type(values), *members, dtype=vec_type, name=name)


def unbundle(signal: Signal, length: int | None = None) -> Vec:
    """``Vec[N, Signal]`` of per-element signals from a signal of vectors.

    The length comes from the signal's declared ``Vec`` dtype, or from
    ``length`` when the dtype is unknown.

    Raises:
        InvalidParameterError: If no length can be determined
        LengthMismatchError: If ``length`` disagrees with the declared dtype
    """
    dtype = signal.dtype
    element = None
    if isinstance(dtype, type) and issubclass(dtype, Vec) and dtype.LENGTH is not None:
        if length is not None:
            ensure_same_length(dtype.LENGTH, length, "unbundle")
        length = dtype.LENGTH
        element = None if dtype.ELEMENT is object else dtype.ELEMENT
    elif length is None:
        raise InvalidParameterError(
            f"cannot unbundle {signal.name}: dtype {dtype!r} has no length; pass length=",
            signal=signal.name,
        )
    length = ensure_length_param(length, "unbundle")
    return Vec[length, Signal](
        [signal.map(operator.itemgetter(i), dtype=element) for i in range(length)]
    )


def bundle_tuple(*signals: Any, name: str | None = None) -> Signal:
    """Signal of tuples from a fixed number of signals."""
    return lift(lambda *values: values, *signals, dtype=tuple, name=name)


def unbundle_tuple(signal: Signal, arity: int) -> tuple[Signal, ...]:
    """``arity`` signals, one per position of a tuple-valued signal."""
    arity = ensure_length_param(arity, "unbundle_tuple")
    return tuple(signal.map(operator.itemgetter(i)) for i in range(arity))
