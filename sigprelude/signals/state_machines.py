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

"""Mealy and Moore machine combinators.

State Machines
==============

Both combinators hold the current state in a register initialised to
``initial_state`` and compute the next state from the current state and the
same-tick input:

``mealy(transition, initial_state, inputs)``
    ``transition(state, x) -> (next_state, output)``; the output at tick t
    depends on the state and the input at tick t.

``moore(transition, output, initial_state, inputs)``
    ``transition(state, x) -> next_state`` and ``output(state)``; the output
    at tick t depends on the state alone, so it cannot react to the input
    in the same tick.

``inputs`` is a Signal, or a tuple/list of Signals that is presented to
``transition`` as a tuple per tick.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Sequence
from typing import Any

from sigprelude.signals.bundle import bundle_tuple
from sigprelude.signals.signal import Signal, feedback, lift, register


def _input_signal(inputs: Signal | Sequence[Signal]) -> Signal:
    if isinstance(inputs, Signal):
        return inputs
    return bundle_tuple(*inputs)


def mealy(
    transition: Callable[[Any, Any], tuple[Any, Any]],
    initial_state: Any,
    inputs: Signal | Sequence[Signal],
    name: str = "mealy",
) -> Signal:
    """Mealy machine: output computed from state and same-tick input.

    Example:
        >>> counter = mealy(lambda n, _: (n + 1, n), Unsigned[8](0), inp)
        >>> # outputs 0, 1, 2, ... regardless of inp
    """
    next_state = feedback(f"{name}_next")
    state = register(initial_state, next_state, name=f"{name}_state")
    step = lift(transition, state, _input_signal(inputs), name=f"{name}_step")
    next_state.connect(step.map(operator.itemgetter(0), dtype=state.dtype))
    return step.map(operator.itemgetter(1), name=f"{name}_out")


def moore(
    transition: Callable[[Any, Any], Any],
    output: Callable[[Any], Any],
    initial_state: Any,
    inputs: Signal | Sequence[Signal],
    name: str = "moore",
) -> Signal:
    """Moore machine: output computed from state only."""
    next_state = feedback(f"{name}_next")
    state = register(initial_state, next_state, name=f"{name}_state")
    next_state.connect(lift(transition, state, _input_signal(inputs), dtype=state.dtype))
    return state.map(output, name=f"{name}_out")
