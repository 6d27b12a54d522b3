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

"""Tick-by-tick evaluation of signal graphs.

Simulator
=========

A ``Simulator`` owns one run over a signal graph. On construction it:

1. Collects every signal reachable from the outputs
2. Checks that every feedback wire is connected and every external input
   has a stream
3. Orders the signals so each one follows its combinational fan-in
   (register outputs only depend on state, so they break every loop)

Each ``step()`` then evaluates one tick in that order, reads the outputs,
and latches every register's data input as its next state. Register state
lives in the Simulator, not in the graph, so the same graph can be
simulated any number of times and every run starts from the initial
values.

Example
-------
::

    from sigprelude.signals import mealy, simulate

    def acc(state, x):
        return state + x, state

    simulate(lambda inp: mealy(acc, 0, inp), [1, 1, 1, 1, 1])
    # [0, 1, 2, 3, 4]
"""

from __future__ import annotations

from collections import Counter, deque
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from typing import Any

from sigprelude.config import DEFAULT_INPUT_NAME, MAX_SIMULATION_TICKS
from sigprelude.encoders.bit_pattern import BitPattern
from sigprelude.encoders.bitpack import pack
from sigprelude.exceptions import (
    CombinationalLoopError,
    InputExhaustedError,
    InvalidParameterError,
    MissingInputError,
)
from sigprelude.prelude_types import Tick
from sigprelude.signals.signal import FeedbackSignal, NodeKind, Signal, external
from sigprelude.utils.sim_logger import SimulationLogger

Outputs = Signal | Sequence[Signal] | Mapping[str, Signal]


def reachable_signals(roots: Iterable[Signal]) -> list[Signal]:
    """All signals the roots depend on, across both edge kinds.

    Raises:
        UnconnectedSignalError: If a reachable feedback wire has no driver
    """
    seen: set[int] = set()
    nodes: list[Signal] = []
    stack = list(roots)
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        nodes.append(node)
        if isinstance(node, FeedbackSignal):
            node.require_driver()
        stack.extend(node.inputs)
    return nodes


def schedule(nodes: Sequence[Signal]) -> list[Signal]:
    """Order ``nodes`` so every signal follows its combinational inputs.

    Kahn's algorithm over combinational edges only; registered edges impose
    no same-tick ordering.

    Raises:
        CombinationalLoopError: If some nodes can never be scheduled
    """
    pending = {id(node): len(node.combinational_inputs()) for node in nodes}
    dependents: dict[int, list[Signal]] = {id(node): [] for node in nodes}
    for node in nodes:
        for source in node.combinational_inputs():
            dependents[id(source)].append(node)

    ready = deque(node for node in nodes if pending[id(node)] == 0)
    order: list[Signal] = []
    while ready:
        node = ready.popleft()
        order.append(node)
        for dependent in dependents[id(node)]:
            pending[id(dependent)] -= 1
            if pending[id(dependent)] == 0:
                ready.append(dependent)

    if len(order) != len(nodes):
        stuck = [node.name for node in nodes if pending[id(node)] > 0]
        raise CombinationalLoopError("signal graph has a loop with no register", cycle=stuck)
    return order


class Simulator:
    """One simulation run over a signal graph.

    Args:
        outputs: A signal, a sequence of signals, or a name → signal mapping;
            ``step`` returns a value, a tuple or a dict accordingly
        inputs: Stream per external input name; any iterable, including
            infinite generators

    Raises:
        UnconnectedSignalError: If a reachable feedback wire has no driver
        MissingInputError: If a reachable external input has no stream
    """

    def __init__(self, outputs: Outputs, inputs: Mapping[str, Iterable[Any]] | None = None) -> None:
        if isinstance(outputs, Signal):
            self._shape = "single"
            named = [(outputs.name, outputs)]
        elif isinstance(outputs, Mapping):
            self._shape = "mapping"
            named = list(outputs.items())
        else:
            self._shape = "sequence"
            named = [(str(i), s) for i, s in enumerate(outputs)]
        for name, signal in named:
            if not isinstance(signal, Signal):
                raise InvalidParameterError(
                    f"output {name} is not a Signal", actual=type(signal).__name__
                )
        if self._shape == "sequence":
            named = [(f"{i}:{s.name}", s) for i, (_, s) in enumerate(named)]
        self._outputs = dict(named)

        nodes = reachable_signals(self._outputs.values())
        self._order = schedule(nodes)
        self._registers = [node for node in self._order if node.kind is NodeKind.REGISTER]
        self._state = {id(reg): reg.initial for reg in self._registers}

        inputs = dict(inputs or {})
        needed = sorted({node.name for node in nodes if node.kind is NodeKind.INPUT})
        missing = [name for name in needed if name not in inputs]
        if missing:
            raise MissingInputError(
                f"no stream supplied for input(s) {', '.join(missing)}", provided=sorted(inputs)
            )
        self._streams: dict[str, Iterator[Any]] = {name: iter(inputs[name]) for name in needed}
        self._tick = 0

        SimulationLogger.log_graph_summary(
            Counter(node.kind.value for node in nodes), len(self._order)
        )

    @property
    def tick(self) -> Tick:
        """Number of ticks evaluated so far (the next tick to evaluate)."""
        return Tick(self._tick)

    def _next_input(self, name: str) -> Any:
        try:
            return next(self._streams[name])
        except StopIteration:
            raise InputExhaustedError(
                f"input {name} has no value for tick {self._tick}",
                input_name=name,
                tick=self._tick,
            ) from None

    def step(self) -> Any:
        """Evaluate one tick and advance every register.

        Returns:
            The output value(s) at the current tick

        Raises:
            InputExhaustedError: If an input stream ran out
        """
        values: dict[int, Any] = {}
        input_values: dict[str, Any] = {}
        for node in self._order:
            kind = node.kind
            if kind is NodeKind.PURE:
                value = node.value
            elif kind is NodeKind.INPUT:
                if node.name not in input_values:
                    input_values[node.name] = self._next_input(node.name)
                value = input_values[node.name]
            elif kind is NodeKind.REGISTER:
                value = self._state[id(node)]
            elif kind is NodeKind.LIFT:
                value = node.fn(*(values[id(source)] for source in node.inputs))
            else:
                value = values[id(node.inputs[0])]
            values[id(node)] = value

        for reg in self._registers:
            new = values[id(reg.inputs[0])]
            SimulationLogger.log_register_update(self._tick, reg.name, self._state[id(reg)], new)
            self._state[id(reg)] = new

        observed = {name: values[id(signal)] for name, signal in self._outputs.items()}
        SimulationLogger.log_tick(self._tick, observed)
        self._tick += 1

        if self._shape == "single":
            return next(iter(observed.values()))
        if self._shape == "sequence":
            return tuple(observed.values())
        return observed

    def run(self, ticks: int) -> list[Any]:
        """Outputs of the next ``ticks`` ticks."""
        if ticks < 0:
            raise InvalidParameterError("tick count must be non-negative", ticks=ticks)
        results = [self.step() for _ in range(ticks)]
        SimulationLogger.log_run_summary(self._tick, "tick count")
        return results

    def run_until(
        self, predicate: Callable[[Any], bool], max_ticks: int = MAX_SIMULATION_TICKS
    ) -> list[Any]:
        """Step until ``predicate(output)`` holds or ``max_ticks`` ticks ran.

        Returns:
            Outputs up to and including the first one satisfying
            ``predicate``
        """
        results = []
        for _ in range(max_ticks):
            output = self.step()
            results.append(output)
            if predicate(output):
                SimulationLogger.log_run_summary(self._tick, "predicate")
                return results
        SimulationLogger.log_run_summary(self._tick, "tick limit")
        return results

    def __iter__(self) -> Iterator[Any]:
        while True:
            try:
                yield self.step()
            except InputExhaustedError:
                return


def sample(
    outputs: Outputs, ticks: int, inputs: Mapping[str, Iterable[Any]] | None = None
) -> list[Any]:
    """First ``ticks`` output values of a fresh simulation."""
    return Simulator(outputs, inputs).run(ticks)


def sample_packed(
    signal: Signal, ticks: int, inputs: Mapping[str, Iterable[Any]] | None = None
) -> list[BitPattern]:
    """Like ``sample`` but returns the bit encoding of each value."""
    return [pack(value) for value in sample(signal, ticks, inputs)]


def simulate(
    circuit: Callable[[Signal], Outputs],
    values: Iterable[Any],
    ticks: int | None = None,
    until: Callable[[Any], bool] | None = None,
    input_name: str = DEFAULT_INPUT_NAME,
    dtype: type | None = None,
) -> list[Any]:
    """Run a one-input circuit over a list or stream of input values.

    Args:
        circuit: Function building the output signal(s) from the input
        values: Input value per tick
        ticks: Number of ticks; defaults to ``len(values)``
        until: Stop after the first output satisfying this predicate
            (bounded by ``ticks`` or MAX_SIMULATION_TICKS)
        input_name: Name of the external input passed to ``circuit``
        dtype: Declared type of the input signal

    Raises:
        InvalidParameterError: If ``values`` has no length and neither
            ``ticks`` nor ``until`` is given
    """
    if ticks is None and hasattr(values, "__len__"):
        ticks = len(values)
    if ticks is None and until is None:
        raise InvalidParameterError("pass ticks= or until= when values is an unsized stream")
    sim = Simulator(circuit(external(input_name, dtype)), {input_name: values})
    if until is not None:
        return sim.run_until(until, max_ticks=MAX_SIMULATION_TICKS if ticks is None else ticks)
    return sim.run(ticks)
