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

"""Discrete-time signals as an explicit composition graph.

Signal
======

A ``Signal`` denotes an infinite stream ``s(0), s(1), s(2), ...`` with one
value per clock tick. Signals are nodes of a graph whose edges are tagged
either COMBINATIONAL (same-tick dependency) or REGISTERED (one-tick delay):

    ==========  ====================================  ===================
    kind        value at tick t                       edges
    ==========  ====================================  ===================
    pure        v                                     none
    lift        f(s1(t), ..., sk(t))                  combinational
    register    initial if t == 0 else input(t - 1)   registered
    input       t-th value of a named external stream none
    feedback    driver(t)                             combinational
    ==========  ====================================  ===================

Feedback
--------
Python builds graphs bottom-up, so a loop needs a forward declaration:
``feedback()`` returns a placeholder that is closed later with
``connect(driver)``. ``connect`` walks the driver's combinational fan-in and
raises CombinationalLoopError if it reaches the placeholder, so a same-tick
cycle can never be built; every legal loop passes through a register::

    nxt = feedback("count_next")
    count = register(Unsigned[8](0), nxt, name="count")
    nxt.connect(count + 1)

Operators
---------
``+ - * & | ^ ~ << >>`` and unary ``-`` lift the corresponding value
operator. Comparisons are methods (``eq``, ``ne``, ``lt``, ``le``, ``gt``,
``ge``) because ``==`` on a Signal keeps its usual identity meaning. A
Signal has no truth value; select between signals with ``mux``.

Values are never computed here; see ``signals.simulator``.
"""

from __future__ import annotations

import itertools
import operator
from collections.abc import Callable
from enum import Enum
from typing import Any

from sigprelude.encoders.bit_pattern import BitPattern
from sigprelude.exceptions import (
    CombinationalLoopError,
    FeedbackAlreadyConnectedError,
    UnconnectedSignalError,
)


class NodeKind(Enum):
    """How a signal's value is obtained each tick."""

    PURE = "pure"
    LIFT = "lift"
    REGISTER = "register"
    INPUT = "input"
    FEEDBACK = "feedback"


class EdgeKind(Enum):
    """Dependency timing between a signal and one of its inputs."""

    COMBINATIONAL = "combinational"
    REGISTERED = "registered"


_node_ids = itertools.count()


def _lifted(op: Callable[[Any, Any], Any], reflected: bool = False):
    def method(self: Signal, other: Any) -> Signal:
        args = (other, self) if reflected else (self, other)
        return lift(op, *args, dtype=self.dtype)

    method.__name__ = f"__{'r' if reflected else ''}{op.__name__.strip('_')}__"
    return method


def _lifted_unary(op: Callable[[Any], Any]):
    def method(self: Signal) -> Signal:
        return lift(op, self, dtype=self.dtype)

    method.__name__ = f"__{op.__name__.strip('_')}__"
    return method


class Signal:
    """One node of a signal graph.

    Attributes:
        kind: NodeKind of this node
        name: Human-readable name used in errors and logs
        dtype: Declared value type, or None when unknown
        inputs: Upstream signals (empty for pure/input, the data input for a
            register, the driver for a connected feedback wire)
    """

    def __init__(
        self,
        kind: NodeKind,
        *,
        name: str | None = None,
        dtype: type | None = None,
        inputs: tuple[Signal, ...] = (),
        fn: Callable[..., Any] | None = None,
        value: Any = None,
        initial: Any = None,
    ) -> None:
        self.kind = kind
        self.name = name or f"{kind.value}{next(_node_ids)}"
        self.dtype = dtype
        self.inputs = inputs
        self.fn = fn
        self.value = value
        self.initial = initial

    def __repr__(self) -> str:
        return f"<Signal {self.kind.value} {self.name}>"

    def __bool__(self) -> bool:
        raise TypeError(f"{self!r} has no truth value; use mux() to select between signals")

    def edges(self) -> list[tuple[Signal, EdgeKind]]:
        """Upstream signals with the timing of each dependency."""
        kind = EdgeKind.REGISTERED if self.kind is NodeKind.REGISTER else EdgeKind.COMBINATIONAL
        return [(source, kind) for source in self.inputs]

    def combinational_inputs(self) -> tuple[Signal, ...]:
        """Upstream signals whose same-tick value this signal needs."""
        if self.kind is NodeKind.REGISTER:
            return ()
        return self.inputs

    def map(self, fn: Callable[[Any], Any], dtype: type | None = None, name: str | None = None) -> Signal:
        """Apply ``fn`` to the value at every tick."""
        return lift(fn, self, dtype=dtype, name=name)

    # ------------------------------------------------------------------
    # Lifted comparisons
    # ------------------------------------------------------------------

    def eq(self, other: Any) -> Signal:
        return lift(operator.eq, self, other, dtype=bool)

    def ne(self, other: Any) -> Signal:
        return lift(operator.ne, self, other, dtype=bool)

    def lt(self, other: Any) -> Signal:
        return lift(operator.lt, self, other, dtype=bool)

    def le(self, other: Any) -> Signal:
        return lift(operator.le, self, other, dtype=bool)

    def gt(self, other: Any) -> Signal:
        return lift(operator.gt, self, other, dtype=bool)

    def ge(self, other: Any) -> Signal:
        return lift(operator.ge, self, other, dtype=bool)

    # ------------------------------------------------------------------
    # Lifted arithmetic and bitwise operators
    # ------------------------------------------------------------------

    __add__ = _lifted(operator.add)
    __radd__ = _lifted(operator.add, reflected=True)
    __sub__ = _lifted(operator.sub)
    __rsub__ = _lifted(operator.sub, reflected=True)
    __mul__ = _lifted(operator.mul)
    __rmul__ = _lifted(operator.mul, reflected=True)
    __and__ = _lifted(operator.and_)
    __rand__ = _lifted(operator.and_, reflected=True)
    __or__ = _lifted(operator.or_)
    __ror__ = _lifted(operator.or_, reflected=True)
    __xor__ = _lifted(operator.xor)
    __rxor__ = _lifted(operator.xor, reflected=True)
    __lshift__ = _lifted(operator.lshift)
    __rlshift__ = _lifted(operator.lshift, reflected=True)
    __rshift__ = _lifted(operator.rshift)
    __rrshift__ = _lifted(operator.rshift, reflected=True)
    __neg__ = _lifted_unary(operator.neg)
    __invert__ = _lifted_unary(operator.invert)



class FeedbackSignal(Signal):
    """Forward-declared signal, driven later with ``connect``."""

    def __init__(self, name: str | None = None, dtype: type | None = None) -> None:
        super().__init__(NodeKind.FEEDBACK, name=name, dtype=dtype)

    @property
    def driver(self) -> Signal | None:
        return self.inputs[0] if self.inputs else None

    def connect(self, driver: Any) -> None:
        """Drive this wire from ``driver``.

        Raises:
            FeedbackAlreadyConnectedError: If the wire already has a driver
            CombinationalLoopError: If ``driver`` depends on this wire through
                combinational edges only
        """
        if self.inputs:
            raise FeedbackAlreadyConnectedError(
                f"feedback {self.name} is already driven by {self.inputs[0].name}"
            )
        driver = as_signal(driver)
        path = combinational_path(driver, self)
        if path is not None:
            cycle = [self.name] + [node.name for node in path]
            raise CombinationalLoopError(
                f"connecting {driver.name} to {self.name} closes a loop with no register",
                cycle=cycle,
            )
        self.inputs = (driver,)
        if self.dtype is None:
            self.dtype = driver.dtype

    def require_driver(self) -> Signal:
        if not self.inputs:
            raise UnconnectedSignalError(
                f"feedback {self.name} was never connected", signal=self.name
            )
        return self.inputs[0]


def combinational_path(start: Signal, target: Signal) -> list[Signal] | None:
    """Chain ``start -> ... -> target`` along combinational fan-in, if any.

    Unconnected feedback wires end a branch.
    """
    parents: dict[int, Signal | None] = {id(start): None}
    stack = [start]
    while stack:
        node = stack.pop()
        if node is target:
            path = [node]
            parent = parents[id(node)]
            while parent is not None:
                path.append(parent)
                parent = parents[id(parent)]
            return path[::-1]
        for source in node.combinational_inputs():
            if id(source) not in parents:
                parents[id(source)] = node
                stack.append(source)
    return None


# ----------------------------------------------------------------------
# Construction primitives
# ----------------------------------------------------------------------


def as_signal(value: Any) -> Signal:
    """``value`` itself if it is a Signal, otherwise ``pure(value)``."""
    return value if isinstance(value, Signal) else pure(value)


def pure(value: Any, name: str | None = None) -> Signal:
    """Signal equal to ``value`` at every tick."""
    return Signal(NodeKind.PURE, name=name, dtype=type(value), value=value)


def lift(fn: Callable[..., Any], *signals: Any, dtype: type | None = None, name: str | None = None) -> Signal:
    """Signal whose value at tick t is ``fn(s1(t), ..., sk(t))``.

    Non-Signal arguments are treated as constants.
    """
    return Signal(
        NodeKind.LIFT,
        name=name,
        dtype=dtype,
        inputs=tuple(as_signal(s) for s in signals),
        fn=fn,
    )


def register(initial: Any, data: Any, name: str | None = None) -> Signal:
    """One-tick delay: ``initial`` at tick 0, then ``data(t - 1)``.

    The only primitive that reads a past value, and therefore the only way
    to close a feedback loop.
    """
    return Signal(
        NodeKind.REGISTER,
        name=name,
        dtype=type(initial),
        inputs=(as_signal(data),),
        initial=initial,
    )


def external(name: str, dtype: type | None = None) -> Signal:
    """Input signal fed from the stream named ``name`` at simulation time."""
    return Signal(NodeKind.INPUT, name=name, dtype=dtype)


def feedback(name: str | None = None, dtype: type | None = None) -> FeedbackSignal:
    """Placeholder signal for building loops; close it with ``connect``."""
    return FeedbackSignal(name=name, dtype=dtype)


def _truthy(value: Any) -> bool:
    if isinstance(value, BitPattern):
        return value.to_int() != 0
    return bool(value)


def mux(select: Any, when_true: Any, when_false: Any, name: str | None = None) -> Signal:
    """Per-tick selection: ``when_true(t) if select(t) else when_false(t)``.

    ``select`` values may be bools, fixed-width ints or one-bit patterns.
    """
    when_true = as_signal(when_true)
    return lift(
        lambda s, a, b: a if _truthy(s) else b,
        select,
        when_true,
        when_false,
        dtype=when_true.dtype,
        name=name,
    )


def register_enable(initial: Any, enable: Any, data: Any, name: str | None = None) -> Signal:
    """Register that only loads ``data`` on ticks where ``enable`` holds."""
    nxt = feedback(f"{name}_next" if name else None)
    reg = register(initial, nxt, name=name)
    nxt.connect(mux(enable, data, reg))
    return reg
