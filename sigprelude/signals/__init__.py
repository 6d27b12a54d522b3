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

"""Clocked signals, registers and state machines.

Signals are built as an explicit graph of pure, lifted, registered, input
and feedback nodes, and evaluated tick by tick by a Simulator that owns all
register state for one run.

Modules
-------
signal
    ``Signal`` node type, ``pure``/``lift``/``register``/``external``/
    ``feedback`` constructors, lifted operators, ``mux``, ``register_enable``

bundle
    ``bundle``/``unbundle`` between Vec-of-signals and signal-of-Vec, and the
    tuple variants

simulator
    ``Simulator``, ``sample``, ``sample_packed`` and ``simulate``

state_machines
    ``mealy`` and ``moore`` combinators

Usage
-----
::

    from sigprelude.signals import mealy, simulate
    from sigprelude.sized import Unsigned

    counter = lambda inp: mealy(lambda n, _: (n + 1, n), Unsigned[8](0), inp)
    simulate(counter, range(5))     # [0, 1, 2, 3, 4] as Unsigned[8]
"""

from sigprelude.signals.bundle import bundle, bundle_tuple, unbundle, unbundle_tuple
from sigprelude.signals.signal import (
    EdgeKind,
    FeedbackSignal,
    NodeKind,
    Signal,
    external,
    feedback,
    lift,
    mux,
    pure,
    register,
    register_enable,
)
from sigprelude.signals.simulator import Simulator, sample, sample_packed, simulate
from sigprelude.signals.state_machines import mealy, moore

__all__ = [
    "bundle",
    "bundle_tuple",
    "unbundle",
    "unbundle_tuple",
    "EdgeKind",
    "FeedbackSignal",
    "NodeKind",
    "Signal",
    "external",
    "feedback",
    "lift",
    "mux",
    "pure",
    "register",
    "register_enable",
    "Simulator",
    "sample",
    "sample_packed",
    "simulate",
    "mealy",
    "moore",
]
