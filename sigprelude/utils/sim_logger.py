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

"""Structured logging for signal simulation and debugging.

Simulation Logger
=================

Provides utilities for logging simulation progress with rich context,
making it easier to correlate a misbehaving circuit with the tick and
register at fault. Per-tick output is DEBUG so it stays silent unless a
caller turns it on::

    logging.getLogger("sigprelude.simulation").setLevel(logging.DEBUG)
"""

import logging
from collections.abc import Mapping
from typing import Any

from sigprelude.config import SIMULATION_LOGGER_NAME
from sigprelude.prelude_types import Tick

log = logging.getLogger(SIMULATION_LOGGER_NAME)


class SimulationLogger:
    """Structured logging for tick-by-tick signal evaluation."""

    @staticmethod
    def log_graph_summary(node_counts: Mapping[str, int], order_length: int) -> None:
        """Log the shape of a graph once it has been scheduled.

        Args:
            node_counts: Dict mapping node kind → number of nodes
            order_length: Number of nodes in the combinational schedule
        """
        kinds = ", ".join(f"{kind}={count}" for kind, count in sorted(node_counts.items()))
        log.debug(f"Scheduled {order_length} signals ({kinds})")

    @staticmethod
    def log_tick(tick: Tick, outputs: Mapping[str, Any]) -> None:
        """Log the observed output values for one tick.

        Args:
            tick: Tick that was just evaluated
            outputs: Dict mapping output name → value
        """
        if not log.isEnabledFor(logging.DEBUG):
            return
        values = " ".join(f"{name}={value}" for name, value in outputs.items())
        log.debug(f"[Tick {tick:5d}] {values}")

    @staticmethod
    def log_register_update(tick: Tick, name: str, old: Any, new: Any) -> None:
        """Log a register taking its next-state value.

        Args:
            tick: Tick whose input is being latched
            name: Register signal name
            old: Value held during ``tick``
            new: Value it will hold during ``tick + 1``
        """
        if log.isEnabledFor(logging.DEBUG) and old != new:
            log.debug(f"[Tick {tick:5d}] REG {name}: {old} → {new}")

    @staticmethod
    def log_run_summary(ticks: Tick, stopped_by: str) -> None:
        """Log how a multi-tick run ended.

        Args:
            ticks: Number of ticks evaluated by the run
            stopped_by: Reason the run stopped ("tick limit", "predicate", ...)
        """
        log.info(f"Simulation ran {ticks} ticks, stopped by {stopped_by}")
