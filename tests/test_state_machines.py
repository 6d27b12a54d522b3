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

"""Tests for the Mealy and Moore combinators."""

import pytest

from sigprelude.signals import external, mealy, moore, sample, simulate
from sigprelude.sized import Unsigned


def _count(count, _tick):
    return count + 1, count


class TestMealy:
    @pytest.mark.parametrize("inputs", [[0, 0, 0, 0, 0], [9, 3, 7, 1, 4]])
    def test_counter_ignores_input_values(self, inputs):
        outputs = simulate(lambda inp: mealy(_count, Unsigned[8](0), inp), inputs)
        assert outputs == [0, 1, 2, 3, 4]
        assert all(type(v) is Unsigned[8] for v in outputs)

    def test_output_reacts_to_same_tick_input(self):
        def accumulate(total, x):
            return total + x, total + x

        outputs = simulate(lambda inp: mealy(accumulate, 0, inp), [1, 2, 3])
        assert outputs == [1, 3, 6]

    def test_tuple_inputs(self):
        def add_pair(total, pair):
            a, b = pair
            return total + a + b, total

        machine = mealy(add_pair, 0, (external("a"), external("b")))
        assert sample(machine, 3, {"a": [1, 1, 1], "b": [10, 20, 30]}) == [0, 11, 32]

    def test_state_wraps(self):
        outputs = simulate(lambda inp: mealy(_count, Unsigned[2](2), inp), [0] * 4)
        assert outputs == [2, 3, 0, 1]


class TestMoore:
    def test_counter(self):
        outputs = simulate(
            lambda inp: moore(lambda n, _: n + 1, lambda n: n, Unsigned[8](0), inp),
            [0, 0, 0, 0, 0],
        )
        assert outputs == [0, 1, 2, 3, 4]

    def test_output_independent_of_same_tick_input(self):
        def circuit(inp):
            return moore(lambda total, x: total + x, lambda total: total, 0, inp)

        base = simulate(circuit, [1, 2, 3, 4, 5])
        varied_last = simulate(circuit, [1, 2, 3, 4, 500])
        assert base == varied_last == [0, 1, 3, 6, 10]

    def test_one_stage_behind_mealy(self):
        def step(total, x):
            return total + x

        values = [1, 2, 3, 4]
        as_moore = simulate(lambda inp: moore(step, lambda s: s, 0, inp), values)
        as_mealy = simulate(lambda inp: mealy(lambda s, x: (step(s, x), step(s, x)), 0, inp), values)
        assert as_moore[1:] == as_mealy[:-1]

    def test_output_function_applied(self):
        outputs = simulate(
            lambda inp: moore(lambda n, _: n + 1, lambda n: n * 10, 0, inp),
            [None] * 3,
        )
        assert outputs == [0, 10, 20]
