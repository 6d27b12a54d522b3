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

"""Tests for the exception hierarchy."""

import pytest

from sigprelude.exceptions import (
    CombinationalLoopError,
    LengthMismatchError,
    PreludeError,
    RangeError,
    SignalGraphError,
    WidthMismatchError,
)


def test_context_is_rendered():
    err = RangeError("index out of range", value=7, bound=5)
    assert err.context == {"value": 7, "bound": 5}
    assert "value: 7" in str(err)
    assert "bound: 5" in str(err)


def test_builtin_categories():
    assert issubclass(WidthMismatchError, TypeError)
    assert issubclass(LengthMismatchError, TypeError)
    assert issubclass(RangeError, ValueError)
    assert issubclass(CombinationalLoopError, SignalGraphError)


def test_cycle_path():
    err = CombinationalLoopError("loop", cycle=["w", "y", "w"])
    assert err.cycle == ["w", "y", "w"]
    assert "w -> y -> w" in str(err)


def test_single_handler_catches_everything():
    with pytest.raises(PreludeError):
        raise WidthMismatchError("bad", expected=8, actual=4)
