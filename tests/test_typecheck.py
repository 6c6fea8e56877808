from __future__ import annotations

import pytest
from beartype.roar import BeartypeCallHintParamViolation

import dbgassert.config as config
from dbgassert import AssertionFailure, assert_, assert_deref, assert_ok
from dbgassert.typecheck import typechecked


@typechecked
def _double(x: int) -> int:
    return x * 2


def test_bad_arguments_rejected_when_enabled():
    with config.typecheck_override(True):
        with pytest.raises(BeartypeCallHintParamViolation):
            assert_("yes", "msg")  # type: ignore[arg-type]
        with pytest.raises(BeartypeCallHintParamViolation):
            assert_ok(True, 3)  # type: ignore[arg-type]


def test_bad_arguments_pass_through_when_disabled():
    with config.typecheck_override(False):
        assert_("yes", "msg")  # type: ignore[arg-type]
        with pytest.raises(AssertionFailure):
            assert_("", "msg")  # type: ignore[arg-type]


def test_failures_unchanged_when_enabled():
    with config.typecheck_override(True):
        with pytest.raises(AssertionFailure, match="parameter \\(x\\)"):
            assert_deref(None, True, "x")
        assert assert_deref(1, True, "x") == 1


def test_decorator_switches_per_call():
    with config.typecheck_override(True):
        with pytest.raises(BeartypeCallHintParamViolation):
            _double("a")  # type: ignore[arg-type]

    with config.typecheck_override(False):
        assert _double("a") == "aa"  # type: ignore[arg-type]


def test_decorator_keeps_metadata():
    assert _double.__name__ == "_double"
    assert assert_.__doc__ is not None
