from datetime import timedelta

import pytest

from pvsadm.helpers import (
    contains,
    ensure_prerequisites_are_set,
    format_memory,
    format_processor,
    poll_until,
    spinner_poll_until,
)


def test_format_processor_and_memory():
    assert format_processor(0.25) == "0.25"
    assert format_memory(4.0) == "4"
    assert format_memory(3) == "3"


def test_contains():
    assert contains(["a", "b"], "b") is True
    assert contains(["a", "b"], "c") is False
    assert contains([], "a") is False


def test_prerequisites_missing_api_key():
    with pytest.raises(ValueError, match="api-key can't be empty"):
        ensure_prerequisites_are_set("", "id", "")


def test_prerequisites_missing_workspace():
    with pytest.raises(ValueError, match="--workspace-id or --workspace-name required"):
        ensure_prerequisites_are_set("placeholder", "", "")


def test_prerequisites_satisfied():
    assert ensure_prerequisites_are_set("placeholder", "", "name") is None
    assert ensure_prerequisites_are_set("placeholder", "id", "") is None


def test_poll_until_returns_when_done():
    calls = []

    def condition():
        calls.append(1)
        return len(calls) == 3

    assert poll_until(0.01, 5, condition) is None
    assert len(calls) == 3


def test_poll_until_times_out():
    with pytest.raises(TimeoutError, match="timed out while waiting for job to complete"):
        poll_until(0.01, timedelta(seconds=0.05), lambda: False)


def test_poll_until_propagates_error():
    def condition():
        raise OSError("boom")

    with pytest.raises(OSError, match="boom"):
        poll_until(0.01, 5, condition)


def test_spinner_poll_until_done():
    calls = []

    def condition():
        calls.append(1)
        return "working", len(calls) >= 3

    assert spinner_poll_until(0.01, 5, condition) is None
    assert len(calls) == 3


def test_spinner_poll_until_initial_failure():
    def condition():
        raise OSError("unreachable")

    with pytest.raises(RuntimeError, match="initial condition check failed: unreachable"):
        spinner_poll_until(0.01, 5, condition)


def test_spinner_poll_until_times_out():
    with pytest.raises(TimeoutError, match="timed out while waiting for job to complete"):
        spinner_poll_until(0.01, 0.05, lambda: ("waiting", False))


def test_spinner_poll_until_error_during_poll():
    calls = []

    def condition():
        calls.append(1)
        if len(calls) > 1:
            raise OSError("failed later")
        return "", False

    with pytest.raises(OSError, match="failed later"):
        spinner_poll_until(0.01, 5, condition)