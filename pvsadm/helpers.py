"""Small helpers shared by the commands."""

from __future__ import annotations

import itertools
import sys
import threading
import time
from collections.abc import Callable, Iterable
from datetime import timedelta
from typing import IO

from .table import format_value

_TIMEOUT_MESSAGE = "timed out while waiting for job to complete"
_SPINNER_FRAMES = "⣾⣽⣻⢿⡿⣟⣯⣷"
_CYAN = "\033[36m"
_RESET = "\033[0m"


def format_processor(proc: float) -> str:
    """Return the processor count in its shortest decimal form."""
    return format_value(float(proc))


def format_memory(memory: float) -> str:
    """Return the memory size in its shortest decimal form."""
    return format_value(float(memory))


def contains(items: Iterable[str], element: str) -> bool:
    return element in items


def ensure_prerequisites_are_set(api_key: str, workspace_id: str, workspace_name: str) -> None:
    """Raise ValueError unless an API key and a workspace id or name are set."""
    if not api_key:
        raise ValueError(
            "api-key can't be empty, pass the token via --api-key or set "
            "IBMCLOUD_APIKEY environment variable"
        )
    if not workspace_id and not workspace_name:
        raise ValueError("--workspace-id or --workspace-name required")


def _seconds(value: float | timedelta) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


def poll_until(
    poll_interval: float | timedelta,
    timeout: float | timedelta,
    condition: Callable[[], bool],
) -> None:
    """Call ``condition`` every interval until it returns True.

    Raises TimeoutError when ``timeout`` passes first; exceptions from
    ``condition`` propagate.
    """
    interval = _seconds(poll_interval)
    start = time.monotonic()
    deadline = start + _seconds(timeout)
    next_poll = start + interval
    while True:
        if deadline <= next_poll:
            time.sleep(max(0.0, deadline - time.monotonic()))
            raise TimeoutError(_TIMEOUT_MESSAGE)
        time.sleep(max(0.0, next_poll - time.monotonic()))
        if condition():
            return
        next_poll += interval


def _format_elapsed(seconds: float) -> str:
    total = int(round(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"


class _Spinner:
    def __init__(self, stream: IO[str], delay: float = 0.1) -> None:
        self.suffix = ""
        self._stream = stream
        self._delay = delay
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)
        isatty = getattr(stream, "isatty", None)
        self._color = bool(isatty and isatty())
        self._width = 0

    def _run(self) -> None:
        for frame in itertools.cycle(_SPINNER_FRAMES):
            if self._stop.is_set():
                return
            shown = f"{_CYAN}{frame}{_RESET}" if self._color else frame
            line = f"{frame}{self.suffix}"
            padding = " " * max(0, self._width - len(line))
            self._width = len(line)
            self._stream.write(f"\r{shown}{self.suffix}{padding}")
            self._stream.flush()
            self._stop.wait(self._delay)

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        self._thread.join()
        self._stream.write("\r" + " " * self._width + "\r")
        self._stream.flush()


def spinner_poll_until(
    poll_interval: float | timedelta,
    timeout: float | timedelta,
    condition: Callable[[], tuple[str, bool]],
) -> None:
    """Like :func:`poll_until`, showing a spinner with the latest message.

    ``condition`` returns ``(message, done)``. A failure of the first,
    immediate check is raised as RuntimeError.
    """
    interval = _seconds(poll_interval)
    start = time.monotonic()
    deadline = start + _seconds(timeout)
    try:
        condition()
    except Exception as err:
        raise RuntimeError(f"initial condition check failed: {err}") from err

    spinner = _Spinner(sys.stderr)
    spinner.start()
    message = ""
    next_poll = start + interval
    next_tick = start + 1.0
    try:
        while True:
            when, _, event = min(
                (deadline, 0, "timeout"),
                (next_poll, 1, "poll"),
                (next_tick, 2, "tick"),
            )
            time.sleep(max(0.0, when - time.monotonic()))
            if event == "timeout":
                raise TimeoutError(_TIMEOUT_MESSAGE)
            if event == "tick":
                elapsed = _format_elapsed(time.monotonic() - start)
                spinner.suffix = f" {message} (Time elapsed: {elapsed})"
                next_tick += 1.0
                continue
            message, done = condition()
            if done:
                return
            next_poll += interval
    finally:
        spinner.stop()