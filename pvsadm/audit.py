"""Append-only JSON-lines audit log of destructive operations."""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from types import TracebackType

_log = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class AuditLog:
    """Thread-safe writer of audit entries to a file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)
        fd = os.open(self.path, os.O_APPEND | os.O_CREAT | os.O_WRONLY, 0o755)
        self._file = os.fdopen(fd, "a", encoding="utf-8")
        self._lock = threading.Lock()

    def log(self, name: str, op: str, value: str) -> None:
        """Append one entry; write failures are logged, not raised."""
        entry = {
            "name": name,
            "op": op,
            "value": value,
            "timestamp": _timestamp(),
        }
        line = json.dumps(entry) + "\n"
        with self._lock:
            try:
                self._file.write(line)
                self._file.flush()
            except (OSError, ValueError) as err:
                _log.error("log failed with error, err: %s", err)

    def close(self) -> None:
        with self._lock:
            self._file.close()

    def __enter__(self) -> AuditLog:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


@dataclass
class _Installed:
    logger: AuditLog | None = None


_installed = _Installed()


def set_logger(logger: AuditLog | None) -> AuditLog | None:
    """Install the audit log used by :func:`log`; return the one it replaces."""
    previous = _installed.logger
    _installed.logger = logger
    return previous


def log(name: str, op: str, value: str) -> None:
    """Write an entry to the installed audit log."""
    logger = _installed.logger
    if logger is None:
        raise RuntimeError("audit logger is not configured")
    logger.log(name, op, value)


def delete_if_empty(path: str | os.PathLike[str]) -> bool:
    """Remove ``path`` if it is an empty file; return whether it was removed."""
    try:
        size = os.stat(path).st_size
    except OSError as err:
        _log.error("cannot retrieve file stats, err: %s", err)
        return False
    if size == 0:
        os.remove(path)
        return True
    return False