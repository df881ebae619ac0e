"""Render lists of records as text tables."""

from __future__ import annotations

import dataclasses
import logging
import math
import sys
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from decimal import Decimal
from typing import IO, Any

from tabulate import tabulate

_log = logging.getLogger(__name__)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def _format_datetime(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    millis = value.microsecond // 1000
    return f"{value.strftime('%Y-%m-%dT%H:%M:%S')}.{millis:03d}Z"


def format_value(value: Any) -> str:
    """Return the table cell text for ``value``."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        return _format_datetime(value)
    if isinstance(value, (list, tuple)):
        return ",".join(format_value(item) for item in value)
    return str(value)


def _fields(record: Any) -> list[tuple[str, Any]]:
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return [(f.name, getattr(record, f.name)) for f in dataclasses.fields(record)]
    if isinstance(record, dict):
        return [(str(key), value) for key, value in record.items()]
    return [(key, value) for key, value in vars(record).items() if not key.startswith("_")]


def _header_label(key: str) -> str:
    return key.replace("_", " ").replace(".", " ").upper()


class Table:
    """Collects a header and rows and writes them as a grid."""

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._stream = stream
        self._header: list[str] | None = None
        self._rows: list[list[str]] = []

    def set_header(self, keys: Sequence[str]) -> None:
        """Set the header; only the first call has any effect."""
        if self._header is None:
            self._header = list(keys)

    def append(self, row: Sequence[str]) -> None:
        self._rows.append(list(row))

    def render(self, rows: Iterable[Any], exclude: Sequence[str]) -> str:
        """Add one row per record, skipping excluded fields, and write the table."""
        excluded = {name.lower() for name in exclude}
        no_data = True
        if not isinstance(rows, (str, bytes)):
            for record in rows:
                no_data = False
                kept = [(n, v) for n, v in _fields(record) if n.lower() not in excluded]
                self.set_header([name for name, _ in kept])
                self.append([format_value(value) for _, value in kept])
        if no_data:
            _log.info("No data found to display")
        return self.render_rows()

    def render_rows(self) -> str:
        """Write the collected header and rows; return the text written."""
        if self._header is not None:
            headers = [_header_label(key) for key in self._header]
            text = tabulate(self._rows, headers=headers, tablefmt="grid")
        else:
            text = tabulate(self._rows, tablefmt="grid")
        stream = self._stream if self._stream is not None else sys.stdout
        if text:
            stream.write(text + "\n")
            stream.flush()
        return text