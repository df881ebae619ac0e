"""Version information for the tool."""

from __future__ import annotations

import platform

VERSION = "unknown"
"""Set at release time; otherwise ``unknown``."""


def get() -> str:
    """Return the tool version."""
    return VERSION


def version_line() -> str:
    """Return the line printed by the version command."""
    return f"Version: {get()}, PythonVersion: {platform.python_version()}"