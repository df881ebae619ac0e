"""Decide whether a resource falls inside the purge window."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

_ZERO_TIME = datetime.min.replace(tzinfo=timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def is_purgeable(candidate: datetime, before: timedelta, since: timedelta) -> bool:
    """Return True if ``candidate`` qualifies for purging.

    With neither ``before`` nor ``since`` set everything qualifies; with both
    set nothing does. Otherwise the candidate must be older than ``before``
    or newer than ``since`` (both measured back from now). Naive datetimes
    are taken as UTC.
    """
    if not before and not since:
        return True
    if before and since:
        return False

    now = datetime.now(timezone.utc)
    start = _ZERO_TIME
    end = now
    if before:
        end = now - before
    if since:
        start = now - since
    moment = _as_utc(candidate)
    return start < moment < end