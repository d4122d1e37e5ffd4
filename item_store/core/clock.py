"""Timestamps assigned by the service, never by callers."""

from datetime import datetime, timezone


def utc_now() -> str:
    """ISO-8601 UTC with microseconds, e.g. 2025-02-17T10:00:00.000000+00:00.

    Fixed width, so comparing two stamps as strings compares them as times.
    """
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")
