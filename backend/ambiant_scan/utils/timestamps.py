"""Timestamp formatting shared by snapshots and HTTP envelopes."""

from datetime import datetime, timezone


def iso_now() -> str:
    """Current UTC time as ``2024-05-01T12:00:00.000Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
