"""Time helpers."""

from datetime import datetime, timezone


def utcnow():
    """Current UTC time as a naive datetime (the form stored in the DB)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
