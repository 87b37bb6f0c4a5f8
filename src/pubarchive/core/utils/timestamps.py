"""Filesystem timestamp normalization"""

from datetime import datetime, timezone
from pathlib import Path


def to_datetime(timestamp: float) -> datetime:
    """Convert a POSIX timestamp into a naive UTC datetime (sub-second precision kept)."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).replace(tzinfo=None)


def modified_at(path: Path) -> datetime:
    """Return the file's modification time as a naive UTC datetime."""
    return to_datetime(path.stat().st_mtime)
