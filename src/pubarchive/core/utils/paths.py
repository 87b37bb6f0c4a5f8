"""Path joining helpers for output locations"""

from pathlib import Path


def join_path(*segments: str | Path) -> Path | None:
    """Join segments into a platform path, or None when no segments are given."""
    if not segments:
        return None
    path = Path()
    for segment in segments:
        path = path / segment
    return path
