"""Shared persistence utilities."""

from pathlib import Path


def atomic_write_text(path: Path, content: str) -> None:
    """Write text to a file atomically.

    Writes to a temporary file first, then renames to the target path.
    This prevents data corruption if the process crashes mid-write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(content, encoding="utf-8")
    tmp_path.replace(path)
