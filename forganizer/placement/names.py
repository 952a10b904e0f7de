"""
Collision-free destination names.
"""

import os
from pathlib import Path


def split_name(filename: str) -> tuple[str, str]:
    """
    Split a filename at its last dot.

    "photo.jpg" -> ("photo", "jpg"), "archive.tar.gz" -> ("archive.tar", "gz"),
    "README" -> ("README", "").
    """
    base, dot, ext = filename.rpartition(".")
    if not dot:
        return filename, ""
    return base, ext


def numbered_name(filename: str, counter: int) -> str:
    """Return the filename with a _N suffix inserted before the extension."""
    base, ext = split_name(filename)
    if ext:
        return f"{base}_{counter}.{ext}"
    return f"{base}_{counter}"


def unique_name(directory: Path, filename: str) -> Path:
    """
    Find the first free name of the form base_N.ext inside directory.

    Every candidate is checked against the filesystem, so the result reflects
    the directory contents at call time. Not safe against concurrent writers.

    Args:
        directory: Directory the file will be placed in.
        filename: Desired filename.

    Returns:
        Path of the first candidate with no existing entry.
    """
    counter = 1
    while True:
        candidate = Path(directory) / numbered_name(filename, counter)
        # lexists so that dangling symlinks count as taken
        if not os.path.lexists(candidate):
            return candidate
        counter += 1
