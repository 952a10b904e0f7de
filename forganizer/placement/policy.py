"""
Per-file placement decisions.

For a file entering the destination tree:

    no entry at DST/YYYY/MM/name     -> MoveTo(target)
    entry is the very same file      -> Skip("same file")
    entry has identical content      -> Merge(target)   (source gets deleted)
    entry has different content      -> MoveTo(DST/YYYY/MM/name_N.ext, renamed=True)

Deciding never touches the filesystem beyond stat and reads.
"""

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from ..config import DEFAULT_HASH_ALGORITHM
from ..scanner import FileEntry
from .compare import same_contents
from .names import unique_name


@dataclass(frozen=True)
class Skip:
    reason: str


@dataclass(frozen=True)
class Merge:
    """The target already holds the same content; drop the source."""
    target: Path


@dataclass(frozen=True)
class MoveTo:
    target: Path
    renamed: bool = False


PlacementDecision = Skip | Merge | MoveTo


def month_bucket(dst_root: Path, timestamp: datetime) -> Path:
    """DST/<4-digit year>/<2-digit month>."""
    return Path(dst_root) / f"{timestamp.year:04d}" / f"{timestamp.month:02d}"


def decide(
    entry: FileEntry,
    dst_root: Path,
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
    on_error: Callable[[str], None] | None = None
) -> PlacementDecision:
    """
    Decide what to do with one source file.

    Args:
        entry: The source file; its timestamp selects the month bucket.
        dst_root: Root of the destination tree.
        hash_algorithm: Digest used to compare contents.
        on_error: Receives messages for files that could not be compared.

    Returns:
        Skip, Merge or MoveTo.
    """
    target_dir = month_bucket(dst_root, entry.timestamp)
    target = target_dir / entry.name

    if not os.path.lexists(target):
        return MoveTo(target)

    try:
        target_stat = os.stat(target)
    except OSError:
        # Dangling link or unreadable entry: never overwrite it
        return MoveTo(unique_name(target_dir, entry.name), renamed=True)

    if entry.is_same_file(target_stat):
        return Skip("same file")

    if same_contents(entry.path, target, hash_algorithm, on_error=on_error):
        return Merge(target)

    return MoveTo(unique_name(target_dir, entry.name), renamed=True)
