"""
Source tree walking.

Directories are processed from an explicit work queue: the files of a
directory first, then its subdirectories in the order they were found.
Symbolic links are never followed, so a link pointing back up the tree
cannot make the walk loop.
"""

import os
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterator

from .config import Options
from .errors import SourceDirectoryError
from .report import Reporter


@dataclass(frozen=True)
class FileEntry:
    """Snapshot of a source file taken when the walk reached it."""
    path: Path
    timestamp: datetime
    device: int
    inode: int
    size: int

    @property
    def name(self) -> str:
        return self.path.name

    @classmethod
    def from_stat(cls, path: Path, st: os.stat_result) -> "FileEntry":
        return cls(
            path=path,
            timestamp=datetime.fromtimestamp(st.st_mtime),
            device=st.st_dev,
            inode=st.st_ino,
            size=st.st_size,
        )

    def is_same_file(self, st: os.stat_result) -> bool:
        """True if st describes the same stored file (device and inode)."""
        return (self.device, self.inode) == (st.st_dev, st.st_ino)


def _list_directory(directory: Path) -> list[os.DirEntry]:
    with os.scandir(directory) as it:
        return list(it)


def walk_tree(
    root: Path,
    options: Options,
    reporter: Reporter | None = None,
    now: datetime | None = None
) -> Iterator[FileEntry]:
    """
    Yield every regular file under root that is old enough to be organized.

    Args:
        root: Source directory.
        options: Run options (recursive, days_older are used).
        reporter: Receives directory / skip / error events.
        now: Reference time for the age filter (defaults to the current time).

    Yields:
        FileEntry for each file whose mtime is not newer than now - days_older.

    Raises:
        SourceDirectoryError: If root itself cannot be listed.
    """
    reporter = reporter or Reporter()
    root = Path(root)
    keep_after = (now or datetime.now()) - timedelta(days=options.days_older)

    pending = deque([root])
    while pending:
        directory = pending.popleft()
        reporter.directory(directory)

        try:
            entries = _list_directory(directory)
        except OSError as e:
            if directory == root:
                raise SourceDirectoryError(root, e) from e
            # Abandon this subtree only
            reporter.error(f"Error listing directory {directory}: {e}")
            continue

        for entry in entries:
            path = Path(entry.path)
            try:
                if entry.is_symlink():
                    reporter.skipped(path, "symbolic link, not followed")
                    continue
                if entry.is_dir(follow_symlinks=False):
                    if options.recursive:
                        pending.append(path)
                    continue
                if not entry.is_file(follow_symlinks=False):
                    reporter.skipped(path, "not a regular file")
                    continue
                st = entry.stat(follow_symlinks=False)
            except OSError as e:
                reporter.error(f"Error reading {path}: {e}")
                continue

            mtime = datetime.fromtimestamp(st.st_mtime)
            if mtime > keep_after:
                reporter.too_new(path, mtime)
                continue

            yield FileEntry.from_stat(path, st)
