"""
Decision execution for the file organizer.

Applies placement decisions to the filesystem and drives a whole run.
"""

import errno
import os
import shutil
import stat
import tempfile
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from .config import Options
from .metadata import ExifSession, effective_timestamp
from .placement import Merge, MoveTo, PlacementDecision, Skip, decide, file_digest
from .report import Reporter, RunReport
from .scanner import FileEntry, walk_tree


def _ensure_directory(target_dir: Path, source_dir: Path) -> None:
    """Create target_dir and any missing parents with source_dir's permission bits."""
    if target_dir.is_dir():
        return

    mode = stat.S_IMODE(os.stat(source_dir).st_mode)

    missing = []
    current = target_dir
    while not current.exists():
        missing.append(current)
        current = current.parent

    for directory in reversed(missing):
        directory.mkdir(mode=mode, exist_ok=True)


def _move_across_devices(source: Path, target: Path, hash_algorithm: str) -> None:
    """
    Copy source next to target, verify it, put it in place, then drop source.

    On failure the partial copy is removed and source is left where it was.
    """
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".part")
    os.close(fd)
    tmp = Path(tmp_name)
    placed = False

    try:
        shutil.copy2(source, tmp)
        if file_digest(source, hash_algorithm) != file_digest(tmp, hash_algorithm):
            raise OSError(errno.EIO, f"copy of {source} does not match the original")
        os.rename(tmp, target)
        placed = True
        os.unlink(source)
    except BaseException:
        if placed:
            target.unlink(missing_ok=True)
        else:
            tmp.unlink(missing_ok=True)
        raise


def move_file(source: Path, target: Path, hash_algorithm: str) -> None:
    """
    Move a file, falling back to copy + verify + delete across filesystems.

    Raises:
        FileExistsError: If something already sits at target.
        OSError: On any other failure; source is untouched in that case.
    """
    if os.path.lexists(target):
        raise FileExistsError(errno.EEXIST, "Destination exists", str(target))
    try:
        os.rename(source, target)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        _move_across_devices(source, target, hash_algorithm)


def apply_decision(
    entry: FileEntry,
    decision: PlacementDecision,
    options: Options,
    reporter: Reporter
) -> bool:
    """
    Carry out (or, in dry-run mode, only report) one decision.

    Args:
        entry: The source file.
        decision: What decide() returned for it.
        options: Run options; dry_run disables every filesystem change.
        reporter: Receives the outcome line.

    Returns:
        True if the decision was applied (or would have been), False on error.
    """
    dry_run = options.dry_run

    if isinstance(decision, Skip):
        reporter.skipped(entry.path, decision.reason, decided=True)
        return True

    if isinstance(decision, Merge):
        if not dry_run:
            try:
                os.unlink(entry.path)
            except OSError as e:
                reporter.error(f"error removing {entry.path}: {e}")
                return False
        reporter.report.merged += 1
        action = "source would be removed" if dry_run else "source removed"
        reporter.outcome(f"-> {decision.target}: same contents, {action}", "green")
        return True

    if isinstance(decision, MoveTo):
        target = decision.target
        if not dry_run:
            try:
                _ensure_directory(target.parent, entry.path.parent)
            except OSError as e:
                reporter.error(f"error creating target directory {target.parent}: {e}")
                return False
            try:
                move_file(entry.path, target, options.hash_algorithm)
            except OSError as e:
                reporter.error(f"error moving {entry.path} -> {target}: {e}")
                return False

        action = "would be moved" if dry_run else "moved"
        if decision.renamed:
            reporter.report.renamed += 1
            reporter.outcome(f"-> different file exists, moving to -> {target}: {action}", "yellow")
        else:
            reporter.report.moved += 1
            reporter.outcome(f"-> {target}: {action}", "green")
        return True

    raise TypeError(f"Unknown placement decision: {decision!r}")


def organize(
    src: Path,
    dst: Path,
    options: Options,
    session: ExifSession | None = None,
    reporter: Reporter | None = None,
    now: datetime | None = None
) -> RunReport:
    """
    Organize src into dst/YYYY/MM.

    Args:
        src: Source directory.
        dst: Destination root.
        options: Run options.
        session: Open EXIF session. When None and options.use_exif is set,
            one is opened for the duration of the run.
        reporter: Output sink; defaults to the global console.
        now: Reference time for the age filter.

    Returns:
        The RunReport with per-disposition counters.

    Raises:
        SourceDirectoryError: If src cannot be opened.
    """
    if session is None and options.use_exif:
        with ExifSession() as owned:
            return organize(src, dst, options, owned, reporter, now)

    reporter = reporter or Reporter()
    dst = Path(dst)

    for entry in walk_tree(Path(src), options, reporter, now):
        reporter.file(entry.path)

        timestamp = effective_timestamp(entry.path, entry.timestamp, session, on_error=reporter.warning)
        if timestamp != entry.timestamp:
            entry = replace(entry, timestamp=timestamp)

        decision = decide(entry, dst, options.hash_algorithm, on_error=reporter.warning)
        apply_decision(entry, decision, options, reporter)

    return reporter.report
