"""
Progress reporting for an organize run.

Reporter prints one line per event to a rich console and keeps the counters
that end up in the run summary.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .utils import console as default_console


@dataclass
class RunReport:
    """Counters for a finished (or dry) run."""
    directories: int = 0
    moved: int = 0
    renamed: int = 0
    merged: int = 0
    skipped: int = 0
    too_new: int = 0
    errors: int = 0
    error_messages: list[str] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return self.moved + self.renamed + self.merged + self.skipped


class Reporter:
    """Writes progress lines and collects a RunReport."""

    def __init__(self, console: Console | None = None):
        self.console = console or default_console
        self.report = RunReport()

    def _line(self, text: str, style: str | None = None):
        text = escape(text)
        if style:
            text = f"[{style}]{text}[/{style}]"
        self.console.print(text, soft_wrap=True)

    def directory(self, path: Path):
        self.report.directories += 1
        self._line(f"Processing directory: {path}", "bold cyan")

    def too_new(self, path: Path, mtime: datetime):
        self.report.too_new += 1
        self._line(f"  Skipping file {path.name}: is too new {mtime.isoformat(sep=' ', timespec='seconds')}", "dim")

    def skipped(self, path: Path, reason: str, decided: bool = False):
        """Count a skipped entry. decided marks a placement outcome for the current file."""
        self.report.skipped += 1
        if decided:
            self.outcome(f"-> {reason}, skipping", "dim")
        else:
            self._line(f"  Skipping {path.name}: {reason}", "dim")

    def file(self, path: Path):
        self._line(f"  Processing file: {path.name}")

    def outcome(self, text: str, style: str | None = None):
        self._line(f"    {text}", style)

    def warning(self, msg: str):
        self._line(f"    [WARN] {msg}", "yellow")

    def error(self, msg: str):
        self.report.errors += 1
        self.report.error_messages.append(msg)
        self._line(f"    [ERROR] {msg}", "red")
