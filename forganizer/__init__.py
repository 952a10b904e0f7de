"""
forganizer
==========

Moves files from a source tree into DST/<year>/<month>/ folders, removing
sources whose content already exists at the destination and renaming
incoming files that would collide with a different one.
"""

__version__ = "1.0.0"

from .config import Options
from .errors import OrganizerError, SourceDirectoryError, MetadataError
from .executor import organize, apply_decision, move_file
from .metadata import ExifSession, MetadataValue, capture_time
from .placement import decide, unique_name, same_contents, Skip, Merge, MoveTo
from .report import Reporter, RunReport
from .scanner import FileEntry, walk_tree

__all__ = [
    "Options",
    "OrganizerError",
    "SourceDirectoryError",
    "MetadataError",
    "organize",
    "apply_decision",
    "move_file",
    "ExifSession",
    "MetadataValue",
    "capture_time",
    "decide",
    "unique_name",
    "same_contents",
    "Skip",
    "Merge",
    "MoveTo",
    "Reporter",
    "RunReport",
    "FileEntry",
    "walk_tree",
]
