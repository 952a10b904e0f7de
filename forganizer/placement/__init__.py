"""
Placement module for the file organizer.

Provides:
- Content comparison by digest
- Collision-free name allocation
- The per-file skip / merge / move decision
"""

from .compare import file_digest, same_contents
from .names import split_name, numbered_name, unique_name
from .policy import (
    Skip,
    Merge,
    MoveTo,
    PlacementDecision,
    decide,
    month_bucket,
)

__all__ = [
    "file_digest",
    "same_contents",
    "split_name",
    "numbered_name",
    "unique_name",
    "Skip",
    "Merge",
    "MoveTo",
    "PlacementDecision",
    "decide",
    "month_bucket",
]
