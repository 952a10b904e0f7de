"""
Exceptions raised by the file organizer.
"""


class OrganizerError(Exception):
    """Base class for all organizer errors."""


class SourceDirectoryError(OrganizerError):
    """The source root cannot be opened. Fatal for the whole run."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Error accessing directory {path}: {reason}")


class MetadataError(OrganizerError):
    """EXIF metadata could not be read or holds no usable date."""
