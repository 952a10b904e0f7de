"""
EXIF capture dates.

A single ExifSession is opened per run and handed to whoever needs capture
dates; it is closed when the run ends. Field values are wrapped in
MetadataValue so the date parser sees one text form regardless of whether
the tag was stored as text, an integer or a rational.
"""

import math
import numbers
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Callable

from PIL import Image, UnidentifiedImageError
from PIL.ExifTags import TAGS

from .errors import MetadataError

# Pointer to the Exif sub-IFD, where DateTimeOriginal/DateTimeDigitized live
EXIF_IFD_POINTER = 0x8769

EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"

# Tried in order; the first one present wins. CreateDate and ModifyDate are
# the exiftool names of DateTimeDigitized and DateTime; Pillow never emits
# them, they are matched when fields come from an exiftool-style extractor.
CAPTURE_TIME_FIELDS = (
    "DateTimeOriginal",
    "CreateDate",
    "DateTimeDigitized",
    "ModifyDate",
    "DateTime",
)


class ValueKind(Enum):
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"


@dataclass(frozen=True)
class MetadataValue:
    """A metadata field value tagged with its kind."""
    kind: ValueKind
    value: str | int | float

    @classmethod
    def text(cls, value: str) -> "MetadataValue":
        return cls(ValueKind.TEXT, value)

    @classmethod
    def integer(cls, value: int) -> "MetadataValue":
        return cls(ValueKind.INTEGER, int(value))

    @classmethod
    def real(cls, value: float) -> "MetadataValue":
        return cls(ValueKind.FLOAT, float(value))

    @classmethod
    def from_raw(cls, raw) -> "MetadataValue":
        """
        Wrap a value as returned by Pillow.

        Integers stay integers, rationals and floats become floats, bytes are
        decoded, and anything else (tuples, nested IFDs) is kept as its text.
        """
        if isinstance(raw, bool):
            return cls.integer(int(raw))
        if isinstance(raw, numbers.Integral):
            return cls.integer(raw)
        if isinstance(raw, numbers.Real):
            return cls.real(float(raw))
        if isinstance(raw, bytes):
            return cls.text(raw.decode("latin-1").rstrip("\x00"))
        if isinstance(raw, str):
            return cls.text(raw.rstrip("\x00"))
        return cls.text(str(raw))

    def stringify(self) -> str:
        """
        Render the value as text.

        Integers in base 10, floats as the shortest decimal that round-trips
        (never in exponent notation), text unchanged.
        """
        if self.kind is ValueKind.INTEGER:
            return str(self.value)
        if self.kind is ValueKind.FLOAT:
            return format_float(self.value)
        return self.value


def format_float(value: float) -> str:
    """Shortest round-trip decimal, without exponent: 1e20 -> '100000000000000000000'."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


class ExifSession:
    """
    Scoped EXIF reader.

    Usage:
        with ExifSession() as session:
            fields = session.extract(path)
    """

    def __init__(self):
        self._open = False

    def open(self) -> "ExifSession":
        self._open = True
        return self

    def close(self) -> None:
        self._open = False

    @property
    def closed(self) -> bool:
        return not self._open

    def __enter__(self) -> "ExifSession":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def extract(self, path: Path) -> dict[str, MetadataValue]:
        """
        Read all EXIF fields of an image.

        Args:
            path: Image file.

        Returns:
            Mapping of tag name to value. Tags from the base IFD and the Exif
            sub-IFD are merged; unknown tags are keyed by their numeric id.

        Raises:
            MetadataError: If the session is closed or the file cannot be read.
        """
        if self.closed:
            raise MetadataError("EXIF session is closed")

        try:
            with Image.open(path) as img:
                exif = img.getexif()
                fields: dict[str, MetadataValue] = {}
                for tag_id, raw in exif.items():
                    if tag_id == EXIF_IFD_POINTER:
                        continue
                    fields[str(TAGS.get(tag_id, tag_id))] = MetadataValue.from_raw(raw)
                for tag_id, raw in exif.get_ifd(EXIF_IFD_POINTER).items():
                    fields[str(TAGS.get(tag_id, tag_id))] = MetadataValue.from_raw(raw)
                return fields
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise MetadataError(f"cannot read EXIF from {path}: {e}") from e


def capture_time(fields: dict[str, MetadataValue]) -> datetime:
    """
    Pick the original capture time out of EXIF fields.

    Raises:
        MetadataError: If no date field is present or the first one found
            does not parse.
    """
    for name in CAPTURE_TIME_FIELDS:
        value = fields.get(name)
        if value is not None:
            break
    else:
        raise MetadataError("No EXIF date found")

    date_str = value.stringify()[:19]
    try:
        return datetime.strptime(date_str, EXIF_DATE_FORMAT)
    except ValueError:
        raise MetadataError(f"Error parsing time {date_str!r}") from None


def effective_timestamp(
    path: Path,
    mtime: datetime,
    session: ExifSession | None,
    on_error: Callable[[str], None] | None = None
) -> datetime:
    """
    Return the EXIF capture time of a file, or its mtime.

    Without a session the mtime is returned as is. Extraction failures are
    passed to on_error and fall back to the mtime.
    """
    if session is None:
        return mtime
    try:
        return capture_time(session.extract(path))
    except MetadataError as e:
        if on_error:
            on_error(f"Exif error: {e}")
        return mtime
