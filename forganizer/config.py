"""
Run options for the file organizer.

Defaults can be overridden through environment variables (or a .env file):

    FORGANIZER_DAYS       minimum age in days (int)
    FORGANIZER_RECURSIVE  recurse into subdirectories (1/true/yes)
    FORGANIZER_EXIF       read capture dates from EXIF (1/true/yes)
    FORGANIZER_HASH       hashlib algorithm used to compare contents
"""

import hashlib
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_HASH_ALGORITHM = "md5"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Options:
    """Read-only options for a single run."""
    recursive: bool = False
    dry_run: bool = False
    days_older: int = 0
    use_exif: bool = False
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM

    def __post_init__(self):
        if self.days_older < 0:
            raise ValueError(f"days_older must not be negative: {self.days_older}")
        if not usable_hash_algorithm(self.hash_algorithm):
            raise ValueError(f"Unsupported hash algorithm: {self.hash_algorithm}")


def usable_hash_algorithm(name: str) -> bool:
    """
    True if hashlib can build name and produce a fixed-size hex digest.

    Listed names can still fail: shake_* needs a digest length, and some
    OpenSSL names are missing without the legacy provider.
    """
    if name not in hashlib.algorithms_available:
        return False
    try:
        hashlib.new(name).hexdigest()
    except (ValueError, TypeError):
        return False
    return True


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        print(f"[WARN] Ignoring {name}={value!r}: not an integer")
        return default


def load_env_defaults() -> dict:
    """
    Read option defaults from the environment.

    A .env file in the working directory is loaded first; variables already
    set in the environment win.

    Returns:
        Dict with keys recursive, use_exif, days_older and hash_algorithm.
    """
    load_dotenv()
    return {
        "recursive": _env_flag("FORGANIZER_RECURSIVE"),
        "use_exif": _env_flag("FORGANIZER_EXIF"),
        "days_older": _env_int("FORGANIZER_DAYS", 0),
        "hash_algorithm": os.environ.get("FORGANIZER_HASH", "").strip() or DEFAULT_HASH_ALGORITHM,
    }
