"""
Content comparison by digest.
"""

import hashlib
import os
from pathlib import Path
from typing import Callable

from ..config import DEFAULT_HASH_ALGORITHM

CHUNK_SIZE = 65536


def file_digest(path: Path, algorithm: str = DEFAULT_HASH_ALGORITHM) -> str:
    """
    Hash the full content of a file.

    Raises:
        OSError: If the file cannot be read.
    """
    hasher = hashlib.new(algorithm)
    with open(path, "rb") as f:
        while chunk := f.read(CHUNK_SIZE):
            hasher.update(chunk)
    return hasher.hexdigest()


def same_contents(
    first: Path,
    second: Path,
    algorithm: str = DEFAULT_HASH_ALGORITHM,
    on_error: Callable[[str], None] | None = None
) -> bool:
    """
    Check whether two files hold the same bytes.

    Files of different size are never equal. Otherwise equal digests are
    taken to mean equal content. A read error on either side counts as
    "different", which sends the caller down the rename path instead of
    deleting anything.

    Args:
        first: First file.
        second: Second file.
        algorithm: hashlib algorithm name.
        on_error: Called with a message when either file cannot be read.
    """
    try:
        if os.path.getsize(first) != os.path.getsize(second):
            return False
        return file_digest(first, algorithm) == file_digest(second, algorithm)
    except OSError as e:
        if on_error:
            on_error(f"cannot compare {first} with {second}: {e}")
        return False
