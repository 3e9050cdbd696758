"""
Utility functions for asset extraction
"""

import os
import sys
from pathlib import Path
from typing import Tuple

from mc_extract import constants


# Status symbols used in terminal output (set by setup_symbols)
SYMBOL_CHECK = constants.STATUS_CHECK[1]
SYMBOL_ERROR = constants.STATUS_ERROR[1]
SYMBOL_WARNING = constants.STATUS_WARNING[1]


def detect_unicode_support(force_ascii=False, stream=None):
    """
    Check whether the status symbols can be written to a stream.

    Args:
        force_ascii: If True, report no Unicode support
        stream: Output stream to check (default: sys.stdout)

    Returns:
        True if every Unicode status symbol encodes in the stream's encoding
    """
    if force_ascii:
        return False
    if os.environ.get(constants.ENV_FORCE_ASCII, '').lower() in ('1', 'true', 'yes'):
        return False

    encoding = getattr(stream or sys.stdout, "encoding", None)
    if not encoding:
        return False

    symbols = constants.STATUS_CHECK[0] + constants.STATUS_ERROR[0] + constants.STATUS_WARNING[0]
    try:
        symbols.encode(encoding)
    except (UnicodeEncodeError, LookupError):
        return False
    return True


def setup_symbols(force_ascii=False, stream=None):
    """Pick Unicode or ASCII status symbols for the output stream."""
    global SYMBOL_CHECK, SYMBOL_ERROR, SYMBOL_WARNING

    choice = 0 if detect_unicode_support(force_ascii, stream) else 1
    SYMBOL_CHECK = constants.STATUS_CHECK[choice]
    SYMBOL_ERROR = constants.STATUS_ERROR[choice]
    SYMBOL_WARNING = constants.STATUS_WARNING[choice]


def bucket(object_hash: str) -> str:
    """
    Return the bucket folder name for a hashed object.

    The object store groups files into folders named after the
    first two characters of their hash.

    Args:
        object_hash: Hex hash of the object

    Returns:
        Bucket folder name (e.g., "ab" for "ab12cd...")
    """
    return object_hash[:constants.BUCKET_LENGTH]


def object_path(object_hash: str) -> str:
    """
    Convert an object hash to its path inside the `objects/` folder.

    Args:
        object_hash: Hex hash of the object

    Returns:
        Path in object store format (e.g., "ab/ab12cd34...")
    """
    return f"{bucket(object_hash)}/{object_hash}"


def get_readable_size(size_bytes: int) -> Tuple[float, str]:
    """
    Convert bytes to human-readable size.

    Args:
        size_bytes: Size in bytes

    Returns:
        Tuple of (size value, unit string)
    """
    power = 1024
    n = 0
    labels = {0: "B", 1: "KB", 2: "MB", 3: "GB", 4: "TB"}

    size = float(size_bytes)
    while size > power and n < 4:
        size /= power
        n += 1

    return round(size, 2), labels[n]


def format_size(size_bytes: int) -> str:
    """Format bytes as human-readable string (e.g., "1.5 GB")."""
    size, unit = get_readable_size(size_bytes)
    return f"{size} {unit}"


def ensure_directory(path: Path) -> None:
    """Ensure directory exists, creating it and any parents if necessary."""
    Path(path).mkdir(parents=True, exist_ok=True)


def is_within(root: Path, path: Path) -> bool:
    """
    Check whether `path` stays inside `root` once both are resolved.

    Args:
        root: Directory that must contain the path
        path: Candidate path

    Returns:
        True if path is root itself or lies below it
    """
    root = Path(root).resolve()
    try:
        Path(path).resolve().relative_to(root)
    except ValueError:
        return False
    return True
