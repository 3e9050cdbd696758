"""
Exceptions raised by mc_extract

All fatal errors derive from ExtractError so callers can catch a single type.
Recoverable per-item failures during hashed extraction are logged and
collected instead of raised.
"""

from pathlib import Path
from typing import Optional


class ExtractError(Exception):
    """Base exception for extraction failures."""
    pass


class InvalidOutputDirectory(ExtractError):
    """Raised when the output directory does not exist or is not a directory."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"'{path}' does not exist or is not a directory")


class MissingInputDirectory(ExtractError):
    """Raised when no hashed assets directory could be found."""

    def __init__(self, path: Optional[Path] = None):
        self.path = path
        if path is None:
            message = "No input directory found"
        else:
            message = f"No input directory found at {path}"
        super().__init__(message)


class MissingIndexFile(ExtractError):
    """Raised when an index file could not be located."""

    def __init__(self, path: Path, message: Optional[str] = None):
        self.path = path
        super().__init__(message or f"No index file found at {path}")


class IndexParseError(ExtractError):
    """Raised when an index file is not valid JSON or does not match the index schema."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse index file {path}: {reason}")


class ManifestError(ExtractError):
    """Raised when a version manifest is missing or unusable."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read manifest {path}: {reason}")


class InvalidVersion(ExtractError):
    """Raised when a version specifier matches no version directory."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(
            f"invalid version '{version}': no directory exists of that path "
            f"or name within `minecraft/versions`"
        )


class ArchiveError(ExtractError):
    """Raised when a jar/zip container cannot be read or extracted."""

    def __init__(self, path: Path, reason: str, entry: Optional[str] = None):
        self.path = path
        self.reason = reason
        self.entry = entry
        if entry is None:
            message = f"Failed to extract {path}: {reason}"
        else:
            message = f"Failed to extract '{entry}' from {path}: {reason}"
        super().__init__(message)
