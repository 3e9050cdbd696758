"""
Version directory resolution
Finds `.minecraft/versions/<name>` and reads the `<name>.json` manifest inside it
"""

import json
import logging
from pathlib import Path
from typing import Optional

from mc_extract.errors import InvalidVersion, ManifestError
from mc_extract.models import ManifestFile, VersionDirectory
from mc_extract.paths import PlatformPaths, get_platform_paths


class VersionResolver:
    """
    Resolves a version specifier to a VersionDirectory.

    The specifier is either a path to the version directory, or the name of
    a directory inside the versions root (`.minecraft/versions` by default).
    """

    def __init__(self, versions_dir: Optional[Path] = None,
                 platform_paths: Optional[PlatformPaths] = None):
        """
        Initialize the resolver.

        Args:
            versions_dir: Versions root to look names up in. Defaults to the
                platform's `.minecraft/versions`.
            platform_paths: PlatformPaths used to find the default versions root
        """
        self.logger = logging.getLogger("mc_extract.version")
        self._versions_dir = Path(versions_dir) if versions_dir is not None else None
        self._platform_paths = platform_paths

    @property
    def versions_dir(self) -> Optional[Path]:
        if self._versions_dir is not None:
            return self._versions_dir
        platform_paths = self._platform_paths or get_platform_paths()
        return platform_paths.versions_dir()

    def resolve(self, specifier: str) -> VersionDirectory:
        """
        Resolve a version specifier.

        Args:
            specifier: A version directory path, or a version name (e.g. `1.20.1`)

        Returns:
            VersionDirectory for the matching directory

        Raises:
            InvalidVersion: If no directory matches the specifier
        """
        path = Path(specifier)

        if path.is_dir():
            self.logger.debug(f"Using version directory {path}")
            return VersionDirectory(path)

        versions_dir = self.versions_dir
        if versions_dir is not None:
            candidate = versions_dir / path
            if candidate.is_dir():
                self.logger.debug(f"Resolved version '{specifier}' to {candidate}")
                return VersionDirectory(candidate)

        raise InvalidVersion(specifier)


def load_manifest(manifest_path: Path) -> ManifestFile:
    """
    Read the index version from a version manifest.

    Args:
        manifest_path: Path to `<name>.json` inside a version directory

    Returns:
        ManifestFile holding the index version

    Raises:
        ManifestError: If the manifest is missing, not JSON, or has no `assets` field
    """
    manifest_path = Path(manifest_path)

    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            manifest_json = json.load(f)
    except OSError as e:
        raise ManifestError(manifest_path, str(e)) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ManifestError(manifest_path, f"invalid JSON: {e}") from e

    try:
        return ManifestFile.from_json(manifest_json)
    except ValueError as e:
        raise ManifestError(manifest_path, str(e)) from e
