"""
Asset index resolution

Finds the index file to use inside `assets/indexes` and parses it.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from mc_extract import constants
from mc_extract.errors import IndexParseError, MissingIndexFile
from mc_extract.models import IndexFile, IndexPath, IndexSource, IndexVersion


logger = logging.getLogger("mc_extract.index")


def load_index(index_path: Path) -> IndexFile:
    """
    Read and parse an index file.

    Args:
        index_path: Path to the index JSON file

    Returns:
        Parsed IndexFile

    Raises:
        MissingIndexFile: If the file does not exist
        IndexParseError: If the file is not valid JSON or not an index
    """
    index_path = Path(index_path)

    try:
        with open(index_path, "r", encoding="utf-8") as f:
            index_json = json.load(f)
    except FileNotFoundError as e:
        raise MissingIndexFile(index_path) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise IndexParseError(index_path, str(e)) from e

    try:
        index = IndexFile.from_json(index_json)
    except ValueError as e:
        raise IndexParseError(index_path, str(e)) from e

    logger.debug(f"Loaded index {index_path} ({len(index)} objects)")
    return index


class IndexResolver:
    """
    Locates index files inside a hashed assets directory.

    The index can be given as a file path, as a version label resolving to
    `indexes/<label>.json`, or omitted, in which case the last file listed in
    `indexes/` is used. That listing order comes from the filesystem and is
    not sorted, so the default is a best guess rather than the newest index.
    """

    def __init__(self, assets_dir: Path):
        """
        Initialize the resolver.

        Args:
            assets_dir: The hashed assets directory (`.minecraft/assets`)
        """
        self.assets_dir = Path(assets_dir)
        self.logger = logger

    @property
    def indexes_dir(self) -> Path:
        return self.assets_dir / constants.INDEXES_DIR_NAME

    def index_path_for_version(self, version: str) -> Path:
        """Path where the index for `version` is expected."""
        return self.indexes_dir / f"{version}.{constants.INDEX_EXTENSION}"

    def resolve(self, source: Optional[IndexSource] = None) -> Path:
        """
        Resolve an index source to an existing index file.

        Args:
            source: IndexPath, IndexVersion, or None for the default index

        Returns:
            Path to the index file

        Raises:
            MissingIndexFile: If no matching index file exists
        """
        if isinstance(source, IndexPath):
            if not source.path.is_file():
                raise MissingIndexFile(source.path)
            path = source.path
        elif isinstance(source, IndexVersion):
            path = self.index_path_for_version(source.version)
            if not path.is_file():
                raise MissingIndexFile(path)
        else:
            path = self._default_index()

        self.logger.info(f"Using index file {path}")
        return path

    def load(self, source: Optional[IndexSource] = None) -> IndexFile:
        """Resolve an index source and parse the file it points to."""
        return load_index(self.resolve(source))

    def _default_index(self) -> Path:
        if not self.indexes_dir.is_dir():
            raise MissingIndexFile(
                self.indexes_dir,
                f"no index file found in {self.indexes_dir}",
            )

        last = None
        for entry in self.indexes_dir.iterdir():
            if entry.is_file():
                last = entry

        if last is None:
            raise MissingIndexFile(
                self.indexes_dir,
                f"no index file found in {self.indexes_dir}",
            )

        return last
