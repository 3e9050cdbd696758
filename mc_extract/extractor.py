"""
Version extraction
Combines jar extraction with hashed asset extraction for a single game version
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from mc_extract.archive import ArchiveExtractionResult, ArchiveExtractor
from mc_extract.errors import MissingIndexFile, MissingInputDirectory
from mc_extract.hashed import HashedAssetExtractor, HashedExtractionResult, assets_output_dir
from mc_extract.index import IndexResolver, load_index
from mc_extract.models import ExtractionSelection, IndexFile, VersionDirectory
from mc_extract.paths import PlatformPaths, get_platform_paths
from mc_extract.version import load_manifest


ProgressCallback = Callable[[int, int], None]


@dataclass
class VersionExtractionResult:
    """Results of both passes of a version extraction (None for a pass that did not run)."""
    archive: Optional[ArchiveExtractionResult] = None
    hashed: Optional[HashedExtractionResult] = None
    index_version: Optional[str] = None


class VersionExtractor:
    """
    Extracts a version's jar contents and, if assets are selected, the
    hashed assets its manifest refers to.

    The jar is extracted first and hashed assets second, so a hashed asset
    replaces a jar file with the same logical path.
    """

    def __init__(self, version: VersionDirectory, hashed_assets_dir: Optional[Path] = None,
                 platform_paths: Optional[PlatformPaths] = None):
        """
        Initialize the extractor.

        Args:
            version: Resolved version directory
            hashed_assets_dir: `.minecraft/assets` override; defaults to the platform location
            platform_paths: PlatformPaths used to find the default hashed assets directory
        """
        self.version = version
        self.hashed_assets_dir = Path(hashed_assets_dir) if hashed_assets_dir is not None else None
        self.platform_paths = platform_paths or get_platform_paths()
        self.logger = logging.getLogger("mc_extract.extractor")

    def resolve_assets_dir(self) -> Path:
        """
        Return the hashed assets directory to use.

        Raises:
            MissingInputDirectory: If neither the override nor the default exists
        """
        if self.hashed_assets_dir is not None:
            if not self.hashed_assets_dir.is_dir():
                raise MissingInputDirectory(self.hashed_assets_dir)
            return self.hashed_assets_dir

        assets_dir = self.platform_paths.hashed_assets_dir()
        if assets_dir is None:
            raise MissingInputDirectory()
        return assets_dir

    def extract(self, output_dir: Path, selection: ExtractionSelection,
                ignore_top_level: bool = False,
                archive_progress: Optional[ProgressCallback] = None,
                hashed_progress: Optional[ProgressCallback] = None) -> VersionExtractionResult:
        """
        Extract the selected content of the version.

        The manifest and asset index are located and parsed before anything is
        written, so a missing index fails the run without partial hashed output.

        Args:
            output_dir: Directory to extract into
            selection: Which of `assets`/`data` to extract
            ignore_top_level: Place subtree contents directly into output_dir
            archive_progress: Optional callback(index, total) for the jar pass
            hashed_progress: Optional callback(index, total) for the hashed pass

        Returns:
            VersionExtractionResult for the passes that ran
        """
        result = VersionExtractionResult()

        if selection.is_empty():
            self.logger.debug("Nothing selected, skipping version extraction")
            return result

        output_dir = Path(output_dir)
        assets_dir = None
        index = None

        if selection.assets:
            assets_dir, index, result.index_version = self._load_index()

        self.logger.info(f"Extracting version '{self.version.name}' from {self.version.directory}")
        result.archive = ArchiveExtractor(self.version.archive_path).extract(
            output_dir, selection, ignore_top_level, archive_progress
        )

        if index is not None:
            result.hashed = HashedAssetExtractor(assets_dir).extract(
                index, assets_output_dir(output_dir, ignore_top_level), hashed_progress
            )

        return result

    def _load_index(self):
        manifest = load_manifest(self.version.manifest_path)
        self.logger.info(f"Version '{self.version.name}' uses asset index '{manifest.index_version}'")

        assets_dir = self.resolve_assets_dir()
        index_path = IndexResolver(assets_dir).index_path_for_version(manifest.index_version)
        if not index_path.is_file():
            raise MissingIndexFile(index_path, "No index file for hashed assets found "
                                               f"at {index_path}")

        index: IndexFile = load_index(index_path)
        return assets_dir, index, manifest.index_version
