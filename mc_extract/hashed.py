"""
Hashed asset extraction
Copies files from `.minecraft/assets/objects` to the paths listed in an asset index
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from mc_extract import constants, utils
from mc_extract.models import IndexFile


ProgressCallback = Callable[[int, int], None]


def assets_output_dir(output_dir: Path, ignore_top_level: bool) -> Path:
    """
    Directory hashed assets are written into.

    Args:
        output_dir: The user's output directory
        ignore_top_level: Write directly into output_dir instead of output_dir/assets
    """
    output_dir = Path(output_dir)
    if ignore_top_level:
        return output_dir
    return output_dir / constants.SUBTREE_ASSETS


@dataclass
class HashedExtractionResult:
    """
    Outcome of a hashed extraction pass.

    Attributes:
        total: Number of objects in the index (and number of attempts made)
        extracted: Number of files written successfully
        failures: (logical path, reason) for every object that was skipped
        bytes_written: Total bytes written
    """
    total: int = 0
    extracted: int = 0
    failures: List[Tuple[str, str]] = field(default_factory=list)
    bytes_written: int = 0

    @property
    def attempted(self) -> int:
        return self.extracted + len(self.failures)


class HashedAssetExtractor:
    """
    Restores hashed objects to their logical asset paths.

    A failure on one object is logged and recorded, and extraction carries on
    with the next object. Every object in the index is attempted exactly once.
    """

    def __init__(self, assets_dir: Path):
        """
        Initialize the extractor.

        Args:
            assets_dir: The hashed assets directory containing `objects/`
        """
        self.assets_dir = Path(assets_dir)
        self.logger = logging.getLogger("mc_extract.hashed")

    @property
    def objects_dir(self) -> Path:
        return self.assets_dir / constants.OBJECTS_DIR_NAME

    def source_path(self, object_hash: str) -> Path:
        """Location of a hashed object on disk."""
        return self.objects_dir / utils.bucket(object_hash) / object_hash

    def extract(self, index: IndexFile, output_dir: Path,
                progress_callback: Optional[ProgressCallback] = None) -> HashedExtractionResult:
        """
        Extract every object listed in the index.

        Args:
            index: Parsed asset index
            output_dir: Directory the logical paths are relative to
            progress_callback: Optional callback(index, total), called before each object

        Returns:
            HashedExtractionResult summarising the pass
        """
        output_dir = Path(output_dir)
        total = len(index.objects)
        result = HashedExtractionResult(total=total)

        self.logger.info(f"Extracting {total} hashed objects from {self.objects_dir} to {output_dir}")

        for i, (logical_path, obj) in enumerate(index.objects.items(), 1):
            if progress_callback:
                progress_callback(i, total)

            written, reason = self._extract_object(logical_path, self.source_path(obj.hash), output_dir)
            if reason is None:
                result.extracted += 1
                result.bytes_written += written
            else:
                result.failures.append((logical_path, reason))

        self.logger.info(f"Extracted {result.extracted}/{total} hashed objects "
                         f"({len(result.failures)} failed)")
        return result

    def _extract_object(self, logical_path: str, source: Path, output_dir: Path) -> Tuple[int, Optional[str]]:
        """Copy one object. Returns (bytes written, None) on success, (0, reason) on failure."""
        try:
            contents = source.read_bytes()
        except OSError as e:
            reason = f"failed to read hashed file: {e}"
            self.logger.warning(f"Skipping '{logical_path}': {reason}")
            return 0, reason

        output_file = output_dir / logical_path

        try:
            utils.ensure_directory(output_file.parent)
        except OSError as e:
            reason = f"failed to create parent directories: {e}"
            self.logger.warning(f"Skipping '{logical_path}': {reason}")
            return 0, reason

        try:
            output_file.write_bytes(contents)
        except OSError as e:
            reason = f"failed to write file: {e}"
            self.logger.warning(f"Skipping '{logical_path}': {reason}")
            return 0, reason

        return len(contents), None
