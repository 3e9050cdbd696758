"""
Jar/zip extraction
Extracts the `assets` and/or `data` folders from a Minecraft version jar (or any zip)
"""

import logging
import os
import shutil
import stat
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from mc_extract import constants, utils
from mc_extract.errors import ArchiveError
from mc_extract.models import ArchiveEntry, ExtractionSelection


ProgressCallback = Callable[[int, int], None]

# Errors zipfile can raise while reading a damaged member
_READ_ERRORS = (OSError, zipfile.BadZipFile, zlib.error, EOFError)


@dataclass
class ArchiveExtractionResult:
    """
    Outcome of a jar extraction pass.

    Attributes:
        total_entries: Number of entries in the container
        files_written: Number of files written
        directories_created: Number of directory entries recreated
        skipped: Entries outside the selected subtrees
        common_root: Shared top-level folder that was stripped, if any
    """
    total_entries: int = 0
    files_written: int = 0
    directories_created: int = 0
    skipped: int = 0
    common_root: Optional[str] = None


def find_common_root(entries: Sequence[ArchiveEntry]) -> Optional[str]:
    """
    Find a single top-level folder shared by every entry.

    Folders named like a selectable subtree (`assets`, `data`) never count
    as a common root.

    Args:
        entries: All entries of the container

    Returns:
        The folder name, or None if the entries do not share one
    """
    root = None

    for entry in entries:
        parts = entry.parts
        if not parts:
            continue

        if root is None:
            root = parts[0]
        elif parts[0] != root:
            return None

        # A file sitting at the top level means there is no wrapping folder
        if len(parts) == 1 and not entry.is_directory:
            return None

    if root in constants.SUBTREES:
        return None
    return root


def output_parts(parts: List[str], selection: ExtractionSelection,
                 ignore_top_level: bool) -> Optional[List[str]]:
    """
    Map an entry's path parts to its path parts below the output directory.

    Args:
        parts: Entry path parts with any common root already removed
        selection: Enabled subtrees
        ignore_top_level: Drop the `assets`/`data` folder from the output path

    Returns:
        Output path parts, or None if the entry is not in a selected subtree
    """
    if not parts or parts[0] not in selection.subtrees():
        return None
    if ignore_top_level:
        return parts[1:]
    return parts


class ArchiveExtractor:
    """
    Extracts selected subtrees of a jar/zip container.

    Any failure (unreadable container, corrupt entry, failed write) aborts
    the whole pass with ArchiveError.
    """

    def __init__(self, archive_path: Path):
        """
        Initialize the extractor.

        Args:
            archive_path: Path to the jar or zip file
        """
        self.archive_path = Path(archive_path)
        self.logger = logging.getLogger("mc_extract.archive")

    def extract(self, output_dir: Path, selection: ExtractionSelection,
                ignore_top_level: bool = False,
                progress_callback: Optional[ProgressCallback] = None) -> ArchiveExtractionResult:
        """
        Extract the selected subtrees into output_dir.

        Args:
            output_dir: Directory to extract into
            selection: Which of `assets`/`data` to extract
            ignore_top_level: Place subtree contents directly into output_dir
            progress_callback: Optional callback(index, total), called before each entry

        Returns:
            ArchiveExtractionResult summarising the pass

        Raises:
            ArchiveError: If the container or any selected entry cannot be extracted
        """
        result = ArchiveExtractionResult()

        if selection.is_empty():
            self.logger.debug("Nothing selected, skipping jar extraction")
            return result

        output_dir = Path(output_dir)

        try:
            zf = zipfile.ZipFile(self.archive_path)
        except (OSError, zipfile.BadZipFile) as e:
            raise ArchiveError(self.archive_path, str(e)) from e

        with zf:
            infos = zf.infolist()
            entries = [ArchiveEntry.from_zipinfo(info) for info in infos]

            result.total_entries = len(entries)
            result.common_root = find_common_root(entries)
            if result.common_root:
                self.logger.info(f"Stripping top-level folder '{result.common_root}'")

            self.logger.info(f"Extracting {', '.join(selection.subtrees())} from "
                             f"{self.archive_path} ({len(entries)} entries) to {output_dir}")

            for i, (info, entry) in enumerate(zip(infos, entries), 1):
                if progress_callback:
                    progress_callback(i, result.total_entries)

                parts = entry.parts
                if result.common_root:
                    parts = parts[1:]

                # A top-level file cannot belong to a subtree
                if not entry.is_directory and len(parts) <= 1:
                    result.skipped += 1
                    continue

                target_parts = output_parts(parts, selection, ignore_top_level)
                if target_parts is None:
                    result.skipped += 1
                    continue

                target = self._target_path(output_dir, target_parts, entry)

                if entry.is_directory:
                    self._make_directory(target, entry)
                    result.directories_created += 1
                else:
                    self._write_file(zf, info, entry, target)
                    result.files_written += 1

        self.logger.info(f"Wrote {result.files_written} files from {self.archive_path} "
                         f"({result.skipped} entries skipped)")
        return result

    def _target_path(self, output_dir: Path, target_parts: List[str], entry: ArchiveEntry) -> Path:
        if entry.is_absolute:
            raise ArchiveError(self.archive_path, "absolute entry path", entry.path)
        if ".." in target_parts:
            raise ArchiveError(self.archive_path, "path escapes the output directory", entry.path)

        target = output_dir.joinpath(*target_parts)
        if not utils.is_within(output_dir, target):
            raise ArchiveError(self.archive_path, "path escapes the output directory", entry.path)

        return target

    def _make_directory(self, target: Path, entry: ArchiveEntry) -> None:
        try:
            utils.ensure_directory(target)
        except OSError as e:
            raise ArchiveError(self.archive_path, f"failed to create directory: {e}", entry.path) from e

    def _write_file(self, zf: zipfile.ZipFile, info: zipfile.ZipInfo,
                    entry: ArchiveEntry, target: Path) -> None:
        self._make_directory(target.parent, entry)

        try:
            # Existing files are replaced, including read-only ones
            if target.is_file() or target.is_symlink():
                target.unlink()
            with zf.open(info) as source, open(target, "wb") as destination:
                shutil.copyfileobj(source, destination)
        except _READ_ERRORS as e:
            raise ArchiveError(self.archive_path, str(e), entry.path) from e

        if entry.permission_bits is not None and os.name == "posix":
            try:
                os.chmod(target, entry.permission_bits | stat.S_IWUSR)
            except OSError as e:
                raise ArchiveError(self.archive_path, f"failed to set permissions: {e}", entry.path) from e
