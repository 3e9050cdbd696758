"""
Data models for asset indexes, version manifests, and jar entries
Based on the launcher's `assets/indexes/*.json` and `versions/<name>/<name>.json` formats
"""

import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from mc_extract import constants, utils


@dataclass(frozen=True)
class IndexObject:
    """
    Information about a hashed file in the object store.

    Attributes:
        hash: Hex content hash, which is also the stored file name
        size: Size of the file in bytes
    """
    hash: str
    size: int

    @classmethod
    def from_json(cls, object_json: Dict[str, Any]) -> "IndexObject":
        """
        Create an IndexObject from JSON data.

        Raises:
            ValueError: If the entry does not match the index schema
        """
        if not isinstance(object_json, dict):
            raise ValueError(f"expected an object, got {type(object_json).__name__}")

        hash_value = object_json.get("hash")
        size_value = object_json.get("size")

        if not isinstance(hash_value, str):
            raise ValueError("missing or non-string 'hash'")
        if len(hash_value) < constants.BUCKET_LENGTH:
            raise ValueError(f"hash '{hash_value}' is too short")
        # bool is a subclass of int, reject it explicitly
        if not isinstance(size_value, int) or isinstance(size_value, bool):
            raise ValueError("missing or non-integer 'size'")

        return cls(hash=hash_value, size=size_value)

    @property
    def bucket(self) -> str:
        """Name of the folder inside `objects/` holding this file."""
        return utils.bucket(self.hash)

    @property
    def hashed_file_path(self) -> str:
        """Path to the hashed file relative to the `objects/` folder."""
        return utils.object_path(self.hash)


@dataclass(frozen=True)
class IndexFile:
    """
    Contents of an index file in `.minecraft/assets/indexes`.

    Attributes:
        objects: Map of logical paths within `assets` to their IndexObject
    """
    objects: Dict[str, IndexObject] = field(default_factory=dict)

    @classmethod
    def from_json(cls, index_json: Dict[str, Any]) -> "IndexFile":
        """
        Create an IndexFile from parsed JSON. Unknown top-level fields are ignored.

        Raises:
            ValueError: If the document does not match the index schema
        """
        if not isinstance(index_json, dict):
            raise ValueError("index root is not an object")

        objects_json = index_json.get("objects")
        if not isinstance(objects_json, dict):
            raise ValueError("missing or invalid 'objects' map")

        objects = {}
        for logical_path, object_json in objects_json.items():
            try:
                objects[logical_path] = IndexObject.from_json(object_json)
            except ValueError as e:
                raise ValueError(f"invalid entry '{logical_path}': {e}") from e

        return cls(objects=objects)

    def __len__(self) -> int:
        return len(self.objects)

    @property
    def total_size(self) -> int:
        """Sum of the declared sizes of all objects."""
        return sum(obj.size for obj in self.objects.values())


@dataclass(frozen=True)
class ManifestFile:
    """
    The part of a version manifest this tool reads.

    Attributes:
        index_version: Name of the asset index the version uses (the `assets` field)
    """
    index_version: str

    @classmethod
    def from_json(cls, manifest_json: Dict[str, Any]) -> "ManifestFile":
        """
        Create a ManifestFile from parsed JSON. All other manifest fields are ignored.

        Raises:
            ValueError: If the `assets` field is missing or not a string
        """
        if not isinstance(manifest_json, dict):
            raise ValueError("manifest root is not an object")

        index_version = manifest_json.get(constants.MANIFEST_INDEX_KEY)
        if not isinstance(index_version, str) or not index_version:
            raise ValueError(f"missing or invalid '{constants.MANIFEST_INDEX_KEY}' field")

        return cls(index_version=index_version)


@dataclass(frozen=True)
class ExtractionSelection:
    """Which jar subtrees to extract."""
    assets: bool = False
    data: bool = False

    def is_empty(self) -> bool:
        return not (self.assets or self.data)

    def subtrees(self) -> List[str]:
        """Names of the enabled subtrees, in a fixed order."""
        enabled = []
        if self.assets:
            enabled.append(constants.SUBTREE_ASSETS)
        if self.data:
            enabled.append(constants.SUBTREE_DATA)
        return enabled


@dataclass(frozen=True)
class ArchiveEntry:
    """
    A single entry of a jar/zip container.

    Attributes:
        path: Forward-slash separated path inside the container (no trailing slash)
        is_directory: Whether the entry is an explicit directory entry
        permission_bits: Unix permission bits, if the entry carries any
    """
    path: str
    is_directory: bool
    permission_bits: Optional[int] = None

    @classmethod
    def from_zipinfo(cls, info: zipfile.ZipInfo) -> "ArchiveEntry":
        """Create an ArchiveEntry from a ZipInfo."""
        # Unix attributes live in the high 16 bits of external_attr
        mode = (info.external_attr >> 16) & constants.PERMISSION_MASK
        return cls(
            path=info.filename.rstrip("/"),
            is_directory=info.is_dir(),
            permission_bits=mode or None,
        )

    @property
    def parts(self) -> List[str]:
        return [part for part in self.path.split("/") if part]

    @property
    def is_absolute(self) -> bool:
        """Whether the entry path is rooted (`/x`) or carries a drive letter (`C:x`)."""
        return self.path.startswith("/") or (len(self.path) > 1 and self.path[1] == ":")


@dataclass(frozen=True)
class VersionDirectory:
    """
    A directory containing a version `.jar` file and its manifest.

    The directory's own name determines both file names:
    `<dir>/<name>.jar` and `<dir>/<name>.json`.
    """
    directory: Path

    @property
    def name(self) -> str:
        name = self.directory.name
        if name in ("", ".", ".."):
            # "." and ".." name a directory only once resolved
            name = self.directory.resolve().name
        return name

    @property
    def archive_path(self) -> Path:
        return self.directory / f"{self.name}.{constants.ARCHIVE_EXTENSION}"

    @property
    def manifest_path(self) -> Path:
        return self.directory / f"{self.name}.{constants.MANIFEST_EXTENSION}"


@dataclass(frozen=True)
class IndexPath:
    """An index given as a path to the index file itself."""
    path: Path


@dataclass(frozen=True)
class IndexVersion:
    """An index given by its version label (e.g. `24` for `indexes/24.json`)."""
    version: str


IndexSource = Union[IndexPath, IndexVersion]


def parse_index_source(value: str) -> IndexSource:
    """
    Decide whether a user-supplied index value is a file or a version label.

    Args:
        value: Either a path to an index file or an index version name

    Returns:
        IndexPath if the value names an existing file, IndexVersion otherwise
    """
    path = Path(value)
    if path.is_file():
        return IndexPath(path)
    return IndexVersion(value)
