"""
mc_extract - Restores Minecraft assets to their real file paths

Minecraft stores most assets inside each version's jar file, but sounds,
languages and a few other assets live in `.minecraft/assets/objects` under
hashed file names, listed in an index file in `.minecraft/assets/indexes`.

Supports extracting hashed assets, extracting `assets`/`data` from jars,
and both at once for a version directory.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from mc_extract.archive import ArchiveExtractor
from mc_extract.errors import ExtractError
from mc_extract.extractor import VersionExtractor
from mc_extract.hashed import HashedAssetExtractor
from mc_extract.index import IndexResolver
from mc_extract.models import ExtractionSelection, IndexFile, IndexObject
from mc_extract.version import VersionResolver

__all__ = [
    "ArchiveExtractor",
    "ExtractError",
    "ExtractionSelection",
    "HashedAssetExtractor",
    "IndexFile",
    "IndexObject",
    "IndexResolver",
    "VersionExtractor",
    "VersionResolver",
]
