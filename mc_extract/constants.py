"""
Constants for Minecraft asset locations and extraction configuration
Based on the launcher's `.minecraft` directory layout
"""

# Folder names inside a `.minecraft` directory
ASSETS_DIR_NAME = "assets"
VERSIONS_DIR_NAME = "versions"

# Folder names inside the hashed assets directory
OBJECTS_DIR_NAME = "objects"
INDEXES_DIR_NAME = "indexes"

# Logical subtrees found inside a version jar
SUBTREE_ASSETS = "assets"
SUBTREE_DATA = "data"

SUBTREES = [SUBTREE_ASSETS, SUBTREE_DATA]

# File extensions
ARCHIVE_EXTENSION = "jar"
INDEX_EXTENSION = "json"
MANIFEST_EXTENSION = "json"

# Length of the bucket folder name inside `objects/` (first N hash characters)
BUCKET_LENGTH = 2

# Manifest key holding the asset index version
MANIFEST_INDEX_KEY = "assets"

# Platform default `.minecraft` locations
MINECRAFT_DIR_WINDOWS = ".minecraft"  # under %APPDATA%
MINECRAFT_DIR_MAC = "minecraft"  # under ~/Library/Application Support
MINECRAFT_DIR_LINUX = ".minecraft"  # under ~

# Environment variables
ENV_MINECRAFT_DIR = "MC_EXTRACT_MINECRAFT_DIR"
ENV_FORCE_ASCII = "FORCE_ASCII"

# Status symbols as (unicode, ascii) pairs
STATUS_CHECK = ("✓", "[OK]")
STATUS_ERROR = ("✗", "[ERROR]")
STATUS_WARNING = ("⚠", "[WARNING]")

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Progress line template
PROGRESS_TEMPLATE = "Extracting {index}/{total}"

# File permission bits mask for archive entries
PERMISSION_MASK = 0o777
