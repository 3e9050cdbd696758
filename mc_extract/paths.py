"""
Default `.minecraft` locations per operating system

Each platform gets one PlatformPaths implementation; the rest of the
package only talks to the object returned by get_platform_paths().
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from mc_extract import constants


class PlatformPaths:
    """
    Locates the default Minecraft installation for one operating system.

    Subclasses implement default_minecraft_dir(). The MC_EXTRACT_MINECRAFT_DIR
    environment variable overrides the platform default on every OS.
    """

    name = "generic"

    def __init__(self):
        self.logger = logging.getLogger("mc_extract.paths")

    def default_minecraft_dir(self) -> Optional[Path]:
        """Return where the launcher installs `.minecraft` on this OS, if known."""
        raise NotImplementedError

    def minecraft_dir(self) -> Optional[Path]:
        """
        Return the Minecraft directory, if it exists.

        Returns:
            Path to the existing Minecraft directory, or None
        """
        override = os.environ.get(constants.ENV_MINECRAFT_DIR)
        if override:
            path = Path(override).expanduser()
            self.logger.debug(f"Using {constants.ENV_MINECRAFT_DIR}={path}")
        else:
            path = self.default_minecraft_dir()

        if path is not None and path.is_dir():
            return path

        self.logger.debug(f"No Minecraft directory found (checked {path})")
        return None

    def hashed_assets_dir(self) -> Optional[Path]:
        """Return the default `.minecraft/assets` directory, if it exists."""
        return self._child_dir(constants.ASSETS_DIR_NAME)

    def versions_dir(self) -> Optional[Path]:
        """Return the default `.minecraft/versions` directory, if it exists."""
        return self._child_dir(constants.VERSIONS_DIR_NAME)

    def _child_dir(self, name: str) -> Optional[Path]:
        minecraft_dir = self.minecraft_dir()
        if minecraft_dir is None:
            return None

        path = minecraft_dir / name
        return path if path.is_dir() else None


class WindowsPaths(PlatformPaths):
    """`%APPDATA%\\.minecraft`"""

    name = "windows"

    def default_minecraft_dir(self) -> Optional[Path]:
        appdata = os.environ.get("APPDATA")
        if not appdata:
            return None
        return Path(appdata) / constants.MINECRAFT_DIR_WINDOWS


class MacPaths(PlatformPaths):
    """`~/Library/Application Support/minecraft`"""

    name = "osx"

    def default_minecraft_dir(self) -> Optional[Path]:
        return Path.home() / "Library" / "Application Support" / constants.MINECRAFT_DIR_MAC


class LinuxPaths(PlatformPaths):
    """`~/.minecraft`"""

    name = "linux"

    def default_minecraft_dir(self) -> Optional[Path]:
        return Path.home() / constants.MINECRAFT_DIR_LINUX


def get_platform_paths(platform: Optional[str] = None) -> PlatformPaths:
    """
    Select the PlatformPaths implementation for an OS.

    Args:
        platform: Value in `sys.platform` format; defaults to the running OS

    Returns:
        PlatformPaths for that OS (Linux layout for anything unrecognised)
    """
    platform = platform or sys.platform

    if platform.startswith("win") or platform == "cygwin":
        return WindowsPaths()
    if platform == "darwin":
        return MacPaths()
    return LinuxPaths()
