"""Shared pytest fixtures for mc_extract tests."""

from __future__ import annotations

import json
import zipfile
from pathlib import Path
from typing import Dict, Optional

import pytest

# ============================================================================
# Builders
# ============================================================================


def write_index(assets_dir: Path, name: str, objects: Dict[str, Dict]) -> Path:
    """Write `indexes/<name>.json` and return its path."""
    indexes_dir = assets_dir / "indexes"
    indexes_dir.mkdir(parents=True, exist_ok=True)
    path = indexes_dir / f"{name}.json"
    path.write_text(json.dumps({"objects": objects}))
    return path


def write_object(assets_dir: Path, object_hash: str, contents: bytes) -> Path:
    """Write a hashed object into `objects/<bucket>/<hash>`."""
    path = assets_dir / "objects" / object_hash[:2] / object_hash
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(contents)
    return path


def write_jar(path: Path, entries: Dict[str, Optional[bytes]],
              modes: Optional[Dict[str, int]] = None) -> Path:
    """
    Write a zip file. Entries ending in "/" are directories (value ignored).

    `modes` maps entry names to Unix permission bits.
    """
    modes = modes or {}
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        for name, contents in entries.items():
            info = zipfile.ZipInfo(name)
            if name in modes:
                info.create_system = 3
                info.external_attr = modes[name] << 16
            if name.endswith("/"):
                info.external_attr |= 0x10
                zf.writestr(info, b"")
            else:
                zf.writestr(info, contents or b"")
    return path


# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    """Empty hashed assets directory with `objects/` and `indexes/`."""
    path = tmp_path / "assets"
    (path / "objects").mkdir(parents=True)
    (path / "indexes").mkdir(parents=True)
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def versions_dir(tmp_path: Path) -> Path:
    path = tmp_path / "versions"
    path.mkdir()
    return path


@pytest.fixture
def no_minecraft_dir(monkeypatch, tmp_path: Path) -> Path:
    """Point every platform default at a directory that does not exist."""
    missing = tmp_path / "no-minecraft"
    monkeypatch.setenv("MC_EXTRACT_MINECRAFT_DIR", str(missing))
    return missing


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def sound_store(assets_dir: Path) -> Path:
    """Store with one sound object listed in index `5`."""
    object_hash = "ab12cd34ef56ab12cd34ef56ab12cd34ef56ab12"
    write_object(assets_dir, object_hash, b"0123456789")
    write_index(assets_dir, "5", {"sounds/a.ogg": {"hash": object_hash, "size": 10}})
    return assets_dir


@pytest.fixture
def version_1_20_1(versions_dir: Path) -> Path:
    """Version directory `1.20.1` with a jar and a manifest using asset index `5`."""
    version_dir = versions_dir / "1.20.1"
    write_jar(version_dir / "1.20.1.jar", {
        "assets/": None,
        "assets/minecraft/": None,
        "assets/minecraft/lang/en_us.json": b'{"jar": true}',
        "assets/minecraft/textures/stone.png": b"png",
        "data/": None,
        "data/minecraft/recipe.json": b"{}",
        "net/minecraft/Main.class": b"\xca\xfe\xba\xbe",
    })
    (version_dir / "1.20.1.json").write_text(json.dumps({
        "id": "1.20.1",
        "assets": "5",
        "mainClass": "net.minecraft.client.main.Main",
    }))
    return version_dir
