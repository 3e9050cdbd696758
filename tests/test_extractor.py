"""Tests for combined version extraction."""

import json

import pytest

from mc_extract.errors import ArchiveError, ManifestError, MissingIndexFile, MissingInputDirectory
from mc_extract.extractor import VersionExtractor
from mc_extract.models import ExtractionSelection, VersionDirectory
from mc_extract.paths import LinuxPaths
from tests.conftest import write_index, write_jar, write_object

ASSETS = ExtractionSelection(assets=True)
DATA = ExtractionSelection(data=True)


@pytest.fixture
def lang_store(sound_store):
    """Hashed store whose index 5 also carries a replacement for the jar's en_us.json."""
    write_object(sound_store, "ee99", b'{"hashed": true}')
    write_index(sound_store, "5", {
        "sounds/a.ogg": {"hash": "ab12cd34ef56ab12cd34ef56ab12cd34ef56ab12", "size": 10},
        "minecraft/lang/en_us.json": {"hash": "ee99", "size": 16},
    })
    return sound_store


def test_extracts_jar_and_hashed_assets(version_1_20_1, lang_store, output_dir):
    extractor = VersionExtractor(VersionDirectory(version_1_20_1), hashed_assets_dir=lang_store)

    result = extractor.extract(output_dir, ASSETS)

    assert result.index_version == "5"
    assert result.archive.files_written == 2
    assert result.hashed.extracted == 2
    assert (output_dir / "assets" / "sounds" / "a.ogg").read_bytes() == b"0123456789"
    assert (output_dir / "assets" / "minecraft" / "textures" / "stone.png").read_bytes() == b"png"
    assert not (output_dir / "data").exists()


def test_hashed_assets_replace_jar_files(version_1_20_1, lang_store, output_dir):
    VersionExtractor(VersionDirectory(version_1_20_1), hashed_assets_dir=lang_store).extract(
        output_dir, ASSETS
    )

    assert (output_dir / "assets" / "minecraft" / "lang" / "en_us.json").read_bytes() == b'{"hashed": true}'


def test_ignore_top_level_lines_up_both_passes(version_1_20_1, lang_store, output_dir):
    VersionExtractor(VersionDirectory(version_1_20_1), hashed_assets_dir=lang_store).extract(
        output_dir, ASSETS, ignore_top_level=True
    )

    assert (output_dir / "sounds" / "a.ogg").exists()
    assert (output_dir / "minecraft" / "lang" / "en_us.json").read_bytes() == b'{"hashed": true}'
    assert not (output_dir / "assets").exists()


def test_progress_streams_run_in_order(version_1_20_1, lang_store, output_dir):
    events = []

    VersionExtractor(VersionDirectory(version_1_20_1), hashed_assets_dir=lang_store).extract(
        output_dir, ASSETS,
        archive_progress=lambda i, t: events.append(("jar", i, t)),
        hashed_progress=lambda i, t: events.append(("hashed", i, t)),
    )

    sources = [source for source, _, _ in events]
    assert sources == ["jar"] * 7 + ["hashed"] * 2


def test_data_only_skips_manifest_and_hashed_store(version_1_20_1, output_dir, no_minecraft_dir):
    (version_1_20_1 / "1.20.1.json").unlink()

    result = VersionExtractor(VersionDirectory(version_1_20_1)).extract(output_dir, DATA)

    assert result.hashed is None
    assert (output_dir / "data" / "minecraft" / "recipe.json").exists()
    assert not (output_dir / "assets").exists()


def test_empty_selection_does_nothing(tmp_path, output_dir):
    result = VersionExtractor(VersionDirectory(tmp_path / "missing")).extract(
        output_dir, ExtractionSelection()
    )

    assert result.archive is None
    assert result.hashed is None
    assert list(output_dir.iterdir()) == []


def test_missing_index_writes_no_hashed_assets(version_1_20_1, assets_dir, output_dir):
    """Manifest points at index 7, which is not in the hashed store."""
    (version_1_20_1 / "1.20.1.json").write_text(json.dumps({"assets": "7"}))
    write_object(assets_dir, "ab12", b"sound")
    write_index(assets_dir, "5", {"sounds/a.ogg": {"hash": "ab12", "size": 5}})

    with pytest.raises(MissingIndexFile) as exc_info:
        VersionExtractor(VersionDirectory(version_1_20_1), hashed_assets_dir=assets_dir).extract(
            output_dir, ASSETS
        )

    assert exc_info.value.path == assets_dir / "indexes" / "7.json"
    assert not (output_dir / "assets" / "sounds").exists()


def test_missing_manifest(version_1_20_1, assets_dir, output_dir):
    (version_1_20_1 / "1.20.1.json").unlink()

    with pytest.raises(ManifestError):
        VersionExtractor(VersionDirectory(version_1_20_1), hashed_assets_dir=assets_dir).extract(
            output_dir, ASSETS
        )


def test_missing_hashed_assets_dir(version_1_20_1, output_dir, no_minecraft_dir):
    extractor = VersionExtractor(VersionDirectory(version_1_20_1), platform_paths=LinuxPaths())

    with pytest.raises(MissingInputDirectory):
        extractor.extract(output_dir, ASSETS)


def test_default_hashed_assets_dir(version_1_20_1, sound_store, output_dir, monkeypatch):
    # sound_store lives at <tmp>/assets, so <tmp> acts as .minecraft
    monkeypatch.setenv("MC_EXTRACT_MINECRAFT_DIR", str(sound_store.parent))

    result = VersionExtractor(VersionDirectory(version_1_20_1), platform_paths=LinuxPaths()).extract(
        output_dir, ASSETS
    )

    assert result.hashed.extracted == 1


def test_missing_jar(version_1_20_1, output_dir):
    (version_1_20_1 / "1.20.1.jar").unlink()

    with pytest.raises(ArchiveError):
        VersionExtractor(VersionDirectory(version_1_20_1)).extract(output_dir, DATA)


def test_hashed_assets_replace_read_only_jar_files(tmp_path, sound_store, output_dir):
    version_dir = tmp_path / "versions" / "locked"
    write_jar(
        version_dir / "locked.jar",
        {"assets/sounds/a.ogg": b"jar copy"},
        modes={"assets/sounds/a.ogg": 0o444},
    )
    (version_dir / "locked.json").write_text(json.dumps({"assets": "5"}))

    result = VersionExtractor(VersionDirectory(version_dir), hashed_assets_dir=sound_store).extract(
        output_dir, ASSETS
    )

    assert result.hashed.failures == []
    assert (output_dir / "assets" / "sounds" / "a.ogg").read_bytes() == b"0123456789"
