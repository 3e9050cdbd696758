#!/usr/bin/env python3
"""
Command-line interface for mc_extract

Extracts Minecraft assets. Most assets live inside a version's jar file
(e.g. `.minecraft/versions/1.20.1/1.20.1.jar`), but some (sounds, most
languages) are stored in `.minecraft/assets/` under hashed file names.
This tool restores either kind to their real asset paths.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from mc_extract import __version__, constants, utils
from mc_extract.archive import ArchiveExtractor
from mc_extract.errors import ExtractError, InvalidOutputDirectory, MissingInputDirectory
from mc_extract.extractor import VersionExtractor
from mc_extract.hashed import HashedAssetExtractor, assets_output_dir
from mc_extract.index import IndexResolver
from mc_extract.models import ExtractionSelection, parse_index_source
from mc_extract.paths import get_platform_paths
from mc_extract.progress import ProgressLine
from mc_extract.version import VersionResolver


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format=constants.LOG_FORMAT
    )


def _selection(args) -> ExtractionSelection:
    return ExtractionSelection(assets=args.assets, data=args.data)


def _print_hashed_summary(result):
    print(f"{utils.SYMBOL_CHECK} Extracted {result.extracted}/{result.total} hashed assets "
          f"({utils.format_size(result.bytes_written)})")
    if result.failures:
        print(f"{utils.SYMBOL_WARNING} {len(result.failures)} assets could not be extracted "
              f"(see warnings above)")


def _print_archive_summary(result):
    print(f"{utils.SYMBOL_CHECK} Extracted {result.files_written} files from jar "
          f"({result.skipped} entries skipped)")


def cmd_hashed(args):
    """Handle hashed command."""
    assets_dir = args.hashed_assets_dir or get_platform_paths().hashed_assets_dir()
    if assets_dir is None or not assets_dir.is_dir():
        raise MissingInputDirectory(assets_dir)

    index = IndexResolver(assets_dir).load(args.index)

    progress = ProgressLine()
    try:
        result = HashedAssetExtractor(assets_dir).extract(
            index, assets_output_dir(args.output_dir, args.ignore_top_level), progress
        )
    finally:
        progress.finish()

    _print_hashed_summary(result)
    return 0


def cmd_jar(args):
    """Handle jar command."""
    progress = ProgressLine()
    try:
        result = ArchiveExtractor(args.jar_file).extract(
            args.output_dir, _selection(args), args.ignore_top_level, progress
        )
    finally:
        progress.finish()

    _print_archive_summary(result)
    return 0


def cmd_version(args):
    """Handle version command."""
    version = VersionResolver().resolve(args.version)
    extractor = VersionExtractor(version, hashed_assets_dir=args.hashed_assets_dir)

    archive_progress = ProgressLine("jar")
    hashed_progress = ProgressLine("hashed assets")

    def on_hashed(index, total):
        # The jar pass is over once hashed extraction starts
        archive_progress.finish()
        hashed_progress(index, total)

    try:
        result = extractor.extract(
            args.output_dir, _selection(args), args.ignore_top_level,
            archive_progress=archive_progress, hashed_progress=on_hashed,
        )
    finally:
        archive_progress.finish()
        hashed_progress.finish()

    if result.archive is not None:
        _print_archive_summary(result.archive)
    if result.hashed is not None:
        _print_hashed_summary(result.hashed)
    return 0


def _add_selection_arguments(parser):
    group = parser.add_argument_group("extracted contents (at least one is required)")
    group.add_argument(
        "--assets",
        action="store_true",
        help="Extract the `assets` folder. Can be combined with --data."
    )
    group.add_argument(
        "--data",
        action="store_true",
        help="Extract the `data` folder. Can be combined with --assets."
    )


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mc-extract",
        description="Extracts Minecraft assets from the hashed asset store or from version jars.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Examples:\n"
               "  mc-extract hashed -i 5                      # Hashed assets of index 5\n"
               "  mc-extract jar 1.20.1.jar --assets --data   # Jar contents\n"
               "  mc-extract version 1.20.1 --assets          # Jar + hashed assets of a version\n"
    )

    parser.add_argument(
        "-o", "--output",
        dest="output_dir",
        type=Path,
        default=None,
        metavar="DIRECTORY",
        help="Directory to extract into (default: current directory)"
    )
    parser.add_argument(
        "--ignore-top-level",
        action="store_true",
        help="Place the contents of `assets`/`data` directly into the output directory. "
             "Avoid combining with --assets --data, as their contents would get mixed up."
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help=f"Use ASCII status symbols (also enabled by {constants.ENV_FORCE_ASCII}=1)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Hashed command
    hashed_parser = subparsers.add_parser(
        "hashed",
        help="Extract hashed assets (e.g. from `.minecraft/assets/`)"
    )
    hashed_parser.add_argument(
        "hashed_assets_dir",
        nargs="?",
        type=Path,
        default=None,
        metavar="ASSETS_DIRECTORY",
        help="The `.minecraft/assets/` directory (default: location for your OS)"
    )
    hashed_parser.add_argument(
        "-i", "--index",
        type=parse_index_source,
        default=None,
        metavar="FILE_OR_VERSION",
        help="Index file path, or index name (e.g. `24` for `indexes/24.json`). "
             "Default: the last file listed in `indexes/`"
    )
    hashed_parser.set_defaults(func=cmd_hashed, requires_selection=False)

    # Jar command
    jar_parser = subparsers.add_parser(
        "jar",
        help="Extract `assets` and/or `data` from a Minecraft jar (or zip) file"
    )
    jar_parser.add_argument(
        "jar_file",
        type=Path,
        metavar="FILE",
        help="The jar or zip file (version jars are in `.minecraft/versions/`)"
    )
    _add_selection_arguments(jar_parser)
    jar_parser.set_defaults(func=cmd_jar, requires_selection=True)

    # Version command
    version_parser = subparsers.add_parser(
        "version",
        help="Extract a version's jar contents together with its hashed assets"
    )
    version_parser.add_argument(
        "version",
        metavar="DIRECTORY_OR_VERSION",
        help="Version directory, or version name inside `.minecraft/versions/` (e.g. `1.20.1`)"
    )
    version_parser.add_argument(
        "--hashed-assets",
        dest="hashed_assets_dir",
        type=Path,
        default=None,
        metavar="DIRECTORY",
        help="The `.minecraft/assets/` directory (default: location for your OS)"
    )
    _add_selection_arguments(version_parser)
    version_parser.set_defaults(func=cmd_version, requires_selection=True)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.requires_selection and not (args.assets or args.data):
        parser.error(f"{args.command}: at least one of --assets or --data is required")

    setup_logging(args.verbose)
    utils.setup_symbols(args.ascii)

    try:
        if args.output_dir is None:
            args.output_dir = Path(os.getcwd())
        if not args.output_dir.is_dir():
            raise InvalidOutputDirectory(args.output_dir)

        return args.func(args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except ExtractError as e:
        logging.error(str(e))
        print(f"\n{utils.SYMBOL_ERROR} Error: {e}")
        return 1
    except Exception as e:
        logging.exception("Unexpected error")
        print(f"\n{utils.SYMBOL_ERROR} Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
