"""
Command line entry point for ESO-maped.
Usage: python -m eso_maped {normalize,inspect,zones} [FILE]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import orjson

from . import __version__
from .catalog import Catalog, load_catalog
from .markers import build_marker_text, parse_marker_text
from .settings import AppSettings, ConfigError
from .utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eso_maped",
        description="Inspect and normalize ESO map marker strings.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="zone catalog JSON (default: configured override or built-in)",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="settings INI file (default: platform settings store)",
    )
    parser.add_argument(
        "--profile", default="default", help="settings profile (default: %(default)s)"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    normalize = sub.add_parser(
        "normalize", help="parse a marker string and print its canonical form"
    )
    normalize.add_argument("file", nargs="?", type=Path, help="input file (default: stdin)")
    normalize.add_argument(
        "--timestamp", type=int, default=None, help="timestamp written into rich records"
    )

    inspect = sub.add_parser("inspect", help="print parsed markers and lines as JSON")
    inspect.add_argument("file", nargs="?", type=Path, help="input file (default: stdin)")

    sub.add_parser("zones", help="list the zones and maps of the catalog")
    return parser


def read_input(path: Optional[Path]) -> str:
    """Read marker text from a file, or stdin when no file is given."""
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def run_normalize(catalog: Catalog, text: str, timestamp: Optional[int]) -> str:
    collection = parse_marker_text(text, catalog)
    return build_marker_text(collection, timestamp=timestamp)


def run_inspect(catalog: Catalog, text: str) -> bytes:
    collection = parse_marker_text(text, catalog)
    return orjson.dumps(collection.to_dict(), option=orjson.OPT_INDENT_2)


def run_zones(catalog: Catalog) -> str:
    lines = [f"Catalog version {catalog.version or '?'}: {len(catalog)} zone(s)"]
    for zone_id in catalog.zone_ids():
        zone = catalog.zones[zone_id]
        lines.append(f"{zone.id}\t{zone.name}")
        for map_info in zone.maps:
            scale = map_info.scale_data
            elevation = f"y={scale.y:g}" if scale.y is not None else "y=-"
            lines.append(
                f"  {map_info.map_id}\t{map_info.name}\t"
                f"x={scale.min_x:g}..{scale.max_x:g} z={scale.min_z:g}..{scale.max_z:g} {elevation}"
            )
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(f"{__name__}.main")

    try:
        settings = AppSettings(profile=args.profile, settings_file=args.settings)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(settings)
    logger.debug(f"Configuration loaded from {settings.get_settings_file_path()}")

    validation = settings.validate()
    for warning in validation.warnings:
        logger.warning(f"  {warning}")
    if not validation.is_valid and args.catalog is None:
        logger.error("Configuration validation failed:")
        for error in validation.errors:
            logger.error(f"  {error}")
        return 1

    try:
        catalog = load_catalog(args.catalog or settings.catalog_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not load zone catalog: {e}")
        return 1

    if args.command == "zones":
        print(run_zones(catalog))
        return 0

    try:
        text = read_input(args.file)
    except OSError as e:
        logger.error(f"Could not read {args.file}: {e}")
        return 1

    if args.file is not None:
        settings.add_recent_file(args.file.resolve())

    if args.command == "normalize":
        print(run_normalize(catalog, text, args.timestamp))
    else:
        sys.stdout.write(run_inspect(catalog, text).decode("utf-8") + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
