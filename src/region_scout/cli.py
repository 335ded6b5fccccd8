"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

from region_scout import __version__
from region_scout.config import get_settings
from region_scout.datasources.weather import DateRange
from region_scout.flows.sweep import historical_weather, sweep_regions
from region_scout.schemas import MIN_PEAK_HEIGHT, BoundingBox, RegionFeature, RegionPreferences
from region_scout.search import SearchEngine


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="region-scout",
        description="Find regions, cities and historical weather windows from OpenStreetMap data",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    # 'cities' command - by name or by position
    cities_parser = subparsers.add_parser("cities", help="Find cities by name or position")
    cities_parser.add_argument("--name", type=str, default=None, help="Exact city name")
    cities_parser.add_argument("--lat", type=float, default=None, help="Latitude of a point")
    cities_parser.add_argument("--lon", type=float, default=None, help="Longitude of a point")
    cities_parser.add_argument(
        "--details", action="store_true", help="Attach tourism points of interest"
    )

    # 'regions' command - incremental search over tiles
    regions_parser = subparsers.add_parser("regions", help="Find regions with given features")
    regions_parser.add_argument(
        "--bbox",
        type=float,
        nargs=4,
        required=True,
        metavar=("SOUTH", "WEST", "NORTH", "EAST"),
        help="Bounding box to search",
    )
    regions_parser.add_argument("--airports", action="store_true", help="Require an international airport")
    regions_parser.add_argument("--peaks", action="store_true", help="Require a named peak")
    regions_parser.add_argument(
        "--min-peak-height", type=int, default=None, help="Minimum peak elevation in meters"
    )
    regions_parser.add_argument("--beaches", action="store_true", help="Require a sea beach")
    regions_parser.add_argument("--salt-lakes", action="store_true", help="Require a salt lake")
    regions_parser.add_argument(
        "--tile-deg", type=float, default=2.0, help="Tile size in degrees (default: 2.0)"
    )

    # 'weather' command - same window in past years
    weather_parser = subparsers.add_parser("weather", help="Historical weather for a date window")
    weather_parser.add_argument("--lat", type=float, required=True, help="Latitude")
    weather_parser.add_argument("--lon", type=float, required=True, help="Longitude")
    weather_parser.add_argument("--start", type=date.fromisoformat, required=True, help="YYYY-MM-DD")
    weather_parser.add_argument("--end", type=date.fromisoformat, required=True, help="YYYY-MM-DD")
    weather_parser.add_argument("--years", type=int, default=1, help="Number of past years (default: 1)")
    weather_parser.add_argument(
        "--reference",
        type=date.fromisoformat,
        default=None,
        help="Windows end before this date (default: today)",
    )

    return parser


def configure_logging(debug: bool = False) -> None:
    """Set up root logging from settings; ``debug`` forces DEBUG."""
    settings = get_settings()
    level = "DEBUG" if debug or settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Overpass: {settings.overpass_url}")
    print(f"Nominatim: {settings.nominatim_url}")
    print(f"Open-Meteo archive: {settings.open_meteo_archive_url}")
    return 0


def cmd_cities(args: argparse.Namespace) -> int:
    """Handle the 'cities' command."""
    by_position = args.lat is not None and args.lon is not None
    if args.name is None and not by_position:
        print("Error: pass --name or both --lat and --lon", file=sys.stderr)
        return 1

    engine = SearchEngine.from_settings(get_settings())
    if args.name is not None:
        places = engine.find_cities_by_name(args.name, include_details=args.details)
    else:
        places = engine.find_cities_by_position(args.lat, args.lon, include_details=args.details)

    _print_json([p.model_dump() for p in places])
    return 0


def build_preferences(args: argparse.Namespace) -> RegionPreferences:
    """Translate 'regions' flags into RegionPreferences."""
    features = RegionFeature.NONE
    if args.airports:
        features |= RegionFeature.INTERNATIONAL_AIRPORTS
    if args.peaks:
        features |= RegionFeature.PEAKS
    if args.beaches:
        features |= RegionFeature.SEA_BEACHES
    if args.salt_lakes:
        features |= RegionFeature.SALT_LAKES

    properties = {}
    if args.min_peak_height is not None:
        properties[MIN_PEAK_HEIGHT] = str(args.min_peak_height)
    return RegionPreferences(features=features, properties=properties)


def cmd_regions(args: argparse.Namespace) -> int:
    """Handle the 'regions' command."""
    south, west, north, east = args.bbox
    try:
        bbox = BoundingBox(south=south, west=west, north=north, east=east)
    except ValueError as exc:
        print(f"Error: invalid bounding box: {exc}", file=sys.stderr)
        return 1
    if args.tile_deg <= 0:
        print("Error: --tile-deg must be positive", file=sys.stderr)
        return 1

    prefs = build_preferences(args)
    usable = prefs.features
    if MIN_PEAK_HEIGHT not in prefs.properties:
        usable &= ~RegionFeature.PEAKS
    if usable == RegionFeature.NONE:
        hint = " (--peaks needs --min-peak-height)" if prefs.wants(RegionFeature.PEAKS) else ""
        print(f"Error: request at least one feature{hint}", file=sys.stderr)
        return 1

    _print_json(sweep_regions(bbox, prefs, tile_deg=args.tile_deg))
    return 0


def cmd_weather(args: argparse.Namespace) -> int:
    """Handle the 'weather' command."""
    try:
        DateRange(args.start, args.end)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _print_json(
        historical_weather(
            args.lat, args.lon, args.start, args.end, years=args.years, reference=args.reference
        )
    )
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.debug)

    commands = {
        "info": cmd_info,
        "cities": cmd_cities,
        "regions": cmd_regions,
        "weather": cmd_weather,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
