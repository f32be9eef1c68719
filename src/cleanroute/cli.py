#!/usr/bin/env python3
"""
Route cleaning tool.
This script reads a CSV file of latitude,longitude,timestamp records, removes
positions that imply an unrealistic speed and prints or saves the cleaned route.

Requirements:
    pip install gpxpy folium

"""

from typing import List, Optional
import argparse
import logging
import os
import sys

from . import __version__
from . import visualization
from .config import CleanRouteConfig, EARTH_RADIUS_KM, MAX_ALLOWED_SPEED_KMH
from .errors import RouteError
from .geometry import Position
from .file_utils import generate_map_filename, write_output
from .gpx_export import route_to_gpx_xml
from .metrics import RouteMetrics, collect_metrics, log_metrics
from .route import Route

logger = logging.getLogger("cleanroute")

_console_handler: Optional[logging.Handler] = None


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="cleanroute",
        description="Remove physically implausible positions from a recorded route",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "source",
        type=str,
        nargs="?",
        help="CSV file with latitude,longitude,timestamp records",
    )
    parser.add_argument(
        "destination",
        type=str,
        nargs="?",
        help="File to save the cleaned route to (default: standard output)",
    )
    parser.add_argument(
        "--max-speed",
        type=float,
        default=MAX_ALLOWED_SPEED_KMH,
        help=f"Maximum plausible speed in km/h (default: {MAX_ALLOWED_SPEED_KMH:g})",
    )
    parser.add_argument(
        "--earth-radius",
        type=float,
        default=EARTH_RADIUS_KM,
        help=f"Earth radius in km for distance calculation (default: {EARTH_RADIUS_KM:g})",
    )
    parser.add_argument(
        "--format",
        type=str,
        default="csv",
        choices=["csv", "gpx"],
        help="Output format (default: csv)",
    )
    parser.add_argument(
        "--strict-timestamps",
        action="store_true",
        help="Fail on repeated timestamps instead of keeping the last record",
    )
    parser.add_argument(
        "--map",
        type=str,
        nargs="?",
        const="",
        default=None,
        help="Write an HTML map of kept and rejected positions "
        "(default name: derived from the source filename)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level; errors are always shown (default: WARNING)",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Output structured metrics after processing (logged at DEBUG level)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"cleanroute {__version__}",
    )
    return parser


def setup_logging(args: argparse.Namespace) -> None:
    """Setup logging configuration."""
    global _console_handler

    # Errors stay visible whatever level is requested
    level = min(getattr(logging, args.log_level), logging.ERROR)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    # Logs go to stderr so stdout carries only the cleaned route
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    if _console_handler is not None:
        root_logger.removeHandler(_console_handler)
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    _console_handler = console_handler


def build_config(args: argparse.Namespace) -> CleanRouteConfig:
    """Build the route configuration from command-line arguments."""
    return CleanRouteConfig(
        earth_radius=args.earth_radius,
        max_speed=args.max_speed,
        reject_duplicate_timestamps=args.strict_timestamps,
        log_level=args.log_level,
        metrics=args.metrics,
    )


def render_route(route: Route, output_format: str) -> str:
    """
    Serialize the cleaned route.

    Args:
        route: The cleaned route
        output_format: "csv" or "gpx"

    Returns:
        The complete output text
    """
    if output_format == "gpx":
        return route_to_gpx_xml(route)
    return str(route)


def return_results(content: str, destination: Optional[str]) -> None:
    """
    Print the results or save them to destination.

    Args:
        content: Rendered route
        destination: Output path, or None for standard output
    """
    if not destination:
        sys.stdout.write(content)
        return

    try:
        write_output(destination, content)
    except OSError as e:
        logger.debug(f"Write to {destination} failed: {e}")
        print(f"There was a problem saving the results to {destination}")
        sys.exit(1)
    print(f"the result was correctly saved in {destination}")


def write_map(
    route: Route,
    rejected: List[Position],
    metrics: RouteMetrics,
    args: argparse.Namespace,
) -> None:
    """
    Create the HTML map requested with --map.

    An empty route is skipped with a warning. If the map cannot be created,
    a reserved auto-generated filename is removed and the program exits.
    """
    if len(route) == 0:
        logger.warning("Route has no positions, skipping map")
        return

    map_filename = args.map
    try:
        if not map_filename:
            map_filename = generate_map_filename(args.source)
        visualization.create_route_map(route, map_filename, rejected, metrics)
    except (RuntimeError, ValueError, OSError) as e:
        if map_filename and not args.map and os.path.exists(map_filename):
            os.remove(map_filename)
        logger.error(f"Failed to create map: {e}")
        sys.exit(1)
    logger.info(f"Map saved to {map_filename}")


def main(argv: Optional[List[str]] = None) -> None:
    """
    Parses command-line arguments, imports the route,
    disregards erroneous positions and outputs the cleaned route.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.source:
        parser.print_help()
        return

    setup_logging(args)

    config = build_config(args)

    try:
        route, ordered = Route.from_file(args.source, config)
        logger.info(
            f"Loaded {route.records_read} records into {len(route)} positions"
        )
        rejected = route.clean(ordered)
    except RouteError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(
        f"Disregarded {len(rejected)} erroneous positions, {len(route)} remaining"
    )

    metrics = collect_metrics(route, rejected, reordered=not ordered)

    if args.map is not None:
        write_map(route, rejected, metrics, args)

    content = render_route(route, args.format)
    return_results(content, args.destination)

    log_metrics(metrics, args)


if __name__ == "__main__":
    main()
