"""
Module for collecting and logging metrics related to route cleaning.
"""

import argparse
import logging
from typing import List, NamedTuple

from .geometry import Position
from .route import Route

logger = logging.getLogger(__name__)


class RouteMetrics(NamedTuple):
    """Container for route cleaning metrics data."""

    records_read: int
    duplicate_timestamps: int
    reordered: bool
    positions_rejected: int
    positions_retained: int
    max_speed_kmh: float


def collect_metrics(
    route: Route, rejected: List[Position], reordered: bool
) -> RouteMetrics:
    """
    Collect metrics from a route after erroneous positions were disregarded.

    Args:
        route: The cleaned route
        rejected: Positions removed by the speed filter
        reordered: Whether the route order had to be fixed

    Returns:
        RouteMetrics containing all collected metrics
    """
    return RouteMetrics(
        records_read=route.records_read,
        duplicate_timestamps=route.duplicate_count,
        reordered=reordered,
        positions_rejected=len(rejected),
        positions_retained=len(route),
        max_speed_kmh=route.config.max_speed,
    )


def log_metrics(metrics: RouteMetrics, args: argparse.Namespace) -> None:
    """
    Log structured metrics after cleaning the route.

    Args:
        metrics: RouteMetrics containing collected metrics
        args: argparse.Namespace object containing settings like metrics flag
    """
    if not args.metrics:
        return

    logger.debug("=== CLEANROUTE_METRICS ===")
    for key, value in metrics._asdict().items():
        logger.debug(f"{key}={value}")
    logger.debug("=== END_CLEANROUTE_METRICS ===")
