#!/usr/bin/env python3
"""
Cleanroute - A GPS route cleaning tool.

This package imports timestamped vehicle positions, fixes their order and
disregards positions that imply an unrealistic travel speed.
"""
import importlib.metadata

__version__ = importlib.metadata.version("cleanroute")

# Import main classes for public API
from .config import CleanRouteConfig
from .errors import ErrorKind, RouteError
from .geometry import Position, haversine_distance

from .route import Route

__all__ = [
    "CleanRouteConfig",
    "ErrorKind",
    "RouteError",
    "Position",
    "Route",
    "haversine_distance",
]
