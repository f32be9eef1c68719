#!/usr/bin/env python3
"""
GPX serialization of cleaned routes.
"""

from datetime import datetime, timezone
import logging

import gpxpy
import gpxpy.gpx

from .route import Route

logger = logging.getLogger(__name__)


def route_to_gpx(route: Route, name: str = "Cleaned route") -> gpxpy.gpx.GPX:
    """
    Build a GPX document holding the route as a single track segment.

    Args:
        route: Route whose positions become track points, in route order
        name: Track name

    Returns:
        gpxpy GPX object
    """
    gpx = gpxpy.gpx.GPX()
    track = gpxpy.gpx.GPXTrack(name=name)
    segment = gpxpy.gpx.GPXTrackSegment()

    for position in route:
        segment.points.append(
            gpxpy.gpx.GPXTrackPoint(
                latitude=position.latitude,
                longitude=position.longitude,
                time=datetime.fromtimestamp(position.timestamp, tz=timezone.utc),
            )
        )

    track.segments.append(segment)
    gpx.tracks.append(track)

    logger.debug(f"Built GPX track with {len(segment.points)} points")
    return gpx


def route_to_gpx_xml(route: Route, name: str = "Cleaned route") -> str:
    """Serialize the route as a GPX 1.1 XML document."""
    return route_to_gpx(route, name).to_xml(version="1.1")
