from datetime import datetime, timezone

import gpxpy

from cleanroute.gpx_export import route_to_gpx, route_to_gpx_xml
from cleanroute.route import Route


def make_route():
    route = Route()
    route.add_position(41.38, 2.17, 1373400000)
    route.add_position(41.39, 2.18, 1373400060)
    return route


def test_route_to_gpx_single_track_segment():
    gpx = route_to_gpx(make_route(), name="Cab 7")

    assert len(gpx.tracks) == 1
    assert gpx.tracks[0].name == "Cab 7"
    points = gpx.tracks[0].segments[0].points
    assert [(p.latitude, p.longitude) for p in points] == [(41.38, 2.17), (41.39, 2.18)]
    assert points[0].time == datetime(2013, 7, 9, 20, 0, tzinfo=timezone.utc)


def test_route_to_gpx_xml_parses_back():
    xml = route_to_gpx_xml(make_route())

    assert 'version="1.1"' in xml
    parsed = gpxpy.parse(xml)
    points = parsed.tracks[0].segments[0].points
    assert len(points) == 2
    assert points[1].time.timestamp() == 1373400060


def test_empty_route():
    gpx = route_to_gpx(Route())
    assert gpx.tracks[0].segments[0].points == []
