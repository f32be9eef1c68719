#!/usr/bin/env python3
"""
Route visualization using folium maps.
"""

from typing import List
import logging
import folium
from folium.template import Template

from .geometry import Position
from .route import Route
from .metrics import RouteMetrics

logger = logging.getLogger(__name__)

ROUTE_COLOR = "#2E86AB"
REJECTED_COLOR = "#D23C4C"


class CleanRouteLegend(folium.MacroElement):
    """Custom legend with retained and rejected position counts."""

    def __init__(self, metrics: RouteMetrics):
        super().__init__()
        self.retained_count = metrics.positions_retained
        self.rejected_count = metrics.positions_rejected
        self.max_speed = metrics.max_speed_kmh

        self._template = Template(
            """
        {% macro html(this, kwargs) %}
        <div id="cleanroute-legend" style="
            position: fixed;
            bottom: 50px;
            left: 50px;
            width: 230px;
            background-color: white;
            border: 2px solid grey;
            z-index: 9999;
            font-size: 13px;
            padding: 12px;
            font-family: Arial, sans-serif;
            border-radius: 5px;
            box-shadow: 0 2px 5px rgba(0,0,0,0.2);
            box-sizing: border-box;
        ">
            <b>Legend</b><br>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: #2E86AB; font-weight: bold; font-size: 18px;">&#8212;</span>
                Cleaned Route ({{ this.retained_count }} positions)
            </div>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: #D23C4C; font-weight: bold; font-size: 18px;">&#9679;</span>
                Rejected Positions ({{ this.rejected_count }})
            </div>
            <div style="margin: 4px 0; line-height: 1.3; color: grey;">
                Speed limit: {{ this.max_speed }} km/h
            </div>
        </div>
        {% endmacro %}
        """
        )


def position_to_html(position: Position, label: str) -> str:
    """Format a position for popup display."""
    return (
        f"<b>{label}</b><br>"
        f"<i>latitude:</i> {position.latitude}<br>"
        f"<i>longitude:</i> {position.longitude}<br>"
        f"<i>timestamp:</i> {position.timestamp}"
    )


def create_route_map(
    route: Route,
    output_filename: str,
    rejected: List[Position],
    metrics: RouteMetrics,
    bbox_buffer: float = 100.0,
) -> None:
    """
    Create an interactive map showing the cleaned route and rejected positions, save as HTML.

    Args:
        route: The cleaned Route
        output_filename: Path where HTML map file should be saved
        rejected: Positions removed by the speed filter
        metrics: RouteMetrics for the legend
        bbox_buffer: Buffer around the route in meters

    Raises:
        ValueError: If route is empty
    """
    if not route:
        raise ValueError("Cannot create map for empty route")

    south, west, north, east = route.get_bbox(bbox_buffer)
    for position in rejected:
        south = min(south, position.latitude)
        north = max(north, position.latitude)
        west = min(west, position.longitude)
        east = max(east, position.longitude)

    center_lat = (south + north) / 2
    center_lon = (west + east) / 2

    logger.debug(f"Creating map centered at ({center_lat:.4f}, {center_lon:.4f})")

    route_map = folium.Map(
        location=[center_lat, center_lon],
        tiles=None,
    )

    folium.TileLayer(
        tiles="CartoDB positron",
        attr=(
            "&copy; <a href='https://www.openstreetmap.org/copyright'>OpenStreetMap</a> "
            "contributors &copy; <a href='https://carto.com/attributions'>CARTO</a>"
        ),
        name="Standard",
        control=True,
        show=True,
    ).add_to(route_map)

    folium.TileLayer(
        tiles="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        attr=(
            "Tiles &copy; Esri &mdash; Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, "
            "Getmapping, Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community"
        ),
        name="Satellite",
        control=True,
        show=False,
    ).add_to(route_map)

    folium.LayerControl().add_to(route_map)

    coordinates = [[pos.latitude, pos.longitude] for pos in route]

    folium.PolyLine(
        coordinates,
        color=ROUTE_COLOR,
        weight=3,
        opacity=0.7,
        popup="Cleaned Route",
        z_index=1,
    ).add_to(route_map)

    folium.Marker(
        [route[0].latitude, route[0].longitude],
        popup=folium.Popup(position_to_html(route[0], "Start"), max_width=300),
        icon=folium.Icon(color="green", icon="play"),
    ).add_to(route_map)

    folium.Marker(
        [route[-1].latitude, route[-1].longitude],
        popup=folium.Popup(position_to_html(route[-1], "End"), max_width=300),
        icon=folium.Icon(color="red", icon="stop"),
    ).add_to(route_map)

    for position in rejected:
        folium.CircleMarker(
            [position.latitude, position.longitude],
            radius=5,
            color=REJECTED_COLOR,
            fill=True,
            fill_opacity=0.8,
            popup=folium.Popup(
                position_to_html(position, "Rejected position"), max_width=300
            ),
        ).add_to(route_map)

    route_map.add_child(CleanRouteLegend(metrics))

    route_map.fit_bounds([[south, west], [north, east]])

    route_map.save(output_filename)

    logger.debug(
        f"Map saved to {output_filename} with {metrics.positions_retained} retained "
        f"and {metrics.positions_rejected} rejected positions"
    )
