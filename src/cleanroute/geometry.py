"""
Position value type and great-circle distance calculation.

Distances use a spherical Earth model; the radius defaults to 6370 km.
"""

from typing import NamedTuple, Sequence
import math

from .config import EARTH_RADIUS_KM
from .errors import ErrorKind, RouteError


class Position(NamedTuple):
    """Represents a geographic position captured at a point in time."""

    latitude: float
    longitude: float
    timestamp: int  # POSIX seconds

    def __str__(self) -> str:
        return f"{self.latitude}, {self.longitude}, {self.timestamp}"

    def distance_to(
        self, other: "Position", earth_radius: float = EARTH_RADIUS_KM
    ) -> float:
        """Great-circle distance in kilometers from this position to other."""
        return haversine_distance(self, other, earth_radius)

    def time_to(self, other: "Position") -> int:
        """
        Elapsed seconds from this position to other.

        Negative when other was captured before this position.
        """
        return other.timestamp - self.timestamp

    @classmethod
    def from_record(cls, fields: Sequence[str]) -> "Position":
        """
        Build a Position from latitude, longitude and timestamp text fields.

        Args:
            fields: Sequence of three strings in latitude, longitude, timestamp order

        Returns:
            Position parsed from the fields

        Raises:
            RouteError: If any field is not a number or a coordinate is not finite
        """
        latitude, longitude, timestamp = fields
        try:
            position = cls(
                latitude=float(latitude),
                longitude=float(longitude),
                timestamp=parse_timestamp(timestamp),
            )
        except (ValueError, OverflowError) as e:
            raise RouteError(
                ErrorKind.INVALID_RECORD_VALUE,
                f"Cannot parse position from {list(fields)}: {e}",
            ) from e

        if not (math.isfinite(position.latitude) and math.isfinite(position.longitude)):
            raise RouteError(
                ErrorKind.INVALID_RECORD_VALUE,
                f"Coordinates must be finite numbers, got {list(fields)}",
            )
        return position


def parse_timestamp(text: str) -> int:
    """Parse POSIX seconds, truncating fractional text such as "60.9"."""
    try:
        return int(text)
    except ValueError:
        # Integer text keeps full precision; only fractional text goes through float
        return int(float(text))


def haversine_distance(
    pos1: Position, pos2: Position, earth_radius: float = EARTH_RADIUS_KM
) -> float:
    """
    Calculate Haversine distance between two positions.

    Args:
        pos1: First position
        pos2: Second position
        earth_radius: Sphere radius in kilometers

    Returns:
        Distance in kilometers
    """
    lat1, lon1 = math.radians(pos1.latitude), math.radians(pos1.longitude)
    lat2, lon2 = math.radians(pos2.latitude), math.radians(pos2.longitude)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    if a > 1.0:
        a = 1.0  # rounding on near-antipodal points
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return earth_radius * c
