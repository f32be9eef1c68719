#!/usr/bin/env python3
"""
Route data model for cleaning recorded vehicle positions.
"""

from typing import Dict, Iterable, Iterator, List, Optional, TextIO, Tuple
import csv
import logging
import math
from math import cos, radians

from .config import CleanRouteConfig, SECONDS_PER_HOUR
from .errors import ErrorKind, RouteError
from .geometry import Position

logger = logging.getLogger(__name__)


class Route:
    """Represents a recorded route as positions keyed by timestamp."""

    def __init__(self, config: Optional[CleanRouteConfig] = None):
        """Initializes an empty Route.

        Args:
            config: Import and filter settings. Defaults to CleanRouteConfig().
        """
        self.config = config if config is not None else CleanRouteConfig()
        self.positions: Dict[int, Position] = {}
        self.duplicate_count = 0
        self.records_read = 0

    def __str__(self) -> str:
        return "".join(f"{position}\n" for position in self.positions.values())

    def __len__(self) -> int:
        """Return number of positions in route."""
        return len(self.positions)

    def __iter__(self) -> Iterator[Position]:
        """Iterate over positions in route order."""
        return iter(self.positions.values())

    def __getitem__(self, index: int) -> Position:
        """Allow positional indexing into the route order."""
        return list(self.positions.values())[index]

    def __contains__(self, item: object) -> bool:
        """Check membership by timestamp, or by exact match for a Position."""
        if isinstance(item, Position):
            return self.positions.get(item.timestamp) == item
        return item in self.positions

    def add_position(self, latitude: float, longitude: float, timestamp: int) -> None:
        """
        Add a position to the route, replacing any position with the same timestamp.

        Args:
            latitude: North-south angular location in degrees
            longitude: East-west angular location in degrees
            timestamp: POSIX time in seconds when the location was captured

        Raises:
            RouteError: If the timestamp is already present and the config
                rejects duplicate timestamps
        """
        self._insert(Position(float(latitude), float(longitude), int(timestamp)))

    def _insert(self, position: Position) -> None:
        if position.timestamp in self.positions:
            if self.config.reject_duplicate_timestamps:
                raise RouteError(
                    ErrorKind.SAME_TIMESTAMP,
                    f"Same timestamp for two positions: {position.timestamp}",
                )
            self.duplicate_count += 1
            logger.debug(
                f"Replacing {self.positions[position.timestamp]} with {position}"
            )
        self.positions[position.timestamp] = position

    def remove_position(self, position: Position) -> None:
        """Remove the position stored under position.timestamp, if any."""
        self.positions.pop(position.timestamp, None)

    def fix_order(self) -> None:
        """Sort positions by ascending timestamp."""
        self.positions = dict(sorted(self.positions.items()))

    def is_ordered(self) -> bool:
        """Return True if timestamps strictly increase in route order."""
        timestamps = list(self.positions)
        return all(t1 < t2 for t1, t2 in zip(timestamps, timestamps[1:]))

    def disregard_erroneous_positions(self) -> List[Position]:
        """
        Remove positions that imply an unrealistic speed.

        Walks the route once in its current order. A position is erroneous
        when the speed needed to reach it from the last accepted position
        exceeds config.max_speed. The first position is always accepted, so
        it must be correct, and the route should be ordered beforehand.

        Returns:
            The rejected positions in route order

        Raises:
            RouteError: If the position collection has been replaced by
                something other than a dict
        """
        if not isinstance(self.positions, dict):
            raise RouteError(
                ErrorKind.INVALID_COLLECTION_STATE,
                f"Route positions must be a dict, got {type(self.positions).__name__}",
            )

        candidates = list(self.positions.values())
        if len(candidates) < 2:
            return []

        previous = candidates[0]
        retained = [previous]
        rejected = []

        for current in candidates[1:]:
            speed = self._speed_between(previous, current)
            if speed > self.config.max_speed:
                logger.debug(f"Erroneous position: {current} ({speed:.2f} km/h)")
                rejected.append(current)
            else:
                retained.append(current)
                previous = current

        self.positions = {position.timestamp: position for position in retained}

        if rejected:
            logger.debug(
                f"Disregarded {len(rejected)} of {len(candidates)} positions "
                f"exceeding {self.config.max_speed} km/h"
            )
        return rejected

    def _speed_between(self, previous: Position, current: Position) -> float:
        """Speed in km/h; infinite when no time elapsed."""
        distance = previous.distance_to(current, self.config.earth_radius)
        elapsed = previous.time_to(current)
        if elapsed == 0:
            return math.inf
        return distance / (elapsed / SECONDS_PER_HOUR)

    def clean(self, ordered: bool) -> List[Position]:
        """
        Fix the order if needed, then disregard erroneous positions.

        Args:
            ordered: Whether the import saw strictly increasing timestamps

        Returns:
            The rejected positions
        """
        if not ordered:
            logger.warning("Input positions are not in timestamp order, fixing order")
            self.fix_order()
        return self.disregard_erroneous_positions()

    def import_from_csv(self, file_input: TextIO) -> bool:
        """
        Import latitude,longitude,timestamp records from a text stream.

        Args:
            file_input: File-like object with one record per line

        Returns:
            True if timestamps arrived strictly increasing, False otherwise

        Raises:
            RouteError: If a record has the wrong number of fields, a line is
                too long, or a field is not a number
        """
        is_ordered = True
        latest_timestamp: Optional[int] = None
        reader = csv.reader(
            self._checked_lines(file_input), delimiter=self.config.field_delimiter
        )
        for record in reader:
            line_number = reader.line_num
            if len(record) != self.config.expected_fields:
                raise RouteError(
                    ErrorKind.INVALID_RECORD_SHAPE,
                    f"Wrong number of fields on line {line_number}: "
                    f"expected {self.config.expected_fields}, got {len(record)}",
                )

            position = Position.from_record(record)
            self._insert(position)
            self.records_read += 1

            if latest_timestamp is not None and latest_timestamp >= position.timestamp:
                is_ordered = False
            else:
                latest_timestamp = position.timestamp

        logger.debug(
            f"Imported {self.records_read} records into {len(self.positions)} positions "
            f"({'ordered' if is_ordered else 'unordered'})"
        )
        return is_ordered

    def _checked_lines(self, lines: Iterable[str]) -> Iterator[str]:
        for line_number, line in enumerate(lines, start=1):
            if len(line.rstrip("\r\n")) > self.config.max_line_length:
                raise RouteError(
                    ErrorKind.INVALID_RECORD_SHAPE,
                    f"Line {line_number} is longer than "
                    f"{self.config.max_line_length} characters",
                )
            yield line

    def import_from_file(self, filename: str) -> bool:
        """
        Import a CSV file of route positions.

        Args:
            filename: Path to the CSV file

        Returns:
            True if timestamps arrived strictly increasing, False otherwise

        Raises:
            RouteError: If the file cannot be read or contains invalid records
        """
        logger.debug(f"Reading route file: {filename}")
        try:
            with open(filename, "r", encoding="utf-8-sig", newline="") as f:
                return self.import_from_csv(f)
        except FileNotFoundError as e:
            raise RouteError(
                ErrorKind.SOURCE_UNAVAILABLE, f"File does not exist: {filename}"
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise RouteError(
                ErrorKind.SOURCE_UNAVAILABLE, f"Cannot read {filename}: {e}"
            ) from e

    @classmethod
    def from_file(
        cls, filename: str, config: Optional[CleanRouteConfig] = None
    ) -> Tuple["Route", bool]:
        """
        Load a CSV file into a new route.

        Returns:
            Tuple of (route, ordered flag)
        """
        route = cls(config)
        ordered = route.import_from_file(filename)
        return route, ordered

    def get_bbox(self, buffer: float = 0.0) -> Tuple[float, float, float, float]:
        """
        Get bounding box for this route, optionally with a buffer.

        Args:
            buffer: Buffer distance in meters (default: 0.0)

        Returns:
            Tuple of (south, west, north, east) in decimal degrees

        Raises:
            ValueError: If the route is empty
        """
        if not self.positions:
            raise ValueError("Cannot compute bounding box of an empty route")

        latitudes = [pos.latitude for pos in self]
        longitudes = [pos.longitude for pos in self]
        min_lat, max_lat = min(latitudes), max(latitudes)
        min_lon, max_lon = min(longitudes), max(longitudes)

        if buffer == 0.0:
            return (min_lat, min_lon, max_lat, max_lon)

        # 1 degree latitude ≈ 111 km; longitude scaled by the average latitude
        avg_lat = (min_lat + max_lat) / 2
        lat_buffer = buffer / 111000.0
        lon_buffer = buffer / (111000.0 * max(abs(cos(radians(avg_lat))), 1e-6))

        return (
            max(-90.0, min_lat - lat_buffer),
            max(-180.0, min_lon - lon_buffer),
            min(90.0, max_lat + lat_buffer),
            min(180.0, max_lon + lon_buffer),
        )
