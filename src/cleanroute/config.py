from dataclasses import dataclass

EARTH_RADIUS_KM = 6370.0
MAX_ALLOWED_SPEED_KMH = 120.0
SECONDS_PER_HOUR = 3600

EXPECTED_NUMBER_OF_FIELDS = 3
FIELD_DELIMITER = ","
LONGEST_LINE_SIZE = 1000


@dataclass
class CleanRouteConfig:
    """Configuration for route import and cleaning."""

    earth_radius: float = EARTH_RADIUS_KM
    max_speed: float = MAX_ALLOWED_SPEED_KMH
    expected_fields: int = EXPECTED_NUMBER_OF_FIELDS
    field_delimiter: str = FIELD_DELIMITER
    max_line_length: int = LONGEST_LINE_SIZE
    reject_duplicate_timestamps: bool = False
    log_level: str = "WARNING"
    metrics: bool = False
