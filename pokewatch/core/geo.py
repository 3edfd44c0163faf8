"""Geographic calculations - Pure functions.

This module provides the great-circle distance between a sighting and the
scan location. All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class ReferenceLocation:
    """The fixed scan location all distances are measured from.

    Attributes:
        latitude: Scan location latitude (decimal degrees)
        longitude: Scan location longitude (decimal degrees)
    """
    latitude: float
    longitude: float

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> int:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in metres, rounded to the nearest metre
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    # Rounding can push a just past 1 for near-antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    # Round half up
    return math.floor(EARTH_RADIUS_KM * c * 1000 + 0.5)


def distance_from_reference(
    reference: ReferenceLocation,
    latitude: float,
    longitude: float,
) -> int:
    """Distance in metres from the scan location to a point.

    Pure function.
    """
    return calculate_distance(
        latitude,
        longitude,
        reference.latitude,
        reference.longitude,
    )
