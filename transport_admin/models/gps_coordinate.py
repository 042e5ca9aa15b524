"""GPS coordinate value object, mapped onto stations as a composite column pair."""

import math
from dataclasses import dataclass

from transport_admin.exceptions import DomainValidationError, ValidationKind

EARTH_RADIUS_KM = 6371.0
TOLERANCE = 1e-6


@dataclass(frozen=True, eq=False)
class GPSCoordinate:
    """Immutable latitude/longitude pair in decimal degrees.

    Build through ``GPSCoordinate.create`` so ranges are checked; the plain
    constructor is what the ORM uses when it loads stored rows.
    """

    latitude: float
    longitude: float

    @classmethod
    def create(cls, latitude: float, longitude: float) -> "GPSCoordinate":
        if latitude < -90 or latitude > 90:
            raise DomainValidationError(
                f"Latitude must be between -90 and 90. Provided: {latitude}",
                ValidationKind.OUT_OF_RANGE,
            )
        if longitude < -180 or longitude > 180:
            raise DomainValidationError(
                f"Longitude must be between -180 and 180. Provided: {longitude}",
                ValidationKind.OUT_OF_RANGE,
            )
        return cls(float(latitude), float(longitude))

    def distance_to(self, other: "GPSCoordinate") -> float:
        """Great-circle distance in kilometres (Haversine)."""
        d_lat = math.radians(other.latitude - self.latitude)
        d_lon = math.radians(other.longitude - self.longitude)

        a = (math.sin(d_lat / 2) ** 2
             + math.cos(math.radians(self.latitude)) * math.cos(math.radians(other.latitude))
             * math.sin(d_lon / 2) ** 2)
        a = min(a, 1.0)  # rounding near antipodes
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return EARTH_RADIUS_KM * c

    def __composite_values__(self):
        return self.latitude, self.longitude

    def __eq__(self, other):
        if not isinstance(other, GPSCoordinate):
            return NotImplemented
        return (abs(self.latitude - other.latitude) < TOLERANCE
                and abs(self.longitude - other.longitude) < TOLERANCE)

    def __hash__(self):
        return hash((round(self.latitude, 6), round(self.longitude, 6)))

    def __str__(self) -> str:
        return f"({self.latitude:.6f}, {self.longitude:.6f})"
