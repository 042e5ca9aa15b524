"""
Stations table: bus/transport stops with GPS position.
Names are unique among stations that are not soft-deleted.
"""

from sqlalchemy import Column, Float, Index, String, Text, text
from sqlalchemy.orm import composite

from transport_admin.database import Base
from transport_admin.models.base import SoftDeletableEntity, optional_text, require_text
from transport_admin.models.gps_coordinate import GPSCoordinate


def _validate(name, latitude, longitude, address, description):
    name = require_text(name, "Station name", 100)
    address = require_text(address, "Station address", 200)
    description = optional_text(description, "Station description", 500)
    coordinates = GPSCoordinate.create(latitude, longitude)
    return name, coordinates, address, description


class Station(SoftDeletableEntity, Base):
    __tablename__ = "stations"
    __table_args__ = (
        Index(
            "uq_stations_name_active", "name", unique=True,
            postgresql_where=text("NOT is_deleted"), sqlite_where=text("is_deleted = 0"),
        ),
    )

    name = Column(String(100), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    address = Column(String(200), nullable=False)
    description = Column(Text)

    coordinates = composite(GPSCoordinate, latitude, longitude)

    @classmethod
    def create(cls, name: str, latitude: float, longitude: float, address: str,
               description: str = None) -> "Station":
        name, coordinates, address, description = _validate(
            name, latitude, longitude, address, description)
        return cls(name=name, coordinates=coordinates, address=address, description=description)

    def update(self, name: str, latitude: float, longitude: float, address: str,
               description: str = None):
        self.name, self.coordinates, self.address, self.description = _validate(
            name, latitude, longitude, address, description)
        self._mark_updated()

    def distance_to(self, other: "Station") -> float:
        """Kilometres between this station and another."""
        if other is None:
            raise ValueError("other station is required")
        return self.coordinates.distance_to(other.coordinates)

    def __str__(self):
        return f"{self.name} ({self.coordinates})"

    def __repr__(self):
        return f"<Station {self.name} deleted={self.is_deleted}>"
