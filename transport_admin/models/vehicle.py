"""
Vehicles table: the bus fleet.
Registration numbers are stored upper-cased and are unique among vehicles that are not soft-deleted.
"""

import enum

from sqlalchemy import Column, Enum, Index, Integer, String, Text, text

from transport_admin.database import Base
from transport_admin.exceptions import DomainValidationError, ValidationKind
from transport_admin.models.base import SoftDeletableEntity, optional_text, require_text, utcnow

MIN_CAPACITY = 1
MAX_CAPACITY = 200
MIN_MANUFACTURE_YEAR = 1900


class VehicleStatus(str, enum.Enum):
    ACTIVE = "Active"
    MAINTENANCE = "Maintenance"
    OUT_OF_SERVICE = "OutOfService"


def _validate_specs(model, capacity, manufacture_year, notes):
    model = require_text(model, "Vehicle model", 50)

    if capacity < MIN_CAPACITY:
        raise DomainValidationError(
            f"Vehicle capacity must be greater than 0. Provided: {capacity}", ValidationKind.OUT_OF_RANGE)
    if capacity > MAX_CAPACITY:
        raise DomainValidationError(
            f"Vehicle capacity cannot exceed {MAX_CAPACITY}. Provided: {capacity}", ValidationKind.OUT_OF_RANGE)

    # Upper bound moves with the wall clock on Jan 1
    max_year = utcnow().year + 1
    if manufacture_year < MIN_MANUFACTURE_YEAR or manufacture_year > max_year:
        raise DomainValidationError(
            f"Invalid manufacture year. Must be between {MIN_MANUFACTURE_YEAR} and {max_year}. "
            f"Provided: {manufacture_year}",
            ValidationKind.OUT_OF_RANGE,
        )

    notes = optional_text(notes, "Vehicle notes", 500)
    return model, capacity, manufacture_year, notes


class Vehicle(SoftDeletableEntity, Base):
    __tablename__ = "vehicles"
    __table_args__ = (
        Index(
            "uq_vehicles_registration_number_active", "registration_number", unique=True,
            postgresql_where=text("NOT is_deleted"), sqlite_where=text("is_deleted = 0"),
        ),
    )

    registration_number = Column(String(20), nullable=False)
    model = Column(String(50), nullable=False)
    capacity = Column(Integer, nullable=False)
    manufacture_year = Column(Integer, nullable=False)
    status = Column(
        Enum(VehicleStatus, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=VehicleStatus.ACTIVE, index=True,
    )
    notes = Column(Text)

    @classmethod
    def create(cls, registration_number: str, model: str, capacity: int, manufacture_year: int,
               status: VehicleStatus = VehicleStatus.ACTIVE, notes: str = None) -> "Vehicle":
        registration_number = require_text(registration_number, "Vehicle registration number", 20)
        model, capacity, manufacture_year, notes = _validate_specs(model, capacity, manufacture_year, notes)

        return cls(
            registration_number=registration_number.upper(),
            model=model,
            capacity=capacity,
            manufacture_year=manufacture_year,
            status=VehicleStatus(status),
            notes=notes,
        )

    def update(self, model: str, capacity: int, manufacture_year: int, notes: str = None):
        """Registration number is immutable after creation."""
        self.model, self.capacity, self.manufacture_year, self.notes = _validate_specs(
            model, capacity, manufacture_year, notes)
        self._mark_updated()

    def change_status(self, new_status: VehicleStatus):
        if self.status == new_status:
            return
        self.status = VehicleStatus(new_status)
        self._mark_updated()

    def is_available(self) -> bool:
        return self.status == VehicleStatus.ACTIVE and not self.is_deleted

    def __str__(self):
        return f"{self.model} ({self.registration_number})"

    def __repr__(self):
        return f"<Vehicle {self.registration_number} status={self.status.value} deleted={self.is_deleted}>"
