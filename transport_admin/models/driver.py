"""
Drivers table: bus drivers and their licenses.
License numbers are stored upper-cased and are unique among drivers that are not soft-deleted.
user_id is a loose reference to an account in the identity system; nothing cascades from it.
"""

import enum
from datetime import date, datetime

from sqlalchemy import Column, Date, Enum, Index, String, Text, text

from transport_admin.database import Base
from transport_admin.exceptions import DomainValidationError, ValidationKind
from transport_admin.models.base import (
    SoftDeletableEntity, optional_text, require_text, utc_today,
)


class DriverStatus(str, enum.Enum):
    ACTIVE = "Active"
    ON_LEAVE = "OnLeave"
    SUSPENDED = "Suspended"


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _validate_contact(full_name, phone_number):
    return require_text(full_name, "Driver full name", 100), require_text(phone_number, "Driver phone number", 20)


def _validate_license_dates(issued, expiry):
    issued, expiry = _as_date(issued), _as_date(expiry)
    if issued is None or expiry is None:
        raise DomainValidationError("License dates are required", ValidationKind.EMPTY_FIELD)
    if issued > utc_today():
        raise DomainValidationError("License issued date cannot be in the future", ValidationKind.OUT_OF_RANGE)
    if expiry <= issued:
        raise DomainValidationError("License expiry date must be after the issued date",
                                    ValidationKind.INVALID_DATE_ORDER)
    return issued, expiry


class Driver(SoftDeletableEntity, Base):
    __tablename__ = "drivers"
    __table_args__ = (
        Index(
            "uq_drivers_license_number_active", "license_number", unique=True,
            postgresql_where=text("NOT is_deleted"), sqlite_where=text("is_deleted = 0"),
        ),
    )

    full_name = Column(String(100), nullable=False)
    license_number = Column(String(50), nullable=False)
    phone_number = Column(String(20), nullable=False)
    license_issued_date = Column(Date, nullable=False)
    license_expiry_date = Column(Date, nullable=False)
    status = Column(
        Enum(DriverStatus, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=DriverStatus.ACTIVE, index=True,
    )
    user_id = Column(String(450))
    notes = Column(Text)

    @classmethod
    def create(cls, full_name: str, license_number: str, phone_number: str,
               license_issued_date: date, license_expiry_date: date,
               status: DriverStatus = DriverStatus.ACTIVE, user_id: str = None,
               notes: str = None) -> "Driver":
        full_name = require_text(full_name, "Driver full name", 100)
        license_number = require_text(license_number, "Driver license number", 50)
        phone_number = require_text(phone_number, "Driver phone number", 20)
        issued, expiry = _validate_license_dates(license_issued_date, license_expiry_date)
        notes = optional_text(notes, "Driver notes", 500)

        return cls(
            full_name=full_name,
            license_number=license_number.upper(),
            phone_number=phone_number,
            license_issued_date=issued,
            license_expiry_date=expiry,
            status=DriverStatus(status),
            user_id=user_id,
            notes=notes,
        )

    def update(self, full_name: str, phone_number: str, license_issued_date: date,
               license_expiry_date: date, notes: str = None):
        """License number is immutable after creation."""
        full_name, phone_number = _validate_contact(full_name, phone_number)
        issued, expiry = _validate_license_dates(license_issued_date, license_expiry_date)
        notes = optional_text(notes, "Driver notes", 500)

        self.full_name = full_name
        self.phone_number = phone_number
        self.license_issued_date = issued
        self.license_expiry_date = expiry
        self.notes = notes
        self._mark_updated()

    def change_status(self, new_status: DriverStatus):
        if self.status == new_status:
            return
        self.status = DriverStatus(new_status)
        self._mark_updated()

    def link_to_user(self, user_id: str):
        if user_id is None or not user_id.strip():
            raise DomainValidationError("User ID cannot be empty", ValidationKind.EMPTY_FIELD)
        self.user_id = user_id
        self._mark_updated()

    def unlink_from_user(self):
        self.user_id = None
        self._mark_updated()

    def has_valid_license(self) -> bool:
        return self.license_expiry_date >= utc_today()

    def is_available(self) -> bool:
        return self.status == DriverStatus.ACTIVE and self.has_valid_license() and not self.is_deleted

    def __str__(self):
        return f"{self.full_name} ({self.license_number})"

    def __repr__(self):
        return f"<Driver {self.license_number} status={self.status.value} deleted={self.is_deleted}>"
