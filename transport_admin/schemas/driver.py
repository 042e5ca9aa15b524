# transport_admin/schemas/driver.py
from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from transport_admin.models.driver import Driver, DriverStatus


class DriverCreate(BaseModel):
    full_name: str
    license_number: str
    phone_number: str
    license_issued_date: date
    license_expiry_date: date
    status: DriverStatus = DriverStatus.ACTIVE
    user_id: Optional[str] = None
    notes: Optional[str] = None


class DriverUpdate(BaseModel):
    full_name: str
    phone_number: str
    license_issued_date: date
    license_expiry_date: date
    notes: Optional[str] = None


class DriverStatusChange(BaseModel):
    status: DriverStatus


class DriverOut(BaseModel):
    id: UUID
    full_name: str
    license_number: str
    phone_number: str
    license_issued_date: date
    license_expiry_date: date
    status: DriverStatus
    has_valid_license: bool
    is_available: bool
    user_id: Optional[str]
    notes: Optional[str]
    created_at: datetime
    updated_at: Optional[datetime]
    is_deleted: bool

    @classmethod
    def from_entity(cls, driver: Driver) -> "DriverOut":
        """Projection with the derived license/availability flags evaluated now."""
        return cls(
            id=driver.id,
            full_name=driver.full_name,
            license_number=driver.license_number,
            phone_number=driver.phone_number,
            license_issued_date=driver.license_issued_date,
            license_expiry_date=driver.license_expiry_date,
            status=driver.status,
            has_valid_license=driver.has_valid_license(),
            is_available=driver.is_available(),
            user_id=driver.user_id,
            notes=driver.notes,
            created_at=driver.created_at,
            updated_at=driver.updated_at,
            is_deleted=driver.is_deleted,
        )
