# transport_admin/schemas/vehicle.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from uuid import UUID

from transport_admin.models.vehicle import Vehicle, VehicleStatus


class VehicleCreate(BaseModel):
    registration_number: str
    model: str
    capacity: int
    manufacture_year: int
    status: VehicleStatus = VehicleStatus.ACTIVE
    notes: Optional[str] = None


class VehicleUpdate(BaseModel):
    model: str
    capacity: int
    manufacture_year: int
    notes: Optional[str] = None


class VehicleStatusChange(BaseModel):
    status: VehicleStatus


class VehicleOut(BaseModel):
    id: UUID
    registration_number: str
    model: str
    capacity: int
    manufacture_year: int
    status: VehicleStatus
    is_available: bool
    notes: Optional[str]
    created_at: datetime
    updated_at: Optional[datetime]
    is_deleted: bool

    @classmethod
    def from_entity(cls, vehicle: Vehicle) -> "VehicleOut":
        return cls(
            id=vehicle.id,
            registration_number=vehicle.registration_number,
            model=vehicle.model,
            capacity=vehicle.capacity,
            manufacture_year=vehicle.manufacture_year,
            status=vehicle.status,
            is_available=vehicle.is_available(),
            notes=vehicle.notes,
            created_at=vehicle.created_at,
            updated_at=vehicle.updated_at,
            is_deleted=vehicle.is_deleted,
        )
