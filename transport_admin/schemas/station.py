# transport_admin/schemas/station.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from uuid import UUID


class StationCreate(BaseModel):
    name: str
    latitude: float
    longitude: float
    address: str
    description: Optional[str] = None


class StationUpdate(StationCreate):
    pass


class StationOut(BaseModel):
    id: UUID
    name: str
    latitude: float
    longitude: float
    address: str
    description: Optional[str]
    created_at: datetime
    updated_at: Optional[datetime]
    is_deleted: bool

    class Config:
        from_attributes = True
