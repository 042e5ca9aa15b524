"""Vehicles: fleet CRUD, status changes, soft delete and restore"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from transport_admin.database import get_gateway
from transport_admin.gateway import PersistenceGateway
from transport_admin.models.vehicle import VehicleStatus
from transport_admin.schemas.vehicle import VehicleCreate, VehicleOut, VehicleStatusChange, VehicleUpdate
from transport_admin.services import vehicle_service

router = APIRouter()


@router.get("/vehicles", response_model=list[VehicleOut], summary="List vehicles")
def list_vehicles(
    search_term: Optional[str] = None,
    status: Optional[VehicleStatus] = None,
    include_deleted: bool = False,
    db: PersistenceGateway = Depends(get_gateway),
):
    """Search matches registration, model or notes. Filter by status. Sorted by registration number."""
    return vehicle_service.get_all_vehicles(db, search_term, status, include_deleted)


@router.get("/vehicles/{vehicle_id}", response_model=VehicleOut, summary="Get a vehicle")
def get_vehicle(vehicle_id: UUID, db: PersistenceGateway = Depends(get_gateway)):
    return vehicle_service.get_vehicle(db, vehicle_id)


@router.post("/vehicles", response_model=VehicleOut, status_code=status.HTTP_201_CREATED,
             summary="Register a vehicle")
def create_vehicle(body: VehicleCreate, db: PersistenceGateway = Depends(get_gateway)):
    return vehicle_service.create_vehicle(db, body)


@router.put("/vehicles/{vehicle_id}", response_model=VehicleOut, summary="Update a vehicle")
def update_vehicle(vehicle_id: UUID, body: VehicleUpdate, db: PersistenceGateway = Depends(get_gateway)):
    return vehicle_service.update_vehicle(db, vehicle_id, body)


@router.patch("/vehicles/{vehicle_id}/status", response_model=VehicleOut, summary="Change vehicle status")
def change_vehicle_status(vehicle_id: UUID, body: VehicleStatusChange,
                          db: PersistenceGateway = Depends(get_gateway)):
    return vehicle_service.change_vehicle_status(db, vehicle_id, body.status)


@router.delete("/vehicles/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Soft-delete a vehicle")
def delete_vehicle(vehicle_id: UUID, db: PersistenceGateway = Depends(get_gateway)):
    vehicle_service.delete_vehicle(db, vehicle_id)


@router.post("/vehicles/{vehicle_id}/restore", response_model=VehicleOut, summary="Restore a deleted vehicle")
def restore_vehicle(vehicle_id: UUID, db: PersistenceGateway = Depends(get_gateway)):
    return vehicle_service.restore_vehicle(db, vehicle_id)
