"""Drivers: CRUD, status changes, soft delete and restore"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from transport_admin.database import get_gateway
from transport_admin.gateway import PersistenceGateway
from transport_admin.models.driver import DriverStatus
from transport_admin.schemas.driver import DriverCreate, DriverOut, DriverStatusChange, DriverUpdate
from transport_admin.services import driver_service

router = APIRouter()


@router.get("/drivers", response_model=list[DriverOut], summary="List drivers")
def list_drivers(
    search_term: Optional[str] = None,
    status: Optional[DriverStatus] = None,
    include_deleted: bool = False,
    db: PersistenceGateway = Depends(get_gateway),
):
    """Search matches name, license, phone or notes. Filter by status. Sorted by full name."""
    return driver_service.get_all_drivers(db, search_term, status, include_deleted)


@router.get("/drivers/{driver_id}", response_model=DriverOut, summary="Get a driver")
def get_driver(driver_id: UUID, db: PersistenceGateway = Depends(get_gateway)):
    return driver_service.get_driver(db, driver_id)


@router.post("/drivers", response_model=DriverOut, status_code=status.HTTP_201_CREATED,
             summary="Create a driver")
def create_driver(body: DriverCreate, db: PersistenceGateway = Depends(get_gateway)):
    return driver_service.create_driver(db, body)


@router.put("/drivers/{driver_id}", response_model=DriverOut, summary="Update a driver")
def update_driver(driver_id: UUID, body: DriverUpdate, db: PersistenceGateway = Depends(get_gateway)):
    return driver_service.update_driver(db, driver_id, body)


@router.patch("/drivers/{driver_id}/status", response_model=DriverOut, summary="Change driver status")
def change_driver_status(driver_id: UUID, body: DriverStatusChange, db: PersistenceGateway = Depends(get_gateway)):
    return driver_service.change_driver_status(db, driver_id, body.status)


@router.delete("/drivers/{driver_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Soft-delete a driver")
def delete_driver(driver_id: UUID, db: PersistenceGateway = Depends(get_gateway)):
    driver_service.delete_driver(db, driver_id)


@router.post("/drivers/{driver_id}/restore", response_model=DriverOut, summary="Restore a deleted driver")
def restore_driver(driver_id: UUID, db: PersistenceGateway = Depends(get_gateway)):
    return driver_service.restore_driver(db, driver_id)
