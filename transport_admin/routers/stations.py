"""Stations: CRUD with soft delete and restore"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from transport_admin.database import get_gateway
from transport_admin.gateway import PersistenceGateway
from transport_admin.schemas.station import StationCreate, StationOut, StationUpdate
from transport_admin.services import station_service

router = APIRouter()


@router.get("/stations", response_model=list[StationOut], summary="List stations")
def list_stations(
    search_term: Optional[str] = None,
    include_deleted: bool = False,
    db: PersistenceGateway = Depends(get_gateway),
):
    """Search matches name, address or description (case-insensitive). Sorted by name."""
    return station_service.get_all_stations(db, search_term, include_deleted)


@router.get("/stations/{station_id}", response_model=StationOut, summary="Get a station")
def get_station(station_id: UUID, db: PersistenceGateway = Depends(get_gateway)):
    return station_service.get_station(db, station_id)


@router.post("/stations", response_model=StationOut, status_code=status.HTTP_201_CREATED,
             summary="Create a station")
def create_station(body: StationCreate, db: PersistenceGateway = Depends(get_gateway)):
    return station_service.create_station(db, body)


@router.put("/stations/{station_id}", response_model=StationOut, summary="Update a station")
def update_station(station_id: UUID, body: StationUpdate, db: PersistenceGateway = Depends(get_gateway)):
    return station_service.update_station(db, station_id, body)


@router.delete("/stations/{station_id}", status_code=status.HTTP_204_NO_CONTENT,
               summary="Soft-delete a station")
def delete_station(station_id: UUID, db: PersistenceGateway = Depends(get_gateway)):
    station_service.delete_station(db, station_id)


@router.post("/stations/{station_id}/restore", response_model=StationOut, summary="Restore a deleted station")
def restore_station(station_id: UUID, db: PersistenceGateway = Depends(get_gateway)):
    return station_service.restore_station(db, station_id)
