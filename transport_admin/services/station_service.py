# transport_admin/services/station_service.py
"""
Station use cases: create, update, soft delete/restore, lookup and search.
Station names are unique among stations that are not deleted.
"""

from uuid import UUID

from transport_admin.exceptions import DomainValidationError, NotFoundError, ValidationKind
from transport_admin.gateway import PersistenceGateway
from transport_admin.models.station import Station
from transport_admin.schemas.station import StationCreate, StationOut, StationUpdate
from transport_admin.utils.logger import get_logger

logger = get_logger(__name__)

SEARCH_FIELDS = ("name", "address", "description")


def _ensure_name_free(db: PersistenceGateway, name: str, exclude_id: UUID = None):
    if db.find_first(Station, name=name.strip(), exclude_id=exclude_id):
        raise DomainValidationError(f"A station with the name '{name}' already exists", ValidationKind.DUPLICATE)


def _load_for_write(db: PersistenceGateway, station_id: UUID) -> Station:
    # Deleted rows are visible here so callers get "already deleted" instead of a 404
    station = db.get(Station, station_id, include_deleted=True)
    if station is None:
        raise NotFoundError("Station", station_id)
    return station


def create_station(db: PersistenceGateway, body: StationCreate) -> StationOut:
    _ensure_name_free(db, body.name)
    station = Station.create(body.name, body.latitude, body.longitude, body.address, body.description)
    db.add(station)
    db.commit()
    logger.info(f"Station created: {station} id={station.id}")
    return StationOut.model_validate(station)


def update_station(db: PersistenceGateway, station_id: UUID, body: StationUpdate) -> StationOut:
    station = _load_for_write(db, station_id)
    if station.is_deleted:
        raise DomainValidationError("Cannot update a deleted station. Please restore it first.",
                                    ValidationKind.INVALID_STATE)
    _ensure_name_free(db, body.name, exclude_id=station_id)

    station.update(body.name, body.latitude, body.longitude, body.address, body.description)
    db.commit()
    logger.info(f"Station updated: {station} id={station.id}")
    return StationOut.model_validate(station)


def delete_station(db: PersistenceGateway, station_id: UUID) -> None:
    station = _load_for_write(db, station_id)
    if station.is_deleted:
        raise DomainValidationError(f"Station '{station.name}' is already deleted", ValidationKind.INVALID_STATE)

    station.delete()
    db.commit()
    logger.info(f"Station soft-deleted: {station.name} id={station.id}")


def restore_station(db: PersistenceGateway, station_id: UUID) -> StationOut:
    station = _load_for_write(db, station_id)
    if not station.is_deleted:
        raise DomainValidationError(f"Station '{station.name}' is not deleted", ValidationKind.INVALID_STATE)
    _ensure_name_free(db, station.name, exclude_id=station_id)

    station.restore()
    db.commit()
    logger.info(f"Station restored: {station.name} id={station.id}")
    return StationOut.model_validate(station)


def get_station(db: PersistenceGateway, station_id: UUID) -> StationOut:
    station = db.get(Station, station_id)
    if station is None:
        raise NotFoundError("Station", station_id)
    return StationOut.model_validate(station)


def get_all_stations(db: PersistenceGateway, search_term: str = None,
                     include_deleted: bool = False) -> list[StationOut]:
    stations = db.find_all(
        Station,
        include_deleted=include_deleted,
        search=search_term,
        search_fields=SEARCH_FIELDS,
        order_by="name",
    )
    return [StationOut.model_validate(s) for s in stations]
