# transport_admin/services/vehicle_service.py
"""
Vehicle use cases: fleet registration, updates, status changes, soft delete/restore,
lookup and search. Registration numbers are compared upper-cased.
"""

from uuid import UUID

from transport_admin.exceptions import DomainValidationError, NotFoundError, ValidationKind
from transport_admin.gateway import PersistenceGateway
from transport_admin.models.vehicle import Vehicle, VehicleStatus
from transport_admin.schemas.vehicle import VehicleCreate, VehicleOut, VehicleUpdate
from transport_admin.utils.logger import get_logger

logger = get_logger(__name__)

SEARCH_FIELDS = ("registration_number", "model", "notes")


def lookup_vehicle_by_registration(db: PersistenceGateway, registration_number: str):
    """Find an active (not deleted) vehicle by registration number. Returns None if not found."""
    return db.find_first(Vehicle, registration_number=registration_number.strip().upper())


def _load_for_write(db: PersistenceGateway, vehicle_id: UUID) -> Vehicle:
    vehicle = db.get(Vehicle, vehicle_id, include_deleted=True)
    if vehicle is None:
        raise NotFoundError("Vehicle", vehicle_id)
    return vehicle


def create_vehicle(db: PersistenceGateway, body: VehicleCreate) -> VehicleOut:
    if lookup_vehicle_by_registration(db, body.registration_number):
        raise DomainValidationError(
            f"A vehicle with registration number '{body.registration_number}' already exists",
            ValidationKind.DUPLICATE,
        )
    vehicle = Vehicle.create(
        body.registration_number,
        body.model,
        body.capacity,
        body.manufacture_year,
        body.status,
        body.notes,
    )
    db.add(vehicle)
    db.commit()
    logger.info(f"Vehicle registered: {vehicle} id={vehicle.id}")
    return VehicleOut.from_entity(vehicle)


def update_vehicle(db: PersistenceGateway, vehicle_id: UUID, body: VehicleUpdate) -> VehicleOut:
    vehicle = _load_for_write(db, vehicle_id)
    if vehicle.is_deleted:
        raise DomainValidationError("Cannot update a deleted vehicle. Please restore it first.",
                                    ValidationKind.INVALID_STATE)

    vehicle.update(body.model, body.capacity, body.manufacture_year, body.notes)
    db.commit()
    logger.info(f"Vehicle updated: {vehicle} id={vehicle.id}")
    return VehicleOut.from_entity(vehicle)


def change_vehicle_status(db: PersistenceGateway, vehicle_id: UUID, new_status: VehicleStatus) -> VehicleOut:
    vehicle = db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise NotFoundError("Vehicle", vehicle_id)

    previous = vehicle.status
    vehicle.change_status(new_status)
    db.commit()
    if previous != vehicle.status:
        logger.info(f"Vehicle {vehicle.registration_number} status {previous.value} → {vehicle.status.value}")
    return VehicleOut.from_entity(vehicle)


def delete_vehicle(db: PersistenceGateway, vehicle_id: UUID) -> None:
    vehicle = _load_for_write(db, vehicle_id)
    if vehicle.is_deleted:
        raise DomainValidationError(
            f"Vehicle '{vehicle.registration_number}' is already deleted", ValidationKind.INVALID_STATE)

    vehicle.delete()
    db.commit()
    logger.info(f"Vehicle soft-deleted: {vehicle} id={vehicle.id}")


def restore_vehicle(db: PersistenceGateway, vehicle_id: UUID) -> VehicleOut:
    vehicle = _load_for_write(db, vehicle_id)
    if not vehicle.is_deleted:
        raise DomainValidationError(
            f"Vehicle '{vehicle.registration_number}' is not deleted", ValidationKind.INVALID_STATE)
    if lookup_vehicle_by_registration(db, vehicle.registration_number):
        raise DomainValidationError(
            f"A vehicle with registration number '{vehicle.registration_number}' already exists",
            ValidationKind.DUPLICATE,
        )

    vehicle.restore()
    db.commit()
    logger.info(f"Vehicle restored: {vehicle} id={vehicle.id}")
    return VehicleOut.from_entity(vehicle)


def get_vehicle(db: PersistenceGateway, vehicle_id: UUID) -> VehicleOut:
    vehicle = db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise NotFoundError("Vehicle", vehicle_id)
    return VehicleOut.from_entity(vehicle)


def get_all_vehicles(db: PersistenceGateway, search_term: str = None, status: VehicleStatus = None,
                     include_deleted: bool = False) -> list[VehicleOut]:
    vehicles = db.find_all(
        Vehicle,
        include_deleted=include_deleted,
        search=search_term,
        search_fields=SEARCH_FIELDS,
        status=status,
        order_by="registration_number",
    )
    return [VehicleOut.from_entity(v) for v in vehicles]
