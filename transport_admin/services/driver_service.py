# transport_admin/services/driver_service.py
"""
Driver use cases: create, update, status changes, soft delete/restore, lookup and search.
License numbers are compared upper-cased, the way the Driver model stores them.
"""

from uuid import UUID

from transport_admin.exceptions import DomainValidationError, NotFoundError, ValidationKind
from transport_admin.gateway import PersistenceGateway
from transport_admin.models.driver import Driver, DriverStatus
from transport_admin.schemas.driver import DriverCreate, DriverOut, DriverUpdate
from transport_admin.utils.logger import get_logger

logger = get_logger(__name__)

SEARCH_FIELDS = ("full_name", "license_number", "phone_number", "notes")


def _load_for_write(db: PersistenceGateway, driver_id: UUID) -> Driver:
    driver = db.get(Driver, driver_id, include_deleted=True)
    if driver is None:
        raise NotFoundError("Driver", driver_id)
    return driver


def _ensure_license_free(db: PersistenceGateway, license_number: str, exclude_id: UUID = None):
    if db.find_first(Driver, license_number=license_number.strip().upper(), exclude_id=exclude_id):
        raise DomainValidationError(
            f"A driver with license number '{license_number}' already exists", ValidationKind.DUPLICATE)


def create_driver(db: PersistenceGateway, body: DriverCreate) -> DriverOut:
    _ensure_license_free(db, body.license_number)
    driver = Driver.create(
        body.full_name,
        body.license_number,
        body.phone_number,
        body.license_issued_date,
        body.license_expiry_date,
        body.status,
        body.user_id,
        body.notes,
    )
    db.add(driver)
    db.commit()
    logger.info(f"Driver created: {driver} id={driver.id}")
    return DriverOut.from_entity(driver)


def update_driver(db: PersistenceGateway, driver_id: UUID, body: DriverUpdate) -> DriverOut:
    driver = _load_for_write(db, driver_id)
    if driver.is_deleted:
        raise DomainValidationError("Cannot update a deleted driver. Please restore it first.",
                                    ValidationKind.INVALID_STATE)

    driver.update(
        body.full_name,
        body.phone_number,
        body.license_issued_date,
        body.license_expiry_date,
        body.notes,
    )
    db.commit()
    logger.info(f"Driver updated: {driver} id={driver.id}")
    return DriverOut.from_entity(driver)


def change_driver_status(db: PersistenceGateway, driver_id: UUID, new_status: DriverStatus) -> DriverOut:
    driver = db.get(Driver, driver_id)
    if driver is None:
        raise NotFoundError("Driver", driver_id)

    previous = driver.status
    driver.change_status(new_status)
    db.commit()
    if previous != driver.status:
        logger.info(f"Driver {driver.license_number} status {previous.value} → {driver.status.value}")
    return DriverOut.from_entity(driver)


def delete_driver(db: PersistenceGateway, driver_id: UUID) -> None:
    driver = _load_for_write(db, driver_id)
    if driver.is_deleted:
        raise DomainValidationError(f"Driver '{driver.full_name}' is already deleted", ValidationKind.INVALID_STATE)

    driver.delete()
    db.commit()
    logger.info(f"Driver soft-deleted: {driver} id={driver.id}")


def restore_driver(db: PersistenceGateway, driver_id: UUID) -> DriverOut:
    driver = _load_for_write(db, driver_id)
    if not driver.is_deleted:
        raise DomainValidationError(f"Driver '{driver.full_name}' is not deleted", ValidationKind.INVALID_STATE)
    _ensure_license_free(db, driver.license_number, exclude_id=driver_id)

    driver.restore()
    db.commit()
    logger.info(f"Driver restored: {driver} id={driver.id}")
    return DriverOut.from_entity(driver)


def get_driver(db: PersistenceGateway, driver_id: UUID) -> DriverOut:
    driver = db.get(Driver, driver_id)
    if driver is None:
        raise NotFoundError("Driver", driver_id)
    return DriverOut.from_entity(driver)


def get_all_drivers(db: PersistenceGateway, search_term: str = None, status: DriverStatus = None,
                    include_deleted: bool = False) -> list[DriverOut]:
    drivers = db.find_all(
        Driver,
        include_deleted=include_deleted,
        search=search_term,
        search_fields=SEARCH_FIELDS,
        status=status,
        order_by="full_name",
    )
    return [DriverOut.from_entity(d) for d in drivers]
