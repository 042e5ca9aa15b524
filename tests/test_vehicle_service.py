"""Vehicle use cases, run against both gateway implementations."""

import uuid

import pytest
from unittest.mock import MagicMock
from transport_admin.exceptions import DomainValidationError, NotFoundError, PersistenceError, ValidationKind
from transport_admin.models.vehicle import Vehicle, VehicleStatus
from transport_admin.schemas.vehicle import VehicleCreate, VehicleUpdate
from transport_admin.services import vehicle_service


def make_body(registration_number="NS-101-AB", model="MAN Lion's City", capacity=110, manufacture_year=2019, **kw):
    return VehicleCreate(registration_number=registration_number, model=model, capacity=capacity,
                         manufacture_year=manufacture_year, **kw)


class TestCreateVehicle:
    def test_create(self, gateway):
        out = vehicle_service.create_vehicle(gateway, make_body(registration_number="ns-101-ab"))
        assert out.registration_number == "NS-101-AB"
        assert out.is_available is True

    def test_duplicate_registration_rejected(self, gateway):
        vehicle_service.create_vehicle(gateway, make_body())
        with pytest.raises(DomainValidationError, match="already exists") as exc:
            vehicle_service.create_vehicle(gateway, make_body(registration_number="ns-101-ab", model="Other"))
        assert exc.value.kind == ValidationKind.DUPLICATE

    def test_create_in_maintenance_not_available(self, gateway):
        out = vehicle_service.create_vehicle(gateway, make_body(status=VehicleStatus.MAINTENANCE))
        assert out.status == VehicleStatus.MAINTENANCE
        assert out.is_available is False

    def test_lookup_by_registration(self, gateway):
        vehicle_service.create_vehicle(gateway, make_body())
        assert vehicle_service.lookup_vehicle_by_registration(gateway, " ns-101-ab ") is not None
        assert vehicle_service.lookup_vehicle_by_registration(gateway, "NS-999-ZZ") is None


class TestUpdateVehicle:
    def test_update(self, gateway):
        created = vehicle_service.create_vehicle(gateway, make_body())
        out = vehicle_service.update_vehicle(gateway, created.id, VehicleUpdate(
            model="Solaris Urbino 18", capacity=140, manufacture_year=2022, notes="articulated"))
        assert out.model == "Solaris Urbino 18"
        assert out.capacity == 140
        assert out.registration_number == "NS-101-AB"

    def test_update_deleted_vehicle_leaves_fields_unchanged(self, gateway):
        created = vehicle_service.create_vehicle(gateway, make_body())
        vehicle_service.delete_vehicle(gateway, created.id)

        with pytest.raises(DomainValidationError, match="Cannot update a deleted vehicle"):
            vehicle_service.update_vehicle(gateway, created.id, VehicleUpdate(
                model="Solaris Urbino 18", capacity=140, manufacture_year=2022))

        stored = gateway.get(Vehicle, created.id, include_deleted=True)
        assert stored.model == "MAN Lion's City"
        assert stored.capacity == 110
        assert stored.manufacture_year == 2019
        assert stored.is_deleted is True

    def test_update_unknown(self, gateway):
        with pytest.raises(NotFoundError, match="Vehicle with ID"):
            vehicle_service.update_vehicle(gateway, uuid.uuid4(), VehicleUpdate(
                model="X", capacity=10, manufacture_year=2020))


class TestChangeVehicleStatus:
    def test_change(self, gateway):
        created = vehicle_service.create_vehicle(gateway, make_body())
        out = vehicle_service.change_vehicle_status(gateway, created.id, VehicleStatus.OUT_OF_SERVICE)
        assert out.status == VehicleStatus.OUT_OF_SERVICE
        assert out.is_available is False
        assert out.updated_at is not None

    def test_same_status_leaves_updated_at(self, gateway):
        created = vehicle_service.create_vehicle(gateway, make_body())
        out = vehicle_service.change_vehicle_status(gateway, created.id, VehicleStatus.ACTIVE)
        assert out.updated_at is None

    def test_unknown(self, gateway):
        with pytest.raises(NotFoundError):
            vehicle_service.change_vehicle_status(gateway, uuid.uuid4(), VehicleStatus.ACTIVE)


class TestDeleteAndRestoreVehicle:
    def test_delete_and_restore(self, gateway):
        created = vehicle_service.create_vehicle(gateway, make_body())
        vehicle_service.delete_vehicle(gateway, created.id)
        with pytest.raises(NotFoundError):
            vehicle_service.get_vehicle(gateway, created.id)

        out = vehicle_service.restore_vehicle(gateway, created.id)
        assert out.is_deleted is False
        assert vehicle_service.get_vehicle(gateway, created.id).registration_number == "NS-101-AB"

    def test_delete_twice(self, gateway):
        created = vehicle_service.create_vehicle(gateway, make_body())
        vehicle_service.delete_vehicle(gateway, created.id)
        with pytest.raises(DomainValidationError, match="'NS-101-AB' is already deleted"):
            vehicle_service.delete_vehicle(gateway, created.id)


class TestGetAllVehicles:
    def test_filters(self, gateway):
        vehicle_service.create_vehicle(gateway, make_body(registration_number="NS-102-AB", model="Ikarbus IK-218"))
        vehicle_service.create_vehicle(gateway, make_body(registration_number="NS-100-AB", model="Solaris Urbino 12",
                                                          notes="new tyres"))
        in_shop = vehicle_service.create_vehicle(gateway, make_body(registration_number="NS-101-AB",
                                                                    status=VehicleStatus.MAINTENANCE))

        assert [v.registration_number for v in vehicle_service.get_all_vehicles(gateway)] == [
            "NS-100-AB", "NS-101-AB", "NS-102-AB"]
        assert [v.id for v in vehicle_service.get_all_vehicles(gateway, status=VehicleStatus.MAINTENANCE)] == [
            in_shop.id]
        assert [v.registration_number for v in vehicle_service.get_all_vehicles(gateway, search_term="TYRES")] == [
            "NS-100-AB"]
        assert [v.registration_number for v in vehicle_service.get_all_vehicles(gateway, search_term="ikarbus")] == [
            "NS-102-AB"]


class TestVehicleServiceFailures:
    def test_commit_failure_propagates(self):
        db = MagicMock()
        db.find_first.return_value = None
        db.commit.side_effect = PersistenceError("Constraint violation: duplicate")

        with pytest.raises(PersistenceError):
            vehicle_service.create_vehicle(db, make_body())
        db.add.assert_called_once()

    def test_validation_failure_never_touches_store(self):
        db = MagicMock()
        db.find_first.return_value = None

        with pytest.raises(DomainValidationError):
            vehicle_service.create_vehicle(db, make_body(capacity=0))
        db.add.assert_not_called()
        db.commit.assert_not_called()
