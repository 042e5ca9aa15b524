# transport_admin/seeds.py
"""
Demo data for a fresh database: Novi Sad stations, a driver roster and a bus fleet.
Everything is deterministic (fixed random seed) and backdated to BASE_DATE.
seed_database() only fills tables that have no rows yet.
"""

import random
from datetime import datetime, timedelta

from transport_admin.gateway import PersistenceGateway
from transport_admin.models.driver import Driver, DriverStatus
from transport_admin.models.station import Station
from transport_admin.models.vehicle import Vehicle, VehicleStatus
from transport_admin.models.base import utc_today
from transport_admin.utils.logger import get_logger

logger = get_logger(__name__)

BASE_DATE = datetime(2024, 1, 1)

# (name, latitude, longitude, address, description)
STATIONS = [
    ("Železnička Stanica", 45.2551, 19.8420, "Bulevar Jaše Tomića bb", "Main railway station"),
    ("Autobuska Stanica", 45.2509, 19.8335, "Bulevar Jaše Tomića 6", "Main bus station"),
    ("Trg Slobode", 45.2555, 19.8447, "Trg Slobode", "City center main square"),
    ("Univerzitet", 45.2474, 19.8515, "Trg Dositeja Obradovića 6", "University campus"),
    ("Liman 1", 45.2445, 19.8280, "Bulevar oslobođenja 46", "Liman 1 neighborhood"),
    ("Liman 3", 45.2390, 19.8150, "Bulevar cara Lazara", "Liman 3 neighborhood"),
    ("Grbavica Centar", 45.2365, 19.8425, "Bulevar Mihajla Pupina", "Grbavica center"),
    ("Detelinara", 45.2295, 19.8325, "Bulevar Mihajla Pupina", "Detelinara neighborhood"),
    ("Novo Naselje", 45.2685, 19.8245, "Bulevar Evrope", "Novo Naselje center"),
    ("Petrovaradin", 45.2525, 19.8665, "Petrovaradinska tvrđava", "Petrovaradin fortress area"),
    ("Štrand", 45.2575, 19.8555, "Kej žrtava racije", "Štrand beach area"),
    ("Futog Centar", 45.2395, 19.7175, "Maršala Tita", "Futog center"),
]

# (full name, phone)
DRIVERS = [
    ("Marko Petrović", "+381641234001"),
    ("Nikola Jovanović", "+381641234002"),
    ("Stefan Nikolić", "+381641234003"),
    ("Aleksandar Đorđević", "+381641234004"),
    ("Milan Ilić", "+381641234005"),
    ("Jovana Đurić", "+381641234015"),
    ("Ana Stojanović", "+381641234016"),
    ("Milica Radovanović", "+381641234017"),
    ("Jelena Tomić", "+381641234018"),
    ("Filip Todorović", "+381641234027"),
]

# (model, capacity, first year, last year)
BUS_MODELS = [
    ("Ikarbus IK-206", 90, 2015, 2020),
    ("Ikarbus IK-218", 105, 2018, 2023),
    ("MAN Lion's City", 110, 2016, 2022),
    ("Mercedes-Benz Citaro", 100, 2017, 2023),
    ("Solaris Urbino 12", 95, 2019, 2024),
    ("Solaris Urbino 18", 140, 2020, 2024),
]

VEHICLE_COUNT = 12


def build_stations() -> list[Station]:
    return [Station.create_for_testing(BASE_DATE, *row) for row in STATIONS]


def build_drivers(rng: random.Random) -> list[Driver]:
    drivers = []
    today = utc_today()
    for i, (full_name, phone) in enumerate(DRIVERS):
        years_licensed = rng.randint(2, 19)
        issued = today.replace(year=today.year - years_licensed, day=1)
        expiry = issued.replace(year=issued.year + 10)  # licenses run for ten years

        roll = rng.randrange(100)
        if roll < 80:
            status = DriverStatus.ACTIVE
        elif roll < 95:
            status = DriverStatus.ON_LEAVE
        else:
            status = DriverStatus.SUSPENDED

        drivers.append(Driver.create_for_testing(
            BASE_DATE + timedelta(days=i),
            full_name, f"NS{i + 1:06d}", phone, issued, expiry, status,
        ))
    return drivers


def build_vehicles(rng: random.Random) -> list[Vehicle]:
    vehicles = []
    this_year = utc_today().year
    for i in range(VEHICLE_COUNT):
        model, capacity, first_year, last_year = BUS_MODELS[i % len(BUS_MODELS)]
        year = rng.randint(first_year, last_year)

        # Older buses spend more time in the workshop
        roll = rng.randrange(100)
        if this_year - year > 8 and roll < 30:
            status = VehicleStatus.MAINTENANCE
        elif roll < 5:
            status = VehicleStatus.OUT_OF_SERVICE
        else:
            status = VehicleStatus.ACTIVE

        vehicles.append(Vehicle.create_for_testing(
            BASE_DATE + timedelta(days=i),
            f"NS-{100 + i:03d}-AB", model, capacity, year, status,
        ))
    return vehicles


def seed_database(db: PersistenceGateway) -> dict:
    """Seed every empty table. Returns how many rows were added per table."""
    rng = random.Random(42)
    seeded = {}
    builders = [
        (Station, build_stations),
        (Driver, lambda: build_drivers(rng)),
        (Vehicle, lambda: build_vehicles(rng)),
    ]
    for model, build in builders:
        if db.find_all(model, include_deleted=True):
            logger.info(f"{model.__tablename__} already populated, skipping seed")
            seeded[model.__tablename__] = 0
            continue
        rows = build()
        for row in rows:
            db.add(row)
        db.commit()
        seeded[model.__tablename__] = len(rows)
        logger.info(f"Seeded {len(rows)} {model.__tablename__}")
    return seeded
