# Transport Admin: Database Models
# Import all models here for SQLAlchemy discovery

from transport_admin.models.station import Station          # noqa
from transport_admin.models.driver import Driver, DriverStatus      # noqa
from transport_admin.models.vehicle import Vehicle, VehicleStatus   # noqa
from transport_admin.models.gps_coordinate import GPSCoordinate     # noqa
