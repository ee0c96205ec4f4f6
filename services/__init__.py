"""
Business logic services.

Each service handles one domain area.
"""

from services.vehicle_service import VehicleService, get_vehicle_service
from services.driver_service import DriverService, get_driver_service
from services.trip_service import TripService, get_trip_service
from services.commission_service import CommissionService, get_commission_service
from services.trip_import_service import (
    TripImportService,
    get_trip_import_service,
    ReferenceSnapshot,
)
from services.vehicle_import_service import (
    VehicleImportService,
    get_vehicle_import_service,
)

__all__ = [
    "VehicleService",
    "get_vehicle_service",
    "DriverService",
    "get_driver_service",
    "TripService",
    "get_trip_service",
    "CommissionService",
    "get_commission_service",
    "TripImportService",
    "get_trip_import_service",
    "ReferenceSnapshot",
    "VehicleImportService",
    "get_vehicle_import_service",
]
