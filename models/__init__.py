"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    TimestampMixin,
)
from models.vehicle import (
    VehicleType,
    VehicleStatus,
    VehicleCreate,
    VehicleResponse,
)
from models.driver import DriverResponse
from models.trip import (
    TripStatus,
    TripCreate,
    TripResponse,
)
from models.commission import (
    CommissionRuleCreate,
    CommissionRuleResponse,
    ManualCommissionCreate,
    ManualCommissionResponse,
    DriverCommissionSummary,
    CommissionRankingResponse,
)
from models.trip_import import (
    ImportStatus,
    IMPORTABLE_STATUSES,
    RawTripRow,
    TripImportPreviewRow,
    TripImportSummary,
    TripImportPreviewRequest,
    TripImportPreviewResponse,
    TripImportConfirmRequest,
    TripImportResponse,
)
from models.vehicle_import import (
    RawVehicleRow,
    VehicleImportPreviewRow,
    VehicleImportPreviewRequest,
    VehicleImportPreviewResponse,
    VehicleImportResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",

    # Vehicle
    "VehicleType",
    "VehicleStatus",
    "VehicleCreate",
    "VehicleResponse",

    # Driver
    "DriverResponse",

    # Trip
    "TripStatus",
    "TripCreate",
    "TripResponse",

    # Commission
    "CommissionRuleCreate",
    "CommissionRuleResponse",
    "ManualCommissionCreate",
    "ManualCommissionResponse",
    "DriverCommissionSummary",
    "CommissionRankingResponse",

    # Trip import
    "ImportStatus",
    "IMPORTABLE_STATUSES",
    "RawTripRow",
    "TripImportPreviewRow",
    "TripImportSummary",
    "TripImportPreviewRequest",
    "TripImportPreviewResponse",
    "TripImportConfirmRequest",
    "TripImportResponse",

    # Vehicle import
    "RawVehicleRow",
    "VehicleImportPreviewRow",
    "VehicleImportPreviewRequest",
    "VehicleImportPreviewResponse",
    "VehicleImportResponse",
]
