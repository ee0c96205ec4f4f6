"""
Custom exceptions module.

Base classes plus fleet, commission, and bulk import errors.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,
    DatabaseError,

    # Fleet
    VehicleNotFoundError,
    DriverNotFoundError,
    TripNotFoundError,

    # Commissions
    CommissionRuleNotFoundError,
    ManualCommissionNotFoundError,

    # Bulk import
    ImportPreviewNotFoundError,
    NothingToImportError,
    TripImportCommitError,
    VehicleImportCommitError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",
    "DatabaseError",

    # Fleet
    "VehicleNotFoundError",
    "DriverNotFoundError",
    "TripNotFoundError",

    # Commissions
    "CommissionRuleNotFoundError",
    "ManualCommissionNotFoundError",

    # Bulk import
    "ImportPreviewNotFoundError",
    "NothingToImportError",
    "TripImportCommitError",
    "VehicleImportCommitError",
]
