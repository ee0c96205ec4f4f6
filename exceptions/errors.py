"""
Custom exception classes for the application.

Every error carries a code, an HTTP status, and optional details so routes
can turn it into the standard error response.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "VEHICLE_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# FLEET ERRORS
# ===================

class VehicleNotFoundError(NotFoundError):
    """Vehicle not found."""

    def __init__(self, vehicle_id: str):
        super().__init__(
            resource="Vehicle",
            identifier=vehicle_id,
            code="VEHICLE_NOT_FOUND"
        )


class DriverNotFoundError(NotFoundError):
    """Driver not found."""

    def __init__(self, driver_id: str):
        super().__init__(
            resource="Driver",
            identifier=driver_id,
            code="DRIVER_NOT_FOUND"
        )


class TripNotFoundError(NotFoundError):
    """Trip not found."""

    def __init__(self, trip_id: str):
        super().__init__(
            resource="Trip",
            identifier=trip_id,
            code="TRIP_NOT_FOUND"
        )


# ===================
# COMMISSION ERRORS
# ===================

class CommissionRuleNotFoundError(NotFoundError):
    """Commission rule not found."""

    def __init__(self, rule_id: str):
        super().__init__(
            resource="Commission rule",
            identifier=rule_id,
            code="COMMISSION_RULE_NOT_FOUND"
        )


class ManualCommissionNotFoundError(NotFoundError):
    """Manual commission not found."""

    def __init__(self, commission_id: str):
        super().__init__(
            resource="Manual commission",
            identifier=commission_id,
            code="MANUAL_COMMISSION_NOT_FOUND"
        )


# ===================
# BULK IMPORT ERRORS
# ===================

class ImportPreviewNotFoundError(NotFoundError):
    """Import preview expired or never existed."""

    def __init__(self, preview_id: str):
        super().__init__(
            resource="Import preview",
            identifier=preview_id,
            code="IMPORT_PREVIEW_NOT_FOUND"
        )


class NothingToImportError(ValidationError):
    """Preview has no valid or warning rows to commit."""

    def __init__(self, skipped_errors: int, skipped_duplicates: int = 0):
        super().__init__(
            code="NOTHING_TO_IMPORT",
            message="Nenhuma linha válida para importar",
            details={
                "skipped_errors": skipped_errors,
                "skipped_duplicates": skipped_duplicates,
            }
        )


class TripImportCommitError(ExternalServiceError):
    """Persisting an import batch failed. Reported once for the whole batch."""

    def __init__(self, attempted: int, reason: str):
        super().__init__(
            service="trip_import",
            message="Erro ao importar viagens. Por favor, tente novamente.",
            details={"attempted": attempted, "reason": reason}
        )


class VehicleImportCommitError(ExternalServiceError):
    """Persisting a vehicle import batch failed."""

    def __init__(self, attempted: int, reason: str):
        super().__init__(
            service="vehicle_import",
            message="Erro ao importar veículos. Por favor, tente novamente.",
            details={"attempted": attempted, "reason": reason}
        )
