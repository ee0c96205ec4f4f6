"""
Bulk trip import schemas.

Pasted spreadsheet rows (PLACA, MOTORISTA, ORIGEM, DESTINO) are parsed into
RawTripRow, reconciled into TripImportPreviewRow, and, once confirmed,
committed as TripCreate records.
"""

from pydantic import Field
from typing import Optional
from enum import Enum
from datetime import date

from models.base import BaseSchema


class ImportStatus(str, Enum):
    """Terminal classification of one pasted row."""
    VALID = "valid"
    WARNING = "warning"
    ERROR = "error"
    DUPLICATE = "duplicate"


# Rows with these statuses are written on confirm
IMPORTABLE_STATUSES = frozenset({ImportStatus.VALID, ImportStatus.WARNING})


class RawTripRow(BaseSchema):
    """One tab-separated line of pasted trip data."""

    plate: str
    driver_name: str
    origin: str
    destination: str
    row_index: int = Field(..., ge=1, description="1-based line number in the pasted text")


class TripImportPreviewRow(RawTripRow):
    """
    A pasted row after reconciliation.

    commission is None when no rule applied, which is not the same as 0
    (unregistered driver or losing duplicate).
    """

    vehicle_id: Optional[str] = None
    driver_id: Optional[str] = None
    commission: Optional[float] = None
    status: ImportStatus
    message: str = ""
    duplicate_group: Optional[str] = Field(
        None,
        description="Shared key of rows treated as the same trip"
    )


class TripImportSummary(BaseSchema):
    """Row counts by outcome."""

    total: int = 0
    importable: int = Field(0, description="valid + warning")
    valid: int = 0
    warnings: int = 0
    duplicates: int = 0
    errors: int = 0


class TripImportPreviewRequest(BaseSchema):
    """Pasted text to reconcile."""

    text: str = Field(..., description="Tab-separated rows: PLACA, MOTORISTA, ORIGEM, DESTINO")
    has_header: bool = Field(False, description="Skip the first line")


class TripImportPreviewResponse(BaseSchema):
    """Reconciled rows awaiting confirmation."""

    preview_id: str = Field(..., description="UUID to reference this preview")
    rows: list[TripImportPreviewRow] = Field(default_factory=list)
    summary: TripImportSummary
    expires_in_minutes: int = Field(30, description="Minutes until preview expires")


class TripImportConfirmRequest(BaseSchema):
    """Commit a preview. One departure date applies to the whole batch."""

    departure_date: Optional[date] = Field(
        None,
        description="Departure date stamped on every trip (defaults to today)"
    )


class TripImportResponse(BaseSchema):
    """Outcome of a committed import."""

    success: bool
    imported: int
    skipped_duplicates: int = 0
    skipped_errors: int = 0
    departure_date: date
    message: str
