"""
Bulk vehicle import schemas.

Pasted rows: PLACA, TIPO, MODELO, ANO, EQUIPAMENTO.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema
from models.trip_import import ImportStatus


class RawVehicleRow(BaseSchema):
    """One tab-separated line of pasted vehicle data."""

    plate: str
    type: str
    model: str
    year: str
    equipment: str
    row_index: int = Field(..., ge=1, description="1-based line number in the pasted text")


class VehicleImportPreviewRow(RawVehicleRow):
    """A pasted vehicle row after validation."""

    status: ImportStatus
    message: str = ""
    parsed_year: Optional[int] = None
    parsed_type: Optional[str] = None


class VehicleImportPreviewRequest(BaseSchema):
    """Pasted text to validate."""

    text: str = Field(..., description="Tab-separated rows: PLACA, TIPO, MODELO, ANO, EQUIPAMENTO")
    has_header: bool = Field(False, description="Skip the first line")


class VehicleImportPreviewResponse(BaseSchema):
    """Validated rows awaiting confirmation."""

    preview_id: str
    rows: list[VehicleImportPreviewRow] = Field(default_factory=list)
    importable: int = 0
    errors: int = 0
    expires_in_minutes: int = 30


class VehicleImportResponse(BaseSchema):
    """Outcome of a committed vehicle import."""

    success: bool
    imported: int
    skipped_errors: int = 0
    message: str
