"""
Bulk vehicle import from pasted spreadsheet rows.

Same preview-then-confirm flow as trip import, without cross-referencing:
each row is checked on its own.
"""

from datetime import date
from typing import Optional
import structlog

from config import settings
from models.vehicle import VehicleCreate, VehicleType
from models.trip_import import ImportStatus
from models.vehicle_import import (
    RawVehicleRow,
    VehicleImportPreviewRow,
    VehicleImportPreviewResponse,
    VehicleImportResponse,
)
from parsers.tabular_parser import parse_vehicle_rows
from services import preview_cache_service
from services.vehicle_service import VehicleService, get_vehicle_service
from utils.text_utils import is_blank
from exceptions import (
    DatabaseError,
    ImportPreviewNotFoundError,
    NothingToImportError,
    VehicleImportCommitError,
)

logger = structlog.get_logger(__name__)

PREVIEW_KIND = "vehicles"
MIN_YEAR = 1900

MSG_PLATE_EMPTY = "Placa vazia"
MSG_TYPE_INVALID = "Tipo inválido (deve ser: carro, 3/4, toco, truck, bitruck, cavalo ou carreta)"
MSG_MODEL_EMPTY = "Modelo vazio"
MSG_YEAR_INVALID = "Ano inválido"


def normalize_vehicle_type(raw: str) -> Optional[VehicleType]:
    """Map a typed vehicle type to VehicleType, case-insensitive."""
    try:
        return VehicleType(raw.strip().lower())
    except ValueError:
        return None


def parse_year(raw: str, today: Optional[date] = None) -> Optional[int]:
    """Year as int when within [1900, next year], else None."""
    try:
        year = int(raw.strip())
    except ValueError:
        return None

    max_year = (today or date.today()).year + 1
    if year < MIN_YEAR or year > max_year:
        return None
    return year


def validate_vehicle_row(row: RawVehicleRow, today: Optional[date] = None) -> VehicleImportPreviewRow:
    """Check one pasted vehicle row; all problems are reported together."""
    errors: list[str] = []

    if is_blank(row.plate):
        errors.append(MSG_PLATE_EMPTY)

    vehicle_type = normalize_vehicle_type(row.type)
    if vehicle_type is None:
        errors.append(MSG_TYPE_INVALID)

    if is_blank(row.model):
        errors.append(MSG_MODEL_EMPTY)

    year = parse_year(row.year, today)
    if year is None:
        errors.append(MSG_YEAR_INVALID)

    if errors:
        return VehicleImportPreviewRow(
            **row.model_dump(),
            status=ImportStatus.ERROR,
            message=", ".join(errors),
        )

    return VehicleImportPreviewRow(
        **row.model_dump(),
        status=ImportStatus.VALID,
        message="",
        parsed_year=year,
        parsed_type=vehicle_type.value,
    )


def build_vehicle_records(preview: list[VehicleImportPreviewRow]) -> list[VehicleCreate]:
    """
    Turn non-error rows into vehicles.

    The first word of MODELO is the brand, the rest is the model
    ("VOLVO FH 540" → brand "VOLVO", model "FH 540").
    """
    records: list[VehicleCreate] = []

    for row in preview:
        if row.status == ImportStatus.ERROR:
            continue

        brand, _, model = row.model.strip().partition(" ")

        records.append(VehicleCreate(
            plate=row.plate,
            type=VehicleType(row.parsed_type),
            brand=brand or row.model,
            model=model.strip(),
            year=row.parsed_year,
            current_km=0,
            is_refrigerated=True,
            notes=row.equipment or "",
            coupled_vehicle_id=None,
        ))

    return records


class VehicleImportService:
    """Preview-then-confirm flow for bulk vehicle import."""

    def __init__(self, vehicle_service: Optional[VehicleService] = None):
        self.vehicle_service = vehicle_service or get_vehicle_service()

    def preview(self, text: str, has_header: bool = False) -> VehicleImportPreviewResponse:
        """Validate pasted vehicle rows and store them for confirmation."""
        rows = [validate_vehicle_row(row) for row in parse_vehicle_rows(text, has_header)]
        errors = sum(1 for r in rows if r.status == ImportStatus.ERROR)

        preview_id = preview_cache_service.store_preview(PREVIEW_KIND, {"rows": rows})

        logger.info(
            "vehicle_import_preview_created",
            preview_id=preview_id,
            total=len(rows),
            errors=errors,
        )

        return VehicleImportPreviewResponse(
            preview_id=preview_id,
            rows=rows,
            importable=len(rows) - errors,
            errors=errors,
            expires_in_minutes=settings.import_preview_ttl_minutes,
        )

    def confirm(self, preview_id: str) -> VehicleImportResponse:
        """
        Create vehicles for every non-error row of a preview.

        Raises:
            ImportPreviewNotFoundError: Preview expired or unknown
            NothingToImportError: No valid rows
            VehicleImportCommitError: A write failed; earlier writes are kept
        """
        payload = preview_cache_service.retrieve_preview(PREVIEW_KIND, preview_id)
        if payload is None:
            raise ImportPreviewNotFoundError(preview_id)

        rows: list[VehicleImportPreviewRow] = payload["rows"]
        records = build_vehicle_records(rows)
        skipped = len(rows) - len(records)

        if not records:
            raise NothingToImportError(skipped_errors=skipped)

        try:
            for record in records:
                self.vehicle_service.create(record)
        except DatabaseError as e:
            logger.error(
                "vehicle_import_commit_failed",
                preview_id=preview_id,
                attempted=len(records),
                error=e.message,
            )
            raise VehicleImportCommitError(attempted=len(records), reason=e.message) from e

        preview_cache_service.delete_preview(preview_id)

        logger.info("vehicle_import_committed", preview_id=preview_id, imported=len(records))

        return VehicleImportResponse(
            success=True,
            imported=len(records),
            skipped_errors=skipped,
            message=f"{len(records)} veículo(s) importado(s) com sucesso!",
        )


# Singleton instance
_service: Optional[VehicleImportService] = None


def get_vehicle_import_service() -> VehicleImportService:
    """Get or create VehicleImportService instance."""
    global _service
    if _service is None:
        _service = VehicleImportService()
    return _service
