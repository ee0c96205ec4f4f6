"""
Vehicle API routes.

Read endpoints plus bulk import from pasted spreadsheet rows.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.vehicle import VehicleResponse
from models.vehicle_import import (
    VehicleImportPreviewRequest,
    VehicleImportPreviewResponse,
    VehicleImportResponse,
)
from services.vehicle_service import get_vehicle_service
from services.vehicle_import_service import get_vehicle_import_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/vehicles", tags=["Vehicles"])


def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


@router.post("/import/preview", response_model=VehicleImportPreviewResponse)
async def preview_vehicle_import(request: VehicleImportPreviewRequest):
    """
    Validate pasted vehicle rows (PLACA, TIPO, MODELO, ANO, EQUIPAMENTO).

    Nothing is saved until /import/confirm is called.
    """
    try:
        return get_vehicle_import_service().preview(request.text, request.has_header)
    except Exception as e:
        return handle_error(e)


@router.post("/import/confirm/{preview_id}", response_model=VehicleImportResponse)
async def confirm_vehicle_import(preview_id: str):
    """Create a vehicle for every valid row of a preview."""
    try:
        return get_vehicle_import_service().confirm(preview_id)
    except Exception as e:
        return handle_error(e)


@router.get("", response_model=list[VehicleResponse])
async def list_vehicles():
    """Get all vehicles ordered by plate."""
    try:
        return get_vehicle_service().get_all()
    except Exception as e:
        return handle_error(e)


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(vehicle_id: str):
    """
    Get a single vehicle by ID.

    Raises:
        404: Vehicle not found
    """
    try:
        return get_vehicle_service().get_by_id(vehicle_id)
    except Exception as e:
        return handle_error(e)
