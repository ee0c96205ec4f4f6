"""
Trip API routes.

Includes the bulk import flow:
    POST /api/trips/import/preview               → reconcile pasted rows
    POST /api/trips/import/confirm/{preview_id}  → write valid + warning rows
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.trip import TripResponse, TripStatus
from models.trip_import import (
    TripImportPreviewRequest,
    TripImportPreviewResponse,
    TripImportConfirmRequest,
    TripImportResponse,
)
from services.trip_service import get_trip_service
from services.trip_import_service import get_trip_import_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/trips", tags=["Trips"])


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


# ===================
# BULK IMPORT
# ===================

@router.post("/import/preview", response_model=TripImportPreviewResponse)
async def preview_trip_import(request: TripImportPreviewRequest):
    """
    Reconcile pasted trip rows against vehicles, drivers, and commission rules.

    Nothing is saved until /import/confirm is called. Send again with a
    different has_header to recompute.
    """
    try:
        return get_trip_import_service().preview(request.text, request.has_header)
    except Exception as e:
        return handle_error(e)


@router.post("/import/confirm/{preview_id}", response_model=TripImportResponse)
async def confirm_trip_import(
    preview_id: str,
    request: Optional[TripImportConfirmRequest] = None,
):
    """
    Save the valid and warning rows of a preview as completed trips.

    Raises:
        404: Preview expired or unknown
        422: No importable rows
        503: A write failed (trips written before the failure are kept)
    """
    try:
        departure_date = request.departure_date if request else None
        return get_trip_import_service().confirm(preview_id, departure_date)
    except Exception as e:
        return handle_error(e)


# ===================
# TRIPS
# ===================

@router.get("", response_model=list[TripResponse])
async def list_trips(
    status: Optional[TripStatus] = Query(None, description="Filter by status"),
):
    """List trips, newest departure first."""
    try:
        return get_trip_service().get_all(status=status)
    except Exception as e:
        return handle_error(e)


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(trip_id: str):
    """
    Get a single trip by ID.

    Raises:
        404: Trip not found
    """
    try:
        return get_trip_service().get_by_id(trip_id)
    except Exception as e:
        return handle_error(e)
