"""
Driver API routes.

Simple read-only endpoints for driver lookup.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from models.driver import DriverResponse
from services.driver_service import get_driver_service
from exceptions import AppError

router = APIRouter(prefix="/api/drivers", tags=["Drivers"])


@router.get("", response_model=list[DriverResponse])
async def list_drivers():
    """Get all drivers ordered by name."""
    try:
        return get_driver_service().get_all()
    except AppError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_dict())


@router.get("/{driver_id}", response_model=DriverResponse)
async def get_driver(driver_id: str):
    """
    Get a single driver by ID.

    Raises:
        404: Driver not found
    """
    try:
        return get_driver_service().get_by_id(driver_id)
    except AppError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_dict())
