"""
Trip schemas for validation and serialization.

A trip links a vehicle and a driver to one origin → destination run.
"""

from pydantic import Field
from typing import Optional
from enum import Enum
from datetime import date

from models.base import BaseSchema, TimestampMixin


class TripStatus(str, Enum):
    """Trip lifecycle status."""
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TripCreate(BaseSchema):
    """
    Create a new trip.

    driver_id holds either a registered driver id or, for drivers not yet
    registered, the driver's name as typed.
    """

    vehicle_id: str = Field(..., min_length=1, description="Vehicle document id")
    driver_id: Optional[str] = Field(None, description="Driver id or free-text driver name")
    status: TripStatus = Field(TripStatus.PLANNED, description="Trip status")
    origin: str = Field(..., min_length=1, description="Origin location")
    destination: str = Field(..., min_length=1, description="Destination location")
    departure_date: date = Field(..., description="Departure date")
    arrival_date: Optional[date] = Field(None, description="Arrival date")
    freight_value: float = Field(0, ge=0, description="Freight charged (R$)")
    driver_commission: Optional[float] = Field(
        None,
        ge=0,
        description="Commission paid to the driver (R$). None when no rule applied"
    )

    # Documentation fields
    cte: str = ""
    nfe: str = ""
    pallet_term: str = ""
    mdfe: str = ""
    receipt: str = ""
    notes: str = ""


class TripResponse(TripCreate, TimestampMixin):
    """Trip as stored."""

    id: str = Field(..., description="Trip document id")
