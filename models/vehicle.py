"""
Vehicle schemas for validation and serialization.
"""

from pydantic import Field, field_validator
from typing import Optional
from enum import Enum

from models.base import BaseSchema, TimestampMixin


class VehicleType(str, Enum):
    """Vehicle body types accepted by the fleet."""
    CARRO = "carro"
    TRES_QUARTOS = "3/4"
    TOCO = "toco"
    TRUCK = "truck"
    BITRUCK = "bitruck"
    CAVALO = "cavalo"
    CARRETA = "carreta"


class VehicleStatus(str, Enum):
    """Operational status."""
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    INACTIVE = "inactive"


class VehicleCreate(BaseSchema):
    """
    Create a new vehicle.

    Required: plate, type, brand, year
    Optional: model, km, refrigeration flag, notes, coupled vehicle
    """

    plate: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="License plate",
        examples=["RLJ7B45"]
    )
    type: VehicleType = Field(..., description="Vehicle body type")
    brand: str = Field(..., min_length=1, max_length=100, description="Manufacturer")
    model: str = Field("", max_length=100, description="Model name")
    year: int = Field(..., ge=1900, description="Manufacturing year")
    current_km: float = Field(0, ge=0, description="Odometer reading")
    is_refrigerated: bool = Field(False, description="Has refrigeration unit")
    status: VehicleStatus = Field(VehicleStatus.ACTIVE, description="Operational status")
    notes: str = Field("", description="Free-text notes (equipment, etc.)")
    coupled_vehicle_id: Optional[str] = Field(
        None,
        description="Trailer/tractor this vehicle is coupled to"
    )

    @field_validator("plate")
    @classmethod
    def plate_uppercase(cls, v: str) -> str:
        """Plates are stored uppercase."""
        return v.upper().strip()


class VehicleResponse(BaseSchema, TimestampMixin):
    """Vehicle as stored. Only id and plate are guaranteed."""

    id: str = Field(..., description="Vehicle document id")
    plate: str = Field(..., description="License plate")
    type: Optional[str] = None
    brand: str = ""
    model: str = ""
    year: Optional[int] = None
    current_km: float = 0
    is_refrigerated: bool = False
    status: str = VehicleStatus.ACTIVE.value
    notes: Optional[str] = None
    coupled_vehicle_id: Optional[str] = None
