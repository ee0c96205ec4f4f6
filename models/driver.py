"""
Driver schemas.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema, TimestampMixin


class DriverResponse(BaseSchema, TimestampMixin):
    """Registered driver. Only id and name are guaranteed."""

    id: str = Field(..., description="Driver document id")
    name: str = Field(..., description="Full name, as typed on trip sheets")
    cpf: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    cnh_number: Optional[str] = None
    cnh_validity: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
