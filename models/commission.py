"""
Commission schemas.

Commission rules price a lane (origin ↔ destination, either direction).
Manual commissions are one-off payments outside of trips.
"""

from pydantic import Field
from datetime import date

from models.base import BaseSchema, TimestampMixin


class CommissionRuleCreate(BaseSchema):
    """Create a lane commission rule."""

    origin: str = Field(..., min_length=1, max_length=200, description="Lane endpoint A")
    destination: str = Field(..., min_length=1, max_length=200, description="Lane endpoint B")
    commission_value: float = Field(..., gt=0, description="Commission per trip (R$)")


class CommissionRuleResponse(BaseSchema, TimestampMixin):
    """Lane commission rule as stored."""

    id: str
    origin: str
    destination: str
    commission_value: float


class ManualCommissionCreate(BaseSchema):
    """Create a manual commission entry for a driver."""

    driver_id: str = Field(..., min_length=1, description="Driver id or free-text driver name")
    description: str = Field(..., min_length=1, max_length=500)
    origin: str = Field("", description="Optional origin reference")
    commission_value: float = Field(..., gt=0, description="Commission amount (R$)")
    notes: str = ""
    date: date


class ManualCommissionResponse(ManualCommissionCreate, TimestampMixin):
    """Manual commission as stored."""

    id: str


class DriverCommissionSummary(BaseSchema):
    """Commission totals for one driver over a period."""

    driver_id: str
    driver_name: str
    total_commission: float = 0
    trip_count: int = 0
    total_freight: float = 0
    manual_commissions: float = 0


class CommissionRankingResponse(BaseSchema):
    """Monthly commission ranking, highest total first."""

    year: int
    month: int = Field(..., ge=1, le=12)
    period_start: date
    period_end: date
    drivers: list[DriverCommissionSummary] = Field(default_factory=list)
    grand_total: float = 0
