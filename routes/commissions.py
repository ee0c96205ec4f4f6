"""
Commission API routes.

Lane rules, manual commissions, and the monthly driver ranking.
"""

from fastapi import APIRouter, Query, Response
from fastapi.responses import JSONResponse
from typing import Optional
from datetime import date
import structlog

from models.commission import (
    CommissionRuleCreate,
    CommissionRuleResponse,
    ManualCommissionCreate,
    ManualCommissionResponse,
    CommissionRankingResponse,
)
from services.commission_service import get_commission_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/commissions", tags=["Commissions"])


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
# RULES
# ===================

@router.get("/rules", response_model=list[CommissionRuleResponse])
async def list_rules():
    """Get all lane commission rules, newest first."""
    try:
        return get_commission_service().get_rules()
    except Exception as e:
        return handle_error(e)


@router.post("/rules", response_model=CommissionRuleResponse, status_code=201)
async def create_rule(data: CommissionRuleCreate):
    """
    Create a lane commission rule.

    A rule for SP → RJ also covers RJ → SP.
    """
    try:
        return get_commission_service().create_rule(data)
    except Exception as e:
        return handle_error(e)


@router.delete("/rules/{rule_id}", status_code=204)
async def delete_rule(rule_id: str):
    """Delete a lane commission rule."""
    try:
        get_commission_service().delete_rule(rule_id)
        return Response(status_code=204)
    except Exception as e:
        return handle_error(e)


# ===================
# MANUAL COMMISSIONS
# ===================

@router.get("/manual", response_model=list[ManualCommissionResponse])
async def list_manual_commissions(
    start_date: Optional[date] = Query(None, description="Earliest date (inclusive)"),
    end_date: Optional[date] = Query(None, description="Latest date (inclusive)"),
):
    """Get manual commissions, optionally within a date range."""
    try:
        return get_commission_service().get_manual_commissions(start_date, end_date)
    except Exception as e:
        return handle_error(e)


@router.post("/manual", response_model=ManualCommissionResponse, status_code=201)
async def create_manual_commission(data: ManualCommissionCreate):
    """Record a manual commission for a driver."""
    try:
        return get_commission_service().create_manual_commission(data)
    except Exception as e:
        return handle_error(e)


@router.delete("/manual/{commission_id}", status_code=204)
async def delete_manual_commission(commission_id: str):
    """Delete a manual commission."""
    try:
        get_commission_service().delete_manual_commission(commission_id)
        return Response(status_code=204)
    except Exception as e:
        return handle_error(e)


# ===================
# RANKING
# ===================

@router.get("/ranking", response_model=CommissionRankingResponse)
async def get_ranking(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
):
    """Driver commission ranking for one month, highest total first."""
    try:
        return get_commission_service().get_driver_ranking(year, month)
    except Exception as e:
        return handle_error(e)
