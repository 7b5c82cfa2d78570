"""
Timeledger Backend — Report Route Handlers
===========================================

What:  The three read-only aggregate reports.

    GET /api/reports/utilization?start_date&end_date[&user_id]
    GET /api/reports/budget-consumption[?position_id|project_id|client_id]
    GET /api/reports/booking-details?user_id&start_date&end_date

Dependency wiring:
    The budget engine receives its data store through its constructor.
    get_budget_service() builds BudgetService(SqlBudgetStore(session)) for
    each request, so tests can override it with an in-memory store via
    app.dependency_overrides.
"""

import datetime as dt
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.report import (
    BookingDetails,
    BookingDetailsInput,
    BudgetConsumptionInput,
    BudgetConsumptionReport,
    UtilizationReport,
    UtilizationReportInput,
)
from app.services.budget_service import BudgetService
from app.services.report_service import report_service
from app.services.sql_budget_store import SqlBudgetStore

router = APIRouter(prefix="/api/reports", tags=["Reports"])

_errors = {
    400: {"description": "Invalid date range", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


def get_budget_service(db: AsyncSession = Depends(get_db_session)) -> BudgetService:
    return BudgetService(SqlBudgetStore(db))


@router.get(
    "/utilization",
    response_model=List[UtilizationReport],
    responses=_errors,
    summary="Utilization per user",
    description=(
        "Total and billable hours per user within the inclusive period, with "
        "utilization_rate = billable / total × 100. Users without bookings "
        "appear with zeros."
    ),
)
async def utilization_report(
    start_date: dt.date = Query(description="First day of the period"),
    end_date: dt.date = Query(description="Last day of the period"),
    user_id: int | None = Query(default=None, ge=1, description="Restrict to one user"),
    db: AsyncSession = Depends(get_db_session),
) -> List[UtilizationReport]:
    criteria = UtilizationReportInput(user_id=user_id, start_date=start_date, end_date=end_date)
    return await report_service.get_utilization_report(db, criteria)


@router.get(
    "/budget-consumption",
    response_model=List[BudgetConsumptionReport],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Budget vs. consumed amount",
    description=(
        "Compares declared budgets with hours priced at position rates. "
        "position_id takes precedence over project_id, which takes precedence "
        "over client_id. Without any id, every budgeted client, project and "
        "position is reported. Unknown ids yield an empty list."
    ),
)
async def budget_consumption_report(
    position_id: int | None = Query(default=None, ge=1),
    project_id: int | None = Query(default=None, ge=1),
    client_id: int | None = Query(default=None, ge=1),
    budget_service: BudgetService = Depends(get_budget_service),
) -> List[BudgetConsumptionReport]:
    criteria = BudgetConsumptionInput(
        position_id=position_id, project_id=project_id, client_id=client_id
    )
    return await budget_service.get_budget_consumption(criteria)


@router.get(
    "/booking-details",
    response_model=List[BookingDetails],
    responses=_errors,
    summary="A user's bookings grouped by day",
    description="Most recent day first; each entry names its position, project and client.",
)
async def booking_details(
    user_id: int = Query(ge=1, description="User whose bookings to list"),
    start_date: dt.date = Query(description="First day of the period"),
    end_date: dt.date = Query(description="Last day of the period"),
    db: AsyncSession = Depends(get_db_session),
) -> List[BookingDetails]:
    criteria = BookingDetailsInput(user_id=user_id, start_date=start_date, end_date=end_date)
    return await report_service.get_booking_details(db, criteria)
