"""
Timeledger Backend — Time Entry Route Handlers
===============================================

What:  POST /api/time-entries (book hours) and
       GET /api/users/{user_id}/time-entries (a user's bookings, newest first).
"""

import datetime as dt
from typing import List

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.time_entry import TimeEntryCreate, TimeEntryResponse
from app.services.time_entry_service import time_entry_service

router = APIRouter(prefix="/api", tags=["Time Entries"])


@router.post(
    "/time-entries",
    response_model=TimeEntryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "User or position does not exist", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Book hours on a position",
)
async def create_time_entry(
    payload: TimeEntryCreate,
    db: AsyncSession = Depends(get_db_session),
) -> TimeEntryResponse:
    return await time_entry_service.create_time_entry(db, payload)


@router.get(
    "/users/{user_id}/time-entries",
    response_model=List[TimeEntryResponse],
    responses={
        400: {"description": "Inverted date range", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List a user's time entries",
    description=(
        "Returns the user's bookings, newest date first. "
        "start_date and end_date are optional inclusive bounds."
    ),
)
async def list_time_entries(
    user_id: int = Path(ge=1, description="User ID"),
    start_date: dt.date | None = Query(default=None, description="First day to include"),
    end_date: dt.date | None = Query(default=None, description="Last day to include"),
    db: AsyncSession = Depends(get_db_session),
) -> List[TimeEntryResponse]:
    return await time_entry_service.list_time_entries(db, user_id, start_date, end_date)
