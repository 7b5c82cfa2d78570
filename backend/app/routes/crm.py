"""
Timeledger Backend — CRM Route Handlers
========================================

What:  Client notes and the client activity log.

    POST /api/client-notes                        add a note
    GET  /api/clients/{client_id}/notes           notes, newest first
    POST /api/activity-logs                       log a call/meeting/email
    GET  /api/clients/{client_id}/activity-logs   activities by date
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.crm import (
    ActivityLogCreate,
    ActivityLogResponse,
    ClientNoteCreate,
    ClientNoteResponse,
)
from app.services.crm_service import crm_service

router = APIRouter(prefix="/api", tags=["CRM"])

_write_errors = {
    400: {"description": "Client or user does not exist", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}
_read_errors = {
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "/client-notes",
    response_model=ClientNoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_write_errors,
    summary="Add a note to a client",
)
async def create_client_note(
    payload: ClientNoteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ClientNoteResponse:
    return await crm_service.create_note(db, payload)


@router.get(
    "/clients/{client_id}/notes",
    response_model=List[ClientNoteResponse],
    responses=_read_errors,
    summary="List a client's notes (newest first)",
)
async def list_client_notes(
    client_id: int = Path(ge=1, description="Client ID"),
    db: AsyncSession = Depends(get_db_session),
) -> List[ClientNoteResponse]:
    return await crm_service.list_notes(db, client_id)


@router.post(
    "/activity-logs",
    response_model=ActivityLogResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_write_errors,
    summary="Log a client activity",
)
async def create_activity_log(
    payload: ActivityLogCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ActivityLogResponse:
    return await crm_service.create_activity(db, payload)


@router.get(
    "/clients/{client_id}/activity-logs",
    response_model=List[ActivityLogResponse],
    responses=_read_errors,
    summary="List a client's activities (oldest first)",
)
async def list_activity_logs(
    client_id: int = Path(ge=1, description="Client ID"),
    db: AsyncSession = Depends(get_db_session),
) -> List[ActivityLogResponse]:
    return await crm_service.list_activities(db, client_id)
