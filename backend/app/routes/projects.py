"""
Timeledger Backend — Project Route Handlers
============================================

What:  Projects per client and positions per project.

    POST /api/projects                          create a project
    GET  /api/clients/{client_id}/projects      a client's projects
    POST /api/positions                         create a position
    GET  /api/projects/{project_id}/positions   a project's positions
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.project import (
    PositionCreate,
    PositionResponse,
    ProjectCreate,
    ProjectResponse,
)
from app.services.project_service import project_service

router = APIRouter(prefix="/api", tags=["Projects"])


@router.post(
    "/projects",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Client does not exist", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a project for a client",
)
async def create_project(
    payload: ProjectCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ProjectResponse:
    return await project_service.create_project(db, payload)


@router.get(
    "/clients/{client_id}/projects",
    response_model=List[ProjectResponse],
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List a client's projects",
)
async def list_projects(
    client_id: int = Path(ge=1, description="Client ID"),
    db: AsyncSession = Depends(get_db_session),
) -> List[ProjectResponse]:
    return await project_service.list_projects(db, client_id)


@router.post(
    "/positions",
    response_model=PositionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Project does not exist", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a bookable position within a project",
)
async def create_position(
    payload: PositionCreate,
    db: AsyncSession = Depends(get_db_session),
) -> PositionResponse:
    return await project_service.create_position(db, payload)


@router.get(
    "/projects/{project_id}/positions",
    response_model=List[PositionResponse],
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List a project's positions",
)
async def list_positions(
    project_id: int = Path(ge=1, description="Project ID"),
    db: AsyncSession = Depends(get_db_session),
) -> List[PositionResponse]:
    return await project_service.list_positions(db, project_id)
