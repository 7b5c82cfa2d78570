"""
Timeledger Backend — Project Service
=====================================

What:  Creates and lists projects (per client) and positions (per project).
Who:   Called by routes/projects.py.

Positions are the bookable units: time entries reference a position, and the
position's hourly rate prices those hours in the budget report.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, TimeledgerError
from app.models.client import Client
from app.models.project import Position, Project
from app.schemas.project import (
    PositionCreate,
    PositionResponse,
    ProjectCreate,
    ProjectResponse,
)
from app.services.references import ensure_exists

logger = logging.getLogger(__name__)


class ProjectService:

    async def create_project(self, db: AsyncSession, payload: ProjectCreate) -> ProjectResponse:
        try:
            await ensure_exists(db, Client, payload.client_id, "Client", "client_id")

            project = Project(**payload.model_dump())
            db.add(project)
            await db.flush()
            logger.info(
                "Project created: %s (%s) for client %s, budget=%s",
                project.id, project.name, project.client_id, project.budget,
            )
            return ProjectResponse.model_validate(project)

        except TimeledgerError:
            raise
        except Exception as e:
            logger.error("Database error creating project: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the project. Please try again.",
                context={"client_id": payload.client_id},
            )

    async def list_projects(self, db: AsyncSession, client_id: int) -> List[ProjectResponse]:
        try:
            result = await db.execute(
                select(Project).where(Project.client_id == client_id).order_by(Project.id)
            )
            return [ProjectResponse.model_validate(p) for p in result.scalars().all()]

        except Exception as e:
            logger.error("Database error listing projects for client %s: %s", client_id, str(e))
            raise DatabaseError(
                message="Could not retrieve projects. Please try again.",
                context={"client_id": client_id},
            )

    async def create_position(self, db: AsyncSession, payload: PositionCreate) -> PositionResponse:
        try:
            await ensure_exists(db, Project, payload.project_id, "Project", "project_id")

            position = Position(**payload.model_dump())
            db.add(position)
            await db.flush()
            logger.info(
                "Position created: %s (%s) for project %s, rate=%s",
                position.id, position.name, position.project_id, position.hourly_rate,
            )
            return PositionResponse.model_validate(position)

        except TimeledgerError:
            raise
        except Exception as e:
            logger.error("Database error creating position: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the position. Please try again.",
                context={"project_id": payload.project_id},
            )

    async def list_positions(self, db: AsyncSession, project_id: int) -> List[PositionResponse]:
        try:
            result = await db.execute(
                select(Position).where(Position.project_id == project_id).order_by(Position.id)
            )
            return [PositionResponse.model_validate(p) for p in result.scalars().all()]

        except Exception as e:
            logger.error("Database error listing positions for project %s: %s", project_id, str(e))
            raise DatabaseError(
                message="Could not retrieve positions. Please try again.",
                context={"project_id": project_id},
            )


project_service = ProjectService()
