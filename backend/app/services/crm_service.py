"""
Timeledger Backend — CRM Service
=================================

What:  Free-text client notes and the activity log (calls, meetings, emails).
Who:   Called by routes/crm.py.

Ordering:
    - Notes: newest first (created_at DESC), the way a feed is read
    - Activities: chronological (activity_date ASC), the way a history is read
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, TimeledgerError
from app.models.client import Client
from app.models.crm import ActivityLog, ClientNote
from app.models.user import User
from app.schemas.crm import (
    ActivityLogCreate,
    ActivityLogResponse,
    ClientNoteCreate,
    ClientNoteResponse,
)
from app.services.references import ensure_exists

logger = logging.getLogger(__name__)


class CrmService:

    async def create_note(self, db: AsyncSession, payload: ClientNoteCreate) -> ClientNoteResponse:
        try:
            await ensure_exists(db, Client, payload.client_id, "Client", "client_id")
            await ensure_exists(db, User, payload.user_id, "User", "user_id")

            note = ClientNote(**payload.model_dump())
            db.add(note)
            await db.flush()
            logger.info("Client note created: %s for client %s", note.id, note.client_id)
            return ClientNoteResponse.model_validate(note)

        except TimeledgerError:
            raise
        except Exception as e:
            logger.error("Database error creating client note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"client_id": payload.client_id},
            )

    async def list_notes(self, db: AsyncSession, client_id: int) -> List[ClientNoteResponse]:
        try:
            result = await db.execute(
                select(ClientNote)
                .where(ClientNote.client_id == client_id)
                .order_by(ClientNote.created_at.desc(), ClientNote.id.desc())
            )
            return [ClientNoteResponse.model_validate(n) for n in result.scalars().all()]

        except Exception as e:
            logger.error("Database error listing notes for client %s: %s", client_id, str(e))
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"client_id": client_id},
            )

    async def create_activity(
        self, db: AsyncSession, payload: ActivityLogCreate
    ) -> ActivityLogResponse:
        try:
            await ensure_exists(db, Client, payload.client_id, "Client", "client_id")
            await ensure_exists(db, User, payload.user_id, "User", "user_id")

            activity = ActivityLog(**payload.model_dump())
            db.add(activity)
            await db.flush()
            logger.info(
                "Activity logged: %s (%s) for client %s",
                activity.id, activity.activity_type.value, activity.client_id,
            )
            return ActivityLogResponse.model_validate(activity)

        except TimeledgerError:
            raise
        except Exception as e:
            logger.error("Database error logging activity: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the activity. Please try again.",
                context={"client_id": payload.client_id},
            )

    async def list_activities(self, db: AsyncSession, client_id: int) -> List[ActivityLogResponse]:
        try:
            result = await db.execute(
                select(ActivityLog)
                .where(ActivityLog.client_id == client_id)
                .order_by(ActivityLog.activity_date.asc(), ActivityLog.id.asc())
            )
            return [ActivityLogResponse.model_validate(a) for a in result.scalars().all()]

        except Exception as e:
            logger.error("Database error listing activities for client %s: %s", client_id, str(e))
            raise DatabaseError(
                message="Could not retrieve activities. Please try again.",
                context={"client_id": client_id},
            )


crm_service = CrmService()
