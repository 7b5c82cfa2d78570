"""
Timeledger Backend — Time Entry Service
========================================

What:  Books hours against a position and lists a user's bookings.
Why:   Time entries are the raw material of every report: utilization counts
       them, budget consumption prices them, booking details groups them.
Who:   Called by routes/time_entries.py.

Booking Rules:
    - The user and the position must exist; otherwise a ValidationError
      naming the missing id (400) is raised before anything is written
    - hours > 0 with two decimals and billable defaulting to true are
      enforced by TimeEntryCreate before the service is reached
"""

import datetime as dt
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, TimeledgerError, ValidationError
from app.models.project import Position
from app.models.time_entry import TimeEntry
from app.models.user import User
from app.schemas.time_entry import TimeEntryCreate, TimeEntryResponse
from app.services.references import ensure_exists

logger = logging.getLogger(__name__)


class TimeEntryService:

    async def create_time_entry(
        self, db: AsyncSession, payload: TimeEntryCreate
    ) -> TimeEntryResponse:
        """
        Book hours for a user on a position.

        Raises:
            ValidationError: user_id or position_id does not exist (→ 400)
            DatabaseError: Insert failed (→ 500)
        """
        try:
            await ensure_exists(db, User, payload.user_id, "User", "user_id")
            await ensure_exists(db, Position, payload.position_id, "Position", "position_id")

            entry = TimeEntry(**payload.model_dump())
            db.add(entry)
            await db.flush()
            logger.info(
                "Time entry created: %s (user=%s, position=%s, %s h on %s, billable=%s)",
                entry.id, entry.user_id, entry.position_id, entry.hours, entry.date, entry.billable,
            )
            return TimeEntryResponse.model_validate(entry)

        except TimeledgerError:
            raise
        except Exception as e:
            logger.error("Database error creating time entry: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the time entry. Please try again.",
                context={"user_id": payload.user_id, "position_id": payload.position_id},
            )

    async def list_time_entries(
        self,
        db: AsyncSession,
        user_id: int,
        start_date: Optional[dt.date] = None,
        end_date: Optional[dt.date] = None,
    ) -> List[TimeEntryResponse]:
        """
        A user's bookings, newest date first. Both bounds are optional and inclusive.

        Query plan:
            WHERE user_id = :user_id AND date BETWEEN :start AND :end
            → idx_time_entries_user_date
        """
        if start_date and end_date and start_date > end_date:
            raise ValidationError(
                message="start_date must not be after end_date",
                field="start_date",
            )

        try:
            query = select(TimeEntry).where(TimeEntry.user_id == user_id)
            if start_date:
                query = query.where(TimeEntry.date >= start_date)
            if end_date:
                query = query.where(TimeEntry.date <= end_date)
            query = query.order_by(TimeEntry.date.desc(), TimeEntry.id.desc())

            result = await db.execute(query)
            return [TimeEntryResponse.model_validate(e) for e in result.scalars().all()]

        except Exception as e:
            logger.error("Database error listing time entries for user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not retrieve time entries. Please try again.",
                context={"user_id": user_id},
            )


time_entry_service = TimeEntryService()
