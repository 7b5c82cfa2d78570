"""
Timeledger Backend — User Service
==================================

What:  Registers and lists users (consultants, project managers, administrators).
Who:   Called by routes/users.py.

Duplicate emails:
    Checked with a lookup before insert so the caller gets a 409 with a clear
    message. The unique index still guards the race between two concurrent
    registrations; that IntegrityError is mapped to the same ConflictError.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, DatabaseError, TimeledgerError
from app.models.user import User
from app.schemas.user import UserCreate, UserResponse

logger = logging.getLogger(__name__)


class UserService:

    async def create_user(self, db: AsyncSession, payload: UserCreate) -> UserResponse:
        try:
            existing = await db.scalar(select(User.id).where(User.email == payload.email))
            if existing is not None:
                raise ConflictError(
                    message=f"A user with email '{payload.email}' already exists",
                    field="email",
                )

            user = User(**payload.model_dump())
            db.add(user)
            await db.flush()
            logger.info("User created: %s (role=%s)", user.id, user.role.value)
            return UserResponse.model_validate(user)

        except TimeledgerError:
            raise
        except IntegrityError:
            raise ConflictError(
                message=f"A user with email '{payload.email}' already exists",
                field="email",
            )
        except Exception as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the user. Please try again.",
                context={"original_error": type(e).__name__},
            )

    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        try:
            result = await db.execute(select(User).order_by(User.name, User.id))
            return [UserResponse.model_validate(u) for u in result.scalars().all()]
        except Exception as e:
            logger.error("Database error listing users: %s", str(e))
            raise DatabaseError(message="Could not retrieve users. Please try again.")


# Module-level singleton
user_service = UserService()
