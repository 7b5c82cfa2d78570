"""
Foreign-key existence checks shared by the create operations.

A time entry for user 9999 should fail as a 400 that names the missing
record, not as an opaque IntegrityError from the database (SQLite does not
even enforce foreign keys by default).
"""

from typing import Type

from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.exceptions import ValidationError


async def ensure_exists(
    db: AsyncSession,
    model: Type[Base],
    entity_id: int,
    label: str,
    field: str,
) -> None:
    """Raise ValidationError("User with ID '9999' does not exist") when the row is missing."""
    if await db.get(model, entity_id) is None:
        raise ValidationError(
            message=f"{label} with ID '{entity_id}' does not exist",
            field=field,
        )
