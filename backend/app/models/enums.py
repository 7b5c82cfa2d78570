"""
Timeledger Backend — Enumerated Column Values
==============================================

What:  Python enums backing the PostgreSQL enum types used by the models.
Why:   One definition shared by ORM columns, Pydantic schemas and the
       Alembic migration, so the allowed values cannot drift apart.
"""

import enum
from typing import List, Type

from sqlalchemy import Enum as SAEnum


class UserRole(str, enum.Enum):
    CONSULTANT = "consultant"
    PROJECT_MANAGER = "project_manager"
    ADMINISTRATOR = "administrator"


class ProjectStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    CANCELLED = "cancelled"


class ActivityType(str, enum.Enum):
    CALL = "call"
    MEETING = "meeting"
    EMAIL = "email"
    OTHER = "other"


def _enum_values(enum_cls: Type[enum.Enum]) -> List[str]:
    return [member.value for member in enum_cls]


def value_enum(enum_cls: Type[enum.Enum], name: str) -> SAEnum:
    """
    Build a SQLAlchemy Enum that stores member *values* (lowercase strings).

    By default SQLAlchemy persists member names (CONSULTANT); the database
    enum types use the lowercase values, so values_callable is required.
    """
    return SAEnum(enum_cls, name=name, values_callable=_enum_values)
