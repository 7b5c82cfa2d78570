"""
Timeledger Backend — User SQLAlchemy Model
===========================================

What:  ORM model representing the `users` table.
Who:   Consultants, project managers and administrators who book time
       and write CRM notes.

Table Design Rationale:
    - email is unique: it is the login identity and the natural key used to
      reject duplicate registrations
    - hourly_rate is the person's internal cost rate and is informational
      only; budget consumption is priced with the *position* rate
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.enums import UserRole, value_enum
from app.models.mixins import TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        comment="Login email, unique across users",
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)

    role: Mapped[UserRole] = mapped_column(
        value_enum(UserRole, "user_role"),
        nullable=False,
    )

    hourly_rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        comment="Internal cost rate; not used for budget consumption",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
