"""
Timeledger Backend — Project & Position SQLAlchemy Models
==========================================================

What:  ORM models for the `projects` and `positions` tables.
Why:   Projects and positions carry the two budget levels of the billing
       hierarchy; positions additionally carry the hourly rate that prices
       every hour booked against them.

Budget semantics:
    - budget NULL means "no budget declared", which is different from a
      zero budget. Reports keep the distinction (remaining budget is absent
      rather than negative).
    - hourly_rate NULL means booked hours on the position are not priced.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, ForeignKey, Index, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.enums import ProjectStatus, value_enum
from app.models.mixins import TimestampMixin


class Project(TimestampMixin, Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(ForeignKey("clients.id"), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    budget: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(15, 2),
        nullable=True,
        comment="Declared project budget; NULL when no budget was agreed",
    )

    status: Mapped[ProjectStatus] = mapped_column(
        value_enum(ProjectStatus, "project_status"),
        nullable=False,
        default=ProjectStatus.ACTIVE,
    )

    start_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)

    __table_args__ = (
        Index("idx_projects_client_id", "client_id"),
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, client_id={self.client_id}, name='{self.name}')>"


class Position(TimestampMixin, Base):
    """A billable role on a project (e.g. "Senior Developer")."""

    __tablename__ = "positions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id"), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    budget: Mapped[Optional[Decimal]] = mapped_column(Numeric(15, 2), nullable=True)

    hourly_rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        comment="Price of one booked hour; NULL leaves hours unpriced",
    )

    __table_args__ = (
        Index("idx_positions_project_id", "project_id"),
    )

    def __repr__(self) -> str:
        return f"<Position(id={self.id}, project_id={self.project_id}, name='{self.name}')>"
