"""
Timeledger Backend — CRM SQLAlchemy Models
===========================================

What:  ORM models for `client_notes` and `activity_logs`.
Why:   Free-form notes and logged interactions (calls, meetings, emails)
       attached to a client by the user who recorded them.

Both tables are append-only: there is no update path, so they carry
created_at but no updated_at.
"""

import datetime as dt

from sqlalchemy import Date, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.enums import ActivityType, value_enum
from app.models.mixins import CreatedAtMixin


class ClientNote(CreatedAtMixin, Base):
    __tablename__ = "client_notes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(ForeignKey("clients.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    note: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        Index("idx_client_notes_client_id", "client_id"),
    )

    def __repr__(self) -> str:
        return f"<ClientNote(id={self.id}, client_id={self.client_id})>"


class ActivityLog(CreatedAtMixin, Base):
    __tablename__ = "activity_logs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(ForeignKey("clients.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)

    activity_type: Mapped[ActivityType] = mapped_column(
        value_enum(ActivityType, "activity_type"),
        nullable=False,
    )

    description: Mapped[str] = mapped_column(Text, nullable=False)
    activity_date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("idx_activity_logs_client_date", "client_id", "activity_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<ActivityLog(id={self.id}, client_id={self.client_id}, "
            f"type='{self.activity_type}', date='{self.activity_date}')>"
        )
