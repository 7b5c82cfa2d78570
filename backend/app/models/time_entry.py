"""
Timeledger Backend — TimeEntry SQLAlchemy Model
================================================

What:  ORM model representing the `time_entries` table.
Why:   Every report in the system is an aggregate over these rows.

Query Patterns:
    - Bookings of one user in a date range (time entry list, booking details,
      utilization) → idx_time_entries_user_date
    - Σ hours per position (budget consumption) → idx_time_entries_position_id
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, Date, ForeignKey, Index, Numeric, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import TimestampMixin


class TimeEntry(TimestampMixin, Base):
    __tablename__ = "time_entries"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    position_id: Mapped[int] = mapped_column(ForeignKey("positions.id"), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    hours: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)

    date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    billable: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    __table_args__ = (
        Index("idx_time_entries_user_date", "user_id", "date"),
        Index("idx_time_entries_position_id", "position_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<TimeEntry(id={self.id}, user_id={self.user_id}, "
            f"position_id={self.position_id}, hours={self.hours}, date='{self.date}')>"
        )
