"""
Timeledger Backend — Report Service
====================================

What:  Utilization and booking-details reports over time entries.
Who:   Called by routes/reports.py. (Budget consumption lives in budget_service.py.)

Utilization:
    For every user (or the one requested), hours booked within
    [start_date, end_date] inclusive, split into total and billable.
    utilization_rate = billable / total × 100, rounded to 2 decimals,
    0 for a user without bookings. Users without bookings are listed with
    zeros so idle capacity is visible.

        user  total  billable  rate
        Ana    7.75      7.50  96.77
        Ben    0.00      0.00   0.00

Booking details:
    One user's bookings in the period, grouped by day (most recent day
    first), each entry carrying its position, project and client names.

Date ranges:
    start_date after end_date, or a range longer than
    settings.report_max_range_days, is rejected with ValidationError (400).
"""

import datetime as dt
import logging
from decimal import ROUND_HALF_UP, Decimal
from itertools import groupby
from typing import List

from sqlalchemy import and_, case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import DatabaseError, ValidationError
from app.models.client import Client
from app.models.project import Position, Project
from app.models.time_entry import TimeEntry
from app.models.user import User
from app.schemas.report import (
    BookingDetails,
    BookingDetailsInput,
    BookingEntry,
    UtilizationReport,
    UtilizationReportInput,
)
from app.services.sql_budget_store import as_decimal

logger = logging.getLogger(__name__)

Q2 = Decimal("0.01")


def utilization_rate(billable_hours: Decimal, total_hours: Decimal) -> Decimal:
    if total_hours <= 0:
        return Decimal("0")
    return (billable_hours / total_hours * 100).quantize(Q2, rounding=ROUND_HALF_UP)


def validate_period(start_date: dt.date, end_date: dt.date) -> None:
    if start_date > end_date:
        raise ValidationError(
            message="start_date must not be after end_date",
            field="start_date",
            context={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )

    days = (end_date - start_date).days + 1
    if days > settings.report_max_range_days:
        raise ValidationError(
            message=(
                f"Report period spans {days} days; "
                f"the maximum is {settings.report_max_range_days}"
            ),
            field="end_date",
        )


class ReportService:

    async def get_utilization_report(
        self, db: AsyncSession, criteria: UtilizationReportInput
    ) -> List[UtilizationReport]:
        validate_period(criteria.start_date, criteria.end_date)

        # Range condition sits in the join so users without bookings survive
        in_period = and_(
            TimeEntry.user_id == User.id,
            TimeEntry.date >= criteria.start_date,
            TimeEntry.date <= criteria.end_date,
        )
        query = (
            select(
                User.id,
                User.name,
                func.coalesce(func.sum(TimeEntry.hours), 0).label("total_hours"),
                func.coalesce(
                    func.sum(case((TimeEntry.billable.is_(True), TimeEntry.hours), else_=0)),
                    0,
                ).label("billable_hours"),
            )
            .outerjoin(TimeEntry, in_period)
            .group_by(User.id, User.name)
            .order_by(User.name, User.id)
        )
        if criteria.user_id is not None:
            query = query.where(User.id == criteria.user_id)

        try:
            result = await db.execute(query)
            rows = result.all()
        except Exception as e:
            logger.error("Database error building utilization report: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not build the utilization report. Please try again.",
                context={"original_error": type(e).__name__},
            )

        reports = []
        for row in rows:
            total = as_decimal(row.total_hours)
            billable = as_decimal(row.billable_hours)
            reports.append(
                UtilizationReport(
                    user_id=row.id,
                    user_name=row.name,
                    total_hours=total,
                    billable_hours=billable,
                    utilization_rate=utilization_rate(billable, total),
                    period_start=criteria.start_date,
                    period_end=criteria.end_date,
                )
            )

        logger.debug(
            "Utilization report %s..%s: %d users",
            criteria.start_date, criteria.end_date, len(reports),
        )
        return reports

    async def get_booking_details(
        self, db: AsyncSession, criteria: BookingDetailsInput
    ) -> List[BookingDetails]:
        validate_period(criteria.start_date, criteria.end_date)

        query = (
            select(
                TimeEntry.id,
                TimeEntry.date,
                TimeEntry.hours,
                TimeEntry.billable,
                TimeEntry.description,
                Position.name.label("position_name"),
                Project.name.label("project_name"),
                Client.name.label("client_name"),
            )
            .join(Position, Position.id == TimeEntry.position_id)
            .join(Project, Project.id == Position.project_id)
            .join(Client, Client.id == Project.client_id)
            .where(
                TimeEntry.user_id == criteria.user_id,
                TimeEntry.date >= criteria.start_date,
                TimeEntry.date <= criteria.end_date,
            )
            .order_by(TimeEntry.date.desc(), TimeEntry.id)
        )

        try:
            result = await db.execute(query)
            rows = result.all()
        except Exception as e:
            logger.error("Database error building booking details: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not build the booking details. Please try again.",
                context={"user_id": criteria.user_id},
            )

        groups: List[BookingDetails] = []
        for day, day_rows in groupby(rows, key=lambda r: r.date):
            entries = [
                BookingEntry(
                    time_entry_id=r.id,
                    position_name=r.position_name,
                    project_name=r.project_name,
                    client_name=r.client_name,
                    description=r.description,
                    hours=as_decimal(r.hours),
                    billable=r.billable,
                )
                for r in day_rows
            ]
            groups.append(
                BookingDetails(
                    date=day,
                    total_hours=sum((e.hours for e in entries), Decimal("0")),
                    entries=entries,
                )
            )
        return groups


report_service = ReportService()