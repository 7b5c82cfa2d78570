"""
Timeledger Backend — Report Service Tests
==========================================

What:  Utilization and booking-details reports against in-memory SQLite.

What we test:
    ✅ Utilization rate rounding (7.5 of 7.75 hours → 96.77)
    ✅ Users without bookings listed with zeros; unknown user → []
    ✅ Inclusive period bounds
    ✅ Booking details grouped per day, most recent day first
    ✅ Inverted and over-long periods rejected
"""

import datetime as dt
from decimal import Decimal

import pytest

from app.config import settings
from app.exceptions import ValidationError
from app.schemas.report import BookingDetailsInput, UtilizationReportInput
from app.services.report_service import ReportService, utilization_rate

JAN_1 = dt.date(2024, 1, 1)
JAN_31 = dt.date(2024, 1, 31)


class TestUtilizationRate:

    def test_rounds_to_two_decimals(self):
        assert utilization_rate(Decimal("7.5"), Decimal("7.75")) == Decimal("96.77")

    def test_zero_hours(self):
        assert utilization_rate(Decimal("0"), Decimal("0")) == Decimal("0")


class TestUtilizationReport:

    def setup_method(self):
        self.service = ReportService()

    @pytest.mark.asyncio
    async def test_billable_share_per_user(self, db_session, seed):
        ana = await seed.user(name="Ana")
        client = await seed.client()
        position = await seed.position(await seed.project(client), hourly_rate="100")
        await seed.entry(ana, position, "7.5", date=dt.date(2024, 1, 10))
        await seed.entry(ana, position, "0.25", date=dt.date(2024, 1, 11), billable=False)

        [report] = await self.service.get_utilization_report(
            db_session, UtilizationReportInput(user_id=ana.id, start_date=JAN_1, end_date=JAN_31)
        )

        assert report.user_id == ana.id
        assert report.user_name == "Ana"
        assert report.total_hours == Decimal("7.75")
        assert report.billable_hours == Decimal("7.5")
        assert report.utilization_rate == Decimal("96.77")
        assert report.period_start == JAN_1
        assert report.period_end == JAN_31

    @pytest.mark.asyncio
    async def test_users_without_entries_have_zeros(self, db_session, seed):
        ana = await seed.user(name="Ana")
        await seed.user(name="Ben")
        position = await seed.position(await seed.project(await seed.client()))
        await seed.entry(ana, position, "8", date=dt.date(2024, 1, 10))

        reports = await self.service.get_utilization_report(
            db_session, UtilizationReportInput(start_date=JAN_1, end_date=JAN_31)
        )

        assert [r.user_name for r in reports] == ["Ana", "Ben"]
        ben = reports[1]
        assert ben.total_hours == Decimal("0")
        assert ben.billable_hours == Decimal("0")
        assert ben.utilization_rate == Decimal("0")

    @pytest.mark.asyncio
    async def test_period_bounds_are_inclusive(self, db_session, seed):
        ana = await seed.user()
        position = await seed.position(await seed.project(await seed.client()))
        await seed.entry(ana, position, "1", date=dt.date(2023, 12, 31))
        await seed.entry(ana, position, "2", date=JAN_1)
        await seed.entry(ana, position, "3", date=JAN_31)
        await seed.entry(ana, position, "4", date=dt.date(2024, 2, 1))

        [report] = await self.service.get_utilization_report(
            db_session, UtilizationReportInput(user_id=ana.id, start_date=JAN_1, end_date=JAN_31)
        )

        assert report.total_hours == Decimal("5")

    @pytest.mark.asyncio
    async def test_unknown_user_gives_empty_report(self, db_session, seed):
        await seed.user()

        reports = await self.service.get_utilization_report(
            db_session, UtilizationReportInput(user_id=9999, start_date=JAN_1, end_date=JAN_31)
        )

        assert reports == []

    @pytest.mark.asyncio
    async def test_inverted_period_is_rejected(self, db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.get_utilization_report(
                db_session, UtilizationReportInput(start_date=JAN_31, end_date=JAN_1)
            )
        assert exc_info.value.field == "start_date"

    @pytest.mark.asyncio
    async def test_overlong_period_is_rejected(self, db_session, monkeypatch):
        monkeypatch.setattr(settings, "report_max_range_days", 31)

        with pytest.raises(ValidationError):
            await self.service.get_utilization_report(
                db_session,
                UtilizationReportInput(start_date=JAN_1, end_date=dt.date(2024, 2, 1)),
            )


class TestBookingDetails:

    def setup_method(self):
        self.service = ReportService()

    @pytest.mark.asyncio
    async def test_groups_by_day_newest_first(self, db_session, seed):
        ana = await seed.user()
        acme = await seed.client(name="Acme")
        project = await seed.project(acme, name="Relaunch")
        dev = await seed.position(project, name="Developer")
        review = await seed.position(project, name="Reviewer")
        first = await seed.entry(ana, dev, "4", date=dt.date(2024, 1, 10), description="API")
        second = await seed.entry(ana, review, "2.5", date=dt.date(2024, 1, 10), billable=False)
        later = await seed.entry(ana, dev, "6", date=dt.date(2024, 1, 12))

        groups = await self.service.get_booking_details(
            db_session, BookingDetailsInput(user_id=ana.id, start_date=JAN_1, end_date=JAN_31)
        )

        assert [g.date for g in groups] == [dt.date(2024, 1, 12), dt.date(2024, 1, 10)]
        assert groups[0].total_hours == Decimal("6")
        assert [e.time_entry_id for e in groups[0].entries] == [later.id]

        day = groups[1]
        assert day.total_hours == Decimal("6.5")
        assert [e.time_entry_id for e in day.entries] == [first.id, second.id]
        entry = day.entries[0]
        assert entry.position_name == "Developer"
        assert entry.project_name == "Relaunch"
        assert entry.client_name == "Acme"
        assert entry.description == "API"
        assert entry.hours == Decimal("4")
        assert entry.billable is True
        assert day.entries[1].billable is False

    @pytest.mark.asyncio
    async def test_only_the_users_entries(self, db_session, seed):
        ana = await seed.user(name="Ana")
        ben = await seed.user(name="Ben")
        position = await seed.position(await seed.project(await seed.client()))
        await seed.entry(ben, position, "8", date=dt.date(2024, 1, 10))

        groups = await self.service.get_booking_details(
            db_session, BookingDetailsInput(user_id=ana.id, start_date=JAN_1, end_date=JAN_31)
        )

        assert groups == []
