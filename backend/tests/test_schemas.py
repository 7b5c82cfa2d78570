"""
Timeledger Backend — Schema Rendering Tests
============================================

What:  JSON rendering of Decimal fields and request-model constraints.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError as SchemaValidationError

from app.schemas.common import to_json_number
from app.schemas.report import BookingEntry, BudgetConsumptionReport, BudgetEntityType
from app.schemas.user import UserCreate


class TestJsonNumbers:

    def test_rounds_half_up_to_cents(self):
        assert to_json_number(Decimal("1234.5678")) == 1234.57
        assert to_json_number(Decimal("0.125")) == 0.13
        assert to_json_number(Decimal("-1000")) == -1000.0

    def test_report_fields_carry_at_most_two_decimals(self):
        report = BudgetConsumptionReport(
            entity_type=BudgetEntityType.PROJECT,
            entity_id=7,
            entity_name="Relaunch",
            total_budget=Decimal("3000"),
            consumed_amount=Decimal("1000.005"),
            consumption_rate=Decimal("33.33350"),
            remaining_budget=None,
        )

        payload = report.model_dump(mode="json")

        assert payload["consumed_amount"] == 1000.01
        assert payload["consumption_rate"] == 33.33
        assert payload["total_budget"] == 3000.0
        assert payload["remaining_budget"] is None

    def test_python_dump_keeps_decimal(self):
        entry = BookingEntry(
            time_entry_id=1,
            position_name="Developer",
            project_name="Relaunch",
            client_name="Acme",
            hours=Decimal("1.125"),
            billable=True,
            description=None,
        )

        assert entry.model_dump()["hours"] == Decimal("1.125")
        assert entry.model_dump(mode="json")["hours"] == 1.13


class TestRequestModels:

    def test_reserved_email_domain_is_rejected(self):
        with pytest.raises(SchemaValidationError):
            UserCreate(email="ana@acme.test", name="Ana", role="consultant")

    def test_hourly_rate_must_be_positive(self):
        with pytest.raises(SchemaValidationError):
            UserCreate(email="ana@example.com", name="Ana", role="consultant", hourly_rate=0)
