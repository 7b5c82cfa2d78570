"""
Timeledger Backend — Report Schemas
====================================

What:  Inputs and row models for the three aggregate reports.
Who:   Built by BudgetService and ReportService, returned by routes/reports.py.

Reports:
    - Utilization: billable share of booked hours per user in a period
    - Budget consumption: budget vs. priced hours per client/project/position
    - Booking details: a user's bookings grouped per day with their hierarchy
"""

import datetime as dt
import enum
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.common import DecimalNumber


# ══════════════════════════════════════════════════════════════════════════
# Utilization
# ══════════════════════════════════════════════════════════════════════════


class UtilizationReportInput(BaseModel):
    user_id: Optional[int] = Field(default=None, ge=1)
    start_date: dt.date
    end_date: dt.date


class UtilizationReport(BaseModel):
    user_id: int
    user_name: str
    total_hours: DecimalNumber
    billable_hours: DecimalNumber
    utilization_rate: DecimalNumber = Field(description="Billable share of total hours, in percent")
    period_start: dt.date
    period_end: dt.date


# ══════════════════════════════════════════════════════════════════════════
# Budget consumption
# ══════════════════════════════════════════════════════════════════════════


class BudgetEntityType(str, enum.Enum):
    POSITION = "position"
    PROJECT = "project"
    CLIENT = "client"


class BudgetConsumptionInput(BaseModel):
    """
    Report filter. At most one id is expected; when several are set the most
    specific wins (position, then project, then client). None set means
    "every budgeted entity".
    """
    client_id: Optional[int] = Field(default=None, ge=1)
    project_id: Optional[int] = Field(default=None, ge=1)
    position_id: Optional[int] = Field(default=None, ge=1)


class BudgetConsumptionReport(BaseModel):
    """
    One budget line.

    total_budget is None when the entity declares no budget; in that case
    consumption_rate is 0 and remaining_budget is None. Neither the rate nor
    the remaining amount is clamped: over-consumption shows as a rate above
    100 and a negative remainder.
    """
    entity_type: BudgetEntityType
    entity_id: int
    entity_name: str
    total_budget: Optional[DecimalNumber] = None
    consumed_amount: DecimalNumber
    consumption_rate: DecimalNumber = Field(description="Consumed share of the budget, in percent")
    remaining_budget: Optional[DecimalNumber] = None


# ══════════════════════════════════════════════════════════════════════════
# Booking details
# ══════════════════════════════════════════════════════════════════════════


class BookingDetailsInput(BaseModel):
    user_id: int = Field(ge=1)
    start_date: dt.date
    end_date: dt.date


class BookingEntry(BaseModel):
    time_entry_id: int
    position_name: str
    project_name: str
    client_name: str
    description: Optional[str] = None
    hours: DecimalNumber
    billable: bool


class BookingDetails(BaseModel):
    date: dt.date
    total_hours: DecimalNumber
    entries: List[BookingEntry]
