"""Time entry request/response schemas."""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.common import DecimalNumber


class TimeEntryCreate(BaseModel):
    user_id: int = Field(ge=1)
    position_id: int = Field(ge=1)
    description: Optional[str] = None
    # NUMERIC(8,2): at most 999999.99 hours, two fractional digits
    hours: Decimal = Field(gt=0, max_digits=8, decimal_places=2)
    date: dt.date
    billable: bool = True


class TimeEntryResponse(BaseModel):
    id: int
    user_id: int
    position_id: int
    description: Optional[str] = None
    hours: DecimalNumber
    date: dt.date
    billable: bool
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = {"from_attributes": True}
