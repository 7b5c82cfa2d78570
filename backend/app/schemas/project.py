"""
Timeledger Backend — Project & Position Schemas
================================================

Budgets and hourly rates are optional but, when given, must be positive
with at most two fractional digits (they are stored as NUMERIC(15,2) and
NUMERIC(10,2) respectively).
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.models.enums import ProjectStatus
from app.schemas.common import DecimalNumber


class ProjectCreate(BaseModel):
    client_id: int = Field(ge=1)
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    budget: Optional[Decimal] = Field(default=None, gt=0, max_digits=15, decimal_places=2)
    status: ProjectStatus = ProjectStatus.ACTIVE
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None

    @model_validator(mode="after")
    def check_date_order(self) -> "ProjectCreate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ProjectResponse(BaseModel):
    id: int
    client_id: int
    name: str
    description: Optional[str] = None
    budget: Optional[DecimalNumber] = None
    status: ProjectStatus
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = {"from_attributes": True}


class PositionCreate(BaseModel):
    project_id: int = Field(ge=1)
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    budget: Optional[Decimal] = Field(default=None, gt=0, max_digits=15, decimal_places=2)
    hourly_rate: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)


class PositionResponse(BaseModel):
    id: int
    project_id: int
    name: str
    description: Optional[str] = None
    budget: Optional[DecimalNumber] = None
    hourly_rate: Optional[DecimalNumber] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = {"from_attributes": True}
