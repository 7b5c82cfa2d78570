"""User request/response schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from app.models.enums import UserRole
from app.schemas.common import DecimalNumber


class UserCreate(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1, max_length=255)
    role: UserRole
    hourly_rate: Optional[Decimal] = Field(
        default=None,
        gt=0,
        max_digits=10,
        decimal_places=2,
        description="Internal hourly cost rate (optional)",
    )


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    role: UserRole
    hourly_rate: Optional[DecimalNumber] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
