"""Client note and activity log schemas."""

import datetime as dt

from pydantic import BaseModel, Field

from app.models.enums import ActivityType


class ClientNoteCreate(BaseModel):
    client_id: int = Field(ge=1)
    user_id: int = Field(ge=1)
    note: str = Field(min_length=1)


class ClientNoteResponse(BaseModel):
    id: int
    client_id: int
    user_id: int
    note: str
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class ActivityLogCreate(BaseModel):
    client_id: int = Field(ge=1)
    user_id: int = Field(ge=1)
    activity_type: ActivityType
    description: str = Field(min_length=1)
    activity_date: dt.date


class ActivityLogResponse(BaseModel):
    id: int
    client_id: int
    user_id: int
    activity_type: ActivityType
    description: str
    activity_date: dt.date
    created_at: dt.datetime

    model_config = {"from_attributes": True}
