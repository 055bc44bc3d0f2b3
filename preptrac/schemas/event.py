"""Event schemas."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from preptrac.models.enums import EventType


class EventCreate(BaseModel):
    """Create a calendar event by hand."""

    type: EventType
    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    date: dt.date
    item_id: int | None = None


class EventUpdate(BaseModel):
    """Update a calendar event."""

    type: EventType | None = None
    title: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = None
    date: dt.date | None = None
    item_id: int | None = None
    completed: bool | None = None


class EventItemRef(BaseModel):
    """Short item reference embedded in event responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    quantity: float
    unit: str


class EventResponse(BaseModel):
    """Event response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    item_id: int | None
    type: EventType
    title: str
    description: str | None
    date: dt.date
    completed: bool
    completed_at: dt.datetime | None
    is_derived: bool
    created_at: dt.datetime
    updated_at: dt.datetime
    item: EventItemRef | None = None
