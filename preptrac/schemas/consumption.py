"""Consumption/addition schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from preptrac.models.enums import ConsumptionType


class ActivityCreate(BaseModel):
    """Consume from or add to a single item."""

    quantity: float = Field(..., gt=0)
    note: str | None = Field(None, max_length=1000)


class ActivityEntry(BaseModel):
    """One line of a batch activity request."""

    item_id: int
    quantity: float = Field(..., gt=0)
    type: ConsumptionType = ConsumptionType.CONSUMPTION
    note: str | None = Field(None, max_length=1000)


class ActivityBatchRequest(BaseModel):
    """Record several consumptions/additions at once."""

    entries: list[ActivityEntry] = Field(..., min_length=1)


class ConsumptionLogResponse(BaseModel):
    """Consumption log response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    item_id: int
    quantity: float
    type: ConsumptionType
    note: str | None
    created_at: datetime


class DailyActivity(BaseModel):
    """Totals for one day."""

    day: date
    consumed: float
    added: float


class ItemActivityTotal(BaseModel):
    """Totals for one item over the stats window."""

    item_id: int
    item_name: str
    unit: str
    consumed: float
    added: float


class ActivityStatsResponse(BaseModel):
    """Activity over the last N days."""

    days: int
    daily: list[DailyActivity]
    by_item: list[ItemActivityTotal]
