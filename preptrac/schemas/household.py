"""Household schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from preptrac.models.enums import ActivityLevel, Sex


class FamilyMemberCreate(BaseModel):
    """Add a household member."""

    name: str | None = Field(None, max_length=255)
    age: int = Field(..., ge=0, le=120)
    weight_kg: float = Field(..., gt=0)
    height_cm: float = Field(..., gt=0)
    sex: Sex


class FamilyMemberUpdate(BaseModel):
    """Update a household member."""

    name: str | None = Field(None, max_length=255)
    age: int | None = Field(None, ge=0, le=120)
    weight_kg: float | None = Field(None, gt=0)
    height_cm: float | None = Field(None, gt=0)
    sex: Sex | None = None


class FamilyMemberResponse(BaseModel):
    """Household member with computed daily calories."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str | None
    age: int
    weight_kg: float
    height_cm: float
    sex: Sex
    daily_calories: int = 0
    created_at: datetime


class ActivityLevelUpdate(BaseModel):
    """Set (or clear) the household activity level."""

    activity_level: ActivityLevel | None


class ActivityLevelResponse(BaseModel):
    activity_level: ActivityLevel | None


class TotalDailyCaloriesResponse(BaseModel):
    total_daily_calories: int
