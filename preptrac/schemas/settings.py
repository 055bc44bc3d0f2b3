"""User goal schemas."""

from pydantic import BaseModel, ConfigDict, Field


class GoalsUpdate(BaseModel):
    """Update dashboard goals; null clears a goal."""

    ammo_goal_rounds: float | None = Field(None, ge=0)
    water_goal_gallons: float | None = Field(None, ge=0)
    food_goal_days: float | None = Field(None, ge=0)
    fuel_goal_gallons: float | None = Field(None, ge=0)
    fuel_goal_kwh: float | None = Field(None, ge=0)
    fuel_goal_battery_kwh: float | None = Field(None, ge=0)


class GoalsResponse(BaseModel):
    """Dashboard goals."""

    model_config = ConfigDict(from_attributes=True)

    ammo_goal_rounds: float | None
    water_goal_gallons: float | None
    food_goal_days: float | None
    fuel_goal_gallons: float | None
    fuel_goal_kwh: float | None
    fuel_goal_battery_kwh: float | None
