"""Dashboard result records."""

import datetime as dt

from pydantic import BaseModel, ConfigDict

from preptrac.models.enums import EventType


class WaterBreakdownEntry(BaseModel):
    name: str
    quantity: float
    unit: str
    gallons_equivalent: float


class WaterStats(BaseModel):
    """Stored water and how long it lasts the household."""

    total_water: float
    total_water_days: float | None = None
    use_household_for_water: bool = False
    daily_water_gallons: float = 0
    breakdown: list[WaterBreakdownEntry] = []


class FoodBreakdownEntry(BaseModel):
    name: str
    quantity: float
    unit: str
    contribution_days: float | None = None


class FoodStats(BaseModel):
    """Days of food on hand."""

    total_food_days: float
    use_household_calculation: bool
    total_inventory_calories: int
    household_daily_calories: int
    breakdown: list[FoodBreakdownEntry] = []


class AmmoBreakdownEntry(BaseModel):
    name: str
    quantity: float
    unit: str


class AmmoStats(BaseModel):
    total_ammo: float
    breakdown: list[AmmoBreakdownEntry] = []


class FuelStats(BaseModel):
    """Generator fuel and stored battery energy."""

    total_fuel_gallons: float
    battery_kwh: float
    total_kwh: float


class GoalProgress(BaseModel):
    current: float
    target: float
    progress: float


class CategoryGoal(BaseModel):
    """Progress of one category toward its goal."""

    id: int
    name: str
    color: str | None
    current_quantity: float
    target_quantity: float
    progress: float
    display_unit: str | None = None
    fuel_sub_progress: dict[str, GoalProgress] | None = None


class ExpiringItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    quantity: float
    unit: str
    expiration_date: dt.date
    category_name: str
    location_name: str


class MaintenanceDueItem(BaseModel):
    id: int
    name: str
    maintenance_interval: int
    last_maintenance_date: dt.date
    next_maintenance_date: dt.date


class UpcomingEvent(BaseModel):
    id: int
    type: EventType
    title: str
    date: dt.date
    item_id: int | None
    item_name: str | None = None


class DashboardStats(BaseModel):
    """Point-in-time summary of a user's inventory."""

    water: WaterStats
    food: FoodStats
    ammo: AmmoStats
    fuel: FuelStats
    category_goals: list[CategoryGoal]
    upcoming_expirations: list[ExpiringItem]
    needs_maintenance: list[MaintenanceDueItem]
    upcoming_events: list[UpcomingEvent]
    total_items: int
