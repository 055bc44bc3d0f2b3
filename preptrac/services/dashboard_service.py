"""Dashboard aggregation over a user's inventory.

The ``compute_*`` functions are pure: they take already-loaded items,
categories and household members and never touch the database.
:func:`compute_dashboard_stats` loads a user's data and composes them.
Missing numeric fields count as zero.
"""

import calendar
import logging
from collections.abc import Iterable, Sequence
from datetime import date

from sqlalchemy.orm import Session, joinedload, selectinload

from preptrac.models.category import Category
from preptrac.models.event import Event
from preptrac.models.family_member import FamilyMember
from preptrac.models.item import Item
from preptrac.models.user import User
from preptrac.schemas.dashboard import (
    AmmoBreakdownEntry,
    AmmoStats,
    CategoryGoal,
    DashboardStats,
    ExpiringItem,
    FoodBreakdownEntry,
    FoodStats,
    FuelStats,
    GoalProgress,
    MaintenanceDueItem,
    UpcomingEvent,
    WaterBreakdownEntry,
    WaterStats,
)
from preptrac.services.household import daily_water_gallons, household_daily_calories
from preptrac.services.inventory_service import needs_maintenance, next_maintenance_date
from preptrac.utils import contains_any, round_half_up

logger = logging.getLogger(__name__)

GALLONS_PER_LITER = 0.264172
GALLONS_PER_BOTTLE = 16.9 / 128  # standard 16.9 fl oz bottle
KWH_PER_GALLON = 6
GENERIC_FOOD_UNITS_PER_DAY = 3

EXPIRATION_WINDOW_DAYS = 30
UPCOMING_EVENT_MONTHS = 3
MAX_EXPIRATIONS = 10
MAX_MAINTENANCE = 10
MAX_EVENTS = 20


def _category_name(item) -> str:
    category = getattr(item, "category", None)
    return category.name if category is not None else ""


def _quantity(item) -> float:
    return item.quantity or 0


def is_water_category(name: str | None) -> bool:
    return contains_any(name, "water")


def is_food_category(name: str | None) -> bool:
    return contains_any(name, "food")


def is_ammo_category(name: str | None) -> bool:
    return contains_any(name, "ammo")


def is_fuel_category(name: str | None) -> bool:
    return contains_any(name, "fuel", "energy")


def is_volume_unit(unit: str | None) -> bool:
    return contains_any(unit, "gallon", "liter", "litre")


def gallons_equivalent(quantity: float, unit: str | None) -> float:
    """Convert a water quantity to gallons; unknown units count as-is."""
    if contains_any(unit, "liter", "litre"):
        return quantity * GALLONS_PER_LITER
    if contains_any(unit, "bottle"):
        return quantity * GALLONS_PER_BOTTLE
    return quantity


def is_water_item(item) -> bool:
    return is_water_category(_category_name(item)) or is_volume_unit(item.unit)


def inventory_calories(items: Iterable) -> float:
    """Total calories over items that have calories_per_unit set."""
    return sum(
        _quantity(item) * item.calories_per_unit
        for item in items
        if item.calories_per_unit is not None and item.calories_per_unit > 0
    )


def compute_water_stats(
    items: Sequence, members: Sequence = (), activity_level=None
) -> WaterStats:
    water_items = [item for item in items if is_water_item(item)]
    total = 0.0
    breakdown = []
    for item in water_items:
        gallons = gallons_equivalent(_quantity(item), item.unit)
        total += gallons
        breakdown.append(
            WaterBreakdownEntry(
                name=item.name,
                quantity=_quantity(item),
                unit=item.unit,
                gallons_equivalent=round_half_up(gallons, 2),
            )
        )

    daily_gallons = daily_water_gallons(members, activity_level)
    water_days = None
    if daily_gallons > 0 and total > 0:
        water_days = round_half_up(total / daily_gallons, 1)

    return WaterStats(
        total_water=round_half_up(total, 2),
        total_water_days=water_days,
        use_household_for_water=water_days is not None,
        daily_water_gallons=round_half_up(daily_gallons, 2),
        breakdown=breakdown,
    )


def compute_food_stats(
    items: Sequence, members: Sequence = (), activity_level=None
) -> FoodStats:
    """Days of food, household-based when possible.

    With household members and calorie data the days are inventory calories
    divided by daily household calories; otherwise food-category units are
    assumed to last three per day.
    """
    daily_calories = household_daily_calories(members, activity_level)
    total_calories = inventory_calories(items)
    food_items = [item for item in items if is_food_category(_category_name(item))]

    if daily_calories > 0 and total_calories > 0:
        food_days = total_calories / daily_calories
        use_household = True
    else:
        food_days = sum(_quantity(item) for item in food_items) / GENERIC_FOOD_UNITS_PER_DAY
        use_household = False

    breakdown = []
    for item in food_items:
        item_calories = inventory_calories([item])
        contribution = None
        if daily_calories > 0 and item_calories > 0:
            contribution = round_half_up(item_calories / daily_calories, 1)
        breakdown.append(
            FoodBreakdownEntry(
                name=item.name,
                quantity=_quantity(item),
                unit=item.unit,
                contribution_days=contribution,
            )
        )

    return FoodStats(
        total_food_days=round_half_up(food_days, 1),
        use_household_calculation=use_household,
        total_inventory_calories=round_half_up(total_calories),
        household_daily_calories=daily_calories,
        breakdown=breakdown,
    )


def compute_ammo_stats(items: Sequence) -> AmmoStats:
    ammo_items = [item for item in items if is_ammo_category(_category_name(item))]
    return AmmoStats(
        total_ammo=sum(_quantity(item) for item in ammo_items),
        breakdown=[
            AmmoBreakdownEntry(name=item.name, quantity=_quantity(item), unit=item.unit)
            for item in ammo_items
        ],
    )


def _fuel_totals(items: Iterable) -> tuple[float, float, float]:
    """(fuel gallons, battery kWh, total kWh) for fuel/energy items."""
    gallons = sum(_quantity(item) for item in items if contains_any(item.unit, "gallon"))
    battery = sum(_quantity(item) for item in items if contains_any(item.unit, "kwh"))
    return gallons, battery, gallons * KWH_PER_GALLON + battery


def compute_fuel_stats(items: Sequence) -> FuelStats:
    fuel_items = [item for item in items if is_fuel_category(_category_name(item))]
    gallons, battery, total_kwh = _fuel_totals(fuel_items)
    return FuelStats(
        total_fuel_gallons=round_half_up(gallons, 2),
        battery_kwh=round_half_up(battery, 1),
        total_kwh=round_half_up(total_kwh, 1),
    )


def progress_percent(current: float, target: float) -> float:
    if target <= 0:
        return 0.0
    return round_half_up(min(current / target * 100, 100), 2)


def _default_goal(category) -> tuple[float, float]:
    current = sum(_quantity(item) for item in category.items)
    target = category.target_quantity or 0
    if target <= 0:
        target = sum(item.target_quantity or 0 for item in category.items)
    return current, target


def _goal(value) -> float:
    return value if value is not None and value > 0 else 0


def compute_category_goals(
    categories: Sequence, user=None, daily_calories: int = 0
) -> list[CategoryGoal]:
    """Progress of each category toward its goal.

    The target is the category's own target when set, otherwise the sum of
    its items' targets. Dashboard goals on the user (ammo rounds, water
    gallons, food days, fuel) take precedence for matching categories.
    Categories without any target are left out.
    """
    ammo_goal = _goal(getattr(user, "ammo_goal_rounds", None))
    water_goal = _goal(getattr(user, "water_goal_gallons", None))
    food_goal = _goal(getattr(user, "food_goal_days", None))
    fuel_gallons_goal = _goal(getattr(user, "fuel_goal_gallons", None))
    fuel_kwh_goal = _goal(getattr(user, "fuel_goal_kwh", None))
    fuel_battery_goal = _goal(getattr(user, "fuel_goal_battery_kwh", None))

    goals = []
    for category in categories:
        display_unit = None
        sub_progress = None

        if is_ammo_category(category.name) and ammo_goal:
            current = sum(_quantity(item) for item in category.items)
            target = ammo_goal
            display_unit = "rounds"
        elif is_water_category(category.name) and water_goal:
            current = sum(
                gallons_equivalent(_quantity(item), item.unit)
                for item in category.items
                if is_volume_unit(item.unit) or contains_any(item.unit, "bottle")
            )
            target = water_goal
            display_unit = "gallons"
        elif is_food_category(category.name) and food_goal:
            calories = inventory_calories(category.items)
            current = calories / daily_calories if daily_calories > 0 else 0
            target = food_goal
            display_unit = "days"
        elif is_fuel_category(category.name) and (
            fuel_gallons_goal or fuel_kwh_goal or fuel_battery_goal
        ):
            gallons, battery, total_kwh = _fuel_totals(category.items)
            if fuel_kwh_goal:
                current, target, display_unit = total_kwh, fuel_kwh_goal, "kWh"
            elif fuel_gallons_goal:
                current, target, display_unit = gallons, fuel_gallons_goal, "gal"
            else:
                current, target, display_unit = battery, fuel_battery_goal, "kWh"

            sub_progress = {}
            if fuel_gallons_goal:
                sub_progress["fuel_gallons"] = GoalProgress(
                    current=round_half_up(gallons, 2),
                    target=fuel_gallons_goal,
                    progress=progress_percent(gallons, fuel_gallons_goal),
                )
            if fuel_kwh_goal:
                sub_progress["total_kwh"] = GoalProgress(
                    current=round_half_up(total_kwh, 1),
                    target=fuel_kwh_goal,
                    progress=progress_percent(total_kwh, fuel_kwh_goal),
                )
            if fuel_battery_goal:
                sub_progress["battery_kwh"] = GoalProgress(
                    current=round_half_up(battery, 1),
                    target=fuel_battery_goal,
                    progress=progress_percent(battery, fuel_battery_goal),
                )
        else:
            current, target = _default_goal(category)

        if target <= 0:
            continue

        goals.append(
            CategoryGoal(
                id=category.id,
                name=category.name,
                color=category.color,
                current_quantity=current,
                target_quantity=target,
                progress=progress_percent(current, target),
                display_unit=display_unit,
                fuel_sub_progress=sub_progress,
            )
        )
    return goals


def add_months(day: date, months: int) -> date:
    """Same day ``months`` later, clamped to the end of shorter months."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def upcoming_expirations(items: Iterable, today: date) -> list[ExpiringItem]:
    """Items expiring within the next 30 days, soonest first."""
    window_end = date.fromordinal(today.toordinal() + EXPIRATION_WINDOW_DAYS)
    expiring = sorted(
        (
            item
            for item in items
            if item.expiration_date and today <= item.expiration_date <= window_end
        ),
        key=lambda item: item.expiration_date,
    )
    return [
        ExpiringItem(
            id=item.id,
            name=item.name,
            quantity=_quantity(item),
            unit=item.unit,
            expiration_date=item.expiration_date,
            category_name=_category_name(item),
            location_name=item.location.name if getattr(item, "location", None) else "",
        )
        for item in expiring[:MAX_EXPIRATIONS]
    ]


def maintenance_due(items: Iterable, today: date) -> list[MaintenanceDueItem]:
    due = [item for item in items if needs_maintenance(item, today)]
    return [
        MaintenanceDueItem(
            id=item.id,
            name=item.name,
            maintenance_interval=item.maintenance_interval,
            last_maintenance_date=item.last_maintenance_date,
            next_maintenance_date=next_maintenance_date(item),
        )
        for item in due[:MAX_MAINTENANCE]
    ]


def upcoming_events(events: Iterable, today: date) -> list[UpcomingEvent]:
    """Open events from today through the next three months, soonest first."""
    window_end = add_months(today, UPCOMING_EVENT_MONTHS)
    selected = sorted(
        (e for e in events if not e.completed and today <= e.date <= window_end),
        key=lambda e: (e.date, e.id),
    )
    return [
        UpcomingEvent(
            id=event.id,
            type=event.type,
            title=event.title,
            date=event.date,
            item_id=event.item_id,
            item_name=event.item.name if event.item is not None else None,
        )
        for event in selected[:MAX_EVENTS]
    ]


def compute_dashboard_stats(db: Session, user_id: int, today: date | None = None) -> DashboardStats:
    """Compute the dashboard summary for one user from current stored state."""
    today = today or date.today()

    user = db.query(User).filter(User.id == user_id).first()
    activity_level = user.activity_level if user else None

    items = (
        db.query(Item)
        .options(joinedload(Item.category), joinedload(Item.location))
        .filter(Item.user_id == user_id)
        .order_by(Item.name)
        .all()
    )
    members = db.query(FamilyMember).filter(FamilyMember.user_id == user_id).all()
    categories = (
        db.query(Category)
        .options(selectinload(Category.items))
        .filter(Category.user_id == user_id)
        .order_by(Category.name)
        .all()
    )
    events = (
        db.query(Event)
        .options(joinedload(Event.item))
        .filter(
            Event.user_id == user_id,
            Event.completed.is_(False),
            Event.date >= today,
            Event.date <= add_months(today, UPCOMING_EVENT_MONTHS),
        )
        .order_by(Event.date)
        .all()
    )

    food = compute_food_stats(items, members, activity_level)
    stats = DashboardStats(
        water=compute_water_stats(items, members, activity_level),
        food=food,
        ammo=compute_ammo_stats(items),
        fuel=compute_fuel_stats(items),
        category_goals=compute_category_goals(categories, user, food.household_daily_calories),
        upcoming_expirations=upcoming_expirations(items, today),
        needs_maintenance=maintenance_due(items, today),
        upcoming_events=upcoming_events(events, today),
        total_items=len(items),
    )
    logger.debug(f"Computed dashboard stats for user {user_id} over {len(items)} items")
    return stats
