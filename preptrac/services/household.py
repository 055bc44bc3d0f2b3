"""Household calorie and water needs."""

from collections.abc import Iterable

from preptrac.models.enums import ActivityLevel, Sex
from preptrac.utils import round_half_up

# BMR multiplier per activity level
ACTIVITY_CALORIE_FACTOR: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.0,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}

# Drinking water in fluid ounces per pound of body weight
ACTIVITY_WATER_OZ_PER_LB: dict[ActivityLevel, float] = {
    ActivityLevel.MODERATE: 0.65,
    ActivityLevel.VERY_ACTIVE: 0.75,
    ActivityLevel.EXTRA_ACTIVE: 0.85,
}
DEFAULT_WATER_OZ_PER_LB = 0.5

LBS_PER_KG = 2.20462
FL_OZ_PER_GALLON = 128


def mifflin_st_jeor_bmr(weight_kg: float, height_cm: float, age: int, sex: Sex | str) -> int:
    """Basal metabolic rate in kcal/day, rounded and never negative."""
    base = 10 * (weight_kg or 0) + 6.25 * (height_cm or 0) - 5 * (age or 0)
    if str(getattr(sex, "value", sex)).lower() == Sex.FEMALE.value:
        bmr = base - 161
    else:
        bmr = base + 5
    return max(0, round_half_up(bmr))


def calorie_factor(activity_level: ActivityLevel | str | None) -> float:
    if not activity_level:
        return 1.0
    return ACTIVITY_CALORIE_FACTOR.get(ActivityLevel(activity_level), 1.0)


def water_oz_per_lb(activity_level: ActivityLevel | str | None) -> float:
    if not activity_level:
        return DEFAULT_WATER_OZ_PER_LB
    return ACTIVITY_WATER_OZ_PER_LB.get(ActivityLevel(activity_level), DEFAULT_WATER_OZ_PER_LB)


def member_daily_calories(member, activity_level: ActivityLevel | str | None = None) -> int:
    """Daily calories for one household member."""
    bmr = mifflin_st_jeor_bmr(member.weight_kg, member.height_cm, member.age, member.sex)
    return round_half_up(bmr * calorie_factor(activity_level))


def household_daily_calories(
    members: Iterable, activity_level: ActivityLevel | str | None = None
) -> int:
    """Sum of member BMRs scaled by the activity factor.

    Each member's BMR is rounded before summing; the scaled total is rounded
    once more.
    """
    bmr_sum = sum(
        mifflin_st_jeor_bmr(m.weight_kg, m.height_cm, m.age, m.sex) for m in members
    )
    return round_half_up(bmr_sum * calorie_factor(activity_level))


def daily_water_gallons(
    members: Iterable, activity_level: ActivityLevel | str | None = None
) -> float:
    """Household drinking water per day in gallons."""
    total_weight_lbs = sum((m.weight_kg or 0) * LBS_PER_KG for m in members)
    return total_weight_lbs * water_oz_per_lb(activity_level) / FL_OZ_PER_GALLON
