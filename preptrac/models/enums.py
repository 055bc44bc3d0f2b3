"""Enums for model fields."""

from enum import Enum


class EventType(str, Enum):
    """Calendar event types."""

    EXPIRATION = "expiration"
    MAINTENANCE = "maintenance"
    ROTATION = "rotation"
    BATTERY_REPLACEMENT = "battery_replacement"

    @classmethod
    def derivable(cls) -> tuple["EventType", ...]:
        """Types computed from item fields by the event synchronizer."""
        return (cls.EXPIRATION, cls.MAINTENANCE, cls.ROTATION)


class ConsumptionType(str, Enum):
    """Direction of a quantity change on an item."""

    CONSUMPTION = "consumption"
    ADDITION = "addition"


class ActivityLevel(str, Enum):
    """Household activity level used to scale calorie and water needs."""

    SEDENTARY = "sedentary"
    MODERATE = "moderate"
    VERY_ACTIVE = "very_active"
    EXTRA_ACTIVE = "extra_active"


class Sex(str, Enum):
    """Sex used by the Mifflin-St Jeor equation."""

    MALE = "male"
    FEMALE = "female"
