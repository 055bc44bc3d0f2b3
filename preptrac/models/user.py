"""User model."""

from sqlalchemy import Column, Enum, Float, Integer, String

from preptrac.database import Base
from preptrac.models.enums import ActivityLevel
from preptrac.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication, ownership and household goals."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    activity_level = Column(
        Enum(
            ActivityLevel,
            name="activitylevel",
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=True,
    )

    # Goals shown on the dashboard; null or 0 means "not set"
    ammo_goal_rounds = Column(Float, nullable=True)
    water_goal_gallons = Column(Float, nullable=True)
    food_goal_days = Column(Float, nullable=True)
    fuel_goal_gallons = Column(Float, nullable=True)
    fuel_goal_kwh = Column(Float, nullable=True)
    fuel_goal_battery_kwh = Column(Float, nullable=True)
