"""Household member model."""

from sqlalchemy import Column, Enum, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from preptrac.database import Base
from preptrac.models.enums import Sex
from preptrac.models.mixins import TimestampMixin


class FamilyMember(Base, TimestampMixin):
    """Person in the household, used for calorie and water needs."""

    __tablename__ = "family_members"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=True)
    age = Column(Integer, nullable=False)
    weight_kg = Column(Float, nullable=False)
    height_cm = Column(Float, nullable=False)
    sex = Column(
        Enum(Sex, name="sex", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )

    # Relationships
    user = relationship("User", backref="family_members")
