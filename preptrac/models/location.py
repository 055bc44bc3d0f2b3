"""Storage location model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from preptrac.database import Base
from preptrac.models.mixins import TimestampMixin


class Location(Base, TimestampMixin):
    """Place where supplies are stored (home, vehicle, bug-out bag, ...)."""

    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Relationships
    user = relationship("User", backref="locations")
    items = relationship("Item", back_populates="location")
