"""Category model."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from preptrac.database import Base
from preptrac.models.mixins import TimestampMixin


class Category(Base, TimestampMixin):
    """Category for grouping supplies (Food, Water, Ammo, ...)."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(20), nullable=True)
    icon = Column(String(50), nullable=True)
    # 0 means no category-level goal; item targets are summed instead
    target_quantity = Column(Float, nullable=False, default=0)

    # Relationships
    user = relationship("User", backref="categories")
    items = relationship("Item", back_populates="category")
