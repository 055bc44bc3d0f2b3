"""Inventory item model."""

from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from preptrac.database import Base
from preptrac.models.mixins import TimestampMixin


class Item(Base, TimestampMixin):
    """A tracked supply with its quantity and lifecycle dates."""

    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    quantity = Column(Float, nullable=False, default=0)
    unit = Column(String(50), nullable=False)

    expiration_date = Column(Date, nullable=True, index=True)
    maintenance_interval = Column(Integer, nullable=True)  # days
    last_maintenance_date = Column(Date, nullable=True)
    rotation_schedule = Column(Integer, nullable=True)  # days
    last_rotation_date = Column(Date, nullable=True)

    notes = Column(Text, nullable=True)
    image_url = Column(String(1000), nullable=True)
    qr_code = Column(String(255), nullable=True)

    # 0 means "use the default low-stock threshold"
    min_quantity = Column(Float, nullable=False, default=0)
    # 0 means "no item-level goal"
    target_quantity = Column(Float, nullable=False, default=0)
    calories_per_unit = Column(Float, nullable=True)

    # Relationships
    user = relationship("User", backref="items")
    category = relationship("Category", back_populates="items")
    location = relationship("Location", back_populates="items")
    events = relationship(
        "Event", back_populates="item", cascade="all, delete-orphan", passive_deletes=True
    )
    consumption_logs = relationship(
        "ConsumptionLog", back_populates="item", cascade="all, delete-orphan"
    )
