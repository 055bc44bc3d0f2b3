"""Calendar event model."""

from sqlalchemy import Boolean, Column, Date, DateTime, Enum, ForeignKey, Integer, String, Text, false
from sqlalchemy.orm import relationship

from preptrac.database import Base
from preptrac.models.enums import EventType
from preptrac.models.mixins import TimestampMixin


class Event(Base, TimestampMixin):
    """A dated reminder, either derived from an item or created by hand."""

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    item_id = Column(
        Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=True, index=True
    )
    type = Column(
        Enum(
            EventType,
            name="eventtype",
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
        index=True,
    )
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False, index=True)
    completed = Column(Boolean, nullable=False, default=False, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    # Set only for events written by the event synchronizer
    is_derived = Column(Boolean, nullable=False, default=False, server_default=false())

    # Relationships
    user = relationship("User", backref="events")
    item = relationship("Item", back_populates="events")
