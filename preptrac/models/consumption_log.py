"""Consumption log model (append-only audit trail of quantity changes)."""

from sqlalchemy import Column, DateTime, Enum, Float, ForeignKey, Integer, Text, func
from sqlalchemy.orm import relationship

from preptrac.database import Base
from preptrac.models.enums import ConsumptionType


class ConsumptionLog(Base):
    """One consumption or addition against an item."""

    __tablename__ = "consumption_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    item_id = Column(
        Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True
    )
    quantity = Column(Float, nullable=False)
    type = Column(
        Enum(
            ConsumptionType,
            name="consumptiontype",
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
        default=ConsumptionType.CONSUMPTION,
    )
    note = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )

    # Relationships
    item = relationship("Item", back_populates="consumption_logs")
