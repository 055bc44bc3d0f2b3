"""User notification settings model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from preptrac.database import Base
from preptrac.models.mixins import TimestampMixin


class NotificationSettings(Base, TimestampMixin):
    """Per-user email, in-app and webhook reminder preferences."""

    __tablename__ = "notification_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    email_enabled = Column(Boolean, nullable=False, default=True)
    email_expiration_days = Column(Integer, nullable=False, default=30)
    email_maintenance_days = Column(Integer, nullable=False, default=7)
    email_rotation_days = Column(Integer, nullable=False, default=7)
    email_low_inventory = Column(Boolean, nullable=False, default=True)

    in_app_enabled = Column(Boolean, nullable=False, default=True)

    webhook_enabled = Column(Boolean, nullable=False, default=False)
    webhook_url = Column(String(1000), nullable=True)
    webhook_secret = Column(String(255), nullable=True)
    webhook_expiration_days = Column(Integer, nullable=False, default=7)
    webhook_maintenance_days = Column(Integer, nullable=False, default=3)
    webhook_rotation_days = Column(Integer, nullable=False, default=3)
    webhook_low_inventory = Column(Boolean, nullable=False, default=False)

    # Relationships
    user = relationship("User", backref="notification_settings")
