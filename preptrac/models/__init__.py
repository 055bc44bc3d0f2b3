"""SQLAlchemy models."""

from preptrac.models.category import Category
from preptrac.models.consumption_log import ConsumptionLog
from preptrac.models.event import Event
from preptrac.models.family_member import FamilyMember
from preptrac.models.item import Item
from preptrac.models.location import Location
from preptrac.models.notification_settings import NotificationSettings
from preptrac.models.user import User

__all__ = [
    "User",
    "Category",
    "Location",
    "Item",
    "Event",
    "ConsumptionLog",
    "FamilyMember",
    "NotificationSettings",
]
