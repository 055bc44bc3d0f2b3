"""Reminder collection and delivery over in-app, webhook and email channels."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from sqlalchemy.orm import Session, joinedload

from preptrac.models import Event, Item, NotificationSettings, User
from preptrac.schemas.notification import PendingNotification
from preptrac.services.email_service import send_email
from preptrac.services.inventory_service import next_maintenance_date, next_rotation_date
from preptrac.services.webhook_service import WebhookItem, WebhookPayload, send_webhook

logger = logging.getLogger(__name__)

EVENT_LOOKAHEAD_DAYS = 7


@dataclass
class Reminder:
    """Something the user should hear about, tied to an item or event."""

    type: str
    message: str
    date: date
    item: Item | None = None
    event: Event | None = None

    def to_pending(self) -> PendingNotification:
        return PendingNotification(
            type=self.type,
            message=self.message,
            date=self.date,
            item_id=self.item.id if self.item is not None else None,
            event_id=self.event.id if self.event is not None else None,
        )

    def to_webhook_payload(self) -> WebhookPayload:
        item = None
        if self.item is not None:
            item = WebhookItem(
                id=self.item.id,
                name=self.item.name,
                quantity=self.item.quantity,
                unit=self.item.unit,
                category=self.item.category.name if self.item.category else None,
                location=self.item.location.name if self.item.location else None,
                expiration_date=(
                    self.item.expiration_date.isoformat() if self.item.expiration_date else None
                ),
            )
        return WebhookPayload(
            type=self.type,
            message=self.message,
            date=self.date.isoformat(),
            item_id=self.item.id if self.item is not None else None,
            event_id=self.event.id if self.event is not None else None,
            item=item,
        )


def _due_within(due: date | None, days: int, today: date) -> bool:
    """True when ``due`` is today or later and no more than ``days`` away."""
    return due is not None and due - timedelta(days=days) <= today <= due


def collect_reminders(
    db: Session,
    user_id: int,
    today: date,
    expiration_days: int,
    maintenance_days: int,
    rotation_days: int,
    low_inventory: bool,
    include_events: bool = True,
) -> list[Reminder]:
    """Gather reminders for one user using the given lookahead windows.

    A window of 0 turns that reminder type off. Low inventory only considers
    items with an explicit minimum quantity. Results are sorted by date.
    """
    items = (
        db.query(Item)
        .options(joinedload(Item.category), joinedload(Item.location))
        .filter(Item.user_id == user_id)
        .all()
    )
    reminders: list[Reminder] = []

    for item in items:
        if expiration_days and _due_within(item.expiration_date, expiration_days, today):
            reminders.append(
                Reminder(
                    type="expiration",
                    message=f"{item.name} expires on {item.expiration_date.isoformat()}",
                    date=item.expiration_date,
                    item=item,
                )
            )

        due = next_maintenance_date(item)
        if maintenance_days and _due_within(due, maintenance_days, today):
            reminders.append(
                Reminder(
                    type="maintenance",
                    message=f"{item.name} needs maintenance by {due.isoformat()}",
                    date=due,
                    item=item,
                )
            )

        due = next_rotation_date(item)
        if rotation_days and _due_within(due, rotation_days, today):
            reminders.append(
                Reminder(
                    type="rotation",
                    message=f"{item.name} should be rotated by {due.isoformat()}",
                    date=due,
                    item=item,
                )
            )

        if low_inventory and item.min_quantity and item.quantity <= item.min_quantity:
            reminders.append(
                Reminder(
                    type="low_inventory",
                    message=f"{item.name} is running low ({item.quantity:g} {item.unit} remaining)",
                    date=today,
                    item=item,
                )
            )

    if include_events:
        events = (
            db.query(Event)
            .filter(
                Event.user_id == user_id,
                Event.completed.is_(False),
                Event.date >= today,
                Event.date <= today + timedelta(days=EVENT_LOOKAHEAD_DAYS),
            )
            .all()
        )
        for event in events:
            reminders.append(
                Reminder(
                    type=event.type.value,
                    message=event.title,
                    date=event.date,
                    item=event.item,
                    event=event,
                )
            )

    reminders.sort(key=lambda r: r.date)
    return reminders


class NotificationService:
    """Builds and delivers reminders according to each user's settings."""

    def get_user_settings(self, db: Session, user_id: int) -> NotificationSettings:
        """Return the user's settings, creating the defaults on first access."""
        settings = (
            db.query(NotificationSettings).filter(NotificationSettings.user_id == user_id).first()
        )
        if settings is None:
            settings = NotificationSettings(user_id=user_id)
            db.add(settings)
            db.commit()
            db.refresh(settings)
        return settings

    def get_pending_notifications(
        self, db: Session, user_id: int, today: date | None = None
    ) -> list[PendingNotification]:
        """In-app reminders, using the email lookahead windows."""
        today = today or date.today()
        settings = self.get_user_settings(db, user_id)
        if not settings.in_app_enabled:
            return []

        reminders = collect_reminders(
            db,
            user_id,
            today,
            expiration_days=settings.email_expiration_days,
            maintenance_days=settings.email_maintenance_days,
            rotation_days=settings.email_rotation_days,
            low_inventory=settings.email_low_inventory,
        )
        return [reminder.to_pending() for reminder in reminders]

    async def dispatch_webhook_notifications(
        self, db: Session, user_id: int, today: date | None = None
    ) -> dict:
        """Send one webhook per due item reminder. Returns sent/failed counts."""
        today = today or date.today()
        settings = self.get_user_settings(db, user_id)
        stats = {"sent": 0, "failed": 0}
        if not settings.webhook_enabled or not settings.webhook_url:
            return stats

        reminders = collect_reminders(
            db,
            user_id,
            today,
            expiration_days=settings.webhook_expiration_days,
            maintenance_days=settings.webhook_maintenance_days,
            rotation_days=settings.webhook_rotation_days,
            low_inventory=settings.webhook_low_inventory,
            include_events=False,
        )
        for reminder in reminders:
            result = await send_webhook(
                settings.webhook_url, reminder.to_webhook_payload(), settings.webhook_secret
            )
            if result.success:
                stats["sent"] += 1
            else:
                stats["failed"] += 1
                logger.warning(f"Webhook reminder for user {user_id} failed: {result.error}")

        return stats

    def dispatch_email_digest(self, db: Session, user_id: int, today: date | None = None) -> bool:
        """Email the user a digest of due reminders. Returns True if an email was sent."""
        today = today or date.today()
        settings = self.get_user_settings(db, user_id)
        if not settings.email_enabled:
            return False

        user = db.query(User).filter(User.id == user_id).first()
        if user is None:
            return False

        reminders = collect_reminders(
            db,
            user_id,
            today,
            expiration_days=settings.email_expiration_days,
            maintenance_days=settings.email_maintenance_days,
            rotation_days=settings.email_rotation_days,
            low_inventory=settings.email_low_inventory,
        )
        if not reminders:
            return False

        lines = [f"- {r.date.isoformat()}: {r.message}" for r in reminders]
        body = "Upcoming in your PrepTrac inventory:\n\n" + "\n".join(lines) + "\n"
        sent, _ = send_email(
            f"PrepTrac: {len(reminders)} reminder{'s' if len(reminders) != 1 else ''}",
            body,
            user.email,
        )
        return sent
