"""Celery task that delivers due reminders for every user."""

import asyncio
import logging
from datetime import date

from sqlalchemy.orm import Session

from preptrac.celery_app import app as celery_app
from preptrac.database import SessionLocal
from preptrac.models import User
from preptrac.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def deliver_notifications(db: Session, today: date, service: NotificationService | None = None) -> dict:
    """Send webhook reminders and email digests for all users.

    A failure for one user is logged and counted, and the remaining users are
    still processed.
    """
    service = service or NotificationService()
    stats = {"users": 0, "webhooks_sent": 0, "webhooks_failed": 0, "emails_sent": 0, "errors": 0}

    user_ids = [user_id for (user_id,) in db.query(User.id).order_by(User.id).all()]
    for user_id in user_ids:
        stats["users"] += 1
        try:
            webhook_stats = asyncio.run(service.dispatch_webhook_notifications(db, user_id, today))
            stats["webhooks_sent"] += webhook_stats["sent"]
            stats["webhooks_failed"] += webhook_stats["failed"]
            if service.dispatch_email_digest(db, user_id, today):
                stats["emails_sent"] += 1
        except Exception as e:
            logger.error(f"Error sending notifications for user {user_id}: {e}", exc_info=True)
            db.rollback()
            stats["errors"] += 1

    logger.info(f"Notification run complete: {stats}")
    return stats


@celery_app.task
def send_due_notifications() -> dict:
    """Run daily via celery-beat."""
    db: Session = SessionLocal()
    try:
        return deliver_notifications(db, date.today())
    finally:
        db.close()
