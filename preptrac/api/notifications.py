"""Notification API endpoints: settings, test webhook and pending reminders."""

from datetime import UTC, date, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from preptrac.api.dependencies import get_current_user, get_notification_service
from preptrac.database import get_db
from preptrac.models.user import User
from preptrac.schemas.notification import (
    NotificationSettingsResponse,
    NotificationSettingsUpdate,
    PendingNotification,
    TestWebhookResponse,
)
from preptrac.services.notification_service import NotificationService
from preptrac.services.webhook_service import WebhookPayload, send_webhook

router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.get("/settings", response_model=NotificationSettingsResponse)
async def get_notification_settings(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[NotificationService, Depends(get_notification_service)],
):
    """Get notification settings, creating the defaults on first access."""
    return service.get_user_settings(db, current_user.id)


@router.put("/settings", response_model=NotificationSettingsResponse)
async def update_notification_settings(
    settings_update: NotificationSettingsUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[NotificationService, Depends(get_notification_service)],
):
    """Update notification settings for the current user."""
    settings = service.get_user_settings(db, current_user.id)

    update_data = settings_update.model_dump(exclude_unset=True)
    if update_data.get("webhook_url") is not None:
        update_data["webhook_url"] = str(update_data["webhook_url"])
    for field, value in update_data.items():
        if value is None and field not in ("webhook_url", "webhook_secret"):
            continue
        setattr(settings, field, value)

    db.commit()
    db.refresh(settings)
    return settings


@router.post("/test-webhook", response_model=TestWebhookResponse)
async def send_test_webhook(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[NotificationService, Depends(get_notification_service)],
):
    """Send a test payload to the configured webhook."""
    settings = service.get_user_settings(db, current_user.id)
    if not settings.webhook_enabled or not settings.webhook_url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Webhook is not enabled or URL is not set",
        )

    payload = WebhookPayload(
        type="maintenance",
        message="Test webhook from PrepTrac",
        date=datetime.now(UTC).isoformat(),
    )
    result = await send_webhook(settings.webhook_url, payload, settings.webhook_secret)
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=result.error or "Failed to send webhook",
        )

    return TestWebhookResponse(success=True, message="Test webhook sent successfully")


@router.get("/pending", response_model=list[PendingNotification])
async def get_pending_notifications(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[NotificationService, Depends(get_notification_service)],
):
    """Reminders due soon, sorted by date."""
    return service.get_pending_notifications(db, current_user.id, date.today())
