"""Notification-related Pydantic schemas."""

import datetime as dt

from pydantic import BaseModel, Field, HttpUrl


class NotificationSettingsUpdate(BaseModel):
    """Schema for updating notification settings."""

    email_enabled: bool | None = None
    email_expiration_days: int | None = Field(None, ge=0)
    email_maintenance_days: int | None = Field(None, ge=0)
    email_rotation_days: int | None = Field(None, ge=0)
    email_low_inventory: bool | None = None
    in_app_enabled: bool | None = None
    webhook_enabled: bool | None = None
    webhook_url: HttpUrl | None = None
    webhook_secret: str | None = Field(None, max_length=255)
    webhook_expiration_days: int | None = Field(None, ge=0)
    webhook_maintenance_days: int | None = Field(None, ge=0)
    webhook_rotation_days: int | None = Field(None, ge=0)
    webhook_low_inventory: bool | None = None


class NotificationSettingsResponse(BaseModel):
    """Schema for notification settings response."""

    id: int
    email_enabled: bool
    email_expiration_days: int
    email_maintenance_days: int
    email_rotation_days: int
    email_low_inventory: bool
    in_app_enabled: bool
    webhook_enabled: bool
    webhook_url: str | None
    webhook_secret: str | None
    webhook_expiration_days: int
    webhook_maintenance_days: int
    webhook_rotation_days: int
    webhook_low_inventory: bool

    model_config = {"from_attributes": True}


class PendingNotification(BaseModel):
    """A reminder due for the user."""

    type: str
    message: str
    date: dt.date
    item_id: int | None = None
    event_id: int | None = None


class TestWebhookResponse(BaseModel):
    success: bool
    message: str
