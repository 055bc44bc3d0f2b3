"""Celery application configuration."""

from celery import Celery
from celery.schedules import crontab

from preptrac.config import get_settings

settings = get_settings()

app = Celery(
    "preptrac",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["preptrac.tasks.notifications"],
)

app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,  # 5 minutes max per task
    task_soft_time_limit=240,
)

app.conf.beat_schedule = {
    "send-due-notifications": {
        "task": "preptrac.tasks.notifications.send_due_notifications",
        "schedule": crontab(hour=8, minute=0),
    },
}
