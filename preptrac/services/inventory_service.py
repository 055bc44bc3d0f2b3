"""Inventory operations: stock changes, low-stock and maintenance rules."""

import logging
from collections import defaultdict
from collections.abc import Sequence
from datetime import UTC, date, datetime, timedelta

from sqlalchemy.orm import Session

from preptrac.config import get_settings
from preptrac.exceptions import InsufficientQuantityError, InvalidReferenceError
from preptrac.models.consumption_log import ConsumptionLog
from preptrac.models.enums import ConsumptionType
from preptrac.models.item import Item
from preptrac.utils import add_days

logger = logging.getLogger(__name__)


def effective_min_quantity(item) -> float:
    """Low-stock threshold for an item; 0 falls back to the default threshold."""
    if item.min_quantity:
        return item.min_quantity
    return get_settings().default_low_stock_threshold


def is_low_stock(item) -> bool:
    return (item.quantity or 0) <= effective_min_quantity(item)


def next_maintenance_date(item) -> date | None:
    if not item.maintenance_interval or not item.last_maintenance_date:
        return None
    return add_days(item.last_maintenance_date, item.maintenance_interval)


def next_rotation_date(item) -> date | None:
    if not item.rotation_schedule or not item.last_rotation_date:
        return None
    return add_days(item.last_rotation_date, item.rotation_schedule)


def needs_maintenance(item, today: date) -> bool:
    due = next_maintenance_date(item)
    return due is not None and due <= today


def _apply_activity(
    db: Session,
    user_id: int,
    item: Item,
    quantity: float,
    activity_type: ConsumptionType,
    note: str | None,
) -> ConsumptionLog:
    if activity_type == ConsumptionType.CONSUMPTION:
        if quantity > item.quantity:
            raise InsufficientQuantityError(item.name, item.quantity, quantity)
        item.quantity = item.quantity - quantity
    else:
        item.quantity = item.quantity + quantity

    log = ConsumptionLog(
        user_id=user_id,
        item_id=item.id,
        quantity=quantity,
        type=activity_type,
        note=note,
    )
    db.add(log)
    return log


def record_activity(
    db: Session,
    user_id: int,
    item: Item,
    quantity: float,
    activity_type: ConsumptionType,
    note: str | None = None,
) -> ConsumptionLog:
    """Adjust an item's quantity and append the matching log row atomically."""
    try:
        log = _apply_activity(db, user_id, item, quantity, activity_type, note)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(log)
    logger.info(f"Recorded {activity_type.value} of {quantity:g} {item.unit} for item {item.id}")
    return log


def record_activity_many(
    db: Session,
    user_id: int,
    entries: Sequence[tuple[int, float, ConsumptionType, str | None]],
) -> list[ConsumptionLog]:
    """Record several (item_id, quantity, type, note) entries in one transaction.

    Every item must belong to the user; if any entry fails nothing is written.
    """
    item_ids = {item_id for item_id, _, _, _ in entries}
    items = {
        item.id: item
        for item in db.query(Item).filter(Item.id.in_(item_ids), Item.user_id == user_id).all()
    }

    logs = []
    try:
        for item_id, quantity, activity_type, note in entries:
            item = items.get(item_id)
            if item is None:
                raise InvalidReferenceError(f"Item {item_id} not found")
            logs.append(_apply_activity(db, user_id, item, quantity, activity_type, note))
        db.commit()
    except Exception:
        db.rollback()
        raise

    for log in logs:
        db.refresh(log)
    logger.info(f"Recorded {len(logs)} activity entries for user {user_id}")
    return logs


def recent_activity(db: Session, user_id: int, limit: int = 20) -> list[ConsumptionLog]:
    return (
        db.query(ConsumptionLog)
        .filter(ConsumptionLog.user_id == user_id)
        .order_by(ConsumptionLog.created_at.desc(), ConsumptionLog.id.desc())
        .limit(limit)
        .all()
    )


def consumption_stats(db: Session, user_id: int, days: int = 30, now: datetime | None = None) -> dict:
    """Per-day and per-item consumed/added totals over the last ``days`` days."""
    now = now or datetime.now(UTC)
    since = now - timedelta(days=days)

    logs = (
        db.query(ConsumptionLog, Item)
        .join(Item, ConsumptionLog.item_id == Item.id)
        .filter(ConsumptionLog.user_id == user_id, ConsumptionLog.created_at >= since)
        .order_by(ConsumptionLog.created_at)
        .all()
    )

    daily: dict[date, dict[str, float]] = defaultdict(lambda: {"consumed": 0.0, "added": 0.0})
    by_item: dict[int, dict] = {}
    for log, item in logs:
        key = "consumed" if log.type == ConsumptionType.CONSUMPTION else "added"
        daily[log.created_at.date()][key] += log.quantity
        totals = by_item.setdefault(
            item.id,
            {"item_id": item.id, "item_name": item.name, "unit": item.unit, "consumed": 0.0, "added": 0.0},
        )
        totals[key] += log.quantity

    return {
        "days": days,
        "daily": [{"day": day, **totals} for day, totals in sorted(daily.items())],
        "by_item": sorted(by_item.values(), key=lambda t: t["consumed"], reverse=True),
    }
