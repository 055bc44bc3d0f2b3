"""Keep an item's derived calendar events in line with its lifecycle fields.

Expiration, maintenance and rotation events are computed from item fields and
reconciled against the stored events: missing ones are created, changed ones
are updated in place, obsolete ones are deleted. Completed events are history
and are never modified, deleted or duplicated. Only events the synchronizer
wrote itself (``is_derived``) are considered, so battery replacement and
hand-made events are left alone even when they share a type with a derived one.

Reconciliation reads the existing events and writes its changes in one
transaction per call, but the read/decide step is not protected against a
concurrent writer on the same item.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy.orm import Session

from preptrac.models.enums import EventType
from preptrac.models.event import Event
from preptrac.models.item import Item
from preptrac.utils import add_days

logger = logging.getLogger(__name__)

DERIVABLE_TYPES = EventType.derivable()


@dataclass(frozen=True)
class DerivedEvent:
    """An event that should exist for an item."""

    type: EventType
    title: str
    date: date


@dataclass
class EventPlan:
    """Writes needed to bring one item's events up to date."""

    item: Item
    create: list[DerivedEvent] = field(default_factory=list)
    update: list[tuple[Event, DerivedEvent]] = field(default_factory=list)
    delete: list[Event] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.create or self.update or self.delete)


@dataclass
class SyncResult:
    """Counts of writes performed by a reconciliation."""

    created: int = 0
    updated: int = 0
    deleted: int = 0

    def add(self, plan: EventPlan) -> None:
        self.created += len(plan.create)
        self.updated += len(plan.update)
        self.deleted += len(plan.delete)


def derive_item_events(item) -> list[DerivedEvent]:
    """Compute the events an item's fields call for.

    A maintenance or rotation interval without its matching last-done date
    (or the reverse) produces nothing for that type, and neither does a due
    date beyond the last representable day.
    """
    derived = []

    if item.expiration_date:
        derived.append(
            DerivedEvent(
                type=EventType.EXPIRATION,
                title=f"{item.name} expires",
                date=item.expiration_date,
            )
        )

    if item.maintenance_interval and item.last_maintenance_date:
        due = add_days(item.last_maintenance_date, item.maintenance_interval)
        if due is not None:
            derived.append(
                DerivedEvent(type=EventType.MAINTENANCE, title=f"{item.name} maintenance", date=due)
            )

    if item.rotation_schedule and item.last_rotation_date:
        due = add_days(item.last_rotation_date, item.rotation_schedule)
        if due is not None:
            derived.append(
                DerivedEvent(type=EventType.ROTATION, title=f"{item.name} rotation", date=due)
            )

    return derived


def plan_item_events(item: Item, existing: Iterable[Event]) -> EventPlan:
    """Decide which events to create, update and delete for one item.

    ``existing`` must contain the item's stored derived events.
    """
    plan = EventPlan(item=item)
    desired = {event.type: event for event in derive_item_events(item)}

    pending_by_type: dict[EventType, list[Event]] = defaultdict(list)
    completed_types: set[EventType] = set()
    for event in sorted(existing, key=lambda e: e.id):
        if event.completed:
            completed_types.add(event.type)
        else:
            pending_by_type[event.type].append(event)

    for event_type in DERIVABLE_TYPES:
        pending = pending_by_type.get(event_type, [])
        wanted = desired.get(event_type)

        if wanted is None:
            plan.delete.extend(pending)
            continue

        if pending:
            keep, extras = pending[0], pending[1:]
            # Older data may hold more than one open event per type
            plan.delete.extend(extras)
            if keep.title != wanted.title or keep.date != wanted.date:
                plan.update.append((keep, wanted))
        elif event_type not in completed_types:
            plan.create.append(wanted)

    return plan


def _apply_plan(db: Session, user_id: int, plan: EventPlan) -> None:
    for event in plan.delete:
        db.delete(event)

    for event, wanted in plan.update:
        event.title = wanted.title
        event.date = wanted.date

    for wanted in plan.create:
        db.add(
            Event(
                user_id=user_id,
                item_id=plan.item.id,
                type=wanted.type,
                title=wanted.title,
                date=wanted.date,
                completed=False,
                is_derived=True,
            )
        )


def _load_existing_events(
    db: Session, user_id: int, item_ids: Sequence[int]
) -> dict[int, list[Event]]:
    if not item_ids:
        return {}

    events = (
        db.query(Event)
        .filter(
            Event.user_id == user_id,
            Event.item_id.in_(item_ids),
            Event.type.in_(DERIVABLE_TYPES),
            Event.is_derived.is_(True),
        )
        .order_by(Event.id)
        .all()
    )

    by_item: dict[int, list[Event]] = defaultdict(list)
    for event in events:
        by_item[event.item_id].append(event)
    return by_item


def _commit_plans(db: Session, user_id: int, plans: list[EventPlan], commit: bool) -> SyncResult:
    result = SyncResult()
    try:
        for plan in plans:
            _apply_plan(db, user_id, plan)
            result.add(plan)
        db.flush()
        if commit:
            db.commit()
    except Exception:
        db.rollback()
        raise
    return result


def reconcile_item_events(
    db: Session, user_id: int, item: Item, commit: bool = True
) -> SyncResult:
    """Reconcile one item's derived events.

    All writes happen in a single transaction. Pass ``commit=False`` to leave
    the commit to the caller's enclosing transaction.
    """
    if item.id is None:
        db.flush()

    existing = _load_existing_events(db, user_id, [item.id]).get(item.id, [])
    plan = plan_item_events(item, existing)
    result = _commit_plans(db, user_id, [plan], commit)

    if not plan.is_empty:
        logger.info(
            f"Synced events for item {item.id}: "
            f"{result.created} created, {result.updated} updated, {result.deleted} deleted"
        )
    return result


def reconcile_item_events_bulk(
    db: Session, user_id: int, items: Sequence[Item], commit: bool = True
) -> SyncResult:
    """Reconcile many items in one pass.

    Existing events for all items are loaded with a single query and every
    write goes into one transaction. The outcome is the same as calling
    :func:`reconcile_item_events` for each item in turn.
    """
    if any(item.id is None for item in items):
        db.flush()

    items = list({item.id: item for item in items}.values())
    existing = _load_existing_events(db, user_id, [item.id for item in items])
    plans = [plan_item_events(item, existing.get(item.id, [])) for item in items]
    result = _commit_plans(db, user_id, plans, commit)

    logger.info(
        f"Bulk synced events for {len(items)} items: "
        f"{result.created} created, {result.updated} updated, {result.deleted} deleted"
    )
    return result
