"""Event synchronizer tests."""

from datetime import date
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from preptrac.models import Event, Item
from preptrac.models.enums import EventType
from preptrac.services import event_sync
from preptrac.services.event_sync import (
    derive_item_events,
    plan_item_events,
    reconcile_item_events,
    reconcile_item_events_bulk,
)


def make_item(db, user, category, location, **fields):
    item = Item(
        user_id=user.id,
        category_id=category.id,
        location_id=location.id,
        name=fields.pop("name", "Generator"),
        unit=fields.pop("unit", "unit"),
        quantity=fields.pop("quantity", 1),
        **fields,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def item_events(db, item):
    return db.query(Event).filter(Event.item_id == item.id).order_by(Event.id).all()


def test_derive_maintenance_event():
    """Maintenance is due interval days after the last maintenance."""
    item = SimpleNamespace(
        name="Generator",
        expiration_date=None,
        maintenance_interval=90,
        last_maintenance_date=date(2024, 1, 1),
        rotation_schedule=None,
        last_rotation_date=None,
    )

    derived = derive_item_events(item)

    assert len(derived) == 1
    assert derived[0].type == EventType.MAINTENANCE
    assert derived[0].title == "Generator maintenance"
    assert derived[0].date == date(2024, 3, 31)


def test_derive_requires_both_interval_and_last_date():
    """An interval without a last-done date yields nothing for that type."""
    item = SimpleNamespace(
        name="Water",
        expiration_date=date(2025, 6, 1),
        maintenance_interval=30,
        last_maintenance_date=None,
        rotation_schedule=None,
        last_rotation_date=date(2024, 1, 1),
    )

    derived = derive_item_events(item)

    assert [e.type for e in derived] == [EventType.EXPIRATION]
    assert derived[0].title == "Water expires"


def test_derive_nothing_for_plain_item():
    item = SimpleNamespace(
        name="Rope",
        expiration_date=None,
        maintenance_interval=None,
        last_maintenance_date=None,
        rotation_schedule=None,
        last_rotation_date=None,
    )
    assert derive_item_events(item) == []


def test_derive_skips_due_date_past_calendar_end():
    item = SimpleNamespace(
        name="Safe",
        expiration_date=None,
        maintenance_interval=36500,
        last_maintenance_date=date(9990, 1, 1),
        rotation_schedule=30,
        last_rotation_date=date(9999, 12, 15),
    )
    assert derive_item_events(item) == []


def test_plan_collapses_duplicate_pending_events():
    """Extra pending events of one type are deleted, keeping the oldest."""
    item = SimpleNamespace(
        id=1,
        name="Rice",
        expiration_date=date(2025, 1, 1),
        maintenance_interval=None,
        last_maintenance_date=None,
        rotation_schedule=None,
        last_rotation_date=None,
    )
    older = SimpleNamespace(id=5, type=EventType.EXPIRATION, completed=False, title="Rice expires", date=date(2025, 1, 1))
    newer = SimpleNamespace(id=9, type=EventType.EXPIRATION, completed=False, title="Rice expires", date=date(2025, 1, 1))

    plan = plan_item_events(item, [newer, older])

    assert plan.delete == [newer]
    assert plan.update == []
    assert plan.create == []


def test_reconcile_creates_events(db, user, category, location):
    item = make_item(
        db,
        user,
        category,
        location,
        name="Generator",
        expiration_date=date(2025, 6, 1),
        maintenance_interval=90,
        last_maintenance_date=date(2024, 1, 1),
    )

    result = reconcile_item_events(db, user.id, item)

    events = item_events(db, item)
    assert result.created == 2
    assert {(e.type, e.title, e.date) for e in events} == {
        (EventType.EXPIRATION, "Generator expires", date(2025, 6, 1)),
        (EventType.MAINTENANCE, "Generator maintenance", date(2024, 3, 31)),
    }
    assert all(not e.completed and e.user_id == user.id for e in events)


def test_reconcile_is_idempotent(db, user, category, location):
    """A second run with unchanged fields writes nothing."""
    item = make_item(db, user, category, location, expiration_date=date(2025, 6, 1))
    reconcile_item_events(db, user.id, item)
    before = [(e.id, e.title, e.date) for e in item_events(db, item)]

    result = reconcile_item_events(db, user.id, item)

    assert (result.created, result.updated, result.deleted) == (0, 0, 0)
    assert [(e.id, e.title, e.date) for e in item_events(db, item)] == before


def test_reconcile_updates_in_place(db, user, category, location):
    """Changing the expiration moves the existing event without changing its id."""
    item = make_item(db, user, category, location, expiration_date=date(2025, 6, 1))
    reconcile_item_events(db, user.id, item)
    event_id = item_events(db, item)[0].id

    item.expiration_date = date(2025, 9, 1)
    item.name = "Spare generator"
    result = reconcile_item_events(db, user.id, item)

    events = item_events(db, item)
    assert result.updated == 1
    assert len(events) == 1
    assert events[0].id == event_id
    assert events[0].date == date(2025, 9, 1)
    assert events[0].title == "Spare generator expires"


def test_reconcile_deletes_cleared_type_only(db, user, category, location):
    """Clearing the rotation fields removes the rotation event and nothing else."""
    item = make_item(
        db,
        user,
        category,
        location,
        expiration_date=date(2025, 6, 1),
        rotation_schedule=180,
        last_rotation_date=date(2024, 1, 1),
    )
    reconcile_item_events(db, user.id, item)

    item.rotation_schedule = None
    item.last_rotation_date = None
    result = reconcile_item_events(db, user.id, item)

    assert result.deleted == 1
    assert [e.type for e in item_events(db, item)] == [EventType.EXPIRATION]


def test_completed_event_is_never_touched(db, user, category, location):
    """A completed maintenance event survives field changes and is not duplicated."""
    item = make_item(
        db,
        user,
        category,
        location,
        maintenance_interval=90,
        last_maintenance_date=date(2024, 1, 1),
    )
    reconcile_item_events(db, user.id, item)
    event = item_events(db, item)[0]
    event.completed = True
    db.commit()

    item.last_maintenance_date = date(2024, 4, 1)
    result = reconcile_item_events(db, user.id, item)

    events = item_events(db, item)
    assert (result.created, result.updated, result.deleted) == (0, 0, 0)
    assert len(events) == 1
    assert events[0].completed is True
    assert events[0].date == date(2024, 3, 31)

    # Clearing the fields does not delete history either
    item.maintenance_interval = None
    reconcile_item_events(db, user.id, item)
    assert len(item_events(db, item)) == 1


def test_derived_events_are_flagged(db, user, category, location):
    item = make_item(db, user, category, location, expiration_date=date(2025, 6, 1))

    reconcile_item_events(db, user.id, item)

    assert [e.is_derived for e in item_events(db, item)] == [True]


def test_manual_and_battery_events_are_ignored(db, user, category, location):
    item = make_item(db, user, category, location)
    db.add_all(
        [
            Event(user_id=user.id, item_id=item.id, type=EventType.BATTERY_REPLACEMENT, title="Swap batteries", date=date(2025, 1, 1)),
            Event(user_id=user.id, item_id=None, type=EventType.MAINTENANCE, title="Check roof", date=date(2025, 2, 1)),
        ]
    )
    db.commit()

    result = reconcile_item_events(db, user.id, item)

    assert result.deleted == 0
    assert db.query(Event).count() == 2


def test_bulk_matches_single_item_reconcile(db, user, category, location):
    """Bulk reconciliation gives the same events as reconciling one by one."""
    fields = [
        {"name": "Beans", "expiration_date": date(2025, 3, 1)},
        {"name": "Filter", "maintenance_interval": 30, "last_maintenance_date": date(2024, 5, 1)},
        {"name": "Water", "rotation_schedule": 180, "last_rotation_date": date(2024, 2, 1)},
    ]
    bulk_items = [make_item(db, user, category, location, **dict(f)) for f in fields]
    single_items = [make_item(db, user, category, location, **dict(f)) for f in fields]

    reconcile_item_events_bulk(db, user.id, bulk_items)
    for item in single_items:
        reconcile_item_events(db, user.id, item)

    def snapshot(item):
        return [(e.type, e.title, e.date, e.completed) for e in item_events(db, item)]

    assert [snapshot(i) for i in bulk_items] == [snapshot(i) for i in single_items]


def test_bulk_issues_one_event_query(db, user, category, location):
    items = [
        make_item(db, user, category, location, name=f"Can {n}", expiration_date=date(2025, 1, n + 1))
        for n in range(5)
    ]

    with patch(
        "preptrac.services.event_sync._load_existing_events",
        wraps=event_sync._load_existing_events,
    ) as loader:
        result = reconcile_item_events_bulk(db, user.id, items)

    assert loader.call_count == 1
    assert result.created == 5


def test_reconcile_rolls_back_on_failure(db, user, category, location):
    """If the write fails, no partial changes are left behind."""
    item = make_item(db, user, category, location, expiration_date=date(2025, 6, 1))

    with patch.object(db, "flush", side_effect=RuntimeError("database unavailable")):
        with pytest.raises(RuntimeError):
            reconcile_item_events(db, user.id, item)

    assert item_events(db, item) == []


def test_deleting_item_removes_its_events(db, user, category, location):
    item = make_item(db, user, category, location, expiration_date=date(2025, 6, 1))
    reconcile_item_events(db, user.id, item)

    db.delete(item)
    db.commit()

    assert db.query(Event).count() == 0


def test_hand_made_event_of_derived_type_is_kept(db, user, category, location):
    """A hand-made maintenance event on an item is neither deleted nor rewritten."""
    item = make_item(db, user, category, location, name="Rifle")
    manual = Event(
        user_id=user.id,
        item_id=item.id,
        type=EventType.MAINTENANCE,
        title="Clean rifle",
        date=date(2025, 2, 1),
    )
    db.add(manual)
    db.commit()

    result = reconcile_item_events(db, user.id, item)
    assert result.deleted == 0

    item.maintenance_interval = 90
    item.last_maintenance_date = date(2024, 1, 1)
    result = reconcile_item_events(db, user.id, item)

    events = item_events(db, item)
    assert result.created == 1
    assert [(e.title, e.date, e.is_derived) for e in events] == [
        ("Clean rifle", date(2025, 2, 1), False),
        ("Rifle maintenance", date(2024, 3, 31), True),
    ]
