"""Calendar event API endpoints."""

from datetime import UTC, date, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload

from preptrac.api.dependencies import get_current_user, get_user_item
from preptrac.database import get_db
from preptrac.models.enums import EventType
from preptrac.models.event import Event
from preptrac.models.user import User
from preptrac.schemas.event import EventCreate, EventResponse, EventUpdate

router = APIRouter(prefix="/api/v1/events", tags=["events"])


def get_user_event(db: Session, event_id: int, user: User) -> Event:
    event = db.query(Event).filter(Event.id == event_id, Event.user_id == user.id).first()
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


def _set_completed(event: Event, completed: bool) -> None:
    event.completed = completed
    event.completed_at = datetime.now(UTC) if completed else None


@router.get("", response_model=list[EventResponse])
def get_events(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    start_date: date | None = None,
    end_date: date | None = None,
    type: EventType | None = None,
    completed: bool | None = None,
):
    """List events in date order, optionally filtered."""
    query = (
        db.query(Event)
        .options(joinedload(Event.item))
        .filter(Event.user_id == current_user.id)
    )
    if start_date is not None:
        query = query.filter(Event.date >= start_date)
    if end_date is not None:
        query = query.filter(Event.date <= end_date)
    if type is not None:
        query = query.filter(Event.type == type)
    if completed is not None:
        query = query.filter(Event.completed.is_(completed))

    return query.order_by(Event.date, Event.id).all()


@router.get("/{event_id}", response_model=EventResponse)
def get_event(
    event_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    return get_user_event(db, event_id, current_user)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    event_data: EventCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create an event by hand, optionally tied to one of the user's items."""
    if event_data.item_id is not None:
        get_user_item(db, event_data.item_id, current_user)

    event = Event(user_id=current_user.id, completed=False, **event_data.model_dump())
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


@router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: int,
    event_data: EventUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update an event; toggling ``completed`` also sets or clears completed_at."""
    event = get_user_event(db, event_id, current_user)
    update_data = event_data.model_dump(exclude_unset=True)

    if update_data.get("item_id") is not None:
        get_user_item(db, update_data["item_id"], current_user)

    completed = update_data.pop("completed", None)
    # Moving a derived event to another item or type hands it over to the user
    if update_data.get("type") not in (None, event.type) or (
        "item_id" in update_data and update_data["item_id"] != event.item_id
    ):
        event.is_derived = False
    for field, value in update_data.items():
        if value is None and field in ("type", "title", "date"):
            continue
        setattr(event, field, value)
    if completed is not None:
        _set_completed(event, completed)

    db.commit()
    db.refresh(event)
    return event


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    event = get_user_event(db, event_id, current_user)
    db.delete(event)
    db.commit()


@router.post("/{event_id}/complete", response_model=EventResponse)
def complete_event(
    event_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Mark an event completed."""
    event = get_user_event(db, event_id, current_user)
    _set_completed(event, True)
    db.commit()
    db.refresh(event)
    return event
