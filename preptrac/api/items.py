"""Inventory item API endpoints."""

from datetime import date, timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.responses import Response
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from preptrac.api.dependencies import get_current_user, get_user_item
from preptrac.database import get_db
from preptrac.exceptions import InsufficientQuantityError, InvalidReferenceError
from preptrac.models.category import Category
from preptrac.models.enums import ConsumptionType
from preptrac.models.item import Item
from preptrac.models.location import Location
from preptrac.models.user import User
from preptrac.schemas.consumption import (
    ActivityBatchRequest,
    ActivityCreate,
    ActivityStatsResponse,
    ConsumptionLogResponse,
)
from preptrac.schemas.item import (
    ItemCreate,
    ItemDetailResponse,
    ItemImportResponse,
    ItemUpdate,
)
from preptrac.services.csv_service import (
    export_items_csv,
    export_items_json,
    import_items_csv,
)
from preptrac.services.event_sync import reconcile_item_events
from preptrac.services.inventory_service import (
    consumption_stats,
    is_low_stock,
    needs_maintenance,
    recent_activity,
    record_activity,
    record_activity_many,
)

router = APIRouter(prefix="/api/v1/items", tags=["items"])

EXPIRING_SOON_DAYS = 30

# Columns that cannot be cleared with an explicit null
_REQUIRED_FIELDS = {"name", "quantity", "unit", "category_id", "location_id"}
# Sentinel columns where null means "not set", stored as 0
_SENTINEL_FIELDS = {"min_quantity", "target_quantity"}


def _check_references(
    db: Session, user: User, category_id: int | None, location_id: int | None
) -> None:
    """Reject category/location ids that do not belong to the user."""
    if category_id is not None:
        exists = (
            db.query(Category.id)
            .filter(Category.id == category_id, Category.user_id == user.id)
            .first()
        )
        if not exists:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid category"
            )
    if location_id is not None:
        exists = (
            db.query(Location.id)
            .filter(Location.id == location_id, Location.user_id == user.id)
            .first()
        )
        if not exists:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid location"
            )


def _activity(
    db: Session, user: User, item: Item, data: ActivityCreate, activity_type: ConsumptionType
) -> Item:
    try:
        record_activity(db, user.id, item, data.quantity, activity_type, data.note)
    except InsufficientQuantityError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    db.refresh(item)
    return item


@router.get("", response_model=list[ItemDetailResponse])
def get_items(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    category_id: int | None = None,
    location_id: int | None = None,
    search: str | None = None,
    expiring_soon: bool = False,
    low_inventory: bool = False,
    needs_maintenance_only: Annotated[bool, Query(alias="needs_maintenance")] = False,
):
    """List the user's items, sorted by name, with optional filters."""
    query = (
        db.query(Item)
        .options(joinedload(Item.category), joinedload(Item.location))
        .filter(Item.user_id == current_user.id)
    )

    if category_id is not None:
        query = query.filter(Item.category_id == category_id)
    if location_id is not None:
        query = query.filter(Item.location_id == location_id)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Item.name.ilike(pattern), Item.description.ilike(pattern)))
    if expiring_soon:
        today = date.today()
        query = query.filter(
            Item.expiration_date >= today,
            Item.expiration_date <= today + timedelta(days=EXPIRING_SOON_DAYS),
        )

    items = query.order_by(Item.name).all()

    # Sentinel and date-arithmetic filters are applied in Python
    if low_inventory:
        items = [item for item in items if is_low_stock(item)]
    if needs_maintenance_only:
        today = date.today()
        items = [item for item in items if needs_maintenance(item, today)]

    return items


@router.post("/activity", response_model=list[ConsumptionLogResponse])
def record_activity_batch(
    batch: ActivityBatchRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Record several consumptions/additions; all succeed or none do."""
    entries = [(e.item_id, e.quantity, e.type, e.note) for e in batch.entries]
    try:
        return record_activity_many(db, current_user.id, entries)
    except (InsufficientQuantityError, InvalidReferenceError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.get("/activity/recent", response_model=list[ConsumptionLogResponse])
def get_recent_activity(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
):
    return recent_activity(db, current_user.id, limit)


@router.get("/activity/stats", response_model=ActivityStatsResponse)
def get_activity_stats(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    days: Annotated[int, Query(ge=1, le=365)] = 30,
):
    """Consumed/added totals per day and per item."""
    return consumption_stats(db, current_user.id, days)


@router.get("/export.csv")
def export_csv(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    content = export_items_csv(db, current_user.id)
    return Response(
        content=content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="preptrac-inventory-{date.today().isoformat()}.csv"'
        },
    )


@router.get("/export.json")
def export_json(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[dict]:
    return export_items_json(db, current_user.id)


@router.post("/import", response_model=ItemImportResponse)
async def import_csv(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    file: Annotated[UploadFile, File()],
):
    """Import items from an uploaded CSV file."""
    raw = await file.read()
    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="CSV file must be UTF-8 encoded"
        ) from e

    result = import_items_csv(db, current_user.id, content)
    return ItemImportResponse(created=result.created, updated=result.updated, errors=result.errors)


@router.get("/{item_id}", response_model=ItemDetailResponse)
def get_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    return get_user_item(db, item_id, current_user)


@router.post("", response_model=ItemDetailResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    item_data: ItemCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create an item and its derived calendar events in one transaction."""
    _check_references(db, current_user, item_data.category_id, item_data.location_id)

    item = Item(user_id=current_user.id, **item_data.model_dump())
    db.add(item)
    db.flush()
    reconcile_item_events(db, current_user.id, item)

    db.refresh(item)
    return item


@router.put("/{item_id}", response_model=ItemDetailResponse)
def update_item(
    item_id: int,
    item_data: ItemUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update an item and resync its derived events."""
    item = get_user_item(db, item_id, current_user)
    update_data = item_data.model_dump(exclude_unset=True)
    _check_references(
        db, current_user, update_data.get("category_id"), update_data.get("location_id")
    )

    for field, value in update_data.items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        if value is None and field in _SENTINEL_FIELDS:
            value = 0
        setattr(item, field, value)

    reconcile_item_events(db, current_user.id, item)

    db.refresh(item)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete an item together with its events and activity log."""
    item = get_user_item(db, item_id, current_user)
    db.delete(item)
    db.commit()


@router.post("/{item_id}/consume", response_model=ItemDetailResponse)
def consume_item(
    item_id: int,
    data: ActivityCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Take a quantity out of stock."""
    item = get_user_item(db, item_id, current_user)
    return _activity(db, current_user, item, data, ConsumptionType.CONSUMPTION)


@router.post("/{item_id}/add", response_model=ItemDetailResponse)
def add_to_item(
    item_id: int,
    data: ActivityCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Put a quantity into stock."""
    item = get_user_item(db, item_id, current_user)
    return _activity(db, current_user, item, data, ConsumptionType.ADDITION)


@router.post("/{item_id}/maintenance-done", response_model=ItemDetailResponse)
def mark_maintenance_done(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    performed_on: date | None = None,
):
    """Record maintenance; moves the pending maintenance event to the next due date."""
    item = get_user_item(db, item_id, current_user)
    item.last_maintenance_date = performed_on or date.today()
    reconcile_item_events(db, current_user.id, item)

    db.refresh(item)
    return item


@router.post("/{item_id}/rotation-done", response_model=ItemDetailResponse)
def mark_rotation_done(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    performed_on: date | None = None,
):
    """Record a stock rotation; moves the pending rotation event to the next due date."""
    item = get_user_item(db, item_id, current_user)
    item.last_rotation_date = performed_on or date.today()
    reconcile_item_events(db, current_user.id, item)

    db.refresh(item)
    return item
