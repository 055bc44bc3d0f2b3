"""CSV and JSON import/export of a user's items."""

import csv
import io
import logging
import math
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy.orm import Session, joinedload

from preptrac.models.category import Category
from preptrac.models.item import Item
from preptrac.models.location import Location
from preptrac.services.event_sync import reconcile_item_events_bulk
from preptrac.utils import MAX_INTERVAL_DAYS

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "id",
    "name",
    "description",
    "quantity",
    "unit",
    "categoryId",
    "category",
    "locationId",
    "location",
    "expirationDate",
    "maintenanceInterval",
    "lastMaintenanceDate",
    "rotationSchedule",
    "lastRotationDate",
    "notes",
    "imageUrl",
    "qrCode",
    "minQuantity",
    "targetQuantity",
    "caloriesPerUnit",
    "createdAt",
    "updatedAt",
]

# CSV column -> item attribute
_TEXT_FIELDS = {
    "description": "description",
    "notes": "notes",
    "imageUrl": "image_url",
    "qrCode": "qr_code",
}
_DATE_FIELDS = {
    "expirationDate": "expiration_date",
    "lastMaintenanceDate": "last_maintenance_date",
    "lastRotationDate": "last_rotation_date",
}
_INT_FIELDS = {
    "maintenanceInterval": "maintenance_interval",
    "rotationSchedule": "rotation_schedule",
}
_FLOAT_FIELDS = {
    "minQuantity": "min_quantity",
    "targetQuantity": "target_quantity",
    "caloriesPerUnit": "calories_per_unit",
}


class RowError(ValueError):
    """A CSV row that cannot be imported."""


@dataclass
class ImportResult:
    created: int = 0
    updated: int = 0
    errors: list[dict] = field(default_factory=list)


def _isoformat(value) -> str:
    return value.isoformat() if value is not None else ""


def _number(value) -> str:
    if value is None:
        return ""
    return f"{value:g}" if isinstance(value, float) else str(value)


def item_to_row(item: Item) -> dict[str, str]:
    return {
        "id": str(item.id),
        "name": item.name,
        "description": item.description or "",
        "quantity": _number(item.quantity),
        "unit": item.unit,
        "categoryId": str(item.category_id),
        "category": item.category.name if item.category else "",
        "locationId": str(item.location_id),
        "location": item.location.name if item.location else "",
        "expirationDate": _isoformat(item.expiration_date),
        "maintenanceInterval": _number(item.maintenance_interval),
        "lastMaintenanceDate": _isoformat(item.last_maintenance_date),
        "rotationSchedule": _number(item.rotation_schedule),
        "lastRotationDate": _isoformat(item.last_rotation_date),
        "notes": item.notes or "",
        "imageUrl": item.image_url or "",
        "qrCode": item.qr_code or "",
        "minQuantity": _number(item.min_quantity),
        "targetQuantity": _number(item.target_quantity),
        "caloriesPerUnit": _number(item.calories_per_unit),
        "createdAt": _isoformat(item.created_at),
        "updatedAt": _isoformat(item.updated_at),
    }


def _user_items(db: Session, user_id: int) -> list[Item]:
    return (
        db.query(Item)
        .options(joinedload(Item.category), joinedload(Item.location))
        .filter(Item.user_id == user_id)
        .order_by(Item.id)
        .all()
    )


def export_items_csv(db: Session, user_id: int) -> str:
    """Export all of a user's items as CSV with every field quoted."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS, quoting=csv.QUOTE_ALL)
    writer.writeheader()
    for item in _user_items(db, user_id):
        writer.writerow(item_to_row(item))
    return buffer.getvalue()


def export_items_json(db: Session, user_id: int) -> list[dict]:
    return [item_to_row(item) for item in _user_items(db, user_id)]


def _clean(row: dict, column: str) -> str:
    return (row.get(column) or "").strip()


def _parse_float(row: dict, column: str) -> float | None:
    """Parse a non-negative, finite number."""
    raw = _clean(row, column)
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise RowError(f"Invalid number for {column}: {raw!r}") from None
    if not math.isfinite(value):
        raise RowError(f"Invalid number for {column}: {raw!r}")
    if value < 0:
        raise RowError(f"{column} cannot be negative: {raw!r}")
    return value


def _parse_interval(row: dict, column: str) -> int | None:
    """Parse a whole number of days between 1 and MAX_INTERVAL_DAYS."""
    value = _parse_float(row, column)
    if value is None:
        return None
    days = int(value)
    if not 0 < days <= MAX_INTERVAL_DAYS:
        raise RowError(
            f"{column} must be between 1 and {MAX_INTERVAL_DAYS} days: {_clean(row, column)!r}"
        )
    return days


def _parse_date(row: dict, column: str) -> date | None:
    raw = _clean(row, column)
    if not raw:
        return None
    try:
        # Accept full timestamps by keeping the date part
        return date.fromisoformat(raw[:10])
    except ValueError:
        raise RowError(f"Invalid date for {column}: {raw!r}") from None


class _Resolver:
    """Find or create categories and locations by id or case-insensitive name."""

    def __init__(self, db: Session, user_id: int, model, label: str):
        self.db = db
        self.user_id = user_id
        self.model = model
        self.label = label
        records = db.query(model).filter(model.user_id == user_id).all()
        self.by_id = {record.id: record for record in records}
        self.by_name = {record.name.lower(): record for record in records}

    def find(self, raw_id: str, name: str):
        """Return the matching record, or None when it must be created.

        Raises RowError when the row names neither a known id nor a name.
        """
        if raw_id:
            try:
                record = self.by_id.get(int(float(raw_id)))
            except (ValueError, OverflowError):
                record = None
            if record is not None:
                return record

        if not name:
            raise RowError(f"Missing {self.label}")
        return self.by_name.get(name.lower())

    def create(self, name: str):
        record = self.model(user_id=self.user_id, name=name)
        self.db.add(record)
        self.db.flush()
        self.by_id[record.id] = record
        self.by_name[name.lower()] = record
        logger.info(f"Created {self.label} '{name}' during import for user {self.user_id}")
        return record


def _parse_row(row: dict) -> dict:
    """Parse a row into item attributes, raising RowError on bad values."""
    name = _clean(row, "name")
    if not name:
        raise RowError("Name is required")

    values = {"name": name, "unit": _clean(row, "unit"), "quantity": _parse_float(row, "quantity")}
    for column, attr in _TEXT_FIELDS.items():
        values[attr] = _clean(row, column) or None
    for column, attr in _DATE_FIELDS.items():
        values[attr] = _parse_date(row, column)
    for column, attr in _INT_FIELDS.items():
        values[attr] = _parse_interval(row, column)
    for column, attr in _FLOAT_FIELDS.items():
        values[attr] = _parse_float(row, column)
    return values


def _apply_row(row: dict, item: Item, categories: _Resolver, locations: _Resolver) -> None:
    values = _parse_row(row)

    category_name = _clean(row, "category")
    location_name = _clean(row, "location")
    category = categories.find(_clean(row, "categoryId"), category_name)
    location = locations.find(_clean(row, "locationId"), location_name)
    if category is None:
        category = categories.create(category_name)
    if location is None:
        location = locations.create(location_name)

    item.name = values["name"]
    item.unit = values["unit"] or item.unit or "units"
    if values["quantity"] is not None or item.quantity is None:
        item.quantity = values["quantity"] or 0
    item.category_id = category.id
    item.location_id = location.id
    for attr in (*_TEXT_FIELDS.values(), *_DATE_FIELDS.values(), *_INT_FIELDS.values()):
        setattr(item, attr, values[attr])
    # Sentinel fields store 0 for "not set"
    item.min_quantity = values["min_quantity"] or 0
    item.target_quantity = values["target_quantity"] or 0
    item.calories_per_unit = values["calories_per_unit"]


def import_items_csv(db: Session, user_id: int, content: str) -> ImportResult:
    """Import items from CSV text.

    Rows whose ``id`` matches one of the user's items update it; other rows
    create new items. Bad rows are reported and skipped. Everything else,
    including the derived events of every imported item, is written in one
    transaction.
    """
    result = ImportResult()
    reader = csv.DictReader(io.StringIO(content.lstrip("\ufeff")))

    existing = {item.id: item for item in db.query(Item).filter(Item.user_id == user_id).all()}
    categories = _Resolver(db, user_id, Category, "category")
    locations = _Resolver(db, user_id, Location, "location")
    touched: list[Item] = []

    try:
        # Row 1 is the header
        for row_number, row in enumerate(reader, start=2):
            raw_id = _clean(row, "id")
            item = existing.get(int(raw_id)) if raw_id.isdigit() else None
            is_new = item is None
            if is_new:
                item = Item(user_id=user_id)

            try:
                _apply_row(row, item, categories, locations)
            except RowError as e:
                result.errors.append({"row": row_number, "error": str(e)})
                continue

            if is_new:
                db.add(item)
                result.created += 1
            else:
                result.updated += 1
            touched.append(item)

        db.flush()
        reconcile_item_events_bulk(db, user_id, touched, commit=False)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"Imported items for user {user_id}: {result.created} created, "
        f"{result.updated} updated, {len(result.errors)} errors"
    )
    return result
