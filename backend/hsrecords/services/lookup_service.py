# Overview: Service-layer operations for lookup tables (dropdown options).

"""
Lookup items are (type, value, label) rows grouped by type.

Removal is two explicit steps: try a hard delete, and if the database
refuses it (the row is referenced), deactivate the row instead. Either
outcome counts as a successful removal.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import LookupItem
from ..validation import NotFoundError, ValidationError, is_blank


def _display_order():
    return (
        LookupItem.order.is_(None),
        LookupItem.order.asc(),
        LookupItem.label.asc(),
    )


def list_by_type(lookup_type: str) -> list[LookupItem]:
    return db.session.query(LookupItem).filter(
        LookupItem.type == lookup_type,
        LookupItem.active.is_(True),
    ).order_by(*_display_order()).all()


def list_grouped(types: list[str]) -> dict[str, list[LookupItem]]:
    """Active items for several types, keyed by type. Types with no items are omitted."""
    items = db.session.query(LookupItem).filter(
        LookupItem.type.in_(types),
        LookupItem.active.is_(True),
    ).order_by(LookupItem.type.asc(), *_display_order()).all()

    grouped: dict[str, list[LookupItem]] = {}
    for item in items:
        grouped.setdefault(item.type, []).append(item)
    return grouped


def list_all() -> list[LookupItem]:
    """Every item, inactive included, for the settings screen."""
    return db.session.query(LookupItem).order_by(
        LookupItem.type.asc(), *_display_order()
    ).all()


def upsert_item(
    lookup_type: str,
    value: str,
    label: str,
    order: int | None = None,
    active: bool = True,
) -> LookupItem:
    """
    Create or update the item keyed by (type, value).

    A repeat call with the same key overwrites label, order and active.
    """
    if is_blank(lookup_type) or is_blank(value) or is_blank(label):
        raise ValidationError("Missing type/value/label")

    lookup_type = str(lookup_type).strip()
    value = str(value).strip()
    label = str(label).strip()

    item = db.session.query(LookupItem).filter_by(type=lookup_type, value=value).first()
    if item:
        item.label = label
        item.order = order
        item.active = active
    else:
        item = LookupItem(type=lookup_type, value=value, label=label, order=order, active=active)
        db.session.add(item)

    db.session.commit()
    return item


def try_hard_delete(item: LookupItem) -> bool:
    """
    Delete the row inside a savepoint.

    Returns False (and leaves the row in place) if a constraint rejects it.
    """
    try:
        with db.session.begin_nested():
            db.session.delete(item)
    except IntegrityError:
        return False
    db.session.commit()
    return True


def deactivate(item: LookupItem) -> None:
    item.active = False
    db.session.commit()


def remove_item(item_id: int) -> str:
    """
    Remove a lookup item, falling back to deactivation.

    Returns "deleted" or "deactivated".
    """
    item = db.session.get(LookupItem, item_id)
    if not item:
        raise NotFoundError("Lookup item not found")

    if try_hard_delete(item):
        return "deleted"

    # Savepoint rollback expires the instance; reload before the soft path
    item = db.session.get(LookupItem, item_id)
    deactivate(item)
    return "deactivated"
