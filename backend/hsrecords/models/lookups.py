from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


class LookupItem(db.Model):
    """
    Admin-configurable dropdown option, keyed by (type, value).

    Incidents copy the value string, so editing or deactivating an item
    never rewrites historical records.
    """
    __tablename__ = "lookup_items"
    __table_args__ = (
        db.UniqueConstraint("type", "value", name="uq_lookup_items_type_value"),
        db.Index("ix_lookup_items_type_active", "type", "active"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(64), nullable=False)
    value = db.Column(db.String(128), nullable=False)
    label = db.Column(db.String(255), nullable=False)
    order = db.Column("sort_order", db.Integer, nullable=True)
    active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def __repr__(self) -> str:
        return f"<LookupItem {self.type}:{self.value} active={self.active}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "value": self.value,
            "label": self.label,
            "order": self.order,
            "active": self.active,
            "created_at": to_utc_z(self.created_at),
        }
