from __future__ import annotations

from ..extensions import db
from mineor.time_utils import to_utc_z, utcnow

INVENTORY_CATEGORIES = {"equipment", "tools", "spare_parts", "consumables", "safety"}
ITEM_CONDITIONS = {"good", "fair", "poor", "broken"}


class InventoryItem(db.Model):
    """
    Equipment or supply held on a site.

    Quantity is a mutable count (not ledger-derived). An item is low on stock
    once quantity falls to or below min_quantity.
    """
    __tablename__ = "inventory_items"
    __table_args__ = (
        db.Index("ix_inventory_site_name", "site_id", "name"),
        db.Index("ix_inventory_site_category", "site_id", "category"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    site_id = db.Column(db.Integer, db.ForeignKey("sites.id"), nullable=False, index=True)

    name = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(32), nullable=False)
    quantity = db.Column(db.Float, nullable=False, default=0)
    unit = db.Column(db.String(32), nullable=False, default="")
    min_quantity = db.Column(db.Float, nullable=False, default=0)
    condition = db.Column(db.String(16), nullable=False, default="good")
    location = db.Column(db.String(255), nullable=False, default="")
    notes = db.Column(db.Text, nullable=False, default="")

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_quantity

    def __repr__(self) -> str:
        return f"<InventoryItem id={self.id} name={self.name!r} qty={self.quantity}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "site_id": self.site_id,
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
            "unit": self.unit,
            "min_quantity": self.min_quantity,
            "condition": self.condition,
            "location": self.location,
            "notes": self.notes,
            "is_low_stock": self.is_low_stock,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
