from __future__ import annotations

from ..extensions import db
from mineor.time_utils import to_iso_date, to_utc_z, utcnow

PURCHASE_CATEGORIES = {"equipment", "consumables", "maintenance", "transport", "other"}


class Purchase(db.Model):
    """
    Site expense backed by a receipt photo.

    receipt_photo holds the image as encoded text (data URL). The column is
    NOT NULL only; the non-empty rule lives in purchase_service so callers can
    block submission before a write is attempted.
    """
    __tablename__ = "purchases"
    __table_args__ = (
        db.Index("ix_purchases_site_date", "site_id", "purchase_date"),
        db.Index("ix_purchases_site_category", "site_id", "category"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    site_id = db.Column(db.Integer, db.ForeignKey("sites.id"), nullable=False, index=True)

    item = db.Column(db.String(255), nullable=False)
    amount = db.Column(db.Float, nullable=False)
    currency = db.Column(db.String(8), nullable=False, default="USD")
    supplier = db.Column(db.String(255), nullable=False, default="")
    category = db.Column(db.String(32), nullable=False, default="other")
    receipt_photo = db.Column(db.Text, nullable=False)
    purchase_date = db.Column(db.Date, nullable=False)
    purchase_time = db.Column(db.String(5), nullable=False)
    notes = db.Column(db.Text, nullable=False, default="")

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Purchase id={self.id} item={self.item!r} amount={self.amount} {self.currency}>"

    def to_dict(self, *, include_receipt: bool = True) -> dict:
        data = {
            "id": self.id,
            "site_id": self.site_id,
            "item": self.item,
            "amount": self.amount,
            "currency": self.currency,
            "supplier": self.supplier,
            "category": self.category,
            "purchase_date": to_iso_date(self.purchase_date),
            "purchase_time": self.purchase_time,
            "notes": self.notes,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
        if include_receipt:
            data["receipt_photo"] = self.receipt_photo
        return data
