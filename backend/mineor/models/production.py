from __future__ import annotations

from ..extensions import db
from mineor.time_utils import to_iso_date, to_utc_z, utcnow

SHIFTS = {"morning", "afternoon", "night"}


class Production(db.Model):
    """
    One gold production entry for a team and shift.

    `date` is the calendar day the material was produced, not a timestamp;
    reports filter and group on it.
    """
    __tablename__ = "productions"
    __table_args__ = (
        db.Index("ix_productions_site_date", "site_id", "date"),
        db.Index("ix_productions_site_team", "site_id", "team"),
        db.Index("ix_productions_site_shift", "site_id", "shift"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    site_id = db.Column(db.Integer, db.ForeignKey("sites.id"), nullable=False, index=True)

    date = db.Column(db.Date, nullable=False)
    quantity_grams = db.Column(db.Float, nullable=False, default=0)
    team = db.Column(db.String(120), nullable=False)
    shift = db.Column(db.String(16), nullable=False)
    notes = db.Column(db.Text, nullable=False, default="")

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Production id={self.id} site_id={self.site_id} date={self.date} grams={self.quantity_grams}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "site_id": self.site_id,
            "date": to_iso_date(self.date),
            "quantity_grams": self.quantity_grams,
            "team": self.team,
            "shift": self.shift,
            "notes": self.notes,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
