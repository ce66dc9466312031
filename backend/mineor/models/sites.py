from __future__ import annotations

from ..extensions import db
from mineor.time_utils import to_utc_z, utcnow


class Site(db.Model):
    """
    Physical mining location; the ownership scope for every other record.

    ACTIVE SITE: exactly one site carries is_active=True once the store is
    seeded. Activation goes through site_service.set_active_site so the flag
    never ends up on two rows.
    """
    __tablename__ = "sites"
    __table_args__ = (
        db.Index("ix_sites_name", "name"),
        db.Index("ix_sites_is_active", "is_active"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    location = db.Column(db.String(255), nullable=False, default="")
    is_active = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Site id={self.id} name={self.name!r} active={self.is_active}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "is_active": self.is_active,
            "created_at": to_utc_z(self.created_at),
        }
