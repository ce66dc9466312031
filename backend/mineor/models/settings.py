from __future__ import annotations

from ..extensions import db
from mineor.time_utils import to_utc_z, utcnow

DISPLAY_TOGGLES = (
    "show_vs_yesterday",
    "show_vs_last_week",
    "show_working_days",
    "show_production_comparison",
    "show_purchase_comparison",
)
THEMES = {"dark", "light"}
LANGUAGES = {"fr", "en"}


class Settings(db.Model):
    """
    Display preferences for the local installation.

    SINGLETON: one row is expected; settings_service.get_settings creates it
    on first access.
    """
    __tablename__ = "settings"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)

    show_vs_yesterday = db.Column(db.Boolean, nullable=False, default=True)
    show_vs_last_week = db.Column(db.Boolean, nullable=False, default=True)
    show_working_days = db.Column(db.Boolean, nullable=False, default=True)
    show_production_comparison = db.Column(db.Boolean, nullable=False, default=True)
    show_purchase_comparison = db.Column(db.Boolean, nullable=False, default=True)

    theme = db.Column(db.String(16), nullable=False, default="dark")
    language = db.Column(db.String(8), nullable=False, default="fr")

    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        data = {"id": self.id}
        for key in DISPLAY_TOGGLES:
            data[key] = getattr(self, key)
        data["theme"] = self.theme
        data["language"] = self.language
        data["updated_at"] = to_utc_z(self.updated_at)
        return data
