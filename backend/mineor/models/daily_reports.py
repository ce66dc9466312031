from __future__ import annotations

from ..extensions import db
from mineor.time_utils import to_iso_date, to_utc_z, utcnow


class DailyReport(db.Model):
    """
    End-of-day write-up for a site.

    photos is an ordered JSON list of encoded images; the service caps it at
    MAX_REPORT_PHOTOS.
    """
    __tablename__ = "daily_reports"
    __table_args__ = (
        db.Index("ix_daily_reports_site_date", "site_id", "date"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    site_id = db.Column(db.Integer, db.ForeignKey("sites.id"), nullable=False, index=True)

    date = db.Column(db.Date, nullable=False)
    summary = db.Column(db.Text, nullable=False)
    incidents = db.Column(db.Text, nullable=False, default="")
    observations = db.Column(db.Text, nullable=False, default="")
    photos = db.Column(db.JSON, nullable=False, default=list)
    production_total = db.Column(db.Float, nullable=False, default=0)
    workers_present = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "site_id": self.site_id,
            "date": to_iso_date(self.date),
            "summary": self.summary,
            "incidents": self.incidents,
            "observations": self.observations,
            "photos": list(self.photos or []),
            "production_total": self.production_total,
            "workers_present": self.workers_present,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
