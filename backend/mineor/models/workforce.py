from __future__ import annotations

from ..extensions import db
from mineor.time_utils import to_iso_date, to_utc_z, utcnow

WORKER_STATUSES = {"active", "inactive", "leave"}
ATTENDANCE_STATUSES = {"present", "absent", "late", "left_early"}


class Worker(db.Model):
    """Roster entry for a person working on a site."""
    __tablename__ = "workers"
    __table_args__ = (
        db.Index("ix_workers_site_last_name", "site_id", "last_name"),
        db.Index("ix_workers_site_first_name", "site_id", "first_name"),
        db.Index("ix_workers_site_status", "site_id", "status"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    site_id = db.Column(db.Integer, db.ForeignKey("sites.id"), nullable=False, index=True)

    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120), nullable=False)
    role = db.Column(db.String(120), nullable=False, default="")
    phone = db.Column(db.String(64), nullable=False, default="")
    team = db.Column(db.String(120), nullable=False, default="")
    status = db.Column(db.String(16), nullable=False, default="active")
    hire_date = db.Column(db.Date, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Worker id={self.id} name={self.full_name!r} status={self.status}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "site_id": self.site_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "role": self.role,
            "phone": self.phone,
            "team": self.team,
            "status": self.status,
            "hire_date": to_iso_date(self.hire_date),
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


class AttendanceRecord(db.Model):
    """
    Daily check-in / check-out for one worker on one site.

    LIFECYCLE:
    - OPEN: check_out is NULL, the worker is on site
    - CLOSED: check_out recorded

    worker_id refers to whoever checked in (a roster worker or the local
    profile), so it carries no foreign key.
    """
    __tablename__ = "attendance_records"
    __table_args__ = (
        db.Index("ix_attendance_site_date", "site_id", "date"),
        db.Index("ix_attendance_site_worker_date", "site_id", "worker_id", "date"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    site_id = db.Column(db.Integer, db.ForeignKey("sites.id"), nullable=False, index=True)
    worker_id = db.Column(db.Integer, nullable=False)
    worker_name = db.Column(db.String(255), nullable=False, default="")

    date = db.Column(db.Date, nullable=False)
    check_in = db.Column(db.String(5), nullable=False)
    check_out = db.Column(db.String(5), nullable=True)
    status = db.Column(db.String(16), nullable=False, default="present")

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    @property
    def is_open(self) -> bool:
        return self.check_out is None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "site_id": self.site_id,
            "worker_id": self.worker_id,
            "worker_name": self.worker_name,
            "date": to_iso_date(self.date),
            "check_in": self.check_in,
            "check_out": self.check_out,
            "status": self.status,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
