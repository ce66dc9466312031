# Overview: Service-layer operations for attendance; check-in and check-out per site and day.

"""
Attendance Service

WHY: Workers check in on arrival and check out when leaving. One open record
per worker, site and day; a second check-in while open is refused.

STATUS: a check-in at or after LATE_CHECK_IN_HOUR on the site wall clock is
recorded as 'late', otherwise 'present'. Without `at`, HH:MM and lateness come
from local_now(); the record date stays the UTC day like every other date
default.
"""

from __future__ import annotations

from datetime import date, datetime

from flask import current_app

from ..extensions import db
from ..errors import ValidationError
from ..models import AttendanceRecord, Site
from .record_service import commit, require_record
from mineor.time_utils import bump_timestamp, format_clock, local_now, parse_iso_date, today, utcnow


class AttendanceError(ValidationError):
    """Raised for invalid attendance operations."""
    pass


def _get_open_record(site_id: int, worker_id: int, day: date) -> AttendanceRecord | None:
    return db.session.query(AttendanceRecord).filter_by(
        site_id=site_id,
        worker_id=worker_id,
        date=day,
        check_out=None,
    ).first()


def check_in(*, site_id: int, worker_id: int, worker_name: str = "", at: datetime | None = None) -> AttendanceRecord:
    require_record(Site, site_id)
    day = at.date() if at else today()
    at = at or local_now()

    if _get_open_record(site_id, worker_id, day):
        raise AttendanceError("Worker is already checked in")

    late_hour = current_app.config.get("LATE_CHECK_IN_HOUR", 9)
    record = AttendanceRecord(
        site_id=site_id,
        worker_id=worker_id,
        worker_name=worker_name,
        date=day,
        check_in=format_clock(at),
        check_out=None,
        status="late" if at.hour >= late_hour else "present",
        created_at=utcnow(),
        updated_at=utcnow(),
    )
    db.session.add(record)
    commit("record check-in")
    return record


def check_out(*, site_id: int, worker_id: int, at: datetime | None = None) -> AttendanceRecord:
    day = at.date() if at else today()
    at = at or local_now()
    record = _get_open_record(site_id, worker_id, day)
    if not record:
        raise AttendanceError("Worker is not checked in")

    record.check_out = format_clock(at)
    record.updated_at = bump_timestamp(record.updated_at)
    commit("record check-out")
    return record


def list_for_day(site_id: int, day=None) -> list[AttendanceRecord]:
    day = parse_iso_date(day) or utcnow().date()
    return (
        db.session.query(AttendanceRecord)
        .filter_by(site_id=site_id, date=day)
        .order_by(AttendanceRecord.check_in.asc(), AttendanceRecord.id.asc())
        .all()
    )


def current_status(site_id: int, worker_id: int, day=None) -> dict:
    day = parse_iso_date(day) or utcnow().date()
    record = (
        db.session.query(AttendanceRecord)
        .filter_by(site_id=site_id, worker_id=worker_id, date=day)
        .order_by(AttendanceRecord.id.desc())
        .first()
    )
    if not record:
        return {"status": "CHECKED_OUT", "record": None, "check_in": None}

    return {
        "status": "CHECKED_IN" if record.is_open else "CHECKED_OUT",
        "record": record.to_dict(),
        "check_in": record.check_in,
    }


def present_count(site_id: int, day=None) -> int:
    """Distinct workers with a present or late record for the day."""
    records = list_for_day(site_id, day)
    return len({r.worker_id for r in records if r.status in ("present", "late")})
