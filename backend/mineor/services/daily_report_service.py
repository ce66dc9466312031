# Overview: Service-layer operations for daily site reports.

from __future__ import annotations

from flask import current_app

from ..errors import ValidationError
from ..models import DailyReport, Site
from ..validation import ModelValidationPolicy, validate_payload
from . import record_service
from mineor.time_utils import parse_iso_date

DAILY_REPORT_POLICY = ModelValidationPolicy(
    writable_fields={
        "date", "summary", "incidents", "observations", "photos",
        "production_total", "workers_present",
    },
    required_on_create={"date", "summary"},
    non_negative={"production_total", "workers_present"},
)


def _check_photos(patch: dict) -> None:
    if "photos" not in patch:
        return
    limit = current_app.config.get("MAX_REPORT_PHOTOS", 6)
    if len(patch["photos"]) > limit:
        raise ValidationError(f"A daily report holds at most {limit} photos")


def create_report(site_id: int, **fields) -> DailyReport:
    record_service.require_record(Site, site_id)
    patch = validate_payload(model=DailyReport, payload=fields, policy=DAILY_REPORT_POLICY, partial=False)
    _check_photos(patch)
    patch.setdefault("photos", [])
    return record_service.add_record(DailyReport, {"site_id": site_id, **patch})


def update_report(report_id: int, **fields) -> DailyReport:
    patch = validate_payload(model=DailyReport, payload=fields, policy=DAILY_REPORT_POLICY, partial=True)
    _check_photos(patch)
    return record_service.update_record(DailyReport, report_id, patch)


def get_report(report_id: int) -> DailyReport | None:
    return record_service.get_record(DailyReport, report_id)


def delete_report(report_id: int) -> None:
    record_service.delete_record(DailyReport, report_id)


def list_reports(site_id: int, *, sort_field: str = "date", descending: bool = True) -> list[DailyReport]:
    return record_service.query_by_site(DailyReport, site_id, sort_field=sort_field, descending=descending)


def reports_between(site_id: int, start, end) -> list[DailyReport]:
    return record_service.query_by_range(
        DailyReport, "date", parse_iso_date(start), parse_iso_date(end), site_id=site_id
    )
