# Overview: Service-layer operations for production entries.

from __future__ import annotations

from datetime import date

from ..models import Production, Site, SHIFTS
from ..validation import ModelValidationPolicy, validate_payload
from . import record_service
from mineor.time_utils import parse_iso_date

PRODUCTION_POLICY = ModelValidationPolicy(
    writable_fields={"date", "quantity_grams", "team", "shift", "notes"},
    required_on_create={"date", "quantity_grams", "team", "shift"},
    choices={"shift": SHIFTS},
    non_negative={"quantity_grams"},
)


def create_production(site_id: int, **fields) -> Production:
    record_service.require_record(Site, site_id)
    patch = validate_payload(model=Production, payload=fields, policy=PRODUCTION_POLICY, partial=False)
    patch.setdefault("notes", "")
    return record_service.add_record(Production, {"site_id": site_id, **patch})


def update_production(production_id: int, **fields) -> Production:
    patch = validate_payload(model=Production, payload=fields, policy=PRODUCTION_POLICY, partial=True)
    return record_service.update_record(Production, production_id, patch)


def get_production(production_id: int) -> Production | None:
    return record_service.get_record(Production, production_id)


def delete_production(production_id: int) -> None:
    record_service.delete_record(Production, production_id)


def list_productions(site_id: int, *, sort_field: str = "date", descending: bool = True) -> list[Production]:
    """Newest day first by default, as the production log is read."""
    return record_service.query_by_site(Production, site_id, sort_field=sort_field, descending=descending)


def productions_between(site_id: int, start, end) -> list[Production]:
    return record_service.query_by_range(
        Production, "date", parse_iso_date(start), parse_iso_date(end), site_id=site_id
    )


def productions_on(site_id: int, day: date) -> list[Production]:
    return record_service.filter_records(Production, site_id, date=parse_iso_date(day))


def search_productions(site_id: int, *, text: str = "", team: str | None = None) -> list[Production]:
    """Case-insensitive match on notes or team, optionally narrowed to one team."""
    needle = (text or "").lower()
    rows = list_productions(site_id)
    return [
        p for p in rows
        if (needle in (p.notes or "").lower() or needle in p.team.lower())
        and (not team or p.team == team)
    ]


def list_teams(site_id: int) -> list[str]:
    return sorted({p.team for p in record_service.query_by_site(Production, site_id)})
