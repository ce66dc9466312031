# Overview: Service-layer operations for the worker roster.

from __future__ import annotations

from ..models import Site, Worker, WORKER_STATUSES
from ..validation import ModelValidationPolicy, validate_payload
from . import record_service

WORKER_POLICY = ModelValidationPolicy(
    writable_fields={"first_name", "last_name", "role", "phone", "team", "status", "hire_date"},
    required_on_create={"first_name", "last_name"},
    choices={"status": WORKER_STATUSES},
)


def create_worker(site_id: int, **fields) -> Worker:
    record_service.require_record(Site, site_id)
    patch = validate_payload(model=Worker, payload=fields, policy=WORKER_POLICY, partial=False)
    return record_service.add_record(Worker, {"site_id": site_id, **patch})


def update_worker(worker_id: int, **fields) -> Worker:
    patch = validate_payload(model=Worker, payload=fields, policy=WORKER_POLICY, partial=True)
    return record_service.update_record(Worker, worker_id, patch)


def get_worker(worker_id: int) -> Worker | None:
    return record_service.get_record(Worker, worker_id)


def delete_worker(worker_id: int) -> None:
    record_service.delete_record(Worker, worker_id)


def list_workers(site_id: int, *, sort_field: str = "last_name", descending: bool = False) -> list[Worker]:
    return record_service.query_by_site(Worker, site_id, sort_field=sort_field, descending=descending)


def workers_with_status(site_id: int, status: str) -> list[Worker]:
    return record_service.filter_records(Worker, site_id, status=status)


def roster_counts(site_id: int) -> dict:
    workers = record_service.query_by_site(Worker, site_id)
    counts = {status: 0 for status in sorted(WORKER_STATUSES)}
    for worker in workers:
        counts[worker.status] = counts.get(worker.status, 0) + 1
    counts["total"] = len(workers)
    return counts


def search_workers(site_id: int, *, text: str = "", status: str | None = None) -> list[Worker]:
    """Case-insensitive match on full name or role, optionally narrowed to one status."""
    needle = (text or "").lower()
    return [
        w for w in list_workers(site_id)
        if (needle in w.full_name.lower() or needle in (w.role or "").lower())
        and (not status or w.status == status)
    ]
