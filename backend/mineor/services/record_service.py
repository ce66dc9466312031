# Overview: Generic record access shared by every per-entity service.

"""
Record access primitives.

Every site-owned collection is reached through these helpers so that
timestamps, not-found handling and storage failures behave the same way
across entities:

- add stamps created_at and updated_at
- update on an unknown id raises NotFoundError (never a silent no-op)
- updated_at strictly increases on every update
- a failed commit is rolled back, logged, and re-raised as StorageError
  (no retry)
"""

from __future__ import annotations

from datetime import date
from typing import Any

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..errors import NotFoundError, StorageError, ValidationError
from mineor.time_utils import bump_timestamp, utcnow


def commit(action: str) -> None:
    """Commit the current session or surface a StorageError."""
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception("Failed to %s", action)
        raise StorageError(f"Failed to {action}") from exc


def _entity_name(model) -> str:
    return model.__name__


def _column(model, field: str):
    columns = model.__mapper__.columns
    if field not in columns:
        raise ValidationError(f"{_entity_name(model)} has no field {field!r}")
    return getattr(model, field)


def add_record(model, fields: dict) -> Any:
    now = utcnow()
    record = model(**fields)
    if hasattr(model, "created_at"):
        record.created_at = now
    if hasattr(model, "updated_at"):
        record.updated_at = now
    db.session.add(record)
    commit(f"add {_entity_name(model)}")
    return record


def get_record(model, record_id: int) -> Any | None:
    return db.session.get(model, record_id)


def require_record(model, record_id: int) -> Any:
    record = get_record(model, record_id)
    if record is None:
        raise NotFoundError(_entity_name(model), record_id)
    return record


def update_record(model, record_id: int, patch: dict) -> Any:
    record = require_record(model, record_id)
    for key, value in patch.items():
        setattr(record, key, value)
    if hasattr(model, "updated_at"):
        record.updated_at = bump_timestamp(record.updated_at)
    commit(f"update {_entity_name(model)} {record_id}")
    return record


def delete_record(model, record_id: int) -> None:
    record = require_record(model, record_id)
    db.session.delete(record)
    commit(f"delete {_entity_name(model)} {record_id}")


def query_by_site(
    model,
    site_id: int,
    *,
    sort_field: str | None = None,
    descending: bool = False,
) -> list[Any]:
    """Site-scoped rows ordered by one field (id breaks ties)."""
    query = db.session.query(model).filter(model.site_id == site_id)
    if sort_field:
        col = _column(model, sort_field)
        query = query.order_by(col.desc() if descending else col.asc())
    query = query.order_by(model.id.desc() if descending else model.id.asc())
    return query.all()


def query_by_range(
    model,
    field: str,
    lower: date | None,
    upper: date | None,
    *,
    site_id: int | None = None,
    descending: bool = False,
) -> list[Any]:
    """Rows whose `field` lies within [lower, upper]; either bound may be open."""
    col = _column(model, field)
    if lower is not None and upper is not None and lower > upper:
        raise ValidationError("Range start must not be after range end")

    query = db.session.query(model)
    if site_id is not None:
        query = query.filter(model.site_id == site_id)
    if lower is not None:
        query = query.filter(col >= lower)
    if upper is not None:
        query = query.filter(col <= upper)
    order = (col.desc(), model.id.desc()) if descending else (col.asc(), model.id.asc())
    return query.order_by(*order).all()


def filter_records(model, site_id: int, **equalities) -> list[Any]:
    """Equality filter on indexed fields, e.g. filter_records(Worker, 1, status="active")."""
    query = db.session.query(model).filter(model.site_id == site_id)
    for field, value in equalities.items():
        query = query.filter(_column(model, field) == value)
    return query.order_by(model.id.asc()).all()


def delete_by_site(model, site_id: int) -> int:
    """Bulk-delete a site's rows without committing; the caller owns the commit."""
    return db.session.query(model).filter(model.site_id == site_id).delete(synchronize_session=False)
