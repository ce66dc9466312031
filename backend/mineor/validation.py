# Overview: Column-driven validation of caller-supplied field dicts before they reach the store.

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, Integer, String

from mineor.errors import ValidationError
from mineor.time_utils import parse_iso_date, parse_iso_datetime


__all__ = [
    "ValidationError",
    "ModelValidationPolicy",
    "validate_payload",
    "require_choice",
    "require_non_negative",
]


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    What a service accepts for one model.

    - writable_fields: keys a caller may set at all
    - required_on_create: keys that must be present and non-blank on add
    - choices: enumerated string fields and their allowed values
    - non_negative: numeric fields that may not drop below zero
    """
    writable_fields: set[str]
    required_on_create: set[str] = field(default_factory=set)
    choices: dict[str, set[str]] = field(default_factory=dict)
    non_negative: set[str] = field(default_factory=set)


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value in (0, 1) and isinstance(value, int):
        return bool(value)
    raise ValidationError(f"{key} must be a boolean")


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer")
    if isinstance(value, int):
        return value
    text = str(value).strip() if isinstance(value, str) else ""
    # "3.0" and "1e3" are rejected rather than truncated
    if not text.lstrip("-").isdecimal():
        raise ValidationError(f"{key} must be an integer")
    return int(text)


def _as_float(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValidationError(f"{key} must be a number")
    try:
        number = float(value)
    except ValueError:
        raise ValidationError(f"{key} must be a number") from None
    if not math.isfinite(number):
        raise ValidationError(f"{key} must be a finite number")
    return number


def _as_datetime(key: str, value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        parsed = parse_iso_datetime(value) if isinstance(value, str) else None
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError(f"{key} must be an ISO-8601 datetime")
    return parsed


def _as_date(key: str, value: Any) -> date:
    try:
        parsed = parse_iso_date(value) if isinstance(value, (date, str)) else None
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError(f"{key} must be a YYYY-MM-DD date")
    return parsed


def _as_list(key: str, value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{key} must be a list")
    return [str(item) for item in value]


def _as_text(key: str, value: Any) -> str:
    return str(value).strip()


# First matching column type wins; Text is a String subclass
_COERCERS: list[tuple[type, Callable[[str, Any], Any]]] = [
    (Boolean, _as_bool),
    (Integer, _as_int),
    (Float, _as_float),
    (DateTime, _as_datetime),
    (Date, _as_date),
    (JSON, _as_list),
    (String, _as_text),
]


def _coerce(column, value: Any) -> Any:
    for coltype, coercer in _COERCERS:
        if isinstance(column.type, coltype):
            return coercer(column.key, value)
    return value


def require_choice(key: str, value: Any, allowed: set[str]) -> None:
    if value not in allowed:
        raise ValidationError(f"{key} must be one of: {', '.join(sorted(allowed))}")


def require_non_negative(key: str, value: Any) -> None:
    if value is not None and value < 0:
        raise ValidationError(f"{key} must be >= 0")


def _check_required(payload: dict, policy: ModelValidationPolicy) -> None:
    missing = sorted(key for key in policy.required_on_create if payload.get(key) in (None, ""))
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def _check_keys(payload: dict, policy: ModelValidationPolicy, columns: dict) -> None:
    for key in payload:
        if key not in policy.writable_fields:
            raise ValidationError(f"Field not allowed: {key}")
        if key not in columns:
            raise ValidationError(f"Unknown field: {key}")


def _clean_value(key: str, raw: Any, column, policy: ModelValidationPolicy) -> Any:
    if raw is None:
        if not column.nullable:
            raise ValidationError(f"{key} cannot be null")
        return None

    value = _coerce(column, raw)

    if isinstance(value, str):
        if value == "" and key in policy.required_on_create:
            raise ValidationError(f"{key} cannot be blank")
        max_len = getattr(column.type, "length", None)
        if max_len and len(value) > max_len:
            raise ValidationError(f"{key} exceeds max length {max_len}")

    if key in policy.choices:
        require_choice(key, value, policy.choices[key])
    if key in policy.non_negative:
        require_non_negative(key, value)
    return value


def validate_payload(
    *,
    model,
    payload: dict,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Return a cleaned copy of `payload` holding only writable, coerced fields.

    partial=False is add semantics: required_on_create is enforced.
    partial=True is patch semantics: only the keys provided are checked.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid payload")

    if not partial:
        _check_required(payload, policy)

    columns = {column.key: column for column in model.__mapper__.columns}
    _check_keys(payload, policy, columns)

    return {key: _clean_value(key, raw, columns[key], policy) for key, raw in payload.items()}
