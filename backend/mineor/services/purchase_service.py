# Overview: Service-layer operations for purchases and their receipts.

"""
Purchases Service

RECEIPT RULE: a purchase is never stored without a receipt photo. The check
runs here, before the store is touched, and raises ValidationError so the
caller can block submission. On update, an omitted receipt keeps the stored
one; an explicitly blank receipt is rejected.

purchase_date defaults to today; purchase_time defaults to the site wall
clock (HH:MM, 24-hour) at entry.
"""

from __future__ import annotations

from ..errors import ValidationError
from ..models import Purchase, Site, PURCHASE_CATEGORIES
from ..validation import ModelValidationPolicy, validate_payload
from . import record_service
from mineor.time_utils import format_clock, is_clock, local_now, parse_iso_date, today

PURCHASE_POLICY = ModelValidationPolicy(
    writable_fields={
        "item", "amount", "currency", "supplier", "category",
        "receipt_photo", "purchase_date", "purchase_time", "notes",
    },
    required_on_create={"item", "amount"},
    choices={"category": PURCHASE_CATEGORIES},
    non_negative={"amount"},
)


class ReceiptRequiredError(ValidationError):
    """Raised when a purchase is submitted without a receipt photo."""

    def __init__(self):
        super().__init__("A receipt photo is required for every purchase")


def _require_receipt(value) -> None:
    if value is None or not str(value).strip():
        raise ReceiptRequiredError()


def _check_time(patch: dict) -> None:
    if "purchase_time" in patch and not is_clock(patch["purchase_time"]):
        raise ValidationError("purchase_time must be HH:MM (24-hour)")


def create_purchase(site_id: int, **fields) -> Purchase:
    _require_receipt(fields.get("receipt_photo"))
    record_service.require_record(Site, site_id)
    patch = validate_payload(model=Purchase, payload=fields, policy=PURCHASE_POLICY, partial=False)

    _check_time(patch)
    patch.setdefault("purchase_date", today())
    patch.setdefault("purchase_time", format_clock(local_now()))
    return record_service.add_record(Purchase, {"site_id": site_id, **patch})


def update_purchase(purchase_id: int, **fields) -> Purchase:
    if "receipt_photo" in fields:
        _require_receipt(fields["receipt_photo"])
    patch = validate_payload(model=Purchase, payload=fields, policy=PURCHASE_POLICY, partial=True)
    _check_time(patch)
    return record_service.update_record(Purchase, purchase_id, patch)


def get_purchase(purchase_id: int) -> Purchase | None:
    return record_service.get_record(Purchase, purchase_id)


def delete_purchase(purchase_id: int) -> None:
    record_service.delete_record(Purchase, purchase_id)


def list_purchases(site_id: int, *, sort_field: str = "created_at", descending: bool = True) -> list[Purchase]:
    return record_service.query_by_site(Purchase, site_id, sort_field=sort_field, descending=descending)


def purchases_between(site_id: int, start, end) -> list[Purchase]:
    return record_service.query_by_range(
        Purchase, "purchase_date", parse_iso_date(start), parse_iso_date(end), site_id=site_id
    )


def purchases_in_category(site_id: int, category: str) -> list[Purchase]:
    return record_service.filter_records(Purchase, site_id, category=category)


def search_purchases(site_id: int, *, text: str = "") -> list[Purchase]:
    """Case-insensitive match on item or supplier, newest first."""
    needle = (text or "").lower()
    return [
        p for p in list_purchases(site_id)
        if needle in p.item.lower() or needle in (p.supplier or "").lower()
    ]


def totals_by_currency(purchases) -> dict[str, float]:
    totals: dict[str, float] = {}
    for purchase in purchases:
        totals[purchase.currency] = totals.get(purchase.currency, 0) + purchase.amount
    return totals
