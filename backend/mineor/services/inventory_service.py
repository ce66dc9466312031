# Overview: Service-layer operations for site inventory.

from __future__ import annotations

from ..models import InventoryItem, Site, INVENTORY_CATEGORIES, ITEM_CONDITIONS
from ..validation import ModelValidationPolicy, validate_payload
from . import record_service

INVENTORY_POLICY = ModelValidationPolicy(
    writable_fields={"name", "category", "quantity", "unit", "min_quantity", "condition", "location", "notes"},
    required_on_create={"name", "category"},
    choices={"category": INVENTORY_CATEGORIES, "condition": ITEM_CONDITIONS},
    non_negative={"quantity", "min_quantity"},
)


def create_item(site_id: int, **fields) -> InventoryItem:
    record_service.require_record(Site, site_id)
    patch = validate_payload(model=InventoryItem, payload=fields, policy=INVENTORY_POLICY, partial=False)
    return record_service.add_record(InventoryItem, {"site_id": site_id, **patch})


def update_item(item_id: int, **fields) -> InventoryItem:
    patch = validate_payload(model=InventoryItem, payload=fields, policy=INVENTORY_POLICY, partial=True)
    return record_service.update_record(InventoryItem, item_id, patch)


def get_item(item_id: int) -> InventoryItem | None:
    return record_service.get_record(InventoryItem, item_id)


def delete_item(item_id: int) -> None:
    record_service.delete_record(InventoryItem, item_id)


def list_items(site_id: int, *, sort_field: str = "name", descending: bool = False) -> list[InventoryItem]:
    return record_service.query_by_site(InventoryItem, site_id, sort_field=sort_field, descending=descending)


def items_in_category(site_id: int, category: str) -> list[InventoryItem]:
    return record_service.filter_records(InventoryItem, site_id, category=category)


def low_stock_items(site_id: int) -> list[InventoryItem]:
    return [item for item in list_items(site_id) if item.is_low_stock]


def search_items(site_id: int, *, text: str = "", category: str | None = None) -> list[InventoryItem]:
    """Case-insensitive match on the item name, optionally narrowed to one category."""
    needle = (text or "").lower()
    return [
        item for item in list_items(site_id)
        if needle in item.name.lower() and (not category or item.category == category)
    ]
