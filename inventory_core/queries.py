"""Derived views over an ``InventoryState``.

Pure functions: each call recomputes from the state it is given. Nothing is
cached, so a view can never lag behind the state it was computed from.
"""
from __future__ import annotations

from typing import Dict, List

from inventory_core.constants import ATTENTION_CONDITIONS
from inventory_core.models import InventoryItem, InventoryState

STATUS_LOW = "low"
STATUS_ATTENTION = "attention"
STATUS_OK = "ok"


def is_low_stock(item: InventoryItem) -> bool:
    """A reorder point of 0 means the item is not tracked for low stock."""
    return item.reorder_point > 0 and item.quantity <= item.reorder_point


def low_stock_items(state: InventoryState) -> List[InventoryItem]:
    return [item for item in state.items if is_low_stock(item)]


def matches_search(item: InventoryItem, term: str) -> bool:
    """Case-insensitive substring match on name, SKU or description."""
    if not term:
        return True
    needle = term.casefold()
    return (
        needle in item.name.casefold()
        or needle in item.sku.casefold()
        or needle in (item.description or "").casefold()
    )


def filtered_items(state: InventoryState) -> List[InventoryItem]:
    """Items passing both the search term and the department filter, in catalog order."""
    term = state.search_term
    department = state.department_filter
    return [
        item
        for item in state.items
        if matches_search(item, term)
        and (not department or item.department_id == department)
    ]


def item_status(item: InventoryItem) -> str:
    if is_low_stock(item):
        return STATUS_LOW
    if item.condition in ATTENTION_CONDITIONS:
        return STATUS_ATTENTION
    return STATUS_OK


def inventory_summary(state: InventoryState) -> Dict[str, int]:
    """Headline counts for the dashboard."""
    return {
        "total_items": len(state.items),
        "departments": len(state.departments),
        "low_stock": len(low_stock_items(state)),
        "transactions": len(state.transactions),
    }
