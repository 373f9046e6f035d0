"""State container for departments, items and the transaction ledger.

Every mutator validates first, builds the next ``InventoryState`` and
publishes it with a single assignment, so readers only ever see the state
before or after a complete operation. Listeners registered with
``subscribe`` run after each successful mutation; a failing listener is
logged and never undoes the change.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, List, Optional

from inventory_core import config
from inventory_core.constants import (
    CHECK_IN,
    CHECK_OUT,
    CONDITIONS,
    DEFAULT_CONDITION,
    TRANSACTION_TYPES,
    UNKNOWN_DEPARTMENT,
)
from inventory_core.exceptions import ValidationError
from inventory_core.models import (
    ITEM_FIELDS,
    Department,
    InventoryItem,
    InventoryState,
    Transaction,
    coerce_count,
    new_id,
    parse_count,
)

logger = logging.getLogger(__name__)

Listener = Callable[[InventoryState], None]
Clock = Callable[[], datetime]

# Item fields that may not be blank, with their user-facing labels
REQUIRED_ITEM_FIELDS = {
    "sku": "SKU",
    "name": "Name",
    "department_id": "Department",
    "unit": "Unit",
}


def _default_clock() -> datetime:
    return datetime.now(config.TIMEZONE)


def _require(value: Any, label: str) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError(f"{label} is required")
    return text


def _positive_quantity(value: Any) -> int:
    quantity = parse_count(value)
    if quantity is None:
        raise ValidationError("Quantity must be a whole number")
    if quantity <= 0:
        raise ValidationError("Quantity must be greater than 0")
    return quantity


def _clamped_count(value: Any, label: str) -> int:
    count = parse_count(value)
    if count is None:
        raise ValidationError(f"{label} must be a whole number")
    return max(0, count)


class InventoryStore:
    """Single source of truth for the inventory of one installation."""

    def __init__(
        self,
        state: Optional[InventoryState] = None,
        *,
        clock: Optional[Clock] = None,
        default_user: Optional[str] = None,
    ):
        self._state = state if state is not None else InventoryState()
        self._clock = clock or _default_clock
        self._default_user = default_user or config.DEFAULT_USER
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    # -------------------------
    # Internal
    # -------------------------
    def _commit(self, state: InventoryState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener %r failed", listener)

    # -------------------------
    # Read helpers
    # -------------------------
    @property
    def state(self) -> InventoryState:
        return self._state

    def snapshot(self) -> InventoryState:
        """Return the current state. States are immutable, so no copy is made."""
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(state)`` after every mutation; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def get_item(self, sku: str) -> Optional[InventoryItem]:
        # Duplicate SKUs are tolerated; the first record wins lookups.
        return next((it for it in self._state.items if it.sku == sku), None)

    def get_department(self, department_id: str) -> Optional[Department]:
        return next((d for d in self._state.departments if d.id == department_id), None)

    # -------------------------
    # Departments
    # -------------------------
    def add_department(self, name: str, notes: str = "") -> Department:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Department name is required")
        with self._lock:
            dept = Department(id=new_id(), name=name, notes=notes or "")
            state = self._state
            self._commit(replace(state, departments=state.departments + (dept,)))
        logger.debug("Added department %s (%s)", dept.name, dept.id)
        return dept

    def update_department(
        self, department_id: str, name: Optional[str] = None, notes: Optional[str] = None
    ) -> None:
        """Rename or re-annotate a department. Item department names are left as they were."""
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Department name is required")
        with self._lock:
            state = self._state
            departments = tuple(
                replace(
                    d,
                    name=d.name if name is None else name,
                    notes=d.notes if notes is None else notes,
                )
                if d.id == department_id
                else d
                for d in state.departments
            )
            self._commit(replace(state, departments=departments))

    def delete_department(self, department_id: str) -> None:
        """Remove a department together with every item filed under it."""
        with self._lock:
            state = self._state
            items = tuple(it for it in state.items if it.department_id != department_id)
            departments = tuple(d for d in state.departments if d.id != department_id)
            removed = len(state.items) - len(items)
            self._commit(replace(state, departments=departments, items=items))
        if removed:
            logger.info("Deleted department %s and %d item(s)", department_id, removed)

    # -------------------------
    # Items
    # -------------------------
    def add_item(
        self,
        sku: str,
        name: str,
        department_id: str,
        unit: str,
        quantity: Any = 0,
        reorder_point: Any = 0,
        condition: str = DEFAULT_CONDITION,
        description: str = "",
        bill_name: str = "",
        bill_number: str = "",
    ) -> InventoryItem:
        sku = _require(sku, "SKU")
        name = _require(name, "Name")
        department_id = _require(department_id, "Department")
        unit = _require(unit, "Unit")
        condition = condition or DEFAULT_CONDITION
        if condition not in CONDITIONS:
            raise ValidationError(f"Unknown condition: {condition}")

        with self._lock:
            state = self._state
            dept = self.get_department(department_id)
            if dept is None:
                logger.warning("Item %s references unknown department %s", sku, department_id)
            item = InventoryItem(
                sku=sku,
                name=name,
                department_id=department_id,
                department=dept.name if dept else UNKNOWN_DEPARTMENT,
                unit=unit,
                quantity=coerce_count(quantity),
                reorder_point=coerce_count(reorder_point),
                condition=condition,
                description=description or "",
                bill_name=bill_name or "",
                bill_number=bill_number or "",
            )
            self._commit(replace(state, items=state.items + (item,)))
        logger.debug("Added item %s", sku)
        return item

    def update_item(self, sku: str, **fields: Any) -> None:
        """Merge ``fields`` into the item(s) with this SKU.

        The denormalized ``department`` name is not refreshed when
        ``department_id`` changes.
        """
        unknown = set(fields) - ITEM_FIELDS
        if unknown:
            raise ValidationError(f"Unknown item field(s): {', '.join(sorted(unknown))}")
        if "condition" in fields and fields["condition"] not in CONDITIONS:
            raise ValidationError(f"Unknown condition: {fields['condition']}")
        for key in ("quantity", "reorder_point"):
            if key in fields:
                fields[key] = _clamped_count(fields[key], key)
        for key, label in REQUIRED_ITEM_FIELDS.items():
            if key in fields:
                fields[key] = _require(fields[key], label)

        with self._lock:
            state = self._state
            items = tuple(
                replace(it, **fields) if it.sku == sku else it for it in state.items
            )
            self._commit(replace(state, items=items))

    def delete_item(self, sku: str) -> None:
        with self._lock:
            state = self._state
            items = tuple(it for it in state.items if it.sku != sku)
            self._commit(replace(state, items=items))

    # -------------------------
    # Transactions
    # -------------------------
    def commit_transaction(
        self,
        sku: str,
        quantity: Any,
        type: str,
        user: Optional[str] = None,
        notes: str = "",
    ) -> Transaction:
        """Record a check-in or check-out and adjust the item's stock.

        A check-out larger than the stock on hand is rejected. An unknown SKU
        is still recorded, with a blank item name and no stock change.
        """
        sku = _require(sku, "SKU")
        qty = _positive_quantity(quantity)
        if type not in TRANSACTION_TYPES:
            raise ValidationError(f"Unknown transaction type: {type}")

        with self._lock:
            state = self._state
            item = self.get_item(sku)
            if type == CHECK_OUT and item is not None and qty > item.quantity:
                raise ValidationError(
                    f"Cannot check out {qty} {item.unit} of {item.name}: only {item.quantity} available"
                )
            if item is None:
                logger.warning("Transaction recorded for unknown SKU %s", sku)

            delta = qty if type == CHECK_IN else -qty
            txn = Transaction(
                id=new_id(),
                sku=sku,
                item_name=item.name if item else "",
                quantity=qty,
                type=type,
                user=user or self._default_user,
                date=self._clock().isoformat(timespec="seconds"),
                notes=notes or "",
            )
            items = tuple(
                replace(it, quantity=max(0, it.quantity + delta)) if it.sku == sku else it
                for it in state.items
            )
            self._commit(
                replace(state, items=items, transactions=(txn,) + state.transactions)
            )
        logger.debug("Committed %s of %d for %s", type, qty, sku)
        return txn

    # -------------------------
    # Search / filter
    # -------------------------
    def set_search_term(self, term: str) -> None:
        with self._lock:
            self._commit(replace(self._state, search_term=term or ""))

    def set_department_filter(self, department_id: str) -> None:
        with self._lock:
            self._commit(replace(self._state, department_filter=department_id or ""))

    def refresh(self) -> None:
        """Re-publish the current state (listeners run, nothing changes)."""
        with self._lock:
            self._commit(self._state)
