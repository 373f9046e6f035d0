"""Inventory records and the aggregate state, with their JSON-ready forms."""
from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

from inventory_core.constants import (
    CONDITIONS,
    SEED_DEPARTMENTS,
    SEED_ITEMS,
    TRANSACTION_TYPES,
)
from inventory_core.exceptions import PersistenceError


def new_id() -> str:
    """Return a fresh opaque identifier for a department or transaction."""
    return uuid.uuid4().hex


def parse_count(value: Any) -> Optional[int]:
    """Return ``value`` as an int when it denotes a whole number, else None.

    Ints, integral floats (3.0) and digit strings are whole numbers; bools,
    fractions (3.7) and anything unparseable are not.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def coerce_count(value: Any) -> int:
    """Parse a stock count; anything that is not a non-negative whole number becomes 0."""
    count = parse_count(value)
    return count if count is not None and count >= 0 else 0


def _field(data: Dict[str, Any], key: str, kind: type | Tuple[type, ...], *, record: str) -> Any:
    if key not in data:
        raise PersistenceError(f"{record} is missing '{key}'")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, kind):
        raise PersistenceError(f"{record} field '{key}' has type {type(value).__name__}")
    return value


def _optional(data: Dict[str, Any], key: str, *, record: str) -> str:
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise PersistenceError(f"{record} field '{key}' has type {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Department:
    id: str
    name: str
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Department":
        if not isinstance(data, dict):
            raise PersistenceError("department record is not an object")
        name = _field(data, "name", str, record="department")
        if not name.strip():
            raise PersistenceError("department name is empty")
        return cls(
            id=_field(data, "id", str, record="department"),
            name=name,
            notes=_optional(data, "notes", record="department"),
        )


@dataclass(frozen=True)
class InventoryItem:
    sku: str
    name: str
    department_id: str
    department: str
    unit: str
    quantity: int = 0
    reorder_point: int = 0
    condition: str = "New"
    description: str = ""
    bill_name: str = ""
    bill_number: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InventoryItem":
        if not isinstance(data, dict):
            raise PersistenceError("item record is not an object")
        quantity = _field(data, "quantity", int, record="item")
        reorder_point = _field(data, "reorder_point", int, record="item")
        if quantity < 0 or reorder_point < 0:
            raise PersistenceError("item counts must not be negative")
        condition = _field(data, "condition", str, record="item")
        if condition not in CONDITIONS:
            raise PersistenceError(f"item condition {condition!r} is not recognised")
        return cls(
            sku=_field(data, "sku", str, record="item"),
            name=_field(data, "name", str, record="item"),
            department_id=_field(data, "department_id", str, record="item"),
            department=_field(data, "department", str, record="item"),
            unit=_field(data, "unit", str, record="item"),
            quantity=quantity,
            reorder_point=reorder_point,
            condition=condition,
            description=_optional(data, "description", record="item"),
            bill_name=_optional(data, "bill_name", record="item"),
            bill_number=_optional(data, "bill_number", record="item"),
        )


@dataclass(frozen=True)
class Transaction:
    id: str
    sku: str
    item_name: str
    quantity: int
    type: str
    user: str
    date: str
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        if not isinstance(data, dict):
            raise PersistenceError("transaction record is not an object")
        quantity = _field(data, "quantity", int, record="transaction")
        if quantity <= 0:
            raise PersistenceError("transaction quantity must be positive")
        txn_type = _field(data, "type", str, record="transaction")
        if txn_type not in TRANSACTION_TYPES:
            raise PersistenceError(f"transaction type {txn_type!r} is not recognised")
        return cls(
            id=_field(data, "id", str, record="transaction"),
            sku=_field(data, "sku", str, record="transaction"),
            item_name=_field(data, "item_name", str, record="transaction"),
            quantity=quantity,
            type=txn_type,
            user=_field(data, "user", str, record="transaction"),
            date=_field(data, "date", str, record="transaction"),
            notes=_optional(data, "notes", record="transaction"),
        )


@dataclass(frozen=True)
class InventoryState:
    """One consistent view of the whole inventory; the unit of persistence.

    Transactions are ordered newest first. Sequences are tuples so a snapshot
    handed to a reader cannot be changed behind its back.
    """

    items: Tuple[InventoryItem, ...] = ()
    departments: Tuple[Department, ...] = ()
    transactions: Tuple[Transaction, ...] = ()
    search_term: str = ""
    department_filter: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "departments": [dept.to_dict() for dept in self.departments],
            "transactions": [txn.to_dict() for txn in self.transactions],
            "search_term": self.search_term,
            "department_filter": self.department_filter,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InventoryState":
        if not isinstance(data, dict):
            raise PersistenceError("state is not an object")
        items: List[Any] = _field(data, "items", list, record="state")
        departments: List[Any] = _field(data, "departments", list, record="state")
        transactions: List[Any] = _field(data, "transactions", list, record="state")
        return cls(
            items=tuple(InventoryItem.from_dict(i) for i in items),
            departments=tuple(Department.from_dict(d) for d in departments),
            transactions=tuple(Transaction.from_dict(t) for t in transactions),
            search_term=_optional(data, "search_term", record="state"),
            department_filter=_optional(data, "department_filter", record="state"),
        )


def seed_state() -> InventoryState:
    """Example departments and items used on first run or after a bad load."""
    return InventoryState(
        items=tuple(InventoryItem(**row) for row in SEED_ITEMS),
        departments=tuple(Department(**row) for row in SEED_DEPARTMENTS),
    )


# Fields a caller may change through InventoryStore.update_item
ITEM_FIELDS = frozenset(InventoryItem.__dataclass_fields__)
