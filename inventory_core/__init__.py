"""In-memory inventory state: departments, items, transactions and views."""
from inventory_core.exceptions import InventoryError, PersistenceError, ValidationError
from inventory_core.models import Department, InventoryItem, InventoryState, Transaction
from inventory_core.store import InventoryStore

__all__ = [
    "Department",
    "InventoryError",
    "InventoryItem",
    "InventoryState",
    "InventoryStore",
    "PersistenceError",
    "Transaction",
    "ValidationError",
]
