"""CSV export of the catalog and the transaction ledger."""
from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Optional, Union

import pandas as pd

from inventory_core import config
from inventory_core.constants import INVENTORY_CSV_COLUMNS, TRANSACTION_CSV_COLUMNS
from inventory_core.models import InventoryItem, InventoryState, Transaction

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def inventory_frame(items: Iterable[InventoryItem]) -> pd.DataFrame:
    """One row per item, catalog order, export headers."""
    rows = [
        [
            item.sku,
            item.name,
            item.department,
            item.unit,
            item.quantity,
            item.reorder_point,
            item.condition,
            item.description or "",
            item.bill_name or "",
            item.bill_number or "",
        ]
        for item in items
    ]
    return pd.DataFrame(rows, columns=INVENTORY_CSV_COLUMNS)


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """One row per transaction, ledger order (newest first)."""
    rows = [
        [
            txn.id,
            txn.sku,
            txn.item_name,
            txn.quantity,
            txn.type,
            txn.user,
            txn.date,
            txn.notes or "",
        ]
        for txn in transactions
    ]
    return pd.DataFrame(rows, columns=TRANSACTION_CSV_COLUMNS)


def _to_csv(df: pd.DataFrame) -> str:
    return df.to_csv(index=False, lineterminator="\n")


def inventory_csv(state: InventoryState) -> str:
    return _to_csv(inventory_frame(state.items))


def transactions_csv(state: InventoryState) -> str:
    return _to_csv(transactions_frame(state.transactions))


def export_filename(prefix: str, on: Optional[date] = None) -> str:
    """``<prefix>-YYYY-MM-DD.csv`` for the given day (today by default)."""
    on = on or datetime.now(config.TIMEZONE).date()
    return f"{prefix}-{on.isoformat()}.csv"


def _write(directory: PathLike, filename: str, content: str) -> Path:
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / filename
    target.write_text(content, encoding="utf-8")
    logger.info("Exported %s", target)
    return target


def export_inventory(state: InventoryState, directory: PathLike = ".", on: Optional[date] = None) -> Path:
    return _write(directory, export_filename("inventory", on), inventory_csv(state))


def export_transactions(state: InventoryState, directory: PathLike = ".", on: Optional[date] = None) -> Path:
    return _write(directory, export_filename("transactions", on), transactions_csv(state))
