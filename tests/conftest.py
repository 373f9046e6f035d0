"""Shared fixtures for the inventory core tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from inventory_core.models import seed_state
from inventory_core.persistence import SQLiteStateRepository
from inventory_core.store import InventoryStore

FIXED_NOW = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def store(clock):
    """Store preloaded with the three seed departments and items."""
    return InventoryStore(seed_state(), clock=clock, default_user="tester")


@pytest.fixture
def empty_store(clock):
    return InventoryStore(clock=clock, default_user="tester")


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "data" / "inventory.db")


@pytest.fixture
def repository(db_path):
    repo = SQLiteStateRepository(db_path)
    yield repo
    repo.close()
