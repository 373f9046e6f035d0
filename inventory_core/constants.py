"""Project-wide constants: enumerations, storage keys, CSV layout, seed data."""
from typing import List

CONDITIONS: List[str] = [
    "New",
    "Good",
    "Fair",
    "Needs Repair",
    "Expired",
]
# Conditions that flag an item row for attention even when stock is fine
ATTENTION_CONDITIONS: List[str] = ["Needs Repair", "Expired"]
DEFAULT_CONDITION = "New"

CHECK_IN = "check-in"
CHECK_OUT = "check-out"
TRANSACTION_TYPES: List[str] = [CHECK_IN, CHECK_OUT]

UNKNOWN_DEPARTMENT = "Unknown"

# Persistence slot
STORE_KEY = "inventory-store"
SCHEMA_VERSION = 1

INVENTORY_CSV_COLUMNS: List[str] = [
    "SKU",
    "Name",
    "Department",
    "Unit",
    "Quantity",
    "Reorder Point",
    "Condition",
    "Description",
    "Bill Name",
    "Bill Number",
]
TRANSACTION_CSV_COLUMNS: List[str] = [
    "ID",
    "SKU",
    "Item Name",
    "Quantity",
    "Type",
    "User",
    "Date",
    "Notes",
]

SEED_DEPARTMENTS: List[dict] = [
    {"id": "1", "name": "Electronics", "notes": "Electronic components and devices"},
    {"id": "2", "name": "Office Supplies", "notes": "General office supplies"},
    {"id": "3", "name": "Tools", "notes": "Hardware and maintenance tools"},
]

SEED_ITEMS: List[dict] = [
    {
        "sku": "ELEC001",
        "name": "Arduino Uno",
        "department_id": "1",
        "department": "Electronics",
        "unit": "pcs",
        "quantity": 15,
        "reorder_point": 10,
        "condition": "New",
        "description": "Microcontroller board",
        "bill_name": "TechSupply Co",
        "bill_number": "INV-2024-001",
    },
    {
        "sku": "OFF001",
        "name": "A4 Paper",
        "department_id": "2",
        "department": "Office Supplies",
        "unit": "reams",
        "quantity": 5,
        "reorder_point": 20,
        "condition": "New",
        "description": "White copy paper",
        "bill_name": "Office Depot",
        "bill_number": "INV-2024-002",
    },
    {
        "sku": "TOOL001",
        "name": "Screwdriver Set",
        "department_id": "3",
        "department": "Tools",
        "unit": "sets",
        "quantity": 3,
        "reorder_point": 5,
        "condition": "Good",
        "description": "Phillips and flathead set",
        "bill_name": "Hardware Store",
        "bill_number": "INV-2024-003",
    },
]

# Sidebar menu labels (keep in sync across app and sidebar)
MENU_DASHBOARD = "\U0001F4C8 Dashboard"
MENU_INVENTORY = "\U0001F5C2\ufe0f Inventory"
MENU_TRANSACTIONS = "\U0001F501 Transactions"
MENU_DEPARTMENTS = "\U0001F3E2 Departments"
MENU_ALERTS = "\U0001F6A8 Stock Alerts"
