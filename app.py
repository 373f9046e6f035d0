"""Department Inventory Tracker - Main Application Entry Point."""
import streamlit as st

from inventory_core import config
from inventory_core.constants import (
    MENU_ALERTS,
    MENU_DASHBOARD,
    MENU_DEPARTMENTS,
    MENU_INVENTORY,
    MENU_TRANSACTIONS,
)
from inventory_core.persistence import open_store
from ui.sidebar import render_sidebar_menu, render_exports

# Import page render functions
from page_modules import alerts, dashboard, departments, inventory, transactions

# Page configuration
st.set_page_config(
    page_title="Inventory Tracker",
    page_icon="\U0001F4E6",
    layout="wide",
)

config.configure_logging()


# One store per server process; every session shares it.
@st.cache_resource
def get_store():
    store, _repository = open_store(config.DB_PATH)
    return store


store = get_store()

menu = render_sidebar_menu(store)
render_exports(store)

# Page routing
pages = {
    MENU_DASHBOARD: lambda: dashboard.render(store),
    MENU_INVENTORY: lambda: inventory.render(store),
    MENU_TRANSACTIONS: lambda: transactions.render(store),
    MENU_DEPARTMENTS: lambda: departments.render(store),
    MENU_ALERTS: lambda: alerts.render(store),
}

if menu not in pages:
    menu = MENU_DASHBOARD
pages[menu]()
