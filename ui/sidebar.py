"""Sidebar navigation, refresh and CSV export buttons."""
import streamlit as st

from inventory_core.constants import (
    MENU_ALERTS,
    MENU_DASHBOARD,
    MENU_DEPARTMENTS,
    MENU_INVENTORY,
    MENU_TRANSACTIONS,
)
from inventory_core.export import export_filename, inventory_csv, transactions_csv
from inventory_core.queries import low_stock_items


def render_sidebar_menu(store):
    """Render the sidebar navigation menu and return the selected page label."""
    low_count = len(low_stock_items(store.snapshot()))
    menu = [MENU_DASHBOARD, MENU_INVENTORY, MENU_TRANSACTIONS, MENU_DEPARTMENTS, MENU_ALERTS]
    if (
        "menu_selection" not in st.session_state
        or st.session_state.menu_selection not in menu
    ):
        st.session_state.menu_selection = menu[0]
    selected = st.sidebar.radio(
        "Select Page",
        menu,
        key="menu_selection",
        format_func=lambda m: f"{m} ({low_count})" if m == MENU_ALERTS and low_count else m,
    )

    if st.sidebar.button("\U0001F504 Refresh", key="sidebar_refresh"):
        store.refresh()
        st.rerun()
    return selected


def render_exports(store):
    """Render the two CSV download buttons."""
    st.sidebar.markdown("---")
    st.sidebar.caption("Export")
    state = store.snapshot()
    if st.sidebar.download_button(
        "⬇️ Inventory CSV",
        data=inventory_csv(state),
        file_name=export_filename("inventory"),
        mime="text/csv",
    ):
        st.toast("Inventory data has been exported to CSV", icon="\U0001F4BE")
    if st.sidebar.download_button(
        "⬇️ Transactions CSV",
        data=transactions_csv(state),
        file_name=export_filename("transactions"),
        mime="text/csv",
    ):
        st.toast("Transaction data has been exported to CSV", icon="\U0001F4BE")
