"""Stock alerts page for low inventory warnings."""
import streamlit as st

from inventory_core.queries import low_stock_items
from ui.components import render_items_table


def render(store):
    """Render the stock alerts page."""
    st.header("\U0001F6A8 Low Stock Alerts")
    low = low_stock_items(store.snapshot())
    if not low:
        st.info("No items at or below their reorder point")
        return
    st.caption("Items with a reorder point of 0 are not tracked.")
    render_items_table(low)
