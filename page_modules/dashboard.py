"""Dashboard page with inventory overview and statistics."""
import pandas as pd
import plotly.express as px
import streamlit as st

from inventory_core.queries import filtered_items, inventory_summary, low_stock_items
from ui.components import render_items_table


def render(store):
    """Render the dashboard page."""
    st.header("\U0001F4C8 Inventory Overview")
    state = store.snapshot()
    summary = inventory_summary(state)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Items", summary["total_items"])
    col2.metric("Departments", summary["departments"])
    col3.metric("Low Stock", summary["low_stock"])
    col4.metric("Transactions", summary["transactions"])

    low = low_stock_items(state)
    if low:
        st.error(f"**{len(low)} items** are at or below their reorder point!")

    if state.items:
        dept_stock = (
            pd.DataFrame([{"department": it.department, "quantity": it.quantity} for it in state.items])
            .groupby("department", as_index=False)["quantity"]
            .sum()
        )
        fig = px.bar(
            dept_stock,
            x="department",
            y="quantity",
            title="Stock by Department",
        )
        st.plotly_chart(fig, use_container_width=True)
    else:
        st.info("No stock data to display")

    st.subheader("Items")
    render_items_table(filtered_items(state))
