"""Reusable UI components."""
import pandas as pd
import streamlit as st

from inventory_core.constants import CHECK_IN
from inventory_core.queries import STATUS_ATTENTION, STATUS_LOW, item_status

STATUS_LABELS = {
    STATUS_LOW: "\U0001F534 Low stock",
    STATUS_ATTENTION: "\U0001F7E1 Check condition",
}


def department_label_map(state):
    """Map department id to name for select boxes."""
    return {d.id: d.name for d in state.departments}


def render_items_table(items):
    """Render items as a table with a status column."""
    if not items:
        st.info("No items to show")
        return

    display_df = pd.DataFrame(
        [
            {
                "SKU": item.sku,
                "Name": item.name,
                "Department": item.department,
                "Unit": item.unit,
                "Quantity": item.quantity,
                "Reorder Point": item.reorder_point,
                "Condition": item.condition,
                "Status": STATUS_LABELS.get(item_status(item), ""),
                "Description": item.description,
            }
            for item in items
        ]
    )
    st.dataframe(display_df, use_container_width=True, hide_index=True)


def render_transactions_table(transactions):
    if not transactions:
        st.info("No transactions yet")
        return

    display_df = pd.DataFrame(
        [
            {
                "Date": txn.date,
                "SKU": txn.sku,
                "Item": txn.item_name,
                "Type": txn.type,
                # Signed for clarity
                "Quantity": f"+{txn.quantity}" if txn.type == CHECK_IN else f"-{txn.quantity}",
                "User": txn.user,
                "Notes": txn.notes,
            }
            for txn in transactions
        ]
    )
    display_df["Date"] = pd.to_datetime(display_df["Date"], errors="coerce").dt.strftime(
        "%d/%m/%Y %H:%M"
    ).fillna(display_df["Date"])
    st.dataframe(display_df, use_container_width=True, hide_index=True)


def flash(key, icon):
    """Show a toast queued in session state by the previous run."""
    msg = st.session_state.pop(key, None)
    if msg:
        st.toast(msg, icon=icon)
