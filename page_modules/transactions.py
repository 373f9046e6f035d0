"""Check-in / check-out page with the transaction log."""
import streamlit as st

from inventory_core.constants import CHECK_IN, CHECK_OUT, TRANSACTION_TYPES
from inventory_core.exceptions import ValidationError
from ui.components import flash, render_transactions_table

TYPE_LABELS = {CHECK_IN: "Check In", CHECK_OUT: "Check Out"}


def render(store):
    """Render the transaction page."""
    st.header("\U0001F501 Transactions")
    flash("transaction_msg", "\U0001F4E6")

    state = store.snapshot()
    if state.items:
        skus = [it.sku for it in state.items]
        names = {it.sku: it.name for it in state.items}
        with st.form("transaction_form", clear_on_submit=True):
            sku = st.selectbox("Item *", skus, format_func=lambda s: f"{s} - {names.get(s, '')}")
            col1, col2 = st.columns(2)
            txn_type = col1.radio(
                "Type", TRANSACTION_TYPES, format_func=TYPE_LABELS.get, horizontal=True
            )
            quantity = col2.number_input("Quantity *", min_value=0, step=1, value=0)
            notes = st.text_input("Notes")
            selected = store.get_item(sku) if sku else None
            if selected is not None:
                st.caption(f"Current stock: {selected.quantity} {selected.unit}")
            if st.form_submit_button("Process Transaction"):
                try:
                    txn = store.commit_transaction(sku, int(quantity), txn_type, notes=notes)
                except ValidationError as e:
                    st.error(str(e))
                else:
                    verb = "Added" if txn.type == CHECK_IN else "Removed"
                    st.session_state["transaction_msg"] = (
                        f"Transaction processed: {verb} {txn.quantity} items"
                    )
                    st.rerun()
    else:
        st.info("Add an item before recording transactions")

    st.divider()
    st.subheader("Recent Transactions")
    render_transactions_table(store.snapshot().transactions)
