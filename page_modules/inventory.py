"""Inventory view page: search, department filter, add / edit / delete items."""
import streamlit as st

from inventory_core.constants import CONDITIONS
from inventory_core.exceptions import ValidationError
from inventory_core.queries import filtered_items
from ui.components import department_label_map, flash, render_items_table


def _render_filters(store, state):
    dept_names = department_label_map(state)
    col1, col2 = st.columns([3, 2])
    term = col1.text_input("Search by name, SKU, or description", value=state.search_term)
    options = [""] + list(dept_names)
    current = state.department_filter if state.department_filter in options else ""
    dept = col2.selectbox(
        "Department",
        options,
        index=options.index(current),
        format_func=lambda d: dept_names.get(d, "All departments") if d else "All departments",
    )
    if term != state.search_term:
        store.set_search_term(term)
    if dept != state.department_filter:
        store.set_department_filter(dept)


def _render_add_form(store, state):
    dept_names = department_label_map(state)
    with st.expander("➕ Add Item"):
        if not dept_names:
            st.info("Create a department first")
            return
        with st.form("add_item_form", clear_on_submit=True):
            col1, col2 = st.columns(2)
            sku = col1.text_input("SKU *")
            name = col2.text_input("Name *")
            department_id = col1.selectbox(
                "Department *", list(dept_names), format_func=dept_names.get
            )
            unit = col2.text_input("Unit *", placeholder="pcs, boxes, reams...")
            quantity = col1.text_input("Quantity", value="0")
            reorder_point = col2.text_input("Reorder Point", value="0")
            condition = col1.selectbox("Condition", CONDITIONS)
            bill_name = col2.text_input("Bill Name")
            bill_number = col1.text_input("Bill Number")
            description = st.text_area("Description")
            if st.form_submit_button("Add Item"):
                try:
                    item = store.add_item(
                        sku,
                        name,
                        department_id,
                        unit,
                        quantity=quantity,
                        reorder_point=reorder_point,
                        condition=condition,
                        description=description,
                        bill_name=bill_name,
                        bill_number=bill_number,
                    )
                except ValidationError as e:
                    st.error(str(e))
                else:
                    st.session_state["inventory_msg"] = f"{item.name} added to inventory"
                    st.rerun()


def _render_edit_form(store, state):
    if not state.items:
        return
    with st.expander("✏️ Edit / Delete Item"):
        skus = [it.sku for it in state.items]
        sku = st.selectbox("Item", skus, key="edit_item_sku")
        item = store.get_item(sku)
        if item is None:
            return
        with st.form(f"edit_item_{sku}"):
            col1, col2 = st.columns(2)
            name = col1.text_input("Name", value=item.name)
            unit = col2.text_input("Unit", value=item.unit)
            quantity = col1.number_input("Quantity", min_value=0, step=1, value=item.quantity)
            reorder_point = col2.number_input(
                "Reorder Point", min_value=0, step=1, value=item.reorder_point
            )
            condition = col1.selectbox(
                "Condition", CONDITIONS, index=CONDITIONS.index(item.condition)
                if item.condition in CONDITIONS else 0
            )
            bill_name = col2.text_input("Bill Name", value=item.bill_name)
            bill_number = col1.text_input("Bill Number", value=item.bill_number)
            description = st.text_area("Description", value=item.description)
            if st.form_submit_button("Save changes"):
                try:
                    store.update_item(
                        sku,
                        name=name,
                        unit=unit,
                        quantity=int(quantity),
                        reorder_point=int(reorder_point),
                        condition=condition,
                        description=description,
                        bill_name=bill_name,
                        bill_number=bill_number,
                    )
                except ValidationError as e:
                    st.error(str(e))
                else:
                    st.session_state["inventory_msg"] = f"{name} updated"
                    st.rerun()
        if st.button("\U0001F5D1\ufe0f Delete item", key=f"delete_item_{sku}"):
            store.delete_item(sku)
            st.session_state["inventory_msg"] = f"{item.name} deleted"
            st.rerun()


def render(store):
    """Render the inventory page."""
    st.header("\U0001F5C2\ufe0f Inventory")
    flash("inventory_msg", "✅")
    _render_filters(store, store.snapshot())
    state = store.snapshot()
    render_items_table(filtered_items(state))
    st.divider()
    _render_add_form(store, state)
    _render_edit_form(store, state)
