"""Department management page."""
import streamlit as st

from inventory_core.exceptions import ValidationError
from ui.components import flash


def render(store):
    """Render the department page: add form and one row per department."""
    st.header("\U0001F3E2 Departments")
    flash("department_msg", "\U0001F3E2")

    with st.form("add_department_form", clear_on_submit=True):
        name = st.text_input("Department name *")
        notes = st.text_area("Notes")
        if st.form_submit_button("Add Department"):
            try:
                dept = store.add_department(name, notes)
            except ValidationError as e:
                st.error(str(e))
            else:
                st.session_state["department_msg"] = f"Department {dept.name} added"
                st.rerun()

    state = store.snapshot()
    if not state.departments:
        st.info("No departments yet")
        return

    st.divider()
    for dept in state.departments:
        count = sum(1 for it in state.items if it.department_id == dept.id)
        col1, col2, col3 = st.columns([6, 2, 1])
        with col1:
            st.markdown(f"**{dept.name}**")
            if dept.notes:
                st.caption(dept.notes)
        col2.text(f"{count} item(s)")
        with col3:
            confirm_key = f"confirm_del_dept_{dept.id}"
            if st.session_state.get(confirm_key):
                st.warning("Also removes all items in this department.")
                if st.button("Confirm", key=f"yes_{dept.id}", type="primary"):
                    store.delete_department(dept.id)
                    st.session_state.pop(confirm_key, None)
                    st.session_state["department_msg"] = (
                        f"Department {dept.name} and its {count} item(s) removed"
                    )
                    st.rerun()
            elif st.button("\U0001F5D1\ufe0f", key=f"del_{dept.id}"):
                st.session_state[confirm_key] = True
                st.rerun()

        with st.expander(f"Edit {dept.name}"):
            with st.form(f"edit_dept_{dept.id}"):
                new_name = st.text_input("Name", value=dept.name)
                new_notes = st.text_area("Notes", value=dept.notes)
                if st.form_submit_button("Save"):
                    try:
                        store.update_department(dept.id, name=new_name, notes=new_notes)
                    except ValidationError as e:
                        st.error(str(e))
                    else:
                        st.session_state["department_msg"] = "Department updated"
                        st.rerun()
