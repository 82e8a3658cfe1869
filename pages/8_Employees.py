import streamlit as st

from app_context import get_context
from element_component import confirmation_dialog
from services.employee_service import create_employee, delete_employee, fetch_employees, toggle_employee_status
from utils.formatting import format_timestamp
from utils.validation import validate_employee

ctx = get_context()

st.title("👥 Employee Management")

if "employee_input_state" not in st.session_state:
    st.session_state["employee_input_state"] = False

with st.form("employee_input_form", clear_on_submit=True, enter_to_submit=False):
    st.subheader("Add Employee")
    name = st.text_input("Name")
    email = st.text_input("Email")
    password = st.text_input("Password", type="password")

    submitted = st.form_submit_button("Create Employee")

    if submitted:
        st.session_state["employee_input_state"] = False
        is_valid, message = validate_employee(name, email, password)
        if not is_valid:
            st.error(message)
        else:
            ok, msg = create_employee(ctx.client, name, email, password)
            if ok:
                st.session_state["employee_input_state"] = True
            else:
                st.error(msg)

    if st.session_state["employee_input_state"]:
        st.success("Employee created successfully")

st.divider()

ok, msg, employees = fetch_employees(ctx.client)
if not ok:
    st.error(msg)
    st.stop()

if not employees:
    st.info("No employees yet. Add your first team member above.")
    st.stop()

for employee in employees:
    with st.container(border=True):
        col_info, col_toggle, col_delete = st.columns([3, 1, 1])
        with col_info:
            st.markdown(f"**{employee.name}** {'🟢' if employee.is_active else '⚪'}")
            st.caption(f"{employee.email} · {employee.role} · joined {format_timestamp(employee.created_at, with_time=False)}")

        label = "Deactivate" if employee.is_active else "Activate"
        if col_toggle.button(label, key=f"toggle_{employee.id}"):
            ok, msg = toggle_employee_status(ctx.client, employee.id, employee.is_active)
            if ok:
                st.session_state["flash"] = ("success", msg)
                st.rerun()
            else:
                st.error(msg)

        if col_delete.button("🗑️ Delete", key=f"delete_{employee.id}"):
            confirmation_dialog(
                {"Name": employee.name, "Email": employee.email},
                lambda eid=employee.id: delete_employee(ctx.client, eid),
                "employee_deleted_state",
                confirm_label="Delete",
            )
