import streamlit as st

from app_context import get_context
from element_component import navigate
from services.store_service import register_store
from utils.validation import validate_store_registration

ctx = get_context()

st.title("🏪 Register Your Store")
st.caption("Registrations are reviewed by the IronPress team before the store is activated.")

if "registration_state" not in st.session_state:
    st.session_state["registration_state"] = None

with st.form("store_register_form", enter_to_submit=False):
    st.subheader("Store details")
    col_a, col_b = st.columns(2)
    store_name = col_a.text_input("Store name *")
    store_email = col_b.text_input("Store email *")
    store_phone = col_a.text_input("Store phone *")
    gst_number = col_b.text_input("GST number")
    address = st.text_input("Address")
    col_c, col_d, col_e = st.columns(3)
    city = col_c.text_input("City")
    state = col_d.text_input("State")
    pincode = col_e.text_input("Pincode")

    st.subheader("Admin account")
    admin_name = st.text_input("Admin name *")
    admin_email = st.text_input("Admin email *")
    col_p, col_q = st.columns(2)
    password = col_p.text_input("Password *", type="password")
    confirm_password = col_q.text_input("Confirm password *", type="password")

    submitted = st.form_submit_button("Register Store", type="primary")

    if submitted:
        form = {
            "storeName": store_name,
            "storeEmail": store_email,
            "storePhone": store_phone,
            "address": address,
            "city": city,
            "state": state,
            "pincode": pincode,
            "gstNumber": gst_number,
            "adminName": admin_name,
            "adminEmail": admin_email,
            "password": password,
            "confirmPassword": confirm_password,
        }
        is_valid, message = validate_store_registration(form)
        if not is_valid:
            st.error(message)
        else:
            with st.spinner("Submitting registration..."):
                ok, msg = register_store(ctx.client, form)
            if ok:
                st.session_state["registration_state"] = msg
            else:
                st.error(f"Registration failed: {msg}")

if st.session_state["registration_state"]:
    st.success(f"Registration successful! {st.session_state['registration_state']}")

if st.button("Back to login"):
    st.session_state["registration_state"] = None
    navigate("/login")
