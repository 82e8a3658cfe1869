import streamlit as st

from app_context import get_context
from domain.routes import landing_path
from element_component import navigate
from utils.validation import validate_login

ctx = get_context()

st.title("👔 IronPress")
st.caption("Billing made simple for ironing & laundry shops")

principal = ctx.session.current_principal()
if principal is not None:
    st.info(f"You are logged in as **{principal.email}**.")
    if st.button("Go to app"):
        navigate(landing_path(principal))
    st.stop()

with st.form("login_form", enter_to_submit=True):
    st.subheader("Sign in")
    email = st.text_input("Email", placeholder="admin@shop.com")
    password = st.text_input("Password", type="password")

    submitted = st.form_submit_button("Login", type="primary")

    if submitted:
        is_valid, message = validate_login(email, password)
        if not is_valid:
            st.error(message)
        else:
            with st.spinner("Signing in..."):
                ok = ctx.session.login(email.strip(), password)
            if ok:
                ctx.bills.reset()
                st.session_state["flash"] = ("success", "Welcome back! You've successfully logged in.")
                navigate(landing_path(ctx.session.current_principal()))
            else:
                st.error(ctx.session.last_error or "Please check your credentials and try again.")

st.divider()
st.caption("New shop?")
if st.button("Register your store"):
    navigate("/register")
