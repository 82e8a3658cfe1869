import streamlit as st

from app_context import get_context
from element_component import flash, navigate

ctx = get_context()
store = ctx.session.current_store()

st.title("⛔ Store Deactivated")
st.write("Your store account has been deactivated. Billing is unavailable until it is reactivated.")

if store is not None:
    st.markdown(f"**Store:** {store.name}")
    if store.deactivation_reason:
        st.warning(f"Reason: {store.deactivation_reason}")

st.subheader("Contact Support")
st.caption("Please contact the IronPress team to reactivate your store.")

if ctx.session.is_authenticated:
    if st.button("🚪 Logout"):
        ctx.logout()
        flash("success", "Logged out successfully")
        navigate("/login")
else:
    if st.button("Back to login"):
        navigate("/login")
