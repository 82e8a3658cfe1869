import streamlit as st

from app_context import get_context
from domain.models import Role
from services.auth_service import change_password, update_profile
from services.billing_service import create_category, delete_category, fetch_categories, update_category
from services.store_service import fetch_my_store_settings, set_notification_channel
from utils.formatting import format_rupee, format_timestamp
from utils.validation import validate_category, validate_new_password

ctx = get_context()
principal = ctx.session.current_principal()

ICONS = ["👕", "👔", "👖", "🩳", "👗", "🤵", "👘", "🧥", "🛏️", "🧣"]

st.title("⚙️ Settings")


def password_section():
    with st.form("password_form", clear_on_submit=True, enter_to_submit=False):
        st.subheader("🔒 Change Password")
        st.caption("Update your account password")
        new_password = st.text_input("New Password", type="password", placeholder="Enter new password")
        confirm_password = st.text_input("Confirm New Password", type="password", placeholder="Confirm new password")

        if st.form_submit_button("Update Password"):
            is_valid, message = validate_new_password(new_password, confirm_password)
            if not is_valid:
                st.error(message)
            else:
                ok, msg = change_password(ctx.client, new_password)
                if ok:
                    st.success(msg)
                else:
                    st.error(msg)


def profile_section(store_settings):
    if store_settings is not None:
        st.subheader("🏪 Store Status")
        col_status, col_plan, col_end = st.columns(3)
        col_status.metric("Current Status", "Active" if store_settings.is_active else "Deactivated")
        if not store_settings.is_active and store_settings.deactivation_reason:
            st.warning(f"Deactivation reason: {store_settings.deactivation_reason}")

        sub = store_settings.subscription
        if sub is not None:
            col_plan.metric("Subscription Plan", f"{sub.plan} ({sub.status})")
            col_end.metric("Expires On", format_timestamp(sub.end_date, with_time=False))
        else:
            col_plan.metric("Subscription Plan", "No active subscription")
        st.divider()

    with st.form("profile_form", enter_to_submit=False):
        st.subheader("👤 Profile")
        name = st.text_input("Name", value=principal.name)
        st.text_input("Email", value=principal.email, disabled=True)

        if st.form_submit_button("Save Profile"):
            ok, msg = update_profile(ctx.client, ctx.session, name)
            if ok:
                st.success(msg)
            else:
                st.error(msg)

    password_section()


def pricing_section(categories):
    st.subheader("Item Pricing")
    if not categories:
        st.info("No categories yet. Add one in the Categories tab.")
        return

    for category in categories:
        col_name, col_price, col_save, col_delete = st.columns([3, 2, 1, 1])
        col_name.markdown(f"{category.icon} **{category.name}**  \n{format_rupee(category.price)}/pc")
        new_price = col_price.number_input(
            "Price (₹)",
            min_value=0.0,
            step=1.0,
            value=float(category.price),
            key=f"price_{category.id}",
            label_visibility="collapsed",
        )
        if col_save.button("Save", key=f"save_{category.id}"):
            ok, msg = update_category(ctx.client, category.id, price=new_price)
            if ok:
                st.success(msg)
            else:
                st.error(msg)
        if col_delete.button("🗑️", key=f"delete_{category.id}"):
            ok, msg = delete_category(ctx.client, category.id)
            if ok:
                st.session_state["flash"] = ("success", msg)
                st.rerun()
            else:
                st.error(msg)


def categories_section():
    with st.form("category_input_form", clear_on_submit=True, enter_to_submit=False):
        st.subheader("Add New Category")
        icon = st.selectbox("Icon", options=ICONS)
        name = st.text_input("Category Name")
        price = st.text_input("Price (₹)")

        if st.form_submit_button("Add Category"):
            is_valid, message = validate_category(name, price)
            if not is_valid:
                st.error(message)
            else:
                ok, msg, _ = create_category(ctx.client, name, float(price), icon)
                if ok:
                    st.session_state["flash"] = ("success", f"Category added! {msg}")
                    st.rerun()
                else:
                    st.error(msg)


def notifications_section(store_settings):
    st.subheader("🔔 Customer Notifications")
    st.caption("Choose how customers are told that their clothes are ready.")
    if store_settings is None:
        st.warning("Store settings could not be loaded.")
        return

    current = {
        "email": store_settings.email_enabled,
        "sms": store_settings.sms_enabled,
        "whatsapp": store_settings.whatsapp_enabled,
    }
    labels = {"email": "✉️ Email", "sms": "📱 SMS", "whatsapp": "💬 WhatsApp"}

    for channel, enabled in current.items():
        col_label, col_action = st.columns([3, 1])
        col_label.markdown(f"{labels[channel]}: **{'On' if enabled else 'Off'}**")
        if col_action.button("Disable" if enabled else "Enable", key=f"notify_{channel}"):
            ok, msg = set_notification_channel(ctx.client, channel, not enabled)
            if ok:
                st.session_state["flash"] = ("success", f"Settings updated: {msg}")
                st.rerun()
            else:
                st.error(msg)


if principal.role is Role.EMPLOYEE:
    # keeps the store snapshot (and so the access gate) current
    ok, msg, store_settings = fetch_my_store_settings(ctx.client, ctx.session)
    if ok and not store_settings.is_active:
        st.rerun()
    password_section()

elif principal.role is Role.ADMIN:
    ok, msg, store_settings = fetch_my_store_settings(ctx.client, ctx.session)
    if not ok:
        st.error(msg)
    cat_ok, cat_msg, categories = fetch_categories(ctx.client)
    if not cat_ok:
        st.error(cat_msg)

    tab_pricing, tab_categories, tab_notifications, tab_profile = st.tabs(
        ["Item Pricing", "Categories", "Notifications", "Profile"]
    )
    with tab_pricing:
        pricing_section(categories)
    with tab_categories:
        categories_section()
    with tab_notifications:
        notifications_section(store_settings)
    with tab_profile:
        profile_section(store_settings)

elif principal.role is Role.SUPER_ADMIN:
    profile_section(None)
