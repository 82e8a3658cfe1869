import streamlit as st

from app_context import get_context
from element_component import confirmation_dialog, navigate
from services.billing_service import fetch_categories, fetch_customers
from utils.billing import bill_total, build_draft, compose_items, total_quantity
from utils.formatting import format_rupee
from utils.validation import validate_bill, validate_email

ctx = get_context()

st.title("➕ New Bill")

if "bill_created_state" not in st.session_state:
    st.session_state["bill_created_state"] = False

if st.session_state["bill_created_state"]:
    st.session_state["bill_created_state"] = False
    for key in [k for k in st.session_state.keys() if str(k).startswith(("qty_", "customer_", "bill_notes"))]:
        del st.session_state[key]
    navigate("/bills")

# -----------------------------------------------------------------------------
# 1) Customer
# -----------------------------------------------------------------------------
st.subheader("👤 Customer Details")

with st.expander("🔍 Find existing customer"):
    lookup = st.text_input("Search by name or phone", key="customer_lookup")
    if lookup.strip():
        found_ok, found_msg, customers = fetch_customers(ctx.client, lookup.strip())
        if not found_ok:
            st.error(found_msg)
        elif not customers:
            st.caption("No matching customers")
        for customer in customers[:5]:
            if st.button(f"{customer.name} · {customer.phone}", key=f"pick_{customer.id}"):
                # widgets below read these keys on the next run
                st.session_state["customer_name"] = customer.name
                st.session_state["customer_phone"] = customer.phone
                st.session_state["customer_email"] = customer.email or ""
                st.rerun()

col_name, col_phone = st.columns(2)
customer_name = col_name.text_input("Name *", placeholder="Customer name", key="customer_name")
customer_phone = col_phone.text_input("Phone *", placeholder="Phone number", key="customer_phone")
customer_email = st.text_input("Email (Optional)", placeholder="Email address", key="customer_email")
notes = st.text_area("Notes (Optional)", key="bill_notes")

st.divider()

# -----------------------------------------------------------------------------
# 2) Items: quantities stay local until submit
# -----------------------------------------------------------------------------
st.subheader("🛍️ Select Items")

with st.spinner("Loading items..."):
    ok, msg, categories = fetch_categories(ctx.client)

if not ok:
    st.error(msg)
    st.stop()

if not categories:
    st.warning("No categories found. Please add them in Settings.")
    st.stop()

quantities = {}
cols = st.columns(3)
for idx, category in enumerate(categories):
    with cols[idx % 3]:
        with st.container(border=True):
            st.markdown(f"{category.icon} **{category.name}**")
            st.caption(f"{format_rupee(category.price)}/pc")
            qty = st.number_input(
                "Qty",
                min_value=0,
                step=1,
                value=0,
                key=f"qty_{category.id}",
            )
            quantities[category.id] = int(qty)
            if qty > 0:
                st.markdown(f"**{format_rupee(qty * category.price)}**")

items = compose_items(categories, quantities)
total = bill_total(items)
pieces = total_quantity(items)

st.divider()

# -----------------------------------------------------------------------------
# 3) Summary + submit
# -----------------------------------------------------------------------------
col_count, col_total = st.columns(2)
col_count.metric("Items selected", pieces)
col_total.metric("Total", format_rupee(total))

col_cancel, col_submit = st.columns(2)
if col_cancel.button("Cancel"):
    navigate("/dashboard")

if col_submit.button("Create Bill", type="primary", disabled=not items):
    is_valid, message = validate_bill(customer_name, customer_phone, items)
    email_ok, email_msg = validate_email(customer_email)
    if not is_valid:
        st.error(message)
    elif not email_ok:
        st.error(email_msg)
    else:
        draft = build_draft(customer_name, customer_phone, items, customer_email=customer_email, notes=notes)

        def create():
            created, create_msg = ctx.bills.create(draft)
            if created:
                st.session_state["flash"] = ("success", f"Bill created successfully for {format_rupee(total)}.")
            return created, create_msg

        summary = {"Customer": customer_name.strip(), "Phone": customer_phone.strip()}
        for item in items:
            summary[item.category_name] = f"{item.quantity} x {format_rupee(item.price)} = {format_rupee(item.subtotal)}"
        summary["Total"] = format_rupee(total)

        confirmation_dialog(summary, create, "bill_created_state", confirm_label="Create Bill")
