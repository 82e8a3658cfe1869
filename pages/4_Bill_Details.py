import pandas as pd
import streamlit as st

from app_context import get_context
from domain.models import Role
from element_component import BILL_ID_KEY, confirmation_dialog, navigate
from services.billing_service import (
    delete_bill,
    download_bill_pdf,
    fetch_notification_history,
    send_bill_notification,
)
from utils.billing import bill_items_frame
from utils.formatting import format_rupee, format_timestamp

ctx = get_context()

if st.session_state.get("bill_deleted_state"):
    st.session_state["bill_deleted_state"] = False
    st.session_state.pop(BILL_ID_KEY, None)
    if "id" in st.query_params:
        del st.query_params["id"]
    ctx.bills.refresh()
    navigate("/bills")

# a shared link carries ?id=..., in-app navigation goes through session state
bill_id = st.query_params.get("id") or st.session_state.get(BILL_ID_KEY)

if st.button("← Back to Bills"):
    navigate("/bills")

if not bill_id:
    st.title("Bill Not Found")
    st.stop()

st.query_params["id"] = bill_id

with st.spinner("Loading..."):
    bill = ctx.bills.get(bill_id)

if bill is None:
    st.title("Bill Not Found")
    st.warning("Bill not found")
    st.stop()

st.title(f"🧾 {bill.bill_number}")
st.caption(f"Created on {format_timestamp(bill.created_at)}")
st.markdown("🕒 **Pending**" if bill.is_pending else f"✅ **{bill.status.value.title()}**")

# -----------------------------------------------------------------------------
# Customer
# -----------------------------------------------------------------------------
col_name, col_phone, col_email = st.columns(3)
col_name.metric("Customer", bill.customer.name)
col_phone.metric("Phone", bill.customer.phone)
if bill.customer.email:
    col_email.metric("Email", bill.customer.email)

# -----------------------------------------------------------------------------
# Items
# -----------------------------------------------------------------------------
st.subheader("Items")
if bill.notes:
    st.caption(f"Note: {bill.notes}")

df = bill_items_frame(bill)
df["Price"] = df["Price"].apply(format_rupee)
df["Subtotal"] = df["Subtotal"].apply(format_rupee)
st.dataframe(df, width='stretch', hide_index=True)

st.metric("Total Amount", format_rupee(bill.total_amount))

# -----------------------------------------------------------------------------
# Actions
# -----------------------------------------------------------------------------
col_done, col_sms, col_mail, col_pdf = st.columns(4)

if bill.is_pending and col_done.button("✅ Mark as Completed", type="primary"):
    ok, msg = ctx.bills.mark_completed(bill.id)
    if ok:
        st.session_state["flash"] = ("success", "Bill completed! Customer notification sent successfully.")
        st.rerun()
    else:
        st.error(msg)

if col_sms.button("📱 Send SMS"):
    ok, msg = send_bill_notification(ctx.client, bill.id, "SMS")
    if ok:
        st.success(f"Message sent to {bill.customer.phone}")
    else:
        st.error(msg)

if bill.customer.email and col_mail.button("✉️ Send Email"):
    ok, msg = send_bill_notification(ctx.client, bill.id, "EMAIL")
    if ok:
        st.success(f"Email sent to {bill.customer.email}")
    else:
        st.error(msg)

if col_pdf.button("🖨️ Print Bill"):
    ok, msg, content = download_bill_pdf(ctx.client, bill.id)
    if ok:
        st.download_button(
            "Download PDF",
            data=content,
            file_name=f"{bill.bill_number}.pdf",
            mime="application/pdf",
        )
    else:
        st.error(msg)

# -----------------------------------------------------------------------------
# Notes, history, delete
# -----------------------------------------------------------------------------
st.divider()

with st.form("bill_notes_form", enter_to_submit=False):
    new_notes = st.text_area("Notes", value=bill.notes or "")
    if st.form_submit_button("Save Notes"):
        ok, msg = ctx.bills.update_notes(bill.id, new_notes.strip())
        if ok:
            st.session_state["flash"] = ("success", msg)
            st.rerun()
        else:
            st.error(msg)

with st.expander("🔔 Notification history"):
    ok, msg, history = fetch_notification_history(ctx.client, bill.id)
    if not ok:
        st.error(msg)
    elif not history:
        st.caption("No notifications sent for this bill yet")
    else:
        st.dataframe(
            pd.DataFrame(
                [
                    {
                        "Channel": h.get("type"),
                        "Recipient": h.get("recipient"),
                        "Status": h.get("status"),
                        "Sent": format_timestamp(h.get("createdAt")),
                    }
                    for h in history
                ]
            ),
            width='stretch',
            hide_index=True,
        )

if ctx.session.current_principal().role is Role.ADMIN:
    if st.button("🗑️ Delete Bill"):
        confirmation_dialog(
            {"Bill": bill.bill_number, "Customer": bill.customer.name, "Total": format_rupee(bill.total_amount)},
            lambda: delete_bill(ctx.client, bill.id),
            "bill_deleted_state",
            confirm_label="Delete",
        )
