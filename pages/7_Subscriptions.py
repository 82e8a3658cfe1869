from datetime import date

import pandas as pd
import streamlit as st

from app_context import get_context
from services.store_service import fetch_stores
from services.subscription_service import (
    BILLING_CYCLES,
    PLANS,
    STATUSES,
    cancel_subscription,
    create_subscription,
    default_end_date,
    fetch_subscriptions,
    update_subscription_status,
)
from utils.formatting import format_rupee, format_timestamp

ctx = get_context()

st.title("💳 Subscription Management")


@st.dialog("New Subscription")
def subscription_dialog(store_options):
    store_id = st.selectbox(
        "Store *",
        options=list(store_options.keys()),
        format_func=lambda sid: store_options[sid],
    )
    plan = st.selectbox("Plan", options=list(PLANS.keys()))
    st.caption(PLANS[plan])
    billing_cycle = st.selectbox("Billing cycle", options=BILLING_CYCLES[plan])
    amount = st.text_input("Amount (₹) *", value="0")
    start_date = st.date_input("Start date", value=date.today())
    end_date = None
    if plan == "FREE":
        end_date = st.date_input("End date", value=default_end_date(start_date))

    if st.button("Create Subscription", type="primary"):
        ok, msg = create_subscription(ctx.client, store_id, plan, billing_cycle, amount, start_date, end_date)
        if ok:
            st.session_state["flash"] = ("success", msg)
            st.rerun()
        else:
            st.error(msg)


ok_stores, msg_stores, stores = fetch_stores(ctx.client)
if not ok_stores:
    st.error(msg_stores)

if st.button("➕ New Subscription", disabled=not stores):
    subscription_dialog({s.id: f"{s.name} ({s.email})" for s in stores})

ok, msg, subscriptions = fetch_subscriptions(ctx.client)
if not ok:
    st.error(msg)
    st.stop()

if not subscriptions:
    st.info("No subscriptions yet")
    st.stop()

df = pd.DataFrame(
    [
        {
            "Store": s.store_name,
            "Plan": s.plan,
            "Cycle": s.billing_cycle,
            "Amount": format_rupee(s.amount),
            "Start": format_timestamp(s.start_date, with_time=False),
            "End": format_timestamp(s.end_date, with_time=False),
            "Status": s.status,
        }
        for s in subscriptions
    ]
)
st.dataframe(df, width='stretch', hide_index=True)

st.divider()
st.subheader("Update a subscription")

by_id = {s.id: s for s in subscriptions}
selected_id = st.selectbox(
    "Subscription",
    options=list(by_id.keys()),
    format_func=lambda sid: f"{by_id[sid].store_name} · {by_id[sid].plan} · {by_id[sid].status}",
)
selected = by_id[selected_id]

col_status, col_apply = st.columns([3, 1])
new_status = col_status.selectbox(
    "New status",
    options=[s for s in STATUSES if s != "CANCELLED"],
    key="new_subscription_status",
)
if col_apply.button("Apply"):
    ok, msg = update_subscription_status(ctx.client, selected.id, new_status)
    if ok:
        st.session_state["flash"] = ("success", msg)
        st.rerun()
    else:
        st.error(msg)

cancel_reason = st.text_input("Cancellation reason")
if st.button("Cancel Subscription", disabled=selected.status == "CANCELLED"):
    ok, msg = cancel_subscription(ctx.client, selected.id, cancel_reason)
    if ok:
        st.session_state["flash"] = ("success", msg)
        st.rerun()
    else:
        st.error(msg)
