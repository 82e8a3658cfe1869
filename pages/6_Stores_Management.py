import streamlit as st

from app_context import get_context
from services.store_service import (
    STORE_FILTERS,
    approve_store,
    fetch_stores,
    filter_stores,
    reject_store,
    toggle_store_status,
)
from utils.formatting import format_timestamp

ctx = get_context()

st.title("🏬 Stores Management")


def apply(result):
    ok, msg = result
    if ok:
        st.session_state["flash"] = ("success", msg)
        st.rerun()
    else:
        st.error(msg)


ok, msg, stores = fetch_stores(ctx.client)
if not ok:
    st.error(msg)
    st.stop()

col_search, col_filter = st.columns([3, 2])
search = col_search.text_input("Search", placeholder="Search by name, email, or phone...")
status = col_filter.radio("Show", options=STORE_FILTERS, format_func=str.title, horizontal=True)

pending = sum(1 for s in stores if not s.is_approved)
col_total, col_pending, col_active = st.columns(3)
col_total.metric("Total Stores", len(stores))
col_pending.metric("Pending Approval", pending)
col_active.metric("Active", sum(1 for s in stores if s.is_active))

filtered = filter_stores(stores, search, status)
if not filtered:
    st.info("No stores found")
    st.stop()

for store in filtered:
    with st.container(border=True):
        col_info, col_badge = st.columns([3, 1])
        with col_info:
            st.markdown(f"**{store.name}**")
            st.caption(f"✉️ {store.email} · 📞 {store.phone}")
            location = ", ".join(p for p in (store.address, store.city, store.state, store.pincode) if p)
            if location:
                st.caption(f"📍 {location}")
            if store.gst_number:
                st.caption(f"GST: {store.gst_number}")
            st.caption(f"📅 Registered {format_timestamp(store.created_at, with_time=False)}")
        with col_badge:
            if not store.is_approved:
                st.markdown("🟡 Pending")
            elif store.is_active:
                st.markdown("🟢 Active")
            else:
                st.markdown("🔴 Inactive")

        if store.counts:
            st.caption(
                " · ".join(f"{name.title()}: {count}" for name, count in store.counts.items())
            )
        if not store.is_active and store.deactivation_reason:
            st.warning(f"Deactivation reason: {store.deactivation_reason}")

        if not store.is_approved:
            col_approve, col_reject = st.columns(2)
            if col_approve.button("✅ Approve", key=f"approve_{store.id}"):
                apply(approve_store(ctx.client, store.id))
            if col_reject.button("❌ Reject", key=f"reject_{store.id}"):
                apply(reject_store(ctx.client, store.id))
        elif store.is_active:
            reason = st.text_input("Reason for deactivation", key=f"reason_{store.id}")
            if st.button("⏻ Deactivate", key=f"toggle_{store.id}"):
                apply(toggle_store_status(ctx.client, store.id, True, reason))
        else:
            if st.button("⏻ Activate", key=f"toggle_{store.id}"):
                apply(toggle_store_status(ctx.client, store.id, False))
