import pandas as pd
import streamlit as st

from app_context import get_context
from domain.models import Role
from element_component import bill_card, navigate
from services.subscription_service import fetch_admin_stats, fetch_expiring_soon
from utils.formatting import format_rupee, format_timestamp

ctx = get_context()
principal = ctx.session.current_principal()

RECENT_BILLS = 4


def render_super_admin_dashboard():
    st.title("📊 Super Admin Dashboard")

    ok_stats, msg_stats, stats = fetch_admin_stats(ctx.client)
    ok_exp, msg_exp, expiring = fetch_expiring_soon(ctx.client)
    if not ok_stats or not ok_exp:
        st.error("Failed to load dashboard data")

    if stats is not None:
        col1, col2, col3, col4 = st.columns(4)
        col1.metric("Total Stores", stats.total_stores)
        col2.metric("Active Stores", stats.active_stores)
        col3.metric("Pending Approval", stats.pending_approval)
        col4.metric("Inactive Stores", stats.inactive_stores)

        col5, col6, col7, col8 = st.columns(4)
        col5.metric("Subscriptions", stats.total_subscriptions)
        col6.metric("Active Subscriptions", stats.active_subscriptions)
        col7.metric("Expiring Soon", stats.expiring_soon)
        col8.metric("Total Revenue", format_rupee(stats.total_revenue))

    st.divider()
    st.subheader("Subscriptions expiring soon")

    if not expiring:
        st.info("No subscriptions are expiring soon.")
    else:
        df = pd.DataFrame(
            [
                {
                    "Store": s.store_name,
                    "Plan": s.plan,
                    "Status": s.status,
                    "Renewal": format_timestamp(s.end_date, with_time=False),
                    "Days Left": s.days_until_renewal,
                    "Amount": format_rupee(s.amount),
                }
                for s in expiring
            ]
        )
        st.dataframe(df, width='stretch', hide_index=True)

    col_a, col_b = st.columns(2)
    if col_a.button("Manage Stores"):
        navigate("/stores-management")
    if col_b.button("Manage Subscriptions"):
        navigate("/subscriptions")


def render_store_dashboard():
    st.title("📊 Dashboard")

    stats = ctx.bills.stats()

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Bills", stats.total_bills if stats else 0)
    col2.metric("Pending", stats.pending_bills if stats else 0)
    col3.metric("Completed", stats.completed_bills if stats else 0)
    col4.metric("Today's Revenue", format_rupee(stats.today_revenue if stats else 0))

    st.metric("📈 Weekly Revenue", format_rupee(stats.weekly_revenue if stats else 0))

    st.divider()
    col_title, col_all, col_refresh = st.columns([3, 1, 1])
    col_title.subheader("Recent Bills")
    if col_all.button("View All"):
        navigate("/bills")
    if col_refresh.button("🔄 Refresh"):
        ctx.bills.refresh()
        st.rerun()

    recent = ctx.bills.list()[:RECENT_BILLS]
    if not recent:
        st.info("No bills yet")
        if st.button("Create First Bill", type="primary"):
            navigate("/new-bill")
        return

    for bill in recent:
        bill_card(ctx, bill, key_prefix="dash")


if principal.role is Role.SUPER_ADMIN:
    render_super_admin_dashboard()
elif principal.role is Role.ADMIN:
    render_store_dashboard()
else:
    st.warning("The dashboard is not available for your role.")
