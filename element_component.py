from typing import Callable, Dict, Optional, Tuple

import pandas as pd
import streamlit as st

from app_context import AppContext
from domain.models import Bill, Role
from domain.routes import find_route, navigation_for
from utils.formatting import format_rupee, format_timestamp

BILL_ID_KEY = "selected_bill_id"


def flash(kind: str, message: str) -> None:
    """
    Queue a message for the next page render (survives st.switch_page).
    """
    st.session_state["flash"] = (kind, message)


def show_flash() -> None:
    item = st.session_state.pop("flash", None)
    if not item:
        return
    kind, message = item
    if kind == "error":
        st.error(message)
    elif kind == "warning":
        st.warning(message)
    else:
        st.success(message)


def navigate(path: str) -> None:
    route, params = find_route(path)
    if "id" in params:
        st.session_state[BILL_ID_KEY] = params["id"]
    st.switch_page(route.page)


def render_sidebar(ctx: AppContext) -> None:
    principal = ctx.session.current_principal()
    if principal is None:
        return

    with st.sidebar:
        st.header("👔 IronPress")
        st.caption("Super Admin Panel" if principal.role is Role.SUPER_ADMIN else "Billing System")

        for route in navigation_for(principal, ctx.session.current_store()):
            st.page_link(route.page, label=route.title, icon=route.icon)

        st.divider()
        st.markdown(f"**{principal.name or 'Admin'}**")
        st.caption(principal.email)
        st.caption(principal.role.label)

        if st.button("🚪 Logout", key="sidebar_logout"):
            ctx.logout()
            flash("success", "Logged out successfully")
            navigate("/login")


@st.dialog("Confirm")
def confirmation_dialog(
        summary: Dict[str, object],
        action: Callable[[], Tuple[bool, str]],
        state_name: str,
        confirm_label: str = "Yes",
):
    df = pd.DataFrame(list(summary.items()), columns=["Key", "Value"])
    df["Value"] = df["Value"].astype("string")
    st.dataframe(df, hide_index=True)

    col_yes, col_no = st.columns(2)

    with col_yes:
        if st.button(confirm_label, type="primary", key="confirm_yes"):
            status, msg = action()
            st.session_state[state_name] = status

            if not status:
                st.error(msg)
            else:
                st.rerun()
    with col_no:
        if st.button("Cancel", key="confirm_no"):
            st.rerun()


def bill_card(ctx: AppContext, bill: Bill, key_prefix: str, on_done: Optional[str] = None) -> None:
    """
    Compact bill summary with "Complete" and "View" actions.
    """
    with st.container(border=True):
        col_head, col_status = st.columns([3, 1])
        with col_head:
            st.markdown(f"**{bill.bill_number}** · {bill.customer.name}")
            st.caption(f"{bill.customer.phone} · {format_timestamp(bill.created_at)}")
        with col_status:
            st.markdown("🕒 Pending" if bill.is_pending else "✅ Completed")

        for item in bill.items[:3]:
            st.caption(f"{item.quantity}x {item.category_name}")
        if len(bill.items) > 3:
            st.caption(f"+{len(bill.items) - 3} more items")

        col_total, col_complete, col_view = st.columns([2, 1, 1])
        col_total.markdown(f"**{format_rupee(bill.total_amount)}**")

        if bill.is_pending and col_complete.button("Complete", key=f"{key_prefix}_complete_{bill.id}"):
            ok, msg = ctx.bills.mark_completed(bill.id)
            if ok:
                flash("success", "Bill completed! Customer notification will be sent.")
                if on_done:
                    navigate(on_done)
                st.rerun()
            else:
                st.error(msg)

        if col_view.button("View", key=f"{key_prefix}_view_{bill.id}"):
            navigate(f"/bills/{bill.id}")
