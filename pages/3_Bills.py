import streamlit as st

from app_context import get_context
from element_component import bill_card, navigate
from utils.billing import STATUS_FILTERS, bills_frame, filter_bills

ctx = get_context()

st.title("🧾 All Bills")

# -----------------------------------------------------------------------------
# Search + filters
# -----------------------------------------------------------------------------
col_search, col_status, col_new = st.columns([3, 2, 1])
search = col_search.text_input("Search", placeholder="Search by name, phone, or bill ID...")
status = col_status.radio(
    "Status",
    options=STATUS_FILTERS,
    format_func=str.title,
    horizontal=True,
)
if col_new.button("➕ New Bill"):
    navigate("/new-bill")

if st.button("🔄 Refresh"):
    ctx.bills.refresh()

bills = ctx.bills.list()

if ctx.bills.loading and not bills:
    st.info("Loading bills...")
    st.stop()

filtered = filter_bills(bills, search, status)

if not filtered:
    st.warning("No bills found")
    if search:
        st.caption("Try adjusting your search terms")
    else:
        st.caption("Create your first bill to get started")
        if st.button("Create Bill", type="primary"):
            navigate("/new-bill")
    st.stop()

# -----------------------------------------------------------------------------
# List + export
# -----------------------------------------------------------------------------
tab_cards, tab_table = st.tabs(["Cards", "Table"])

with tab_cards:
    for bill in filtered:
        bill_card(ctx, bill, key_prefix="list")

with tab_table:
    df = bills_frame(filtered)
    st.dataframe(df, width='stretch', hide_index=True)

    csv = df.to_csv(index=False).encode("utf-8")
    st.download_button(
        "Download as CSV",
        data=csv,
        file_name="bills.csv",
        mime="text/csv",
    )
