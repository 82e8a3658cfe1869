import streamlit as st

from app_context import get_context, keep_browser_id
from domain.routes import NOT_FOUND, ROUTES, redirect_for, route_for_url_path
from element_component import navigate, render_sidebar, show_flash

st.set_page_config(
    page_title="IronPress Billing",
    page_icon="👔",
)

ctx = get_context()
keep_browser_id(ctx)

pages = [
    st.Page(route.page, title=route.title, icon=route.icon, url_path=route.url_path or None, default=route.path == "/")
    for route in ROUTES + [NOT_FOUND]
]
selected = st.navigation(pages, position="hidden")

# -----------------------------------------------------------------------------
# Access gate, evaluated on every rerun (store status may have changed)
# -----------------------------------------------------------------------------
route = route_for_url_path(selected.url_path)
target = redirect_for(route, ctx.session.current_principal(), ctx.session.current_store())
if target is not None:
    navigate(target)

ctx.bills.ensure_loaded()

render_sidebar(ctx)
show_flash()

selected.run()
