from app_context import get_context
from domain.routes import LOGIN_PATH, landing_path
from element_component import navigate

ctx = get_context()
principal = ctx.session.current_principal()

if principal is None:
    navigate(LOGIN_PATH)
else:
    navigate(landing_path(principal))
