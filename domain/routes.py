# ironpress/domain/routes.py

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from domain.authorization import Decision, authorize, store_blocks
from domain.models import Principal, Role, Store

ALL_ROLES = (Role.SUPER_ADMIN, Role.ADMIN, Role.EMPLOYEE)

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"
DEACTIVATED_PATH = "/store-deactivated"
BILLS_PATH = "/bills"


@dataclass(frozen=True)
class Route:
    path: str  # e.g. "/bills/:id"
    page: str  # streamlit script, relative to the entry point
    title: str
    icon: str
    url_path: str  # streamlit url segment; "" for the default page
    roles: Tuple[Role, ...] = ()
    public: bool = False
    in_nav: bool = False

    def match(self, path: str) -> Optional[Dict[str, str]]:
        """
        Return the path parameters when `path` matches this route, else None.
        """
        want = [p for p in self.path.split("/") if p]
        got = [p for p in path.split("?")[0].split("/") if p]
        if len(want) != len(got):
            return None

        params: Dict[str, str] = {}
        for w, g in zip(want, got):
            if w.startswith(":"):
                params[w[1:]] = g
            elif w != g:
                return None
        return params


# Order matters: it is the sidebar order.
ROUTES: List[Route] = [
    Route("/", "pages/0_Index.py", "IronPress", "👔", "", public=True),
    Route(LOGIN_PATH, "pages/0_Login.py", "Login", "🔐", "login", public=True),
    Route("/register", "pages/0_Register_Store.py", "Register Store", "🏪", "register", public=True),
    Route(DASHBOARD_PATH, "pages/1_Dashboard.py", "Dashboard", "📊", "dashboard",
          roles=(Role.SUPER_ADMIN, Role.ADMIN), in_nav=True),
    Route("/stores-management", "pages/6_Stores_Management.py", "Stores Management", "🏬",
          "stores-management", roles=(Role.SUPER_ADMIN,), in_nav=True),
    Route("/subscriptions", "pages/7_Subscriptions.py", "Subscriptions", "💳", "subscriptions",
          roles=(Role.SUPER_ADMIN,), in_nav=True),
    Route("/employees", "pages/8_Employees.py", "Employee Management", "👥", "employees",
          roles=(Role.ADMIN,), in_nav=True),
    Route("/new-bill", "pages/2_New_Bill.py", "New Bill", "➕", "new-bill",
          roles=(Role.ADMIN, Role.EMPLOYEE), in_nav=True),
    Route(BILLS_PATH, "pages/3_Bills.py", "All Bills", "🧾", "bills",
          roles=(Role.ADMIN, Role.EMPLOYEE), in_nav=True),
    Route("/bills/:id", "pages/4_Bill_Details.py", "Bill Details", "🧾", "bill-details",
          roles=(Role.ADMIN, Role.EMPLOYEE)),
    Route("/settings", "pages/5_Settings.py", "Settings", "⚙️", "settings",
          roles=ALL_ROLES, in_nav=True),
    Route(DEACTIVATED_PATH, "pages/9_Store_Deactivated.py", "Store Deactivated", "⛔",
          "store-deactivated", public=True),
]

NOT_FOUND = Route("*", "pages/99_Not_Found.py", "Not Found", "❓", "not-found", public=True)

REDIRECTS = {
    Decision.REDIRECT_LOGIN: LOGIN_PATH,
    Decision.REDIRECT_DEACTIVATED: DEACTIVATED_PATH,
    Decision.REDIRECT_DASHBOARD: DASHBOARD_PATH,
}


def find_route(path: str) -> Tuple[Route, Dict[str, str]]:
    """
    Resolve a client path to its route and path parameters.
    Unknown paths resolve to the catch-all NOT_FOUND route.
    """
    for route in ROUTES:
        params = route.match(path)
        if params is not None:
            return route, params
    return NOT_FOUND, {}


def route_for_url_path(url_path: str) -> Route:
    for route in ROUTES + [NOT_FOUND]:
        if route.url_path == url_path:
            return route
    return NOT_FOUND


def landing_path(principal: Principal) -> str:
    """
    First page a principal should see after login.
    """
    if principal.role in (Role.SUPER_ADMIN, Role.ADMIN):
        return DASHBOARD_PATH
    if principal.role is Role.EMPLOYEE:
        # employees are not allowed on the dashboard
        return BILLS_PATH
    raise ValueError(f"Unhandled role: {principal.role!r}")


def redirect_for(route: Route, principal: Optional[Principal], store: Optional[Store]) -> Optional[str]:
    """
    Path to redirect to before rendering `route`, or None to render it.
    """
    if route.public:
        return None

    decision = authorize(principal, store, route.roles)
    if decision is Decision.ALLOW:
        return None

    target = REDIRECTS[decision]
    if target == DASHBOARD_PATH and principal is not None and route.path == DASHBOARD_PATH:
        # the dashboard itself refused this role; send it home instead of looping
        return landing_path(principal)
    return target


def navigation_for(principal: Optional[Principal], store: Optional[Store]) -> List[Route]:
    """
    Sidebar entries for the principal. Nothing is listed while its store is deactivated.
    """
    if principal is None or store_blocks(principal, store):
        return []
    return [r for r in ROUTES if r.in_nav and principal.role in r.roles]
