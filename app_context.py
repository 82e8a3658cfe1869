# app_context.py
import logging
import re
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

import requests
import streamlit as st

from api_client import ApiClient
from config import SESSION_KEY, Settings, configure_logging, load_settings
from domain.routes import LOGIN_PATH, find_route
from services.bill_store import BillStore
from services.session_storage import FileSessionStorage, MemorySessionStorage
from services.session_store import SessionStore

logger = logging.getLogger(__name__)

CONTEXT_KEY = "app_context"
BROWSER_PARAM = "sid"
BROWSER_ID_RE = re.compile(r"^[0-9a-f]{32}$")


@dataclass
class AppContext:
    """
    Everything a page needs, built once per browser session and handed down.
    """
    settings: Settings
    session: SessionStore
    client: ApiClient
    bills: BillStore
    browser_id: Optional[str] = None

    @classmethod
    def build(
            cls,
            settings: Settings,
            storage=None,
            http: Optional[requests.Session] = None,
            on_auth_failure: Optional[Callable[[], None]] = None,
            browser_id: Optional[str] = None,
    ) -> "AppContext":
        """
        File storage is shared by every browser talking to this server, so
        each browser gets its own blob, keyed by `browser_id`.
        """
        key = SESSION_KEY
        if storage is None:
            if settings.session_storage == "memory":
                storage = MemorySessionStorage()
            else:
                storage = FileSessionStorage(settings.session_dir)
        if settings.session_storage == "file":
            browser_id = browser_id or uuid.uuid4().hex
            key = f"{SESSION_KEY}_{browser_id}"

        session = SessionStore(storage, key=key)
        client = ApiClient(
            settings.api_url,
            session,
            http=http,
            timeout=settings.request_timeout,
            on_auth_failure=on_auth_failure,
        )
        session.client = client
        return cls(
            settings=settings,
            session=session,
            client=client,
            bills=BillStore(client, session),
            browser_id=browser_id if settings.session_storage == "file" else None,
        )

    def logout(self) -> None:
        self.session.logout()
        self.bills.reset()


def get_context() -> AppContext:
    """
    The AppContext of the current Streamlit session, created on first use.
    """
    if CONTEXT_KEY not in st.session_state:
        settings = load_settings()
        configure_logging(settings.log_level)
        st.session_state[CONTEXT_KEY] = AppContext.build(
            settings,
            on_auth_failure=_go_to_login,
            browser_id=_browser_id(),
        )
        logger.info("Session context created (api=%s)", settings.api_url)
    return st.session_state[CONTEXT_KEY]


def _go_to_login() -> None:
    st.session_state["flash"] = ("error", "Your session has expired. Please log in again.")
    st.switch_page(find_route(LOGIN_PATH)[0].page)


def _browser_id() -> Optional[str]:
    """
    The browser's id from the `sid` query parameter, when it carries a valid one.
    Anything else is ignored and a fresh id is issued.
    """
    value = st.query_params.get(BROWSER_PARAM)
    if value and BROWSER_ID_RE.match(value):
        return value
    return None


def keep_browser_id(ctx: AppContext) -> None:
    """
    Put the browser id back in the URL so a reload restores the same session.
    """
    if ctx.browser_id and st.query_params.get(BROWSER_PARAM) != ctx.browser_id:
        st.query_params[BROWSER_PARAM] = ctx.browser_id
