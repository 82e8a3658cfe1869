# services/session_store.py
import json
import logging
from typing import Optional

from api_client import ApiError
from config import SESSION_KEY
from domain.models import Principal, Session, Store

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Login failed. Please check your credentials."


class SessionStore:
    """
    Owns the authenticated session and its durable copy in `storage`.

    The persisted blob is restored when the store is built; a missing or
    unreadable blob leaves the store logged out.
    """

    def __init__(self, storage, client=None, key: str = SESSION_KEY):
        self.storage = storage
        self.client = client
        self.key = key
        self.last_error: Optional[str] = None
        self._session: Optional[Session] = self._restore()

    def _restore(self) -> Optional[Session]:
        raw = self.storage.get(self.key)
        if not raw:
            return None
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            session = Session.from_dict(data)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable session blob: %s", e)
            return None
        if not session.access_token:
            return None
        return session

    def _persist(self) -> None:
        self.storage.set(self.key, json.dumps(self._session.to_dict()))

    # -----------------------------------------------------------------
    # Read side
    # -----------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None and bool(self._session.access_token)

    def current_principal(self) -> Optional[Principal]:
        return self._session.principal if self.is_authenticated else None

    def current_store(self) -> Optional[Store]:
        return self._session.store if self.is_authenticated else None

    @property
    def access_token(self) -> Optional[str]:
        return self._session.access_token if self._session else None

    @property
    def refresh_token(self) -> Optional[str]:
        return self._session.refresh_token if self._session else None

    # -----------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------

    def login(self, email: str, password: str) -> bool:
        self.last_error = None
        try:
            body = self.client.post(
                "/auth/login",
                json={"email": email, "password": password},
                auth=False,
            )
        except ApiError as e:
            self.last_error = e.describe(LOGIN_FAILED)
            logger.warning("Login failed for %s: %s", email, e)
            return False

        if not isinstance(body, dict) or not body.get("success"):
            self.last_error = LOGIN_FAILED
            return False

        data = body.get("data")
        try:
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            session = Session.from_dict(data)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Login response could not be parsed: %s", e)
            self.last_error = LOGIN_FAILED
            return False

        self._session = session
        self._persist()
        logger.info("Logged in as %s (%s)", session.principal.email, session.principal.role.value)
        return True

    def logout(self) -> None:
        if self.is_authenticated and self.client is not None:
            try:
                self.client.post("/auth/logout")
            except ApiError as e:
                # the local session is dropped regardless
                logger.warning("Server logout failed: %s", e)
        self.clear()

    def clear(self) -> None:
        self._session = None
        self.storage.remove(self.key)

    # -----------------------------------------------------------------
    # In-place updates
    # -----------------------------------------------------------------

    def replace_tokens(self, access_token: str, refresh_token: Optional[str]) -> None:
        if self._session is None:
            return
        self._session.access_token = access_token
        self._session.refresh_token = refresh_token
        self._persist()

    def update_store(self, is_active: bool, deactivation_reason: Optional[str]) -> None:
        if self._session is None or self._session.store is None:
            return
        self._session.store.is_active = is_active
        self._session.store.deactivation_reason = deactivation_reason
        self._persist()

    def update_principal_name(self, name: str) -> None:
        if self._session is None:
            return
        self._session.principal.name = name
        self._persist()
