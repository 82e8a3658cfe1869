# IronPress test suite - shared fixtures
#
# - FakeResponse / FakeHttp: a scripted stand-in for requests.Session
# - in-memory session storage and a ready-made AppContext
# - login payloads for every role

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import pytest
import requests

from app_context import AppContext
from config import Settings
from domain.models import Principal, Role, Store
from services.session_storage import MemorySessionStorage

BASE_URL = "http://api.test/api/v1"


# =============================================================================
# HTTP FAKES
# =============================================================================

class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, content: Optional[bytes] = None):
        self.status_code = status_code
        self._body = body
        if content is not None:
            self.content = content
        elif body is None:
            self.content = b""
        else:
            self.content = json.dumps(body).encode("utf-8")

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


def ok(data: Any = None, message: Optional[str] = None) -> FakeResponse:
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    return FakeResponse(200, body)


def fail(status_code: int, message: str) -> FakeResponse:
    return FakeResponse(status_code, {"success": False, "message": message})


@dataclass
class Call:
    method: str
    path: str
    params: Optional[Dict[str, Any]]
    json: Any
    headers: Dict[str, str]

    @property
    def token(self) -> Optional[str]:
        auth = self.headers.get("Authorization")
        return auth[len("Bearer "):] if auth else None


class FakeHttp:
    """
    Answers (method, path) pairs from a script.

    Each scripted entry is a FakeResponse, an exception to raise, or a
    callable taking the Call. Entries are consumed in order; the last one
    keeps answering.
    """

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url
        self.script: Dict[tuple, List[Any]] = {}
        self.calls: List[Call] = []

    def on(self, method: str, path: str, *answers) -> "FakeHttp":
        self.script.setdefault((method, path), []).extend(answers)
        return self

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        path = url[len(self.base_url):]
        call = Call(method, path, params, json, dict(headers or {}))
        self.calls.append(call)

        answers = self.script.get((method, path))
        if not answers:
            raise AssertionError(f"Unexpected request {method} {path}")
        answer = answers.pop(0) if len(answers) > 1 else answers[0]

        if isinstance(answer, Exception):
            raise answer
        if callable(answer):
            return answer(call)
        return answer

    def post(self, url, **kwargs):
        return self.request("POST", url, **kwargs)

    def calls_to(self, method: str, path: str) -> List[Call]:
        return [c for c in self.calls if c.method == method and c.path == path]


# =============================================================================
# PAYLOADS
# =============================================================================

def session_payload(
        role: str = "ADMIN",
        email: str = "admin@shop.com",
        store_active: Optional[bool] = True,
        access_token: str = "access-1",
        refresh_token: str = "refresh-1",
        user_id: str = "u1",
) -> Dict[str, Any]:
    store = None
    if store_active is not None:
        store = {"id": "s1", "name": "Sunrise Laundry", "isActive": store_active}
        if not store_active:
            store["deactivationReason"] = "Payment overdue"
    return {
        "user": {
            "id": user_id,
            "name": "Asha",
            "email": email,
            "role": role,
            "storeId": "s1" if store else None,
        },
        "store": store,
        "accessToken": access_token,
        "refreshToken": refresh_token,
    }


def bill_payload(bill_id: str = "b1", status: str = "PENDING", name: str = "Ravi", phone: str = "9876543210"):
    return {
        "id": bill_id,
        "billNumber": f"BILL-{bill_id.upper()}",
        "customer": {"id": "c1", "name": name, "phone": phone},
        "items": [
            {"categoryId": "shirt", "categoryName": "Shirt", "quantity": 2, "price": 15, "subtotal": 30},
            {"categoryId": "pants", "categoryName": "Pants", "quantity": 1, "price": 20, "subtotal": 20},
        ],
        "totalAmount": 50,
        "status": status,
        "createdAt": "2026-10-19T09:30:00.000Z",
    }


STATS = {"totalBills": 1, "pendingBills": 1, "completedBills": 0, "todayRevenue": 50, "weeklyRevenue": 50}


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def storage():
    return MemorySessionStorage()


@pytest.fixture
def settings():
    return Settings(api_url=BASE_URL, session_storage="memory")


@pytest.fixture
def expired_hook():
    calls = []
    hook: Callable[[], None] = lambda: calls.append(True)
    hook.calls = calls
    return hook


@pytest.fixture
def make_ctx(settings, storage, http, expired_hook):
    def _make(session: Optional[Dict[str, Any]] = None) -> AppContext:
        if session is not None:
            storage.set("ironing_shop_user", json.dumps(session))
        return AppContext.build(settings, storage=storage, http=http, on_auth_failure=expired_hook)
    return _make


@pytest.fixture
def ctx(make_ctx):
    """Context logged in as a store admin."""
    return make_ctx(session_payload())


@pytest.fixture
def admin():
    return Principal(id="u1", name="Asha", email="admin@shop.com", role=Role.ADMIN, store_id="s1")


@pytest.fixture
def employee():
    return Principal(id="u2", name="Ben", email="ben@shop.com", role=Role.EMPLOYEE, store_id="s1")


@pytest.fixture
def super_admin():
    return Principal(id="u0", name="Root", email="root@ironpress.in", role=Role.SUPER_ADMIN)


@pytest.fixture
def active_store():
    return Store(id="s1", name="Sunrise Laundry", is_active=True)


@pytest.fixture
def inactive_store():
    return Store(id="s1", name="Sunrise Laundry", is_active=False, deactivation_reason="Payment overdue")
