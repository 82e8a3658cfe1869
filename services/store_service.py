# services/store_service.py
from typing import Any, Dict, Iterable, List, Optional, Tuple

from api_client import ApiClient, ApiError
from domain.models import StoreRecord, StoreSettings
from utils.validation import validate_deactivation_reason

STORE_FILTERS = ("all", "pending", "approved")

REGISTRATION_FIELDS = (
    "storeName", "storeEmail", "storePhone", "address", "city", "state",
    "pincode", "gstNumber", "adminName", "adminEmail", "password",
)


def register_store(client: ApiClient, form: Dict[str, Any]) -> Tuple[bool, str]:
    """
    Public sign-up. The store stays inactive until a super admin approves it.
    """
    payload = {k: (form.get(k) or "").strip() for k in REGISTRATION_FIELDS}
    payload["password"] = form.get("password") or ""
    try:
        body = client.post("/stores/register", json=payload, auth=False)
    except ApiError as e:
        return False, e.describe("Something went wrong")
    return True, body.get("message") or "Your store registration is pending approval."


# ---------------------------------------------------------------------------
# Own store (ADMIN / EMPLOYEE)
# ---------------------------------------------------------------------------

def fetch_my_store_settings(client: ApiClient, session=None) -> Tuple[bool, str, Optional[StoreSettings]]:
    """
    Reads the store settings and, when `session` is given, refreshes the
    session's store snapshot so the access gate sees the current status.
    """
    try:
        body = client.get("/stores/settings/my-store")
    except ApiError as e:
        return False, e.describe("Failed to fetch store settings"), None

    settings = StoreSettings.from_dict(body.get("data") or {})
    if session is not None:
        session.update_store(settings.is_active, settings.deactivation_reason)
    return True, "Fetched", settings


# channel -> (settings flag, label)
NOTIFICATION_FLAGS = {
    "email": ("emailNotificationsEnabled", "Email"),
    "sms": ("smsNotificationsEnabled", "SMS"),
    "whatsapp": ("whatsappNotificationsEnabled", "WhatsApp"),
}


def set_notification_channel(client: ApiClient, channel: str, enabled: bool) -> Tuple[bool, str]:
    if channel not in NOTIFICATION_FLAGS:
        return False, f"Unknown notification channel: {channel}"
    flag, label = NOTIFICATION_FLAGS[channel]
    try:
        client.put("/stores/settings/my-store", json={flag: enabled})
    except ApiError as e:
        return False, e.describe("Failed to update settings")
    return True, f"{label} notifications {'enabled' if enabled else 'disabled'}"


# ---------------------------------------------------------------------------
# Super admin
# ---------------------------------------------------------------------------

def fetch_stores(client: ApiClient) -> Tuple[bool, str, List[StoreRecord]]:
    try:
        body = client.get("/stores")
    except ApiError as e:
        return False, e.describe("Failed to fetch stores"), []
    return True, "Fetched", [StoreRecord.from_dict(s) for s in body.get("data") or []]


def approve_store(client: ApiClient, store_id: str) -> Tuple[bool, str]:
    try:
        client.post(f"/stores/{store_id}/approve")
    except ApiError as e:
        return False, e.describe("Failed to approve store")
    return True, "Store has been approved and activated"


def reject_store(client: ApiClient, store_id: str) -> Tuple[bool, str]:
    try:
        client.post(f"/stores/{store_id}/reject")
    except ApiError as e:
        return False, e.describe("Failed to reject store")
    return True, "Store has been rejected and deleted"


def toggle_store_status(
        client: ApiClient,
        store_id: str,
        currently_active: bool,
        reason: Optional[str] = None,
) -> Tuple[bool, str]:
    """
    Deactivating needs a reason; activating does not.
    """
    if currently_active:
        ok, msg = validate_deactivation_reason(reason)
        if not ok:
            return ok, msg

    try:
        client.post(f"/stores/{store_id}/toggle-status", json={"reason": (reason or "").strip() or None})
    except ApiError as e:
        return False, e.describe("Failed to update status")
    return True, f"Store has been {'deactivated' if currently_active else 'activated'} successfully"


def filter_stores(stores: Iterable[StoreRecord], search: str = "", status: str = "all") -> List[StoreRecord]:
    """
    status: "all", "pending" (not yet approved) or "approved".
    search matches name or email (case-insensitive) or phone.
    """
    result = list(stores)
    if status == "pending":
        result = [s for s in result if not s.is_approved]
    elif status == "approved":
        result = [s for s in result if s.is_approved]

    term = (search or "").strip()
    if term:
        low = term.lower()
        result = [
            s for s in result
            if low in s.name.lower() or low in s.email.lower() or term in s.phone
        ]
    return result
