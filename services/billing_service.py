# services/billing_service.py
from typing import Any, List, Optional, Tuple

from api_client import ApiClient, ApiError
from domain.models import Customer, ItemCategory

NOTIFICATION_TYPES = ("SMS", "EMAIL")


# ---------------------------------------------------------------------------
# Bills
# ---------------------------------------------------------------------------

def delete_bill(client: ApiClient, bill_id: str) -> Tuple[bool, str]:
    try:
        client.delete(f"/bills/{bill_id}")
    except ApiError as e:
        return False, e.describe("Failed to delete bill")
    return True, "Bill deleted"


def download_bill_pdf(client: ApiClient, bill_id: str) -> Tuple[bool, str, Optional[bytes]]:
    """
    The PDF is rendered by the server; we only fetch the bytes.
    """
    try:
        content = client.download(f"/bills/{bill_id}/pdf")
    except ApiError as e:
        return False, e.describe("Failed to download bill"), None
    return True, "Downloaded", content


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

def fetch_categories(client: ApiClient, include_inactive: bool = False) -> Tuple[bool, str, List[ItemCategory]]:
    """
    Returns (ok, message, categories)
    """
    try:
        body = client.get("/categories", params={"includeInactive": str(include_inactive).lower()})
    except ApiError as e:
        return False, e.describe("Failed to load categories. Please try again."), []
    return True, "Fetched", [ItemCategory.from_dict(c) for c in body.get("data") or []]


def create_category(client: ApiClient, name: str, price: float, icon: str) -> Tuple[bool, str, Optional[ItemCategory]]:
    try:
        body = client.post("/categories", json={"name": name.strip(), "price": float(price), "icon": icon})
    except ApiError as e:
        return False, e.describe("Failed to add category"), None
    data = body.get("data")
    if not body.get("success") or not data:
        return False, body.get("message") or "Failed to add category", None
    category = ItemCategory.from_dict(data)
    return True, f"{category.name} has been added to your categories.", category


def update_category(client: ApiClient, category_id: str, **changes: Any) -> Tuple[bool, str]:
    """
    changes may contain: name, price, icon, isActive
    """
    try:
        client.put(f"/categories/{category_id}", json=changes)
    except ApiError as e:
        return False, e.describe("Failed to update category")
    return True, "Your category price has been updated."


def delete_category(client: ApiClient, category_id: str) -> Tuple[bool, str]:
    try:
        client.delete(f"/categories/{category_id}")
    except ApiError as e:
        return False, e.describe("Failed to delete category")
    return True, "The category has been removed."


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------

def fetch_customers(client: ApiClient, search: Optional[str] = None) -> Tuple[bool, str, List[Customer]]:
    try:
        body = client.get("/customers", params={"search": search} if search else None)
    except ApiError as e:
        return False, e.describe("Failed to load customers"), []
    return True, "Fetched", [Customer.from_dict(c) for c in body.get("data") or []]


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

def send_bill_notification(client: ApiClient, bill_id: str, channel: str) -> Tuple[bool, str]:
    channel = channel.upper()
    if channel not in NOTIFICATION_TYPES:
        return False, f"Unsupported notification type: {channel}"
    try:
        body = client.post(f"/notifications/bills/{bill_id}/send", json={"type": channel})
    except ApiError as e:
        return False, e.describe("Failed to send notification")
    return True, body.get("message") or f"{channel} notification sent"


def fetch_notification_history(client: ApiClient, bill_id: Optional[str] = None) -> Tuple[bool, str, List[dict]]:
    try:
        body = client.get("/notifications/history", params={"billId": bill_id} if bill_id else None)
    except ApiError as e:
        return False, e.describe("Failed to load notification history"), []
    return True, "Fetched", list(body.get("data") or [])
