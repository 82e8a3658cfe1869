# services/subscription_service.py
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple

from api_client import ApiClient, ApiError
from domain.models import AdminStats, Subscription
from utils.validation import validate_subscription

PLANS = {
    "FREE": "Basic access with custom expiration date. No monthly costs.",
    "PRO": "Full featured plan with standard billing cycles (Monthly, Quarterly, Yearly).",
}
BILLING_CYCLES = {
    "FREE": ("CUSTOM",),
    "PRO": ("MONTHLY", "QUARTERLY", "YEARLY"),
}
STATUSES = ("ACTIVE", "SUSPENDED", "EXPIRED", "CANCELLED")
FREE_PLAN_DAYS = 30


def default_end_date(start: date) -> date:
    return start + timedelta(days=FREE_PLAN_DAYS)


def build_subscription_payload(
        store_id: str,
        plan: str,
        billing_cycle: str,
        amount,
        start_date: date,
        end_date: Optional[date] = None,
) -> Dict[str, Any]:
    """
    FREE plans run until an explicit end date; PRO plans renew per billing cycle
    and leave the end date to the server.
    """
    plan = plan.upper()
    if plan not in PLANS:
        raise ValueError(f"Unknown plan: {plan}")
    if billing_cycle not in BILLING_CYCLES[plan]:
        raise ValueError(f"Billing cycle {billing_cycle} is not available for {plan}")

    payload: Dict[str, Any] = {
        "storeId": store_id,
        "plan": plan,
        "billingCycle": billing_cycle,
        "amount": float(amount or 0),
        "startDate": start_date.isoformat(),
    }
    if plan == "FREE":
        payload["endDate"] = (end_date or default_end_date(start_date)).isoformat()
    return payload


def fetch_subscriptions(client: ApiClient) -> Tuple[bool, str, List[Subscription]]:
    try:
        body = client.get("/admin/subscriptions")
    except ApiError as e:
        return False, e.describe("Failed to fetch subscriptions"), []
    return True, "Fetched", [Subscription.from_dict(s) for s in body.get("data") or []]


def create_subscription(
        client: ApiClient,
        store_id: str,
        plan: str,
        billing_cycle: str,
        amount,
        start_date: date,
        end_date: Optional[date] = None,
) -> Tuple[bool, str]:
    ok, msg = validate_subscription(store_id, amount)
    if not ok:
        return ok, msg
    try:
        payload = build_subscription_payload(store_id, plan, billing_cycle, amount, start_date, end_date)
    except ValueError as e:
        return False, str(e)

    try:
        client.post("/admin/subscriptions", json=payload)
    except ApiError as e:
        return False, e.describe("Failed to create subscription")
    return True, "Subscription created successfully"


def update_subscription_status(client: ApiClient, subscription_id: str, status: str) -> Tuple[bool, str]:
    status = status.upper()
    if status not in STATUSES:
        return False, f"Unknown subscription status: {status}"
    try:
        client.patch(f"/admin/subscriptions/{subscription_id}", json={"status": status})
    except ApiError as e:
        return False, e.describe("Failed to update subscription")
    return True, f"Subscription {status.lower()} successfully"


def cancel_subscription(client: ApiClient, subscription_id: str, reason: str) -> Tuple[bool, str]:
    if not (reason or "").strip():
        return False, "A reason is required to cancel a subscription"
    try:
        client.patch(
            f"/admin/subscriptions/{subscription_id}",
            json={"status": "CANCELLED", "cancelReason": reason.strip()},
        )
    except ApiError as e:
        return False, e.describe("Failed to cancel subscription")
    return True, "Subscription cancelled successfully"


def fetch_expiring_soon(client: ApiClient) -> Tuple[bool, str, List[Subscription]]:
    try:
        body = client.get("/admin/subscriptions/expiring-soon")
    except ApiError as e:
        return False, e.describe("Failed to load dashboard data"), []
    return True, "Fetched", [Subscription.from_dict(s) for s in body.get("data") or []]


def fetch_admin_stats(client: ApiClient) -> Tuple[bool, str, Optional[AdminStats]]:
    try:
        body = client.get("/admin/stats")
    except ApiError as e:
        return False, e.describe("Failed to load dashboard data"), None
    return True, "Fetched", AdminStats.from_dict(body.get("data") or {})
