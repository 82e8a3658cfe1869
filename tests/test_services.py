"""
Endpoint wrappers: request shapes, (ok, message) results and message fallbacks.
"""

from datetime import date

import pytest

from conftest import FakeResponse, fail, ok
from services.auth_service import change_password, fetch_profile, update_profile
from services.billing_service import (
    create_category,
    delete_bill,
    delete_category,
    download_bill_pdf,
    fetch_categories,
    fetch_customers,
    fetch_notification_history,
    send_bill_notification,
    update_category,
)
from services.employee_service import create_employee, delete_employee, fetch_employees, toggle_employee_status
from services.store_service import (
    approve_store,
    fetch_my_store_settings,
    fetch_stores,
    filter_stores,
    register_store,
    set_notification_channel,
    toggle_store_status,
)
from services.subscription_service import (
    build_subscription_payload,
    cancel_subscription,
    create_subscription,
    fetch_admin_stats,
    fetch_expiring_soon,
    update_subscription_status,
)

STORES = [
    {"id": "s1", "name": "Sunrise Laundry", "email": "hello@sunrise.in", "phone": "9876543210",
     "isApproved": True, "isActive": True, "_count": {"users": 3, "bills": 120}},
    {"id": "s2", "name": "Press Point", "email": "owner@presspoint.in", "phone": "9123456780",
     "isApproved": False, "isActive": False},
]


class TestBilling:

    def test_fetch_categories(self, ctx, http):
        http.on("GET", "/categories", ok([{"id": "shirt", "name": "Shirt", "price": "15.00"}]))
        ok_, _, categories = fetch_categories(ctx.client, include_inactive=True)
        assert ok_
        assert http.calls[0].params == {"includeInactive": "true"}
        assert categories[0].price == 15
        assert categories[0].icon == "👕"

    def test_create_category(self, ctx, http):
        http.on("POST", "/categories", ok({"id": "c9", "name": "Blazer", "price": 80, "icon": "🧥"}))
        ok_, msg, category = create_category(ctx.client, " Blazer ", "80", "🧥")
        assert ok_
        assert http.calls[0].json == {"name": "Blazer", "price": 80.0, "icon": "🧥"}
        assert msg == "Blazer has been added to your categories."
        assert category.id == "c9"

    def test_update_and_delete_category(self, ctx, http):
        http.on("PUT", "/categories/c1", ok())
        http.on("DELETE", "/categories/c1", fail(409, "Category is used by existing bills"))
        assert update_category(ctx.client, "c1", price=18.0)[0]
        assert http.calls[0].json == {"price": 18.0}
        assert delete_category(ctx.client, "c1") == (False, "Category is used by existing bills")

    def test_download_pdf(self, ctx, http):
        http.on("GET", "/bills/b1/pdf", FakeResponse(200, content=b"%PDF"))
        assert download_bill_pdf(ctx.client, "b1") == (True, "Downloaded", b"%PDF")

    def test_notification_channels(self, ctx, http):
        http.on("POST", "/notifications/bills/b1/send", ok(message="SMS sent to 9876543210"))
        assert send_bill_notification(ctx.client, "b1", "sms") == (True, "SMS sent to 9876543210")
        assert http.calls[0].json == {"type": "SMS"}
        assert send_bill_notification(ctx.client, "b1", "pigeon")[0] is False
        assert len(http.calls) == 1

    def test_delete_bill(self, ctx, http):
        http.on("DELETE", "/bills/b1", fail(403, "Only admins can delete bills"))
        assert delete_bill(ctx.client, "b1") == (False, "Only admins can delete bills")

    def test_customer_lookup(self, ctx, http):
        http.on("GET", "/customers", ok([{"id": "c1", "name": "Ravi", "phone": "9876543210"}]))
        ok_, _, customers = fetch_customers(ctx.client, "ravi")
        assert ok_ and customers[0].phone == "9876543210"
        assert http.calls[0].params == {"search": "ravi"}

    def test_notification_history(self, ctx, http):
        http.on("GET", "/notifications/history", ok([{"type": "SMS", "status": "SENT"}]))
        assert fetch_notification_history(ctx.client, "b1") == (True, "Fetched", [{"type": "SMS", "status": "SENT"}])
        assert http.calls[0].params == {"billId": "b1"}


class TestStores:

    def test_register_is_unauthenticated(self, make_ctx, http):
        ctx = make_ctx()
        http.on("POST", "/stores/register", ok(message="Registration submitted"))
        ok_, msg = register_store(ctx.client, {"storeName": " Sunrise ", "password": " pw "})
        assert (ok_, msg) == (True, "Registration submitted")
        call = http.calls[0]
        assert call.token is None
        assert call.json["storeName"] == "Sunrise"
        assert call.json["password"] == " pw "
        assert call.json["gstNumber"] == ""

    def test_my_store_settings_refreshes_session(self, ctx, http):
        http.on("GET", "/stores/settings/my-store", ok({
            "emailNotificationsEnabled": True,
            "isActive": False,
            "deactivationReason": "Payment overdue",
            "subscription": {"plan": "PRO", "endDate": "2026-12-01", "status": "ACTIVE"},
        }))
        ok_, _, settings = fetch_my_store_settings(ctx.client, ctx.session)
        assert ok_
        assert settings.email_enabled and not settings.sms_enabled
        assert settings.subscription.plan == "PRO"
        assert ctx.session.current_store().is_active is False
        assert ctx.session.current_store().deactivation_reason == "Payment overdue"

    def test_notification_channel(self, ctx, http):
        http.on("PUT", "/stores/settings/my-store", ok())
        assert set_notification_channel(ctx.client, "sms", True) == (True, "SMS notifications enabled")
        assert http.calls[0].json == {"smsNotificationsEnabled": True}
        assert set_notification_channel(ctx.client, "fax", True)[0] is False

    def test_fetch_and_filter_stores(self, ctx, http):
        http.on("GET", "/stores", ok(STORES))
        _, _, stores = fetch_stores(ctx.client)
        assert stores[0].counts == {"users": 3, "bills": 120}
        assert [s.id for s in filter_stores(stores, status="pending")] == ["s2"]
        assert [s.id for s in filter_stores(stores, status="approved")] == ["s1"]
        assert [s.id for s in filter_stores(stores, "PRESS")] == ["s2"]
        assert [s.id for s in filter_stores(stores, "98765")] == ["s1"]

    def test_approve(self, ctx, http):
        http.on("POST", "/stores/s2/approve", ok())
        assert approve_store(ctx.client, "s2")[0]

    def test_deactivate_requires_reason(self, ctx, http):
        assert toggle_store_status(ctx.client, "s1", True, "  ")[0] is False
        assert http.calls == []

    def test_deactivate_and_activate(self, ctx, http):
        http.on("POST", "/stores/s1/toggle-status", ok())
        assert toggle_store_status(ctx.client, "s1", True, "Payment overdue")[0]
        assert toggle_store_status(ctx.client, "s1", False)[0]
        assert [c.json for c in http.calls] == [{"reason": "Payment overdue"}, {"reason": None}]


class TestEmployees:

    def test_crud(self, ctx, http):
        http.on("GET", "/users", ok([{"id": "e1", "name": "Ben", "email": "ben@shop.com", "role": "EMPLOYEE",
                                      "isActive": True}]))
        http.on("POST", "/users", ok())
        http.on("PATCH", "/users/e1/toggle-status", ok())
        http.on("DELETE", "/users/e1", ok())

        _, _, employees = fetch_employees(ctx.client)
        assert employees[0].is_active
        assert create_employee(ctx.client, " Ben ", "ben@shop.com", "secret1")[0]
        assert http.calls_to("POST", "/users")[0].json == {"name": "Ben", "email": "ben@shop.com", "password": "secret1"}
        assert toggle_employee_status(ctx.client, "e1", True) == (True, "Employee deactivated successfully")
        assert delete_employee(ctx.client, "e1")[0]

    def test_duplicate_email(self, ctx, http):
        http.on("POST", "/users", fail(409, "Email already in use"))
        assert create_employee(ctx.client, "Ben", "ben@shop.com", "secret1") == (False, "Email already in use")


class TestAuth:

    def test_profile(self, ctx, http):
        http.on("GET", "/auth/me", ok({"id": "u1", "name": "Asha", "email": "admin@shop.com", "role": "ADMIN"}))
        ok_, _, principal = fetch_profile(ctx.client)
        assert ok_ and principal.email == "admin@shop.com"

    def test_update_profile_renames_session(self, ctx, http):
        http.on("PUT", "/auth/profile", ok())
        assert update_profile(ctx.client, ctx.session, " Asha K ")[0]
        assert http.calls[0].json == {"name": "Asha K"}
        assert ctx.session.current_principal().name == "Asha K"

    def test_update_profile_needs_name(self, ctx, http):
        assert update_profile(ctx.client, ctx.session, " ")[0] is False
        assert http.calls == []

    def test_change_password(self, ctx, http):
        http.on("PUT", "/auth/change-password", fail(400, "Password too weak"))
        assert change_password(ctx.client, "secret1") == (False, "Password too weak")


class TestSubscriptions:

    def test_free_plan_gets_end_date(self):
        payload = build_subscription_payload("s1", "free", "CUSTOM", "0", date(2026, 10, 19))
        assert payload == {
            "storeId": "s1",
            "plan": "FREE",
            "billingCycle": "CUSTOM",
            "amount": 0.0,
            "startDate": "2026-10-19",
            "endDate": "2026-11-18",
        }

    def test_pro_plan_leaves_end_date_to_server(self):
        payload = build_subscription_payload("s1", "PRO", "YEARLY", 4999, date(2026, 10, 19), date(2027, 1, 1))
        assert "endDate" not in payload
        assert payload["amount"] == 4999.0

    @pytest.mark.parametrize("plan,cycle", [("PRO", "CUSTOM"), ("FREE", "MONTHLY"), ("GOLD", "MONTHLY")])
    def test_invalid_combinations(self, plan, cycle):
        with pytest.raises(ValueError):
            build_subscription_payload("s1", plan, cycle, 0, date(2026, 10, 19))

    def test_create_reports_bad_cycle_without_request(self, ctx, http):
        ok_, msg = create_subscription(ctx.client, "s1", "PRO", "CUSTOM", 499, date(2026, 10, 19))
        assert not ok_
        assert "CUSTOM" in msg
        assert http.calls == []

    def test_create(self, ctx, http):
        http.on("POST", "/admin/subscriptions", ok())
        assert create_subscription(ctx.client, "s1", "PRO", "MONTHLY", "499", date(2026, 10, 19))[0]
        assert http.calls[0].json["billingCycle"] == "MONTHLY"

    def test_status_and_cancel(self, ctx, http):
        http.on("PATCH", "/admin/subscriptions/sub1", ok())
        assert update_subscription_status(ctx.client, "sub1", "suspended") == (True, "Subscription suspended successfully")
        assert update_subscription_status(ctx.client, "sub1", "paused")[0] is False
        assert cancel_subscription(ctx.client, "sub1", "")[0] is False
        assert cancel_subscription(ctx.client, "sub1", " Store closed ")[0]
        assert [c.json for c in http.calls] == [
            {"status": "SUSPENDED"},
            {"status": "CANCELLED", "cancelReason": "Store closed"},
        ]

    def test_admin_dashboard_data(self, ctx, http):
        http.on("GET", "/admin/stats", ok({"totalStores": 12, "pendingApproval": 2, "totalRevenue": "15999.50"}))
        http.on("GET", "/admin/subscriptions/expiring-soon", ok([
            {"id": "sub1", "store": {"id": "s1", "name": "Sunrise Laundry"}, "plan": "PRO",
             "renewalDate": "2026-10-25", "daysUntilRenewal": 6},
        ]))
        _, _, stats = fetch_admin_stats(ctx.client)
        assert (stats.total_stores, stats.pending_approval, stats.total_revenue) == (12, 2, 15999.5)
        _, _, expiring = fetch_expiring_soon(ctx.client)
        assert expiring[0].store_name == "Sunrise Laundry"
        assert expiring[0].end_date == "2026-10-25"
