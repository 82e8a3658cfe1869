"""
Bill store tests.

Verifies:
- refresh loads the bill list and stats together
- every successful mutation re-fetches instead of patching the cache
- cancelling or reopening a bill is refused without a request
- results fetched for a session that ended meanwhile are dropped
"""

import requests

from conftest import STATS, bill_payload, fail, ok, session_payload
from domain.models import BillDraft, BillStatus


class TestRefresh:

    def test_loads_bills_and_stats(self, ctx, http):
        http.on("GET", "/bills", ok([bill_payload()]))
        http.on("GET", "/bills/stats", ok(STATS))

        ctx.bills.refresh()

        assert [b.bill_number for b in ctx.bills.list()] == ["BILL-B1"]
        assert ctx.bills.stats().pending_bills == 1
        assert ctx.bills.list()[0].total_amount == 50
        assert ctx.bills.loading is False

    def test_error_leaves_state_unchanged(self, ctx, http):
        http.on("GET", "/bills", ok([bill_payload()]), requests.ConnectionError("down"))
        http.on("GET", "/bills/stats", ok(STATS))

        ctx.bills.refresh()
        ctx.bills.refresh()

        assert len(ctx.bills.list()) == 1
        assert ctx.bills.loading is False

    def test_stats_failure_keeps_bills(self, ctx, http):
        http.on("GET", "/bills", ok([bill_payload()]))
        http.on("GET", "/bills/stats", fail(500, "stats unavailable"))

        ctx.bills.refresh()

        assert len(ctx.bills.list()) == 1
        assert ctx.bills.stats() is None

    def test_discards_result_when_session_ends(self, ctx, http):
        def bills_then_logout(call):
            ctx.session.clear()
            return ok([bill_payload()])

        http.on("GET", "/bills", bills_then_logout)
        http.on("GET", "/bills/stats", ok(STATS))

        ctx.bills.refresh()

        assert ctx.bills.list() == []
        assert ctx.bills.stats() is None

    def test_ensure_loaded_fetches_once(self, ctx, http):
        http.on("GET", "/bills", ok([]))
        http.on("GET", "/bills/stats", ok(STATS))

        ctx.bills.ensure_loaded()
        ctx.bills.ensure_loaded()

        assert len(http.calls_to("GET", "/bills")) == 1

    def test_ensure_loaded_skips_super_admin(self, make_ctx, http):
        ctx = make_ctx(session_payload(role="SUPER_ADMIN", store_active=None))
        ctx.bills.ensure_loaded()
        assert http.calls == []

    def test_logout_resets(self, ctx, http):
        http.on("GET", "/bills", ok([bill_payload()]))
        http.on("GET", "/bills/stats", ok(STATS))
        http.on("POST", "/auth/logout", ok())

        ctx.bills.refresh()
        ctx.logout()

        assert ctx.bills.list() == []
        assert ctx.bills.stats() is None


class TestGet:

    def test_always_fetches(self, ctx, http):
        http.on("GET", "/bills/b1", ok(bill_payload()))
        bill = ctx.bills.get("b1")
        bill = ctx.bills.get("b1")
        assert bill.customer.name == "Ravi"
        assert len(http.calls_to("GET", "/bills/b1")) == 2

    def test_missing_bill(self, ctx, http):
        http.on("GET", "/bills/nope", fail(404, "Bill not found"))
        assert ctx.bills.get("nope") is None


class TestMutations:

    def draft(self):
        return BillDraft(
            customer_name=" Ravi ",
            customer_phone="9876543210",
            items=[{"categoryId": "shirt", "quantity": 2}, {"categoryId": "pants", "quantity": 1}],
        )

    def test_create_posts_and_refetches(self, ctx, http):
        http.on("POST", "/bills", ok(bill_payload(), message="Bill created successfully"))
        http.on("GET", "/bills", ok([bill_payload()]))
        http.on("GET", "/bills/stats", ok(STATS))

        assert ctx.bills.create(self.draft()) == (True, "Bill created successfully")

        assert http.calls_to("POST", "/bills")[0].json == {
            "customerName": "Ravi",
            "customerPhone": "9876543210",
            "items": [{"categoryId": "shirt", "quantity": 2}, {"categoryId": "pants", "quantity": 1}],
        }
        assert [c.path for c in http.calls] == ["/bills", "/bills", "/bills/stats"]
        assert len(ctx.bills.list()) == 1

    def test_create_failure_does_not_refetch(self, ctx, http):
        http.on("POST", "/bills", fail(400, "Items are required"))

        assert ctx.bills.create(self.draft()) == (False, "Items are required")
        assert len(http.calls) == 1

    def test_mark_completed(self, ctx, http):
        http.on("PUT", "/bills/b1", ok(bill_payload(status="COMPLETED")))
        http.on("GET", "/bills", ok([bill_payload(status="COMPLETED")]))
        http.on("GET", "/bills/stats", ok(STATS))

        ok_, _ = ctx.bills.mark_completed("b1")

        assert ok_
        assert http.calls_to("PUT", "/bills/b1")[0].json == {"status": "COMPLETED"}
        assert ctx.bills.list()[0].status is BillStatus.COMPLETED

    def test_update_notes_refetches(self, ctx, http):
        http.on("PUT", "/bills/b1", ok(bill_payload()))
        http.on("GET", "/bills", ok([dict(bill_payload(), notes="Starch collars")]))
        http.on("GET", "/bills/stats", ok(STATS))

        assert ctx.bills.update_notes("b1", "Starch collars") == (True, "Bill updated")

        assert http.calls_to("PUT", "/bills/b1")[0].json == {"notes": "Starch collars"}
        assert ctx.bills.list()[0].notes == "Starch collars"

    def test_update_notes_failure_keeps_cache(self, ctx, http):
        http.on("PUT", "/bills/b1", fail(404, "Bill not found"))
        assert ctx.bills.update_notes("b1", "x") == (False, "Bill not found")
        assert len(http.calls) == 1

    def test_cancel_is_refused_locally(self, ctx, http):
        ok_, msg = ctx.bills.update_status("b1", BillStatus.CANCELLED)
        assert not ok_
        assert http.calls == []

    def test_back_to_pending_is_refused(self, ctx, http):
        ok_, _ = ctx.bills.update_status("b1", "pending")
        assert not ok_
        assert http.calls == []
