# services/bill_store.py
import logging
from typing import List, Optional, Tuple

from api_client import ApiError
from domain.models import Bill, BillDraft, BillStatus, DashboardStats, Role

logger = logging.getLogger(__name__)


class BillStore:
    """
    In-memory bill list and dashboard stats for the current session.

    The cache is never patched locally: every successful mutation re-fetches
    both the list and the stats so totals always match the server.
    """

    def __init__(self, client, session):
        self.client = client
        self.session = session
        self.bills: List[Bill] = []
        self._stats: Optional[DashboardStats] = None
        self.loading = False
        self._loaded_for: Optional[str] = None

    def _owner(self) -> Optional[str]:
        principal = self.session.current_principal()
        return principal.id if principal else None

    def reset(self) -> None:
        self.bills = []
        self._stats = None
        self._loaded_for = None

    # -----------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------

    def list(self) -> List[Bill]:
        return self.bills

    def stats(self) -> Optional[DashboardStats]:
        return self._stats

    def ensure_loaded(self) -> None:
        """
        Fetch once per principal. Super admins have no store-scoped bills.
        """
        principal = self.session.current_principal()
        if principal is None:
            self.reset()
            return
        if principal.role is Role.SUPER_ADMIN:
            return
        if self._loaded_for != principal.id:
            self.reset()
            self.refresh()

    def refresh(self) -> None:
        owner = self._owner()
        if owner is None:
            return

        self.loading = True
        try:
            body = self.client.get("/bills")
            bills = [Bill.from_dict(b) for b in body.get("data") or []] if body.get("success") else None
            stats_body = self._fetch_stats()
        except ApiError as e:
            logger.error("Failed to fetch bills: %s", e)
            return
        finally:
            self.loading = False

        if self._owner() != owner:
            logger.info("Discarding bills fetched for a session that has ended")
            return

        if bills is not None:
            self.bills = bills
        if stats_body is not None:
            self._stats = stats_body
        self._loaded_for = owner

    def _fetch_stats(self) -> Optional[DashboardStats]:
        try:
            body = self.client.get("/bills/stats")
        except ApiError as e:
            logger.error("Failed to fetch stats: %s", e)
            return None
        if body.get("success"):
            return DashboardStats.from_dict(body.get("data") or {})
        return None

    def get(self, bill_id: str) -> Optional[Bill]:
        """
        Always asks the server; the cached list may be stale.
        """
        try:
            body = self.client.get(f"/bills/{bill_id}")
        except ApiError as e:
            logger.error("Failed to get bill %s: %s", bill_id, e)
            return None
        data = body.get("data")
        return Bill.from_dict(data) if data else None

    # -----------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------

    def create(self, draft: BillDraft) -> Tuple[bool, str]:
        try:
            body = self.client.post("/bills", json=draft.to_payload())
        except ApiError as e:
            logger.error("Failed to add bill: %s", e)
            return False, e.describe("Failed to create bill. Please try again.")

        if not body.get("success"):
            return False, body.get("message") or "Failed to create bill. Please try again."

        self.refresh()
        return True, body.get("message") or "Bill created"

    def update_status(self, bill_id: str, status: BillStatus) -> Tuple[bool, str]:
        status = BillStatus.parse(status)
        if status is BillStatus.CANCELLED:
            return False, "Bills can only be cancelled by the server"
        if status is BillStatus.PENDING:
            return False, "A bill cannot be moved back to pending"

        try:
            body = self.client.put(f"/bills/{bill_id}", json={"status": status.value})
        except ApiError as e:
            logger.error("Failed to update bill %s: %s", bill_id, e)
            return False, e.describe("Failed to update bill status")

        if not body.get("success"):
            return False, body.get("message") or "Failed to update bill status"

        self.refresh()
        return True, "Bill updated"

    def mark_completed(self, bill_id: str) -> Tuple[bool, str]:
        return self.update_status(bill_id, BillStatus.COMPLETED)

    def update_notes(self, bill_id: str, notes: str) -> Tuple[bool, str]:
        try:
            body = self.client.put(f"/bills/{bill_id}", json={"notes": notes})
        except ApiError as e:
            logger.error("Failed to update notes of bill %s: %s", bill_id, e)
            return False, e.describe("Failed to update bill")

        if not body.get("success"):
            return False, body.get("message") or "Failed to update bill"

        self.refresh()
        return True, "Bill updated"
