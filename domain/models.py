# ironpress/domain/models.py

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Role(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"

    @property
    def label(self) -> str:
        if self is Role.SUPER_ADMIN:
            return "Super Admin"
        if self is Role.ADMIN:
            return "Admin"
        if self is Role.EMPLOYEE:
            return "Employee"
        raise ValueError(f"Unhandled role: {self!r}")


class BillStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, value: str) -> "BillStatus":
        return cls(str(value).upper())


def _number(value: Any) -> float:
    if value is None or value == "":
        return 0
    num = float(value)
    return int(num) if num.is_integer() else num


@dataclass
class Principal:
    """
    The authenticated user. Serialized as the `user` field of the session blob.
    """
    id: str
    name: str
    email: str
    role: Role
    store_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Principal":
        # Role(...) raises ValueError for anything outside the closed set
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            email=data.get("email") or "",
            role=Role(data["role"]),
            store_id=data.get("storeId"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "storeId": self.store_id,
        }


@dataclass
class Store:
    id: str
    name: str
    is_active: bool = True
    deactivation_reason: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Store":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            is_active=data.get("isActive") is not False,  # only an explicit false deactivates
            deactivation_reason=data.get("deactivationReason"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "isActive": self.is_active,
            "deactivationReason": self.deactivation_reason,
        }


@dataclass
class Session:
    principal: Principal
    access_token: str
    refresh_token: Optional[str] = None
    store: Optional[Store] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        store = data.get("store")
        return cls(
            principal=Principal.from_dict(data["user"]),
            access_token=data["accessToken"],
            refresh_token=data.get("refreshToken"),
            store=Store.from_dict(store) if store else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user": self.principal.to_dict(),
            "store": self.store.to_dict() if self.store else None,
            "accessToken": self.access_token,
            "refreshToken": self.refresh_token,
        }


@dataclass
class ItemCategory:
    id: str
    name: str
    price: float
    icon: str = "👕"
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItemCategory":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            price=_number(data.get("price")),
            icon=data.get("icon") or "👕",
            is_active=bool(data.get("isActive", True)),
        )


@dataclass
class BillItem:
    category_id: str
    category_name: str
    quantity: int
    price: float
    subtotal: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BillItem":
        category = data.get("category") or {}
        quantity = int(data.get("quantity") or 0)
        price = _number(data.get("price", category.get("price")))
        # older bills carry `total` instead of `subtotal`
        subtotal = data.get("subtotal", data.get("total"))
        return cls(
            category_id=str(data.get("categoryId") or category.get("id") or ""),
            category_name=data.get("categoryName") or category.get("name") or "",
            quantity=quantity,
            price=price,
            subtotal=_number(subtotal) if subtotal is not None else price * quantity,
        )


@dataclass
class Customer:
    id: str
    name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Customer":
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            phone=data.get("phone") or "",
            email=data.get("email"),
            address=data.get("address"),
        )


@dataclass
class Bill:
    id: str
    bill_number: str
    customer: Customer
    items: List[BillItem]
    total_amount: float
    status: BillStatus
    created_at: str
    notes: Optional[str] = None
    updated_at: Optional[str] = None
    completed_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bill":
        items = [BillItem.from_dict(i) for i in data.get("items") or []]
        total = data.get("totalAmount")
        return cls(
            id=str(data["id"]),
            bill_number=data.get("billNumber") or "",
            customer=Customer.from_dict(data.get("customer") or {}),
            items=items,
            total_amount=_number(total) if total is not None else sum(i.subtotal for i in items),
            status=BillStatus.parse(data.get("status") or "PENDING"),
            created_at=data.get("createdAt") or "",
            notes=data.get("notes"),
            updated_at=data.get("updatedAt"),
            completed_at=data.get("completedAt"),
        )

    @property
    def is_pending(self) -> bool:
        return self.status is BillStatus.PENDING


@dataclass
class BillDraft:
    """
    Payload for POST /bills. Prices are resolved server side from categoryId.
    """
    customer_name: str
    customer_phone: str
    items: List[Dict[str, Any]]  # [{"categoryId": ..., "quantity": ...}]
    customer_email: Optional[str] = None
    customer_address: Optional[str] = None
    notes: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "customerName": self.customer_name.strip(),
            "customerPhone": self.customer_phone.strip(),
            "items": [
                {"categoryId": i["categoryId"], "quantity": int(i["quantity"])}
                for i in self.items
            ],
        }
        if self.customer_email and self.customer_email.strip():
            payload["customerEmail"] = self.customer_email.strip()
        if self.customer_address and self.customer_address.strip():
            payload["customerAddress"] = self.customer_address.strip()
        if self.notes and self.notes.strip():
            payload["notes"] = self.notes.strip()
        return payload


@dataclass
class DashboardStats:
    total_bills: int = 0
    pending_bills: int = 0
    completed_bills: int = 0
    today_revenue: float = 0
    weekly_revenue: float = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DashboardStats":
        return cls(
            total_bills=int(data.get("totalBills") or 0),
            pending_bills=int(data.get("pendingBills") or 0),
            completed_bills=int(data.get("completedBills") or 0),
            today_revenue=_number(data.get("todayRevenue")),
            weekly_revenue=_number(data.get("weeklyRevenue")),
        )


@dataclass
class Employee:
    id: str
    name: str
    email: str
    role: str
    is_active: bool
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Employee":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            email=data.get("email") or "",
            role=data.get("role") or Role.EMPLOYEE.value,
            is_active=bool(data.get("isActive", True)),
            created_at=data.get("createdAt") or "",
        )


@dataclass
class StoreRecord:
    """
    A store as seen from the super-admin console.
    """
    id: str
    name: str
    email: str
    phone: str
    is_approved: bool
    is_active: bool
    created_at: str = ""
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    gst_number: Optional[str] = None
    deactivation_reason: Optional[str] = None
    counts: Dict[str, int] = field(default_factory=dict)  # users, bills, customers, categories

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoreRecord":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            email=data.get("email") or "",
            phone=data.get("phone") or "",
            is_approved=bool(data.get("isApproved", False)),
            is_active=bool(data.get("isActive", False)),
            created_at=data.get("createdAt") or "",
            address=data.get("address"),
            city=data.get("city"),
            state=data.get("state"),
            pincode=data.get("pincode"),
            gst_number=data.get("gstNumber"),
            deactivation_reason=data.get("deactivationReason"),
            counts=dict(data.get("_count") or {}),
        )


@dataclass
class SubscriptionSummary:
    plan: str
    end_date: Optional[str]
    status: str


@dataclass
class StoreSettings:
    email_enabled: bool = False
    sms_enabled: bool = False
    whatsapp_enabled: bool = False
    is_active: bool = True
    deactivation_reason: Optional[str] = None
    subscription: Optional[SubscriptionSummary] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoreSettings":
        sub = data.get("subscription")
        return cls(
            email_enabled=bool(data.get("emailNotificationsEnabled")),
            sms_enabled=bool(data.get("smsNotificationsEnabled")),
            whatsapp_enabled=bool(data.get("whatsappNotificationsEnabled")),
            is_active=data.get("isActive") is not False,
            deactivation_reason=data.get("deactivationReason"),
            subscription=SubscriptionSummary(
                plan=sub.get("plan") or "",
                end_date=sub.get("endDate"),
                status=sub.get("status") or "",
            ) if sub else None,
        )


@dataclass
class Subscription:
    id: str
    store_id: str
    store_name: str
    plan: str
    billing_cycle: str
    amount: float
    status: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    days_until_renewal: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subscription":
        store = data.get("store") or {}
        return cls(
            id=str(data["id"]),
            store_id=str(data.get("storeId") or store.get("id") or ""),
            store_name=data.get("storeName") or store.get("name") or "",
            plan=data.get("plan") or "",
            billing_cycle=data.get("billingCycle") or "",
            amount=_number(data.get("amount")),
            status=data.get("status") or "",
            start_date=data.get("startDate"),
            end_date=data.get("endDate") or data.get("renewalDate"),
            days_until_renewal=data.get("daysUntilRenewal"),
        )


@dataclass
class AdminStats:
    total_stores: int = 0
    active_stores: int = 0
    pending_approval: int = 0
    inactive_stores: int = 0
    total_subscriptions: int = 0
    active_subscriptions: int = 0
    expiring_soon: int = 0
    total_revenue: float = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdminStats":
        return cls(
            total_stores=int(data.get("totalStores") or 0),
            active_stores=int(data.get("activeStores") or 0),
            pending_approval=int(data.get("pendingApproval") or 0),
            inactive_stores=int(data.get("inactiveStores") or 0),
            total_subscriptions=int(data.get("totalSubscriptions") or 0),
            active_subscriptions=int(data.get("activeSubscriptions") or 0),
            expiring_soon=int(data.get("expiringSoon") or 0),
            total_revenue=_number(data.get("totalRevenue")),
        )
