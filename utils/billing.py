# ironpress/utils/billing.py

from typing import Dict, Iterable, List, Optional

import pandas as pd

from domain.models import Bill, BillDraft, BillItem, BillStatus, ItemCategory

STATUS_FILTERS = ("all", "pending", "completed")


def compose_items(categories: Iterable[ItemCategory], quantities: Dict[str, int]) -> List[BillItem]:
    """
    Turn the per-category quantity picker into bill lines.
    Categories with no quantity (or zero) are left out.
    """
    items: List[BillItem] = []
    for cat in categories:
        qty = int(quantities.get(cat.id, 0) or 0)
        if qty <= 0:
            continue
        items.append(
            BillItem(
                category_id=cat.id,
                category_name=cat.name,
                quantity=qty,
                price=cat.price,
                subtotal=qty * cat.price,
            )
        )
    return items


def bill_total(items: Iterable[BillItem]) -> float:
    return sum(item.subtotal for item in items)


def total_quantity(items: Iterable[BillItem]) -> int:
    return sum(item.quantity for item in items)


def build_draft(
        customer_name: str,
        customer_phone: str,
        items: List[BillItem],
        customer_email: Optional[str] = None,
        notes: Optional[str] = None,
) -> BillDraft:
    return BillDraft(
        customer_name=customer_name,
        customer_phone=customer_phone,
        customer_email=customer_email,
        notes=notes,
        items=[{"categoryId": i.category_id, "quantity": i.quantity} for i in items],
    )


def filter_bills(bills: Iterable[Bill], search: str = "", status: str = "all") -> List[Bill]:
    """
    Case-insensitive search over customer name, phone and bill number,
    combined with a status filter ("all", "pending" or "completed").
    """
    term = (search or "").strip().lower()
    wanted = None if status == "all" else BillStatus.parse(status)

    result = []
    for bill in bills:
        if wanted is not None and bill.status is not wanted:
            continue
        if term and not (
                term in bill.customer.name.lower()
                or term in bill.customer.phone
                or term in bill.bill_number.lower()
        ):
            continue
        result.append(bill)
    return result


def bills_frame(bills: Iterable[Bill]) -> pd.DataFrame:
    rows = [
        {
            "Bill No": b.bill_number,
            "Customer": b.customer.name,
            "Phone": b.customer.phone,
            "Items": sum(i.quantity for i in b.items),
            "Total": b.total_amount,
            "Status": b.status.value,
            "Created": b.created_at,
        }
        for b in bills
    ]
    return pd.DataFrame(rows, columns=["Bill No", "Customer", "Phone", "Items", "Total", "Status", "Created"])


def bill_items_frame(bill: Bill) -> pd.DataFrame:
    rows = [
        {
            "Item": i.category_name,
            "Price": i.price,
            "Qty": i.quantity,
            "Subtotal": i.subtotal,
        }
        for i in bill.items
    ]
    return pd.DataFrame(rows, columns=["Item", "Price", "Qty", "Subtotal"])
