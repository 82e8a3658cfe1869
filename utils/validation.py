# utils/validation.py
import re
from typing import List, Tuple

from domain.models import BillItem

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_RE = re.compile(r"^\+?[0-9\s-]{7,15}$")
MIN_PASSWORD_LENGTH = 6


def validate_login(email: str, password: str) -> Tuple[bool, str]:
    if not email or not email.strip():
        return False, "Email is required"
    if not password:
        return False, "Password is required"
    return True, ""


def validate_customer(name: str, phone: str) -> Tuple[bool, str]:
    if not (name or "").strip() or not (phone or "").strip():
        return False, "Please enter customer name and phone number."
    return True, ""


def validate_email(val: str, required: bool = False) -> Tuple[bool, str]:
    if not val or not val.strip():
        if required:
            return False, "Email is required"
        return True, ""
    if not EMAIL_RE.match(val.strip()):
        return False, f"'{val}' is not a valid email address"
    return True, ""


def validate_bill(name: str, phone: str, items: List[BillItem]) -> Tuple[bool, str]:
    """
    A bill needs a customer name, a phone number and at least one item.
    """
    ok, msg = validate_customer(name, phone)
    if not ok:
        return ok, msg
    if not any(item.quantity > 0 for item in items):
        return False, "Please select at least one item."
    return True, ""


def validate_category(name: str, price) -> Tuple[bool, str]:
    if not (name or "").strip():
        return False, "Please enter category name and price."
    if price is None or price == "":
        return False, "Please enter category name and price."
    try:
        value = float(price)
    except (TypeError, ValueError):
        return False, "Price must be a number"
    if value < 0:
        return False, "Price cannot be negative"
    return True, ""


def validate_new_password(new_password: str, confirm_password: str) -> Tuple[bool, str]:
    if new_password != confirm_password:
        return False, "New password and confirm password do not match"
    if len(new_password or "") < MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    return True, ""


def validate_store_registration(form: dict) -> Tuple[bool, str]:
    for key, label in (
            ("storeName", "Store name"),
            ("storeEmail", "Store email"),
            ("storePhone", "Store phone"),
            ("adminName", "Admin name"),
            ("adminEmail", "Admin email"),
            ("password", "Password"),
    ):
        if not (form.get(key) or "").strip():
            return False, f"{label} is required"

    for key in ("storeEmail", "adminEmail"):
        ok, msg = validate_email(form[key], required=True)
        if not ok:
            return ok, msg

    if not PHONE_RE.match(form["storePhone"].strip()):
        return False, "Store phone is not a valid phone number"

    if form.get("password") != form.get("confirmPassword"):
        return False, "Passwords do not match"
    return True, ""


def validate_employee(name: str, email: str, password: str) -> Tuple[bool, str]:
    if not (name or "").strip():
        return False, "Name is required"
    ok, msg = validate_email(email, required=True)
    if not ok:
        return ok, msg
    if len(password or "") < MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    return True, ""


def validate_subscription(store_id: str, amount) -> Tuple[bool, str]:
    if not store_id or amount is None or amount == "":
        return False, "Please fill in all required fields"
    try:
        if float(amount) < 0:
            return False, "Amount cannot be negative"
    except (TypeError, ValueError):
        return False, "Amount must be a number"
    return True, ""


def validate_deactivation_reason(reason: str) -> Tuple[bool, str]:
    if not (reason or "").strip():
        return False, "A reason is required to deactivate a store"
    return True, ""
