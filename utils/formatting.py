# ironpress/utils/formatting.py
from datetime import datetime
from typing import Optional


def format_rupee(n: float) -> str:
    """
    Format an amount Indian-shop style with the rupee sign.
    Example: 1234.5 -> "₹1,234.50", 50 -> "₹50"
    """
    if float(n).is_integer():
        return f"₹{n:,.0f}"
    return f"₹{n:,.2f}"


def format_timestamp(value: Optional[str], with_time: bool = True) -> str:
    """
    Render an ISO timestamp from the API, e.g. "19 Oct 2026, 14:05".
    Returns the raw value when it cannot be parsed.
    """
    if not value:
        return "-"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime("%d %b %Y, %H:%M" if with_time else "%d %b %Y")
