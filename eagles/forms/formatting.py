"""
Formatting helpers for quote documents.

Values arrive from the booking form as loosely typed JSON (numbers as strings,
empty strings for blank fields), so every helper here is tolerant: it coerces
what it can and falls back to a fixed default instead of raising.
"""

import math
from datetime import date, datetime
from decimal import Context, Decimal, ROUND_HALF_UP

from dateutil.parser import isoparse, parse as _dp

NA = "N/A"

PAYMENT_METHOD_LABELS = {
    "card": "Credit/Debit Card",
    "bank_transfer": "EFT/Bank Transfer",
    "cash": "Cash",
    "mobile": "Mobile Payment",
}

_CENTS = Decimal("0.01")
_MONEY_CONTEXT = Context(prec=40)


def to_number(value, default):
    """Coerce like the booking form does: blank, zero, NaN, infinite or junk -> default."""
    if value is None:
        return default
    if isinstance(value, bool):
        return 1 if value else default
    if isinstance(value, (int, float)):
        num = value
    elif isinstance(value, str):
        s = value.strip()
        if not s or "_" in s:
            return default
        try:
            num = float(s)
        except ValueError:
            return default
    else:
        return default
    if isinstance(num, float) and not math.isfinite(num):
        return default
    if num == 0:
        return default
    return num


def format_number(value) -> str:
    """Plain number text, no decimal padding: 2.0 -> '2', 2.5 -> '2.5'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_currency(amount, symbol: str = "R") -> str:
    """R1234.50 style. No thousands grouping.

    Rounds the exact binary value half away from zero, which is what the
    booking site's toFixed(2) produced for the same amounts.
    """
    if isinstance(amount, float) and not math.isfinite(amount):
        return f"{symbol}{amount}"
    if abs(amount) >= 1e21:
        return f"{symbol}{amount}"
    if amount == 0:
        amount = 0      # -0.0 prints as 0.00
    cents = Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP,
                                     context=_MONEY_CONTEXT)
    return f"{symbol}{cents}"


def _parse_date(value):
    if isinstance(value, (datetime, date)):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    s = value.strip()
    try:
        return isoparse(s)
    except ValueError:
        pass
    # free-form input from the booking form is day-first (14/03/2026)
    try:
        return _dp(s, dayfirst=True)
    except (ValueError, OverflowError):
        return None


def format_event_date(value) -> str:
    """Day/month/year, e.g. 15/03/2026. Anything unparsable renders N/A."""
    parsed = _parse_date(value)
    if parsed is None:
        return NA
    return parsed.strftime("%d/%m/%Y")


def event_type_text(event_type, other=None) -> str:
    if event_type == "other" and other:
        return f"{event_type} ({other})"
    return display(event_type)


def payment_method_label(method) -> str:
    if isinstance(method, str) and method in PAYMENT_METHOD_LABELS:
        return PAYMENT_METHOD_LABELS[method]
    return display(method)


def payment_status_text(status) -> str:
    return str(status or "pending").upper()


def display(value) -> str:
    if value is None:
        return NA
    s = str(value)
    return s if s.strip() else NA
