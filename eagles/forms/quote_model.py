"""
Quote record normalisation.

Quote records come straight from the store (or the booking form) with
camelCase keys, e.g.:

    {"_id": "6650c0...", "reference": "EE-1042", "eventDate": "2026-03-15",
     "customerName": "Thandi M", "eventType": "wedding", "services": [...],
     "guestCount": 120, "items": [{"name": "Tent", "quantity": 2, "price": 100}],
     "totalAmount": 200, "paymentMethod": "bank_transfer", "notes": ""}

normalize_quote() turns one into a flat, fully-defaulted dict the section
composers can print without any further checks.
"""

import logging
from collections.abc import Mapping

from .errors import InvalidQuoteError
from .formatting import (
    NA, display, event_type_text, format_event_date, format_number,
    payment_method_label, payment_status_text, to_number,
)

log = logging.getLogger("eagles.quote_model")


def quote_id(record):
    if not isinstance(record, Mapping):
        return None
    for key in ("_id", "id"):
        val = record.get(key)
        if val is not None and str(val).strip():
            return val
    return None


def validate_quote(record):
    """Raise InvalidQuoteError unless record is a mapping with an id."""
    if not record or not isinstance(record, Mapping):
        raise InvalidQuoteError("Invalid quote data provided")
    if quote_id(record) is None:
        raise InvalidQuoteError("Invalid quote data provided: missing id")


def normalize_item(item: Mapping) -> dict:
    qty = to_number(item.get("quantity"), 1)
    price = to_number(item.get("price"), 0)
    return {
        "name": item.get("name") or "Unknown Item",
        "quantity": qty,
        "price": price,
        "line_total": qty * price,
    }


def normalize_items(items) -> list:
    """Drop falsy entries, keep order, default the rest."""
    if not isinstance(items, (list, tuple)):
        return []
    out = []
    for idx, item in enumerate(items):
        if not item:
            continue
        if not isinstance(item, Mapping):
            log.debug("Skipping non-mapping item at position %d: %r", idx, item)
            continue
        out.append(normalize_item(item))
    return out


def _services_text(services) -> str:
    if isinstance(services, str):
        services = [services]
    if not isinstance(services, (list, tuple)):
        return NA
    joined = ", ".join(str(s) for s in services if s is not None)
    return joined or NA


def _guest_count_text(value) -> str:
    if value is None or value == "":
        return NA
    return format_number(value)


def normalize_quote(record: Mapping) -> dict:
    """Validated, read-only view of a quote record. Never mutates record."""
    validate_quote(record)
    qid = quote_id(record)
    notes = record.get("notes")
    notes = str(notes) if notes is not None and str(notes).strip() else ""
    return {
        "id": str(qid),
        "reference": str(record.get("reference") or qid),
        "event_date": format_event_date(record.get("eventDate")),
        "customer_name": display(record.get("customerName")),
        "phone": display(record.get("phone")),
        "company": display(record.get("company")),
        "location": display(record.get("location")),
        "email": display(record.get("email")),
        "event_type": event_type_text(record.get("eventType"),
                                      record.get("eventTypeOther")),
        "services": _services_text(record.get("services")),
        "guest_count": _guest_count_text(record.get("guestCount")),
        "items": normalize_items(record.get("items")),
        "total_amount": to_number(record.get("totalAmount"), 0),
        "payment_method": payment_method_label(record.get("paymentMethod")),
        "payment_status": payment_status_text(record.get("paymentStatus")),
        "notes": notes,
    }
