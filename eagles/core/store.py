"""
Quote store - JSON file in DATA_DIR.

Records are kept exactly as the booking form submits them (camelCase keys,
"_id" as identifier) so they can be handed straight to the PDF renderer.
"""

import os
import json
import uuid
import logging
import threading
from datetime import datetime, timezone

from . import paths

log = logging.getLogger("eagles.store")

VALID_PAYMENT_STATUSES = ("pending", "paid", "partial", "cancelled")
MAX_QUOTES = 5000

_lock = threading.Lock()


def _quotes_path() -> str:
    return os.path.join(paths.DATA_DIR, "quotes.json")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _set_aside(path: str) -> str:
    """Move an unreadable quotes file out of the way so it is never overwritten."""
    backup = f"{path}.corrupt-{datetime.now(timezone.utc):%Y%m%d-%H%M%S-%f}"
    os.replace(path, backup)
    return backup


def _load() -> list:
    path = _quotes_path()
    try:
        with open(path) as f:
            quotes = json.load(f)
    except FileNotFoundError:
        return []
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        backup = _set_aside(path)
        log.error("quotes.json is corrupt (%s); moved to %s, starting empty", e, backup)
        return []
    if not isinstance(quotes, list):
        backup = _set_aside(path)
        log.error("quotes.json does not hold a list; moved to %s, starting empty", backup)
        return []
    return quotes


def _save(quotes: list):
    os.makedirs(paths.DATA_DIR, exist_ok=True)
    if len(quotes) > MAX_QUOTES:
        quotes = quotes[-MAX_QUOTES:]
    tmp = _quotes_path() + ".tmp"
    with open(tmp, "w") as f:
        json.dump(quotes, f, indent=2, default=str)
    os.replace(tmp, _quotes_path())


def get_quote(quote_id):
    """Return the quote record with this id, or None."""
    if not quote_id:
        return None
    with _lock:
        for q in _load():
            if str(q.get("_id")) == str(quote_id):
                return q
    return None


def list_quotes(status: str = "", limit: int = 50) -> list:
    """Newest first, optionally filtered by payment status."""
    if limit <= 0:
        return []
    with _lock:
        quotes = _load()
    results = []
    for q in reversed(quotes):
        if status and (q.get("paymentStatus") or "pending").lower() != status.lower():
            continue
        results.append(q)
        if len(results) >= limit:
            break
    return results


def save_quote(record: dict) -> dict:
    """Insert or update by _id. Assigns _id / timestamps. Returns the stored copy."""
    entry = dict(record)
    now = _now()
    entry.setdefault("_id", uuid.uuid4().hex[:24])
    entry.setdefault("paymentStatus", "pending")
    entry["updatedAt"] = now
    with _lock:
        quotes = _load()
        for i, q in enumerate(quotes):
            if str(q.get("_id")) == str(entry["_id"]):
                entry["createdAt"] = q.get("createdAt", now)
                quotes[i] = entry
                log.info("Quote %s updated", entry["_id"])
                break
        else:
            entry["createdAt"] = now
            quotes.append(entry)
            log.info("Quote %s created (%d items)", entry["_id"],
                     len(entry.get("items") or []))
        _save(quotes)
    return entry


def update_payment_status(quote_id, status: str) -> bool:
    """Set paymentStatus. False if status invalid or quote not found."""
    if status not in VALID_PAYMENT_STATUSES:
        return False
    with _lock:
        quotes = _load()
        for q in quotes:
            if str(q.get("_id")) == str(quote_id):
                q["paymentStatus"] = status
                q["updatedAt"] = _now()
                _save(quotes)
                log.info("Quote %s payment status -> %s", quote_id, status.upper())
                return True
    return False
