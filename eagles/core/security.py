"""
Request Guards - Basic Auth + Rate Limiting
===========================================
Admin endpoints (quotes, quote PDFs) sit behind HTTP Basic auth using the
ADMIN_USER / ADMIN_PASS env vars.

Rate Limiting:
- In-memory token bucket per IP address and tier
- 429 JSON response when exceeded
- DISABLE_RATE_LIMIT=true turns it off (tests, local dev)
"""

import os
import time
import secrets
import logging
import functools
from threading import Lock

from flask import request, jsonify, Response

log = logging.getLogger("eagles.security")

# ═══════════════════════════════════════════════════════════════════════════════
# Basic Auth
# ═══════════════════════════════════════════════════════════════════════════════

def check_auth(username, password) -> bool:
    user = os.environ.get("ADMIN_USER", "admin")
    pw = os.environ.get("ADMIN_PASS", "changeme")
    return (secrets.compare_digest(username or "", user)
            and secrets.compare_digest(password or "", pw))


def auth_required(f):
    @functools.wraps(f)
    def decorated(*args, **kwargs):
        auth = request.authorization
        if not auth or not check_auth(auth.username, auth.password):
            log.info("Unauthorized %s %s from %s", request.method, request.path,
                     request.remote_addr)
            return Response(
                "Eagles Events Admin - Login Required",
                401, {"WWW-Authenticate": 'Basic realm="Eagles Events Admin"'})
        return f(*args, **kwargs)
    return decorated


# ═══════════════════════════════════════════════════════════════════════════════
# Rate Limiting
# ═══════════════════════════════════════════════════════════════════════════════

# Burst size and steady refill per client, by route tier
RATE_LIMITS = {
    "default": {"max_tokens": 60, "refill_rate": 2.0},   # 120/min
    "api":     {"max_tokens": 30, "refill_rate": 1.0},   # 60/min, quote CRUD
    "heavy":   {"max_tokens": 10, "refill_rate": 0.2},   # 12/min, PDF rendering
}

IDLE_TTL = 3600         # forget a client after an hour without requests
PURGE_INTERVAL = 300


class RateLimiter:
    """Token buckets keyed by "<ip>:<tier>", stored as (tokens, last_seen).

    check() purges idle buckets itself every purge_interval seconds, so the
    table stays proportional to recently active clients.
    """

    def __init__(self, idle_ttl=IDLE_TTL, purge_interval=PURGE_INTERVAL,
                 clock=time.time):
        self.idle_ttl = idle_ttl
        self.purge_interval = purge_interval
        self._clock = clock
        self._buckets = {}
        self._lock = Lock()
        self._next_purge = clock() + purge_interval

    def __len__(self):
        return len(self._buckets)

    def check(self, key: str, max_tokens: int = 60, refill_rate: float = 1.0) -> bool:
        """Take one token from key's bucket. False when the bucket is empty."""
        with self._lock:
            now = self._clock()
            if now >= self._next_purge:
                self._purge(now, self.idle_ttl)
            tokens, last_seen = self._buckets.get(key, (float(max_tokens), now))
            tokens = min(max_tokens, tokens + (now - last_seen) * refill_rate)
            allowed = tokens >= 1
            self._buckets[key] = (tokens - 1 if allowed else tokens, now)
            return allowed

    def _purge(self, now, max_age):
        stale = [k for k, (_, seen) in self._buckets.items() if now - seen > max_age]
        for k in stale:
            del self._buckets[k]
        self._next_purge = now + self.purge_interval
        if stale:
            log.debug("Rate limiter dropped %d idle clients, %d tracked",
                      len(stale), len(self._buckets))

    def cleanup(self, max_age=None):
        """Drop buckets idle for more than max_age seconds (default idle_ttl)."""
        with self._lock:
            self._purge(self._clock(), self.idle_ttl if max_age is None else max_age)

    def reset(self):
        with self._lock:
            self._buckets.clear()


_limiter = RateLimiter()


def _rate_limiting_disabled() -> bool:
    return os.environ.get("DISABLE_RATE_LIMIT", "").lower() == "true"


def rate_limit(tier: str = "default"):
    """Route decorator: 429 JSON once the client's bucket for tier is empty."""
    def decorator(f):
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            if _rate_limiting_disabled():
                return f(*args, **kwargs)
            ip = request.remote_addr or "unknown"
            limits = RATE_LIMITS.get(tier, RATE_LIMITS["default"])
            if _limiter.check(f"{ip}:{tier}", **limits):
                return f(*args, **kwargs)
            log.warning("Rate limit exceeded: %s tier=%s path=%s", ip, tier, request.path)
            return jsonify({"ok": False,
                            "error": "Too many requests, please try again shortly."}), 429
        return wrapper
    return decorator
