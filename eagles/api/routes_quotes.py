"""
Quote Routes
Admin JSON API for quotes plus the quotation PDF download.
Registered on the app by app.create_app().
"""

import re
import logging

from flask import Blueprint, Response, jsonify, request

from ..core import store
from ..core.security import auth_required, rate_limit
from ..forms.errors import InvalidQuoteError, QuoteRenderError
from ..forms.quote_pdf import generate_quote_pdf

log = logging.getLogger("eagles.api")

bp = Blueprint("quotes", __name__)


def _error(msg, status):
    return jsonify({"ok": False, "error": msg}), status


def _safe_filename(text) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", str(text)).strip("_") or "quote"


@bp.route("/api/health")
def health():
    return jsonify({"ok": True})


@bp.route("/api/quotes")
@auth_required
@rate_limit("api")
def quotes_list():
    status = request.args.get("status", "")
    try:
        limit = int(request.args.get("limit", 50))
    except ValueError:
        return _error("limit must be an integer", 400)
    if limit < 0:
        return _error("limit must not be negative", 400)
    quotes = store.list_quotes(status=status, limit=limit)
    return jsonify({"ok": True, "quotes": quotes, "count": len(quotes)})


@bp.route("/api/quotes", methods=["POST"])
@auth_required
@rate_limit("api")
def quotes_create():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error("Request body must be a JSON object", 400)
    quote = store.save_quote(data)
    return jsonify({"ok": True, "quote": quote}), 201


@bp.route("/api/quotes/<qid>")
@auth_required
@rate_limit("api")
def quotes_get(qid):
    quote = store.get_quote(qid)
    if not quote:
        return _error("Quote not found", 404)
    return jsonify({"ok": True, "quote": quote})


@bp.route("/api/quotes/<qid>/status", methods=["POST"])
@auth_required
@rate_limit("api")
def quotes_status(qid):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error("Request body must be a JSON object", 400)
    status = str(data.get("status", "")).lower()
    if status not in store.VALID_PAYMENT_STATUSES:
        return _error(f"Invalid status: {status or '(empty)'}", 400)
    if not store.update_payment_status(qid, status):
        return _error("Quote not found", 404)
    return jsonify({"ok": True, "status": status})


@bp.route("/api/quotes/<qid>/pdf")
@auth_required
@rate_limit("heavy")
def quotes_pdf(qid):
    quote = store.get_quote(qid)
    if not quote:
        return _error("Quote not found", 404)
    try:
        pdf = generate_quote_pdf(quote)
    except InvalidQuoteError as e:
        return _error(str(e), 400)
    except QuoteRenderError as e:
        log.error("Quote %s PDF failed: %s", qid, e)
        return _error("Failed to generate quote PDF", 500)
    name = _safe_filename(quote.get("reference") or qid)
    return Response(
        pdf,
        mimetype="application/pdf",
        headers={"Content-Disposition": f"inline; filename=\"quote-{name}.pdf\""}
    )
