#!/usr/bin/env python3
"""
Eagles Events Quote Service - Application Entry Point
Creates the Flask app and registers the quote routes Blueprint.
"""

import os
import time
import logging

from flask import Flask, request

log = logging.getLogger("eagles")


def create_app(configure_logging=True):
    """Application factory."""
    if configure_logging:
        from logging_config import setup_logging
        setup_logging()

    app = Flask(__name__)
    app.secret_key = os.environ.get("SECRET_KEY", "eagles-events-dev")

    from eagles.core.paths import validate_paths
    checks = validate_paths()
    if not checks["ok"]:
        log.error("STARTUP: path checks FAILED: %s", "; ".join(checks["errors"]))

    from eagles.api.routes_quotes import bp
    app.register_blueprint(bp)

    # ── Request-level structured logging ──────────────────────────────────────
    @app.before_request
    def _log_request_start():
        request.environ["eagles.start"] = time.time()

    @app.after_request
    def _log_request_end(response):
        start = request.environ.get("eagles.start")
        if start is not None and request.path != "/api/health":
            duration_ms = round((time.time() - start) * 1000, 1)
            logging.getLogger("eagles.api").info(
                "%s %s -> %d (%.0fms)",
                request.method, request.path, response.status_code, duration_ms,
                extra={"route": request.path, "method": request.method,
                       "status": response.status_code, "duration_ms": duration_ms,
                       "quote_id": (request.view_args or {}).get("qid")})
        return response

    return app


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    create_app().run(host="0.0.0.0", port=port,
                     debug=os.environ.get("FLASK_DEBUG", "").lower() == "true")
