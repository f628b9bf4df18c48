"""
Logging setup for the Eagles Events quote service.

Call setup_logging() once at startup (create_app does it). Console output is
human-readable by default, JSON lines with JSON_LOGS=true; the rotating file
in DATA_DIR/logs is always JSON so it can be grepped by quote id.

Request and render log calls attach context through ``extra=``; only the
keys in CONTEXT_FIELDS are carried into the JSON entry.
"""
import logging
import logging.handlers
import os
import json
from datetime import datetime, timezone

from eagles.core import paths

# keys passed via extra= by app.py (request timing) and eagles.forms.quote_pdf
CONTEXT_FIELDS = ("quote_id", "route", "method", "status", "duration_ms")

LOG_FILE = "eagles.log"
LOG_MAX_BYTES = 5_000_000
LOG_BACKUPS = 5
QUIET_LOGGERS = ("werkzeug", "reportlab", "pdfminer")


def _context(record) -> dict:
    return {k: getattr(record, k) for k in CONTEXT_FIELDS
            if getattr(record, k, None) is not None}


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""
    def format(self, record):
        entry = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        entry.update(_context(record))
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """Coloured console lines, tagged with the quote id when one is attached."""
    COLORS = {
        "DEBUG": "\033[36m", "INFO": "\033[32m",
        "WARNING": "\033[33m", "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        color = self.COLORS.get(record.levelname, "")
        ts = datetime.now().strftime("%H:%M:%S")
        tag = f" [{record.quote_id}]" if getattr(record, "quote_id", None) else ""
        msg = (f"{color}{ts} [{record.levelname[0]}] {record.name}{tag}: "
               f"{record.getMessage()}{self.RESET}")
        if record.exc_info and record.exc_info[0]:
            msg += "\n" + self.formatException(record.exc_info)
        return msg


def _file_handler(log_dir):
    os.makedirs(log_dir, exist_ok=True)
    fh = logging.handlers.RotatingFileHandler(
        os.path.join(log_dir, LOG_FILE),
        maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS,
    )
    fh.setFormatter(JSONFormatter())
    return fh


def setup_logging(level=None, json_logs=None):
    """
    Configure the root logger.

    Args:
        level: level name (default: LOG_LEVEL env or INFO)
        json_logs: JSON console output (default: JSON_LOGS=true)
    """
    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO")
    level = str(level).upper()
    if json_logs is None:
        json_logs = os.environ.get("JSON_LOGS", "").lower() == "true"

    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(JSONFormatter() if json_logs else HumanFormatter())
    root.addHandler(console)

    log_dir = os.path.join(paths.DATA_DIR, "logs")
    try:
        root.addHandler(_file_handler(log_dir))
    except OSError:
        root.warning("File logging disabled: %s not writable", log_dir)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("eagles").info("Logging initialized (level=%s, json=%s)",
                                     level, json_logs)
