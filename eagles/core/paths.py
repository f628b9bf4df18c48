"""
eagles/core/paths.py - Centralized Path Configuration

Every module imports its locations from here instead of computing its own.
DATA_DIR resolves from EAGLES_DATA_DIR, falling back to <project>/data.
"""

import os
import logging

log = logging.getLogger("eagles.paths")

# ── Project Root ──────────────────────────────────────────────────────────────
_THIS_FILE = os.path.abspath(__file__)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(_THIS_FILE)))

_DEFAULT_DATA_DIR = os.path.join(PROJECT_ROOT, "data")


def _resolve_data_dir() -> str:
    env_dir = os.environ.get("EAGLES_DATA_DIR", "")
    if env_dir:
        return env_dir
    return _DEFAULT_DATA_DIR


DATA_DIR = _resolve_data_dir()


def validate_paths(data_dir: str = None) -> dict:
    """Startup check: DATA_DIR exists (created if needed) and is writable.

    Returns:
        {"ok": bool, "errors": [str], "resolved": {name: path}}
    """
    data_dir = data_dir or DATA_DIR
    result = {"ok": True, "errors": [], "resolved": {
        "PROJECT_ROOT": PROJECT_ROOT,
        "DATA_DIR": data_dir,
    }}
    try:
        os.makedirs(data_dir, exist_ok=True)
        test_file = os.path.join(data_dir, ".write_test")
        with open(test_file, "w") as f:
            f.write("ok")
        os.remove(test_file)
    except OSError as e:
        result["errors"].append(f"DATA_DIR not writable: {e}")
        result["ok"] = False
    if result["ok"]:
        log.info("DATA_DIR: %s", data_dir)
    else:
        log.error("Path validation failed: %s", "; ".join(result["errors"]))
    return result
