# backend/georef/services/clientlog/format.py
from datetime import datetime
from typing import Any, Optional
import logging
import pprint

from georef.services.storage.snapshots import iso_timestamp

# nesting levels shown below the top-level value
DETAILS_DEPTH = 3

LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
}


def python_log_level(level: Any) -> int:
    # unknown levels are relayed as plain INFO lines
    return LEVELS.get(level, logging.INFO) if isinstance(level, str) else logging.INFO


def render_details(details: Any) -> str:
    if details is None:
        return ""
    return pprint.pformat(details, depth=DETAILS_DEPTH + 1, compact=True, sort_dicts=False)


def format_client_log(level: Any, message: Any, details: Any, now: Optional[datetime] = None) -> str:
    prefix = f"[client][{iso_timestamp(now)}][{str(level).upper()}]"
    return f"{prefix} {message} {render_details(details)}".strip()
