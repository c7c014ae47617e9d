"""
Content audit logger: one JSON line per content write, merge, upload or bulk reseed.
Writes to <log_dir>/content.log with timestamp, step, message, and details.
"""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from portfolio.core.config import get_settings

logger = logging.getLogger(__name__)

CONTENT_LOG_NAME = "content.log"
VALUE_PREVIEW_MAX = 500
LIST_PREVIEW_MAX = 50


def _safe_value(v: Any) -> Any:
    """Make value JSON-serializable and short enough for one log line."""
    if v is None or isinstance(v, (bool, int, float)):
        return v
    if isinstance(v, str):
        return v[:VALUE_PREVIEW_MAX]
    if isinstance(v, (list, tuple, set)):
        return [_safe_value(x) for x in list(v)[:LIST_PREVIEW_MAX]]
    if isinstance(v, dict):
        return {str(k): _safe_value(x) for k, x in list(v.items())[:LIST_PREVIEW_MAX]}
    return str(v)[:VALUE_PREVIEW_MAX]


def content_log_path() -> Path:
    return Path(get_settings().log_dir) / CONTENT_LOG_NAME


def log_content(step: str, message: str, **details: Any) -> None:
    """
    Append one line to content.log: timestamp, step, message, details (JSON).
    Documents themselves are never logged, only keys and URLs.
    """
    payload: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "step": step,
        "message": message,
    }
    for k, v in details.items():
        if v is not None and k not in payload:
            payload[k] = _safe_value(v)
    path = content_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(payload, ensure_ascii=False) + "\n")
            f.flush()
    except OSError as e:
        # The audit trail must never fail a content write.
        logger.warning("Could not write content log %s: %s", path, e)
