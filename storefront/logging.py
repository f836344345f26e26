"""
Logging setup for applications embedding the client.

Library modules only call `logging.getLogger(__name__)`; handlers are
attached by `configure_logging()`, which `build_client()` calls once.
"""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Anything that can end a log line or hide text in it
_CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def configure_logging() -> None:
    """Attach a stdout handler at LOG_LEVEL, unless the root logger already has one."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.setLevel(level)
    root.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def sanitize_id_for_logging(id_value: str | int | None) -> str:
    """Identifiers from API payloads: control characters escaped, first 8 chars kept."""
    if id_value is None or id_value == "":
        return "N/A"
    return str(id_value).translate(_CONTROL_CHARS)[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Server messages and paths: control characters escaped, truncated with '...'."""
    if not value:
        return "N/A"
    safe_value = str(value).translate(_CONTROL_CHARS)
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "LOG_FORMAT",
    "configure_logging",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
