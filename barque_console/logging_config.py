from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT_ENV = "BARQUE_CONSOLE_LOG_FORMAT"
PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _build_formatter(format_mode: str) -> logging.Formatter:
    if format_mode == "plain":
        return logging.Formatter(PLAIN_FORMAT)
    # structured `extra={...}` fields end up as top-level JSON keys
    return JsonFormatter(JSON_FIELDS)


def configure_logging(
        level: int = logging.INFO,
        force_format: Optional[str] = None,
) -> None:
    """
    Configure the root logger for the console.

    JSON lines by default, plain text for local work. The mode comes from
    `force_format` ("json" / "plain") when given, else from
    BARQUE_CONSOLE_LOG_FORMAT, else "json".
    """
    format_mode = force_format or os.getenv(LOG_FORMAT_ENV, "json")

    handler = logging.StreamHandler()
    handler.setFormatter(_build_formatter(format_mode.lower()))

    root = logging.getLogger()
    root.setLevel(level)
    # Replace any existing handlers to avoid duplicate logs
    root.handlers.clear()
    root.addHandler(handler)
