"""Structured JSON logging for the upload guard."""
from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any, Dict

_EXTRA_FIELDS = ("client_ip", "path", "status")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with request fields when the caller set them."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attr in _EXTRA_FIELDS:
            value = getattr(record, attr, None)
            if value is not None:
                payload[attr] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def resolve_level(level: str | int) -> int:
    """Turn ``"debug"``/``"WARNING"``/``10`` into a logging level number."""

    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise RuntimeError(f"Unknown log level: {level}")
    return value


def configure_logging(level: str | int = "INFO") -> None:
    """Send JSON records at ``level`` and above to stderr."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=resolve_level(level), handlers=[handler], force=True)
