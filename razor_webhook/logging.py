from __future__ import annotations

import json
import logging

from .config import get_settings


class JsonFormatter(logging.Formatter):
    """Very small JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "event_type": getattr(record, "event_type", None),
            "account_id": getattr(record, "account_id", None),
            "category": getattr(record, "category", None),
            "sub_event": getattr(record, "sub_event", None),
            "latency_ms": getattr(record, "latency_ms", None),
        }
        return json.dumps(payload, default=str)


def configure_logging(level: str | int | None = None, fmt: str | None = None) -> None:
    """Configure logging.

    Default format is human friendly; ``RAZOR_WEBHOOK_LOG_FORMAT=json`` (or
    ``fmt="json"``) switches to structured JSON with the dispatch fields.
    """

    settings = get_settings()
    if level is None:
        level = settings.log_level.upper()
    fmt = (fmt or settings.log_format).lower()

    if fmt == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logging.basicConfig(level=level, handlers=[handler], force=True)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%H:%M:%S",
            force=True,
        )
