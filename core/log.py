"""Logging strutturato JSON su una riga per evento."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from config import LOG_LEVEL


class JsonFormatter(logging.Formatter):
    """Formatter JSON: timestamp, livello, logger, messaggio e campi extra."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Campi passati con extra={"extra_fields": {...}}
        if hasattr(record, "extra_fields"):
            log_obj.update(record.extra_fields)

        return json.dumps(log_obj, default=str)


def get_logger(name: str) -> logging.Logger:
    """Restituisce un logger con output JSON su stderr."""
    logger = logging.getLogger(name)

    # Configura solo la prima volta (evita handler duplicati ai rerun di Streamlit)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
        logger.setLevel(LOG_LEVEL)
        logger.propagate = False

    return logger
