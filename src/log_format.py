"""
Structured key=value logging for the resolver modules.
"""

import json
import logging
import sys
from datetime import UTC, datetime

from config import Config

# Extra fields the resolver attaches to its log records
EXTRA_FIELDS = (
    "domain",
    "ip",
    "hosts",
    "elapsed_ms",
    "nameserver",
)


class StructuredFormatter(logging.Formatter):
    """Key=value structured logging formatter for readability on all consoles."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
        }

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        parts = [
            f"{k}={json.dumps(v) if isinstance(v, (str, list)) else v}" for k, v in log_data.items()
        ]
        return " ".join(parts)


def setup_logging(level: str | None = None, name: str | None = None) -> logging.Logger:
    """
    Attach a structured stdout handler to a logger.

    Args:
        level: Level name (default: Config.LOG_LEVEL).
        name: Logger name (default: the root logger).

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, (level or Config.LOG_LEVEL).upper()))
    if not any(isinstance(h.formatter, StructuredFormatter) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
    return logger
