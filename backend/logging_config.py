"""
JSON log lines on stdout for the API and the Dash frontend.
"""

import json
import logging
import sys
from datetime import datetime

SERVICE_NAME = "disaster-risk-early-warning"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, tagged with the service name."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.utcfromtimestamp(record.created).isoformat() + "Z",
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO") -> None:
    """
    Route every logger through a single stdout handler using JSONFormatter.

    Unknown level names fall back to INFO.
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    root_logger.addHandler(handler)

    for noisy in ("sqlalchemy.engine", "urllib3", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
