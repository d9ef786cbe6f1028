"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger.json import JsonFormatter


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "gpay-gateway"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def mask_email(email: str | None) -> str:
    """Keep the domain and first character of the local part"""
    if not email or "@" not in email:
        return "***"
    local, domain = email.split("@", 1)
    return f"{local[:1]}***@{domain}"


def log_subscription(
    request_id: str,
    email: str | None,
    success: bool,
    duration_ms: float,
    subscription_id: str | None = None,
    error: str | None = None,
) -> None:
    """Log structured subscription outcome; the payment token is never passed here"""
    logging.info(
        "Subscription request completed",
        extra={
            "request_id": request_id,
            "email": mask_email(email),
            "step": "subscription_complete",
            "outcome": "created" if success else "failed",
            "subscription_id": subscription_id,
            "error": error,
            "duration_ms": duration_ms,
        },
    )
