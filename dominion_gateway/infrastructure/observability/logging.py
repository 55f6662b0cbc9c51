"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from dominion_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_analytics(
    request_id: str,
    target_month: str,
    transaction_count: int,
    insight_count: int,
    duration_ms: float,
) -> None:
    """Log structured analytics outcome"""
    logging.info(
        "Spending analytics computed",
        extra={
            "request_id": request_id,
            "step": "analytics_complete",
            "target_month": target_month,
            "transaction_count": transaction_count,
            "insight_count": insight_count,
            "duration_ms": duration_ms,
        },
    )


def log_summary_fallback(request_id: str, reason: str, detail: str = "") -> None:
    """Log every switch from the AI narrative to the local summary"""
    logging.warning(
        "Falling back to local summary",
        extra={
            "request_id": request_id,
            "step": "summary_fallback",
            "reason": reason,
            "detail": detail,
        },
    )


def log_request(request_id: str, method: str, endpoint: str, status: int, duration_ms: float) -> None:
    """One access line per API call"""
    logging.info(
        f"{method} {endpoint} {status}",
        extra={
            "request_id": request_id,
            "step": "request_complete",
            "method": method,
            "endpoint": endpoint,
            "status": status,
            "duration_ms": round(duration_ms, 2),
        },
    )
