"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from credit_engine.config import settings


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

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_score(
    request_id: str,
    user_id: str,
    score: int,
    risk_level: str,
    duration_ms: float,
) -> None:
    """Log structured individual scoring outcome for analysis"""
    logging.info(
        "Credit score calculated",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "score_complete",
            "score": score,
            "risk_level": risk_level,
            "duration_ms": duration_ms,
        },
    )


def log_group_score(
    request_id: str,
    requested_members: int,
    scored_members: int,
    group_score: int,
    duration_ms: float,
) -> None:
    """Log structured group scoring outcome"""
    logging.info(
        "Group credit score calculated",
        extra={
            "request_id": request_id,
            "step": "group_score_complete",
            "requested_members": requested_members,
            "scored_members": scored_members,
            "group_score": group_score,
            "duration_ms": duration_ms,
        },
    )
