"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from envelope_gateway.domain.models import PaymentResult, PredictionSummary


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "envelope-gateway"


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


def log_prediction_run(request_id: str, summary: PredictionSummary, duration_ms: float) -> None:
    """Log structured outcome of one prediction request"""
    logging.info(
        "Predictions computed",
        extra={
            "request_id": request_id,
            "step": "prediction_complete",
            "envelope_count": summary.envelope_count,
            "critical_count": summary.critical,
            "behind_count": summary.behind,
            "total_shortfall_cents": summary.total_shortfall_cents,
            "duration_ms": duration_ms,
        },
    )


def log_payment_applied(
    request_id: str,
    envelope_id: str,
    result: PaymentResult,
    duration_ms: float,
) -> None:
    """Log structured debt payment outcome for bookkeeping"""
    logging.info(
        "Debt payment applied",
        extra={
            "request_id": request_id,
            "envelope_id": envelope_id,
            "step": "payment_applied",
            "payment_applied_cents": result.payment_applied_cents,
            "remaining_payment_cents": result.remaining_payment_cents,
            "paid_off_ids": [item.debt_id for item in result.paid_off_items],
            "failed_ids": [item.debt_id for item in result.failed_items],
            "duration_ms": duration_ms,
        },
    )
