"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from credit_approval.config import settings
from credit_approval.domain.models import EligibilityVerdict, LoanRecord


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


def log_eligibility(request_id: str, verdict: EligibilityVerdict, duration_ms: float) -> None:
    """Log structured eligibility outcome for analysis"""
    logging.info(
        "Eligibility checked",
        extra={
            "request_id": request_id,
            "customer_id": verdict.customer_id,
            "step": "eligibility_complete",
            "outcome": "approved" if verdict.approval else "declined",
            "approval_probability": verdict.approval_probability,
            "credit_score": verdict.credit_score,
            "interest_rate": verdict.interest_rate,
            "duration_ms": duration_ms,
        },
    )


def log_loan_created(request_id: str, loan: LoanRecord, verdict: EligibilityVerdict, duration_ms: float) -> None:
    """Log a persisted loan application with the verdict that decided it"""
    logging.info(
        "Loan created",
        extra={
            "request_id": request_id,
            "customer_id": loan.customer_id,
            "loan_id": loan.loan_id,
            "step": "loan_created",
            "outcome": loan.status.value,
            "approval_probability": verdict.approval_probability,
            "credit_score": verdict.credit_score,
            "loan_amount": loan.loan_amount,
            "tenure": loan.tenure,
            "duration_ms": duration_ms,
        },
    )
