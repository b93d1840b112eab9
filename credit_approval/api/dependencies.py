"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from credit_approval.config import settings
from credit_approval.domain.customers import CustomerService
from credit_approval.domain.eligibility import EligibilityService
from credit_approval.infrastructure.database.session import get_db
from credit_approval.infrastructure.database.repositories import (
    CustomerRepository,
    LoanRepository,
    CreditScoreRepository,
)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    """Provide customer service bound to the request session"""
    return CustomerService(CustomerRepository(db), settings.approved_limit_multiplier)


def get_eligibility_service(db: Session = Depends(get_db)) -> EligibilityService:
    """Provide eligibility service bound to the request session"""
    return EligibilityService(
        customers=CustomerRepository(db),
        loans=LoanRepository(db),
        scores=CreditScoreRepository(db),
    )
