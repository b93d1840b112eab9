"""Loan eligibility, application and lookup endpoints"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from credit_approval.api.v1.schemas import (
    EligibilityRequest,
    EligibilityResponse,
    CreateLoanRequest,
    LoanResponse,
    LoanDetailResponse,
    CustomerSummary,
    CustomerLoanItem,
    CustomerLoansResponse,
    LoanStatusUpdateRequest,
)
from credit_approval.api.dependencies import get_eligibility_service, get_request_id
from credit_approval.infrastructure.database.session import get_db
from credit_approval.domain.eligibility import EligibilityService
from credit_approval.domain.models import LoanRecord
from credit_approval.domain.exceptions import (
    NotFoundError,
    ConflictError,
    InvalidInputError,
    InvalidTransitionError,
)
from credit_approval.infrastructure.observability.metrics import record_eligibility, record_loan_created
from credit_approval.infrastructure.observability.logging import log_eligibility, log_loan_created

router = APIRouter()


def _loan_fields(loan: LoanRecord) -> dict:
    return {
        "loan_id": loan.loan_id,
        "customer_id": loan.customer_id,
        "loan_amount": loan.loan_amount,
        "interest_rate": loan.interest_rate,
        "monthly_payment": loan.monthly_payment,
        "tenure": loan.tenure,
        "emis_paid_on_time": loan.emis_paid_on_time,
        "start_date": loan.start_date,
        "end_date": loan.end_date,
        "status": loan.status,
    }


@router.post("/check-eligibility", response_model=EligibilityResponse)
def check_eligibility(
    request_body: EligibilityRequest,
    request: Request,
    db: Session = Depends(get_db),
    service: EligibilityService = Depends(get_eligibility_service),
):
    """
    Check whether a customer qualifies for a loan.

    Flow:
    1. Load customer and cached (or freshly computed) credit score
    2. Price the loan from score tier and current debt load
    3. Compute monthly installment and affordability
    4. Return approval, probability and the corrected rate

    A requested interest_rate is echoed back; corrected_interest_rate is
    the rate the policy actually assigns.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        verdict = service.check_eligibility(
            request_body.customer_id,
            request_body.loan_amount,
            request_body.tenure,
        )
        # Persists a freshly computed credit score
        db.commit()

    except NotFoundError as e:
        db.rollback()
        logging.warning(f"Eligibility check failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Customer not found")

    except InvalidInputError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_eligibility(verdict.approval, verdict.approval_probability, verdict.interest_rate)
    log_eligibility(request_id, verdict, duration_ms)

    requested_rate = request_body.interest_rate
    return EligibilityResponse(
        customer_id=verdict.customer_id,
        credit_score=verdict.credit_score,
        approval=verdict.approval,
        approval_probability=verdict.approval_probability,
        interest_rate=requested_rate if requested_rate is not None else verdict.interest_rate,
        corrected_interest_rate=verdict.corrected_interest_rate,
        tenure=verdict.tenure,
        monthly_installment=verdict.monthly_payment,
    )


@router.post("/create", response_model=LoanResponse, status_code=201)
def create_loan(
    request_body: CreateLoanRequest,
    request: Request,
    db: Session = Depends(get_db),
    service: EligibilityService = Depends(get_eligibility_service),
):
    """
    Submit a loan application.

    The loan is recorded as APPROVED or REJECTED according to the
    eligibility verdict. Identical open applications are refused with 409.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        loan, verdict = service.submit_loan(
            request_body.customer_id,
            request_body.loan_amount,
            request_body.tenure,
        )
        db.commit()

    except NotFoundError as e:
        db.rollback()
        logging.warning(f"Loan creation failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Customer not found")

    except ConflictError as e:
        db.rollback()
        logging.warning(f"Duplicate loan application: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=409,
            detail="A similar loan application already exists for this customer",
        )

    except InvalidInputError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_loan_created(loan.status.value)
    log_loan_created(request_id, loan, verdict, duration_ms)

    return LoanResponse(**_loan_fields(loan))


@router.get("/customer/{customer_id}", response_model=CustomerLoansResponse)
def get_customer_loans(customer_id: int, service: EligibilityService = Depends(get_eligibility_service)):
    """All loans for a customer, newest first, with repayments left"""
    try:
        loans = service.list_customer_loans(customer_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Customer not found")

    return CustomerLoansResponse(
        customer_id=customer_id,
        loans=[CustomerLoanItem(**_loan_fields(loan), repayments_left=loan.repayments_left) for loan in loans],
    )


@router.get("/{loan_id}", response_model=LoanDetailResponse)
def get_loan(loan_id: int, service: EligibilityService = Depends(get_eligibility_service)):
    """Loan details with a summary of the borrower"""
    try:
        loan, customer = service.get_loan_with_customer(loan_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Loan not found")

    return LoanDetailResponse(
        **_loan_fields(loan),
        customer=CustomerSummary(
            id=customer.customer_id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            phone_number=customer.phone_number,
            age=customer.age,
        ),
    )


@router.post("/{loan_id}/status", response_model=LoanResponse)
def update_loan_status(
    loan_id: int,
    request_body: LoanStatusUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
    service: EligibilityService = Depends(get_eligibility_service),
):
    """Advance a loan along PENDING -> APPROVED -> ACTIVE -> PAID"""
    request_id = get_request_id(request)

    try:
        loan = service.update_loan_status(loan_id, request_body.status)
        db.commit()

    except NotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Loan not found")

    except InvalidTransitionError as e:
        db.rollback()
        logging.warning(f"Rejected status change: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    logging.info(
        "Loan status updated",
        extra={"request_id": request_id, "loan_id": loan_id, "status": loan.status.value},
    )
    return LoanResponse(**_loan_fields(loan))
