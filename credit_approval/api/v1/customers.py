"""Customer registration and lookup endpoints"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from credit_approval.api.v1.schemas import RegisterCustomerRequest, CustomerResponse
from credit_approval.api.dependencies import get_customer_service, get_request_id
from credit_approval.infrastructure.database.session import get_db
from credit_approval.domain.customers import CustomerService
from credit_approval.domain.models import Customer
from credit_approval.domain.exceptions import ConflictError, NotFoundError

router = APIRouter()


def _customer_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        customer_id=customer.customer_id,
        name=customer.name,
        first_name=customer.first_name,
        last_name=customer.last_name,
        age=customer.age,
        phone_number=customer.phone_number,
        monthly_income=customer.monthly_income,
        approved_limit=customer.approved_limit,
    )


@router.post("/register", response_model=CustomerResponse, status_code=201)
def register_customer(
    request_body: RegisterCustomerRequest,
    request: Request,
    db: Session = Depends(get_db),
    service: CustomerService = Depends(get_customer_service),
):
    """
    Register a new customer.

    Approved limit is fixed at registration as 36x monthly income.
    """
    request_id = get_request_id(request)

    try:
        customer = service.register_customer(
            first_name=request_body.first_name,
            last_name=request_body.last_name,
            age=request_body.age,
            phone_number=request_body.phone_number,
            monthly_income=request_body.monthly_income,
        )
        db.commit()

    except ConflictError as e:
        db.rollback()
        logging.warning(f"Registration rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail="Phone number already registered")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    logging.info(
        "Customer registered",
        extra={"request_id": request_id, "customer_id": customer.customer_id},
    )
    return _customer_response(customer)


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    try:
        customer = service.get_customer(customer_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Customer not found")

    return _customer_response(customer)
