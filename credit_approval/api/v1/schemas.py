"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from typing import List, Optional
from credit_approval.domain.models import LoanStatus


class RegisterCustomerRequest(BaseModel):
    """Request body for POST /api/customers/register"""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    age: int = Field(..., gt=0)
    phone_number: str = Field(..., min_length=1, max_length=20)
    monthly_income: float = Field(..., gt=0, description="Monthly income")


class CustomerResponse(BaseModel):
    """Registered customer"""

    customer_id: int
    name: str
    first_name: str
    last_name: str
    age: int
    phone_number: str
    monthly_income: float
    approved_limit: float


class EligibilityRequest(BaseModel):
    """Request body for POST /api/loans/check-eligibility"""

    customer_id: int = Field(..., gt=0)
    loan_amount: float = Field(..., gt=0)
    tenure: int = Field(..., gt=0, description="Loan tenure in months")
    interest_rate: Optional[float] = Field(None, gt=0, description="Rate the customer asked for")


class EligibilityResponse(BaseModel):
    """Response for POST /api/loans/check-eligibility"""

    customer_id: int
    credit_score: int
    approval: bool
    approval_probability: int
    interest_rate: float
    corrected_interest_rate: float
    tenure: int
    monthly_installment: float


class CreateLoanRequest(BaseModel):
    """Request body for POST /api/loans/create"""

    customer_id: int = Field(..., gt=0)
    loan_amount: float = Field(..., gt=0)
    tenure: int = Field(..., gt=0, description="Loan tenure in months")


class LoanResponse(BaseModel):
    """Single loan record"""

    loan_id: int
    customer_id: int
    loan_amount: float
    interest_rate: float
    monthly_payment: float
    tenure: int
    emis_paid_on_time: int
    start_date: date
    end_date: date
    status: LoanStatus


class CustomerSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    phone_number: str
    age: int


class LoanDetailResponse(LoanResponse):
    """Response for GET /api/loans/{loan_id}"""

    customer: CustomerSummary


class CustomerLoanItem(LoanResponse):
    repayments_left: int


class CustomerLoansResponse(BaseModel):
    """Response for GET /api/loans/customer/{customer_id}"""

    customer_id: int
    loans: List[CustomerLoanItem]


class LoanStatusUpdateRequest(BaseModel):
    """Request body for POST /api/loans/{loan_id}/status"""

    status: LoanStatus
