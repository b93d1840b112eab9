"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class LoanStatus(str, Enum):
    """Lifecycle state of a loan record"""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    ACTIVE = "ACTIVE"
    PAID = "PAID"


# Loans whose installments still weigh on the customer's income
OUTSTANDING_STATUSES = (LoanStatus.APPROVED, LoanStatus.ACTIVE)

# Open applications that block an identical resubmission
OPEN_APPLICATION_STATUSES = (LoanStatus.PENDING, LoanStatus.APPROVED, LoanStatus.ACTIVE)


@dataclass
class Customer:
    """Registered borrower"""

    customer_id: int
    first_name: str
    last_name: str
    age: int
    phone_number: str
    monthly_income: float
    approved_limit: float  # 36 x monthly income at registration

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class LoanRecord:
    """Historical or newly requested loan"""

    customer_id: int
    loan_amount: float
    interest_rate: float
    tenure: int  # months
    monthly_payment: float
    emis_paid_on_time: int
    status: LoanStatus
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    loan_id: Optional[int] = None

    @property
    def repayments_left(self) -> int:
        return max(self.tenure - self.emis_paid_on_time, 0)


@dataclass
class CreditScore:
    """Cached creditworthiness score, 0 (worst) to 100 (best)"""

    customer_id: int
    score: int


@dataclass
class PolicyDecision:
    """Rate and affordability context for a requested loan"""

    interest_rate: float
    can_afford: bool
    is_within_limit: bool


@dataclass
class EligibilityVerdict:
    """Output of an eligibility check, never persisted"""

    customer_id: int
    credit_score: int
    approval: bool
    approval_probability: int
    interest_rate: float
    corrected_interest_rate: float
    tenure: int
    monthly_payment: float
