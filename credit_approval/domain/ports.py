"""Data store contracts the domain services depend on"""

from typing import List, Optional, Protocol, Sequence
from credit_approval.domain.models import Customer, CreditScore, LoanRecord, LoanStatus


class CustomerStore(Protocol):
    def get_customer(self, customer_id: int) -> Optional[Customer]: ...

    def get_customer_by_phone(self, phone_number: str) -> Optional[Customer]: ...

    def create_customer(
        self,
        first_name: str,
        last_name: str,
        age: int,
        phone_number: str,
        monthly_income: float,
        approved_limit: float,
    ) -> Customer: ...


class LoanStore(Protocol):
    def list_loans(
        self, customer_id: int, statuses: Optional[Sequence[LoanStatus]] = None
    ) -> List[LoanRecord]: ...

    def get_loan(self, loan_id: int) -> Optional[LoanRecord]: ...

    def find_loan(
        self, customer_id: int, loan_amount: float, tenure: int, statuses: Sequence[LoanStatus]
    ) -> Optional[LoanRecord]: ...

    def create_loan(self, record: LoanRecord) -> LoanRecord: ...

    def update_loan_status(self, loan_id: int, status: LoanStatus) -> LoanRecord: ...


class CreditScoreStore(Protocol):
    def get_credit_score(self, customer_id: int) -> Optional[CreditScore]: ...

    def create_credit_score(self, customer_id: int, score: int) -> CreditScore:
        """Create-if-absent: returns the existing score when another writer got there first"""
        ...
