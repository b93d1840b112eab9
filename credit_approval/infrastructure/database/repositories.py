"""Data access layer for customers, loans and credit scores"""

from typing import List, Optional, Sequence
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from credit_approval.infrastructure.database.models import CustomerRow, LoanRow, CreditScoreRow
from credit_approval.domain.models import Customer, CreditScore, LoanRecord, LoanStatus
from credit_approval.domain.exceptions import NotFoundError


def _to_customer(row: CustomerRow) -> Customer:
    return Customer(
        customer_id=row.customer_id,
        first_name=row.first_name,
        last_name=row.last_name,
        age=row.age,
        phone_number=row.phone_number,
        monthly_income=row.monthly_income,
        approved_limit=row.approved_limit,
    )


def _to_loan(row: LoanRow) -> LoanRecord:
    return LoanRecord(
        loan_id=row.loan_id,
        customer_id=row.customer_id,
        loan_amount=row.loan_amount,
        interest_rate=row.interest_rate,
        tenure=row.tenure,
        monthly_payment=row.monthly_payment,
        emis_paid_on_time=row.emis_paid_on_time or 0,
        status=row.status,
        start_date=row.start_date,
        end_date=row.end_date,
    )


class CustomerRepository:
    """Repository for customers"""

    def __init__(self, db: Session):
        self.db = db

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        row = self.db.get(CustomerRow, customer_id)
        return _to_customer(row) if row else None

    def get_customer_by_phone(self, phone_number: str) -> Optional[Customer]:
        row = (
            self.db.query(CustomerRow)
            .filter(CustomerRow.phone_number == phone_number)
            .first()
        )
        return _to_customer(row) if row else None

    def create_customer(
        self,
        first_name: str,
        last_name: str,
        age: int,
        phone_number: str,
        monthly_income: float,
        approved_limit: float,
    ) -> Customer:
        """Persist a new customer"""
        row = CustomerRow(
            first_name=first_name,
            last_name=last_name,
            age=age,
            phone_number=phone_number,
            monthly_income=monthly_income,
            approved_limit=approved_limit,
        )
        self.db.add(row)
        self.db.flush()  # Get ID without committing
        return _to_customer(row)


class LoanRepository:
    """Repository for loans"""

    def __init__(self, db: Session):
        self.db = db

    def list_loans(self, customer_id: int, statuses: Optional[Sequence[LoanStatus]] = None) -> List[LoanRecord]:
        """Fetch a customer's loans, newest first, optionally filtered by status"""
        query = self.db.query(LoanRow).filter(LoanRow.customer_id == customer_id)
        if statuses is not None:
            query = query.filter(LoanRow.status.in_(list(statuses)))
        rows = query.order_by(LoanRow.created_at.desc(), LoanRow.loan_id.desc()).all()
        return [_to_loan(row) for row in rows]

    def get_loan(self, loan_id: int) -> Optional[LoanRecord]:
        row = self.db.get(LoanRow, loan_id)
        return _to_loan(row) if row else None

    def find_loan(
        self,
        customer_id: int,
        loan_amount: float,
        tenure: int,
        statuses: Sequence[LoanStatus],
    ) -> Optional[LoanRecord]:
        """Find an application matching customer, amount and tenure in one of the given states"""
        row = (
            self.db.query(LoanRow)
            .filter(
                LoanRow.customer_id == customer_id,
                LoanRow.loan_amount == loan_amount,
                LoanRow.tenure == tenure,
                LoanRow.status.in_(list(statuses)),
            )
            .first()
        )
        return _to_loan(row) if row else None

    def create_loan(self, record: LoanRecord) -> LoanRecord:
        row = LoanRow(
            customer_id=record.customer_id,
            loan_amount=record.loan_amount,
            interest_rate=record.interest_rate,
            tenure=record.tenure,
            monthly_payment=record.monthly_payment,
            emis_paid_on_time=record.emis_paid_on_time,
            start_date=record.start_date,
            end_date=record.end_date,
            status=record.status,
        )
        self.db.add(row)
        self.db.flush()
        return _to_loan(row)

    def update_loan_status(self, loan_id: int, status: LoanStatus) -> LoanRecord:
        row = self.db.get(LoanRow, loan_id)
        if row is None:
            raise NotFoundError(f"Loan {loan_id} not found")
        row.status = status
        self.db.flush()
        return _to_loan(row)


class CreditScoreRepository:
    """Repository for cached credit scores"""

    def __init__(self, db: Session):
        self.db = db

    def get_credit_score(self, customer_id: int) -> Optional[CreditScore]:
        row = (
            self.db.query(CreditScoreRow)
            .filter(CreditScoreRow.customer_id == customer_id)
            .first()
        )
        return CreditScore(customer_id=row.customer_id, score=row.score) if row else None

    def create_credit_score(self, customer_id: int, score: int) -> CreditScore:
        """
        Insert a score unless one already exists.

        Two first-time checks for the same customer can both miss the cache;
        the unique constraint rejects the second insert, which then returns
        the stored score instead.
        """
        existing = self.get_credit_score(customer_id)
        if existing is not None:
            return existing

        try:
            with self.db.begin_nested():
                self.db.add(CreditScoreRow(customer_id=customer_id, score=score))
        except IntegrityError:
            existing = self.get_credit_score(customer_id)
            if existing is None:
                raise
            return existing

        return CreditScore(customer_id=customer_id, score=score)
