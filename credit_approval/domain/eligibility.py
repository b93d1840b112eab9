"""Eligibility decision engine - orchestrates scoring, pricing and approval"""

from datetime import date
from typing import List, Optional, Tuple
from credit_approval.domain.models import (
    Customer,
    CreditScore,
    EligibilityVerdict,
    LoanRecord,
    LoanStatus,
    OUTSTANDING_STATUSES,
    OPEN_APPLICATION_STATUSES,
)
from credit_approval.domain.exceptions import NotFoundError, ConflictError
from credit_approval.domain.ports import CustomerStore, LoanStore, CreditScoreStore
from credit_approval.domain.scoring import calculate_credit_score
from credit_approval.domain.amortization import calculate_monthly_payment
from credit_approval.domain.policy import (
    determine_interest_rate,
    evaluate_policy,
    approval_probability,
    is_approved,
)
from credit_approval.domain.loan_status import transition
from credit_approval.utils.date_utils import add_months


class EligibilityService:
    """
    Stateless decision service over injected data stores.

    Stores are only flushed to; committing is the caller's unit of work.
    """

    def __init__(self, customers: CustomerStore, loans: LoanStore, scores: CreditScoreStore):
        self.customers = customers
        self.loans = loans
        self.scores = scores

    def _require_customer(self, customer_id: int) -> Customer:
        customer = self.customers.get_customer(customer_id)
        if customer is None:
            raise NotFoundError(f"Customer {customer_id} not found")
        return customer

    def get_or_create_credit_score(self, customer: Customer) -> CreditScore:
        """
        Return the cached score, computing and persisting it on first use.

        The cached score is never recomputed, so later loan activity does not
        move it.
        """
        cached = self.scores.get_credit_score(customer.customer_id)
        if cached is not None:
            return cached

        history = self.loans.list_loans(customer.customer_id)
        score = calculate_credit_score(customer, history)
        return self.scores.create_credit_score(customer.customer_id, score)

    def current_emis(self, customer_id: int) -> float:
        """Sum of monthly payments still owed on APPROVED/ACTIVE loans"""
        outstanding = self.loans.list_loans(customer_id, statuses=OUTSTANDING_STATUSES)
        return sum(loan.monthly_payment for loan in outstanding)

    def check_eligibility(self, customer_id: int, loan_amount: float, tenure: int) -> EligibilityVerdict:
        """
        Decide whether a customer qualifies for a loan and at what price.

        Flow:
        1. Load customer (NotFoundError if absent)
        2. Get cached credit score or compute and cache it
        3. Sum EMIs on outstanding loans
        4. Price the loan: score tier + debt surcharge
        5. Compute the new installment at that rate
        6. Check approved limit and affordability
        7. Map to approval probability; approve at 60+
        """
        customer = self._require_customer(customer_id)
        credit_score = self.get_or_create_credit_score(customer).score
        emis = self.current_emis(customer_id)

        interest_rate = determine_interest_rate(credit_score, emis, customer.monthly_income)
        monthly_payment = calculate_monthly_payment(loan_amount, interest_rate, tenure)

        policy = evaluate_policy(
            score=credit_score,
            current_emis=emis,
            monthly_income=customer.monthly_income,
            loan_amount=loan_amount,
            approved_limit=customer.approved_limit,
            new_payment=monthly_payment,
        )
        probability = approval_probability(policy.is_within_limit, policy.can_afford, credit_score)

        return EligibilityVerdict(
            customer_id=customer_id,
            credit_score=credit_score,
            approval=is_approved(probability),
            approval_probability=probability,
            interest_rate=round(policy.interest_rate, 2),
            corrected_interest_rate=round(policy.interest_rate, 2),
            tenure=tenure,
            monthly_payment=monthly_payment,
        )

    def create_loan(
        self,
        customer_id: int,
        loan_amount: float,
        tenure: int,
        today: Optional[date] = None,
    ) -> LoanRecord:
        """Record a loan application; see submit_loan"""
        loan, _ = self.submit_loan(customer_id, loan_amount, tenure, today)
        return loan

    def submit_loan(
        self,
        customer_id: int,
        loan_amount: float,
        tenure: int,
        today: Optional[date] = None,
    ) -> Tuple[LoanRecord, EligibilityVerdict]:
        """
        Run an eligibility check and record the application.

        The loan is stored APPROVED or REJECTED depending on the verdict,
        which is returned alongside it.

        Raises:
            NotFoundError: Unknown customer
            ConflictError: Same amount and tenure already pending, approved or active
        """
        self._require_customer(customer_id)

        existing = self.loans.find_loan(customer_id, loan_amount, tenure, OPEN_APPLICATION_STATUSES)
        if existing is not None:
            raise ConflictError(
                f"Similar loan application already exists for customer {customer_id} (loan {existing.loan_id})"
            )

        verdict = self.check_eligibility(customer_id, loan_amount, tenure)

        start_date = today or date.today()
        record = LoanRecord(
            customer_id=customer_id,
            loan_amount=loan_amount,
            interest_rate=verdict.interest_rate,
            tenure=tenure,
            monthly_payment=verdict.monthly_payment,
            emis_paid_on_time=0,
            status=LoanStatus.APPROVED if verdict.approval else LoanStatus.REJECTED,
            start_date=start_date,
            end_date=add_months(start_date, tenure),
        )
        return self.loans.create_loan(record), verdict

    def get_loan(self, loan_id: int) -> LoanRecord:
        loan = self.loans.get_loan(loan_id)
        if loan is None:
            raise NotFoundError(f"Loan {loan_id} not found")
        return loan

    def get_loan_with_customer(self, loan_id: int) -> Tuple[LoanRecord, Customer]:
        """
        Raises:
            NotFoundError: Unknown loan, or its borrower no longer exists
        """
        loan = self.get_loan(loan_id)
        return loan, self._require_customer(loan.customer_id)

    def list_customer_loans(self, customer_id: int) -> List[LoanRecord]:
        """All loans for a customer, newest first"""
        self._require_customer(customer_id)
        return self.loans.list_loans(customer_id)

    def update_loan_status(self, loan_id: int, status: LoanStatus) -> LoanRecord:
        """Move a loan along its lifecycle (see domain.loan_status)"""
        loan = self.get_loan(loan_id)
        transition(loan.status, status)
        return self.loans.update_loan_status(loan_id, status)
