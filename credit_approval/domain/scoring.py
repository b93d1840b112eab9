"""Credit score estimator - core business logic for creditworthiness"""

import math
from typing import List, Sequence
from credit_approval.domain.models import Customer, LoanRecord, LoanStatus, OUTSTANDING_STATUSES

BASE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def income_score(monthly_income: float) -> float:
    """
    Score a first-time applicant purely on income capacity.

    10 points per 10,000 of monthly income, capped at 30.
    """
    return min(monthly_income / 10000 * 10, 30)


def payment_history_score(loan_history: Sequence[LoanRecord]) -> int:
    """
    Reward on-time repayment across fully paid loans.

    ratio = EMIs paid on time / total EMIs over PAID loans, worth up to 30 points.
    No PAID loans means the ratio is undefined and nothing is added.
    """
    paid_loans = [loan for loan in loan_history if loan.status == LoanStatus.PAID]
    total_emis = sum(loan.tenure for loan in paid_loans)
    if not paid_loans or total_emis <= 0:
        return 0

    on_time_emis = sum(loan.emis_paid_on_time for loan in paid_loans)
    return _round_half_up(on_time_emis / total_emis * 30)


def volume_score(loan_history: Sequence[LoanRecord]) -> int:
    """Bonus for an established borrowing history"""
    if len(loan_history) >= 5:
        return 10
    elif len(loan_history) >= 3:
        return 5
    return 0


def debt_ratio_adjustment(debt_ratio: float) -> int:
    """
    Map debt-to-income ratio to a score adjustment.

    Buckets (evaluated in order, mutually exclusive):
    - > 0.6: -20 (over-leveraged)
    - > 0.4: -10
    - < 0.2: +10 (light debt load)
    - 0.2 - 0.4: no adjustment
    """
    if debt_ratio > 0.6:
        return -20
    elif debt_ratio > 0.4:
        return -10
    elif debt_ratio < 0.2:
        return 10
    return 0


def debt_load_score(customer: Customer, loan_history: Sequence[LoanRecord]) -> int:
    """Adjust for installments still owed on APPROVED/ACTIVE loans"""
    outstanding = [loan for loan in loan_history if loan.status in OUTSTANDING_STATUSES]
    if not outstanding:
        return 0

    total_emis = sum(loan.monthly_payment for loan in outstanding)
    return debt_ratio_adjustment(total_emis / customer.monthly_income)


def calculate_credit_score(customer: Customer, loan_history: List[LoanRecord]) -> int:
    """
    Calculate credit score from 0 (highest risk) to 100 (lowest risk).

    Starts at a base of 50, then:
    - No history: + income capacity (max 30), nothing else applies
    - Payment history over PAID loans (max +30)
    - Loan volume (+5 for 3+ loans, +10 for 5+)
    - Debt load over APPROVED/ACTIVE loans (-20 to +10)

    Pure function: persisting the result is the caller's job.
    """
    score = BASE_SCORE

    if not loan_history:
        return max(MIN_SCORE, min(MAX_SCORE, _round_half_up(score + income_score(customer.monthly_income))))

    score += payment_history_score(loan_history)
    score += volume_score(loan_history)
    score += debt_load_score(customer, loan_history)

    return max(MIN_SCORE, min(MAX_SCORE, score))
