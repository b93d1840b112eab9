"""Interest rate tiers, debt surcharge and affordability rules"""

from credit_approval.domain.models import PolicyDecision

DEBT_SURCHARGE_THRESHOLD = 0.5
DEBT_SURCHARGE = 2
MAX_EMI_TO_INCOME = 0.5
APPROVAL_THRESHOLD = 60


def determine_base_rate(score: int) -> float:
    """
    Map credit score to base annual interest rate (percent).

    Tiers (first match, descending):
    - 80+:   6% (excellent)
    - 60-79: 8% (good)
    - 40-59: 12% (fair)
    - <40:   16% (poor)
    """
    if score >= 80:
        return 6
    elif score >= 60:
        return 8
    elif score >= 40:
        return 12
    else:
        return 16


def determine_interest_rate(score: int, current_emis: float, monthly_income: float) -> float:
    """Base tier rate plus 2% when existing EMIs exceed half of income"""
    rate = determine_base_rate(score)
    if current_emis / monthly_income > DEBT_SURCHARGE_THRESHOLD:
        rate += DEBT_SURCHARGE
    return rate


def can_afford(current_emis: float, new_payment: float, monthly_income: float) -> bool:
    """Total EMIs including the new loan must stay within 50% of income"""
    return (current_emis + new_payment) / monthly_income <= MAX_EMI_TO_INCOME


def is_within_limit(loan_amount: float, approved_limit: float) -> bool:
    return loan_amount <= approved_limit


def evaluate_policy(
    score: int,
    current_emis: float,
    monthly_income: float,
    loan_amount: float,
    approved_limit: float,
    new_payment: float,
) -> PolicyDecision:
    """
    Build the decision context for a requested loan.

    The rate returned here is the same one the new installment must be
    computed with; callers compute new_payment from determine_interest_rate first.
    """
    return PolicyDecision(
        interest_rate=determine_interest_rate(score, current_emis, monthly_income),
        can_afford=can_afford(current_emis, new_payment, monthly_income),
        is_within_limit=is_within_limit(loan_amount, approved_limit),
    )


def approval_probability(within_limit: bool, affordable: bool, score: int) -> int:
    """
    Approval likelihood ladder (first match wins):

    - within limit, affordable, score >= 60: 100
    - within limit, score >= 50:              80
    - within limit, affordable:               60
    - within limit:                           30
    - otherwise:                               0
    """
    if within_limit and affordable and score >= 60:
        return 100
    elif within_limit and score >= 50:
        return 80
    elif within_limit and affordable:
        return 60
    elif within_limit:
        return 30
    return 0


def is_approved(probability: int) -> bool:
    return probability >= APPROVAL_THRESHOLD
