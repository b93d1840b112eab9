"""Fixed-installment (EMI) calculation for amortized loans"""

from credit_approval.domain.exceptions import InvalidInputError


def calculate_monthly_payment(principal: float, annual_rate: float, tenure: int) -> float:
    """
    Calculate the equated monthly installment for a loan.

    Formula (standard annuity):
        EMI = P * r * (1 + r)^n / ((1 + r)^n - 1)

    Where:
        P = principal
        r = monthly rate (annual_rate / 12 / 100)
        n = tenure in months

    A zero rate degenerates to an even split of the principal.

    Args:
        principal: Loan amount, must be positive
        annual_rate: Annual interest rate in percent, must not be negative
        tenure: Number of monthly installments, must be positive

    Returns:
        Monthly installment rounded to 2 decimal places

    Raises:
        InvalidInputError: On non-positive principal or tenure, negative rate,
            or a principal too small to yield at least 0.01 per month

    Example:
        100000 at 12% over 12 months -> 8884.88
    """
    if principal <= 0:
        raise InvalidInputError(f"Principal must be positive, got {principal}")
    if tenure <= 0:
        raise InvalidInputError(f"Tenure must be a positive number of months, got {tenure}")
    if annual_rate < 0:
        raise InvalidInputError(f"Interest rate cannot be negative, got {annual_rate}")

    monthly_rate = annual_rate / 12 / 100
    if monthly_rate == 0:
        payment = principal / tenure
    else:
        growth = (1 + monthly_rate) ** tenure
        payment = principal * monthly_rate * growth / (growth - 1)

    payment = round(payment, 2)
    if payment <= 0:
        raise InvalidInputError(f"Principal {principal} is too small to amortize over {tenure} months")

    return payment
