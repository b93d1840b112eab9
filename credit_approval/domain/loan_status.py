"""Loan lifecycle transitions"""

from typing import Dict, FrozenSet
from credit_approval.domain.models import LoanStatus
from credit_approval.domain.exceptions import InvalidTransitionError

# REJECTED and PAID are terminal; a PAID loan never changes again
ALLOWED_TRANSITIONS: Dict[LoanStatus, FrozenSet[LoanStatus]] = {
    LoanStatus.PENDING: frozenset({LoanStatus.APPROVED, LoanStatus.REJECTED}),
    LoanStatus.APPROVED: frozenset({LoanStatus.ACTIVE, LoanStatus.REJECTED}),
    LoanStatus.ACTIVE: frozenset({LoanStatus.PAID}),
    LoanStatus.REJECTED: frozenset(),
    LoanStatus.PAID: frozenset(),
}


def can_transition(current: LoanStatus, target: LoanStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def transition(current: LoanStatus, target: LoanStatus) -> LoanStatus:
    """
    Validate a status change and return the new status.

    Raises:
        InvalidTransitionError: If the lifecycle does not allow current -> target
    """
    if not can_transition(current, target):
        raise InvalidTransitionError(f"Cannot move loan from {current.value} to {target.value}")
    return target
