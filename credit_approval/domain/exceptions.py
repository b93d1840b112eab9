"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NotFoundError(DomainException):
    """Customer or loan does not exist"""

    pass


class ConflictError(DomainException):
    """Duplicate loan application or already registered phone number"""

    pass


class InvalidInputError(DomainException):
    """Non-positive principal or tenure, or negative rate, passed to amortization"""

    pass


class InvalidTransitionError(DomainException):
    """Loan status change not permitted by the lifecycle"""

    pass
