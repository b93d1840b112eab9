"""Prometheus metrics for monitoring approval rates, pricing and loan outcomes"""

from prometheus_client import Counter, Histogram

# Decision metrics
eligibility_counter = Counter(
    "credit_eligibility_checks_total",
    "Total eligibility checks made",
    ["outcome"],  # approved | declined
)

approval_probability_counter = Counter(
    "credit_approval_probability_total",
    "Eligibility checks by approval probability rung",
    ["probability"],  # 0 | 30 | 60 | 80 | 100
)

interest_rate_counter = Counter(
    "credit_interest_rate_total",
    "Interest rates quoted by tier",
    ["rate"],  # 6 | 8 | 12 | 16, plus surcharged 8 | 10 | 14 | 18
)

# Loan metrics
loans_created_counter = Counter(
    "credit_loans_created_total",
    "Loan applications recorded",
    ["status"],  # APPROVED | REJECTED
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_eligibility(approved: bool, approval_probability: int, interest_rate: float) -> None:
    """Record eligibility metrics for monitoring approval rates and rate distribution"""
    outcome = "approved" if approved else "declined"
    eligibility_counter.labels(outcome=outcome).inc()
    approval_probability_counter.labels(probability=str(approval_probability)).inc()
    interest_rate_counter.labels(rate=f"{interest_rate:g}").inc()


def record_loan_created(status: str) -> None:
    loans_created_counter.labels(status=status).inc()
