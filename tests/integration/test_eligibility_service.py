"""Integration tests for the eligibility service against SQLite repositories"""

import pytest
from datetime import date
from sqlalchemy.orm import Session, sessionmaker
from credit_approval.domain.amortization import calculate_monthly_payment
from credit_approval.domain.eligibility import EligibilityService
from credit_approval.domain.exceptions import ConflictError, InvalidTransitionError, NotFoundError
from credit_approval.domain.models import LoanStatus
from credit_approval.infrastructure.database.models import CreditScoreRow
from credit_approval.infrastructure.database.repositories import CreditScoreRepository


def test_approval_ladder_example(db: Session, service: EligibilityService, make_customer):
    """Limit 100k, request 50k, score 65, no debt, income 20k, 12 months -> certain approval"""
    customer = make_customer(monthly_income=20000, approved_limit=100000)
    db.add(CreditScoreRow(customer_id=customer.customer_id, score=65))
    db.commit()

    verdict = service.check_eligibility(customer.customer_id, 50000, 12)

    assert verdict.credit_score == 65
    assert verdict.approval_probability == 100
    assert verdict.approval is True
    assert verdict.interest_rate == 8
    assert verdict.corrected_interest_rate == verdict.interest_rate
    assert verdict.tenure == 12
    assert verdict.monthly_payment == calculate_monthly_payment(50000, 8, 12)


def test_unknown_customer(service: EligibilityService):
    with pytest.raises(NotFoundError):
        service.check_eligibility(999, 50000, 12)


def test_score_computed_once_and_cached(db: Session, service: EligibilityService, make_customer, make_loan):
    """Later loan activity does not move a cached score"""
    customer = make_customer(monthly_income=10000)

    first = service.check_eligibility(customer.customer_id, 10000, 12)
    db.commit()
    assert first.credit_score == 60

    for _ in range(5):
        make_loan(customer.customer_id, status=LoanStatus.PAID)

    second = service.check_eligibility(customer.customer_id, 10000, 12)
    assert second.credit_score == 60
    assert db.query(CreditScoreRow).filter_by(customer_id=customer.customer_id).count() == 1


def test_create_credit_score_is_create_if_absent(db: Session, make_customer):
    customer = make_customer()
    scores = CreditScoreRepository(db)

    first = scores.create_credit_score(customer.customer_id, 70)
    second = scores.create_credit_score(customer.customer_id, 40)

    assert first.score == 70
    assert second.score == 70
    assert db.query(CreditScoreRow).count() == 1


def test_create_credit_score_returns_concurrent_winner(db: Session, make_customer, monkeypatch):
    """A score committed by another session after our cache miss wins the insert"""
    customer = make_customer()
    other = sessionmaker(bind=db.get_bind())()
    other.add(CreditScoreRow(customer_id=customer.customer_id, score=77))
    other.commit()
    other.close()

    scores = CreditScoreRepository(db)
    lookup = scores.get_credit_score
    misses = [None]
    monkeypatch.setattr(scores, "get_credit_score", lambda cid: misses.pop() if misses else lookup(cid))

    stored = scores.create_credit_score(customer.customer_id, 10)

    assert stored.score == 77
    assert db.query(CreditScoreRow).count() == 1


def test_debt_surcharge_raises_rate(service: EligibilityService, make_customer, make_loan):
    """EMIs of 55% of income: score 40 (fair, -10 debt) -> 12% + 2% surcharge"""
    customer = make_customer(monthly_income=20000)
    make_loan(customer.customer_id, status=LoanStatus.ACTIVE, monthly_payment=11000, emis_paid_on_time=3)

    verdict = service.check_eligibility(customer.customer_id, 10000, 12)

    assert verdict.credit_score == 40
    assert verdict.interest_rate == 14
    assert verdict.approval_probability == 30
    assert verdict.approval is False


def test_over_limit_request_rejected(service: EligibilityService, make_customer):
    customer = make_customer(monthly_income=20000, approved_limit=100000)

    verdict = service.check_eligibility(customer.customer_id, 150000, 12)

    assert verdict.approval_probability == 0
    assert verdict.approval is False


def test_create_loan_approved(service: EligibilityService, make_customer):
    customer = make_customer(monthly_income=20000)

    loan = service.create_loan(customer.customer_id, 50000, 12, today=date(2024, 1, 31))

    assert loan.loan_id is not None
    assert loan.status == LoanStatus.APPROVED
    assert loan.interest_rate == 8
    assert loan.monthly_payment == calculate_monthly_payment(50000, 8, 12)
    assert loan.emis_paid_on_time == 0
    assert loan.start_date == date(2024, 1, 31)
    assert loan.end_date == date(2025, 1, 31)


def test_create_loan_end_date_clamped(service: EligibilityService, make_customer):
    customer = make_customer(monthly_income=20000)
    loan = service.create_loan(customer.customer_id, 10000, 1, today=date(2024, 1, 31))
    assert loan.end_date == date(2024, 2, 29)


def test_duplicate_open_application_conflicts(service: EligibilityService, make_customer):
    customer = make_customer(monthly_income=20000)
    service.create_loan(customer.customer_id, 50000, 12)

    with pytest.raises(ConflictError):
        service.create_loan(customer.customer_id, 50000, 12)


def test_different_tenure_is_not_a_duplicate(service: EligibilityService, make_customer):
    customer = make_customer(monthly_income=50000)
    service.create_loan(customer.customer_id, 50000, 12)
    loan = service.create_loan(customer.customer_id, 50000, 24)
    assert loan.loan_id is not None


def test_rejected_loan_not_counted_in_current_emis(service: EligibilityService, make_customer):
    """A rejected application neither blocks a retry nor adds to debt load"""
    customer = make_customer(monthly_income=20000, approved_limit=100000)

    rejected = service.create_loan(customer.customer_id, 200000, 12)
    assert rejected.status == LoanStatus.REJECTED
    assert service.current_emis(customer.customer_id) == 0

    retry = service.create_loan(customer.customer_id, 200000, 12)
    assert retry.status == LoanStatus.REJECTED
    assert retry.loan_id != rejected.loan_id


def test_approved_loan_counted_in_current_emis(service: EligibilityService, make_customer):
    customer = make_customer(monthly_income=20000)
    loan = service.create_loan(customer.customer_id, 50000, 12)
    assert service.current_emis(customer.customer_id) == loan.monthly_payment


def test_create_loan_unknown_customer(service: EligibilityService):
    with pytest.raises(NotFoundError):
        service.create_loan(12345, 50000, 12)


def test_list_customer_loans_newest_first(service: EligibilityService, make_customer):
    customer = make_customer(monthly_income=50000)
    older = service.create_loan(customer.customer_id, 10000, 6)
    newer = service.create_loan(customer.customer_id, 20000, 6)

    loans = service.list_customer_loans(customer.customer_id)

    assert [loan.loan_id for loan in loans] == [newer.loan_id, older.loan_id]


def test_list_loans_unknown_customer(service: EligibilityService):
    with pytest.raises(NotFoundError):
        service.list_customer_loans(404)


def test_loan_lifecycle(service: EligibilityService, make_customer):
    customer = make_customer(monthly_income=20000)
    loan = service.create_loan(customer.customer_id, 50000, 12)

    assert service.update_loan_status(loan.loan_id, LoanStatus.ACTIVE).status == LoanStatus.ACTIVE
    assert service.update_loan_status(loan.loan_id, LoanStatus.PAID).status == LoanStatus.PAID

    with pytest.raises(InvalidTransitionError):
        service.update_loan_status(loan.loan_id, LoanStatus.ACTIVE)


def test_get_loan_not_found(service: EligibilityService):
    with pytest.raises(NotFoundError):
        service.get_loan(1)


def test_get_loan_with_customer_missing_borrower(service: EligibilityService, make_customer, monkeypatch):
    customer = make_customer()
    loan = service.create_loan(customer.customer_id, 10000, 12)
    monkeypatch.setattr(service.customers, "get_customer", lambda customer_id: None)

    with pytest.raises(NotFoundError):
        service.get_loan_with_customer(loan.loan_id)


def test_submit_loan_returns_verdict(service: EligibilityService, make_customer):
    customer = make_customer(monthly_income=20000)

    loan, verdict = service.submit_loan(customer.customer_id, 50000, 12)

    assert verdict.credit_score == 70
    assert loan.status == LoanStatus.APPROVED
    assert loan.interest_rate == verdict.interest_rate
    assert loan.monthly_payment == verdict.monthly_payment
