"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from credit_approval.api.main import create_app
from credit_approval.domain.eligibility import EligibilityService
from credit_approval.domain.models import Customer, LoanRecord, LoanStatus
from credit_approval.infrastructure.database.models import Base, CustomerRow, LoanRow
from credit_approval.infrastructure.database.session import get_db
from credit_approval.infrastructure.database.repositories import (
    CustomerRepository,
    LoanRepository,
    CreditScoreRepository,
)


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def service(db: Session) -> EligibilityService:
    """Eligibility service wired to SQLite repositories"""
    return EligibilityService(
        customers=CustomerRepository(db),
        loans=LoanRepository(db),
        scores=CreditScoreRepository(db),
    )


@pytest.fixture
def make_customer(db: Session) -> Callable[..., CustomerRow]:
    """Insert a customer row; approved limit defaults to 36x income"""
    counter = {"n": 0}

    def _make(monthly_income: float = 20000, approved_limit: float | None = None) -> CustomerRow:
        counter["n"] += 1
        row = CustomerRow(
            first_name="Test",
            last_name=f"Customer{counter['n']}",
            age=30,
            phone_number=f"90000000{counter['n']:02d}",
            monthly_income=monthly_income,
            approved_limit=approved_limit if approved_limit is not None else monthly_income * 36,
        )
        db.add(row)
        db.commit()
        return row

    return _make


@pytest.fixture
def make_loan(db: Session) -> Callable[..., LoanRow]:
    """Insert a historical loan row for a customer"""

    def _make(
        customer_id: int,
        status: LoanStatus = LoanStatus.PAID,
        loan_amount: float = 100000,
        tenure: int = 12,
        monthly_payment: float = 5000,
        emis_paid_on_time: int = 12,
        interest_rate: float = 10.0,
    ) -> LoanRow:
        start = date.today() - timedelta(days=365)
        row = LoanRow(
            customer_id=customer_id,
            loan_amount=loan_amount,
            interest_rate=interest_rate,
            tenure=tenure,
            monthly_payment=monthly_payment,
            emis_paid_on_time=emis_paid_on_time,
            start_date=start,
            end_date=start + timedelta(days=30 * tenure),
            status=status,
        )
        db.add(row)
        db.commit()
        return row

    return _make


def _build_customer(monthly_income: float = 20000, approved_limit: float | None = None) -> Customer:
    """In-memory customer for pure domain tests"""
    return Customer(
        customer_id=1,
        first_name="Unit",
        last_name="Test",
        age=30,
        phone_number="9999999999",
        monthly_income=monthly_income,
        approved_limit=approved_limit if approved_limit is not None else monthly_income * 36,
    )


def _build_loan(
    status: LoanStatus,
    tenure: int = 12,
    emis_paid_on_time: int = 12,
    monthly_payment: float = 1000,
    loan_amount: float = 50000,
) -> LoanRecord:
    """In-memory loan record for pure domain tests"""
    return LoanRecord(
        customer_id=1,
        loan_amount=loan_amount,
        interest_rate=10.0,
        tenure=tenure,
        monthly_payment=monthly_payment,
        emis_paid_on_time=emis_paid_on_time,
        status=status,
    )


@pytest.fixture
def build_customer() -> Callable[..., Customer]:
    return _build_customer


@pytest.fixture
def build_loan() -> Callable[..., LoanRecord]:
    return _build_loan
