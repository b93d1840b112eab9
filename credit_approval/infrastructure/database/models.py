"""SQLAlchemy ORM models for customers, loans and cached credit scores"""

from sqlalchemy import Column, String, Float, DateTime, Date, Integer, ForeignKey, Enum
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func
from credit_approval.domain.models import LoanStatus

Base = declarative_base()


class CustomerRow(Base):
    """Registered customer"""

    __tablename__ = "customers"

    customer_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    age = Column(Integer, nullable=False)
    phone_number = Column(String(20), nullable=False, unique=True)
    monthly_income = Column(Float, nullable=False)
    approved_limit = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    loans = relationship("LoanRow", back_populates="customer", cascade="all, delete-orphan")
    credit_score = relationship("CreditScoreRow", back_populates="customer", uselist=False, cascade="all, delete-orphan")


class LoanRow(Base):
    """Loan application or historical loan"""

    __tablename__ = "loans"

    loan_id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.customer_id", ondelete="CASCADE"), nullable=False, index=True)
    loan_amount = Column(Float, nullable=False)
    interest_rate = Column(Float, nullable=False)
    tenure = Column(Integer, nullable=False)  # months
    monthly_payment = Column(Float, nullable=False)
    emis_paid_on_time = Column(Integer, nullable=False, default=0)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(Enum(LoanStatus, name="loan_status"), nullable=False, default=LoanStatus.PENDING, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    customer = relationship("CustomerRow", back_populates="loans")


class CreditScoreRow(Base):
    """Cached credit score, at most one per customer"""

    __tablename__ = "credit_scores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # unique: concurrent first checks race on insert, the loser re-reads
    customer_id = Column(
        Integer, ForeignKey("customers.customer_id", ondelete="CASCADE"), nullable=False, unique=True
    )
    score = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    customer = relationship("CustomerRow", back_populates="credit_score")
