# loangate/models/domain_models.py
from sqlmodel import SQLModel, Field
from typing import Optional, Any, Dict
from datetime import datetime, timezone
from enum import Enum
import uuid
from sqlalchemy import Column
from sqlalchemy import JSON  # cross-db JSON

from loangate.core.config import settings


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"

class EmploymentStatus(str, Enum):
    EMPLOYED = "employed"
    UNEMPLOYED = "unemployed"
    SELF_EMPLOYED = "self-employed"
    STUDENT = "student"

class FraudStatus(str, Enum):
    HIGH = "high"
    LOW = "low"

class LoanStatus(str, Enum):
    NONE = "none"
    PENDING_ASSESSMENT = "pending_assessment"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    DECLINED = "declined"

class Recommendation(str, Enum):
    NONE = "none"
    PROCEED = "proceed"
    PROCEED_WITH_CAUTION = "proceed_with_caution"
    DENY = "deny"

class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class CheckResult(str, Enum):
    PASS = "pass"
    BORDERLINE = "borderline"
    FAIL = "fail"

class ReviewDecision(str, Enum):
    APPROVED = "approved"
    DECLINED = "declined"


class User(SQLModel, table=True):
    """
    Account plus the applicant record: financial profile, the embedded loan
    application and the last persisted risk assessment.
    Only the banking service writes the loan/risk columns.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    password_hash: Optional[str] = None
    role: Role = Field(default=Role.USER)

    # financial profile
    credit_score: int = Field(default=settings.DEFAULT_CREDIT_SCORE)
    employment_status: Optional[EmploymentStatus] = Field(default=EmploymentStatus.UNEMPLOYED)
    monthly_income: float = Field(default=0.0)
    monthly_debt: float = Field(default=0.0)
    fraud_status: FraudStatus = Field(default=FraudStatus.LOW)
    address: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))

    # loan application
    loan_status: LoanStatus = Field(default=LoanStatus.NONE, index=True)
    loan_amount: float = Field(default=0.0)
    loan_purpose: Optional[str] = None

    # risk assessment
    risk_recommendation: Optional[Recommendation] = None
    risk_assessed_date: Optional[datetime] = None

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
