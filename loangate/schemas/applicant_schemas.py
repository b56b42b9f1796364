# loangate/schemas/applicant_schemas.py
"""
Immutable snapshots of an applicant record.

The risk engine and the loan state machine only ever see these frozen
values; the banking service converts to and from the `User` table row.
"""
from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from loangate.models.domain_models import (
    CheckResult,
    EmploymentStatus,
    FraudStatus,
    LoanStatus,
    Recommendation,
    RiskLevel,
)


class Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


class Address(Snapshot):
    street: str
    city: str
    state: str
    zip_code: str


class LoanApplication(Snapshot):
    status: LoanStatus = LoanStatus.NONE
    amount: float = 0.0
    purpose: Optional[str] = None


class RiskAssessment(Snapshot):
    """Persisted part of an assessment."""
    recommendation: Recommendation
    assessed_date: datetime


class RiskAssessmentResult(Snapshot):
    """Full engine output; only recommendation and date are persisted."""
    risk_level: RiskLevel
    recommendation: Recommendation
    credit_score_check: CheckResult
    dti_ratio_check: CheckResult
    fraud_flags: Tuple[str, ...] = ()
    assessed_date: datetime

    def to_assessment(self) -> RiskAssessment:
        return RiskAssessment(
            recommendation=self.recommendation,
            assessed_date=self.assessed_date,
        )


class Applicant(Snapshot):
    credit_score: int
    employment_status: Optional[EmploymentStatus] = None
    monthly_income: float = Field(default=0.0, ge=0)
    monthly_debt: float = Field(default=0.0, ge=0)
    fraud_status: FraudStatus = FraudStatus.LOW
    address: Optional[Address] = None
    loan: LoanApplication = LoanApplication()
    risk_assessment: Optional[RiskAssessment] = None

    @property
    def profile_complete(self) -> bool:
        return (
            self.address is not None
            and self.employment_status is not None
            and self.monthly_income > 0
        )
