# loangate/schemas/banking_schemas.py
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from loangate.models.domain_models import (
    CheckResult, EmploymentStatus, FraudStatus, LoanStatus, Recommendation, ReviewDecision, RiskLevel
)
from loangate.schemas.applicant_schemas import Address
from loangate.schemas.auth_schemas import ApplicantOut

# -------------------------
# Requests
# -------------------------
class ProfileIn(BaseModel):
    address: Address
    employment_status: EmploymentStatus
    monthly_income: float = Field(ge=0)
    monthly_debt: float = Field(ge=0)

class LoanApplicationIn(BaseModel):
    amount: float = Field(gt=0)
    purpose: str = Field(min_length=1)

class FraudStatusIn(BaseModel):
    status: FraudStatus

class CreditScoreIn(BaseModel):
    score: int = Field(ge=300, le=850)

class ReviewIn(BaseModel):
    decision: ReviewDecision

# -------------------------
# Responses
# -------------------------
class LoanApplicationOut(BaseModel):
    status: LoanStatus
    message: str

class AssessmentDetail(BaseModel):
    credit_score_check: CheckResult
    dti_ratio_check: CheckResult
    fraud_flags: List[str] = []

class RiskAssessmentOut(BaseModel):
    user_id: str
    risk_level: RiskLevel
    recommendation: Recommendation
    loan_status: LoanStatus
    assessment: AssessmentDetail

class ReviewOut(BaseModel):
    user_id: str
    status: LoanStatus
    amount: float
    purpose: Optional[str] = None

class PageOut(BaseModel):
    results: List[ApplicantOut]
    page: int
    limit: int
    total_pages: int
    total_results: int

ApplicationFilter = Literal["pending_review", "approved", "declined"]
AssessmentFilter = Literal["pending_assessment", "pending_review", "approved", "declined"]
