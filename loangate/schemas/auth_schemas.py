from uuid import UUID
from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from loangate.models.domain_models import (
    EmploymentStatus, FraudStatus, LoanStatus, Recommendation, Role
)

class SignupIn(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=8)

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"

class UserOut(BaseModel):
    id: UUID
    name: str
    email: EmailStr
    role: Role

    model_config = ConfigDict(from_attributes=True)

class ApplicantOut(UserOut):
    """User plus financial profile, loan and last assessment."""
    credit_score: int
    employment_status: Optional[EmploymentStatus] = None
    monthly_income: float
    monthly_debt: float
    fraud_status: FraudStatus
    address: Optional[Dict[str, Any]] = None
    loan_status: LoanStatus
    loan_amount: float
    loan_purpose: Optional[str] = None
    risk_recommendation: Optional[Recommendation] = None
    risk_assessed_date: Optional[datetime] = None
