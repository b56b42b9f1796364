# loangate/api/routes_admin.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from loangate.core.db import get_session
from loangate.models.domain_models import LoanStatus
from loangate.schemas.banking_schemas import (
    ApplicationFilter,
    AssessmentFilter,
    CreditScoreIn,
    FraudStatusIn,
    PageOut,
    ReviewIn,
    ReviewOut,
    RiskAssessmentOut,
)
from loangate.services import banking_service
from loangate.services.jwt_service import require_admin

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post("/fraud-status/{identifier}")
def set_fraud_status(identifier: str, payload: FraudStatusIn, db: Session = Depends(get_session)):
    return banking_service.set_fraud_status(db, identifier, payload.status)

@router.post("/credit-score/{identifier}")
def set_credit_score(identifier: str, payload: CreditScoreIn, db: Session = Depends(get_session)):
    return banking_service.set_credit_score(db, identifier, payload.score)

@router.post("/risk-assessment/{identifier}", response_model=RiskAssessmentOut)
def assess_risk(identifier: str, db: Session = Depends(get_session)):
    # only legal while the loan is pending_assessment
    return banking_service.assess_risk(db, identifier)

@router.patch("/loan-application/{identifier}/review", response_model=ReviewOut)
def review_loan_application(identifier: str, payload: ReviewIn, db: Session = Depends(get_session)):
    return banking_service.review_loan_application(db, identifier, payload.decision)

@router.get("/loan-applications", response_model=PageOut)
def list_loan_applications(
    status: Optional[ApplicationFilter] = None,
    sort_by: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1),
    page: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_session),
):
    return banking_service.get_loan_applications(
        db, LoanStatus(status) if status else None, sort_by=sort_by, limit=limit, page=page
    )

@router.get("/assessments", response_model=PageOut)
def list_risk_assessments(
    status: Optional[AssessmentFilter] = None,
    sort_by: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1),
    page: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_session),
):
    return banking_service.get_loan_applications(
        db, LoanStatus(status) if status else None, sort_by=sort_by, limit=limit, page=page
    )

@router.get("/loans/active", response_model=PageOut)
def list_active_loans(
    sort_by: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1),
    page: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_session),
):
    return banking_service.get_active_loans(db, sort_by=sort_by, limit=limit, page=page)
