# loangate/api/routes_banking.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from loangate.core.db import get_session
from loangate.schemas.auth_schemas import ApplicantOut
from loangate.schemas.banking_schemas import LoanApplicationIn, LoanApplicationOut, ProfileIn
from loangate.services import banking_service
from loangate.services.jwt_service import authorize_banking

router = APIRouter(
    prefix="/banking",
    tags=["banking"],
    dependencies=[Depends(authorize_banking)],
)


@router.get("/fraud-score/{identifier}")
def get_fraud_score(identifier: str, db: Session = Depends(get_session)):
    return banking_service.get_fraud_score(db, identifier)


@router.get("/credit-score/{identifier}")
def get_credit_score(identifier: str, db: Session = Depends(get_session)):
    return banking_service.get_credit_score(db, identifier)


@router.get("/transaction-history/{identifier}")
def get_transaction_history(identifier: str, db: Session = Depends(get_session)):
    return banking_service.get_transaction_history(db, identifier)


@router.put("/profile/{identifier}", response_model=ApplicantOut)
def update_profile(identifier: str, payload: ProfileIn, db: Session = Depends(get_session)):
    """Submit or replace the financial profile used by risk assessment."""
    return banking_service.update_user_profile(db, identifier, payload.model_dump())


@router.post("/loan-application/{identifier}", response_model=LoanApplicationOut)
def apply_for_loan(identifier: str, payload: LoanApplicationIn, db: Session = Depends(get_session)):
    return banking_service.apply_for_loan(db, identifier, payload.amount, payload.purpose)


@router.get("/loan-decision/{identifier}")
def get_loan_decision(identifier: str, db: Session = Depends(get_session)):
    return banking_service.get_loan_decision(db, identifier)
