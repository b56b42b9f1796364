# loangate/services/banking_service.py
"""
Storage collaborator for the loan core.

Each mutating call loads the user row with SELECT ... FOR UPDATE, hands an
immutable Applicant snapshot to the pure core, writes the returned snapshot
back and commits. A guard failure raises before anything is written, so the
row stays as it was.
"""
import logging
import math
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from loangate.core.config import settings
from loangate.core.errors import NotFoundError, ValidationError
from loangate.models.domain_models import FraudStatus, LoanStatus, User, utc_now
from loangate.schemas.applicant_schemas import (
    Address,
    Applicant,
    LoanApplication,
    RiskAssessment,
)
from loangate.services import loan_state_machine

logger = logging.getLogger(__name__)


# -------------------------
# Lookup
# -------------------------
def get_user_by_identifier(db: Session, identifier: str, for_update: bool = False) -> User:
    """Resolve a user by UUID or, failing that, by email."""
    try:
        statement = select(User).where(User.id == uuid.UUID(str(identifier)))
    except ValueError:
        statement = select(User).where(User.email == identifier.lower())

    if for_update:
        statement = statement.with_for_update()

    user = db.exec(statement).first()
    if not user:
        raise NotFoundError("User not found")
    return user


# -------------------------
# Row <-> snapshot
# -------------------------
def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo; they were written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_applicant(user: User) -> Applicant:
    risk = None
    if user.risk_recommendation is not None and user.risk_assessed_date is not None:
        risk = RiskAssessment(
            recommendation=user.risk_recommendation,
            assessed_date=_as_utc(user.risk_assessed_date),
        )

    return Applicant(
        credit_score=user.credit_score,
        employment_status=user.employment_status,
        monthly_income=user.monthly_income,
        monthly_debt=user.monthly_debt,
        fraud_status=user.fraud_status,
        address=Address(**user.address) if user.address else None,
        loan=LoanApplication(
            status=user.loan_status,
            amount=user.loan_amount,
            purpose=user.loan_purpose,
        ),
        risk_assessment=risk,
    )


def _commit_applicant(db: Session, user: User, applicant: Applicant) -> User:
    previous = to_applicant(user).risk_assessment
    user.loan_status = applicant.loan.status
    user.loan_amount = applicant.loan.amount
    user.loan_purpose = applicant.loan.purpose
    # only a fresh assessment is written back
    if applicant.risk_assessment is not None and applicant.risk_assessment != previous:
        user.risk_recommendation = applicant.risk_assessment.recommendation
        user.risk_assessed_date = applicant.risk_assessment.assessed_date
    return _save(db, user)


def _save(db: Session, user: User) -> User:
    user.updated_at = utc_now()
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


# -------------------------
# Profile & scores
# -------------------------
def get_fraud_score(db: Session, identifier: str) -> Dict[str, Any]:
    user = get_user_by_identifier(db, identifier)
    return {"user_id": str(user.id), "fraud_status": user.fraud_status}


def get_credit_score(db: Session, identifier: str) -> Dict[str, Any]:
    user = get_user_by_identifier(db, identifier)
    return {"user_id": str(user.id), "credit_score": user.credit_score}


def get_transaction_history(db: Session, identifier: str) -> Dict[str, Any]:
    user = get_user_by_identifier(db, identifier)
    now = utc_now()
    # mock ledger; real transaction data is out of scope
    transactions = [
        {"id": "txn_1", "amount": 100, "description": "Purchase at Store A", "date": now},
        {"id": "txn_2", "amount": 50, "description": "Purchase at Store B", "date": now - timedelta(days=1)},
    ]
    return {"user_id": str(user.id), "transactions": transactions}


def set_fraud_status(db: Session, identifier: str, status: FraudStatus) -> Dict[str, Any]:
    user = get_user_by_identifier(db, identifier, for_update=True)
    user.fraud_status = FraudStatus(status)
    user = _save(db, user)
    logger.info("Fraud status for %s set to %s", user.id, user.fraud_status.value)
    return {"user_id": str(user.id), "fraud_status": user.fraud_status}


def set_credit_score(db: Session, identifier: str, score: int) -> Dict[str, Any]:
    user = get_user_by_identifier(db, identifier, for_update=True)
    user.credit_score = score
    user = _save(db, user)
    logger.info("Credit score for %s set to %s", user.id, user.credit_score)
    return {"user_id": str(user.id), "credit_score": user.credit_score}


def update_user_profile(db: Session, identifier: str, profile: Dict[str, Any]) -> User:
    user = get_user_by_identifier(db, identifier, for_update=True)
    for key, value in profile.items():
        setattr(user, key, value)
    return _save(db, user)


# -------------------------
# Loan lifecycle
# -------------------------
def apply_for_loan(db: Session, identifier: str, amount: float, purpose: str) -> Dict[str, Any]:
    user = get_user_by_identifier(db, identifier, for_update=True)
    applicant = loan_state_machine.apply(to_applicant(user), amount, purpose)
    _commit_applicant(db, user, applicant)
    return {
        "status": applicant.loan.status,
        "message": "Your loan application has been submitted and is pending a risk assessment.",
    }


def assess_risk(db: Session, identifier: str) -> Dict[str, Any]:
    user = get_user_by_identifier(db, identifier, for_update=True)
    applicant, result = loan_state_machine.run_assessment(to_applicant(user))
    user = _commit_applicant(db, user, applicant)
    return {
        "user_id": str(user.id),
        "risk_level": result.risk_level,
        "recommendation": result.recommendation,
        "loan_status": user.loan_status,
        "assessment": {
            "credit_score_check": result.credit_score_check,
            "dti_ratio_check": result.dti_ratio_check,
            "fraud_flags": list(result.fraud_flags),
        },
    }


def review_loan_application(db: Session, identifier: str, decision: str) -> Dict[str, Any]:
    user = get_user_by_identifier(db, identifier, for_update=True)
    applicant = loan_state_machine.manual_review(to_applicant(user), decision)
    user = _commit_applicant(db, user, applicant)
    return {
        "user_id": str(user.id),
        "status": user.loan_status,
        "amount": user.loan_amount,
        "purpose": user.loan_purpose,
    }


def get_loan_decision(db: Session, identifier: str) -> Dict[str, Any]:
    user = get_user_by_identifier(db, identifier)
    return {
        "user_id": str(user.id),
        "loan_status": user.loan_status,
        "amount": user.loan_amount,
        "purpose": user.loan_purpose,
        "recommendation": user.risk_recommendation,
        "assessed_date": user.risk_assessed_date,
    }


# -------------------------
# Admin listings
# -------------------------
SORTABLE_FIELDS = {
    "name": User.name,
    "email": User.email,
    "credit_score": User.credit_score,
    "monthly_income": User.monthly_income,
    "loan_amount": User.loan_amount,
    "loan_status": User.loan_status,
    "assessed_date": User.risk_assessed_date,
    "created_at": User.created_at,
    "updated_at": User.updated_at,
}


def _order_by(sort_by: Optional[str]):
    """Parse `field:desc,other:asc` into ORDER BY clauses."""
    if not sort_by:
        return [User.created_at.asc()]

    clauses = []
    for part in sort_by.split(","):
        field, _, direction = part.strip().partition(":")
        column = SORTABLE_FIELDS.get(field)
        if column is None:
            raise ValidationError(f"Cannot sort by '{field}'")
        if direction not in ("", "asc", "desc"):
            raise ValidationError(f"Sort direction must be 'asc' or 'desc', got '{direction}'")
        clauses.append(column.desc() if direction == "desc" else column.asc())
    return clauses


def paginate_users(
    db: Session,
    statuses: Iterable[LoanStatus],
    sort_by: Optional[str] = None,
    limit: Optional[int] = None,
    page: Optional[int] = None,
) -> Dict[str, Any]:
    limit = limit if limit and limit > 0 else settings.DEFAULT_PAGE_LIMIT
    page = page if page and page > 0 else 1
    condition = User.loan_status.in_(list(statuses))

    total = db.exec(select(func.count()).select_from(User).where(condition)).one()
    rows = db.exec(
        select(User)
        .where(condition)
        .order_by(*_order_by(sort_by))
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()

    return {
        "results": rows,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit),
        "total_results": total,
    }


APPLICATION_STATES = (LoanStatus.PENDING_ASSESSMENT, LoanStatus.PENDING_REVIEW, LoanStatus.APPROVED, LoanStatus.DECLINED)


def get_loan_applications(db: Session, status: Optional[LoanStatus] = None, **options) -> Dict[str, Any]:
    # everything except users who never applied
    statuses = [status] if status else APPLICATION_STATES
    return paginate_users(db, statuses, **options)


def get_active_loans(db: Session, **options) -> Dict[str, Any]:
    return paginate_users(db, [LoanStatus.APPROVED], **options)
