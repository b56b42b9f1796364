# loangate/services/loan_state_machine.py
"""
Loan application lifecycle.

    none/declined --apply--> pending_assessment
    pending_assessment --run_assessment--> approved | pending_review | declined
    pending_review --manual_review--> approved | declined

Every operation takes an immutable Applicant and returns a new one. A failed
guard raises before anything is built, so callers never see a half-applied
transition. `approved` is terminal; `declined` may re-apply.
"""
import logging
from datetime import datetime
from typing import Dict, FrozenSet, Optional, Tuple, Union

from loangate.agents.risk_agent import assess
from loangate.core.errors import StateError, ValidationError
from loangate.models.domain_models import LoanStatus, Recommendation, ReviewDecision
from loangate.schemas.applicant_schemas import Applicant, LoanApplication, RiskAssessmentResult

logger = logging.getLogger(__name__)

TRANSITIONS: Dict[LoanStatus, FrozenSet[LoanStatus]] = {
    LoanStatus.NONE: frozenset({LoanStatus.PENDING_ASSESSMENT}),
    LoanStatus.PENDING_ASSESSMENT: frozenset(
        {LoanStatus.APPROVED, LoanStatus.PENDING_REVIEW, LoanStatus.DECLINED}
    ),
    LoanStatus.PENDING_REVIEW: frozenset({LoanStatus.APPROVED, LoanStatus.DECLINED}),
    LoanStatus.APPROVED: frozenset(),
    LoanStatus.DECLINED: frozenset({LoanStatus.PENDING_ASSESSMENT}),
}

OUTCOME_BY_RECOMMENDATION: Dict[Recommendation, LoanStatus] = {
    Recommendation.DENY: LoanStatus.DECLINED,
    Recommendation.PROCEED_WITH_CAUTION: LoanStatus.PENDING_REVIEW,
    Recommendation.PROCEED: LoanStatus.APPROVED,
}


def can_transition(current: LoanStatus, target: LoanStatus) -> bool:
    return target in TRANSITIONS[current]


def _require_transition(current: LoanStatus, target: LoanStatus, message: str) -> None:
    if not can_transition(current, target):
        logger.warning("Transition refused: %s -> %s", current.value, target.value)
        raise StateError(message)


def apply(applicant: Applicant, amount: float, purpose: str) -> Applicant:
    _require_transition(
        applicant.loan.status,
        LoanStatus.PENDING_ASSESSMENT,
        "User already has a pending or approved loan application.",
    )

    if not applicant.profile_complete:
        raise ValidationError(
            "User profile is incomplete. Please submit your financial profile before applying for a loan."
        )

    if amount is None or amount <= 0:
        raise ValidationError("Loan amount must be positive.")
    if not purpose or not purpose.strip():
        raise ValidationError("Loan purpose is required.")

    logger.info("Loan application submitted: %s -> pending_assessment", applicant.loan.status.value)
    return applicant.model_copy(
        update={
            "loan": LoanApplication(
                status=LoanStatus.PENDING_ASSESSMENT,
                amount=amount,
                purpose=purpose,
            )
        }
    )


def run_assessment(
    applicant: Applicant, now: Optional[datetime] = None
) -> Tuple[Applicant, RiskAssessmentResult]:
    # assess() enforces the pending_assessment and profile guards
    result = assess(applicant, now=now)
    outcome = OUTCOME_BY_RECOMMENDATION[result.recommendation]
    _require_transition(
        applicant.loan.status, outcome, f"Cannot move a loan from {applicant.loan.status.value} to {outcome.value}."
    )

    logger.info(
        "Risk assessment %s (%s): pending_assessment -> %s",
        result.recommendation.value, result.risk_level.value, outcome.value,
    )
    updated = applicant.model_copy(
        update={
            "loan": applicant.loan.model_copy(update={"status": outcome}),
            "risk_assessment": result.to_assessment(),
        }
    )
    return updated, result


def manual_review(applicant: Applicant, decision: Union[ReviewDecision, str]) -> Applicant:
    try:
        decision = ReviewDecision(decision)
    except ValueError:
        raise ValidationError("Decision must be either 'approved' or 'declined'.") from None

    assessment = applicant.risk_assessment
    if (
        assessment is None
        or assessment.recommendation != Recommendation.PROCEED_WITH_CAUTION
        or applicant.loan.status != LoanStatus.PENDING_REVIEW
    ):
        logger.warning(
            "Manual review refused: status=%s recommendation=%s",
            applicant.loan.status.value,
            assessment.recommendation.value if assessment else None,
        )
        raise StateError(
            "This loan application cannot be manually reviewed. It has either not been assessed "
            "or the automated assessment did not require manual intervention."
        )

    outcome = LoanStatus(decision.value)
    _require_transition(
        applicant.loan.status, outcome, f"Cannot move a loan from {applicant.loan.status.value} to {outcome.value}."
    )
    logger.info("Manual review: pending_review -> %s", outcome.value)
    return applicant.model_copy(
        update={"loan": applicant.loan.model_copy(update={"status": outcome})}
    )
