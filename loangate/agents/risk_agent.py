# loangate/agents/risk_agent.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from loangate.core.errors import StateError, ValidationError
from loangate.models.domain_models import (
    CheckResult,
    EmploymentStatus,
    FraudStatus,
    LoanStatus,
    Recommendation,
    RiskLevel,
)
from loangate.schemas.applicant_schemas import Applicant, RiskAssessmentResult

logger = logging.getLogger(__name__)

CREDIT_FAIL_BELOW = 600
CREDIT_BORDERLINE_BELOW = 650
DTI_BORDERLINE_ABOVE = 30
DTI_FAIL_ABOVE = 40

LOW_CREDIT_SCORE = "low_credit_score"
HIGH_DTI_RATIO = "high_dti_ratio"
HIGH_FRAUD_STATUS = "high_fraud_status"
UNEMPLOYED_STATUS = "unemployed_status"


def dti_ratio(applicant: Applicant) -> float:
    # multiply first so 2500 / 6250 lands on exactly 40.0
    return (applicant.monthly_debt * 100) / applicant.monthly_income


def check_credit_score(credit_score: int) -> CheckResult:
    if credit_score < CREDIT_FAIL_BELOW:
        return CheckResult.FAIL
    if credit_score < CREDIT_BORDERLINE_BELOW:
        return CheckResult.BORDERLINE
    return CheckResult.PASS


def check_dti_ratio(ratio: float) -> CheckResult:
    if ratio > DTI_FAIL_ABOVE:
        return CheckResult.FAIL
    if ratio > DTI_BORDERLINE_ABOVE:
        return CheckResult.BORDERLINE
    return CheckResult.PASS


def assess(applicant: Applicant, now: Optional[datetime] = None) -> RiskAssessmentResult:
    """
    Risk rules, applied in a fixed order:
    - credit score < 600 → fail (+ low_credit_score), < 650 → borderline
    - DTI > 40% → fail (+ high_dti_ratio), > 30% → borderline
    - high fraud status / unemployment → flag only
    - any flag → high / deny, any borderline → medium / proceed_with_caution,
      otherwise low / proceed

    Pure: the applicant is not modified and nothing is persisted.
    """
    if applicant.loan.status != LoanStatus.PENDING_ASSESSMENT:
        raise StateError("No loan application is pending assessment for this user.")

    if not applicant.profile_complete:
        raise ValidationError("User profile is incomplete. Cannot assess risk.")

    fraud_flags: List[str] = []

    credit_check = check_credit_score(applicant.credit_score)
    if credit_check == CheckResult.FAIL:
        fraud_flags.append(LOW_CREDIT_SCORE)

    ratio = dti_ratio(applicant)
    dti_check = check_dti_ratio(ratio)
    if dti_check == CheckResult.FAIL:
        fraud_flags.append(HIGH_DTI_RATIO)

    if applicant.fraud_status == FraudStatus.HIGH:
        fraud_flags.append(HIGH_FRAUD_STATUS)
    if applicant.employment_status == EmploymentStatus.UNEMPLOYED:
        fraud_flags.append(UNEMPLOYED_STATUS)

    if fraud_flags:
        risk_level, recommendation = RiskLevel.HIGH, Recommendation.DENY
    elif CheckResult.BORDERLINE in (credit_check, dti_check):
        risk_level, recommendation = RiskLevel.MEDIUM, Recommendation.PROCEED_WITH_CAUTION
    else:
        risk_level, recommendation = RiskLevel.LOW, Recommendation.PROCEED

    logger.debug(
        "Assessed credit_score=%s dti=%.2f flags=%s -> %s",
        applicant.credit_score, ratio, fraud_flags, recommendation.value,
    )

    return RiskAssessmentResult(
        risk_level=risk_level,
        recommendation=recommendation,
        credit_score_check=credit_check,
        dti_ratio_check=dti_check,
        fraud_flags=tuple(fraud_flags),
        assessed_date=now or datetime.now(timezone.utc),
    )
