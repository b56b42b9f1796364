from datetime import datetime, timezone

import pytest

from loangate.agents.risk_agent import assess, check_credit_score, check_dti_ratio, dti_ratio
from loangate.core.errors import StateError, ValidationError
from loangate.models.domain_models import (
    CheckResult, EmploymentStatus, FraudStatus, LoanStatus, Recommendation, RiskLevel
)
from loangate.schemas.applicant_schemas import Address, Applicant, LoanApplication

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

ADDRESS = Address(street="1 Main St", city="Anytown", state="CA", zip_code="12345")


def make_applicant(**overrides):
    fields = dict(
        credit_score=700,
        employment_status=EmploymentStatus.EMPLOYED,
        monthly_income=10000,
        monthly_debt=1000,
        fraud_status=FraudStatus.LOW,
        address=ADDRESS,
        loan=LoanApplication(status=LoanStatus.PENDING_ASSESSMENT, amount=5000, purpose="car"),
    )
    fields.update(overrides)
    return Applicant(**fields)


def test_scenario_a_every_flag_denies():
    result = assess(make_applicant(
        credit_score=550,
        monthly_income=1000,
        monthly_debt=800,
        fraud_status=FraudStatus.HIGH,
        employment_status=EmploymentStatus.UNEMPLOYED,
    ), now=NOW)

    assert result.fraud_flags == (
        "low_credit_score", "high_dti_ratio", "high_fraud_status", "unemployed_status"
    )
    assert result.credit_score_check == CheckResult.FAIL
    assert result.dti_ratio_check == CheckResult.FAIL
    assert result.risk_level == RiskLevel.HIGH
    assert result.recommendation == Recommendation.DENY


def test_scenario_b_dti_of_exactly_40_is_borderline():
    result = assess(make_applicant(credit_score=680, monthly_income=6250, monthly_debt=2500), now=NOW)

    assert result.credit_score_check == CheckResult.PASS
    assert result.dti_ratio_check == CheckResult.BORDERLINE
    assert result.fraud_flags == ()
    assert result.risk_level == RiskLevel.MEDIUM
    assert result.recommendation == Recommendation.PROCEED_WITH_CAUTION


def test_scenario_c_clean_profile_proceeds():
    result = assess(make_applicant(credit_score=800, monthly_income=12500, monthly_debt=1000), now=NOW)

    assert result.credit_score_check == CheckResult.PASS
    assert result.dti_ratio_check == CheckResult.PASS
    assert result.fraud_flags == ()
    assert result.risk_level == RiskLevel.LOW
    assert result.recommendation == Recommendation.PROCEED
    assert result.assessed_date == NOW


@pytest.mark.parametrize("debt,expected", [
    (3000, CheckResult.PASS),
    (3010, CheckResult.BORDERLINE),
    (4000, CheckResult.BORDERLINE),
    (4010, CheckResult.FAIL),
])
def test_dti_boundaries(debt, expected):
    applicant = make_applicant(monthly_income=10000, monthly_debt=debt)
    assert check_dti_ratio(dti_ratio(applicant)) == expected
    assert assess(applicant, now=NOW).dti_ratio_check == expected


@pytest.mark.parametrize("score,expected", [
    (599, CheckResult.FAIL),
    (600, CheckResult.BORDERLINE),
    (649, CheckResult.BORDERLINE),
    (650, CheckResult.PASS),
])
def test_credit_score_boundaries(score, expected):
    assert check_credit_score(score) == expected


def test_borderline_credit_alone_needs_caution():
    result = assess(make_applicant(credit_score=620), now=NOW)
    assert result.recommendation == Recommendation.PROCEED_WITH_CAUTION
    assert result.fraud_flags == ()


def test_flags_outrank_borderline_checks():
    result = assess(make_applicant(credit_score=620, fraud_status=FraudStatus.HIGH), now=NOW)
    assert result.credit_score_check == CheckResult.BORDERLINE
    assert result.fraud_flags == ("high_fraud_status",)
    assert result.recommendation == Recommendation.DENY


def test_unemployment_flag_does_not_touch_checks():
    result = assess(make_applicant(employment_status=EmploymentStatus.UNEMPLOYED), now=NOW)
    assert result.credit_score_check == CheckResult.PASS
    assert result.dti_ratio_check == CheckResult.PASS
    assert result.fraud_flags == ("unemployed_status",)
    assert result.risk_level == RiskLevel.HIGH


def test_same_financials_give_same_result():
    a = make_applicant(credit_score=640, monthly_income=5000, monthly_debt=1800)
    b = make_applicant(
        credit_score=640, monthly_income=5000, monthly_debt=1800,
        address=Address(street="9 Elm", city="Elsewhere", state="NY", zip_code="10001"),
        loan=LoanApplication(status=LoanStatus.PENDING_ASSESSMENT, amount=99, purpose="other"),
    )
    first, second = assess(a), assess(b)
    assert first.recommendation == second.recommendation
    assert first.fraud_flags == second.fraud_flags


@pytest.mark.parametrize("status", [
    LoanStatus.NONE, LoanStatus.PENDING_REVIEW, LoanStatus.APPROVED, LoanStatus.DECLINED,
])
def test_requires_pending_assessment(status):
    with pytest.raises(StateError):
        assess(make_applicant(loan=LoanApplication(status=status)))


@pytest.mark.parametrize("overrides", [
    {"address": None},
    {"employment_status": None},
    {"monthly_income": 0},
])
def test_requires_complete_profile(overrides):
    with pytest.raises(ValidationError):
        assess(make_applicant(**overrides))


def test_state_guard_is_checked_before_profile():
    applicant = make_applicant(address=None, loan=LoanApplication(status=LoanStatus.NONE))
    with pytest.raises(StateError):
        assess(applicant)
