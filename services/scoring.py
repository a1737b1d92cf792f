"""
Weighted credit scoring.

Seven factors are derived from the submitted application data, each mapped to a
0-100 sub-score, combined with fixed weights into a 0-100 score and classified into
a risk tier. Improvement tips and loan suggestions are derived from the same raw
measures. Everything here is pure: no I/O, no shared state, and malformed numeric
input is normalized to defaults rather than rejected.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from schemas.enums import RiskAssessment
from schemas.scoring import (
    ApplicationData,
    FactorBreakdown,
    LoanSuggestion,
    Recommendations,
    ScoringResult,
)

logger = logging.getLogger(__name__)

# Percent weights; they sum to 100.
WEIGHTS: dict[str, int] = {
    "income": 25,
    "debt_to_income": 20,
    "payment_history": 20,
    "credit_utilization": 15,
    "credit_history_length": 10,
    "credit_types": 5,
    "new_inquiries": 5,
}

INCOME_CAP = 80_000
DTI_FULL_SCORE_BELOW = 0.36
UTILIZATION_FULL_SCORE_BELOW = 0.3
FULL_HISTORY_YEARS = 10

LOW_RISK_MIN_SCORE = 70
MEDIUM_RISK_MIN_SCORE = 50

INCOME_TIP = "Consider ways to increase your verifiable annual income."
DTI_TIP = "Reduce existing debt to improve your Debt-to-Income ratio."
PAYMENT_TIP = "Make all future payments on time to improve your credit history."
UTILIZATION_TIP = "Pay down existing credit card balances to lower your utilization rate."
HISTORY_TIP = "Building a longer credit history over time will improve your score."
DIVERSITY_TIP = (
    "Consider diversifying your credit accounts, such as a mix of installment and revolving credit."
)
INQUIRIES_TIP = "Limit new credit applications to avoid a negative impact from hard inquiries."

LOAN_SUGGESTIONS: dict[RiskAssessment, tuple[LoanSuggestion, ...]] = {
    RiskAssessment.LOW: (
        LoanSuggestion(type="Personal Loan", rate="5-7%", amount="$10,000-$50,000"),
        LoanSuggestion(type="Mortgage Loan", rate="3-4%", amount="$200,000-$1,000,000"),
    ),
    RiskAssessment.MEDIUM: (
        LoanSuggestion(type="Personal Loan", rate="8-12%", amount="$5,000-$20,000"),
    ),
    RiskAssessment.HIGH: (
        LoanSuggestion(type="Secured Loan", rate="15-20%", amount="$1,000-$5,000"),
    ),
}


def extract_factors(data: ApplicationData | dict[str, Any] | None) -> FactorBreakdown:
    """Derive the seven raw measures and their sub-scores."""
    data = ApplicationData.from_raw(data)
    fin = data.financials
    hist = data.credit_history

    annual_income = fin.annual_income
    income_score = min(100.0, annual_income * 100 / INCOME_CAP)

    monthly_income = annual_income / 12
    dti_ratio = fin.total_monthly_debt / monthly_income if monthly_income > 0 else 1.0
    dti_score = 100.0 if dti_ratio < DTI_FULL_SCORE_BELOW else max(0.0, (1 - dti_ratio) * 100)

    late = hist.late_payments
    payment_score = 100.0 if late == 0 else max(0.0, 100.0 - late * 20.0)

    utilization = hist.utilized_credit / hist.total_credit_limit
    if utilization < UTILIZATION_FULL_SCORE_BELOW:
        utilization_score = 100.0
    else:
        utilization_score = max(0.0, 100 - utilization * 100)

    years = hist.years
    history_score = min(100.0, years * 100 / FULL_HISTORY_YEARS)

    types_score = 100.0 if hist.has_diverse_credit else 50.0

    inquiries = hist.inquiries_last_6_months
    inquiries_score = 100.0 if inquiries < 2 else max(0.0, 100.0 - inquiries * 10.0)

    return FactorBreakdown(
        annual_income=annual_income,
        dti_ratio=dti_ratio,
        late_payments=late,
        utilization_rate=utilization,
        credit_history_years=years,
        has_diverse_credit=hist.has_diverse_credit,
        new_inquiries=inquiries,
        sub_scores={
            "income": income_score,
            "debt_to_income": dti_score,
            "payment_history": payment_score,
            "credit_utilization": utilization_score,
            "credit_history_length": history_score,
            "credit_types": types_score,
            "new_inquiries": inquiries_score,
        },
    )


def aggregate_score(factors: FactorBreakdown) -> int:
    """Weighted sum of sub-scores, capped at 100 and rounded half up."""
    total = sum(factors.sub_scores[name] * weight for name, weight in WEIGHTS.items()) / 100
    capped = min(100.0, max(0.0, total))
    return int(Decimal(repr(capped)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def classify_risk(score: int) -> RiskAssessment:
    if score >= LOW_RISK_MIN_SCORE:
        return RiskAssessment.LOW
    if score >= MEDIUM_RISK_MIN_SCORE:
        return RiskAssessment.MEDIUM
    return RiskAssessment.HIGH


def generate_recommendations(factors: FactorBreakdown, risk: RiskAssessment) -> Recommendations:
    """
    Improvement tips use their own thresholds, independent of the scoring breakpoints,
    and are emitted in factor order. Loan suggestions are a fixed table per tier.
    """
    tips: list[str] = []
    if factors.annual_income < 50_000:
        tips.append(INCOME_TIP)
    if factors.dti_ratio > 0.4:
        tips.append(DTI_TIP)
    if factors.late_payments > 0:
        tips.append(PAYMENT_TIP)
    if factors.utilization_rate > 0.3:
        tips.append(UTILIZATION_TIP)
    if factors.credit_history_years < 5:
        tips.append(HISTORY_TIP)
    if not factors.has_diverse_credit:
        tips.append(DIVERSITY_TIP)
    if factors.new_inquiries > 2:
        tips.append(INQUIRIES_TIP)

    return Recommendations(
        improvement_tips=tuple(tips),
        loan_suggestions=LOAN_SUGGESTIONS.get(risk, LOAN_SUGGESTIONS[RiskAssessment.HIGH]),
    )


def evaluate(
    application_data: ApplicationData | dict[str, Any] | None,
    existing_profile: Optional[Any] = None,
) -> ScoringResult:
    """
    Score an application. Safe to call repeatedly; identical input gives identical output.

    ``existing_profile`` is accepted for callers that have the customer's stored profile
    at hand. It does not influence the score.
    """
    factors = extract_factors(application_data)
    score = aggregate_score(factors)
    risk = classify_risk(score)
    result = ScoringResult(
        calculated_score=score,
        risk_assessment=risk,
        recommendations=generate_recommendations(factors, risk),
    )
    logger.debug("Evaluated application: score=%s risk=%s", score, risk.value)
    return result
