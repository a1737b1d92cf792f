"""
Scoring input and output models.

ApplicationData accepts the loosely shaped payload customers submit. Every field is
optional; missing, malformed, negative or non-finite numbers fall back to the
documented default instead of failing validation.
"""
from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from schemas.enums import RiskAssessment


def _number(value: Any, default: float, *, integer: bool = False, zero_is_missing: bool = False) -> float:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(number) or number < 0:
        return default
    if zero_is_missing and number == 0:
        return default
    return int(number) if integer else number


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "y", "1"}
    if isinstance(value, (int, float)):
        try:
            return math.isfinite(float(value)) and value != 0
        except OverflowError:
            return False
    return False


class Financials(BaseModel):
    annual_income: float = Field(0.0, alias="annualIncome")
    total_monthly_debt: float = Field(0.0, alias="totalMonthlyDebt")

    model_config = {"populate_by_name": True}

    @field_validator("annual_income", "total_monthly_debt", mode="before")
    @classmethod
    def _non_negative(cls, v):
        return _number(v, 0.0)


class CreditHistory(BaseModel):
    late_payments: int = Field(0, alias="latePayments")
    total_credit_limit: float = Field(1.0, alias="totalCreditLimit")
    utilized_credit: float = Field(0.0, alias="utilizedCredit")
    years: float = 1.0
    has_diverse_credit: bool = Field(False, alias="hasDiverseCredit")
    inquiries_last_6_months: int = Field(0, alias="inquiriesLast6Months")

    model_config = {"populate_by_name": True}

    @field_validator("late_payments", "inquiries_last_6_months", mode="before")
    @classmethod
    def _count(cls, v):
        return _number(v, 0, integer=True)

    @field_validator("utilized_credit", mode="before")
    @classmethod
    def _amount(cls, v):
        return _number(v, 0.0)

    # A zero limit would divide by zero; a zero history length scores as one year.
    @field_validator("total_credit_limit", "years", mode="before")
    @classmethod
    def _at_least_default(cls, v):
        return _number(v, 1.0, zero_is_missing=True)

    @field_validator("has_diverse_credit", mode="before")
    @classmethod
    def _diverse(cls, v):
        return _flag(v)


class ApplicationData(BaseModel):
    financials: Financials = Field(default_factory=Financials)
    credit_history: CreditHistory = Field(default_factory=CreditHistory, alias="creditHistory")

    model_config = {"populate_by_name": True}

    @field_validator("financials", "credit_history", mode="before")
    @classmethod
    def _section(cls, v):
        if isinstance(v, (dict, BaseModel)):
            return v
        return {}

    @classmethod
    def from_raw(cls, raw: Any) -> "ApplicationData":
        """Build from a stored snapshot; anything that is not a mapping yields all defaults."""
        if isinstance(raw, ApplicationData):
            return raw
        return cls.model_validate(raw if isinstance(raw, dict) else {})


class FactorBreakdown(BaseModel):
    """Raw measures and their 0-100 sub-scores, one per weighted factor."""

    annual_income: float
    dti_ratio: float
    late_payments: int
    utilization_rate: float
    credit_history_years: float
    has_diverse_credit: bool
    new_inquiries: int
    sub_scores: dict[str, float]

    model_config = ConfigDict(frozen=True)


class LoanSuggestion(BaseModel):
    type: str
    rate: str
    amount: str

    model_config = ConfigDict(frozen=True)


class Recommendations(BaseModel):
    improvement_tips: tuple[str, ...] = ()
    loan_suggestions: tuple[LoanSuggestion, ...] = ()

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ScoringResult(BaseModel):
    calculated_score: int
    risk_assessment: RiskAssessment
    recommendations: Recommendations

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
