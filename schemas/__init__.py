from schemas.application import ApplicationCreate, DocumentUpload, DocumentVerifyRequest, ReviewRequest
from schemas.enums import ApplicationStatus, RiskAssessment, UserRole
from schemas.scoring import (
    ApplicationData,
    CreditHistory,
    FactorBreakdown,
    Financials,
    LoanSuggestion,
    Recommendations,
    ScoringResult,
)
from schemas.user import UserCreate, UserUpdate

__all__ = [
    "ApplicationCreate",
    "ApplicationData",
    "ApplicationStatus",
    "CreditHistory",
    "DocumentUpload",
    "DocumentVerifyRequest",
    "FactorBreakdown",
    "Financials",
    "LoanSuggestion",
    "Recommendations",
    "ReviewRequest",
    "RiskAssessment",
    "ScoringResult",
    "UserCreate",
    "UserRole",
    "UserUpdate",
]
