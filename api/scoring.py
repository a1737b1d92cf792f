from typing import Any, Optional

from fastapi import APIRouter, Body

from schemas.scoring import ScoringResult
from services.scoring import evaluate

router = APIRouter(prefix="/api/scoring", tags=["scoring"])


@router.post("/evaluate", response_model=ScoringResult)
async def evaluate_application_data(application_data: Optional[dict[str, Any]] = Body(None)):
    """Score application data without storing anything."""
    return evaluate(application_data)
