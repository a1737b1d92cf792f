from __future__ import annotations

import math
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def _finite_or_none(obj: Any) -> Any:
    """Replace NaN and infinities anywhere in a JSON payload with None."""
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    if isinstance(obj, dict):
        return {k: _finite_or_none(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_finite_or_none(x) for x in obj]
    return obj


class DocumentUpload(BaseModel):
    file_name: str = Field(..., alias="fileName")
    file_path: str = Field(..., alias="filePath")

    model_config = {"populate_by_name": True}


class ApplicationCreate(BaseModel):
    # Free-form on purpose: stored as submitted, normalized only when scored.
    # Non-finite numbers cannot be encoded as JSON, so they are stored as null.
    application_data: dict[str, Any] = Field(default_factory=dict, alias="applicationData")
    documents: list[DocumentUpload] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @field_validator("application_data")
    @classmethod
    def _json_safe(cls, v):
        return _finite_or_none(v)


class ReviewRequest(BaseModel):
    status: str
    admin_comments: Optional[str] = Field(None, alias="adminComments")
    version: Optional[int] = Field(None, description="Expected record version; 409 on mismatch")

    model_config = {"populate_by_name": True}


class DocumentVerifyRequest(BaseModel):
    document_id: str = Field(..., alias="documentId")
    is_verified: bool = Field(..., alias="isVerified")
    version: Optional[int] = Field(None, description="Expected application version; 409 on mismatch")

    model_config = {"populate_by_name": True}
