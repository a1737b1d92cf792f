"""Verification state of documents attached to a credit application."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from services.errors import NotFoundError


def find_document(application: Any, document_id: str) -> Any:
    """Look up a document by id within its owning application."""
    for document in application.documents:
        if document.id == document_id:
            return document
    raise NotFoundError("document", document_id)


def set_document_verification(
    application: Any,
    document_id: str,
    is_verified: bool,
    verifier_id: str,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """
    Return the fields that record a verification decision for one document.

    A new decision overwrites the previous one; no history is kept. Raises
    NotFoundError if the document is not part of ``application``.
    """
    find_document(application, document_id)
    return {
        "is_verified": bool(is_verified),
        "verified_by": verifier_id,
        "verified_at": now or datetime.now(timezone.utc),
    }
