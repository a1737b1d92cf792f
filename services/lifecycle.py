"""
Review workflow for credit applications.

Applications start ``pending`` and are moved by reviewers to ``in-review`` and then
``completed`` or ``rejected``. Any declared status may be set from any status,
including back to ``pending``; terminal states are terminal by convention only.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from schemas.enums import ApplicationStatus
from services.errors import ValidationError

INITIAL_STATUS = ApplicationStatus.PENDING


def parse_status(value: Any) -> ApplicationStatus:
    try:
        return ApplicationStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise ValidationError(f"Invalid status {value!r}; expected one of: {allowed}") from None


def transition_status(
    application: Any,
    target_status: ApplicationStatus | str,
    reviewer_id: str,
    comments: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """
    Return the fields to persist for a review decision; ``application`` is not modified.

    The reviewer and ``updated_at`` are always stamped. Comments replace earlier
    comments only when given, so a later review never clears them.
    """
    status = parse_status(target_status)
    fields: dict[str, Any] = {
        "status": status.value,
        "reviewed_by": reviewer_id,
        "updated_at": now or datetime.now(timezone.utc),
    }
    if comments is not None:
        fields["admin_comments"] = comments
    return fields
