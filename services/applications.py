"""
Persistence around the scoring engine and the review workflow.

Every mutating operation is one fetch, mutate and flush inside the caller's
transaction. CreditApplication carries a version column, so a write based on a
stale read fails its UPDATE and surfaces as ConflictError instead of silently
overwriting a concurrent decision.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from models import ApplicationDocument, CreditApplication, CustomerProfile, User
from schemas.application import DocumentUpload
from services.documents import find_document, set_document_verification
from services.errors import ConflictError, NotFoundError
from services.lifecycle import INITIAL_STATUS, transition_status
from services.scoring import evaluate
from utils.ids import APPLICATION_PREFIX, DOCUMENT_PREFIX, new_id

logger = logging.getLogger(__name__)


async def _require_user(session: AsyncSession, user_id: str) -> User:
    user = await session.get(User, user_id)
    if user is None:
        raise NotFoundError("user", user_id)
    return user


async def submit_application(
    session: AsyncSession,
    customer_id: str,
    application_data: dict[str, Any],
    documents: Iterable[DocumentUpload] = (),
) -> CreditApplication:
    """Score the submitted data and store a new pending application."""
    await _require_user(session, customer_id)
    profile = (
        await session.execute(select(CustomerProfile).where(CustomerProfile.user_id == customer_id))
    ).scalar_one_or_none()

    result = evaluate(application_data, profile)
    now = datetime.now(timezone.utc)
    app = CreditApplication(
        id=new_id(APPLICATION_PREFIX),
        customer_id=customer_id,
        application_data=application_data,
        calculated_score=result.calculated_score,
        risk_assessment=result.risk_assessment.value,
        recommendations=result.recommendations.model_dump(mode="json"),
        status=INITIAL_STATUS.value,
        reviewed_by=None,
        admin_comments=None,
        created_at=now,
        updated_at=now,
        documents=[
            ApplicationDocument(
                id=new_id(DOCUMENT_PREFIX),
                position=i,
                file_name=doc.file_name,
                file_path=doc.file_path,
                is_verified=False,
                verified_by=None,
                verified_at=None,
                upload_date=now,
            )
            for i, doc in enumerate(documents)
        ],
    )
    session.add(app)
    await session.flush()
    logger.info(
        "Application %s submitted by %s: score=%s risk=%s",
        app.id, customer_id, app.calculated_score, app.risk_assessment,
    )
    return app


async def get_application(session: AsyncSession, application_id: str) -> CreditApplication:
    app = await session.get(CreditApplication, application_id)
    if app is None:
        raise NotFoundError("application", application_id)
    return app


async def list_applications(
    session: AsyncSession,
    status: Optional[str] = None,
    customer_id: Optional[str] = None,
) -> list[CreditApplication]:
    query = select(CreditApplication).order_by(CreditApplication.updated_at.desc())
    if status is not None:
        query = query.where(CreditApplication.status == status)
    if customer_id is not None:
        query = query.where(CreditApplication.customer_id == customer_id)
    result = await session.execute(query)
    return list(result.scalars().all())


def _check_version(app: CreditApplication, expected_version: Optional[int]) -> None:
    if expected_version is not None and expected_version != app.version:
        logger.warning(
            "Version mismatch on application %s: expected %s, found %s",
            app.id, expected_version, app.version,
        )
        raise ConflictError(
            f"Application {app.id} was modified concurrently "
            f"(expected version {expected_version}, found {app.version})"
        )


async def _flush_versioned(session: AsyncSession, app: CreditApplication) -> None:
    try:
        await session.flush()
    except StaleDataError as e:
        logger.warning("Concurrent write lost on application %s", app.id)
        raise ConflictError(f"Application {app.id} was modified concurrently; retry the request") from e


async def review_application(
    session: AsyncSession,
    application_id: str,
    reviewer_id: str,
    status: str,
    comments: Optional[str] = None,
    expected_version: Optional[int] = None,
) -> CreditApplication:
    app = await get_application(session, application_id)
    await _require_user(session, reviewer_id)
    _check_version(app, expected_version)

    previous = app.status
    for field, value in transition_status(app, status, reviewer_id, comments).items():
        setattr(app, field, value)
    await _flush_versioned(session, app)
    logger.info("Application %s moved %s -> %s by %s", app.id, previous, app.status, reviewer_id)
    return app


async def verify_document(
    session: AsyncSession,
    application_id: str,
    document_id: str,
    is_verified: bool,
    verifier_id: str,
    expected_version: Optional[int] = None,
) -> ApplicationDocument:
    app = await get_application(session, application_id)
    fields = set_document_verification(app, document_id, is_verified, verifier_id)
    await _require_user(session, verifier_id)
    _check_version(app, expected_version)

    document = find_document(app, document_id)
    for field, value in fields.items():
        setattr(document, field, value)
    # Touching the parent puts its version check on the same write.
    app.updated_at = fields["verified_at"]
    await _flush_versioned(session, app)
    logger.info(
        "Document %s on application %s marked verified=%s by %s",
        document.id, app.id, document.is_verified, verifier_id,
    )
    return document
