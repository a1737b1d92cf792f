from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import CurrentUser, require_admin
from api.serializers import admin_application_to_response, document_to_response, user_to_response
from database import get_db
from schemas.application import DocumentVerifyRequest, ReviewRequest
from schemas.enums import ApplicationStatus
from schemas.user import UserCreate, UserUpdate
from services import applications as application_service
from services import users as user_service
from services.lifecycle import parse_status
from utils.ids import APPLICATION_PREFIX, DOCUMENT_PREFIX, USER_PREFIX, parse_id

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


# Users


@router.post("/users", status_code=201)
async def create_user(body: UserCreate, db: AsyncSession = Depends(get_db)):
    user = await user_service.create_user(db, body)
    return user_to_response(user)


@router.get("/users")
async def list_users(db: AsyncSession = Depends(get_db)):
    users = await user_service.list_users(db)
    return {"count": len(users), "data": [user_to_response(u) for u in users]}


@router.get("/users/{user_id}")
async def get_user(user_id: str, db: AsyncSession = Depends(get_db)):
    user = await user_service.get_user(db, parse_id(user_id, USER_PREFIX, "user"))
    return user_to_response(user)


@router.put("/users/{user_id}")
async def update_user(user_id: str, body: UserUpdate, db: AsyncSession = Depends(get_db)):
    user = await user_service.update_user(db, parse_id(user_id, USER_PREFIX, "user"), body)
    return user_to_response(user)


@router.delete("/users/{user_id}")
async def delete_user(user_id: str, db: AsyncSession = Depends(get_db)):
    await user_service.delete_user(db, parse_id(user_id, USER_PREFIX, "user"))
    return {}


# Applications


@router.get("/applications")
async def list_applications(
    status: Optional[str] = Query(ApplicationStatus.PENDING.value),
    db: AsyncSession = Depends(get_db),
):
    apps = await application_service.list_applications(db, status=parse_status(status).value)
    return {"count": len(apps), "data": [admin_application_to_response(a) for a in apps]}


@router.get("/applications/{application_id}")
async def get_application(application_id: str, db: AsyncSession = Depends(get_db)):
    app_id = parse_id(application_id, APPLICATION_PREFIX, "application")
    app = await application_service.get_application(db, app_id)
    return admin_application_to_response(app)


@router.put("/applications/{application_id}/review")
async def review_application(
    application_id: str,
    body: ReviewRequest,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    app = await application_service.review_application(
        db,
        parse_id(application_id, APPLICATION_PREFIX, "application"),
        reviewer_id=admin.id,
        status=body.status,
        comments=body.admin_comments,
        expected_version=body.version,
    )
    return admin_application_to_response(app)


# Document verification


@router.put("/documents/{application_id}/verify")
async def verify_document(
    application_id: str,
    body: DocumentVerifyRequest,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    document = await application_service.verify_document(
        db,
        parse_id(application_id, APPLICATION_PREFIX, "application"),
        parse_id(body.document_id, DOCUMENT_PREFIX, "document"),
        is_verified=body.is_verified,
        verifier_id=admin.id,
        expected_version=body.version,
    )
    return document_to_response(document)
