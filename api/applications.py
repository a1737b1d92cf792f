from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import CurrentUser, get_current_user
from api.serializers import application_to_response
from database import get_db
from schemas.application import ApplicationCreate
from services import applications as application_service
from services.errors import NotFoundError
from utils.ids import APPLICATION_PREFIX, parse_id

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.post("", status_code=201)
async def submit_application(
    body: ApplicationCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    app = await application_service.submit_application(
        db, user.id, body.application_data, body.documents
    )
    return application_to_response(app)


@router.get("")
async def list_my_applications(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    apps = await application_service.list_applications(db, customer_id=user.id)
    return [application_to_response(a) for a in apps]


@router.get("/{application_id}")
async def get_application(
    application_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    app_id = parse_id(application_id, APPLICATION_PREFIX, "application")
    app = await application_service.get_application(db, app_id)
    if app.customer_id != user.id and not user.is_admin:
        # Do not reveal other customers' applications.
        raise NotFoundError("application", app_id)
    return application_to_response(app)
