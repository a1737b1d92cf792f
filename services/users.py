from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models import ApplicationDocument, CreditApplication, CustomerProfile, User
from schemas.enums import UserRole
from schemas.user import UserCreate, UserUpdate
from services.errors import NotFoundError, ValidationError
from utils.ids import USER_PREFIX, new_id

logger = logging.getLogger(__name__)


def new_profile(now: datetime) -> CustomerProfile:
    """Empty profile for a new customer; filled in later from employment details."""
    return CustomerProfile(
        date_of_birth=None,
        address=None,
        employment_status=None,
        annual_income=None,
        employer_name=None,
        work_experience=None,
        credit_score=0,
        risk_level="unknown",
        created_at=now,
    )


async def create_user(session: AsyncSession, body: UserCreate) -> User:
    """Create a user; customers get an empty profile alongside."""
    email = body.email.strip().lower()
    existing = await session.execute(select(User.id).where(User.email == email))
    if existing.scalar_one_or_none() is not None:
        raise ValidationError("Email already registered")

    now = datetime.now(timezone.utc)
    user = User(
        id=new_id(USER_PREFIX),
        email=email,
        role=body.role,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
        is_email_verified=False,
        is_active=True,
        created_at=now,
    )
    if user.role == UserRole.CUSTOMER.value:
        user.profile = new_profile(now)
    else:
        user.profile = None
    session.add(user)
    await session.flush()
    logger.info("Created %s user %s", user.role, user.id)
    return user


async def get_user(session: AsyncSession, user_id: str) -> User:
    result = await session.execute(
        select(User).options(selectinload(User.profile)).where(User.id == user_id)
    )
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("user", user_id)
    return user


async def list_users(session: AsyncSession) -> list[User]:
    result = await session.execute(
        select(User).options(selectinload(User.profile)).order_by(User.created_at)
    )
    return list(result.scalars().all())


# Columns that cannot be cleared; a null in the request leaves them unchanged.
REQUIRED_USER_FIELDS = frozenset({"role", "is_email_verified", "is_active"})


async def update_user(session: AsyncSession, user_id: str, body: UserUpdate) -> User:
    user = await get_user(session, user_id)
    for field, value in body.model_dump(exclude_unset=True, by_alias=False).items():
        if value is None and field in REQUIRED_USER_FIELDS:
            continue
        setattr(user, field, value)
    await session.flush()
    return user


async def delete_user(session: AsyncSession, user_id: str) -> None:
    """
    Delete a user together with the profile, applications and documents that
    reference it. Runs inside the caller's transaction so nothing is left orphaned.
    """
    user = await get_user(session, user_id)
    owned_apps = select(CreditApplication.id).where(CreditApplication.customer_id == user_id)
    await session.execute(
        delete(ApplicationDocument)
        .where(ApplicationDocument.application_id.in_(owned_apps))
        .execution_options(synchronize_session=False)
    )
    await session.execute(delete(CreditApplication).where(CreditApplication.customer_id == user_id))
    # The profile goes with the user through the relationship cascade.
    await session.delete(user)
    await session.flush()
    logger.info("Deleted user %s with profile and applications", user_id)
