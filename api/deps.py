"""Request identity supplied by the upstream auth layer through headers."""
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request

from config import settings
from schemas.enums import UserRole
from utils.ids import USER_PREFIX, parse_id


@dataclass(frozen=True)
class CurrentUser:
    id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def get_current_user(request: Request) -> CurrentUser:
    raw_id = request.headers.get(settings.user_id_header)
    role = (request.headers.get(settings.user_role_header) or UserRole.CUSTOMER.value).strip().lower()
    if not raw_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    if role not in {r.value for r in UserRole}:
        raise HTTPException(status_code=401, detail=f"Unknown role {role!r}")
    return CurrentUser(id=parse_id(raw_id, USER_PREFIX, "user"), role=role)


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin role required")
    return user
