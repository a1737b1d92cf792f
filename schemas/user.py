from typing import Literal, Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    phone: Optional[str] = None
    role: Literal["customer", "admin"] = "customer"

    model_config = {"populate_by_name": True}


class UserUpdate(BaseModel):
    """Partial update; credentials are managed by the identity provider."""

    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    phone: Optional[str] = None
    role: Optional[Literal["customer", "admin"]] = None
    is_email_verified: Optional[bool] = Field(None, alias="isEmailVerified")
    is_active: Optional[bool] = Field(None, alias="isActive")

    model_config = {"populate_by_name": True}
