"""Pydantic schemas for User and Auth."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from courseload.domain.enums import Role
from courseload.domain.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    # Presence is checked by the auth service so every missing field
    # produces the same "All fields are required." message.
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_bban: Optional[str] = Field(default=None, alias="bankBBAN")
    school: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class CreateQARequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class AssignRoleRequest(CamelModel):
    user_id: Optional[int] = None
    role: Optional[str] = None


class UserRead(CamelModel):
    id: int
    name: str
    email: str
    role: Role
    school: str


class UserDetail(UserRead):
    bank_name: str
    bank_account_number: str
    bank_bban: str = Field(alias="bankBBAN")
    created_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    message: str
    token: str
    user: UserRead


class UserEnvelope(CamelModel):
    message: Optional[str] = None
    user: UserRead


class UserList(CamelModel):
    users: list[UserDetail]
