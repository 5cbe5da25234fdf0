"""User schema definitions.

This module defines roles, the authenticated principal and the request and
response models of the account endpoints. Response models are safe
projections: they never carry the password hash.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Role(str, Enum):
    """Account roles, lowest privilege first."""

    LEARNER = "LEARNER"
    MENTOR = "MENTOR"
    ADMIN = "ADMIN"


# Roles that can be granted through the role mutation endpoint
ASSIGNABLE_ROLES = (Role.LEARNER, Role.MENTOR)


class Principal(BaseModel):
    """Authenticated identity attached to a request."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="The account id taken from the token subject.")
    role: Role = Field(description="The role snapshot embedded in the token.")


class User(BaseModel):
    """Safe projection of an account."""

    id: str
    email: str
    username: str
    role: Role


class UserDetail(User):
    """Safe projection including timestamps."""

    created_at: str
    updated_at: str


class RegisterRequest(BaseModel):
    email: EmailStr
    username: str = Field(min_length=3, max_length=30)
    # bcrypt only uses the first 72 bytes
    password: str = Field(min_length=8, max_length=72)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    token: str
    user: User


class UpdateRoleRequest(BaseModel):
    role: Optional[str] = Field(
        default=None,
        description="Target role, either LEARNER or MENTOR.",
    )


class CurrentUserResponse(BaseModel):
    user: UserDetail


class ProtectedResponse(BaseModel):
    message: str
    user: Principal
