"""Authentication routes.

This module handles HTTP endpoints for account registration and login.
"""

import logging

from fastapi import APIRouter, status

from config import API_PREFIX
from core.auth import CurrentPrincipal
from core.dependencies import TokenServiceDep, UserManagerDep
from schemas.user import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    User,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{API_PREFIX}/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
def register(req: RegisterRequest, user_manager: UserManagerDep) -> User:
    """Register a new account.

    The account becomes ADMIN when its email matches ADMIN_BOOTSTRAP_EMAIL,
    LEARNER otherwise.

    Args:
        req: Registration request with email, username and password.
        user_manager: Injected UserManager instance.

    Returns:
        Safe projection of the created account.
    """
    return user_manager.register(
        email=req.email,
        username=req.username,
        password=req.password,
    )


@router.post("/login", response_model=LoginResponse, summary="Log in")
def login(
    req: LoginRequest,
    user_manager: UserManagerDep,
    token_service: TokenServiceDep,
) -> LoginResponse:
    """Login with email and password.

    Args:
        req: Login request with email and password.
        user_manager: Injected UserManager instance.
        token_service: Injected TokenService instance.

    Returns:
        LoginResponse with the session token and safe account projection.
    """
    return user_manager.login(req.email, req.password, token_service)


@router.get("/me", response_model=CurrentUserResponse, summary="Get current user")
def get_current_user_info(
    principal: CurrentPrincipal,
    user_manager: UserManagerDep,
) -> CurrentUserResponse:
    """Get the caller's own account."""
    return CurrentUserResponse(user=user_manager.get_user(principal.id))
