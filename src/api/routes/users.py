"""User administration routes."""

from fastapi import APIRouter, Response, status

from config import API_PREFIX
from core.auth import CurrentPrincipal, PrivilegedPrincipal
from core.dependencies import UserManagerDep
from schemas.user import UpdateRoleRequest, UserDetail

router = APIRouter(prefix=f"{API_PREFIX}/users", tags=["Users"])


@router.get("/{user_id}", response_model=UserDetail, summary="Get user")
def get_user(
    user_id: str,
    principal: CurrentPrincipal,
    user_manager: UserManagerDep,
) -> UserDetail:
    return user_manager.get_user(user_id)


@router.patch("/{user_id}/role", response_model=UserDetail, summary="Change user role")
def update_role(
    user_id: str,
    req: UpdateRoleRequest,
    principal: PrivilegedPrincipal,
    user_manager: UserManagerDep,
) -> UserDetail:
    """Set a user's role to LEARNER or MENTOR.

    Permission requirements:
    - Admin: Can change any user's role
    - Mentor/Learner: No permission

    ADMIN itself is never assignable here; that role only comes from the
    bootstrap email at registration.
    """
    return user_manager.set_role(principal, user_id, req.role)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete user",
)
def delete_user(
    user_id: str,
    principal: PrivilegedPrincipal,
    user_manager: UserManagerDep,
) -> Response:
    """Delete a user and everything they authored. Admin only."""
    user_manager.delete_user(principal, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
