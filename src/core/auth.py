"""Authentication gate.

Turns the ``Authorization`` header into a ``Principal``. The role comes from
the token as issued; there is no database lookup here, so a role change only
takes effect once the account logs in again. ADMIN-only routes can opt into
re-reading the role with ``get_privileged_principal``.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import REVALIDATE_ROLE_ON_PRIVILEGED
from core.dependencies import TokenServiceDep, UserManagerDep
from core.exceptions import UnauthorizedError
from schemas.user import Principal
from utils.token_service import INVALID_TOKEN_MESSAGE, InvalidTokenError, TokenService

logger = logging.getLogger(__name__)

MISSING_HEADER_MESSAGE = "Missing or invalid authorization header"

# auto_error is off so a missing header gets our own 401 body
security = HTTPBearer(auto_error=False)


def extract_bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    """Extract the token from parsed ``Bearer <token>`` credentials.

    The scheme must be exactly ``Bearer`` and the token a single
    whitespace-free part.

    Raises:
        UnauthorizedError: If the header is absent or not a two-part bearer value.
    """
    if credentials is None or credentials.scheme != "Bearer":
        raise UnauthorizedError(MISSING_HEADER_MESSAGE)
    token = credentials.credentials
    if token.split() != [token]:
        raise UnauthorizedError(MISSING_HEADER_MESSAGE)
    return token


def authenticate(token: str, token_service: TokenService) -> Principal:
    """Verify a bearer token.

    Args:
        token: Token taken from the ``Authorization`` header.
        token_service: Verifies the token.

    Returns:
        The authenticated principal.

    Raises:
        UnauthorizedError: Same response for every verification failure.
    """
    try:
        claims = token_service.verify(token)
    except InvalidTokenError:
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE) from None
    return Principal(id=claims.subject_id, role=claims.role)


def get_current_principal(
    token_service: TokenServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Principal:
    return authenticate(extract_bearer_token(credentials), token_service)


def get_privileged_principal(
    user_manager: UserManagerDep,
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """Principal for ADMIN-only routes.

    With REVALIDATE_ROLE_ON_PRIVILEGED enabled the role is re-read from the
    account instead of trusting the token snapshot.
    """
    if not REVALIDATE_ROLE_ON_PRIVILEGED:
        return principal
    refreshed = user_manager.refresh_principal(principal)
    if refreshed.role != principal.role:
        logger.info(
            "Role of user %s changed since token issuance: %s -> %s",
            principal.id,
            principal.role.value,
            refreshed.role.value,
        )
    return refreshed


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
PrivilegedPrincipal = Annotated[Principal, Depends(get_privileged_principal)]
