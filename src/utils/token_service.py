"""Session token issuance and verification.

Tokens are stateless HS256 JWTs carrying the account id (``sub``), the role
at issuance time, and an absolute expiry. Verification collapses every
failure cause into a single ``InvalidTokenError`` so callers cannot tell a
tampered token from an expired one.
"""

import logging
import time
from datetime import datetime, timedelta
from typing import Optional, Union

import pytz
from jose import JWTError, jwt
from jose.utils import base64url_decode, base64url_encode
from pydantic import BaseModel

from config import JWT_ALGORITHM, JWT_EXPIRES_IN, JWT_SECRET_KEY
from schemas.user import Role

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or expired token"


class InvalidTokenError(Exception):
    """Raised when a token is malformed, tampered with, or expired."""

    def __init__(self):
        super().__init__(INVALID_TOKEN_MESSAGE)


class TokenClaims(BaseModel):
    """Verified token claims."""

    subject_id: str
    role: Role


def _has_canonical_signature(token: str) -> bool:
    """Check that the signature segment is canonical base64url.

    Base64 decoders ignore the spare low bits of the last character, so two
    different strings can carry the same signature bytes. Requiring the
    canonical encoding makes every bit of the token significant.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return False
    signature = parts[2].encode("ascii")
    return base64url_encode(base64url_decode(signature)) == signature


class TokenService:
    """Issues and verifies signed, time-limited session tokens."""

    def __init__(
        self,
        secret_key: str = JWT_SECRET_KEY,
        algorithm: str = JWT_ALGORITHM,
        default_ttl: timedelta = JWT_EXPIRES_IN,
    ):
        """Initialize TokenService.

        Args:
            secret_key: Server-held signing secret.
            algorithm: JWS algorithm name.
            default_ttl: Lifetime used when ``issue`` gets no ttl.
        """
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.default_ttl = default_ttl

    def issue(
        self,
        subject_id: str,
        role: Union[Role, str],
        ttl: Optional[Union[timedelta, int, float]] = None,
    ) -> str:
        """Create a signed token.

        Args:
            subject_id: Account id to embed as the subject.
            role: Account role at issuance time.
            ttl: Token lifetime as a timedelta or seconds; defaults to the
                configured lifetime.

        Returns:
            Encoded JWT token string.
        """
        if ttl is None:
            ttl = self.default_ttl
        elif not isinstance(ttl, timedelta):
            ttl = timedelta(seconds=ttl)

        now = datetime.now(pytz.utc)
        expires_at = now + ttl
        payload = {
            "sub": subject_id,
            "role": Role(role).value,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Verify a token and return its claims.

        The token is valid only while the current time is strictly before
        its expiry.

        Args:
            token: Encoded JWT token string.

        Returns:
            TokenClaims with the subject id and role.

        Raises:
            InvalidTokenError: For any signature, shape or expiry failure.
        """
        try:
            if not isinstance(token, str) or not _has_canonical_signature(token):
                raise InvalidTokenError()
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_sub": True},
            )
            expires_at = payload["exp"]
            if not isinstance(expires_at, int) or time.time() >= expires_at:
                raise InvalidTokenError()
            return TokenClaims(subject_id=payload["sub"], role=payload.get("role"))
        except InvalidTokenError:
            raise
        except (JWTError, ValueError, TypeError, KeyError) as e:
            # pydantic.ValidationError is a ValueError: bad role or subject
            logger.debug("Token rejected: %s", e)
            raise InvalidTokenError() from None
