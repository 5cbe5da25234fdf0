"""User management utilities.

This module provides account registration (including bootstrap-admin
detection), login, role mutation and account deletion.
"""

import logging
import uuid
from datetime import datetime
from functools import lru_cache
from typing import Optional

import pytz
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import ADMIN_BOOTSTRAP_EMAIL
from core.exceptions import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from core.policies import Action, ResourceKind, authorize
from models.user import UserModel
from schemas.user import (
    ASSIGNABLE_ROLES,
    LoginRequest,
    LoginResponse,
    Principal,
    RegisterRequest,
    Role,
    User,
    UserDetail,
)
from utils.converters import model_to_user, model_to_user_detail
from utils.password_hasher import PasswordHasher
from utils.token_service import TokenService
from utils.validation import parse

logger = logging.getLogger(__name__)

DUPLICATE_ACCOUNT_MESSAGE = "Email or username already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
INVALID_ROLE_MESSAGE = "Role must be either LEARNER or MENTOR"


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    # Verified against when the email is unknown so both login failures cost the same
    return PasswordHasher(rounds).hash("not-a-real-password")


class UserManager:
    """Manages account persistence and operations using SQLAlchemy."""

    def __init__(
        self,
        db: Session,
        password_hasher: Optional[PasswordHasher] = None,
        bootstrap_admin_email: Optional[str] = ADMIN_BOOTSTRAP_EMAIL,
    ):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
            password_hasher: Credential codec; a default one is created if omitted.
            bootstrap_admin_email: Email that is granted ADMIN on registration.
        """
        self.db = db
        self.password_hasher = password_hasher or PasswordHasher()
        self.bootstrap_admin_email = bootstrap_admin_email

    def resolve_role(self, email: str) -> Role:
        """Return the role a new account with ``email`` receives.

        The bootstrap rule fires on every registration with that email, so a
        deleted bootstrap account can be re-registered and regain ADMIN.
        """
        if (
            self.bootstrap_admin_email
            and email.lower() == self.bootstrap_admin_email.lower()
        ):
            return Role.ADMIN
        return Role.LEARNER

    def register(self, email: str, username: str, password: str) -> User:
        """Create a new account.

        Args:
            email: Email address, unique case-insensitively.
            username: Username (3-30 chars), unique case-sensitively.
            password: Plain text password (8-72 chars).

        Returns:
            Safe projection of the created account.

        Raises:
            ValidationError: If an input is malformed.
            ConflictError: If the email or username is already taken.
        """
        req = parse(RegisterRequest, email=email, username=username, password=password)

        existing = (
            self.db.query(UserModel.user_id)
            .filter(
                or_(
                    UserModel.email == req.email,
                    UserModel.username == req.username,
                )
            )
            .first()
        )
        if existing:
            raise ConflictError(DUPLICATE_ACCOUNT_MESSAGE)

        role = self.resolve_role(req.email)
        now = datetime.now(pytz.utc).isoformat()
        model = UserModel(
            user_id=str(uuid.uuid4()),
            email=req.email,
            username=req.username,
            password_hash=self.password_hasher.hash(req.password),
            role=role.value,
            created_at=now,
            updated_at=now,
        )

        # Two concurrent registrations can both pass the check above; the
        # unique indexes catch the loser
        try:
            self.db.add(model)
            self.db.commit()
            self.db.refresh(model)
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(DUPLICATE_ACCOUNT_MESSAGE) from e

        logger.info("Registered user %s with role %s", model.user_id, role.value)
        return model_to_user(model)

    def login(
        self, email: str, password: str, token_service: TokenService
    ) -> LoginResponse:
        """Check credentials and issue a session token.

        Unknown email and wrong password fail identically.

        Args:
            email: Email address, matched exactly.
            password: Plain text password.
            token_service: Issues the session token.

        Returns:
            LoginResponse with the token and safe account projection.

        Raises:
            ValidationError: If the input is malformed.
            UnauthorizedError: If the credentials do not match an account.
        """
        req = parse(LoginRequest, email=email, password=password)

        model = self.db.query(UserModel).filter(UserModel.email == req.email).first()
        if model is None:
            self.password_hasher.verify(req.password, _dummy_hash(self.password_hasher.rounds))
            logger.info("Login failed: unknown email")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        if not self.password_hasher.verify(req.password, model.password_hash):
            logger.info("Login failed for user %s: wrong password", model.user_id)
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        token = token_service.issue(model.user_id, model.role)
        return LoginResponse(token=token, user=model_to_user(model))

    def get_user_model(self, user_id: str) -> UserModel:
        """Load an account row.

        Raises:
            NotFoundError: If no account has this id.
        """
        model = self.db.query(UserModel).filter(UserModel.user_id == user_id).first()
        if model is None:
            raise NotFoundError("User not found")
        return model

    def get_user(self, user_id: str) -> UserDetail:
        return model_to_user_detail(self.get_user_model(user_id))

    def refresh_principal(self, principal: Principal) -> Principal:
        """Replace the token's role snapshot with the account's current role.

        Raises:
            UnauthorizedError: If the account no longer exists.
        """
        model = (
            self.db.query(UserModel)
            .filter(UserModel.user_id == principal.id)
            .first()
        )
        if model is None:
            raise UnauthorizedError("Invalid or expired token")
        return Principal(id=model.user_id, role=model.role)

    def set_role(self, principal: Principal, user_id: str, role: Optional[str]) -> UserDetail:
        """Change an account's role.

        ADMIN can never be granted here, whatever the caller's own role.

        Args:
            principal: The authenticated caller.
            user_id: Target account id.
            role: New role, LEARNER or MENTOR.

        Returns:
            Safe projection of the updated account.

        Raises:
            ValidationError: If ``role`` is not LEARNER or MENTOR.
            NotFoundError: If the target account does not exist.
            ForbiddenError: If the caller is not ADMIN.
        """
        if role not in [r.value for r in ASSIGNABLE_ROLES]:
            raise ValidationError(INVALID_ROLE_MESSAGE)

        model = self.get_user_model(user_id)
        authorize(principal, Action.SET_ROLE, ResourceKind.ACCOUNT, model)

        model.role = role
        model.updated_at = datetime.now(pytz.utc).isoformat()
        self.db.commit()
        self.db.refresh(model)
        logger.info("User %s set role of %s to %s", principal.id, user_id, role)
        return model_to_user_detail(model)

    def delete_user(self, principal: Principal, user_id: str) -> None:
        """Delete an account together with its discussions and comments.

        Raises:
            NotFoundError: If the target account does not exist.
            ForbiddenError: If the caller is not ADMIN.
        """
        model = self.get_user_model(user_id)
        authorize(principal, Action.DELETE, ResourceKind.ACCOUNT, model)

        self.db.delete(model)
        self.db.commit()
        logger.info("User %s deleted user %s", principal.id, user_id)
