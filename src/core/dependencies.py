"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes,
following Google Python Style Guide and FastAPI best practices.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import get_db
from utils import comment_manager
from utils import discussion_manager
from utils import password_hasher
from utils import token_service
from utils import user_manager

# Singletons, configuration is immutable for the process lifetime
_token_service_instance: token_service.TokenService = None
_password_hasher_instance: password_hasher.PasswordHasher = None


def get_token_service() -> token_service.TokenService:
    """Get TokenService singleton instance.

    Returns:
        TokenService instance (singleton).
    """
    global _token_service_instance
    if _token_service_instance is None:
        _token_service_instance = token_service.TokenService()
    return _token_service_instance


def get_password_hasher() -> password_hasher.PasswordHasher:
    """Get PasswordHasher singleton instance."""
    global _password_hasher_instance
    if _password_hasher_instance is None:
        _password_hasher_instance = password_hasher.PasswordHasher()
    return _password_hasher_instance


def get_user_manager(
    db: Session = Depends(get_db),
    hasher: password_hasher.PasswordHasher = Depends(get_password_hasher),
) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.
        hasher: Shared password hasher.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db, password_hasher=hasher)


def get_discussion_manager(
    db: Session = Depends(get_db),
) -> discussion_manager.DiscussionManager:
    """Get DiscussionManager instance with request-scoped DB session."""
    return discussion_manager.DiscussionManager(db)


def get_comment_manager(db: Session = Depends(get_db)) -> comment_manager.CommentManager:
    """Get CommentManager instance with request-scoped DB session."""
    return comment_manager.CommentManager(db)


# Type aliases for dependency injection
TokenServiceDep = Annotated[
    token_service.TokenService, Depends(get_token_service)
]
UserManagerDep = Annotated[
    user_manager.UserManager, Depends(get_user_manager)
]
DiscussionManagerDep = Annotated[
    discussion_manager.DiscussionManager, Depends(get_discussion_manager)
]
CommentManagerDep = Annotated[
    comment_manager.CommentManager, Depends(get_comment_manager)
]
