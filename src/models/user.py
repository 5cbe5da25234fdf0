"""User database model.

This module defines the User database model using SQLAlchemy.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import Base


class UserModel(Base):
    """User database model."""

    __tablename__ = "users"

    user_id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False)  # 'LEARNER', 'MENTOR' or 'ADMIN'
    created_at = Column(String, nullable=False)  # ISO format string
    updated_at = Column(String, nullable=False)  # ISO format string

    discussions = relationship(
        "DiscussionModel",
        back_populates="author",
        cascade="all, delete-orphan",
    )
    comments = relationship(
        "CommentModel",
        back_populates="author",
        cascade="all, delete-orphan",
    )
