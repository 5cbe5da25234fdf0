"""Conversions between database models and API schemas."""

from models.comment import CommentModel
from models.discussion import DiscussionModel
from models.user import UserModel
from schemas.discussion import Comment, Discussion
from schemas.user import User, UserDetail


def model_to_user(model: UserModel) -> User:
    return User(
        id=model.user_id,
        email=model.email,
        username=model.username,
        role=model.role,
    )


def model_to_user_detail(model: UserModel) -> UserDetail:
    return UserDetail(
        id=model.user_id,
        email=model.email,
        username=model.username,
        role=model.role,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def model_to_discussion(model: DiscussionModel) -> Discussion:
    return Discussion(
        id=model.discussion_id,
        title=model.title,
        content=model.content,
        author_id=model.author_id,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def model_to_comment(model: CommentModel) -> Comment:
    return Comment(
        id=model.comment_id,
        content=model.content,
        discussion_id=model.discussion_id,
        author_id=model.author_id,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
