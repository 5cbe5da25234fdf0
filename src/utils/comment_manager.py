"""Comment management utilities."""

import logging
import uuid
from datetime import datetime
from typing import List

import pytz
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.policies import Action, ResourceKind, authorize
from models.comment import CommentModel
from schemas.discussion import Comment, CreateCommentRequest
from schemas.user import Principal
from utils.converters import model_to_comment
from utils.discussion_manager import DiscussionManager
from utils.validation import parse

logger = logging.getLogger(__name__)


class CommentManager:
    """Manages comments under discussions."""

    def __init__(self, db: Session):
        self.db = db
        self.discussions = DiscussionManager(db)

    def get_comment_model(self, comment_id: str) -> CommentModel:
        model = (
            self.db.query(CommentModel)
            .filter(CommentModel.comment_id == comment_id)
            .first()
        )
        if model is None:
            raise NotFoundError("Comment not found")
        return model

    def create_comment(self, principal: Principal, discussion_id: str, content: str) -> Comment:
        """Add a comment to an existing discussion.

        Raises:
            ValidationError: If the content is empty or too long.
            NotFoundError: If the discussion does not exist.
        """
        req = parse(CreateCommentRequest, content=content)
        discussion = self.discussions.get_discussion_model(discussion_id)
        authorize(principal, Action.CREATE, ResourceKind.COMMENT)

        now = datetime.now(pytz.utc).isoformat()
        model = CommentModel(
            comment_id=str(uuid.uuid4()),
            content=req.content,
            discussion_id=discussion.discussion_id,
            author_id=principal.id,
            created_at=now,
            updated_at=now,
        )
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info(
            "User %s commented %s on discussion %s",
            principal.id,
            model.comment_id,
            discussion_id,
        )
        return model_to_comment(model)

    def list_comments(self, principal: Principal, discussion_id: str) -> List[Comment]:
        """List a discussion's comments, oldest first."""
        self.discussions.get_discussion_model(discussion_id)
        authorize(principal, Action.READ, ResourceKind.COMMENT)
        models = (
            self.db.query(CommentModel)
            .filter(CommentModel.discussion_id == discussion_id)
            .order_by(CommentModel.created_at.asc())
            .all()
        )
        return [model_to_comment(m) for m in models]

    def delete_comment(self, principal: Principal, comment_id: str) -> None:
        """Delete a comment. ADMIN only, authors included.

        Raises:
            NotFoundError: If the comment does not exist.
            ForbiddenError: If the caller is not ADMIN.
        """
        model = self.get_comment_model(comment_id)
        authorize(principal, Action.DELETE, ResourceKind.COMMENT, model)

        self.db.delete(model)
        self.db.commit()
        logger.info("User %s deleted comment %s", principal.id, comment_id)
