"""Discussion management utilities."""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.policies import Action, ResourceKind, authorize
from models.discussion import DiscussionModel
from schemas.discussion import (
    CreateDiscussionRequest,
    Discussion,
    UpdateDiscussionRequest,
)
from schemas.user import Principal
from utils.converters import model_to_discussion
from utils.validation import parse

logger = logging.getLogger(__name__)


class DiscussionManager:
    """Manages discussion CRUD with ownership checks."""

    def __init__(self, db: Session):
        self.db = db

    def get_discussion_model(self, discussion_id: str) -> DiscussionModel:
        model = (
            self.db.query(DiscussionModel)
            .filter(DiscussionModel.discussion_id == discussion_id)
            .first()
        )
        if model is None:
            raise NotFoundError("Discussion not found")
        return model

    def create_discussion(self, principal: Principal, title: str, content: str) -> Discussion:
        """Create a discussion authored by the caller."""
        req = parse(CreateDiscussionRequest, title=title, content=content)
        authorize(principal, Action.CREATE, ResourceKind.DISCUSSION)

        now = datetime.now(pytz.utc).isoformat()
        model = DiscussionModel(
            discussion_id=str(uuid.uuid4()),
            title=req.title,
            content=req.content,
            author_id=principal.id,
            created_at=now,
            updated_at=now,
        )
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("User %s created discussion %s", principal.id, model.discussion_id)
        return model_to_discussion(model)

    def list_discussions(self, principal: Principal) -> List[Discussion]:
        """List every discussion, newest first."""
        authorize(principal, Action.READ, ResourceKind.DISCUSSION)
        models = (
            self.db.query(DiscussionModel)
            .order_by(DiscussionModel.created_at.desc())
            .all()
        )
        return [model_to_discussion(m) for m in models]

    def get_discussion(self, principal: Principal, discussion_id: str) -> Discussion:
        model = self.get_discussion_model(discussion_id)
        authorize(principal, Action.READ, ResourceKind.DISCUSSION, model)
        return model_to_discussion(model)

    def update_discussion(
        self,
        principal: Principal,
        discussion_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Discussion:
        """Update title and/or content.

        Allowed for the author, MENTOR and ADMIN.

        Raises:
            ValidationError: If neither field is given or one is out of range.
            NotFoundError: If the discussion does not exist.
            ForbiddenError: If the caller may not edit it.
        """
        req = parse(UpdateDiscussionRequest, title=title, content=content)
        model = self.get_discussion_model(discussion_id)
        authorize(principal, Action.UPDATE, ResourceKind.DISCUSSION, model)

        if req.title is not None:
            model.title = req.title
        if req.content is not None:
            model.content = req.content
        model.updated_at = datetime.now(pytz.utc).isoformat()
        self.db.commit()
        self.db.refresh(model)
        logger.info("User %s updated discussion %s", principal.id, discussion_id)
        return model_to_discussion(model)

    def delete_discussion(self, principal: Principal, discussion_id: str) -> None:
        """Delete a discussion and its comments.

        Allowed for the author and ADMIN.
        """
        model = self.get_discussion_model(discussion_id)
        authorize(principal, Action.DELETE, ResourceKind.DISCUSSION, model)

        self.db.delete(model)
        self.db.commit()
        logger.info("User %s deleted discussion %s", principal.id, discussion_id)
