from .base import Base
from .user import UserModel
from .discussion import DiscussionModel
from .comment import CommentModel

__all__ = ["Base", "UserModel", "DiscussionModel", "CommentModel"]
