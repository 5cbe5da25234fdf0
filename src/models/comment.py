from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from .base import Base


class CommentModel(Base):
    __tablename__ = "comments"

    comment_id = Column(String, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    discussion_id = Column(
        String,
        ForeignKey("discussions.discussion_id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    author_id = Column(
        String, ForeignKey("users.user_id", ondelete="CASCADE"), index=True, nullable=False
    )
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    discussion = relationship("DiscussionModel", back_populates="comments")
    author = relationship("UserModel", back_populates="comments")
