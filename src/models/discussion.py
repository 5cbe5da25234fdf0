from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from .base import Base


class DiscussionModel(Base):
    __tablename__ = "discussions"

    discussion_id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(
        String, ForeignKey("users.user_id", ondelete="CASCADE"), index=True, nullable=False
    )
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    author = relationship("UserModel", back_populates="discussions")
    comments = relationship(
        "CommentModel",
        back_populates="discussion",
        cascade="all, delete-orphan",
        order_by="CommentModel.created_at",
    )
