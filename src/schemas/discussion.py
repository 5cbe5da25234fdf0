"""Discussion and comment schema definitions."""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class CreateDiscussionRequest(BaseModel):
    title: str = Field(min_length=3, max_length=120)
    content: str = Field(min_length=1, max_length=5000)


class UpdateDiscussionRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=3, max_length=120)
    content: Optional[str] = Field(default=None, min_length=1, max_length=5000)

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.title and not self.content:
            raise ValueError("At least one of title or content must be provided")
        return self


class Discussion(BaseModel):
    id: str
    title: str
    content: str
    author_id: str
    created_at: str
    updated_at: str


class CreateCommentRequest(BaseModel):
    content: str = Field(min_length=1, max_length=2000)


class Comment(BaseModel):
    id: str
    content: str
    discussion_id: str
    author_id: str
    created_at: str
    updated_at: str


class DiscussionListResponse(BaseModel):
    discussions: List[Discussion]


class CommentListResponse(BaseModel):
    comments: List[Comment]
