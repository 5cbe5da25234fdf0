"""Discussion and nested comment routes."""

from fastapi import APIRouter, Response, status

from config import API_PREFIX
from core.auth import CurrentPrincipal
from core.dependencies import CommentManagerDep, DiscussionManagerDep
from schemas.discussion import (
    Comment,
    CommentListResponse,
    CreateCommentRequest,
    CreateDiscussionRequest,
    Discussion,
    DiscussionListResponse,
    UpdateDiscussionRequest,
)

router = APIRouter(prefix=f"{API_PREFIX}/discussions", tags=["Discussions"])


@router.get("", response_model=DiscussionListResponse, summary="List discussions")
def list_discussions(
    principal: CurrentPrincipal,
    discussion_manager: DiscussionManagerDep,
) -> DiscussionListResponse:
    """List all discussions, newest first.

    Every authenticated user sees every discussion.
    """
    return DiscussionListResponse(
        discussions=discussion_manager.list_discussions(principal)
    )


@router.post(
    "",
    response_model=Discussion,
    status_code=status.HTTP_201_CREATED,
    summary="Create discussion",
)
def create_discussion(
    req: CreateDiscussionRequest,
    principal: CurrentPrincipal,
    discussion_manager: DiscussionManagerDep,
) -> Discussion:
    return discussion_manager.create_discussion(principal, req.title, req.content)


@router.get("/{discussion_id}", response_model=Discussion, summary="Get discussion")
def get_discussion(
    discussion_id: str,
    principal: CurrentPrincipal,
    discussion_manager: DiscussionManagerDep,
) -> Discussion:
    return discussion_manager.get_discussion(principal, discussion_id)


@router.patch("/{discussion_id}", response_model=Discussion, summary="Update discussion")
def update_discussion(
    discussion_id: str,
    req: UpdateDiscussionRequest,
    principal: CurrentPrincipal,
    discussion_manager: DiscussionManagerDep,
) -> Discussion:
    """Update a discussion's title and/or content.

    Permission requirements:
    - Author: Can update their own discussions
    - Mentor/Admin: Can update any discussion
    - Learner: Only their own
    """
    return discussion_manager.update_discussion(
        principal, discussion_id, title=req.title, content=req.content
    )


@router.delete(
    "/{discussion_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete discussion",
)
def delete_discussion(
    discussion_id: str,
    principal: CurrentPrincipal,
    discussion_manager: DiscussionManagerDep,
) -> Response:
    """Delete a discussion with its comments.

    Permission requirements:
    - Author: Can delete their own discussions
    - Admin: Can delete any discussion
    - Mentor/Learner: Only their own
    """
    discussion_manager.delete_discussion(principal, discussion_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{discussion_id}/comments",
    response_model=CommentListResponse,
    summary="List comments",
)
def list_comments(
    discussion_id: str,
    principal: CurrentPrincipal,
    comment_manager: CommentManagerDep,
) -> CommentListResponse:
    return CommentListResponse(
        comments=comment_manager.list_comments(principal, discussion_id)
    )


@router.post(
    "/{discussion_id}/comments",
    response_model=Comment,
    status_code=status.HTTP_201_CREATED,
    summary="Add comment",
)
def create_comment(
    discussion_id: str,
    req: CreateCommentRequest,
    principal: CurrentPrincipal,
    comment_manager: CommentManagerDep,
) -> Comment:
    return comment_manager.create_comment(principal, discussion_id, req.content)
