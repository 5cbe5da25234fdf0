"""Comment moderation routes."""

from fastapi import APIRouter, Response, status

from config import API_PREFIX
from core.auth import CurrentPrincipal
from core.dependencies import CommentManagerDep

router = APIRouter(prefix=f"{API_PREFIX}/comments", tags=["Comments"])


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete comment",
)
def delete_comment(
    comment_id: str,
    principal: CurrentPrincipal,
    comment_manager: CommentManagerDep,
) -> Response:
    """Delete any comment. Admin only; authors cannot delete their own."""
    comment_manager.delete_comment(principal, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
