"""Authorization policy table.

Each (action, resource kind) pair maps to a small pure predicate over the
principal and the already-loaded resource. Pairs missing from the table are
denied.

Usage:
    discussion = manager.get_discussion_model(discussion_id)   # 404 first
    authorize(principal, Action.UPDATE, ResourceKind.DISCUSSION, discussion)
"""

from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from core.exceptions import ForbiddenError
from schemas.user import Principal, Role


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    SET_ROLE = "set_role"


class ResourceKind(str, Enum):
    ACCOUNT = "account"
    DISCUSSION = "discussion"
    COMMENT = "comment"


Predicate = Callable[[Principal, Optional[Any]], bool]


def _any_principal(principal: Principal, resource: Optional[Any]) -> bool:
    return True


def _is_admin(principal: Principal, resource: Optional[Any]) -> bool:
    return principal.role == Role.ADMIN


def _is_author(principal: Principal, resource: Optional[Any]) -> bool:
    return resource is not None and getattr(resource, "author_id", None) == principal.id


def _author_or_roles(*roles: Role) -> Predicate:
    def predicate(principal: Principal, resource: Optional[Any]) -> bool:
        return _is_author(principal, resource) or principal.role in roles

    return predicate


POLICIES: Dict[Tuple[Action, ResourceKind], Predicate] = {
    (Action.CREATE, ResourceKind.DISCUSSION): _any_principal,
    (Action.READ, ResourceKind.DISCUSSION): _any_principal,
    (Action.UPDATE, ResourceKind.DISCUSSION): _author_or_roles(Role.MENTOR, Role.ADMIN),
    (Action.DELETE, ResourceKind.DISCUSSION): _author_or_roles(Role.ADMIN),
    (Action.CREATE, ResourceKind.COMMENT): _any_principal,
    (Action.READ, ResourceKind.COMMENT): _any_principal,
    # Moderation only, authors cannot delete their own comments
    (Action.DELETE, ResourceKind.COMMENT): _is_admin,
    (Action.SET_ROLE, ResourceKind.ACCOUNT): _is_admin,
    (Action.DELETE, ResourceKind.ACCOUNT): _is_admin,
}


def is_allowed(
    principal: Principal,
    action: Action,
    kind: ResourceKind,
    resource: Optional[Any] = None,
) -> bool:
    """Return whether ``principal`` may perform ``action`` on ``resource``.

    Args:
        principal: The authenticated caller.
        action: What the caller wants to do.
        kind: Kind of the target resource.
        resource: The loaded target, anything with an ``author_id``
            attribute for ownership rules.

    Returns:
        True when the policy allows it; unknown pairs are denied.
    """
    predicate = POLICIES.get((action, kind))
    if predicate is None:
        return False
    return predicate(principal, resource)


def authorize(
    principal: Principal,
    action: Action,
    kind: ResourceKind,
    resource: Optional[Any] = None,
) -> None:
    """Like ``is_allowed`` but raises on denial.

    Raises:
        ForbiddenError: If the policy denies the action.
    """
    if not is_allowed(principal, action, kind, resource):
        raise ForbiddenError()
