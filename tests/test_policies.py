"""Authorization predicates per (action, resource kind)."""

from types import SimpleNamespace

import pytest

from core.exceptions import ForbiddenError
from core.policies import Action, ResourceKind, authorize, is_allowed
from schemas.user import Principal, Role

AUTHOR = Principal(id="author", role=Role.LEARNER)
LEARNER = Principal(id="other", role=Role.LEARNER)
MENTOR = Principal(id="mentor", role=Role.MENTOR)
ADMIN = Principal(id="admin", role=Role.ADMIN)
AUTHORED = SimpleNamespace(author_id="author")


@pytest.mark.parametrize(
    "principal,expected",
    [(AUTHOR, True), (LEARNER, False), (MENTOR, True), (ADMIN, True)],
)
def test_update_discussion(principal, expected):
    assert is_allowed(principal, Action.UPDATE, ResourceKind.DISCUSSION, AUTHORED) is expected


@pytest.mark.parametrize(
    "principal,expected",
    [(AUTHOR, True), (LEARNER, False), (MENTOR, False), (ADMIN, True)],
)
def test_delete_discussion(principal, expected):
    assert is_allowed(principal, Action.DELETE, ResourceKind.DISCUSSION, AUTHORED) is expected


@pytest.mark.parametrize(
    "principal,expected",
    [(AUTHOR, False), (LEARNER, False), (MENTOR, False), (ADMIN, True)],
)
def test_delete_comment_has_no_ownership_path(principal, expected):
    assert is_allowed(principal, Action.DELETE, ResourceKind.COMMENT, AUTHORED) is expected


@pytest.mark.parametrize("action", [Action.SET_ROLE, Action.DELETE])
def test_account_administration_is_admin_only(action):
    for principal in (AUTHOR, LEARNER, MENTOR):
        assert not is_allowed(principal, action, ResourceKind.ACCOUNT)
    assert is_allowed(ADMIN, action, ResourceKind.ACCOUNT)


@pytest.mark.parametrize("kind", [ResourceKind.DISCUSSION, ResourceKind.COMMENT])
@pytest.mark.parametrize("action", [Action.CREATE, Action.READ])
def test_create_and_read_open_to_everyone(kind, action):
    for principal in (LEARNER, MENTOR, ADMIN):
        assert is_allowed(principal, action, kind)


def test_unknown_pair_denied():
    assert not is_allowed(ADMIN, Action.UPDATE, ResourceKind.COMMENT)
    assert not is_allowed(ADMIN, Action.READ, ResourceKind.ACCOUNT)


def test_resource_without_author_denies_ownership():
    assert not is_allowed(AUTHOR, Action.UPDATE, ResourceKind.DISCUSSION, None)


def test_authorize_raises_forbidden():
    with pytest.raises(ForbiddenError) as exc_info:
        authorize(LEARNER, Action.DELETE, ResourceKind.DISCUSSION, AUTHORED)
    assert exc_info.value.status_code == 403
    authorize(AUTHOR, Action.DELETE, ResourceKind.DISCUSSION, AUTHORED)
