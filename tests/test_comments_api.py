"""Comments: creation under a discussion and admin-only deletion."""

import pytest

from conftest import admin_token, bearer, mentor_signup, signup

pytestmark = pytest.mark.anyio


async def _discussion(client, token):
    r = await client.post(
        "/api/v1/discussions",
        json={"title": "Buffer overflows", "content": "Let's talk"},
        headers=bearer(token),
    )
    assert r.status_code == 201
    return r.json()["id"]


async def _comment(client, token, discussion_id, content="Nice question"):
    r = await client.post(
        f"/api/v1/discussions/{discussion_id}/comments",
        json={"content": content},
        headers=bearer(token),
    )
    assert r.status_code == 201, r.text
    return r.json()


async def test_create_and_list_comments(client):
    alice_id, alice = await signup(client, "a@x.com", "alice")
    bob_id, bob = await signup(client, "b@x.com", "bob")
    discussion_id = await _discussion(client, alice)

    first = await _comment(client, bob, discussion_id, "First!")
    second = await _comment(client, alice, discussion_id, "Thanks")
    assert first["author_id"] == bob_id
    assert first["discussion_id"] == discussion_id

    r = await client.get(f"/api/v1/discussions/{discussion_id}/comments", headers=bearer(bob))
    assert r.status_code == 200
    assert [c["id"] for c in r.json()["comments"]] == [first["id"], second["id"]]


async def test_comment_on_missing_discussion(client):
    _, alice = await signup(client, "a@x.com", "alice")
    r = await client.post(
        "/api/v1/discussions/missing/comments",
        json={"content": "hello"},
        headers=bearer(alice),
    )
    assert r.status_code == 404
    r = await client.get("/api/v1/discussions/missing/comments", headers=bearer(alice))
    assert r.status_code == 404


async def test_comment_validation(client):
    _, alice = await signup(client, "a@x.com", "alice")
    discussion_id = await _discussion(client, alice)
    for content in ("", "c" * 2001):
        r = await client.post(
            f"/api/v1/discussions/{discussion_id}/comments",
            json={"content": content},
            headers=bearer(alice),
        )
        assert r.status_code == 400


async def test_only_admin_deletes_comments(client):
    admin = await admin_token(client)
    _, alice = await signup(client, "a@x.com", "alice")
    _, mentor = await mentor_signup(client, "m@x.com", "mentor", admin)
    discussion_id = await _discussion(client, alice)
    comment = await _comment(client, alice, discussion_id)
    url = f"/api/v1/comments/{comment['id']}"

    # Not even the author
    for token in (alice, mentor):
        r = await client.delete(url, headers=bearer(token))
        assert r.status_code == 403

    r = await client.delete(url, headers=bearer(admin))
    assert r.status_code == 204
    r = await client.delete(url, headers=bearer(admin))
    assert r.status_code == 404


async def test_missing_comment_is_404_for_anyone(client):
    _, alice = await signup(client, "a@x.com", "alice")
    r = await client.delete("/api/v1/comments/missing", headers=bearer(alice))
    assert r.status_code == 404


async def test_deleting_discussion_removes_comments(client):
    _, alice = await signup(client, "a@x.com", "alice")
    admin = await admin_token(client)
    discussion_id = await _discussion(client, alice)
    comment = await _comment(client, alice, discussion_id)

    r = await client.delete(f"/api/v1/discussions/{discussion_id}", headers=bearer(alice))
    assert r.status_code == 204
    r = await client.delete(f"/api/v1/comments/{comment['id']}", headers=bearer(admin))
    assert r.status_code == 404
