"""Post routes: create/list/fetch/delete, likes, comments, ownership.

Invariants:
    - Author name/avatar snapshotted at creation
    - Second like by the same caller → 400, likes unchanged
    - Unlike without like → 400, likes unchanged
    - Non-owner delete → 401, post still retrievable
    - Comment delete matches the comment's own id; only its author may delete
"""

from uuid import uuid4


def _h(token):
    return {"x-auth-token": token}


async def _create_post(client, token, text="Hello world"):
    res = await client.post("/api/posts", json={"text": text}, headers=_h(token))
    assert res.status_code == 200, res.text
    return res.json()


# ─── create / read ───────────────────────────────────────────────

async def test_create_post_snapshots_author(client, alice):
    token, user_id = alice
    post = await _create_post(client, token)
    assert post["user"] == user_id
    assert post["name"] == "Alice"
    assert post["avatar"]
    assert post["likes"] == []
    assert post["comments"] == []


async def test_create_post_requires_text(client, alice):
    res = await client.post("/api/posts", json={"text": "  "}, headers=_h(alice[0]))
    assert res.status_code == 400
    res = await client.post("/api/posts", json={}, headers=_h(alice[0]))
    assert res.status_code == 400


async def test_create_post_requires_token(client):
    res = await client.post("/api/posts", json={"text": "hi"})
    assert res.status_code == 401


async def test_list_posts_newest_first(client, alice):
    first = await _create_post(client, alice[0], "first")
    second = await _create_post(client, alice[0], "second")
    res = await client.get("/api/posts", headers=_h(alice[0]))
    assert res.status_code == 200
    assert [p["id"] for p in res.json()] == [second["id"], first["id"]]


async def test_get_post_by_id(client, alice):
    post = await _create_post(client, alice[0])
    res = await client.get(f"/api/posts/{post['id']}", headers=_h(alice[0]))
    assert res.status_code == 200
    assert res.json()["text"] == "Hello world"


async def test_get_missing_post_is_400(client, alice):
    res = await client.get(f"/api/posts/{uuid4()}", headers=_h(alice[0]))
    assert res.status_code == 400
    res = await client.get("/api/posts/not-a-uuid", headers=_h(alice[0]))
    assert res.status_code == 400


# ─── delete ──────────────────────────────────────────────────────

async def test_owner_can_delete_post(client, alice):
    post = await _create_post(client, alice[0])
    res = await client.delete(f"/api/posts/{post['id']}", headers=_h(alice[0]))
    assert res.status_code == 200
    assert res.json() == {"msg": "Post removed"}
    gone = await client.get(f"/api/posts/{post['id']}", headers=_h(alice[0]))
    assert gone.status_code == 400


async def test_non_owner_delete_is_401_and_post_remains(client, alice, bob):
    post = await _create_post(client, alice[0])
    res = await client.delete(f"/api/posts/{post['id']}", headers=_h(bob[0]))
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "NOT_AUTHORIZED"
    still = await client.get(f"/api/posts/{post['id']}", headers=_h(bob[0]))
    assert still.status_code == 200


async def test_delete_missing_post_is_404(client, alice):
    res = await client.delete(f"/api/posts/{uuid4()}", headers=_h(alice[0]))
    assert res.status_code == 404


async def test_delete_malformed_post_id_is_404(client, alice):
    res = await client.delete("/api/posts/not-a-uuid", headers=_h(alice[0]))
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Post not found"


# ─── likes ───────────────────────────────────────────────────────

async def test_like_then_like_again_conflicts(client, alice, bob):
    post = await _create_post(client, alice[0])
    first = await client.put(f"/api/posts/like/{post['id']}", headers=_h(bob[0]))
    assert first.status_code == 200
    assert [like["user"] for like in first.json()] == [bob[1]]

    second = await client.put(f"/api/posts/like/{post['id']}", headers=_h(bob[0]))
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "ALREADY_LIKED"

    current = await client.get(f"/api/posts/{post['id']}", headers=_h(bob[0]))
    assert len(current.json()["likes"]) == 1


async def test_likes_are_prepended(client, alice, bob):
    post = await _create_post(client, alice[0])
    await client.put(f"/api/posts/like/{post['id']}", headers=_h(alice[0]))
    res = await client.put(f"/api/posts/like/{post['id']}", headers=_h(bob[0]))
    assert [like["user"] for like in res.json()] == [bob[1], alice[1]]


async def test_unlike_without_like_is_400(client, alice, bob):
    post = await _create_post(client, alice[0])
    await client.put(f"/api/posts/like/{post['id']}", headers=_h(alice[0]))
    res = await client.put(f"/api/posts/unlike/{post['id']}", headers=_h(bob[0]))
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "NOT_LIKED"
    current = await client.get(f"/api/posts/{post['id']}", headers=_h(bob[0]))
    assert [like["user"] for like in current.json()["likes"]] == [alice[1]]


async def test_unlike_removes_callers_like(client, alice, bob):
    post = await _create_post(client, alice[0])
    await client.put(f"/api/posts/like/{post['id']}", headers=_h(alice[0]))
    await client.put(f"/api/posts/like/{post['id']}", headers=_h(bob[0]))
    res = await client.put(f"/api/posts/unlike/{post['id']}", headers=_h(bob[0]))
    assert res.status_code == 200
    assert [like["user"] for like in res.json()] == [alice[1]]


async def test_like_missing_post_is_404(client, alice):
    res = await client.put(f"/api/posts/like/{uuid4()}", headers=_h(alice[0]))
    assert res.status_code == 404


async def test_unlike_missing_post_is_404(client, alice):
    res = await client.put(f"/api/posts/unlike/{uuid4()}", headers=_h(alice[0]))
    assert res.status_code == 404


# ─── comments ────────────────────────────────────────────────────

async def test_add_comment_snapshots_commenter(client, alice, bob):
    post = await _create_post(client, alice[0])
    res = await client.post(
        f"/api/posts/comment/{post['id']}", json={"text": "Nice"},
        headers=_h(bob[0]),
    )
    assert res.status_code == 200
    comments = res.json()
    assert len(comments) == 1
    assert comments[0]["user"] == bob[1]
    assert comments[0]["name"] == "Bob"
    assert comments[0]["text"] == "Nice"


async def test_add_comment_requires_text(client, alice):
    post = await _create_post(client, alice[0])
    res = await client.post(
        f"/api/posts/comment/{post['id']}", json={"text": ""}, headers=_h(alice[0]),
    )
    assert res.status_code == 400


async def test_comment_on_missing_post_is_404(client, alice):
    res = await client.post(
        f"/api/posts/comment/{uuid4()}", json={"text": "hi"}, headers=_h(alice[0]),
    )
    assert res.status_code == 404


async def test_delete_comment_by_id(client, alice, bob):
    post = await _create_post(client, alice[0])
    await client.post(
        f"/api/posts/comment/{post['id']}", json={"text": "one"}, headers=_h(bob[0]),
    )
    added = await client.post(
        f"/api/posts/comment/{post['id']}", json={"text": "two"}, headers=_h(bob[0]),
    )
    target = added.json()[1]["id"]  # "one", now second
    res = await client.delete(
        f"/api/posts/comment/{post['id']}/{target}", headers=_h(bob[0]),
    )
    assert res.status_code == 200
    assert [c["text"] for c in res.json()] == ["two"]


async def test_delete_unknown_comment_is_400(client, alice):
    post = await _create_post(client, alice[0])
    res = await client.delete(
        f"/api/posts/comment/{post['id']}/{uuid4()}", headers=_h(alice[0]),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "COMMENT_NOT_FOUND"


async def test_delete_comment_on_missing_post_is_404(client, alice):
    res = await client.delete(
        f"/api/posts/comment/{uuid4()}/{uuid4()}", headers=_h(alice[0]),
    )
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Post not found"


async def test_delete_someone_elses_comment_is_401(client, alice, bob):
    post = await _create_post(client, alice[0])
    added = await client.post(
        f"/api/posts/comment/{post['id']}", json={"text": "mine"}, headers=_h(bob[0]),
    )
    comment_id = added.json()[0]["id"]
    res = await client.delete(
        f"/api/posts/comment/{post['id']}/{comment_id}", headers=_h(alice[0]),
    )
    assert res.status_code == 401
    current = await client.get(f"/api/posts/{post['id']}", headers=_h(alice[0]))
    assert len(current.json()["comments"]) == 1


# ─── snapshot immutability / account lifecycle ───────────────────

async def test_posts_survive_account_deletion(client, alice, bob):
    post = await _create_post(client, alice[0])
    res = await client.delete("/api/profile", headers=_h(alice[0]))
    assert res.status_code == 200
    still = await client.get(f"/api/posts/{post['id']}", headers=_h(bob[0]))
    assert still.status_code == 200
    assert still.json()["name"] == "Alice"


async def test_end_to_end_non_owner_cannot_delete_liked_post(client, make_user):
    token_a, _ = await make_user("Ann", "ann@example.com")
    token_b, id_b = await make_user("Ben", "ben@example.com")
    profile = await client.post(
        "/api/profile", json={"status": "Developer", "skills": "python"},
        headers=_h(token_a),
    )
    assert profile.status_code == 200
    post = await _create_post(client, token_a, "Ann's post")
    liked = await client.put(f"/api/posts/like/{post['id']}", headers=_h(token_b))
    assert liked.status_code == 200

    res = await client.delete(f"/api/posts/{post['id']}", headers=_h(token_b))
    assert res.status_code == 401

    current = await client.get(f"/api/posts/{post['id']}", headers=_h(token_a))
    assert current.status_code == 200
    assert [like["user"] for like in current.json()["likes"]] == [id_b]
