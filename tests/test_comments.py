from app.models.user import AccountStatus, UserRole


def add_comment(client, post, headers, content="Nice post"):
    return client.post("/api/comments", json={"post_id": str(post.id), "content": content}, headers=headers)


def test_add_and_list_comments(client, make_user, make_post, auth_headers):
    post = make_post(make_user("alice"))
    headers = auth_headers(make_user("bob"))

    resp = add_comment(client, post, headers)
    assert resp.status_code == 201
    assert resp.json()["user"]["username"] == "bob"

    add_comment(client, post, headers, "Second")
    resp = client.get(f"/api/comments/post/{post.id}", params={"include_user_details": True})
    data = resp.json()
    assert data["total"] == 2
    assert [c["content"] for c in data["comments"]] == ["Nice post", "Second"]
    assert data["comments"][0]["user"]["username"] == "bob"

    resp = client.get(f"/api/comments/post/{post.id}", params={"limit": 1, "offset": 1})
    assert [c["content"] for c in resp.json()["comments"]] == ["Second"]
    assert resp.json()["comments"][0]["user"] is None


def test_cannot_comment_on_draft_or_missing_post(client, make_user, make_post, auth_headers):
    owner = make_user("alice")
    draft = make_post(owner, is_published=False)

    assert add_comment(client, draft, auth_headers(owner)).status_code == 404
    resp = client.post(
        "/api/comments",
        json={"post_id": "00000000-0000-0000-0000-000000000000", "content": "x"},
        headers=auth_headers(owner),
    )
    assert resp.status_code == 404


def test_comment_requires_active_account(client, make_user, make_post, auth_headers):
    post = make_post(make_user("alice"))
    assert client.post("/api/comments", json={"post_id": str(post.id), "content": "x"}).status_code == 401

    suspended = make_user("sus", status=AccountStatus.SUSPENDED)
    assert add_comment(client, post, auth_headers(suspended)).status_code == 403


def test_comments_of_inactive_users_are_hidden(client, make_user, make_post, auth_headers):
    post = make_post(make_user("alice"))
    bob = make_user("bob")
    admin_headers = auth_headers(make_user("root", role=UserRole.ADMIN))
    add_comment(client, post, auth_headers(bob))

    client.patch(f"/api/users/{bob.id}/status", json={"status": "suspended"}, headers=admin_headers)

    assert client.get(f"/api/comments/post/{post.id}").json()["total"] == 0
    assert client.get(f"/api/posts/{post.id}").json()["comment_count"] == 0
    assert client.get(f"/api/comments/user/{bob.id}").status_code == 404


def test_comments_of_draft_post_not_listed(client, make_user, make_post):
    draft = make_post(make_user("alice"), is_published=False)
    assert client.get(f"/api/comments/post/{draft.id}").status_code == 404


def test_user_comments_include_post_summary(client, make_user, make_post, auth_headers):
    post = make_post(make_user("alice"), "Interesting Read")
    bob = make_user("bob")
    add_comment(client, post, auth_headers(bob))

    resp = client.get(f"/api/comments/user/{bob.id}")
    assert resp.status_code == 200
    comment = resp.json()["comments"][0]
    assert comment["post"]["slug"] == "interesting-read"


def test_update_comment_owner_or_admin(client, make_user, make_post, auth_headers):
    author = make_user("alice")
    post = make_post(author)
    bob_headers = auth_headers(make_user("bob"))
    comment_id = add_comment(client, post, bob_headers).json()["id"]

    resp = client.patch(f"/api/comments/{comment_id}", json={"content": "x"}, headers=auth_headers(author))
    assert resp.status_code == 403

    resp = client.patch(f"/api/comments/{comment_id}", json={"content": "edited"}, headers=bob_headers)
    assert resp.status_code == 200
    assert resp.json()["content"] == "edited"

    admin_headers = auth_headers(make_user("root", role=UserRole.ADMIN))
    resp = client.patch(f"/api/comments/{comment_id}", json={"content": "moderated"}, headers=admin_headers)
    assert resp.json()["content"] == "moderated"


def test_delete_comment(client, make_user, make_post, auth_headers):
    post = make_post(make_user("alice"))
    bob_headers = auth_headers(make_user("bob"))
    first = add_comment(client, post, bob_headers).json()["id"]
    second = add_comment(client, post, bob_headers).json()["id"]

    assert client.delete(f"/api/comments/{first}", headers=auth_headers(make_user("eve"))).status_code == 403
    assert client.delete(f"/api/comments/{first}", headers=bob_headers).status_code == 200

    admin_headers = auth_headers(make_user("root", role=UserRole.ADMIN))
    assert client.delete(f"/api/comments/{second}", headers=admin_headers).status_code == 200

    assert client.delete(f"/api/comments/{second}", headers=bob_headers).status_code == 404
    assert client.get(f"/api/comments/post/{post.id}").json()["total"] == 0


def test_comment_under_suspended_post_author_cannot_be_changed(client, make_user, make_post, auth_headers):
    author = make_user("alice")
    post = make_post(author)
    bob_headers = auth_headers(make_user("bob"))
    comment_id = add_comment(client, post, bob_headers).json()["id"]
    admin_headers = auth_headers(make_user("root", role=UserRole.ADMIN))

    client.patch(f"/api/users/{author.id}/status", json={"status": "suspended"}, headers=admin_headers)

    assert client.get(f"/api/comments/post/{post.id}").status_code == 404
    assert client.delete(f"/api/comments/{comment_id}", headers=bob_headers).status_code == 404
    assert client.patch(f"/api/comments/{comment_id}", json={"content": "x"}, headers=bob_headers).status_code == 404
    assert client.delete(f"/api/comments/{comment_id}", headers=admin_headers).status_code == 404


def test_get_single_comment(client, make_user, make_post, auth_headers):
    owner = make_user("alice")
    post = make_post(owner, "Open Thread")
    bob_headers = auth_headers(make_user("bob"))
    comment_id = add_comment(client, post, bob_headers).json()["id"]

    resp = client.get(f"/api/comments/{comment_id}")
    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "bob"
    assert resp.json()["post"]["slug"] == "open-thread"

    client.patch(f"/api/posts/{post.id}", json={"is_published": False}, headers=auth_headers(owner))
    assert client.get(f"/api/comments/{comment_id}").status_code == 404
    assert client.get(f"/api/comments/{comment_id}", headers=auth_headers(owner)).status_code == 200
    assert client.get("/api/comments/9999").status_code == 404
