from app.models.user import AccountStatus, UserRole


def test_create_post_generates_unique_slug(client, make_user, auth_headers):
    headers = auth_headers(make_user("alice"))

    first = client.post("/api/posts", json={"title": "Hello World!", "content": "x"}, headers=headers)
    second = client.post("/api/posts", json={"title": "Hello World", "content": "y"}, headers=headers)

    assert first.status_code == 201
    assert first.json()["slug"] == "hello-world"
    assert first.json()["published_at"] is not None
    assert first.json()["author"]["username"] == "alice"
    assert second.json()["slug"] == "hello-world-1"


def test_create_post_with_punctuation_title_uses_fallback(client, make_user, auth_headers):
    headers = auth_headers(make_user("alice"))
    resp = client.post("/api/posts", json={"title": "!!!", "content": "x"}, headers=headers)
    assert resp.status_code == 201
    assert resp.json()["slug"] == "post"


def test_create_post_requires_auth_and_known_category(client, make_user, auth_headers):
    assert client.post("/api/posts", json={"title": "T", "content": "x"}).status_code == 401

    headers = auth_headers(make_user("alice"))
    resp = client.post("/api/posts", json={"title": "T", "content": "x", "category_id": 99}, headers=headers)
    assert resp.status_code == 404


def test_create_post_in_category(client, make_user, make_category, auth_headers):
    category = make_category("Python")
    headers = auth_headers(make_user("alice"))
    resp = client.post(
        "/api/posts",
        json={"title": "Typing", "content": "x", "category_id": category.id},
        headers=headers,
    )
    assert resp.status_code == 201
    assert resp.json()["category_name"] == "Python"


def test_get_post_by_id_or_slug(client, make_user, make_post):
    post = make_post(make_user("alice"), "My First Post")

    by_id = client.get(f"/api/posts/{post.id}")
    by_slug = client.get("/api/posts/my-first-post")
    assert by_id.status_code == 200
    assert by_slug.json()["id"] == by_id.json()["id"]
    assert client.get("/api/posts/does-not-exist").status_code == 404


def test_draft_visibility(client, make_user, make_post, auth_headers):
    owner = make_user("alice")
    draft = make_post(owner, "Secret", is_published=False)
    admin = make_user("root", role=UserRole.ADMIN)

    assert client.get(f"/api/posts/{draft.id}").status_code == 404
    assert client.get(f"/api/posts/{draft.id}", headers=auth_headers(make_user("bob"))).status_code == 404
    assert client.get(f"/api/posts/{draft.id}", headers=auth_headers(owner)).status_code == 200
    assert client.get(f"/api/posts/{draft.id}", headers=auth_headers(admin)).status_code == 200


def test_list_posts_hides_drafts_and_inactive_authors(client, make_user, make_post, auth_headers):
    alice = make_user("alice")
    make_post(alice, "Published")
    make_post(alice, "Draft", is_published=False)
    make_post(make_user("sus", status=AccountStatus.SUSPENDED), "Hidden")

    resp = client.get("/api/posts")
    assert resp.status_code == 200
    assert [p["title"] for p in resp.json()["posts"]] == ["Published"]
    assert resp.json()["total"] == 1

    resp = client.get("/api/posts", params={"include_drafts": True}, headers=auth_headers(alice))
    assert {p["title"] for p in resp.json()["posts"]} == {"Published", "Draft"}

    resp = client.get("/api/posts", params={"include_drafts": True}, headers=auth_headers(make_user("bob")))
    assert resp.json()["total"] == 1


def test_list_posts_pagination_and_filters(client, make_user, make_post, make_category):
    alice = make_user("alice")
    bob = make_user("bob")
    category = make_category("News")
    make_post(alice, "One", category_id=category.id)
    make_post(alice, "Two")
    make_post(bob, "Three")

    resp = client.get("/api/posts", params={"limit": 2})
    assert len(resp.json()["posts"]) == 2
    assert resp.json()["total"] == 3
    assert resp.json()["has_more"] is True

    resp = client.get("/api/posts", params={"limit": 2, "offset": 2})
    assert resp.json()["has_more"] is False

    resp = client.get("/api/posts", params={"user_id": str(bob.id)})
    assert [p["title"] for p in resp.json()["posts"]] == ["Three"]

    resp = client.get("/api/posts", params={"category_id": category.id})
    assert [p["title"] for p in resp.json()["posts"]] == ["One"]


def test_list_user_posts(client, make_user, make_post, auth_headers):
    alice = make_user("alice")
    make_post(alice, "Published")
    make_post(alice, "Draft", is_published=False)

    assert client.get("/api/posts/user").status_code == 400

    resp = client.get("/api/posts/user", params={"username": "alice"})
    assert resp.json()["total"] == 1

    resp = client.get("/api/posts/user", params={"user_id": str(alice.id)}, headers=auth_headers(alice))
    assert resp.json()["total"] == 2


def test_update_post_owner_only(client, make_user, make_post, auth_headers):
    owner = make_user("alice")
    post = make_post(owner, "Old Title")

    resp = client.patch(f"/api/posts/{post.id}", json={"title": "x"}, headers=auth_headers(make_user("bob")))
    assert resp.status_code == 403

    admin = make_user("root", role=UserRole.ADMIN)
    resp = client.patch(f"/api/posts/{post.id}", json={"title": "x"}, headers=auth_headers(admin))
    assert resp.status_code == 403

    resp = client.patch(f"/api/posts/{post.id}", json={"title": "New Title"}, headers=auth_headers(owner))
    assert resp.status_code == 200
    assert resp.json()["slug"] == "new-title"


def test_retitle_keeps_own_slug(client, make_user, make_post, auth_headers):
    owner = make_user("alice")
    post = make_post(owner, "Same Title")
    resp = client.patch(f"/api/posts/{post.id}", json={"title": "Same Title"}, headers=auth_headers(owner))
    assert resp.json()["slug"] == "same-title"


def test_publish_toggle(client, make_user, make_post, auth_headers):
    owner = make_user("alice")
    headers = auth_headers(owner)
    post = make_post(owner, "Toggle", is_published=False)
    assert post.published_at is None

    resp = client.patch(f"/api/posts/{post.id}", json={"is_published": True}, headers=headers)
    first_published_at = resp.json()["published_at"]
    assert first_published_at is not None

    resp = client.patch(f"/api/posts/{post.id}", json={"content": "edited"}, headers=headers)
    assert resp.json()["published_at"] == first_published_at

    resp = client.patch(f"/api/posts/{post.id}", json={"is_published": False}, headers=headers)
    assert resp.json()["published_at"] is None


def test_delete_post_cascades(client, make_user, make_post, auth_headers):
    owner = make_user("alice")
    reader = make_user("bob")
    post = make_post(owner)
    reader_headers = auth_headers(reader)
    client.post("/api/comments", json={"post_id": str(post.id), "content": "nice"}, headers=reader_headers)
    client.post("/api/likes", json={"post_id": str(post.id)}, headers=reader_headers)

    assert client.delete(f"/api/posts/{post.id}", headers=reader_headers).status_code == 403

    resp = client.delete(f"/api/posts/{post.id}", headers=auth_headers(owner))
    assert resp.status_code == 200
    assert client.get(f"/api/posts/{post.id}").status_code == 404
    assert client.get(f"/api/comments/user/{reader.id}").json()["total"] == 0
    assert client.get("/api/likes/my-likes", headers=reader_headers).json()["total"] == 0


def test_post_counters_and_like_flag(client, make_user, make_post, auth_headers):
    post = make_post(make_user("alice"))
    bob = make_user("bob")
    headers = auth_headers(bob)
    client.post("/api/likes", json={"post_id": str(post.id)}, headers=headers)
    client.post("/api/comments", json={"post_id": str(post.id), "content": "hi"}, headers=headers)

    data = client.get(f"/api/posts/{post.id}", headers=headers).json()
    assert data["like_count"] == 1
    assert data["comment_count"] == 1
    assert data["is_liked"] is True
    assert client.get(f"/api/posts/{post.id}").json()["is_liked"] is False


def test_update_post_rejects_null_for_required_fields(client, make_user, make_post, auth_headers):
    owner = make_user("alice")
    post = make_post(owner, "Keep Me")
    headers = auth_headers(owner)

    for field in ("title", "content", "is_published"):
        resp = client.patch(f"/api/posts/{post.id}", json={field: None}, headers=headers)
        assert resp.status_code == 422, field

    data = client.get(f"/api/posts/{post.id}", headers=headers).json()
    assert data["title"] == "Keep Me"
    assert data["is_published"] is True


def test_update_post_can_clear_category(client, make_user, make_post, make_category, auth_headers):
    owner = make_user("alice")
    post = make_post(owner, category_id=make_category("News").id)
    resp = client.patch(f"/api/posts/{post.id}", json={"category_id": None}, headers=auth_headers(owner))
    assert resp.status_code == 200
    assert resp.json()["category_id"] is None
