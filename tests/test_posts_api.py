# tests/test_posts_api.py
"""Tests for the REST post endpoints."""

from fastapi import status


def _payload(author_id, content="Hello REST", **extra):
    body = {"content": content, "author": {"id": author_id}}
    body.update(extra)
    return body


def test_list_posts_empty(client) -> None:
    response = client.get("/api/posts")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []


def test_list_posts_uses_camel_case(client, busy_post) -> None:
    response = client.get("/api/posts")
    assert response.status_code == status.HTTP_200_OK

    (post,) = response.json()
    assert post["id"] == busy_post.id
    assert "createdAt" in post
    assert post["attachments"][0]["contentType"] == "image/png"
    assert post["tags"][0]["usageCount"] == 0
    assert post["reactions"][0]["postId"] == busy_post.id
    assert "hashedPassword" not in post["author"]
    assert "hashed_password" not in post["author"]


def test_get_post(client, busy_post) -> None:
    response = client.get(f"/api/posts/{busy_post.id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["content"] == "Just released Spring Boot 3.2!"
    assert [c["content"] for c in data["comments"]] == ["Great overview!", "Thanks!"]
    assert data["author"]["username"] == "danvega"


def test_get_post_not_found(client) -> None:
    response = client.get("/api/posts/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Post not found: 999", "code": "NOT_FOUND"}


def test_posts_by_author(client, make_post, author, other_author) -> None:
    mine = make_post(author, "mine")
    make_post(other_author, "theirs")

    response = client.get(f"/api/posts/author/{author.id}")

    assert response.status_code == status.HTTP_200_OK
    assert [p["id"] for p in response.json()] == [mine.id]


def test_search_posts(client, make_post, author) -> None:
    hit = make_post(author, "Spring Boot is great")
    make_post(author, "Quarkus notes")

    response = client.get("/api/posts/search", params={"keyword": "SPRING"})

    assert response.status_code == status.HTTP_200_OK
    assert [p["id"] for p in response.json()] == [hit.id]


def test_search_requires_keyword(client) -> None:
    response = client.get("/api/posts/search")
    assert response.status_code == 422


def test_create_post_success(client, author, tags, media) -> None:
    response = client.post(
        "/api/posts",
        json=_payload(
            author.id,
            visibility="FOLLOWERS_ONLY",
            tags=[{"id": tags["java"].id}, {"id": tags["ai"].id}],
            attachments=[{"id": media[0].id, "url": "ignored"}],
        ),
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["id"] is not None
    assert data["content"] == "Hello REST"
    assert data["visibility"] == "FOLLOWERS_ONLY"
    assert data["draft"] is False
    assert data["author"]["id"] == author.id
    assert sorted(t["name"] for t in data["tags"]) == ["ai", "java"]
    assert [m["url"] for m in data["attachments"]] == [media[0].url]

    fetched = client.get(f"/api/posts/{data['id']}")
    assert fetched.json() == data


def test_create_post_ignores_body_id(client, make_post, author) -> None:
    existing = make_post(author, "keep me")

    response = client.post("/api/posts", json=_payload(author.id, id=existing.id))

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["id"] != existing.id
    assert client.get(f"/api/posts/{existing.id}").json()["content"] == "keep me"


def test_create_post_blank_content(client, author) -> None:
    response = client.post("/api/posts", json=_payload(author.id, content="  "))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "VALIDATION_FAILURE"


def test_create_post_without_author(client) -> None:
    response = client.post("/api/posts", json={"content": "Hello"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_create_post_unknown_tag(client, author) -> None:
    response = client.post("/api/posts", json=_payload(author.id, tags=[{"id": 999}]))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert client.get("/api/posts").json() == []


def test_create_post_invalid_visibility(client, author) -> None:
    response = client.post("/api/posts", json=_payload(author.id, visibility="SECRET"))
    assert response.status_code == 422


def test_replace_post(client, author, tags) -> None:
    created = client.post(
        "/api/posts", json=_payload(author.id, tags=[{"id": tags["java"].id}])
    ).json()

    response = client.put(
        f"/api/posts/{created['id']}",
        json={"content": "Replaced", "draft": True, "tags": [{"id": tags["spring"].id}]},
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == created["id"]
    assert data["content"] == "Replaced"
    assert data["draft"] is True
    assert [t["name"] for t in data["tags"]] == ["spring"]
    assert data["author"]["id"] == author.id


def test_replace_post_not_found(client) -> None:
    response = client.put("/api/posts/999", json={"content": "Replaced"})
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["code"] == "NOT_FOUND"


def test_delete_post(client, busy_post) -> None:
    response = client.delete(f"/api/posts/{busy_post.id}")
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/posts/{busy_post.id}").status_code == status.HTTP_404_NOT_FOUND


def test_delete_missing_post(client) -> None:
    response = client.delete("/api/posts/999")
    assert response.status_code == status.HTTP_204_NO_CONTENT
