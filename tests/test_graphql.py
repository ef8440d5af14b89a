# tests/test_graphql.py
"""Tests for the GraphQL post schema served at /graphql."""

POST_FIELDS = """
    id
    content
    createdAt
    draft
    visibility
    commentCount
    reactionCount
    author { id username role }
    attachments { id url type size contentType }
    tags { id name usageCount }
    comments { id content author { username } }
    reactions { id type postId user { username } }
"""

POST_QUERY = f"query ($id: Int!) {{ post(id: $id) {{ {POST_FIELDS} }} }}"

CREATE_POST = f"""
mutation ($input: CreatePostInput!) {{
    createPost(input: $input) {{ {POST_FIELDS} }}
}}
"""

UPDATE_POST = f"""
mutation ($id: Int!, $input: UpdatePostInput!) {{
    updatePost(id: $id, input: $input) {{ {POST_FIELDS} }}
}}
"""


def test_posts_query_empty(graphql) -> None:
    body = graphql("{ posts { id } }")
    assert body == {"data": {"posts": []}}


def test_post_query_loads_relations(graphql, busy_post) -> None:
    body = graphql(POST_QUERY, id=busy_post.id)

    assert "errors" not in body
    post = body["data"]["post"]
    assert post["id"] == busy_post.id
    assert post["visibility"] == "PUBLIC"
    assert post["commentCount"] == 2
    assert post["reactionCount"] == 3
    assert post["author"] == {"id": busy_post.author_id, "username": "danvega", "role": "ADMIN"}
    assert [t["name"] for t in post["tags"]] == ["java", "spring"]
    assert post["attachments"][0]["type"] == "IMAGE"
    assert post["attachments"][0]["contentType"] == "image/png"
    assert [c["author"]["username"] for c in post["comments"]] == ["javadev", "danvega"]
    assert [r["type"] for r in post["reactions"]] == ["LIKE", "LOVE", "LAUGH"]


def test_post_query_not_found(graphql) -> None:
    body = graphql(POST_QUERY, id=999)

    assert body["data"] is None
    (error,) = body["errors"]
    assert error["message"] == "Post not found: 999"
    assert error["path"] == ["post"]
    assert error["extensions"]["code"] == "NOT_FOUND"


def test_posts_by_author(graphql, make_post, author, other_author) -> None:
    mine = make_post(author, "mine")
    make_post(other_author, "theirs")

    body = graphql(
        "query ($authorId: Int!) { postsByAuthor(authorId: $authorId) { id } }",
        authorId=author.id,
    )

    assert body["data"]["postsByAuthor"] == [{"id": mine.id}]


def test_search_posts(graphql, make_post, author) -> None:
    hit = make_post(author, "Spring Boot is great")
    make_post(author, "Quarkus notes")

    body = graphql(
        "query ($keyword: String!) { searchPosts(keyword: $keyword) { id content } }",
        keyword="spring",
    )

    assert body["data"]["searchPosts"] == [{"id": hit.id, "content": "Spring Boot is great"}]


def test_create_post(graphql, author, tags, media) -> None:
    body = graphql(
        CREATE_POST,
        input={
            "content": "Hello GraphQL",
            "authorId": author.id,
            "visibility": "PRIVATE",
            "tagIds": [tags["ai"].id],
            "attachmentIds": [media[1].id],
        },
    )

    assert "errors" not in body
    post = body["data"]["createPost"]
    assert post["content"] == "Hello GraphQL"
    assert post["visibility"] == "PRIVATE"
    assert post["draft"] is False
    assert post["commentCount"] == 0
    assert [t["name"] for t in post["tags"]] == ["ai"]
    assert [m["type"] for m in post["attachments"]] == ["VIDEO"]
    assert post["author"]["id"] == author.id


def test_create_post_blank_content(graphql, author) -> None:
    body = graphql(CREATE_POST, input={"content": " ", "authorId": author.id})

    assert body["data"] is None
    assert body["errors"][0]["extensions"]["code"] == "VALIDATION_FAILURE"


def test_create_post_unknown_author(graphql) -> None:
    body = graphql(CREATE_POST, input={"content": "Hello", "authorId": 999})
    assert body["errors"][0]["extensions"]["code"] == "VALIDATION_FAILURE"


def test_update_post_merges_fields(graphql, author, tags) -> None:
    created = graphql(
        CREATE_POST,
        input={"content": "Original", "authorId": author.id, "tagIds": [tags["java"].id]},
    )["data"]["createPost"]

    body = graphql(UPDATE_POST, id=created["id"], input={"draft": True})

    updated = body["data"]["updatePost"]
    assert updated["content"] == "Original"
    assert updated["draft"] is True
    assert [t["name"] for t in updated["tags"]] == ["java"]


def test_update_post_replaces_tags(graphql, author, tags) -> None:
    created = graphql(
        CREATE_POST,
        input={"content": "Original", "authorId": author.id, "tagIds": [tags["java"].id]},
    )["data"]["createPost"]

    body = graphql(
        UPDATE_POST,
        id=created["id"],
        input={"content": "Edited", "tagIds": [tags["spring"].id, tags["ai"].id]},
    )

    updated = body["data"]["updatePost"]
    assert updated["content"] == "Edited"
    assert sorted(t["name"] for t in updated["tags"]) == ["ai", "spring"]


def test_update_post_not_found(graphql) -> None:
    body = graphql(UPDATE_POST, id=999, input={"content": "Edited"})
    assert body["errors"][0]["extensions"]["code"] == "NOT_FOUND"


def test_delete_post(graphql, busy_post) -> None:
    mutation = "mutation ($id: Int!) { deletePost(id: $id) }"

    assert graphql(mutation, id=busy_post.id)["data"] == {"deletePost": True}
    assert graphql(mutation, id=busy_post.id)["data"] == {"deletePost": True}
    assert graphql("{ posts { id } }")["data"]["posts"] == []



USER_FIELDS = "id username email role"
REACTION_FIELDS = f"id type createdAt postId commentId user {{ {USER_FIELDS} }}"
FULL_POST_FIELDS = f"""
    id
    content
    createdAt
    draft
    visibility
    commentCount
    reactionCount
    author {{ {USER_FIELDS} }}
    attachments {{ id url type size contentType }}
    tags {{ id name usageCount }}
    comments {{
        id content createdAt
        author {{ {USER_FIELDS} }}
        reactions {{ {REACTION_FIELDS} }}
    }}
    reactions {{ {REACTION_FIELDS} }}
"""

# GraphQL-only fields derived from a REST collection.
DERIVED_COUNTS = {"commentCount": "comments", "reactionCount": "reactions"}
# REST-only fields; GraphQL does not expose profiles.
REST_ONLY = {"profile"}


def _assert_same_fields(gql, rest, path="post") -> None:
    if isinstance(gql, dict):
        assert isinstance(rest, dict), path
        assert set(rest) - set(gql) <= REST_ONLY, f"{path}: {set(rest) - set(gql)}"
        for key, value in gql.items():
            if key in DERIVED_COUNTS:
                assert value == len(rest[DERIVED_COUNTS[key]]), f"{path}.{key}"
                continue
            assert key in rest, f"{path}.{key}"
            _assert_same_fields(value, rest[key], f"{path}.{key}")
    elif isinstance(gql, list):
        assert isinstance(rest, list), path
        assert len(gql) == len(rest), path
        for index, (gql_item, rest_item) in enumerate(zip(gql, rest)):
            _assert_same_fields(gql_item, rest_item, f"{path}[{index}]")
    else:
        assert gql == rest, f"{path}: {gql!r} != {rest!r}"


def test_rest_and_graphql_agree_on_one_post(client, graphql, busy_post) -> None:
    """Both front ends render every shared field of a stored post identically."""
    rest = client.get(f"/api/posts/{busy_post.id}").json()
    body = graphql(
        f"query ($id: Int!) {{ post(id: $id) {{ {FULL_POST_FIELDS} }} }}", id=busy_post.id
    )

    assert "errors" not in body
    gql = body["data"]["post"]
    assert gql["reactionCount"] == 3
    assert gql["author"]["email"] == rest["author"]["email"]
    _assert_same_fields(gql, rest)


def test_rest_and_graphql_agree_on_lists(client, graphql, busy_post, make_post, other_author) -> None:
    make_post(other_author, "Spring Boot without relations", minutes=30, draft=True)

    rest = client.get("/api/posts").json()
    gql = graphql(f"{{ posts {{ {FULL_POST_FIELDS} }} }}")["data"]["posts"]
    assert len(gql) == 2
    _assert_same_fields(gql, rest, "posts")

    rest = client.get("/api/posts/search", params={"keyword": "spring boot"}).json()
    gql = graphql(
        f"query ($keyword: String!) {{ searchPosts(keyword: $keyword) {{ {FULL_POST_FIELDS} }} }}",
        keyword="spring boot",
    )["data"]["searchPosts"]
    _assert_same_fields(gql, rest, "search")

    rest = client.get(f"/api/posts/author/{other_author.id}").json()
    gql = graphql(
        f"query ($authorId: Int!) {{ postsByAuthor(authorId: $authorId) {{ {FULL_POST_FIELDS} }} }}",
        authorId=other_author.id,
    )["data"]["postsByAuthor"]
    assert len(gql) == 1
    _assert_same_fields(gql, rest, "byAuthor")
