"""
Comment endpoint tests: per-article listing with sorting and pagination,
posting, single-comment reads, partial updates and deletes.
"""
import pytest
from httpx import AsyncClient

COMMENT_KEYS = {"comment_id", "article_id", "author", "body", "votes", "created_at"}

HUGE = "100000000000000000000"


# ---------------------------------------------------------------------------
# GET /api/articles/{id}/comments
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_article_without_comments_is_empty(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/8/comments")
    assert resp.status_code == 200
    assert resp.json() == {"comments": []}


@pytest.mark.asyncio
async def test_list_comments_for_article(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/3/comments")
    assert resp.status_code == 200
    comments = resp.json()["comments"]
    assert len(comments) == 2
    for comment in comments:
        assert set(comment) == COMMENT_KEYS
        assert comment["article_id"] == 3


@pytest.mark.asyncio
async def test_comments_newest_first_by_default(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1/comments")
    comments = resp.json()["comments"]
    assert len(comments) == 10
    assert [c["comment_id"] for c in comments] == [5, 2, 18, 13, 7, 8, 6, 12, 3, 4]


@pytest.mark.asyncio
async def test_comments_missing_article(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/8080/comments")
    assert resp.status_code == 404
    assert resp.json()["details"] == "article_id '8080' was not found in articles"


@pytest.mark.asyncio
async def test_comments_invalid_article_id(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/dog/comments")
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_comments_sorted_by_votes(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1/comments?sort_by=votes&limit=none")
    votes = [c["votes"] for c in resp.json()["comments"]]
    assert votes[0] == 100
    assert votes[-1] == -100
    assert votes == sorted(votes, reverse=True)


@pytest.mark.asyncio
async def test_comments_sorted_by_id_ascending(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/9/comments?sort_by=comment_id&order=ASC")
    assert [c["comment_id"] for c in resp.json()["comments"]] == [1, 17]


@pytest.mark.asyncio
async def test_comments_invalid_sort(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1/comments?sort_by=bananas")
    assert resp.status_code == 400
    assert resp.json()["details"] == "Invalid sort_by query"


@pytest.mark.asyncio
async def test_comments_invalid_order(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1/comments?order=sideways")
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_comments_limit(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1/comments?limit=5")
    assert len(resp.json()["comments"]) == 5


@pytest.mark.asyncio
async def test_comments_unbounded_limit(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1/comments?limit=infinity")
    assert len(resp.json()["comments"]) == 11


@pytest.mark.asyncio
async def test_comments_second_page(async_client: AsyncClient):
    resp = await async_client.get(
        "/api/articles/1/comments?limit=5&sort_by=comment_id&p=2&order=asc"
    )
    assert resp.status_code == 200
    assert [c["comment_id"] for c in resp.json()["comments"]] == [7, 8, 9, 12, 13]


@pytest.mark.asyncio
async def test_comments_page_out_of_range(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1/comments?p=4")
    assert resp.json() == {"comments": []}


@pytest.mark.asyncio
async def test_comments_negative_limit(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1/comments?limit=-1")
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_comments_missing_article_checked_before_query_tokens(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/8080/comments?order=sideways")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_comments_oversized_page_is_empty(async_client: AsyncClient):
    resp = await async_client.get(f"/api/articles/1/comments?p={HUGE}")
    assert resp.status_code == 200
    assert resp.json() == {"comments": []}


@pytest.mark.asyncio
async def test_comments_oversized_limit_returns_everything(async_client: AsyncClient):
    resp = await async_client.get(f"/api/articles/1/comments?limit={HUGE}")
    assert resp.status_code == 200
    assert len(resp.json()["comments"]) == 11


@pytest.mark.asyncio
async def test_comments_out_of_range_article_id(async_client: AsyncClient):
    resp = await async_client.get(f"/api/articles/{HUGE}/comments")
    assert resp.status_code == 400

    resp = await async_client.post(
        f"/api/articles/{HUGE}/comments",
        json={"username": "lurker", "body": "Hello?"},
    )
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# POST /api/articles/{id}/comments
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_post_comment(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/9/comments",
        json={"username": "lurker", "body": "Lovely stuff"},
    )
    assert resp.status_code == 201
    comment = resp.json()["comment"]
    assert set(comment) == COMMENT_KEYS
    assert comment["comment_id"] == 19
    assert comment["article_id"] == 9
    assert comment["author"] == "lurker"
    assert comment["body"] == "Lovely stuff"
    assert comment["votes"] == 0
    assert comment["created_at"]


@pytest.mark.asyncio
async def test_posted_comment_appears_in_listing(async_client: AsyncClient):
    await async_client.post(
        "/api/articles/13/comments",
        json={"username": "lurker", "body": "First!"},
    )
    resp = await async_client.get("/api/articles/13/comments")
    comments = resp.json()["comments"]
    assert len(comments) == 1
    assert comments[0]["body"] == "First!"

    article = (await async_client.get("/api/articles/13")).json()["article"]
    assert article["comment_count"] == 1


@pytest.mark.asyncio
async def test_post_comment_ignores_extra_keys(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/9/comments",
        json={"username": "lurker", "body": "Hi", "votes": 500},
    )
    assert resp.status_code == 201
    assert resp.json()["comment"]["votes"] == 0


@pytest.mark.asyncio
async def test_post_comment_missing_article(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/8080/comments",
        json={"username": "lurker", "body": "Hello?"},
    )
    assert resp.status_code == 404
    assert "was not found in articles" in resp.json()["details"]


@pytest.mark.asyncio
async def test_post_comment_unknown_user_inserts_nothing(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/13/comments",
        json={"username": "not-a-user", "body": "Hello"},
    )
    assert resp.status_code == 404
    assert resp.json()["details"] == "username 'not-a-user' was not found in users"

    resp = await async_client.get("/api/articles/13/comments")
    assert resp.json()["comments"] == []


@pytest.mark.asyncio
async def test_post_comment_missing_body(async_client: AsyncClient):
    resp = await async_client.post("/api/articles/13/comments", json={"username": "lurker"})
    assert resp.status_code == 400
    assert "body" in resp.json()["details"]

    resp = await async_client.get("/api/articles/13/comments")
    assert resp.json()["comments"] == []


@pytest.mark.asyncio
async def test_post_comment_invalid_article_id(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/dog/comments",
        json={"username": "lurker", "body": "Woof"},
    )
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# GET /api/comments/{id}
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_comment(async_client: AsyncClient):
    resp = await async_client.get("/api/comments/3")
    assert resp.status_code == 200
    comment = resp.json()["comment"]
    assert comment["comment_id"] == 3
    assert comment["article_id"] == 1
    assert comment["votes"] == 100


@pytest.mark.asyncio
async def test_get_missing_comment(async_client: AsyncClient):
    resp = await async_client.get("/api/comments/999")
    assert resp.status_code == 404
    assert resp.json()["details"] == "comment_id '999' was not found in comments"


# ---------------------------------------------------------------------------
# PATCH /api/comments/{id}
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_patch_comment_votes(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/2", json={"inc_votes": 6})
    assert resp.status_code == 200
    assert resp.json()["comment"]["votes"] == 20


@pytest.mark.asyncio
async def test_patch_comment_votes_down(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/2", json={"inc_votes": -20})
    assert resp.json()["comment"]["votes"] == -6


@pytest.mark.asyncio
async def test_patch_comment_body(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/2", json={"body": "Edited"})
    assert resp.json()["comment"]["body"] == "Edited"
    assert resp.json()["comment"]["votes"] == 14

    stored = (await async_client.get("/api/comments/2")).json()["comment"]
    assert stored["body"] == "Edited"


@pytest.mark.asyncio
async def test_patch_comment_unknown_key_is_a_no_op(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/2", json={"flavour": "strawberry"})
    assert resp.status_code == 200
    assert resp.json()["comment"]["votes"] == 14


@pytest.mark.asyncio
async def test_patch_comment_non_integer_votes(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/2", json={"inc_votes": "lots"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_patch_missing_comment(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/999", json={"inc_votes": 1})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_patch_comment_invalid_id(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/abc", json={"inc_votes": 1})
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# DELETE /api/comments/{id}
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_comment(async_client: AsyncClient):
    resp = await async_client.delete("/api/comments/1")
    assert resp.status_code == 204
    assert resp.content == b""

    resp = await async_client.get("/api/articles/9/comments")
    assert [c["comment_id"] for c in resp.json()["comments"]] == [17]


@pytest.mark.asyncio
async def test_delete_missing_comment(async_client: AsyncClient):
    resp = await async_client.delete("/api/comments/999")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_comment_invalid_id(async_client: AsyncClient):
    resp = await async_client.delete("/api/comments/not-a-number")
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_out_of_range_comment_id_is_bad_request(async_client: AsyncClient):
    resp = await async_client.get(f"/api/comments/{HUGE}")
    assert resp.status_code == 400
    assert "comment_id" in resp.json()["details"]

    resp = await async_client.patch(f"/api/comments/{HUGE}", json={"inc_votes": 1})
    assert resp.status_code == 400

    resp = await async_client.delete(f"/api/comments/{HUGE}")
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_patch_comment_oversized_votes(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/2", json={"inc_votes": -(10**20)})
    assert resp.status_code == 400

    resp = await async_client.get("/api/comments/2")
    assert resp.json()["comment"]["votes"] == 14
