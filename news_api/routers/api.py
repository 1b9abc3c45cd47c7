from fastapi import APIRouter

router = APIRouter(prefix="/api", tags=["api"])

_LIST_QUERIES = ["sort_by", "order", "limit", "p"]

ENDPOINTS: dict[str, dict] = {
    "GET /api": {
        "description": "serves a description of every available endpoint",
    },
    "GET /api/topics": {
        "description": "serves an array of all topics",
        "queries": [],
        "exampleResponse": {"topics": [{"slug": "football", "description": "Footie!"}]},
    },
    "POST /api/topics": {
        "description": "adds a topic; description defaults to the slug",
        "exampleRequest": {"slug": "turtles", "description": "slow and steady"},
    },
    "GET /api/articles": {
        "description": "serves one page of articles with comment counts and the total matching count",
        "queries": ["topic", "author", *_LIST_QUERIES],
        "exampleResponse": {
            "articles": [
                {
                    "article_id": 1,
                    "title": "Seafood substitutions are increasing",
                    "topic": "cooking",
                    "author": "weegembump",
                    "created_at": "2018-05-30T15:59:13",
                    "votes": 0,
                    "article_img_url": "https://images.example.com/seafood.jpeg",
                    "comment_count": 6,
                }
            ],
            "total_count": 1,
        },
    },
    "POST /api/articles": {
        "description": "adds an article; article_img_url is optional",
        "exampleRequest": {
            "author": "weegembump",
            "title": "Seafood substitutions are increasing",
            "body": "Text from the article..",
            "topic": "cooking",
        },
    },
    "GET /api/articles/:article_id": {
        "description": "serves a single article including its body and comment count",
    },
    "PATCH /api/articles/:article_id": {
        "description": "updates any of inc_votes, body, title and topic",
        "exampleRequest": {"inc_votes": 1},
    },
    "DELETE /api/articles/:article_id": {
        "description": "deletes an article and its comments",
    },
    "GET /api/articles/:article_id/comments": {
        "description": "serves one page of an article's comments, newest first",
        "queries": _LIST_QUERIES,
    },
    "POST /api/articles/:article_id/comments": {
        "description": "adds a comment to an article",
        "exampleRequest": {"username": "weegembump", "body": "Great read"},
    },
    "GET /api/comments/:comment_id": {
        "description": "serves a single comment",
    },
    "PATCH /api/comments/:comment_id": {
        "description": "updates any of inc_votes and body",
        "exampleRequest": {"inc_votes": -1},
    },
    "DELETE /api/comments/:comment_id": {
        "description": "deletes a comment",
    },
    "GET /api/users": {
        "description": "serves an array of all users",
    },
    "POST /api/users": {
        "description": "adds a user; avatar_url is optional",
        "exampleRequest": {"username": "weegembump", "name": "Gemma"},
    },
    "GET /api/users/:username": {
        "description": "serves a single user",
    },
}


@router.get("")
async def describe_endpoints():
    return {"endpoints": ENDPOINTS}
