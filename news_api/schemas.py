from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt

# Request bodies ignore unknown keys (pydantic's default ``extra="ignore"``),
# so a PATCH carrying none of the recognised keys is a valid no-op.

# Vote increments are bound to the 32-bit INTEGER vote columns.
_MIN_INT = -(2**31)
_MAX_INT = 2**31 - 1


# --- Topic ---

class TopicCreate(BaseModel):
    slug: str
    description: str | None = None


class TopicResponse(BaseModel):
    slug: str
    description: str
    model_config = ConfigDict(from_attributes=True)


class TopicEnvelope(BaseModel):
    topic: TopicResponse


class TopicListEnvelope(BaseModel):
    topics: list[TopicResponse]


# --- User ---

class UserCreate(BaseModel):
    username: str
    name: str
    avatar_url: str | None = None


class UserResponse(BaseModel):
    username: str
    name: str
    avatar_url: str | None = None
    model_config = ConfigDict(from_attributes=True)


class UserEnvelope(BaseModel):
    user: UserResponse


class UserListEnvelope(BaseModel):
    users: list[UserResponse]


# --- Article ---

class ArticleCreate(BaseModel):
    author: str
    title: str
    body: str
    topic: str
    article_img_url: str | None = None


class ArticlePatch(BaseModel):
    inc_votes: StrictInt | None = Field(None, ge=_MIN_INT, le=_MAX_INT)
    body: str | None = None
    title: str | None = None
    topic: str | None = None


class ArticleSummary(BaseModel):
    article_id: int
    author: str
    title: str
    topic: str
    created_at: datetime
    votes: int
    article_img_url: str | None = None
    comment_count: int = 0
    model_config = ConfigDict(from_attributes=True)


class ArticleDetail(ArticleSummary):
    body: str


class ArticleEnvelope(BaseModel):
    article: ArticleDetail


class ArticleListEnvelope(BaseModel):
    articles: list[ArticleSummary]
    total_count: int


# --- Comment ---

class CommentCreate(BaseModel):
    username: str
    body: str


class CommentPatch(BaseModel):
    inc_votes: StrictInt | None = Field(None, ge=_MIN_INT, le=_MAX_INT)
    body: str | None = None


class CommentResponse(BaseModel):
    comment_id: int
    article_id: int
    author: str
    body: str
    votes: int
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class CommentEnvelope(BaseModel):
    comment: CommentResponse


class CommentListEnvelope(BaseModel):
    comments: list[CommentResponse]
