from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Literal, Optional
from datetime import datetime, timezone


class GithubModel(BaseModel):
    # Only the consumed subset of the REST payload is modeled
    model_config = ConfigDict(extra="ignore", frozen=True)


class Label(GithubModel):
    name: str
    color: Optional[str] = None
    description: Optional[str] = None


class Comment(GithubModel):
    id: int
    body: Optional[str] = None


class Issue(GithubModel):
    id: int
    number: int
    title: str
    body: Optional[str] = None
    created_at: datetime
    comments: int = 0
    labels: list[Label] = Field(default_factory=list)
    pull_request: bool = False
    comment_list: tuple[Comment, ...] = Field(default=(), exclude=True)

    @field_validator("pull_request", mode="before")
    @classmethod
    def _has_pull_request(cls, v):
        # GitHub sends a dict of PR urls for pull requests and omits the key for issues
        return v is not None and v is not False

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    def with_comments(self, comments) -> "Issue":
        return self.model_copy(update={"comment_list": tuple(comments)})


class ExportConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    owner: str
    repo: str
    token: Optional[str] = None
    page_size: int = Field(default=100, ge=1, le=100)
    state: Optional[Literal["open", "closed", "all"]] = None
    posts_dir: str = "_posts"
    skip_pull_requests: bool = False
    workers: int = Field(default=1, ge=1)
    request_timeout: float = 30
    max_attempts: int = Field(default=1, ge=1)
    backoff_seconds: float = 1.5
    base_url: str = "https://api.github.com"
