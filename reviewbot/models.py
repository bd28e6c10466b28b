"""Pydantic models for GitHub data and review output."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

Severity = Literal["high", "medium", "low"]


class PullRequest(BaseModel):
    """Pull request data."""
    pr_number: int
    title: str
    body: str | None
    author_login: str
    author_is_bot: bool
    state: str
    head_sha: str
    created_at: datetime
    additions: int
    deletions: int
    changed_files: int
    draft: bool


class FileChange(BaseModel):
    """File changed in a PR."""
    pr_number: int
    filename: str
    status: str
    additions: int
    deletions: int
    changes: int
    patch: str | None
    blob_url: str | None


class ReviewComment(BaseModel):
    """A comment on a PR: inline review comment or plain issue comment."""
    comment_id: int
    author_login: str
    author_is_bot: bool
    body: str
    path: str | None
    line: int | None
    in_reply_to_id: int | None
    is_review_comment: bool
    created_at: datetime | None


class Issue(BaseModel):
    """A problem found on a single line of added code."""
    rule: str
    severity: Severity
    message: str


class DiffComment(BaseModel):
    """Inline comment to post on a diff position."""
    path: str
    position: int
    line: int
    body: str
    severity: Severity = "low"
