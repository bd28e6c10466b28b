"""Pull request data extractor."""

from datetime import datetime

from ..models import PullRequest


def is_bot(user: dict) -> bool:
    """Check if user is a bot/GitHub App (API type "Bot" or a *[bot] login)."""
    if user.get("type") == "Bot":
        return True
    return user.get("login", "").endswith("[bot]")


def parse_datetime(dt_str: str | None) -> datetime | None:
    """Parse ISO datetime string, returns None if input is empty."""
    if not dt_str:
        return None
    return datetime.fromisoformat(dt_str.replace("Z", "+00:00"))


def parse_datetime_required(dt_str: str) -> datetime:
    """Parse ISO datetime string, raises if input is empty."""
    if not dt_str:
        raise ValueError("datetime string is required")
    return datetime.fromisoformat(dt_str.replace("Z", "+00:00"))


def extract_pr(pr_data: dict) -> PullRequest:
    """Extract PR data from GitHub API response."""
    user = pr_data.get("user") or {}
    head = pr_data.get("head") or {}

    return PullRequest(
        pr_number=pr_data["number"],
        title=pr_data["title"],
        body=pr_data.get("body"),
        author_login=user.get("login", "unknown"),
        author_is_bot=is_bot(user),
        state=pr_data["state"],
        head_sha=head.get("sha", ""),
        created_at=parse_datetime_required(pr_data["created_at"]),
        additions=pr_data.get("additions", 0),
        deletions=pr_data.get("deletions", 0),
        changed_files=pr_data.get("changed_files", 0),
        draft=pr_data.get("draft", False),
    )
