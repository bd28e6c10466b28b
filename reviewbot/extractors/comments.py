"""Comment data extractor (review comments and PR-level comments)."""

from ..models import ReviewComment
from .prs import is_bot, parse_datetime


def extract_comment(comment_data: dict) -> ReviewComment:
    """Extract a comment from GitHub API response.

    Inline review comments carry a diff path; PR-level (issue) comments
    do not, which is how the two are told apart.
    """
    user = comment_data.get("user") or {}
    is_review_comment = "path" in comment_data or "pull_request_review_id" in comment_data

    return ReviewComment(
        comment_id=comment_data["id"],
        author_login=user.get("login", "unknown"),
        author_is_bot=is_bot(user),
        body=comment_data.get("body") or "",
        path=comment_data.get("path"),
        line=comment_data.get("line") or comment_data.get("original_line"),
        in_reply_to_id=comment_data.get("in_reply_to_id"),
        is_review_comment=is_review_comment,
        created_at=parse_datetime(comment_data.get("created_at")),
    )
