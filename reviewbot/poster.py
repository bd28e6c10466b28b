"""Posts diff comments to a pull request as a review."""

from __future__ import annotations

import logging

import httpx

from .github_client import GitHubClient
from .models import DiffComment

logger = logging.getLogger(__name__)


async def post_review_comments(
    client: GitHubClient,
    pr_number: int,
    commit_sha: str,
    comments: list[DiffComment],
) -> int:
    """Post comments as one review, falling back to one call per comment.

    Returns how many comments were posted. Individual failures in the
    fallback are logged and skipped.
    """
    if not comments:
        return 0

    payload = [{"path": c.path, "position": c.position, "body": c.body} for c in comments]

    try:
        await client.create_review(pr_number, commit_sha, payload)
        logger.info(f"Successfully posted {len(comments)} review comments")
        return len(comments)
    except httpx.HTTPError as e:
        logger.error(f"Error posting review comments: {e}")

    logger.info("Attempting to post comments individually...")
    posted = 0
    for comment in comments:
        try:
            await client.create_review_comment(
                pr_number, commit_sha, comment.path, comment.position, comment.body
            )
            posted += 1
        except httpx.HTTPError as e:
            logger.error(f"Failed to post comment for {comment.path}: {e}")

    return posted
