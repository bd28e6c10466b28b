"""CI workflows: size a PR, review its diff, answer a committer's reply.

Each workflow takes an open GitHubClient and the WorkflowConfig for the
run, and talks to GitHub sequentially.
"""

from __future__ import annotations

import logging

import httpx

from .config import WorkflowConfig
from .extractors.comments import extract_comment
from .extractors.files import extract_file_change
from .extractors.prs import extract_pr
from .github_client import GitHubClient
from .models import DiffComment, FileChange, PullRequest, ReviewComment
from .poster import post_review_comments
from .responses import RESOLVED_MARKER, ReplyPlan, classify, plan_reply
from .review_config import ReviewConfig
from .scanner import scan_files
from .sizing import SizeAssessment, assess_size, render_summary

logger = logging.getLogger(__name__)

NO_ISSUES_COMMENT = "✅ Automated review complete - no issues found. Code looks good!"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Log to stderr, which is where the CI job log is captured."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
        handlers=[logging.StreamHandler()],
    )
    return logging.getLogger(__name__)


async def fetch_pull_request(
    client: GitHubClient, pr_number: int
) -> tuple[PullRequest, list[FileChange]]:
    pr = extract_pr(await client.get_pull_request(pr_number))
    files = [extract_file_change(pr_number, f) for f in await client.get_pr_files(pr_number)]
    logger.info(f"Found {len(files)} files changed in PR #{pr_number}")
    return pr, files


async def check_size(
    client: GitHubClient,
    config: WorkflowConfig,
    review_config: ReviewConfig,
) -> SizeAssessment:
    """Label the PR by size and post the summary comment."""
    config.require("pr_number")
    pr_number = config.pr_number

    pr, files = await fetch_pull_request(client, pr_number)
    assessment = assess_size(pr.additions, pr.deletions, review_config.size_thresholds)
    logger.info(f"PR #{pr_number}: {assessment.total_changes} changed lines -> {assessment.label}")

    await client.add_labels(pr_number, [assessment.label])
    await client.create_issue_comment(
        pr_number,
        render_summary(len(files), pr.additions, pr.deletions, assessment.comment),
    )
    return assessment


async def perform_review(
    client: GitHubClient,
    config: WorkflowConfig,
    review_config: ReviewConfig,
) -> list[DiffComment]:
    """Scan the PR diff and post what was found."""
    config.require("pr_number")
    pr_number = config.pr_number
    logger.info(f"Starting review for PR #{pr_number} in {client.repo.full_name}")

    pr, files = await fetch_pull_request(client, pr_number)
    comments = scan_files(files, review_config)

    if comments:
        logger.info(f"Posting {len(comments)} review comments")
        await post_review_comments(client, pr_number, pr.head_sha, comments)
    else:
        logger.info("No issues found - code looks good!")
        await client.create_issue_comment(pr_number, NO_ISSUES_COMMENT)

    return comments


async def fetch_comment(client: GitHubClient, comment_id: int) -> ReviewComment:
    """Fetch a comment as a review comment, else as a PR-level comment."""
    try:
        return extract_comment(await client.get_review_comment(comment_id))
    except httpx.HTTPStatusError as e:
        if e.response.status_code != 404:
            raise
        logger.info("Not a review comment, checking issue comments...")
    return extract_comment(await client.get_issue_comment(comment_id))


async def handle_response(client: GitHubClient, config: WorkflowConfig) -> ReplyPlan | None:
    """Classify a committer's reply and answer it.

    Replies from bots are skipped (returns None) so the bot never answers
    itself. A resolved defense also gets the original comment marked
    resolved; failing to do so is logged, not raised.
    """
    config.require("pr_number", "comment_id")
    pr_number = config.pr_number

    reply = await fetch_comment(client, config.comment_id)
    author = config.comment_user or reply.author_login
    if reply.author_is_bot:
        logger.info(f"Skipping reply from bot {author}")
        return None

    logger.info(f"Analyzing response from {author} on PR #{pr_number}")

    # Thread replies point at the top-level comment they answer
    original = reply
    if reply.is_review_comment and reply.in_reply_to_id:
        original = extract_comment(await client.get_review_comment(reply.in_reply_to_id))

    text = config.comment_body if config.comment_body is not None else reply.body
    analysis = classify(text, original)
    logger.info(f"Response type: {analysis.type.value}")
    logger.info(f"Sentiment: {analysis.sentiment.value}")

    plan = plan_reply(text, analysis)

    if original.is_review_comment:
        await client.reply_to_review_comment(pr_number, original.comment_id, plan.body)
    else:
        await client.create_issue_comment(pr_number, plan.body)
    logger.info(f"Posted {analysis.type.value} reply")

    if plan.resolve and original.is_review_comment:
        try:
            await client.update_review_comment(original.comment_id, original.body + RESOLVED_MARKER)
            logger.info("Resolved comment based on valid defense")
        except httpx.HTTPStatusError as e:
            logger.warning(f"Could not update comment, but response was posted: {e}")

    return plan
