"""Tests for data extractors."""

from datetime import UTC, datetime

import pytest

from reviewbot.extractors.comments import extract_comment
from reviewbot.extractors.files import extract_file_change
from reviewbot.extractors.prs import extract_pr, is_bot, parse_datetime, parse_datetime_required


# Factory helpers
def make_user(**overrides) -> dict:
    base = {"id": 12345, "login": "octocat", "type": "User"}
    base.update(overrides)
    return base


def make_pr_data(**overrides) -> dict:
    base = {
        "number": 123,
        "id": 999999,
        "title": "Fix bug",
        "body": "Desc",
        "user": make_user(),
        "state": "open",
        "head": {"sha": "abc123", "ref": "feature"},
        "created_at": "2025-01-10T09:00:00Z",
        "additions": 50,
        "deletions": 20,
        "changed_files": 3,
        "draft": False,
    }
    base.update(overrides)
    return base


def make_review_comment_data(**overrides) -> dict:
    base = {
        "id": 555,
        "pull_request_review_id": 42,
        "user": make_user(login="reviewer"),
        "body": "Use const here",
        "path": "src/app.js",
        "line": 10,
        "created_at": "2025-01-11T10:00:00Z",
    }
    base.update(overrides)
    return base


class TestIsBot:
    """Tests for bot detection."""

    def test_bot_type(self):
        assert is_bot({"login": "reviewbot", "type": "Bot"}) is True

    def test_bot_suffix_without_type(self):
        assert is_bot({"login": "dependabot[bot]"}) is True

    def test_human_user(self):
        assert is_bot(make_user()) is False

    def test_empty_user(self):
        assert is_bot({}) is False


class TestParseDatetime:
    """Tests for ISO datetime parsing."""

    def test_iso_with_z(self):
        assert parse_datetime("2025-01-10T09:00:00Z") == datetime(2025, 1, 10, 9, 0, tzinfo=UTC)

    def test_none_returns_none(self):
        assert parse_datetime(None) is None

    def test_empty_string_returns_none(self):
        assert parse_datetime("") is None

    def test_required_raises(self):
        with pytest.raises(ValueError):
            parse_datetime_required("")


class TestExtractPr:
    """Tests for PR extraction."""

    def test_basic_pr(self):
        pr = extract_pr(make_pr_data())
        assert pr.pr_number == 123
        assert pr.head_sha == "abc123"
        assert pr.author_login == "octocat"
        assert (pr.additions, pr.deletions) == (50, 20)

    def test_bot_author(self):
        pr = extract_pr(make_pr_data(user=make_user(login="renovate[bot]", type="Bot")))
        assert pr.author_is_bot is True

    def test_missing_head_and_user(self):
        pr = extract_pr(make_pr_data(head=None, user=None))
        assert pr.head_sha == ""
        assert pr.author_login == "unknown"


class TestExtractFileChange:
    """Tests for file change extraction."""

    def test_basic_file(self):
        fc = extract_file_change(
            123,
            {
                "filename": "src/app.js",
                "status": "modified",
                "additions": 2,
                "deletions": 1,
                "changes": 3,
                "patch": "@@ -1 +1,2 @@\n+x",
                "blob_url": "https://github.com/octo/demo/blob/abc/src/app.js",
            },
        )
        assert fc.filename == "src/app.js"
        assert fc.patch.startswith("@@")
        assert fc.pr_number == 123

    def test_defaults(self):
        fc = extract_file_change(1, {"filename": "logo.png"})
        assert fc.status == "modified"
        assert fc.patch is None
        assert fc.changes == 0


class TestExtractComment:
    """Tests for review and issue comment extraction."""

    def test_review_comment(self):
        comment = extract_comment(make_review_comment_data())
        assert comment.comment_id == 555
        assert comment.is_review_comment is True
        assert comment.path == "src/app.js"
        assert comment.in_reply_to_id is None

    def test_thread_reply(self):
        comment = extract_comment(make_review_comment_data(in_reply_to_id=500))
        assert comment.in_reply_to_id == 500

    def test_line_falls_back_to_original_line(self):
        comment = extract_comment(make_review_comment_data(line=None, original_line=8))
        assert comment.line == 8

    def test_issue_comment(self):
        comment = extract_comment(
            {"id": 77, "user": make_user(), "body": "Why?", "created_at": "2025-01-11T10:00:00Z"}
        )
        assert comment.is_review_comment is False
        assert comment.path is None

    def test_null_body(self):
        comment = extract_comment({"id": 1, "user": make_user(), "body": None})
        assert comment.body == ""
        assert comment.created_at is None

    def test_bot_author(self):
        comment = extract_comment(make_review_comment_data(user={"login": "reviewbot[bot]", "type": "Bot"}))
        assert comment.author_is_bot is True
