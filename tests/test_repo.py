"""Tests for repository detection."""

from unittest.mock import patch

import pytest

from reviewbot.repo import RepoInfo, parse_git_remote_url, parse_repository, resolve_repo


class TestParseRepository:
    """Tests for owner/repo strings."""

    def test_owner_repo(self):
        assert parse_repository("octo/demo") == RepoInfo(owner="octo", name="demo")

    def test_dots_and_dashes(self):
        assert parse_repository("my-org/my.repo") == RepoInfo(owner="my-org", name="my.repo")

    def test_surrounding_whitespace(self):
        assert parse_repository("  octo/demo\n") == RepoInfo(owner="octo", name="demo")

    def test_invalid(self):
        assert parse_repository("octo") is None
        assert parse_repository("a/b/c") is None
        assert parse_repository("") is None


class TestParseGitRemoteUrl:
    """Tests for parsing git remote URLs."""

    def test_ssh_format(self):
        """Parse SSH format: git@github.com:owner/repo.git"""
        result = parse_git_remote_url("git@github.com:myorg/myrepo.git")
        assert result == RepoInfo(owner="myorg", name="myrepo")

    def test_https_format_no_git_suffix(self):
        """Parse HTTPS format without .git suffix."""
        result = parse_git_remote_url("https://github.com/myorg/myrepo")
        assert result == RepoInfo(owner="myorg", name="myrepo")

    def test_ssh_url_format(self):
        """Parse ssh:// format: ssh://git@github.com/owner/repo.git"""
        result = parse_git_remote_url("ssh://git@github.com/myorg/myrepo.git")
        assert result == RepoInfo(owner="myorg", name="myrepo")

    def test_enterprise_github(self):
        """Parse enterprise GitHub URL."""
        result = parse_git_remote_url("https://github.mycompany.com/team/repo.git")
        assert result == RepoInfo(owner="team", name="repo")

    def test_invalid_url(self):
        """Return None for invalid URLs."""
        assert parse_git_remote_url("not-a-url") is None
        assert parse_git_remote_url("") is None
        assert parse_git_remote_url("ftp://github.com/foo/bar") is None


class TestRepoInfo:
    """Tests for RepoInfo dataclass."""

    def test_full_name(self):
        assert RepoInfo(owner="myorg", name="myrepo").full_name == "myorg/myrepo"

    def test_api_path(self):
        assert RepoInfo(owner="myorg", name="myrepo").api_path == "/repos/myorg/myrepo"


class TestResolveRepo:
    """Tests for the configured-then-git fallback."""

    def test_configured_wins(self):
        configured = RepoInfo(owner="a", name="b")
        with patch("reviewbot.repo.detect_repo_from_git") as detect:
            assert resolve_repo(configured) is configured
            detect.assert_not_called()

    def test_git_fallback(self):
        detected = RepoInfo(owner="gitorg", name="gitrepo")
        with patch("reviewbot.repo.detect_repo_from_git", return_value=detected):
            assert resolve_repo(None) == detected

    def test_nothing_found_raises(self):
        with patch("reviewbot.repo.detect_repo_from_git", return_value=None):
            with pytest.raises(ValueError, match="Could not determine repository"):
                resolve_repo(None)
