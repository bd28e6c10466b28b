"""Tests for workflow configuration."""

import pytest

from reviewbot.config import WorkflowConfig
from reviewbot.repo import RepoInfo


class TestFromEnv:
    """Test reading config from an environment mapping."""

    def test_full_environment(self):
        config = WorkflowConfig.from_env(
            {
                "GITHUB_TOKEN": "ghp_x",
                "REPOSITORY": "octo/demo",
                "PR_NUMBER": "7",
                "COMMENT_ID": "101",
                "COMMENT_BODY": "Thanks!",
                "COMMENT_USER": "dev",
                "LOG_LEVEL": "debug",
            }
        )
        assert config.token == "ghp_x"
        assert config.repo == RepoInfo(owner="octo", name="demo")
        assert config.pr_number == 7
        assert config.comment_id == 101
        assert config.comment_body == "Thanks!"
        assert config.comment_user == "dev"
        assert config.log_level == "DEBUG"

    def test_github_repository_fallback(self):
        config = WorkflowConfig.from_env({"GITHUB_REPOSITORY": "octo/other"})
        assert config.repo == RepoInfo(owner="octo", name="other")

    def test_repository_takes_precedence(self):
        config = WorkflowConfig.from_env({"REPOSITORY": "a/b", "GITHUB_REPOSITORY": "c/d"})
        assert config.repo == RepoInfo(owner="a", name="b")

    def test_invalid_numbers_are_none(self):
        config = WorkflowConfig.from_env({"PR_NUMBER": "abc", "COMMENT_ID": ""})
        assert config.pr_number is None
        assert config.comment_id is None

    def test_empty_environment(self):
        config = WorkflowConfig.from_env({})
        assert config.token is None
        assert config.repo is None
        assert config.log_level == "INFO"
        assert config.has_app_auth is False


class TestRequire:
    """Test required-field validation."""

    def test_all_present(self):
        config = WorkflowConfig(token="t", repo=RepoInfo("o", "r"), pr_number=1)
        config.require("token", "pr_number")

    def test_missing_names_reported(self):
        config = WorkflowConfig(token="t")
        with pytest.raises(ValueError) as exc:
            config.require("token", "pr_number", "comment_id")
        message = str(exc.value)
        assert "PR_NUMBER" in message
        assert "COMMENT_ID" in message
        assert "GITHUB_TOKEN" not in message

    def test_missing_token(self):
        with pytest.raises(ValueError, match="GITHUB_TOKEN"):
            WorkflowConfig().require("token")

    def test_app_auth_satisfies_token(self):
        config = WorkflowConfig(app_id="1", app_private_key_path="key.pem", app_installation_id="2")
        assert config.has_app_auth
        config.require("token")

    def test_repo_not_required(self):
        # The repository may still come from the git remote
        config = WorkflowConfig(token="t", pr_number=1)
        config.require("token", "pr_number")

    def test_unknown_field(self):
        with pytest.raises(AttributeError):
            WorkflowConfig(token="t").require("repository")
