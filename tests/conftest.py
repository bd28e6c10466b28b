"""Shared test fixtures."""

import pytest

from reviewbot.config import WorkflowConfig
from reviewbot.repo import RepoInfo


@pytest.fixture
def repo():
    return RepoInfo(owner="octo", name="demo")


@pytest.fixture
def github_client_uninit(repo):
    """Create an uninitialized GitHubClient with a fake PAT token.

    Use this for sync tests that don't need the async context manager.
    """
    from reviewbot.github_client import GitHubClient

    return GitHubClient(repo, token="fake-token")


@pytest.fixture
def workflow_config(repo):
    """Config for PR #7 with a reply comment #101."""
    return WorkflowConfig(token="fake-token", repo=repo, pr_number=7, comment_id=101)
