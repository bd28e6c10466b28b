"""Repository detection.

Resolves owner/name from an "owner/repo" string (as set by Actions) or
from the git remote of the current checkout.
"""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True)
class RepoInfo:
    """Repository information."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def api_path(self) -> str:
        """REST API path prefix for this repo."""
        return f"/repos/{self.owner}/{self.name}"


def parse_repository(value: str) -> RepoInfo | None:
    """Parse "owner/repo" as found in GITHUB_REPOSITORY."""
    match = re.match(r"^\s*([\w.-]+)/([\w.-]+?)\s*$", value)
    if match:
        return RepoInfo(owner=match.group(1), name=match.group(2))
    return None


def parse_git_remote_url(url: str) -> RepoInfo | None:
    """Parse owner/repo from git remote URL.

    Supports:
    - git@github.com:owner/repo.git
    - https://github.com/owner/repo.git
    - https://github.com/owner/repo
    - ssh://git@github.com/owner/repo.git
    """
    # SSH format: git@github.com:owner/repo.git
    ssh_match = re.match(r"git@[\w.-]+:([^/]+)/([^/]+?)(?:\.git)?$", url)
    if ssh_match:
        return RepoInfo(owner=ssh_match.group(1), name=ssh_match.group(2))

    # HTTPS format: https://github.com/owner/repo.git
    https_match = re.match(r"https?://[\w.-]+/([^/]+)/([^/]+?)(?:\.git)?$", url)
    if https_match:
        return RepoInfo(owner=https_match.group(1), name=https_match.group(2))

    # SSH with ssh:// prefix
    ssh_url_match = re.match(r"ssh://git@[\w.-]+/([^/]+)/([^/]+?)(?:\.git)?$", url)
    if ssh_url_match:
        return RepoInfo(owner=ssh_url_match.group(1), name=ssh_url_match.group(2))

    return None


def get_git_remote_url(remote: str = "origin") -> str | None:
    """Get the URL of a git remote."""
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", remote],
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None


def detect_repo_from_git() -> RepoInfo | None:
    """Detect repo from git remote in current directory."""
    url = get_git_remote_url("origin")
    if url:
        return parse_git_remote_url(url)
    return None


def resolve_repo(configured: RepoInfo | None) -> RepoInfo:
    """Use the configured repo, falling back to git remote detection.

    Raises ValueError if repo cannot be determined.
    """
    if configured:
        return configured

    repo = detect_repo_from_git()
    if repo:
        return repo

    raise ValueError(
        "Could not determine repository. Either:\n"
        "  1. Set REPOSITORY (or GITHUB_REPOSITORY) to owner/repo, or\n"
        "  2. Run from a git repo with a GitHub remote"
    )
