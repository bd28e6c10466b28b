"""Workflow configuration read from the CI environment.

Values are read once into a WorkflowConfig and passed explicitly to the
workflows; nothing below reads the environment on its own.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

from .repo import RepoInfo, parse_repository

# Names of the environment variables each field is read from
ENV_NAMES = {
    "token": "GITHUB_TOKEN",
    "app_id": "GITHUB_APP_ID",
    "app_private_key_path": "GITHUB_APP_PRIVATE_KEY_PATH",
    "app_installation_id": "GITHUB_APP_INSTALLATION_ID",
    "pr_number": "PR_NUMBER",
    "comment_id": "COMMENT_ID",
    "comment_body": "COMMENT_BODY",
    "comment_user": "COMMENT_USER",
}


def _parse_int(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class WorkflowConfig:
    """Everything a workflow run needs from its environment."""

    # Auth: PAT (simple) or GitHub App (higher rate limits)
    token: str | None = None
    app_id: str | None = None
    app_private_key_path: str | None = None
    app_installation_id: str | None = None

    repo: RepoInfo | None = None
    pr_number: int | None = None

    # Set when handling a reply to a review comment
    comment_id: int | None = None
    comment_body: str | None = None
    comment_user: str | None = None

    log_level: str = "INFO"

    @property
    def has_app_auth(self) -> bool:
        return bool(self.app_id and self.app_private_key_path and self.app_installation_id)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> WorkflowConfig:
        """Build config from environment variables (and a .env file if present).

        REPOSITORY falls back to GITHUB_REPOSITORY, which Actions always sets.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        repository = environ.get("REPOSITORY") or environ.get("GITHUB_REPOSITORY")

        return cls(
            token=environ.get("GITHUB_TOKEN") or None,
            app_id=environ.get("GITHUB_APP_ID") or None,
            app_private_key_path=environ.get("GITHUB_APP_PRIVATE_KEY_PATH") or None,
            app_installation_id=environ.get("GITHUB_APP_INSTALLATION_ID") or None,
            repo=parse_repository(repository) if repository else None,
            pr_number=_parse_int(environ.get("PR_NUMBER")),
            comment_id=_parse_int(environ.get("COMMENT_ID")),
            comment_body=environ.get("COMMENT_BODY") or None,
            comment_user=environ.get("COMMENT_USER") or None,
            log_level=environ.get("LOG_LEVEL", "INFO").upper(),
        )

    def require(self, *fields: str) -> None:
        """Raise ValueError naming every missing field.

        Auth is satisfied by either a token or a complete GitHub App setup.
        """
        missing = []
        for name in fields:
            if name == "token":
                if not self.token and not self.has_app_auth:
                    missing.append("GITHUB_TOKEN")
                continue
            if not getattr(self, name):
                missing.append(ENV_NAMES[name])

        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")
