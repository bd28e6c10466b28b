"""GitHub API client with rate limiting, retry logic, and App auth support.

Uses httpx.AsyncClient with trio. Every call is scoped to the RepoInfo
the client was created for.
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
import jwt
import trio

from .config import WorkflowConfig
from .repo import RepoInfo

logger = logging.getLogger(__name__)

PER_PAGE = 100  # Max items per API page


class GitHubAppAuth:
    """GitHub App authentication manager with automatic token refresh."""

    def __init__(self, app_id: str, private_key_path: str, installation_id: str):
        self.app_id = app_id
        self.installation_id = installation_id

        with open(private_key_path) as f:
            self.private_key = f.read()

        self._token: str | None = None
        self._token_expires_at: datetime | None = None
        self._refresh_lock: trio.Lock | None = None  # Lazy init, needs a running trio loop

    def _generate_jwt(self) -> str:
        """Generate a JWT for GitHub App authentication."""
        now = datetime.now(UTC)
        payload = {
            "iat": int(now.timestamp()) - 60,  # Issued 60s ago (clock skew)
            "exp": int((now + timedelta(minutes=10)).timestamp()),
            "iss": self.app_id,
        }
        return jwt.encode(payload, self.private_key, algorithm="RS256")

    async def _fetch_installation_token(self) -> tuple[str, datetime]:
        """Exchange JWT for an installation access token."""
        jwt_token = self._generate_jwt()

        async with httpx.AsyncClient() as client:
            response = await client.post(
                f"https://api.github.com/app/installations/{self.installation_id}/access_tokens",
                headers={
                    "Authorization": f"Bearer {jwt_token}",
                    "Accept": "application/vnd.github+json",
                    "X-GitHub-Api-Version": "2022-11-28",
                },
                timeout=30.0,
            )
            response.raise_for_status()

        data = response.json()
        token = data["token"]
        expires_at = datetime.fromisoformat(data["expires_at"].replace("Z", "+00:00"))

        return token, expires_at

    def _token_is_fresh(self) -> bool:
        return (
            self._token is not None
            and self._token_expires_at is not None
            and self._token_expires_at > datetime.now(UTC) + timedelta(minutes=5)
        )

    async def get_token(self) -> str:
        """Get a valid installation token, refreshing if needed."""
        if self._refresh_lock is None:
            self._refresh_lock = trio.Lock()

        if self._token_is_fresh():
            return self._token

        async with self._refresh_lock:
            # Another task may have refreshed while we waited
            if self._token_is_fresh():
                return self._token

            self._token, self._token_expires_at = await self._fetch_installation_token()
            return self._token


class GitHubClient:
    """Async GitHub REST API client with automatic rate limit handling.

    Supports both PAT and GitHub App authentication.
    """

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        repo: RepoInfo,
        token: str | None = None,
        app_auth: GitHubAppAuth | None = None,
    ):
        """Initialize the client.

        Args:
            repo: Repository every request is scoped to
            token: Personal access token (PAT) for authentication
            app_auth: GitHubAppAuth instance for App authentication
        """
        if token is None and app_auth is None:
            raise ValueError(
                "GitHub auth required. Set GITHUB_TOKEN or "
                "GITHUB_APP_ID + GITHUB_APP_PRIVATE_KEY_PATH + GITHUB_APP_INSTALLATION_ID"
            )

        self.repo = repo
        self.app_auth = app_auth
        self.pat_token = token
        self._auth_type = "app" if self.app_auth else "pat"
        self.client: httpx.AsyncClient | None = None
        self._request_count = 0

    @classmethod
    def from_config(cls, config: WorkflowConfig, repo: RepoInfo) -> GitHubClient:
        """Build a client from workflow config. App auth wins when fully set."""
        if config.has_app_auth:
            app_auth = GitHubAppAuth(
                config.app_id,
                config.app_private_key_path,
                config.app_installation_id,
            )
            return cls(repo, app_auth=app_auth)
        return cls(repo, token=config.token)

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            base_url=self.BASE_URL,
            headers={
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=30.0,
            http2=True,
        )
        return self

    async def __aexit__(self, *args):
        if self.client:
            await self.client.aclose()

    @property
    def auth_type(self) -> str:
        """Return the authentication type being used."""
        return self._auth_type

    @property
    def request_count(self) -> int:
        return self._request_count

    async def _get_auth_header(self) -> str:
        if self.app_auth:
            return f"Bearer {await self.app_auth.get_token()}"
        return f"Bearer {self.pat_token}"

    async def _handle_rate_limit(self, response: httpx.Response) -> bool:
        """Handle rate limiting. Returns True if request should be retried."""
        if response.status_code == 403:
            remaining = int(response.headers.get("X-RateLimit-Remaining", 1))
            if remaining == 0:
                reset_time = int(response.headers.get("X-RateLimit-Reset", 0))
                wait_seconds = max(reset_time - time.time(), 60)
                logger.warning(f"Rate limited (primary). Waiting {wait_seconds:.0f}s until reset...")
                await trio.sleep(wait_seconds + 1)
                return True

            if "Retry-After" in response.headers:
                retry_after = int(response.headers["Retry-After"])
                logger.warning(f"Rate limited (secondary). Waiting {retry_after}s...")
                await trio.sleep(retry_after)
                return True

        if response.status_code == 429:
            retry_after = int(response.headers.get("Retry-After", 60))
            logger.warning(f"Rate limited (secondary). Waiting {retry_after}s...")
            await trio.sleep(retry_after)
            return True

        return False

    async def _request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json: Any = None,
        max_retries: int = 3,
    ) -> httpx.Response:
        """Make request with automatic rate limit handling and retries."""
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        headers = {"Authorization": await self._get_auth_header()}

        for attempt in range(max_retries):
            response = await self.client.request(
                method, path, params=params, json=json, headers=headers
            )
            self._request_count += 1

            if await self._handle_rate_limit(response):
                continue

            if response.status_code >= 500:
                wait = 2**attempt
                logger.warning(f"Server error {response.status_code}. Retrying in {wait}s...")
                await trio.sleep(wait)
                continue

            response.raise_for_status()
            return response

        raise RuntimeError(f"Max retries exceeded for {method} {path}")

    async def get(self, path: str, params: dict | None = None) -> Any:
        """GET request returning JSON."""
        response = await self._request("GET", path, params=params)
        return response.json()

    async def post(self, path: str, json: Any) -> Any:
        response = await self._request("POST", path, json=json)
        return response.json()

    async def patch(self, path: str, json: Any) -> Any:
        response = await self._request("PATCH", path, json=json)
        return response.json()

    async def paginate_all(self, path: str, params: dict | None = None) -> list[dict]:
        """Fetch every page of a list endpoint."""
        params = params.copy() if params else {}
        params["per_page"] = PER_PAGE
        page = 1
        results: list[dict] = []

        while True:
            params["page"] = page
            response = await self._request("GET", path, params=params)
            items = response.json()
            results.extend(items)

            if len(items) < PER_PAGE:
                break

            page += 1

        return results

    # Reads

    async def get_pull_request(self, pr_number: int) -> dict:
        return await self.get(f"{self.repo.api_path}/pulls/{pr_number}")

    async def get_pr_files(self, pr_number: int) -> list[dict]:
        """Get files changed in a PR (with patches)."""
        return await self.paginate_all(f"{self.repo.api_path}/pulls/{pr_number}/files")

    async def get_review_comment(self, comment_id: int) -> dict:
        """Get an inline review comment."""
        return await self.get(f"{self.repo.api_path}/pulls/comments/{comment_id}")

    async def get_issue_comment(self, comment_id: int) -> dict:
        """Get a PR-level (issue) comment."""
        return await self.get(f"{self.repo.api_path}/issues/comments/{comment_id}")

    # Writes

    async def create_review(
        self,
        pr_number: int,
        commit_id: str,
        comments: list[dict],
        event: str = "COMMENT",
    ) -> dict:
        """Submit a review with inline comments in one call."""
        return await self.post(
            f"{self.repo.api_path}/pulls/{pr_number}/reviews",
            {"commit_id": commit_id, "event": event, "comments": comments},
        )

    async def create_review_comment(
        self,
        pr_number: int,
        commit_id: str,
        path: str,
        position: int,
        body: str,
    ) -> dict:
        return await self.post(
            f"{self.repo.api_path}/pulls/{pr_number}/comments",
            {"commit_id": commit_id, "path": path, "position": position, "body": body},
        )

    async def reply_to_review_comment(self, pr_number: int, comment_id: int, body: str) -> dict:
        """Reply in the thread of a top-level review comment."""
        return await self.post(
            f"{self.repo.api_path}/pulls/{pr_number}/comments/{comment_id}/replies",
            {"body": body},
        )

    async def update_review_comment(self, comment_id: int, body: str) -> dict:
        return await self.patch(
            f"{self.repo.api_path}/pulls/comments/{comment_id}",
            {"body": body},
        )

    async def create_issue_comment(self, issue_number: int, body: str) -> dict:
        return await self.post(
            f"{self.repo.api_path}/issues/{issue_number}/comments",
            {"body": body},
        )

    async def add_labels(self, issue_number: int, labels: list[str]) -> list[dict]:
        return await self.post(
            f"{self.repo.api_path}/issues/{issue_number}/labels",
            {"labels": labels},
        )
