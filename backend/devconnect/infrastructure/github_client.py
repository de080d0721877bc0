"""GitHub Client: fetches the first public repositories of a user.

Invariants:
    - Single attempt, no retry
    - Non-200 upstream status → ResourceNotFoundError("Github profile") (404)
    - Transport failure or timeout → UpstreamError (503)
    - Response body returned as decoded JSON, unmodified

Design Decisions:
    - httpx.AsyncClient with an injectable transport: tests swap in MockTransport
    - Client credentials sent as HTTP basic auth only when both are configured
"""

import logging
from typing import Any

import httpx

from devconnect.core.errors import ResourceNotFoundError, UpstreamError

logger = logging.getLogger(__name__)


class GithubClient:
    """Thin async wrapper over the GitHub REST API."""

    REPOS_PER_PAGE = 5

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        client_id: str = "",
        client_secret: str = "",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.auth = (client_id, client_secret) if client_id and client_secret else None
        self.timeout = timeout_seconds
        self.transport = transport

    async def get_user_repos(self, username: str) -> Any:
        """First five repositories for username, ordered by creation date ascending."""
        url = f"{self.base_url}/users/{username}/repos"
        params = {
            "per_page": self.REPOS_PER_PAGE,
            "sort": "created",
            "direction": "asc",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
                headers={"user-agent": "devconnect-api"},
            ) as client:
                response = await client.get(url, params=params, auth=self.auth)
        except httpx.HTTPError as e:
            logger.error(f"GitHub request failed for {username}: {e}")
            raise UpstreamError("GitHub", type(e).__name__)

        if response.status_code != 200:
            logger.info(
                f"GitHub returned {response.status_code} for {username}",
            )
            raise ResourceNotFoundError("Github profile", username)
        return response.json()
