"""Request dependencies: settings, caller authentication, GitHub client.

Invariants:
    - Missing x-auth-token → UnauthenticatedError (401) before any DB access
    - Bad signature / expired / malformed payload → InvalidTokenError (401)
    - The caller id is a string; ownership checks compare strings
"""

from fastapi import Depends, Header

from devconnect.config import Settings, get_settings
from devconnect.core.errors import UnauthenticatedError
from devconnect.core.tokens import decode_access_token
from devconnect.infrastructure.github_client import GithubClient


async def get_current_user_id(
    x_auth_token: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> str:
    """Decode the caller's id from the x-auth-token header."""
    if not x_auth_token:
        raise UnauthenticatedError()
    return decode_access_token(
        x_auth_token, settings.jwt_secret, settings.jwt_algorithm,
    )


def get_github_client(settings: Settings = Depends(get_settings)) -> GithubClient:
    return GithubClient(
        base_url=settings.github_api_url,
        client_id=settings.github_client_id,
        client_secret=settings.github_client_secret,
        timeout_seconds=settings.github_timeout_seconds,
    )
