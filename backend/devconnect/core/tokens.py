"""Access Tokens: sign and verify caller identity with python-jose.

Invariants:
    - Payload shape is {"user": {"id": "<uuid>"}, "exp": <unix ts>}
    - decode_access_token never returns a partial identity: valid id or InvalidTokenError
    - No IO, no clock other than the expiry stamp at signing time
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from devconnect.core.errors import InvalidTokenError


def create_access_token(
    user_id: str, secret: str, algorithm: str = "HS256", expires_in: int = 360_000,
) -> str:
    """Sign a token carrying the caller's user id."""
    expire = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
    payload = {"user": {"id": str(user_id)}, "exp": expire}
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> str:
    """Return the caller id encoded in token, or raise InvalidTokenError."""
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError:
        raise InvalidTokenError()
    user = payload.get("user")
    if not isinstance(user, dict) or not user.get("id"):
        raise InvalidTokenError()
    return str(user["id"])
