"""Operator session tokens: HS256 JWTs carried in the ``session`` cookie."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from staybook.config import settings

_TOKEN_TYPE = "session"


def create_session_token(username: str, expires_delta: timedelta | None = None) -> str:
    """Create a session token for the operator.

    Args:
        username: The authenticated operator, stored as ``sub``.
        expires_delta: Custom lifetime. Defaults to
            ``settings.session_expire_hours`` hours.

    Returns:
        Encoded JWT string.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(hours=settings.session_expire_hours))
    payload = {"sub": username, "iat": now, "exp": expire, "type": _TOKEN_TYPE}
    return jwt.encode(payload, settings.session_secret_key, algorithm=settings.session_algorithm)


def decode_session_token(token: str) -> dict:
    """Decode and verify a session token.

    Raises:
        jose.JWTError: If the token is invalid, expired, malformed or not a
            session token.
    """
    payload = jwt.decode(token, settings.session_secret_key, algorithms=[settings.session_algorithm])
    if payload.get("type") != _TOKEN_TYPE or not payload.get("sub"):
        raise JWTError("Not a session token")
    return payload
