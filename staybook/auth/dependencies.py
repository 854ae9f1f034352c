"""FastAPI dependency that protects operator routes."""

import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from staybook.auth.session import decode_session_token
from staybook.config import settings

logger = logging.getLogger(__name__)

# Optional bearer; the browser dashboard sends the cookie instead
_bearer_scheme_optional = HTTPBearer(auto_error=False)


async def require_session(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme_optional),
) -> str:
    """Return the operator's username from the session cookie or a Bearer token.

    The cookie is tried first. A cookie that no longer decodes does not hide
    a valid Bearer token sent with it.

    Raises:
        HTTPException 401: If no token is present or none of them is valid.
    """
    tokens = [request.cookies.get(settings.session_cookie_name)]
    if credentials is not None:
        tokens.append(credentials.credentials)
    tokens = [token for token in tokens if token]

    if not tokens:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    for token in tokens:
        try:
            payload = decode_session_token(token)
        except JWTError:
            continue
        return payload["sub"]

    logger.warning("Rejected invalid session token")
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Session expired or invalid",
        headers={"WWW-Authenticate": "Bearer"},
    )
