"""Auth API router: operator login and logout via the session cookie."""

import logging
import secrets

from fastapi import APIRouter, HTTPException, Response, status

from staybook.auth.passwords import verify_password
from staybook.auth.session import create_session_token
from staybook.config import settings
from staybook.schemas.auth import LoginRequest, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=MessageResponse)
async def login(body: LoginRequest, response: Response) -> dict:
    """Check the operator credentials and set an httpOnly session cookie."""
    username_ok = secrets.compare_digest(body.username.encode("utf-8"), settings.auth_username.encode("utf-8"))
    password_ok = verify_password(body.password, settings.auth_password_hash)

    if not (username_ok and password_ok):
        logger.warning("Failed login attempt for %r", body.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(body.username),
        max_age=settings.session_expire_hours * 3600,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
        path="/",
    )
    logger.info("Operator %s logged in", body.username)
    return {"message": "Logged in successfully"}


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> dict:
    """Clear the session cookie."""
    response.delete_cookie(key=settings.session_cookie_name, path="/")
    return {"message": "Logged out successfully"}
