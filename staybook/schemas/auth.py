"""Pydantic v2 request/response schemas for authentication endpoints."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Operator username/password login."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
