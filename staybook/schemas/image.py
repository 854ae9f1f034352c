"""Pydantic v2 schemas for guest ID image links."""

from pydantic import BaseModel


class SignedUrlResponse(BaseModel):
    signed_url: str
    expires_in: int
