"""Shared API dependencies, a single import point for all routers.

Routers import everything they need from one place::

    from staybook.api.deps import get_booking_store, require_session

Tests override :func:`get_booking_store` and :func:`get_image_store` through
``app.dependency_overrides``.
"""

from datetime import date
from functools import lru_cache

from fastapi import Depends, HTTPException, Query, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.auth.dependencies import require_session
from staybook.config import settings
from staybook.database import get_db
from staybook.schemas.booking import BookingFilter
from staybook.storage.images import LocalImageStore
from staybook.stores.base import BookingStore
from staybook.stores.sql import SqlBookingStore


async def get_booking_store(db: AsyncSession = Depends(get_db)) -> BookingStore:
    """Booking store bound to the request's database session."""
    return SqlBookingStore(db)


@lru_cache
def get_image_store() -> LocalImageStore:
    """Image store configured from the application settings."""
    return LocalImageStore(
        root=settings.image_storage_dir,
        signing_key=settings.session_secret_key,
        expires_seconds=settings.image_url_expire_seconds,
        max_bytes=settings.image_max_bytes,
        algorithm=settings.session_algorithm,
    )


def get_booking_filter(
    platform: str | None = Query(None, description="Platform, or 'All'"),
    room_id: str | None = Query(None, description="Room, or 'All'"),
    start_date: date | None = Query(None, description="Stays checking in on or after this date"),
    end_date: date | None = Query(None, description="Stays checking out on or before this date"),
) -> BookingFilter:
    """Build the booking filter from query parameters, rejecting unknown platforms or rooms."""
    try:
        return BookingFilter.from_query(platform, room_id, start_date, end_date)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.errors(include_url=False, include_context=False, include_input=False),
        ) from None


__all__ = [
    "get_db",
    "get_booking_filter",
    "get_booking_store",
    "get_image_store",
    "require_session",
]
