"""Analytics API router: dashboard reports over filtered bookings."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from staybook.api.deps import get_booking_filter, get_booking_store, require_session
from staybook.schemas.analytics import AnalyticsResponse
from staybook.schemas.booking import BookingFilter
from staybook.services.analytics import build_analytics
from staybook.stores.base import BookingStore

router = APIRouter(
    prefix="/api/v1/analytics",
    tags=["analytics"],
    dependencies=[Depends(require_session)],
)


@router.get("", response_model=AnalyticsResponse)
async def get_analytics(
    booking_filter: BookingFilter = Depends(get_booking_filter),
    store: BookingStore = Depends(get_booking_store),
) -> AnalyticsResponse:
    """Compute every dashboard report over the bookings matching the filters.

    Percentages in ``platform_share`` are relative to the filtered set, not
    to all bookings.
    """
    if (
        booking_filter.start_date is not None
        and booking_filter.end_date is not None
        and booking_filter.end_date < booking_filter.start_date
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must not be before start_date",
        )

    bookings = await store.list_bookings(booking_filter)
    return build_analytics(bookings)
