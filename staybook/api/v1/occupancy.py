"""Occupancy calendar API router."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from staybook.api.deps import get_booking_store, require_session
from staybook.schemas.calendar import CalendarMonthResponse
from staybook.services.calendar import MAX_YEAR, MIN_YEAR, build_calendar_month
from staybook.stores.base import BookingStore, booking_sequence

router = APIRouter(
    prefix="/api/v1/occupancy",
    tags=["occupancy"],
    dependencies=[Depends(require_session)],
)


@router.get("/calendar", response_model=CalendarMonthResponse)
async def get_calendar(
    year: int | None = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    month: int | None = Query(None, ge=1, le=12),
    store: BookingStore = Depends(get_booking_store),
) -> CalendarMonthResponse:
    """Month grid with one bar per booked week segment.

    Defaults to the current month. Bars stack in booking creation order.
    """
    today = date.today()
    year = year or today.year
    month = month or today.month

    bookings = sorted(await store.list_bookings(), key=lambda b: booking_sequence(b.id))
    return build_calendar_month(year, month, bookings, today)
