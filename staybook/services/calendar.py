"""Occupancy calendar layout.

A month is shown as a 6 x 7 grid starting on the Sunday on or before the 1st.
Each booking becomes one bar per week row its visible nights touch. Bars in a
row are given vertical slots in input order so that overlapping stays stack
instead of covering each other.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, timedelta

from staybook.schemas.booking import Booking
from staybook.schemas.calendar import BookingBar, CalendarDay, CalendarMonthResponse, MonthRef
from staybook.services.pricing import nights

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
WEEK_ROWS = 6
GRID_DAYS = DAYS_PER_WEEK * WEEK_ROWS

_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Years whose six-week grid and neighbouring months fit in datetime.date.
MIN_YEAR = 2
MAX_YEAR = 9998


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months forward (or back when negative)."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def generate_calendar_dates(year: int, month: int) -> list[date]:
    """The 42 consecutive dates shown for a month, starting on a Sunday.

    Raises:
        ValueError: If the month is not between 1 and 12 or the year is
            outside ``MIN_YEAR``..``MAX_YEAR``.
    """
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValueError(f"year must be between {MIN_YEAR} and {MAX_YEAR}")
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")
    first = date(year, month, 1)
    # date.weekday() is Monday=0; the grid starts on Sunday.
    lead = (first.weekday() + 1) % DAYS_PER_WEEK
    start = first - timedelta(days=lead)
    return [start + timedelta(days=i) for i in range(GRID_DAYS)]


def _assign_slots(bars: list[BookingBar]) -> list[BookingBar]:
    """Give each bar the lowest slot free of column overlap within its row."""
    taken: dict[tuple[int, int], list[tuple[int, int]]] = {}
    placed: list[BookingBar] = []
    for bar in bars:
        slot = 0
        while any(
            start <= bar.end_column and bar.start_column <= end
            for start, end in taken.get((bar.week_row, slot), [])
        ):
            slot += 1
        taken.setdefault((bar.week_row, slot), []).append((bar.start_column, bar.end_column))
        placed.append(bar.model_copy(update={"slot": slot}))
    return placed


def calculate_booking_bars(calendar_dates: Sequence[date], bookings: Sequence[Booking]) -> list[BookingBar]:
    """Lay out the visible part of each booking as per-week bars.

    Stays are clipped to the grid; a stay that began before the first visible
    day starts at column 1 of the first row. Bookings with no nights or no
    overlap with the grid produce nothing.
    """
    if not calendar_dates:
        return []
    window_start = calendar_dates[0]
    window_end = calendar_dates[-1] + timedelta(days=1)

    bars: list[BookingBar] = []
    for booking in bookings:
        if nights(booking.check_in, booking.check_out) == 0:
            logger.debug("Skipping booking %s with an empty stay", booking.id)
            continue

        visible_start = max(booking.check_in, window_start)
        visible_end = min(booking.check_out, window_end)
        if visible_start >= visible_end:
            continue

        index = (visible_start - window_start).days
        remaining = (visible_end - visible_start).days
        while remaining > 0:
            column = index % DAYS_PER_WEEK
            span = min(remaining, DAYS_PER_WEEK - column)
            bars.append(
                BookingBar(
                    booking=booking,
                    start_column=column + 1,
                    row_span_length=span,
                    week_row=index // DAYS_PER_WEEK,
                )
            )
            index += span
            remaining -= span

    return _assign_slots(bars)


def build_calendar_month(
    year: int,
    month: int,
    bookings: Sequence[Booking],
    today: date,
) -> CalendarMonthResponse:
    dates = generate_calendar_dates(year, month)
    days = [
        CalendarDay(
            date=day,
            in_current_month=day.month == month,
            is_today=day == today,
            is_past=day < today,
        )
        for day in dates
    ]
    prev_year, prev_month = shift_month(year, month, -1)
    next_year, next_month = shift_month(year, month, 1)

    return CalendarMonthResponse(
        year=year,
        month=month,
        label=f"{_MONTH_NAMES[month - 1]} {year}",
        days=days,
        bars=calculate_booking_bars(dates, bookings),
        previous=MonthRef(year=prev_year, month=prev_month),
        next=MonthRef(year=next_year, month=next_month),
    )
