"""Booking aggregation for the analytics and stats dashboards.

Every function takes an already-filtered sequence of bookings and returns
fresh report objects. Bookings are never mutated, and a malformed payment
counts as zero revenue instead of aborting the report.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from staybook.schemas.analytics import (
    AnalyticsResponse,
    BookingStatsResponse,
    PlatformBreakdown,
    PlatformShare,
    RevenueTrendPoint,
    RoomMonthStats,
    RoomOccupancy,
    TopRoom,
)
from staybook.schemas.booking import Booking
from staybook.services.pricing import nights, parse_amount

# Fixed English abbreviations so labels do not depend on the process locale.
_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

MonthKey = tuple[int, int]


def month_key(day: date) -> MonthKey:
    return day.year, day.month


def month_label(day: date) -> str:
    """Label a month as ``"Mon YYYY"``, e.g. ``"Mar 2025"``."""
    return f"{_MONTH_ABBR[day.month - 1]} {day.year}"


def booking_revenue(booking: Booking) -> Decimal:
    return parse_amount(booking.payment)


def total_revenue(bookings: Sequence[Booking]) -> Decimal:
    return sum((booking_revenue(b) for b in bookings), Decimal(0))


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


def _group_by_platform(bookings: Sequence[Booking]) -> dict[str, tuple[int, Decimal]]:
    groups: dict[str, tuple[int, Decimal]] = {}
    for booking in bookings:
        count, revenue = groups.get(booking.platform.value, (0, Decimal(0)))
        groups[booking.platform.value] = (count + 1, revenue + booking_revenue(booking))
    return groups


def platform_share(bookings: Sequence[Booking]) -> list[PlatformShare]:
    """Bookings per platform with their share of the filtered input.

    Platforms appear in order of first occurrence.
    """
    total = len(bookings)
    return [
        PlatformShare(
            platform=platform,
            count=count,
            revenue=revenue,
            percentage=(count / total) * 100 if total > 0 else 0.0,
        )
        for platform, (count, revenue) in _group_by_platform(bookings).items()
    ]


def room_occupancy(bookings: Sequence[Booking]) -> list[RoomOccupancy]:
    """Nights sold, revenue and average stay per room."""
    stats: dict[str, dict] = {}
    for booking in bookings:
        room = stats.setdefault(
            booking.room_id.value,
            {"bookings": 0, "total_days": 0, "revenue": Decimal(0)},
        )
        room["bookings"] += 1
        room["total_days"] += nights(booking.check_in, booking.check_out)
        room["revenue"] += booking_revenue(booking)

    return [
        RoomOccupancy(
            room=room_id,
            bookings=room["bookings"],
            total_days=room["total_days"],
            revenue=room["revenue"],
            avg_stay_duration=room["total_days"] / room["bookings"] if room["bookings"] > 0 else 0.0,
        )
        for room_id, room in stats.items()
    ]


def revenue_trend(bookings: Sequence[Booking]) -> list[RevenueTrendPoint]:
    """Revenue per check-in month, oldest month first."""
    revenue_by_month: dict[MonthKey, Decimal] = defaultdict(Decimal)
    for booking in bookings:
        revenue_by_month[month_key(booking.check_in)] += booking_revenue(booking)

    return [
        RevenueTrendPoint(month=month_label(date(year, month, 1)), revenue=revenue)
        for (year, month), revenue in sorted(revenue_by_month.items())
    ]


def top_rooms(bookings: Sequence[Booking], limit: int | None = None) -> list[TopRoom]:
    """Rooms ranked by revenue, highest first. Ties keep first-seen order."""
    stats: dict[str, tuple[int, Decimal]] = {}
    for booking in bookings:
        count, revenue = stats.get(booking.room_id.value, (0, Decimal(0)))
        stats[booking.room_id.value] = (count + 1, revenue + booking_revenue(booking))

    ranked = sorted(
        (TopRoom(room=room, bookings=count, revenue=revenue) for room, (count, revenue) in stats.items()),
        key=lambda r: r.revenue,
        reverse=True,
    )
    return ranked if limit is None else ranked[:limit]


def monthly_room_performance(bookings: Sequence[Booking]) -> dict[str, dict[str, RoomMonthStats]]:
    """Bookings and revenue per (check-in month, room).

    Months are ordered chronologically. Rooms without bookings in a month are
    left out of that month's mapping.
    """
    cells: dict[MonthKey, dict[str, list]] = defaultdict(dict)
    for booking in bookings:
        cell = cells[month_key(booking.check_in)].setdefault(booking.room_id.value, [0, Decimal(0)])
        cell[0] += 1
        cell[1] += booking_revenue(booking)

    return {
        month_label(date(year, month, 1)): {
            room: RoomMonthStats(count=count, revenue=revenue) for room, (count, revenue) in rooms.items()
        }
        for (year, month), rooms in sorted(cells.items())
    }


def build_analytics(bookings: Sequence[Booking]) -> AnalyticsResponse:
    return AnalyticsResponse(
        total_bookings=len(bookings),
        total_revenue=total_revenue(bookings),
        monthly_room_performance=monthly_room_performance(bookings),
        platform_share=platform_share(bookings),
        room_occupancy=room_occupancy(bookings),
        revenue_trends=revenue_trend(bookings),
        top_rooms=top_rooms(bookings),
    )


def booking_stats(bookings: Sequence[Booking], recent: int = 5) -> BookingStatsResponse:
    """Totals, platform breakdown and the most recently entered bookings."""
    breakdown = [
        PlatformBreakdown(platform=platform, count=count, revenue=revenue)
        for platform, (count, revenue) in _group_by_platform(bookings).items()
    ]
    recent_bookings = sorted(bookings, key=lambda b: b.date, reverse=True)[:recent]

    return BookingStatsResponse(
        total_bookings=len(bookings),
        total_revenue=total_revenue(bookings),
        platform_breakdown=breakdown,
        recent_bookings=recent_bookings,
    )
