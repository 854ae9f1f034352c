"""Pydantic v2 schemas for analytics and dashboard statistics."""

from decimal import Decimal

from pydantic import BaseModel

from staybook.schemas.booking import Booking


class PlatformShare(BaseModel):
    """Bookings and revenue contributed by one platform."""

    platform: str
    count: int
    revenue: Decimal
    percentage: float  # share of bookings, 0–100


class RoomOccupancy(BaseModel):
    """Nights sold and revenue for one room."""

    room: str
    bookings: int
    total_days: int
    revenue: Decimal
    avg_stay_duration: float


class RevenueTrendPoint(BaseModel):
    month: str
    revenue: Decimal


class TopRoom(BaseModel):
    room: str
    bookings: int
    revenue: Decimal


class RoomMonthStats(BaseModel):
    count: int
    revenue: Decimal


class AnalyticsResponse(BaseModel):
    """All dashboard reports computed over one filtered set of bookings.

    ``monthly_room_performance`` maps month label to room to stats; a room
    without bookings in a month is absent rather than zero.
    """

    total_bookings: int
    total_revenue: Decimal
    monthly_room_performance: dict[str, dict[str, RoomMonthStats]]
    platform_share: list[PlatformShare]
    room_occupancy: list[RoomOccupancy]
    revenue_trends: list[RevenueTrendPoint]
    top_rooms: list[TopRoom]


class PlatformBreakdown(BaseModel):
    platform: str
    count: int
    revenue: Decimal


class BookingStatsResponse(BaseModel):
    """Headline numbers for the bookings dashboard."""

    total_bookings: int
    total_revenue: Decimal
    platform_breakdown: list[PlatformBreakdown]
    recent_bookings: list[Booking]
