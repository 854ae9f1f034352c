"""Unit tests for the occupancy calendar layout."""

from datetime import date, timedelta

import pytest

from staybook.services.calendar import (
    MAX_YEAR,
    MIN_YEAR,
    build_calendar_month,
    calculate_booking_bars,
    generate_calendar_dates,
    shift_month,
)

# March 2025 starts on a Saturday, so its grid runs Sun 23 Feb .. Sat 5 Apr.
MARCH_2025 = generate_calendar_dates(2025, 3)


class TestGenerateCalendarDates:
    def test_six_full_weeks(self):
        assert len(MARCH_2025) == 42

    def test_starts_on_sunday_on_or_before_the_first(self):
        assert MARCH_2025[0] == date(2025, 2, 23)
        assert MARCH_2025[0].weekday() == 6
        assert MARCH_2025[-1] == date(2025, 4, 5)

    def test_dates_are_consecutive(self):
        assert all(b - a == timedelta(days=1) for a, b in zip(MARCH_2025, MARCH_2025[1:]))

    def test_month_starting_on_sunday(self):
        # June 2025 begins on a Sunday.
        assert generate_calendar_dates(2025, 6)[0] == date(2025, 6, 1)


class TestShiftMonth:
    def test_across_year_boundaries(self):
        assert shift_month(2025, 1, -1) == (2024, 12)
        assert shift_month(2024, 12, 1) == (2025, 1)
        assert shift_month(2025, 3, 0) == (2025, 3)


class TestCalculateBookingBars:
    """Bookings are cut into per-week bars and clipped to the grid."""

    def test_stay_within_one_week(self, make_booking):
        bars = calculate_booking_bars(
            MARCH_2025,
            [make_booking(check_in=date(2025, 3, 2), check_out=date(2025, 3, 5))],
        )
        assert len(bars) == 1
        bar = bars[0]
        assert (bar.week_row, bar.start_column, bar.row_span_length, bar.end_column) == (1, 1, 3, 3)

    def test_stay_across_a_week_boundary_splits(self, make_booking):
        # Thursday 6 March for six nights: Thu-Sat, then Sun-Tue.
        bars = calculate_booking_bars(
            MARCH_2025,
            [make_booking(check_in=date(2025, 3, 6), check_out=date(2025, 3, 12))],
        )
        assert [(b.week_row, b.start_column, b.row_span_length) for b in bars] == [(1, 5, 3), (2, 1, 3)]
        assert sum(b.row_span_length for b in bars) == 6

    def test_friday_check_in_wraps_to_sunday(self, make_booking):
        # Friday 7 March for six nights: Fri-Sat, then Sun-Wed.
        bars = calculate_booking_bars(
            MARCH_2025,
            [make_booking(check_in=date(2025, 3, 7), check_out=date(2025, 3, 13))],
        )
        assert [(b.week_row, b.start_column, b.row_span_length) for b in bars] == [(1, 6, 2), (2, 1, 4)]

    def test_stay_starting_before_the_grid_is_clipped(self, make_booking):
        bars = calculate_booking_bars(
            MARCH_2025,
            [make_booking(check_in=date(2025, 2, 20), check_out=date(2025, 2, 26))],
        )
        assert [(b.week_row, b.start_column, b.row_span_length) for b in bars] == [(0, 1, 3)]

    def test_stay_ending_after_the_grid_is_clipped(self, make_booking):
        bars = calculate_booking_bars(
            MARCH_2025,
            [make_booking(check_in=date(2025, 4, 4), check_out=date(2025, 4, 9))],
        )
        assert [(b.week_row, b.start_column, b.row_span_length) for b in bars] == [(5, 6, 2)]

    def test_stay_outside_the_grid_is_skipped(self, make_booking):
        bars = calculate_booking_bars(
            MARCH_2025,
            [make_booking(check_in=date(2025, 4, 10), check_out=date(2025, 4, 12))],
        )
        assert bars == []

    def test_stay_without_nights_is_skipped(self, make_booking):
        bars = calculate_booking_bars(
            MARCH_2025,
            [make_booking(check_in=date(2025, 3, 10), check_out=date(2025, 3, 10))],
        )
        assert bars == []

    def test_empty_grid(self, make_booking):
        assert calculate_booking_bars([], [make_booking()]) == []

    def test_wrapped_segment_stacks_in_its_second_row(self, make_booking):
        bars = calculate_booking_bars(
            MARCH_2025,
            [
                make_booking("BK0001", check_in=date(2025, 3, 7), check_out=date(2025, 3, 13)),
                make_booking("BK0002", room_id="SS1022", check_in=date(2025, 3, 10), check_out=date(2025, 3, 12)),
                make_booking("BK0003", room_id="SS715", check_in=date(2025, 3, 14), check_out=date(2025, 3, 15)),
            ],
        )
        placed = [(b.booking.id, b.week_row, b.start_column, b.slot) for b in bars]
        assert placed == [
            ("BK0001", 1, 6, 0),
            ("BK0001", 2, 1, 0),
            ("BK0002", 2, 2, 1),
            ("BK0003", 2, 6, 0),
        ]

    def test_overlapping_bars_stack_in_input_order(self, make_booking):
        bars = calculate_booking_bars(
            MARCH_2025,
            [
                make_booking("BK0001", check_in=date(2025, 3, 2), check_out=date(2025, 3, 5)),
                make_booking("BK0002", room_id="SS1022", check_in=date(2025, 3, 4), check_out=date(2025, 3, 6)),
                make_booking("BK0003", room_id="SS715", check_in=date(2025, 3, 6), check_out=date(2025, 3, 7)),
            ],
        )
        slots = {b.booking.id: b.slot for b in bars}
        assert slots == {"BK0001": 0, "BK0002": 1, "BK0003": 0}


class TestBuildCalendarMonth:
    def test_labels_and_navigation(self):
        month = build_calendar_month(2025, 1, [], today=date(2025, 1, 15))
        assert month.label == "January 2025"
        assert (month.previous.year, month.previous.month) == (2024, 12)
        assert (month.next.year, month.next.month) == (2025, 2)

    def test_day_flags(self):
        month = build_calendar_month(2025, 3, [], today=date(2025, 3, 10))
        days = {d.date: d for d in month.days}
        assert days[date(2025, 3, 10)].is_today
        assert days[date(2025, 3, 9)].is_past
        assert not days[date(2025, 3, 11)].is_past
        assert not days[date(2025, 2, 28)].in_current_month
        assert days[date(2025, 3, 31)].in_current_month

    def test_includes_bars(self, make_booking):
        month = build_calendar_month(2025, 3, [make_booking()], today=date(2025, 3, 1))
        assert [b.booking.id for b in month.bars] == ["BK0001"]

    @pytest.mark.parametrize(("year", "month"), [(MIN_YEAR, 1), (MAX_YEAR, 12)])
    def test_supported_year_bounds(self, year, month):
        grid = build_calendar_month(year, month, [], today=date(2025, 3, 1))
        assert len(grid.days) == 42

    @pytest.mark.parametrize(("year", "month"), [(MIN_YEAR - 1, 1), (MAX_YEAR + 1, 12), (2025, 0), (2025, 13)])
    def test_out_of_range_month_rejected(self, make_booking, year, month):
        with pytest.raises(ValueError):
            build_calendar_month(year, month, [make_booking()], today=date(2025, 3, 1))
