"""Stay pricing: night counts, nightly date ranges and totals.

Shared by the booking endpoints (which store the computed ``payment`` and
``total_nights``), the invoice builder and the reports. Nothing here raises
on a bad range except :func:`validate_stay`, which exists for input
validation.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from decimal import Decimal

_SECONDS_PER_DAY = 86400
_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
_LEADING_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")

Rate = Decimal | float | int | str


class InvalidStayError(ValueError):
    """Raised when check-out is not strictly after check-in."""


def parse_amount(value: Rate | None) -> Decimal:
    """Parse a currency value, treating anything unparsable as zero.

    Strings may carry currency symbols or digit grouping (``"₹3,000"``);
    every character other than digits, ``.`` and ``-`` is dropped first,
    then the longest leading number is read (``"1-2"`` is 1, ``"1.2.3"``
    is 1.2).
    """
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal(0)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return Decimal(0)
        return Decimal(str(value))

    match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", value))
    if match is None:
        return Decimal(0)
    return Decimal(match.group())


def nights(check_in: date | datetime, check_out: date | datetime) -> int:
    """Number of nights between two dates, rounding partial days up.

    Returns 0 when ``check_out`` is not after ``check_in``.
    """
    seconds = (check_out - check_in).total_seconds()
    if seconds <= 0:
        return 0
    return math.ceil(seconds / _SECONDS_PER_DAY)


def validate_stay(check_in: date, check_out: date) -> int:
    """Return the number of nights, raising :class:`InvalidStayError` if there are none."""
    count = nights(check_in, check_out)
    if count == 0:
        raise InvalidStayError("check_out must be after check_in")
    return count


def date_range(check_in: date, check_out: date) -> list[date]:
    """Dates of each night of the stay, starting at ``check_in``."""
    return [check_in + timedelta(days=i) for i in range(nights(check_in, check_out))]


def _normalise_rates(custom_daily_rates: Mapping[date | str, Rate]) -> dict[date, Decimal]:
    rates: dict[date, Decimal] = {}
    for key, rate in custom_daily_rates.items():
        night = date.fromisoformat(key) if isinstance(key, str) else key
        rates[night] = parse_amount(rate)
    return rates


def total_amount(
    check_in: date,
    check_out: date,
    rate_per_night: Rate | None = None,
    custom_daily_rates: Mapping[date | str, Rate] | None = None,
) -> Decimal:
    """Total price of a stay.

    Each night uses its custom daily rate when one is set for that date,
    otherwise ``rate_per_night``, otherwise zero. Without custom rates the
    result is simply ``rate_per_night * nights``.
    """
    base_rate = parse_amount(rate_per_night)

    if not custom_daily_rates:
        return base_rate * nights(check_in, check_out)

    rates = _normalise_rates(custom_daily_rates)
    total = Decimal(0)
    for night in date_range(check_in, check_out):
        total += rates.get(night, base_rate)
    return total
