"""
Decimal time formatting.

Converts decimal hours (23.6) into "HH:MM" clock strings (23:36), and
longitudes into the hour/minute offset from UTC they imply (15 deg per hour).
"""
import math
import re

import numpy as np

from ..config import DEGREES_PER_HOUR
from ..exceptions import InvalidObservationError

_CLOCK_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def split_decimal_hour(value):
    """
    Split a decimal hour value into whole hours and rounded minutes.

    Minutes are rounded half-to-even. A minute value that rounds up to 60
    is carried into the hour, and an hour that reaches 24 wraps to 0.

    Args:
        value: Decimal hours in [0, 24)

    Returns:
        (hours, minutes, day_carry) where day_carry is 1 if the clock
        wrapped past midnight, else 0
    """
    value = float(value)
    if math.isnan(value) or not 0 <= value < 24:
        raise InvalidObservationError(f"Decimal hour out of range [0, 24): {value}")

    hours = math.floor(value)
    minutes = round((value - hours) * 60)
    if minutes == 60:
        hours += 1
        minutes = 0

    day_carry = 0
    if hours == 24:
        hours = 0
        day_carry = 1

    return hours, minutes, day_carry


def format_decimal_hour(value: float) -> str:
    """Format decimal hours as a zero-padded "HH:MM" clock string."""
    hours, minutes, _ = split_decimal_hour(value)
    return f"{hours:02d}:{minutes:02d}"


def dec_time(values) -> list[str]:
    """
    Elementwise ``format_decimal_hour``.

    Accepts a scalar, a sequence or a numpy array and always returns a list
    with one clock string per input value.

    >>> dec_time([23.1, 23.5, 23.6])
    ['23:06', '23:30', '23:36']
    """
    arr = np.atleast_1d(np.asarray(values, dtype=float)).ravel()
    return [format_decimal_hour(v) for v in arr]


def parse_clock(text: str):
    """Parse an "HH:MM" clock string into (hours, minutes)."""
    match = _CLOCK_PATTERN.match(str(text))
    if match is None:
        raise InvalidObservationError(f"Not an HH:MM clock string: {text!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidObservationError(f"Clock value out of range: {text!r}")
    return hours, minutes


def longitude_offset(lon: float):
    """
    Time offset from UTC implied by longitude.

    East of Greenwich local solar time is ahead of UTC, west of it behind,
    so both returned components carry the sign of ``lon``.

    Args:
        lon: Longitude in decimal degrees, [-180, 180]

    Returns:
        (hours, minutes) signed integers
    """
    lon = float(lon)
    if math.isnan(lon) or not -180 <= lon <= 180:
        raise InvalidObservationError(f"Longitude out of range [-180, 180]: {lon}")

    hours, minutes, _ = split_decimal_hour(abs(lon) / DEGREES_PER_HOUR)
    sign = -1 if lon < 0 else 1
    return sign * hours, sign * minutes
