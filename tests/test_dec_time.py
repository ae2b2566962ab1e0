import numpy as np
import pytest

from locst.exceptions import InvalidObservationError
from locst.solar.dec_time import (
    dec_time,
    format_decimal_hour,
    longitude_offset,
    parse_clock,
    split_decimal_hour,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (23.5, "23:30"),
        (23.6, "23:36"),
        (0.5, "00:30"),
        (0.0, "00:00"),
        (5.0, "05:00"),
        (9.05, "09:03"),
        (12.25, "12:15"),
    ],
)
def test_format_decimal_hour(value, expected):
    assert format_decimal_hour(value) == expected


@pytest.mark.parametrize("value", [24.0, 25.3, -0.1, float("nan")])
def test_format_decimal_hour_rejects_values_outside_the_day(value):
    with pytest.raises(InvalidObservationError):
        format_decimal_hour(value)

    with pytest.raises(ValueError):
        format_decimal_hour(value)


def test_minute_rounding_to_sixty_carries_into_the_hour():
    assert split_decimal_hour(10.9999) == (11, 0, 0)
    assert format_decimal_hour(10.9999) == "11:00"


def test_minute_rounding_past_midnight_wraps_and_flags_the_day():
    assert split_decimal_hour(23.999) == (0, 0, 1)
    assert format_decimal_hour(23.999) == "00:00"


def test_dec_time_is_elementwise():
    assert dec_time([23.1, 23.5, 23.6]) == ["23:06", "23:30", "23:36"]
    assert dec_time(np.array([0.25, 13.0])) == ["00:15", "13:00"]
    assert dec_time(1.25) == ["01:15"]


def test_parse_clock():
    assert parse_clock("23:36") == (23, 36)
    assert parse_clock("7:05") == (7, 5)


@pytest.mark.parametrize("text", ["24:00", "12:60", "1236", "ab:cd", ""])
def test_parse_clock_rejects_malformed_strings(text):
    with pytest.raises(InvalidObservationError):
        parse_clock(text)


def test_longitude_offset_east():
    # 137.8628 / 15 = 9.1908... -> 9h 11m
    assert longitude_offset(137.8628) == (9, 11)
    assert longitude_offset(7.5) == (0, 30)
    assert longitude_offset(180) == (12, 0)


def test_longitude_offset_west_is_negative():
    assert longitude_offset(-75.0) == (-5, 0)
    assert longitude_offset(-137.8628) == (-9, -11)


def test_longitude_offset_at_greenwich():
    assert longitude_offset(0.0) == (0, 0)


@pytest.mark.parametrize("lon", [180.5, -181, float("nan")])
def test_longitude_offset_rejects_out_of_range(lon):
    with pytest.raises(InvalidObservationError):
        longitude_offset(lon)
