"""
Local Solar Time -> UTC conversion.

Every input shape (viewtime grid, decimal hours, "HH:MM" strings) is turned
into a sequence of Observations by an adapter, and all observations go
through ``convert_observation``:

    offset      = longitude / 15, as signed (hours, minutes)
    naive local = nominal UTC day + LocST clock (no time zone meaning)
    UTC         = naive local - offset, normalised into [00:00, 24:00)
                  with the whole-day overflow applied to the date
"""
import logging
from dataclasses import asdict, replace
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from numbers import Real
from zoneinfo import ZoneInfo

import numpy as np
import pandas as pd

from ..config import MINUTES_PER_DAY
from ..data.viewtime import ViewtimeGrid
from ..exceptions import (
    InvalidInputShapeError,
    InvalidTimeZoneError,
    InvalidUtcInputError,
    MissingLongitudeError
)
from ..models import ConversionResult, Observation, UtcAnchor
from .dec_time import longitude_offset, parse_clock, split_decimal_hour

logger = logging.getLogger(__name__)

TABLE_COLUMNS = [
    "longitude",
    "latitude",
    "local_solar_time_decimal",
    "local_solar_time_clock",
    "naive_local_instant",
    "utc_instant",
    "original_utc_input",
    "utc_difference",
    "local_civil_instant",
]


def resolve_utc(utc) -> UtcAnchor:
    """
    Interpret the caller's nominal UTC day.

    Dates and "YYYY-MM-DD" strings give a bare day. Datetimes (naive ones
    are taken as UTC), numpy datetime64 values and "YYYY-MM-DD HH:MM[:SS]"
    strings give a full instant.
    """
    value = utc
    if isinstance(value, np.datetime64):
        value = pd.Timestamp(value)
    if value is pd.NaT:
        raise InvalidUtcInputError("utc must not be NaT")

    if isinstance(value, datetime):
        if isinstance(value, pd.Timestamp):
            value = value.to_pydatetime()
        if value.tzinfo is None:
            instant = value.replace(tzinfo=timezone.utc)
        else:
            instant = value.astimezone(timezone.utc)
        return UtcAnchor(day=instant.date(), instant=instant, original=utc)

    if isinstance(value, date):
        return UtcAnchor(day=value, instant=None, original=utc)

    if isinstance(value, str):
        text = value.strip()
        try:
            return UtcAnchor(day=date.fromisoformat(text), instant=None, original=utc)
        except ValueError:
            pass
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidUtcInputError(
                f"utc string must be 'YYYY-MM-DD' or 'YYYY-MM-DD HH:MM', got {utc!r}"
            ) from e
        return replace(resolve_utc(parsed), original=utc)

    raise InvalidUtcInputError(
        f"utc must be a date, a datetime or a 'YYYY-MM-DD' string, got {type(utc).__name__}"
    )


def resolve_zone(tz, zone_provider=ZoneInfo):
    """Look up a civil time zone; tzinfo objects are passed through."""
    if tz is None or isinstance(tz, tzinfo):
        return tz
    try:
        return zone_provider(tz)
    except (KeyError, ValueError) as e:
        raise InvalidTimeZoneError(f"Unknown time zone: {tz!r}") from e


def _as_list(values, name):
    if isinstance(values, (str, bytes)) or np.isscalar(values):
        return [values]
    arr = np.asarray(values, dtype=object)
    if arr.ndim != 1:
        raise InvalidInputShapeError(
            f"{name} must be a scalar or a 1-D sequence, got shape {arr.shape}"
        )
    return list(arr)


def _is_number(value):
    return isinstance(value, Real) and not isinstance(value, (bool, np.bool_))


def _pair_with_longitude(values, lon):
    """Recycle whichever side has a single element; otherwise pair index-wise."""
    lons = _as_list(lon, "lon")
    if not all(_is_number(v) for v in lons):
        raise InvalidInputShapeError("lon must be numeric decimal degrees")

    lons = [float(v) for v in lons]
    n = len(values)
    if len(lons) == n:
        return values, lons
    if len(lons) == 1:
        return values, lons * n
    if n == 1:
        return values * len(lons), lons
    raise InvalidInputShapeError(
        f"Cannot pair {len(lons)} longitudes with {n} local solar time values"
    )


class DecimalInput:
    """Decimal-hour LocST values paired with longitudes."""

    def __init__(self, values, lon):
        values = _as_list(values, "local_solar_time")
        if not all(_is_number(v) for v in values):
            raise InvalidInputShapeError("DecimalInput values must all be numeric")

        self.values, self.lon = _pair_with_longitude([float(v) for v in values], lon)
        for value, longitude in zip(self.values, self.lon):
            split_decimal_hour(value)
            longitude_offset(longitude)

    def __len__(self):
        return len(self.values)

    def observations(self):
        for longitude, value in zip(self.lon, self.values):
            yield Observation(longitude=longitude, local_solar_time=value)


class ClockStringInput:
    """Clock-string ("HH:MM") LocST values paired with longitudes."""

    def __init__(self, values, lon):
        values = _as_list(values, "local_solar_time")
        if not all(isinstance(v, str) for v in values):
            raise InvalidInputShapeError("ClockStringInput values must all be strings")

        self.values, self.lon = _pair_with_longitude([v.strip() for v in values], lon)
        for value, longitude in zip(self.values, self.lon):
            parse_clock(value)
            longitude_offset(longitude)

    def __len__(self):
        return len(self.values)

    def observations(self):
        for longitude, value in zip(self.lon, self.values):
            yield Observation(longitude=longitude, local_solar_time=value)


def as_source(local_solar_time, lon=None):
    """
    Pick the input adapter for ``local_solar_time``.

    Grids carry their own coordinates; everything else needs ``lon``.
    """
    if isinstance(local_solar_time, ViewtimeGrid):
        if lon is not None:
            logger.warning("Ignoring lon: viewtime grid carries its own coordinates")
        return local_solar_time

    if isinstance(local_solar_time, (DecimalInput, ClockStringInput)):
        return local_solar_time

    if lon is None:
        raise MissingLongitudeError(
            "Please provide longitude as decimal degrees or use a viewtime grid for LocST"
        )

    values = _as_list(local_solar_time, "local_solar_time")
    if not values:
        raise InvalidInputShapeError("local_solar_time is empty")
    if all(isinstance(v, str) for v in values):
        return ClockStringInput(values, lon)
    if all(_is_number(v) for v in values):
        return DecimalInput(values, lon)
    raise InvalidInputShapeError(
        "local_solar_time must be a viewtime grid, decimal hours or 'HH:MM' strings"
    )


def convert_observation(observation: Observation, anchor: UtcAnchor, zone=None) -> ConversionResult:
    """Convert one observation to UTC (and to ``zone`` when given)."""
    if isinstance(observation.local_solar_time, str):
        local_hour, local_minute = parse_clock(observation.local_solar_time)
        decimal = local_hour + local_minute / 60
        day_carry = 0
    else:
        decimal = float(observation.local_solar_time)
        local_hour, local_minute, day_carry = split_decimal_hour(decimal)

    offset_hours, offset_minutes = longitude_offset(observation.longitude)

    local_day = anchor.day + timedelta(days=day_carry)
    naive_local = datetime.combine(local_day, time(local_hour, local_minute))

    total_minutes = local_hour * 60 + local_minute - offset_hours * 60 - offset_minutes
    day_delta, utc_minutes = divmod(total_minutes, MINUTES_PER_DAY)
    utc_hour, utc_minute = divmod(utc_minutes, 60)
    utc_instant = datetime.combine(
        local_day + timedelta(days=day_delta),
        time(utc_hour, utc_minute),
        tzinfo=timezone.utc
    )

    return ConversionResult(
        longitude=observation.longitude,
        latitude=observation.latitude,
        local_solar_time_decimal=decimal,
        local_solar_time_clock=f"{local_hour:02d}:{local_minute:02d}",
        naive_local_instant=naive_local,
        utc_instant=utc_instant,
        original_utc_input=anchor.original,
        utc_difference=utc_instant - anchor.instant if anchor.has_instant else None,
        local_civil_instant=utc_instant.astimezone(zone) if zone is not None else None
    )


def convert(local_solar_time, utc, lon=None, tz=None, zone_provider=ZoneInfo):
    """
    Convert local solar time to UTC, one ConversionResult per observation.

    Args:
        local_solar_time: ViewtimeGrid, decimal hour(s) or "HH:MM" string(s)
        utc: Nominal UTC day (date or 'YYYY-MM-DD') or full UTC instant
        lon: Longitude(s) in decimal degrees; required unless a grid is given.
             A single longitude is repeated for every LocST value.
        tz: Optional civil time zone identifier (e.g. "Australia/ACT") or tzinfo
        zone_provider: Time-zone database lookup, identifier -> tzinfo

    Returns:
        list of ConversionResult
    """
    anchor = resolve_utc(utc)
    source = as_source(local_solar_time, lon)
    zone = resolve_zone(tz, zone_provider)
    return _convert_all(source, anchor, zone)


def _convert_all(source, anchor, zone):
    results = [convert_observation(obs, anchor, zone) for obs in source.observations()]
    logger.info(f"Converted {len(results)} local solar time observations to UTC")
    return results


def results_to_frame(results, grid=False, instant=False, zone=None):
    """
    Tabulate conversion results.

    ``latitude`` is kept for grid input only, ``utc_difference`` only when
    a full UTC instant was supplied, ``local_civil_instant`` only when a
    zone was requested.
    """
    frame = pd.DataFrame([asdict(r) for r in results], columns=TABLE_COLUMNS)
    frame["naive_local_instant"] = pd.to_datetime(frame["naive_local_instant"])
    frame["utc_instant"] = pd.to_datetime(frame["utc_instant"], utc=True)

    dropped = []
    if not grid:
        dropped.append("latitude")
    if instant:
        frame["utc_difference"] = pd.to_timedelta(frame["utc_difference"])
    else:
        dropped.append("utc_difference")
    if zone is not None:
        frame["local_civil_instant"] = frame["utc_instant"].dt.tz_convert(zone)
    else:
        dropped.append("local_civil_instant")

    return frame.drop(columns=dropped)


def local_solar_time_to_utc(local_solar_time, utc, lon=None, tz=None, zone_provider=ZoneInfo):
    """
    Calculate UTC (and optionally civil local time) from local solar time.

    >>> local_solar_time_to_utc(23.6, "2018-01-19", lon=137.8628)["utc_instant"][0]
    Timestamp('2018-01-19 14:25:00+0000', tz='UTC')

    Returns:
        pandas DataFrame, one row per observation (see TABLE_COLUMNS)
    """
    anchor = resolve_utc(utc)
    source = as_source(local_solar_time, lon)
    zone = resolve_zone(tz, zone_provider)
    return results_to_frame(
        _convert_all(source, anchor, zone),
        grid=isinstance(source, ViewtimeGrid),
        instant=anchor.has_instant,
        zone=zone
    )
