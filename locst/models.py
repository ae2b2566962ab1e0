"""Data model definitions for input adapters, conversion results and table output."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any


@dataclass(frozen=True)
class Observation:
    """One (longitude, local solar time) pair to convert."""

    longitude: float  # Decimal degrees, [-180, 180]
    local_solar_time: float | str  # Decimal hours in [0, 24) or "HH:MM"
    latitude: float | None = None  # Only set for grid input


@dataclass(frozen=True)
class UtcAnchor:
    """Nominal UTC day shared by every observation of one conversion call."""

    day: date  # Date component used to build the naive local instant
    instant: datetime | None  # Full UTC instant (tzinfo=utc) when one was supplied
    original: Any  # Caller's ``utc`` argument, verbatim

    @property
    def has_instant(self) -> bool:
        return self.instant is not None


@dataclass(frozen=True)
class ConversionResult:
    """Conversion of a single Observation."""

    longitude: float
    latitude: float | None
    local_solar_time_decimal: float
    local_solar_time_clock: str  # "HH:MM"
    naive_local_instant: datetime  # Nominal day + LocST clock, no tzinfo; NOT a civil time
    utc_instant: datetime  # tzinfo=utc
    original_utc_input: Any
    utc_difference: timedelta | None = None  # utc_instant - supplied instant
    local_civil_instant: datetime | None = None  # utc_instant in the requested zone
