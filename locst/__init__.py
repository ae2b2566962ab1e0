"""
LocST Python utilities.

This package converts Local Solar Time (LocST), as reported per pixel in
MODIS viewtime rasters, back to UTC and optionally to a civil time zone:
- ``solar``: decimal time formatting and the LocST -> UTC conversion
- ``data``: viewtime raster reading/cropping and product filename parsing
- ``utils``: Inspection and debugging helpers

The conversion itself is a plain in-memory calculation; the scripts in
``solar`` wrap it as a command-line utility.
"""

from .solar.dec_time import dec_time, format_decimal_hour
from .solar.local_solar_time import local_solar_time_to_utc

__all__ = ["dec_time", "format_decimal_hour", "local_solar_time_to_utc"]
