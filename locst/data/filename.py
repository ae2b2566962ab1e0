"""
MODIS product filename parsing
Recovers the nominal UTC acquisition day (and time, for swath products)
from names such as MOD11_L2.A2018019.1350.006.2018020082352.hdf
"""
import re
from datetime import datetime, timedelta, timezone

from ..exceptions import FilenameParseError

# A{YYYY}{DDD}. followed by a capture time {HHMM} (swath) or a tile id h{H}v{V}
_ACQUISITION_PATTERN = re.compile(r"\.A(\d{4})(\d{3})\.(?:(\d{4})|h\d{2}v\d{2})(?:\.|$)")


def parse_product_filename(name: str):
    """
    Extract the acquisition date/time from a MODIS product filename.

    Args:
        name: Product filename (directory components are ignored)

    Returns:
        Timezone-aware UTC datetime when the name embeds a capture time,
        otherwise a date (tiled daily products)
    """
    match = _ACQUISITION_PATTERN.search("." + str(name).rsplit("/", 1)[-1])
    if match is None:
        raise FilenameParseError(f"No A{{YYYY}}{{DDD}} acquisition stamp in filename: {name}")

    year, doy, hhmm = match.groups()
    year, doy = int(year), int(doy)
    try:
        day = datetime(year, 1, 1) + timedelta(days=doy - 1)
    except (ValueError, OverflowError) as e:
        raise FilenameParseError(f"Invalid acquisition year in filename: {name}") from e
    if doy < 1 or day.year != year:
        raise FilenameParseError(f"Invalid day of year {doy:03d} for {year} in filename: {name}")

    if hhmm is None:
        return day.date()

    hour, minute = int(hhmm[:2]), int(hhmm[2:])
    if hour > 23 or minute > 59:
        raise FilenameParseError(f"Invalid capture time {hhmm} in filename: {name}")
    return day.replace(hour=hour, minute=minute, tzinfo=timezone.utc)
