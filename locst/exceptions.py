"""Error kinds raised by the conversion. All are raised before any row is produced."""


class LocSTError(Exception):
    """Base class for local solar time conversion errors."""


class MissingLongitudeError(LocSTError):
    """Non-grid LocST input was given without longitude."""


class InvalidUtcInputError(LocSTError):
    """The ``utc`` argument is neither a date nor a full instant."""


class InvalidInputShapeError(LocSTError):
    """LocST input is not a grid, numbers or clock strings, or lengths cannot broadcast."""


class InvalidObservationError(LocSTError, ValueError):
    """A single LocST or longitude value lies outside its domain."""


class FilenameParseError(LocSTError, ValueError):
    """Product filename does not carry an ``A{YYYY}{DDD}`` acquisition stamp."""


class InvalidTimeZoneError(LocSTError):
    """The requested civil time zone is unknown to the time-zone database."""
