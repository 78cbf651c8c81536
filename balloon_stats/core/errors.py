"""
Error kinds raised or reported while handling observations.

Decode-time errors are recoverable: the pipeline discards the offending
line and continues. ``UnsupportedUnit`` signals a malformed request and is
raised straight to the caller.
"""

from typing import Optional


class ObservationError(ValueError):
    """Base class for observation validation and conversion errors.

    Attributes:
        reason: Human-readable description of the problem
        raw: The offending raw text, if any
    """

    def __init__(self, reason: str, raw: Optional[str] = None):
        super().__init__(reason)
        self.reason = reason
        self.raw = raw


class MalformedRecord(ObservationError):
    """Wrong field count, bad timestamp or bad location/temperature syntax."""
    pass


class UnknownStation(ObservationError):
    """Station code outside the known set."""
    pass


class OutOfRangeTemperature(ObservationError):
    """Temperature below the floor of the station's native unit."""
    pass


class UnsupportedUnit(ObservationError):
    """Requested unit name is not a recognized conversion target."""
    pass
