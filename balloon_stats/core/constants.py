"""
Station tables and fixed values for balloon observation processing.

Canonical units are Kelvin for temperature and meters for distance.
"""

from datetime import datetime, timezone
from typing import Dict, Tuple

# =============================================================================
# Stations
# =============================================================================

# Two-letter ISO 3166 codes of the relay observatories
STATION_CODES: Tuple[str, ...] = (
    "AR", "AU", "BR", "CA", "DE", "FR", "IT", "MX", "NZ", "US",
)

# Native (temperature, distance) units per station
STATION_UNITS: Dict[str, Tuple[str, str]] = {
    "AU": ("celsius", "kilometers"),
    "US": ("fahrenheit", "miles"),
    "FR": ("kelvin", "meters"),
}

# Units assumed for stations missing from STATION_UNITS
DEFAULT_UNITS: Tuple[str, str] = ("kelvin", "kilometers")

# =============================================================================
# Units
# =============================================================================

TEMPERATURE_UNITS: Tuple[str, ...] = ("kelvin", "celsius", "fahrenheit")
DISTANCE_UNITS: Tuple[str, ...] = ("meters", "kilometers", "miles")

# Offset between Kelvin and Celsius, truncated to whole degrees
KELVIN_OFFSET = 273

# Meters per kilometer / per (truncated) statute mile
METERS_PER_KILOMETER = 1000
METERS_PER_MILE = 1609

# Lowest accepted raw reading for signed native units
MIN_CELSIUS = -273
MIN_FAHRENHEIT = -459

# =============================================================================
# Record format
# =============================================================================

FIELD_SEPARATOR = "|"
LOCATION_SEPARATOR = ","
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M"
TIMESTAMP_LENGTH = 16
INVALID_LINE = "invalid line"

# Upper bound of an encoded line in bytes, used for disk preflight
MAXIMUM_LINE_LENGTH = 40

# =============================================================================
# Sample generation
# =============================================================================

SAMPLE_START_TIME = datetime(2011, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
SAMPLE_END_TIME = datetime(2015, 1, 31, 23, 59, 59, tzinfo=timezone.utc)

# Inclusive coordinate range in meters
SAMPLE_DISTANCE_RANGE: Tuple[int, int] = (0, 5_000_000)

# Inclusive temperature range in Kelvin
SAMPLE_TEMPERATURE_RANGE: Tuple[int, int] = (213, 300)

SAMPLE_STEP_SECONDS = 60
SAMPLE_LOCATION_DRIFT = 500
SAMPLE_TEMPERATURE_DRIFT = 1
SAMPLE_INVALID_PROBABILITY = 0.01

DEFAULT_BATCHES = 500
DEFAULT_SAMPLES_PER_BATCH = 500


def native_units(station: str) -> Tuple[str, str]:
    """Return the (temperature, distance) units a station reports in."""
    return STATION_UNITS.get(station, DEFAULT_UNITS)
