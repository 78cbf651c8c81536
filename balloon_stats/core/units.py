"""
Temperature and distance unit conversions.

All conversions work on integers and follow fixed rounding rules:

- Kelvin to Fahrenheit rounds up, Fahrenheit to Kelvin rounds down, so a
  Fahrenheit round trip does not always return the starting Kelvin value.
- Meters to kilometers/miles truncate; the reverse direction is exact.

Functions
---------
kelvin_to_celsius, celsius_to_kelvin
kelvin_to_fahrenheit, fahrenheit_to_kelvin
meters_to_kilometers, kilometers_to_meters
meters_to_miles, miles_to_meters
temperature_from_kelvin, temperature_to_kelvin
    Dispatch on a temperature unit name
distance_from_meters, distance_to_meters
    Dispatch on a distance unit name
"""

import math

from balloon_stats.core.constants import (
    DISTANCE_UNITS,
    KELVIN_OFFSET,
    METERS_PER_KILOMETER,
    METERS_PER_MILE,
    TEMPERATURE_UNITS,
)
from balloon_stats.core.errors import UnsupportedUnit


# =============================================================================
# Temperature
# =============================================================================

def kelvin_to_celsius(kelvin: int) -> int:
    """Convert Kelvin to Celsius (whole-degree offset)."""
    return kelvin - KELVIN_OFFSET


def celsius_to_kelvin(celsius: int) -> int:
    """Convert Celsius to Kelvin (whole-degree offset)."""
    return celsius + KELVIN_OFFSET


def kelvin_to_fahrenheit(kelvin: int) -> int:
    """Convert Kelvin to Fahrenheit, rounding up."""
    return math.ceil(kelvin * 1.8 - 459.67)


def fahrenheit_to_kelvin(fahrenheit: int) -> int:
    """Convert Fahrenheit to Kelvin, rounding down."""
    return math.floor((fahrenheit + 459.67) * 5.0 / 9.0)


# =============================================================================
# Distance
# =============================================================================

def meters_to_kilometers(meters: int) -> int:
    return meters // METERS_PER_KILOMETER


def kilometers_to_meters(kilometers: int) -> int:
    return kilometers * METERS_PER_KILOMETER


def meters_to_miles(meters: int) -> int:
    return meters // METERS_PER_MILE


def miles_to_meters(miles: int) -> int:
    return miles * METERS_PER_MILE


# =============================================================================
# Dispatch by unit name
# =============================================================================

_FROM_KELVIN = {
    "kelvin": lambda k: k,
    "celsius": kelvin_to_celsius,
    "fahrenheit": kelvin_to_fahrenheit,
}

_TO_KELVIN = {
    "kelvin": lambda t: t,
    "celsius": celsius_to_kelvin,
    "fahrenheit": fahrenheit_to_kelvin,
}

_FROM_METERS = {
    "meters": lambda m: m,
    "kilometers": meters_to_kilometers,
    "miles": meters_to_miles,
}

_TO_METERS = {
    "meters": lambda d: d,
    "kilometers": kilometers_to_meters,
    "miles": miles_to_meters,
}


def validate_temperature_unit(unit: str) -> str:
    """Return ``unit`` unchanged if it is a known temperature unit.

    Raises:
        UnsupportedUnit: If the name is not one of TEMPERATURE_UNITS
    """
    if unit not in TEMPERATURE_UNITS:
        raise UnsupportedUnit(f"Invalid temperature unit: {unit}")
    return unit


def validate_distance_unit(unit: str) -> str:
    """Return ``unit`` unchanged if it is a known distance unit.

    Raises:
        UnsupportedUnit: If the name is not one of DISTANCE_UNITS
    """
    if unit not in DISTANCE_UNITS:
        raise UnsupportedUnit(f"Invalid distance unit: {unit}")
    return unit


def temperature_from_kelvin(kelvin: int, unit: str) -> int:
    """
    Express a canonical Kelvin temperature in ``unit``.

    Parameters
    ----------
    kelvin : int
        Temperature in Kelvin
    unit : str
        One of "kelvin", "celsius", "fahrenheit"

    Returns
    -------
    int
        Temperature in the requested unit
    """
    return _FROM_KELVIN[validate_temperature_unit(unit)](kelvin)


def temperature_to_kelvin(value: int, unit: str) -> int:
    """Convert a temperature expressed in ``unit`` to canonical Kelvin."""
    return _TO_KELVIN[validate_temperature_unit(unit)](value)


def distance_from_meters(meters: int, unit: str) -> int:
    """Express a canonical distance in meters in ``unit``."""
    return _FROM_METERS[validate_distance_unit(unit)](meters)


def distance_to_meters(value: int, unit: str) -> int:
    """Convert a distance expressed in ``unit`` to canonical meters."""
    return _TO_METERS[validate_distance_unit(unit)](value)
