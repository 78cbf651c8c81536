"""
Observation record codec.

An observation line has four pipe-delimited fields::

    TIMESTAMP|X,Y|TEMP|STATION
    2014-12-31T13:44|10,5|243|AU

Raw values are expressed in the station's native units. Decoding converts
them to the canonical form (Kelvin, meters) held by :class:`Observation`;
encoding converts back to any requested unit pair.

Usage
-----
>>> result = decode_observation("2014-12-31T13:44|10,5|243|AU")
>>> result.ok
True
>>> encode_observation(result.observation, "meters", "kelvin")
'2014-12-31T13:44|10000,5000|516|AU'
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple, Union

from balloon_stats.core.constants import (
    FIELD_SEPARATOR,
    LOCATION_SEPARATOR,
    MIN_CELSIUS,
    MIN_FAHRENHEIT,
    STATION_CODES,
    TIMESTAMP_FORMAT,
    TIMESTAMP_LENGTH,
    native_units,
)
from balloon_stats.core.errors import (
    MalformedRecord,
    ObservationError,
    OutOfRangeTemperature,
    UnknownStation,
)
from balloon_stats.core.units import (
    distance_from_meters,
    distance_to_meters,
    temperature_from_kelvin,
    temperature_to_kelvin,
    validate_distance_unit,
    validate_temperature_unit,
)

Location = Tuple[int, int]

_UNSIGNED_INT = re.compile(r"[0-9]+")
_SIGNED_INT = re.compile(r"[-+]?[0-9]+")
_TIMESTAMP_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}")

# Lowest raw reading accepted per signed native temperature unit
_TEMPERATURE_FLOORS = {
    "celsius": MIN_CELSIUS,
    "fahrenheit": MIN_FAHRENHEIT,
}

_UNIT_SYMBOLS = {
    "kelvin": "°K",
    "celsius": "°C",
    "fahrenheit": "°F",
}


@dataclass(frozen=True)
class Observation:
    """A single balloon reading in canonical units.

    Attributes:
        timestamp: UTC instant, minute resolution
        location: (x, y) position in meters
        temperature: Temperature in Kelvin
        station: Two-letter code of the relaying station
    """
    timestamp: datetime
    location: Location
    temperature: int
    station: str

    @classmethod
    def from_line(cls, raw: str) -> "Observation":
        """Decode a raw line, raising the validation error on failure.

        Raises:
            ObservationError: If the line fails validation
        """
        result = decode_observation(raw)
        if not result.ok:
            raise result.error
        return result.observation

    def encode(
        self,
        distance_unit: Optional[str] = None,
        temperature_unit: Optional[str] = None,
    ) -> str:
        """Encode this observation; see :func:`encode_observation`."""
        return encode_observation(self, distance_unit, temperature_unit)

    def __str__(self) -> str:
        return encode_observation(self)


@dataclass(frozen=True)
class DecodeSuccess:
    """Successful decode carrying the canonical observation."""
    observation: Observation
    ok = True


@dataclass(frozen=True)
class DecodeFailure:
    """Failed decode carrying the error kind and the offending text."""
    error: ObservationError
    raw: str
    ok = False

    @property
    def reason(self) -> str:
        return self.error.reason


DecodeResult = Union[DecodeSuccess, DecodeFailure]


def _parse_timestamp(field: str) -> datetime:
    if len(field) != TIMESTAMP_LENGTH:
        raise MalformedRecord(f"Incorrect timestamp string size: {field}")
    if not _TIMESTAMP_SHAPE.fullmatch(field):
        raise MalformedRecord(f"Incorrect timestamp format: {field}")
    try:
        parsed = datetime.strptime(field, TIMESTAMP_FORMAT)
    except ValueError:
        raise MalformedRecord(f"Incorrect timestamp format: {field}")
    return parsed.replace(tzinfo=timezone.utc)


def _parse_location(field: str) -> Location:
    parts = field.split(LOCATION_SEPARATOR)
    if len(parts) != 2 or not all(_UNSIGNED_INT.fullmatch(p) for p in parts):
        raise MalformedRecord(f"Incorrect location format: {field}")
    return int(parts[0]), int(parts[1])


def _parse_temperature(field: str, unit: str) -> int:
    symbol = _UNIT_SYMBOLS[unit]
    pattern = _SIGNED_INT if unit in _TEMPERATURE_FLOORS else _UNSIGNED_INT
    if not pattern.fullmatch(field):
        raise MalformedRecord(f"Incorrect temperature value ({symbol}): {field}")

    value = int(field)
    floor = _TEMPERATURE_FLOORS.get(unit)
    if floor is not None and value < floor:
        raise OutOfRangeTemperature(
            f"Temperature below {floor}{symbol}: {field}"
        )
    return value


def _decode(raw: str) -> Observation:
    fields = raw.split(FIELD_SEPARATOR)
    if len(fields) != 4:
        raise MalformedRecord(
            f"Incorrect number of fields: {len(fields)} instead of 4"
        )
    timestamp_field, location_field, temperature_field, station = fields

    timestamp = _parse_timestamp(timestamp_field)
    x, y = _parse_location(location_field)

    if station not in STATION_CODES:
        raise UnknownStation(f"Invalid observatory code: {station}")

    temperature_unit, distance_unit = native_units(station)
    temperature = _parse_temperature(temperature_field, temperature_unit)

    return Observation(
        timestamp=timestamp,
        location=(
            distance_to_meters(x, distance_unit),
            distance_to_meters(y, distance_unit),
        ),
        temperature=temperature_to_kelvin(temperature, temperature_unit),
        station=station,
    )


def decode_observation(raw: str) -> DecodeResult:
    """
    Validate a raw line and convert it to canonical units.

    Checks run in order: field count, timestamp length and format, location
    syntax, station code, then temperature syntax and range for the
    station's native unit.

    Parameters
    ----------
    raw : str
        A single record without its trailing newline

    Returns
    -------
    DecodeResult
        ``DecodeSuccess`` with the observation, or ``DecodeFailure`` with
        the error (its ``reason`` is human-readable) and the raw text
    """
    try:
        return DecodeSuccess(_decode(raw))
    except ObservationError as e:
        e.raw = raw
        return DecodeFailure(error=e, raw=raw)


def encode_observation(
    observation: Observation,
    distance_unit: Optional[str] = None,
    temperature_unit: Optional[str] = None,
) -> str:
    """Serialize an observation in the requested units.

    A unit left as None takes the station's native unit (kelvin/kilometers
    for stations without a native mapping).

    Args:
        observation: Canonical observation
        distance_unit: "meters", "kilometers" or "miles"
        temperature_unit: "kelvin", "celsius" or "fahrenheit"

    Returns:
        ``TIMESTAMP|X,Y|TEMP|STATION`` text without a newline

    Raises:
        UnsupportedUnit: If an explicit unit name is not recognized
    """
    if distance_unit is not None:
        validate_distance_unit(distance_unit)
    if temperature_unit is not None:
        validate_temperature_unit(temperature_unit)

    if distance_unit is None or temperature_unit is None:
        native_temperature, native_distance = native_units(observation.station)
        temperature_unit = temperature_unit or native_temperature
        distance_unit = distance_unit or native_distance

    x, y = observation.location
    coords = LOCATION_SEPARATOR.join(
        str(distance_from_meters(v, distance_unit)) for v in (x, y)
    )
    temperature = temperature_from_kelvin(observation.temperature, temperature_unit)

    return FIELD_SEPARATOR.join([
        observation.timestamp.strftime(TIMESTAMP_FORMAT),
        coords,
        str(temperature),
        observation.station,
    ])
