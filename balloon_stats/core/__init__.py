"""
Core observation handling.

This module provides:
- Unit conversions between Kelvin/Celsius/Fahrenheit and meters/kilometers/miles
- Observation decoding, validation and encoding
- Synthetic sample generation
- Per-station statistics aggregation
"""

from balloon_stats.core.errors import (
    ObservationError,
    MalformedRecord,
    UnknownStation,
    OutOfRangeTemperature,
    UnsupportedUnit,
)
from balloon_stats.core.observation import (
    Observation,
    DecodeSuccess,
    DecodeFailure,
    DecodeResult,
    decode_observation,
    encode_observation,
)
from balloon_stats.core.sampling import GeneratorState, SampleGenerator
from balloon_stats.core.aggregator import (
    StationAggregator,
    StatisticKind,
    StatisticColumn,
    STATISTIC_COLUMNS,
    render_report,
)

__all__ = [
    "ObservationError",
    "MalformedRecord",
    "UnknownStation",
    "OutOfRangeTemperature",
    "UnsupportedUnit",
    "Observation",
    "DecodeSuccess",
    "DecodeFailure",
    "DecodeResult",
    "decode_observation",
    "encode_observation",
    "GeneratorState",
    "SampleGenerator",
    "StationAggregator",
    "StatisticKind",
    "StatisticColumn",
    "STATISTIC_COLUMNS",
    "render_report",
]
