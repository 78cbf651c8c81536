"""
balloon_stats: Weather balloon observation processing.

Validates line-oriented balloon observations relayed by observatory
stations, normalizes them to canonical units (Kelvin, meters) and computes
per-station flight statistics.

Modules
-------
core
    Unit conversions, observation codec, sample generator, station aggregator
config
    Run configuration (report columns, generation, normalization)
pipeline
    Sorted streaming aggregation, sample file generation, normalization
utils
    Report output formatting
"""

__version__ = "0.1.0"
__author__ = "balloon_stats Contributors"

from balloon_stats.core import (
    Observation,
    ObservationError,
    SampleGenerator,
    StationAggregator,
    StatisticKind,
    decode_observation,
    encode_observation,
)
from balloon_stats.config import PipelineConfig, ReportConfig
from balloon_stats.pipeline import FlightStatsPipeline

__all__ = [
    "Observation",
    "ObservationError",
    "SampleGenerator",
    "StationAggregator",
    "StatisticKind",
    "decode_observation",
    "encode_observation",
    "PipelineConfig",
    "ReportConfig",
    "FlightStatsPipeline",
]
