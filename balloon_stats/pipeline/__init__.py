"""
Pipeline orchestration for observation files.

This module provides:
- FlightStatsPipeline: Sorted streaming aggregation into per-station stats
- sorted_observation_lines: External sort into a temporary file
- generate_sample_file / normalize_file: File-level tools
"""

from balloon_stats.pipeline.ordering import (
    OrderingError,
    InsufficientDiskSpace,
    check_disk_space,
    sort_lines_to_file,
    sorted_observation_lines,
)
from balloon_stats.pipeline.stats import FlightStatsPipeline
from balloon_stats.pipeline.tools import generate_sample_file, normalize_file

__all__ = [
    "OrderingError",
    "InsufficientDiskSpace",
    "check_disk_space",
    "sort_lines_to_file",
    "sorted_observation_lines",
    "FlightStatsPipeline",
    "generate_sample_file",
    "normalize_file",
]
