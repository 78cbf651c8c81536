"""
Configuration management for balloon_stats runs.

This module provides:
- PipelineConfig: Data class for run parameters
- ConfigurationManager: Loading and validation of configurations
"""

from balloon_stats.config.settings import (
    PipelineConfig,
    ReportConfig,
    GeneratorConfig,
    NormalizeConfig,
)
from balloon_stats.config.manager import ConfigurationManager, LoadedConfiguration

__all__ = [
    "PipelineConfig",
    "ReportConfig",
    "GeneratorConfig",
    "NormalizeConfig",
    "ConfigurationManager",
    "LoadedConfiguration",
]
