"""
Pipeline configuration data structures.

Defines the configuration schema for flight statistics, sample generation
and unit normalization runs.

Example YAML input::

    report:
      mean_temp: true
      total_distance: true
    generator:
      batches: 100
      samples_per_batch: 200
      seed: 42
    normalize:
      distance_unit: kilometers
      temperature_unit: celsius
    verbose: false
"""

from dataclasses import dataclass, field, fields
from typing import Dict, Any, List, Optional
import json
import yaml

from balloon_stats.core.aggregator import StatisticKind
from balloon_stats.core.constants import (
    DEFAULT_BATCHES,
    DEFAULT_SAMPLES_PER_BATCH,
    DISTANCE_UNITS,
    SAMPLE_INVALID_PROBABILITY,
    TEMPERATURE_UNITS,
)


@dataclass
class ReportConfig:
    """Statistic columns to render.

    Leaving every flag False selects all columns.

    Attributes:
        min_temp: Minimum temperature column
        max_temp: Maximum temperature column
        mean_temp: Mean temperature column
        num_obs: Observation count column
        total_distance: Total flight distance column
    """
    min_temp: bool = False
    max_temp: bool = False
    mean_temp: bool = False
    num_obs: bool = False
    total_distance: bool = False

    def selected_kinds(self) -> List[StatisticKind]:
        """Enabled statistics in declaration order."""
        kinds = [kind for kind in StatisticKind if getattr(self, kind.value)]
        return kinds or list(StatisticKind)


@dataclass
class GeneratorConfig:
    """Sample file generation settings.

    Attributes:
        batches: Number of station batches
        samples_per_batch: Consecutive samples written per batch
        seed: Random seed (None for a fresh entropy source)
        invalid_probability: Chance of emitting an invalid line
    """
    batches: int = DEFAULT_BATCHES
    samples_per_batch: int = DEFAULT_SAMPLES_PER_BATCH
    seed: Optional[int] = None
    invalid_probability: float = SAMPLE_INVALID_PROBABILITY


@dataclass
class NormalizeConfig:
    """Target units for normalized output."""
    distance_unit: str = "meters"
    temperature_unit: str = "kelvin"


@dataclass
class PipelineConfig:
    """Complete configuration for a run.

    Attributes:
        report: Report column selection
        generator: Sample generation settings
        normalize: Normalization target units
        verbose: Log every discarded line
        temp_dir: Directory for the sorted temporary file (None = system default)
    """
    report: ReportConfig = field(default_factory=ReportConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    normalize: NormalizeConfig = field(default_factory=NormalizeConfig)
    verbose: bool = False
    temp_dir: Optional[str] = None

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "PipelineConfig":
        """Create PipelineConfig from a dictionary.

        Unknown keys inside a section are ignored.

        Args:
            config_dict: Configuration dictionary

        Returns:
            PipelineConfig instance
        """
        config_dict = config_dict or {}

        report_dict = config_dict.get("report", {})
        report = ReportConfig(**{
            f.name: bool(report_dict.get(f.name, False)) for f in fields(ReportConfig)
        })

        gen_dict = config_dict.get("generator", {})
        generator = GeneratorConfig(
            batches=gen_dict.get("batches", DEFAULT_BATCHES),
            samples_per_batch=gen_dict.get("samples_per_batch", DEFAULT_SAMPLES_PER_BATCH),
            seed=gen_dict.get("seed"),
            invalid_probability=gen_dict.get("invalid_probability", SAMPLE_INVALID_PROBABILITY),
        )

        norm_dict = config_dict.get("normalize", {})
        normalize = NormalizeConfig(
            distance_unit=norm_dict.get("distance_unit", "meters"),
            temperature_unit=norm_dict.get("temperature_unit", "kelvin"),
        )

        return cls(
            report=report,
            generator=generator,
            normalize=normalize,
            verbose=config_dict.get("verbose", False),
            temp_dir=config_dict.get("temp_dir"),
        )

    @classmethod
    def from_json(cls, json_path: str) -> "PipelineConfig":
        """Load configuration from a JSON file."""
        with open(json_path, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "PipelineConfig":
        """Load configuration from a YAML file."""
        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f)
        return cls.from_dict(config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Configuration as nested dictionary
        """
        return {
            "report": {
                "min_temp": self.report.min_temp,
                "max_temp": self.report.max_temp,
                "mean_temp": self.report.mean_temp,
                "num_obs": self.report.num_obs,
                "total_distance": self.report.total_distance,
            },
            "generator": {
                "batches": self.generator.batches,
                "samples_per_batch": self.generator.samples_per_batch,
                "seed": self.generator.seed,
                "invalid_probability": self.generator.invalid_probability,
            },
            "normalize": {
                "distance_unit": self.normalize.distance_unit,
                "temperature_unit": self.normalize.temperature_unit,
            },
            "verbose": self.verbose,
            "temp_dir": self.temp_dir,
        }

    def to_json(self, json_path: str, indent: int = 2) -> None:
        """Save configuration to JSON file."""
        with open(json_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=indent)

    def to_yaml(self, yaml_path: str) -> None:
        """Save configuration to YAML file."""
        with open(yaml_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def validate(self) -> list:
        """Validate configuration parameters.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if self.generator.batches < 1:
            errors.append("batches must be at least 1")
        if self.generator.samples_per_batch < 1:
            errors.append("samples_per_batch must be at least 1")
        if not 0.0 <= self.generator.invalid_probability <= 1.0:
            errors.append("invalid_probability must be between 0 and 1")

        if self.normalize.distance_unit not in DISTANCE_UNITS:
            errors.append(f"Invalid distance unit: {self.normalize.distance_unit}")
        if self.normalize.temperature_unit not in TEMPERATURE_UNITS:
            errors.append(f"Invalid temperature unit: {self.normalize.temperature_unit}")

        return errors
