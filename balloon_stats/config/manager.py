"""
Configuration Manager for balloon_stats runs.

Handles loading and validation of pipeline configurations from
dictionaries, JSON files or YAML files.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass

from balloon_stats.config.settings import PipelineConfig

logger = logging.getLogger(__name__)


@dataclass
class LoadedConfiguration:
    """Container for a loaded and validated configuration.

    Attributes:
        config: The pipeline configuration settings
        is_valid: Whether the configuration passed validation
        validation_errors: List of validation error messages
    """
    config: PipelineConfig
    is_valid: bool
    validation_errors: list


class ConfigurationManager:
    """Loads pipeline configurations and reports validation problems.

    Example:
        >>> manager = ConfigurationManager()
        >>> loaded = manager.load_config({"report": {"mean_temp": True}})
        >>> loaded.config.report.selected_kinds()
        [<StatisticKind.MEAN_TEMP: 'mean_temp'>]
    """

    def __init__(self, base_path: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            base_path: Base path for relative file references.
                      Defaults to current working directory.
        """
        self.base_path = Path(base_path) if base_path else Path.cwd()

    def load_config(
        self,
        config_source: Union[Dict[str, Any], str, Path],
    ) -> LoadedConfiguration:
        """Load and validate a configuration.

        Args:
            config_source: Configuration dictionary, JSON path, or YAML path

        Returns:
            LoadedConfiguration with the parsed config and validation result

        Raises:
            FileNotFoundError: If a configuration path does not exist
            ValueError: If the file extension is not supported
        """
        if isinstance(config_source, dict):
            config = PipelineConfig.from_dict(config_source)
        elif isinstance(config_source, (str, Path)):
            path = self.resolve_path(str(config_source))
            if not path.exists():
                raise FileNotFoundError(f"Configuration file not found: {path}")
            if path.suffix.lower() == '.json':
                config = PipelineConfig.from_json(str(path))
            elif path.suffix.lower() in ('.yaml', '.yml'):
                config = PipelineConfig.from_yaml(str(path))
            else:
                raise ValueError(f"Unsupported config file format: {path.suffix}")
            logger.info(f"Loaded configuration from {path}")
        else:
            raise TypeError(f"Invalid config source type: {type(config_source)}")

        validation_errors = config.validate()
        is_valid = len(validation_errors) == 0

        if not is_valid:
            for error in validation_errors:
                logger.warning(f"Configuration validation error: {error}")

        return LoadedConfiguration(
            config=config,
            is_valid=is_valid,
            validation_errors=validation_errors,
        )

    def resolve_path(self, path: str) -> Path:
        """Resolve a path relative to base_path.

        Args:
            path: Relative or absolute path string

        Returns:
            Resolved absolute Path
        """
        p = Path(path)
        if p.is_absolute():
            return p
        return (self.base_path / p).resolve()

    @staticmethod
    def create_example_config() -> Dict[str, Any]:
        """Create an example configuration dictionary.

        Returns:
            Example configuration with every section filled in
        """
        return {
            "report": {
                "min_temp": True,
                "max_temp": True,
                "mean_temp": True,
                "num_obs": True,
                "total_distance": True,
            },
            "generator": {
                "batches": 500,
                "samples_per_batch": 500,
                "seed": 42,
            },
            "normalize": {
                "distance_unit": "meters",
                "temperature_unit": "kelvin",
            },
            "verbose": False,
        }

    def save_example_config(self, output_path: str) -> None:
        """Save an example configuration file.

        Args:
            output_path: Path to save the example JSON
        """
        example = self.create_example_config()
        with open(output_path, 'w') as f:
            json.dump(example, f, indent=2)
        logger.info(f"Saved example configuration to {output_path}")
