"""
File-level tools: synthetic sample generation and unit normalization.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np

from balloon_stats.config.settings import GeneratorConfig, NormalizeConfig
from balloon_stats.core.constants import MAXIMUM_LINE_LENGTH, STATION_CODES
from balloon_stats.core.observation import DecodeFailure, decode_observation
from balloon_stats.core.sampling import GeneratorState, SampleGenerator
from balloon_stats.core.units import validate_distance_unit, validate_temperature_unit
from balloon_stats.pipeline.ordering import check_disk_space

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def generate_sample_file(
    output_path: PathLike,
    config: Optional[GeneratorConfig] = None,
) -> int:
    """Write a synthetic observation file.

    Each batch picks a random station and writes ``samples_per_batch``
    consecutive one-minute samples for it. A station picked again later
    continues its walk where it stopped.

    Args:
        output_path: File to write
        config: Generation settings

    Returns:
        Number of lines written
    """
    config = config or GeneratorConfig()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    total = config.batches * config.samples_per_batch
    check_disk_space(total * MAXIMUM_LINE_LENGTH, output_path.parent)

    rng = np.random.default_rng(config.seed)
    generator = SampleGenerator(rng=rng, invalid_probability=config.invalid_probability)
    batch_order = rng.choice(STATION_CODES, size=config.batches)
    states: Dict[str, GeneratorState] = {}

    with open(output_path, 'w', encoding='utf-8') as f:
        for station in batch_order:
            station = str(station)
            state = states.get(station)
            for _ in range(config.samples_per_batch):
                line, state = generator.sample(station, state)
                f.write(line + "\n")
            states[station] = state

    logger.info(f"Wrote {total} sample lines in {config.batches} batches to {output_path}")
    return total


def normalize_file(
    input_path: PathLike,
    output_path: PathLike,
    config: Optional[NormalizeConfig] = None,
    verbose: bool = False,
) -> int:
    """Rewrite every valid observation in one distance/temperature unit pair.

    Invalid lines are dropped.

    Args:
        input_path: Observation file to read
        output_path: Normalized file to write
        config: Target units
        verbose: Log each discarded line

    Returns:
        Number of lines written

    Raises:
        UnsupportedUnit: If a configured unit is not recognized
        FileNotFoundError: If ``input_path`` does not exist
    """
    config = config or NormalizeConfig()
    validate_distance_unit(config.distance_unit)
    validate_temperature_unit(config.temperature_unit)

    input_path = Path(input_path)
    output_path = Path(output_path)
    if not input_path.exists():
        raise FileNotFoundError(f"Observation file not found: {input_path}")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    check_disk_space(input_path.stat().st_size, output_path.parent)

    written = 0
    discarded = 0
    with open(input_path, 'r', encoding='utf-8', errors='replace') as src, \
            open(output_path, 'w', encoding='utf-8') as dest:
        for line in src:
            raw = line.rstrip("\r\n")
            result = decode_observation(raw)
            if isinstance(result, DecodeFailure):
                discarded += 1
                if verbose:
                    logger.debug(f"{result.reason} => {raw}")
                continue
            dest.write(
                result.observation.encode(config.distance_unit, config.temperature_unit)
                + "\n"
            )
            written += 1

    logger.info(
        f"Normalized {written} observations to {config.distance_unit}/"
        f"{config.temperature_unit}, discarded {discarded} lines"
    )
    return written
