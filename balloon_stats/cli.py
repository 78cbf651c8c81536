"""
Command-line interface for balloon_stats.

Provides CLI commands for:
- Computing per-station flight statistics (flight-stats)
- Generating synthetic observation files (generate-sample)
- Normalizing observation files to one unit pair (normalize-observations)
"""

import argparse
import logging
import sys
from typing import List, Optional

from balloon_stats.config.manager import ConfigurationManager
from balloon_stats.config.settings import PipelineConfig
from balloon_stats.core.constants import (
    DEFAULT_BATCHES,
    DEFAULT_SAMPLES_PER_BATCH,
    DISTANCE_UNITS,
    TEMPERATURE_UNITS,
)
from balloon_stats.pipeline.stats import FlightStatsPipeline
from balloon_stats.pipeline.tools import generate_sample_file, normalize_file
from balloon_stats.utils.output import SUPPORTED_FORMATS, ReportFormatter


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger().setLevel(level)


def _load_config(path: Optional[str]) -> PipelineConfig:
    if not path:
        return PipelineConfig()
    loaded = ConfigurationManager().load_config(path)
    if not loaded.is_valid:
        raise ValueError(
            "Invalid configuration: " + "; ".join(loaded.validation_errors)
        )
    return loaded.config


def run_stats(args: argparse.Namespace) -> int:
    """Compute and print or save flight statistics."""
    config = _load_config(args.config)

    for name in ("min_temp", "max_temp", "mean_temp", "num_obs", "total_distance"):
        if getattr(args, name):
            setattr(config.report, name, True)
    config.verbose = config.verbose or args.verbose
    setup_logging(config.verbose)

    pipeline = FlightStatsPipeline(config)
    pipeline.run(args.input)

    formatter = ReportFormatter()
    if args.output:
        output_path = formatter.save(pipeline, args.output, format=args.format)
        print(f"Report saved to: {output_path}")
    else:
        sys.stdout.write(formatter.render(pipeline, format=args.format))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """flight-stats entry point."""
    parser = argparse.ArgumentParser(
        description="Flight statistics of weather balloons per relaying observatory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # All statistics
    flight-stats observations.txt

    # Only mean temperature and distance, verbose discards
    flight-stats observations.txt -e -d -v

    # JSON report
    flight-stats observations.txt -f json -o stats.json
        """,
    )
    parser.add_argument("input", help="Weather balloon observation file")
    parser.add_argument("-i", "--min_temp", action="store_true", help="Minimum Temperature")
    parser.add_argument("-a", "--max_temp", action="store_true", help="Maximum Temperature")
    parser.add_argument("-e", "--mean_temp", action="store_true", help="Mean Temperature")
    parser.add_argument("-n", "--num_obs", action="store_true", help="Number of Observations")
    parser.add_argument("-d", "--total_distance", action="store_true", help="Total Flight Distance")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output of parsing errors",
    )
    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to JSON or YAML configuration file",
    )
    parser.add_argument(
        "-f", "--format",
        type=str,
        choices=list(SUPPORTED_FORMATS),
        default="text",
        help="Report format",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        help="Report file path (stdout if omitted)",
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        return run_stats(args)
    except Exception as e:
        logging.exception(f"Flight statistics failed: {e}")
        return 1


def generate_main(argv: Optional[List[str]] = None) -> int:
    """generate-sample entry point."""
    parser = argparse.ArgumentParser(
        description="Generate a sample weather balloon observation file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # 500 batches of 500 samples
    generate-sample sample.txt

    # Small reproducible file
    generate-sample sample.txt -b 10 -s 100 --seed 42
        """,
    )
    parser.add_argument("output", help="Output file path")
    parser.add_argument(
        "-b", "--obs_batches",
        type=int,
        default=DEFAULT_BATCHES,
        help="Total number of batches",
    )
    parser.add_argument(
        "-s", "--samples_per_batch",
        type=int,
        default=DEFAULT_SAMPLES_PER_BATCH,
        help="Number of samples for every batch",
    )
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    config = PipelineConfig()
    config.generator.batches = args.obs_batches
    config.generator.samples_per_batch = args.samples_per_batch
    config.generator.seed = args.seed

    errors = config.validate()
    if errors:
        parser.error("; ".join(errors))

    try:
        generate_sample_file(args.output, config.generator)
    except Exception as e:
        logging.exception(f"Sample generation failed: {e}")
        return 1
    return 0


def normalize_main(argv: Optional[List[str]] = None) -> int:
    """normalize-observations entry point."""
    parser = argparse.ArgumentParser(
        description="Normalize distance and temperature units of an observation file",
    )
    parser.add_argument("input", help="Weather balloon observation file")
    parser.add_argument("output", help="Normalized output file")
    parser.add_argument(
        "-d", "--distance_unit",
        type=str,
        choices=list(DISTANCE_UNITS),
        default="meters",
        help="Normalized distance unit",
    )
    parser.add_argument(
        "-t", "--temperature_unit",
        type=str,
        choices=list(TEMPERATURE_UNITS),
        default="kelvin",
        help="Normalized temperature unit",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output of parsing errors",
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    config = PipelineConfig()
    config.normalize.distance_unit = args.distance_unit
    config.normalize.temperature_unit = args.temperature_unit

    try:
        normalize_file(args.input, args.output, config.normalize, verbose=args.verbose)
    except Exception as e:
        logging.exception(f"Normalization failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
