"""
Flight statistics pipeline.

Streams observation lines through the decoder and routes each valid
observation to its station's aggregator. Lines are expected in sorted
order (see :mod:`balloon_stats.pipeline.ordering`); :meth:`run` takes care
of sorting a file before streaming it.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from balloon_stats.config.settings import PipelineConfig
from balloon_stats.core.aggregator import StationAggregator, render_report
from balloon_stats.core.observation import DecodeFailure, decode_observation
from balloon_stats.pipeline.ordering import sorted_observation_lines

logger = logging.getLogger(__name__)


class FlightStatsPipeline:
    """Aggregates per-station statistics from a stream of raw lines.

    Example:
        >>> pipeline = FlightStatsPipeline()
        >>> pipeline.consume(["2014-12-31T13:44|10,5|243|AU"])
        >>> pipeline.aggregators["AU"].count
        1
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()
        self.aggregators: Dict[str, StationAggregator] = StationAggregator.for_all_stations()
        self.accepted = 0
        self.discarded = 0

    def consume(self, lines: Iterable[str]) -> None:
        """Decode and aggregate lines, one at a time.

        Invalid lines are skipped and never reach an aggregator.

        Args:
            lines: Raw observation lines, with or without trailing newlines,
                   in non-decreasing timestamp order
        """
        for line_number, line in enumerate(lines, start=1):
            raw = line.rstrip("\r\n")
            result = decode_observation(raw)
            if isinstance(result, DecodeFailure):
                self.discarded += 1
                if self.config.verbose:
                    logger.debug(
                        f"Invalid data at line {line_number} will be discarded: "
                        f"{result.reason} => {raw}"
                    )
                continue

            observation = result.observation
            self.aggregators[observation.station].add(observation)
            self.accepted += 1

    def run(self, source: Union[str, Path]) -> List[str]:
        """Sort ``source``, aggregate it and return the rendered report."""
        logger.debug(f"Processing observations from {source}")
        with sorted_observation_lines(source, self.config.temp_dir) as lines:
            self.consume(lines)
        logger.debug(
            f"Accepted {self.accepted} observations, discarded {self.discarded} lines"
        )
        return self.report()

    def report(self) -> List[str]:
        """Header line followed by one line per station, in code order."""
        return render_report(
            self.aggregators.values(),
            self.config.report.selected_kinds(),
        )
