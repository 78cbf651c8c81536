"""
Per-station flight statistics.

A :class:`StationAggregator` consumes canonical observations for one
station and keeps running temperature extremes, a temperature sum, an
observation count and the cumulative distance between consecutive
positions.

Distance is only meaningful when observations arrive in non-decreasing
timestamp order; ``add`` does not check timestamps. The pipeline
guarantees the order by sorting input lines before streaming them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Any

import numpy as np

from balloon_stats.core.constants import KELVIN_OFFSET, METERS_PER_KILOMETER, STATION_CODES
from balloon_stats.core.observation import Location, Observation

COLUMN_SEPARATOR = " | "


class StatisticKind(Enum):
    """Statistic columns available in a report, in declaration order."""
    MIN_TEMP = "min_temp"
    MAX_TEMP = "max_temp"
    MEAN_TEMP = "mean_temp"
    NUM_OBS = "num_obs"
    TOTAL_DISTANCE = "total_distance"


@dataclass(frozen=True)
class StatisticColumn:
    """Rendering rule for one report column.

    Attributes:
        header: Column title; its length sets the column width
        format_spec: Format spec applied to the value (without width)
        accessor: Reads the value from an aggregator
    """
    header: str
    format_spec: str
    accessor: Callable[["StationAggregator"], Any]

    @property
    def width(self) -> int:
        return len(self.header)

    def format_header(self) -> str:
        return self.header

    def format_value(self, aggregator: "StationAggregator") -> str:
        value = self.accessor(aggregator)
        if value is None:
            return " " * self.width
        return format(value, f">{self.width}{self.format_spec}")


class StationAggregator:
    """Running statistics for a single station.

    Example:
        >>> stats = StationAggregator("AU")
        >>> stats.add(Observation.from_line("2014-12-31T13:44|0,0|0|AU"))
        >>> stats.min_temp_c
        0
    """

    def __init__(self, station: str):
        self.station = station
        self.min_temp: Optional[int] = None
        self.max_temp: Optional[int] = None
        self.sum_temp = 0
        self.count = 0
        self.last_location: Optional[Location] = None
        self.total_distance = 0.0

    @classmethod
    def for_all_stations(cls) -> Dict[str, "StationAggregator"]:
        """One empty aggregator per known station, in code order."""
        return {code: cls(code) for code in STATION_CODES}

    def add(self, observation: Observation) -> None:
        """Include an observation in the running statistics."""
        temperature = observation.temperature
        if self.min_temp is None or temperature < self.min_temp:
            self.min_temp = temperature
        if self.max_temp is None or temperature > self.max_temp:
            self.max_temp = temperature
        self.sum_temp += temperature
        self.count += 1

        if self.last_location is not None:
            diff = np.subtract(observation.location, self.last_location)
            self.total_distance += float(np.linalg.norm(diff))
        self.last_location = observation.location

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def mean_temp_c(self) -> Optional[float]:
        """Mean temperature in Celsius, None without observations."""
        if self.count == 0:
            return None
        return self.sum_temp / self.count - KELVIN_OFFSET

    @property
    def min_temp_c(self) -> Optional[int]:
        if self.min_temp is None:
            return None
        return self.min_temp - KELVIN_OFFSET

    @property
    def max_temp_c(self) -> Optional[int]:
        if self.max_temp is None:
            return None
        return self.max_temp - KELVIN_OFFSET

    @property
    def total_distance_km(self) -> float:
        return self.total_distance / METERS_PER_KILOMETER

    def value(self, kind: StatisticKind) -> Any:
        """Read a statistic by kind."""
        return STATISTIC_COLUMNS[kind].accessor(self)

    def to_dict(self) -> Dict[str, Any]:
        """Statistics as a plain dictionary (Celsius / km)."""
        result: Dict[str, Any] = {"station": self.station}
        for kind in StatisticKind:
            result[kind.value] = self.value(kind)
        return result

    # -------------------------------------------------------------------------
    # Report rendering
    # -------------------------------------------------------------------------

    @staticmethod
    def header(kinds: Iterable[StatisticKind]) -> str:
        """Header row: station column followed by the selected statistics."""
        columns = [STATION_COLUMN.format_header()]
        columns.extend(STATISTIC_COLUMNS[kind].format_header() for kind in kinds)
        return COLUMN_SEPARATOR.join(columns)

    def render(self, kinds: Iterable[StatisticKind]) -> str:
        """Data row for this station."""
        columns = [STATION_COLUMN.format_value(self)]
        columns.extend(STATISTIC_COLUMNS[kind].format_value(self) for kind in kinds)
        return COLUMN_SEPARATOR.join(columns)

    def __repr__(self) -> str:
        return (
            f"StationAggregator(station={self.station!r}, count={self.count}, "
            f"total_distance={self.total_distance:.1f})"
        )


STATION_COLUMN = StatisticColumn(
    header="Observatory Code",
    format_spec="s",
    accessor=lambda agg: agg.station,
)

STATISTIC_COLUMNS: Dict[StatisticKind, StatisticColumn] = {
    StatisticKind.MIN_TEMP: StatisticColumn(
        "Minimum Temperature (°C)", "d", lambda agg: agg.min_temp_c
    ),
    StatisticKind.MAX_TEMP: StatisticColumn(
        "Maximum Temperature (°C)", "d", lambda agg: agg.max_temp_c
    ),
    StatisticKind.MEAN_TEMP: StatisticColumn(
        "Mean Temperature (°C)", ".1f", lambda agg: agg.mean_temp_c
    ),
    StatisticKind.NUM_OBS: StatisticColumn(
        "Number of Observations", "d", lambda agg: agg.count
    ),
    StatisticKind.TOTAL_DISTANCE: StatisticColumn(
        "Total Distance (Km)", ".1f", lambda agg: agg.total_distance_km
    ),
}


def render_report(
    aggregators: Iterable[StationAggregator],
    kinds: Optional[Iterable[StatisticKind]] = None,
) -> List[str]:
    """Header line followed by one line per aggregator."""
    kinds = list(StatisticKind) if kinds is None else list(kinds)
    lines = [StationAggregator.header(kinds)]
    lines.extend(agg.render(kinds) for agg in aggregators)
    return lines
