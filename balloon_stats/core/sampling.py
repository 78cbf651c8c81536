"""
Synthetic observation generator.

Each station's balloon follows a random walk: the first sample for a
station is drawn uniformly from fixed ranges, later samples step the clock
by one minute and drift the position and temperature by small random
offsets. A small fraction of samples is replaced by an invalid line so
downstream validation paths get exercised.

The walk position lives in an explicit :class:`GeneratorState` that the
caller passes back on the next call, so several stations can be advanced
independently from one generator.

Example:
    >>> generator = SampleGenerator(seed=7)
    >>> line, state = generator.sample("AU")
    >>> line, state = generator.sample("AU", state)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterator, Optional, Tuple

import numpy as np

from balloon_stats.core.constants import (
    INVALID_LINE,
    SAMPLE_DISTANCE_RANGE,
    SAMPLE_END_TIME,
    SAMPLE_INVALID_PROBABILITY,
    SAMPLE_LOCATION_DRIFT,
    SAMPLE_START_TIME,
    SAMPLE_STEP_SECONDS,
    SAMPLE_TEMPERATURE_DRIFT,
    SAMPLE_TEMPERATURE_RANGE,
    STATION_CODES,
)
from balloon_stats.core.errors import UnknownStation
from balloon_stats.core.observation import Location, Observation


@dataclass(frozen=True)
class GeneratorState:
    """Position of one station's random walk.

    Attributes:
        station: Station the walk belongs to
        timestamp: Current instant (may carry seconds)
        location: Current (x, y) in meters
        temperature: Current temperature in Kelvin
    """
    station: str
    timestamp: datetime
    location: Location
    temperature: int

    def to_observation(self) -> Observation:
        """Canonical observation for the current state, truncated to the minute."""
        return Observation(
            timestamp=self.timestamp.replace(second=0, microsecond=0),
            location=self.location,
            temperature=self.temperature,
            station=self.station,
        )


class SampleGenerator:
    """Random-walk observation generator.

    Args:
        rng: numpy random Generator to draw from
        seed: Seed for a new Generator when ``rng`` is not given
        invalid_probability: Chance of returning the invalid-line sentinel
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        invalid_probability: float = SAMPLE_INVALID_PROBABILITY,
    ):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.invalid_probability = invalid_probability

    def _randint(self, low: int, high: int) -> int:
        """Uniform integer in the inclusive range [low, high]."""
        return int(self.rng.integers(low, high + 1))

    def seed_state(self, station: str) -> GeneratorState:
        """Draw a fresh starting point for ``station``."""
        span = (SAMPLE_END_TIME - SAMPLE_START_TIME).total_seconds()
        timestamp = SAMPLE_START_TIME + timedelta(seconds=span * self.rng.random())
        return GeneratorState(
            station=station,
            timestamp=timestamp,
            location=(
                self._randint(*SAMPLE_DISTANCE_RANGE),
                self._randint(*SAMPLE_DISTANCE_RANGE),
            ),
            temperature=self._randint(*SAMPLE_TEMPERATURE_RANGE),
        )

    def advance_state(self, state: GeneratorState) -> GeneratorState:
        """Step ``state`` one minute forward with random drift.

        Each coordinate moves by up to ``SAMPLE_LOCATION_DRIFT`` meters but
        is clamped at 0. Unclamped drift could walk a coordinate below zero,
        which the unsigned location field cannot encode, so the walk differs
        from a raw random walk near the origin.
        """
        drift = SAMPLE_LOCATION_DRIFT
        x, y = state.location
        location = (
            max(0, x + self._randint(-drift, drift)),
            max(0, y + self._randint(-drift, drift)),
        )
        temperature = state.temperature + self._randint(
            -SAMPLE_TEMPERATURE_DRIFT, SAMPLE_TEMPERATURE_DRIFT
        )
        return GeneratorState(
            station=state.station,
            timestamp=state.timestamp + timedelta(seconds=SAMPLE_STEP_SECONDS),
            location=location,
            temperature=temperature,
        )

    def sample(
        self,
        station: str,
        state: Optional[GeneratorState] = None,
    ) -> Tuple[str, GeneratorState]:
        """Produce the next sample line for ``station``.

        A missing state, or a state that belongs to another station, starts
        a new walk.

        Args:
            station: Station code
            state: State returned by the previous call for this station

        Returns:
            Tuple of (encoded line or the invalid-line sentinel, new state)

        Raises:
            UnknownStation: If ``station`` is not a known code
        """
        if station not in STATION_CODES:
            raise UnknownStation(f"Invalid observatory code: {station}")

        if state is None or state.station != station:
            state = self.seed_state(station)
        else:
            state = self.advance_state(state)

        if self.rng.random() < self.invalid_probability:
            return INVALID_LINE, state
        return state.to_observation().encode(), state

    def stream(
        self,
        station: str,
        count: int,
        state: Optional[GeneratorState] = None,
    ) -> Iterator[str]:
        """Lazily yield ``count`` consecutive samples for one station."""
        for _ in range(count):
            line, state = self.sample(station, state)
            yield line
