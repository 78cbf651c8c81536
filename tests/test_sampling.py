"""Tests for the synthetic sample generator."""

from datetime import timedelta

import numpy as np
import pytest

from balloon_stats.core.constants import (
    INVALID_LINE,
    SAMPLE_END_TIME,
    SAMPLE_START_TIME,
    STATION_CODES,
)
from balloon_stats.core.errors import UnknownStation
from balloon_stats.core.observation import Observation, decode_observation
from balloon_stats.core.sampling import GeneratorState, SampleGenerator


class TestSeeding:
    """Tests for the first sample of a walk."""

    def test_seeded_values_within_ranges(self):
        generator = SampleGenerator(seed=1, invalid_probability=0.0)
        for _ in range(50):
            _, state = generator.sample("FR")
            assert SAMPLE_START_TIME <= state.timestamp <= SAMPLE_END_TIME
            assert all(0 <= v <= 5_000_000 for v in state.location)
            assert 213 <= state.temperature <= 300

    def test_same_seed_reproduces_sequence(self):
        def run(seed):
            generator = SampleGenerator(seed=seed)
            state = None
            lines = []
            for _ in range(200):
                line, state = generator.sample("US", state)
                lines.append(line)
            return lines

        assert run(42) == run(42)
        assert run(42) != run(43)

    def test_injected_rng_is_used(self):
        rng = np.random.default_rng(5)
        generator = SampleGenerator(rng=rng)
        assert generator.rng is rng

    def test_unknown_station_raises(self):
        with pytest.raises(UnknownStation):
            SampleGenerator(seed=0).sample("XX")


class TestRandomWalk:
    """Tests for consecutive samples of one station."""

    @pytest.fixture
    def generator(self):
        return SampleGenerator(seed=123, invalid_probability=0.0)

    def test_walk_steps(self, generator):
        """Each step advances one minute with bounded drift."""
        _, state = generator.sample("FR")
        for _ in range(100):
            line, new_state = generator.sample("FR", state)
            assert new_state.timestamp - state.timestamp == timedelta(seconds=60)
            assert abs(new_state.location[0] - state.location[0]) <= 500
            assert abs(new_state.location[1] - state.location[1]) <= 500
            assert abs(new_state.temperature - state.temperature) <= 1
            assert line == new_state.to_observation().encode()
            state = new_state

    def test_other_station_reseeds(self, generator):
        _, state = generator.sample("AU")
        _, other = generator.sample("FR", state)
        assert other.station == "FR"
        assert other.timestamp - state.timestamp != timedelta(seconds=60)

    def test_coordinates_stay_non_negative(self, generator):
        state = GeneratorState(
            station="FR",
            timestamp=SAMPLE_START_TIME,
            location=(0, 0),
            temperature=250,
        )
        for _ in range(200):
            line, state = generator.sample("FR", state)
            assert decode_observation(line).ok
            assert min(state.location) >= 0

    def test_observation_truncated_to_minute(self):
        state = GeneratorState(
            station="AU",
            timestamp=SAMPLE_START_TIME + timedelta(seconds=125),
            location=(1000, 2000),
            temperature=280,
        )
        obs = state.to_observation()
        assert obs.timestamp.second == 0
        assert obs.timestamp.minute == 2

    def test_stream(self, generator):
        lines = list(generator.stream("AU", 25))
        assert len(lines) == 25
        timestamps = [Observation.from_line(line).timestamp for line in lines]
        assert timestamps == sorted(timestamps)

    @pytest.mark.parametrize("station", STATION_CODES)
    def test_samples_reproduce_in_native_units(self, generator, station):
        """Decoding a sample and re-encoding it gives the same text."""
        state = None
        for _ in range(20):
            line, state = generator.sample(station, state)
            assert str(Observation.from_line(line)) == line


class TestInvalidLines:
    """Tests for the invalid-line sentinel."""

    def test_always_invalid(self):
        generator = SampleGenerator(seed=0, invalid_probability=1.0)
        line, state = generator.sample("AU")
        assert line == INVALID_LINE
        assert state.station == "AU"
        assert not decode_observation(line).ok

    def test_never_invalid(self):
        generator = SampleGenerator(seed=0, invalid_probability=0.0)
        lines = list(generator.stream("DE", 500))
        assert INVALID_LINE not in lines

    def test_default_rate_near_one_percent(self):
        """With a fixed seed the 1% rate is reproducible."""
        generator = SampleGenerator(seed=2015)
        lines = list(generator.stream("BR", 10000))
        invalid = lines.count(INVALID_LINE)
        assert 50 <= invalid <= 150

        again = list(SampleGenerator(seed=2015).stream("BR", 10000))
        assert again.count(INVALID_LINE) == invalid
