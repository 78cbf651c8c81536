"""
Integration tests for the file pipeline.

Covers sorting, streaming aggregation, sample generation and normalization.
"""

import logging
import random
import shutil

import numpy as np
import pytest

from balloon_stats.config.settings import GeneratorConfig, NormalizeConfig, PipelineConfig, ReportConfig
from balloon_stats.core.errors import UnsupportedUnit
from balloon_stats.pipeline import (
    FlightStatsPipeline,
    InsufficientDiskSpace,
    check_disk_space,
    generate_sample_file,
    normalize_file,
    sort_lines_to_file,
    sorted_observation_lines,
)

requires_sort = pytest.mark.skipif(shutil.which("sort") is None, reason="sort utility not available")

AU_LINES = [f"2014-12-31T13:{i:02d}|{i},{i}|{i}|AU" for i in range(11)]
FR_LINES = [f"2014-12-31T14:{i:02d}|{1000 * i},0|300|FR" for i in range(5)]
INVALID_LINES = [
    "invalid line",
    "2014-12-31T13:05|1,1|1|XX",
    "2014-12-31T13:05|1,1|-300|AU",
]


@pytest.fixture
def shuffled_file(tmp_path):
    lines = AU_LINES + FR_LINES + INVALID_LINES
    random.Random(7).shuffle(lines)
    path = tmp_path / "observations.txt"
    path.write_text("\n".join(lines) + "\n")
    return path


class TestFlightStatsPipeline:
    """Streaming aggregation tests."""

    def test_consume_sorted_lines(self):
        pipeline = FlightStatsPipeline()
        pipeline.consume(line + "\n" for line in AU_LINES)

        au = pipeline.aggregators["AU"]
        assert au.count == 11
        assert au.min_temp_c == 0
        assert au.max_temp_c == 10
        assert np.isclose(au.mean_temp_c, 5.0)
        assert round(au.total_distance_km, 1) == 14.1
        assert pipeline.accepted == 11
        assert pipeline.discarded == 0

    def test_invalid_lines_do_not_touch_aggregators(self):
        pipeline = FlightStatsPipeline()
        pipeline.consume(INVALID_LINES)
        assert pipeline.discarded == 3
        assert pipeline.accepted == 0
        assert all(agg.count == 0 for agg in pipeline.aggregators.values())

    def test_verbose_logs_discarded_lines(self, caplog):
        caplog.set_level(logging.DEBUG, logger="balloon_stats.pipeline.stats")
        pipeline = FlightStatsPipeline(PipelineConfig(verbose=True))
        pipeline.consume(AU_LINES[:1] + ["invalid line"])
        assert "Invalid data at line 2 will be discarded" in caplog.text
        assert "invalid line" in caplog.text

    def test_quiet_mode_does_not_log_discards(self, caplog):
        caplog.set_level(logging.DEBUG, logger="balloon_stats.pipeline.stats")
        FlightStatsPipeline().consume(["invalid line"])
        assert "will be discarded" not in caplog.text

    def test_report_uses_selected_columns(self):
        config = PipelineConfig(report=ReportConfig(num_obs=True))
        pipeline = FlightStatsPipeline(config)
        pipeline.consume(AU_LINES)

        lines = pipeline.report()
        assert lines[0] == "Observatory Code | Number of Observations"
        assert len(lines) == 11
        assert lines[2] == "              AU |                     11"

    @requires_sort
    def test_run_sorts_before_aggregating(self, shuffled_file):
        """Shuffled input gives the same result as chronological input."""
        pipeline = FlightStatsPipeline()
        report = pipeline.run(shuffled_file)

        au = pipeline.aggregators["AU"]
        fr = pipeline.aggregators["FR"]
        assert au.count == 11
        assert round(au.total_distance_km, 1) == 14.1
        assert fr.count == 5
        assert np.isclose(fr.total_distance, 4000.0)
        assert pipeline.discarded == 3
        assert len(report) == 11

    @requires_sort
    def test_run_skips_undecodable_bytes(self, tmp_path):
        """A line with invalid UTF-8 is discarded, not fatal."""
        path = tmp_path / "observations.txt"
        path.write_bytes(
            b"2014-12-31T13:44|10,5|243|AU\n"
            b"2014-12-31T13:45|\xff\xfe,5|243|AU\n"
            b"2014-12-31T13:46|11,5|243|AU\n"
        )
        pipeline = FlightStatsPipeline()
        pipeline.run(path)

        au = pipeline.aggregators["AU"]
        assert au.count == 2
        assert pipeline.discarded == 1
        assert np.isclose(au.total_distance_km, 1.0)

    @requires_sort
    def test_run_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FlightStatsPipeline().run(tmp_path / "missing.txt")


class TestOrdering:
    """Tests for external sorting and disk preflight."""

    @requires_sort
    def test_sort_lines_to_file(self, shuffled_file, tmp_path):
        destination = tmp_path / "sorted.txt"
        sort_lines_to_file(shuffled_file, destination)
        lines = destination.read_text().splitlines()
        assert lines == sorted(lines)
        assert len(lines) == 19

    @requires_sort
    def test_temporary_file_removed(self, shuffled_file, tmp_path):
        work_dir = tmp_path / "work"
        work_dir.mkdir()
        with sorted_observation_lines(shuffled_file, work_dir) as lines:
            first = next(iter(lines))
            assert len(list(work_dir.iterdir())) == 1
        assert first.startswith("2014-12-31T13:00")
        assert list(work_dir.iterdir()) == []

    def test_check_disk_space(self, tmp_path):
        assert check_disk_space(0, tmp_path) >= 0
        with pytest.raises(InsufficientDiskSpace):
            check_disk_space(10 ** 30, tmp_path)


class TestSampleFile:
    """Tests for generate_sample_file."""

    def test_generates_requested_line_count(self, tmp_path):
        path = tmp_path / "sample.txt"
        written = generate_sample_file(path, GeneratorConfig(batches=4, samples_per_batch=25, seed=1))
        assert written == 100
        assert len(path.read_text().splitlines()) == 100

    def test_seed_is_reproducible(self, tmp_path):
        config = GeneratorConfig(batches=3, samples_per_batch=10, seed=99)
        generate_sample_file(tmp_path / "a.txt", config)
        generate_sample_file(tmp_path / "b.txt", config)
        assert (tmp_path / "a.txt").read_text() == (tmp_path / "b.txt").read_text()

    def test_generated_file_feeds_pipeline(self, tmp_path):
        path = tmp_path / "sample.txt"
        generate_sample_file(path, GeneratorConfig(batches=5, samples_per_batch=40, seed=11))

        pipeline = FlightStatsPipeline()
        with open(path) as f:
            pipeline.consume(sorted(f))
        assert pipeline.accepted + pipeline.discarded == 200
        assert pipeline.accepted > 0


class TestNormalize:
    """Tests for normalize_file."""

    def test_normalize_to_meters_kelvin(self, tmp_path):
        source = tmp_path / "in.txt"
        source.write_text(
            "2014-12-31T13:44|10,5|243|AU\n"
            "invalid line\n"
            "2014-12-31T13:44|6,3|470|US\n"
        )
        destination = tmp_path / "out.txt"

        written = normalize_file(source, destination)
        assert written == 2
        assert destination.read_text().splitlines() == [
            "2014-12-31T13:44|10000,5000|516|AU",
            "2014-12-31T13:44|9654,4827|516|US",
        ]

    def test_normalize_to_kilometers_celsius(self, tmp_path):
        source = tmp_path / "in.txt"
        source.write_text("2014-12-31T13:44|10000,5000|516|FR\n")
        destination = tmp_path / "out.txt"

        normalize_file(source, destination, NormalizeConfig("kilometers", "celsius"))
        assert destination.read_text() == "2014-12-31T13:44|10,5|243|FR\n"

    def test_undecodable_bytes_are_skipped(self, tmp_path):
        source = tmp_path / "in.txt"
        source.write_bytes(b"\xff\n2014-12-31T13:44|10000,5000|516|FR\n")
        destination = tmp_path / "out.txt"

        assert normalize_file(source, destination) == 1
        assert destination.read_text() == "2014-12-31T13:44|10000,5000|516|FR\n"

    def test_unsupported_unit_raises(self, tmp_path):
        source = tmp_path / "in.txt"
        source.write_text("")
        with pytest.raises(UnsupportedUnit):
            normalize_file(source, tmp_path / "out.txt", NormalizeConfig("feet", "kelvin"))

    def test_missing_input_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            normalize_file(tmp_path / "missing.txt", tmp_path / "out.txt")
