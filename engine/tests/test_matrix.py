"""
Tests for the fault matrix runner.

Every protocol must run all eight SimulationConfig cells, each with a fresh
extractor, and report every failing cell together.
"""

import pandas as pd
import pytest

from extractor_harness.config import HarnessSettings
from extractor_harness.domain import SimulationConfig
from extractor_harness.errors import (
    ExpectedFailureNotRaised,
    GoldenMismatch,
    MatrixFailure,
)
from extractor_harness.golden import GoldenStore
from extractor_harness.harness import FaultMatrixRunner, MatrixMode, MatrixReport
from tests.fixtures.frame_stream import (
    FormatCorruptionError,
    FrameStreamExtractor,
    NaiveFrameStreamExtractor,
    build_stream,
    expected_dump,
    make_frames,
    write_goldens,
)

SAMPLE = "stream/seven_frames.xtrm"


@pytest.fixture
def frames():
    return make_frames(7, track_count=3, payload_size=10)


@pytest.fixture
def stream_params() -> dict:
    return {"track_count": 3, "payload_size": 10}


@pytest.fixture
def runner(golden_store: GoldenStore, settings: HarnessSettings) -> FaultMatrixRunner:
    return FaultMatrixRunner(golden_store, settings)


def _counting_factory(cls=FrameStreamExtractor):
    created = []

    def factory():
        extractor = cls()
        created.append(extractor)
        return extractor

    return factory, created


class ReleaseTrackingExtractor(FrameStreamExtractor):
    released = False

    def release(self) -> None:
        self.released = True


# =============================================================================
# Golden matrix
# =============================================================================


@pytest.mark.matrix
class TestAssertOutputMatrix:
    """assert_output across every cell."""

    def test_all_cells_pass(self, runner, golden_store, frames, stream_params) -> None:
        write_goldens(golden_store, SAMPLE, frames, **stream_params)
        factory, created = _counting_factory()

        report = runner.assert_output(factory, SAMPLE, build_stream(frames, **stream_params))

        assert report.ok
        assert report.mode == MatrixMode.ASSERT_OUTPUT
        assert [cell.config for cell in report.cells] == SimulationConfig.all_combinations()
        assert len(created) == 8
        assert len({id(extractor) for extractor in created}) == 8
        for cell in report.cells:
            assert cell.dumps_checked[-1] == f"{SAMPLE}.3.dump"
            assert (cell.read_faults > 0) == cell.config.inject_io_faults

    def test_sample_read_from_store(
        self, runner, golden_store, golden_dir, frames, stream_params
    ) -> None:
        write_goldens(golden_store, SAMPLE, frames, **stream_params)
        (golden_dir / SAMPLE).write_bytes(build_stream(frames, **stream_params))

        report = runner.assert_output(FrameStreamExtractor, SAMPLE)

        assert report.total_cells == 8
        assert report.ok

    def test_seek_over_padding(self, runner, golden_store, frames, stream_params) -> None:
        write_goldens(golden_store, SAMPLE, frames, data_offset=48, **stream_params)
        data = build_stream(frames, data_offset=48, **stream_params)

        report = runner.assert_output(FrameStreamExtractor, SAMPLE, data)

        assert all(cell.seek_requests >= 1 for cell in report.cells)

    def test_live_stream_restarts_only_when_length_unknown(
        self, runner, golden_store, frames, stream_params
    ) -> None:
        write_goldens(golden_store, SAMPLE, frames, live=True, **stream_params)
        data = build_stream(frames, live=True, **stream_params)

        report = runner.assert_output(FrameStreamExtractor, SAMPLE, data)

        for cell in report.cells:
            restarted = cell.config.inject_io_faults and cell.config.simulate_unknown_length
            assert (cell.restarts > 0) == restarted, cell.label

    def test_partial_read_bug_fails_only_partial_cells(
        self, runner, golden_store, frames, stream_params
    ) -> None:
        """One failing cell never stops the rest from running."""
        write_goldens(golden_store, SAMPLE, frames, **stream_params)
        factory, created = _counting_factory(NaiveFrameStreamExtractor)

        with pytest.raises(MatrixFailure) as exc_info:
            runner.assert_output(factory, SAMPLE, build_stream(frames, **stream_params))

        failure = exc_info.value
        assert len(created) == 8
        assert failure.report.total_cells == 8
        assert len(failure.failures) == 4
        assert all(config.simulate_partial_reads for config, _ in failure.failures)
        for cell in failure.report.cells:
            assert cell.ok != cell.config.simulate_partial_reads
        for config, _ in failure.failures:
            assert config.label in str(failure)

    def test_unknown_length_golden_divergence(
        self, runner, golden_store, frames, stream_params
    ) -> None:
        write_goldens(golden_store, SAMPLE, frames, **stream_params)
        bogus = expected_dump(frames, **stream_params)
        bogus["number_of_tracks"] = 1
        golden_store.write_dump(f"{SAMPLE}.unklen.dump", bogus)

        data = build_stream(frames, **stream_params)
        with pytest.raises(MatrixFailure) as exc_info:
            runner.assert_output(FrameStreamExtractor, SAMPLE, data)

        failures = exc_info.value.failures
        assert len(failures) == 4
        for config, exc in failures:
            assert config.simulate_unknown_length
            assert isinstance(exc, GoldenMismatch)
            assert exc.variant == "unklen.dump"

    def test_parallel_cells(self, golden_store, golden_dir, frames, stream_params) -> None:
        write_goldens(golden_store, SAMPLE, frames, **stream_params)
        settings = HarnessSettings(
            _env_file=None, golden_dir=golden_dir, parallel_cells=True, max_workers=3
        )
        runner = FaultMatrixRunner(golden_store, settings)

        data = build_stream(frames, **stream_params)
        report = runner.assert_output(FrameStreamExtractor, SAMPLE, data)

        assert report.ok
        assert [cell.config for cell in report.cells] == SimulationConfig.all_combinations()

    def test_store_defaults_to_settings_dir(self, settings, golden_dir) -> None:
        runner = FaultMatrixRunner(settings=settings)

        assert runner.store.root == golden_dir


# =============================================================================
# Expected-failure matrix
# =============================================================================


@pytest.mark.matrix
class TestAssertThrowsMatrix:
    """assert_throws across every cell."""

    def test_corrupt_magic(self, runner, frames, stream_params) -> None:
        data = b"XTRX" + build_stream(frames, **stream_params)[4:]

        report = runner.assert_throws(FrameStreamExtractor, data, FormatCorruptionError)

        assert report.ok
        assert report.mode == MatrixMode.ASSERT_THROWS
        assert report.sample == f"<{len(data)} bytes>"
        assert report.total_cells == 8

    def test_truncated_sample_from_store(
        self, runner, golden_dir, frames, stream_params
    ) -> None:
        (golden_dir / "truncated.xtrm").write_bytes(build_stream(frames, **stream_params)[:-3])

        report = runner.assert_throws(FrameStreamExtractor, "truncated.xtrm", EOFError)

        assert report.sample == "truncated.xtrm"
        assert report.ok

    def test_valid_input_fails_every_cell(self, runner, frames, stream_params) -> None:
        with pytest.raises(MatrixFailure) as exc_info:
            runner.assert_throws(
                FrameStreamExtractor, build_stream(frames, **stream_params), FormatCorruptionError
            )

        failures = exc_info.value.failures
        assert len(failures) == 8
        assert all(isinstance(exc, ExpectedFailureNotRaised) for _, exc in failures)
        cells = exc_info.value.report.cells
        assert all(cell.error_type == "ExpectedFailureNotRaised" for cell in cells)


# =============================================================================
# Reports
# =============================================================================


class TestMatrixReport:
    """Reports written when report_dir is set."""

    def test_writes_csv_and_json(
        self, golden_store, golden_dir, tmp_path, frames, stream_params
    ) -> None:
        report_dir = tmp_path / "reports"
        settings = HarnessSettings(_env_file=None, golden_dir=golden_dir, report_dir=report_dir)
        runner = FaultMatrixRunner(golden_store, settings)
        data = b"XTRX" + build_stream(frames, **stream_params)[4:]

        runner.assert_throws(FrameStreamExtractor, data, FormatCorruptionError)

        stem = f"_{len(data)}_bytes_.assert_throws.matrix"
        df = pd.read_csv(report_dir / f"{stem}.csv")
        assert len(df) == 8
        assert df["ok"].all()
        assert list(df["cell"]) == [c.label for c in SimulationConfig.all_combinations()]
        assert (report_dir / f"{stem}.json").is_file()

    def test_failed_run_still_writes_report(
        self, golden_store, golden_dir, tmp_path, frames, stream_params
    ) -> None:
        report_dir = tmp_path / "reports"
        settings = HarnessSettings(_env_file=None, golden_dir=golden_dir, report_dir=report_dir)
        runner = FaultMatrixRunner(golden_store, settings)

        with pytest.raises(MatrixFailure):
            runner.assert_output(
                FrameStreamExtractor, "missing.xtrm", build_stream(frames, **stream_params)
            )

        df = pd.read_csv(report_dir / "missing.xtrm.assert_output.matrix.csv")
        assert not df["ok"].any()
        assert set(df["error_type"]) == {"GoldenMissing"}

    def test_to_frame_columns(self, runner, frames, stream_params) -> None:
        data = b"XTRX" + build_stream(frames, **stream_params)[4:]
        report = runner.assert_throws(FrameStreamExtractor, data, FormatCorruptionError)

        df = report.to_frame()

        assert {"cell", "ok", "read_calls", "read_faults", "restarts"} <= set(df.columns)
        assert df["read_faults"].sum() == 4

    def test_report_file_names_are_portable(self, tmp_path) -> None:
        report = MatrixReport(sample="clips/<100 bytes>:a", mode=MatrixMode.ASSERT_THROWS)

        csv_path = report.write(tmp_path)

        assert csv_path.name == "clips__100_bytes__a.assert_throws.matrix.csv"
        assert (tmp_path / "clips__100_bytes__a.assert_throws.matrix.json").is_file()


# =============================================================================
# Extractor lifecycle
# =============================================================================


class TestExtractorRelease:
    """Every cell releases the extractor it created."""

    def test_released_after_passing_cells(
        self, runner, golden_store, frames, stream_params
    ) -> None:
        write_goldens(golden_store, SAMPLE, frames, **stream_params)
        factory, created = _counting_factory(ReleaseTrackingExtractor)

        runner.assert_output(factory, SAMPLE, build_stream(frames, **stream_params))

        assert len(created) == 8
        assert all(extractor.released for extractor in created)

    def test_released_after_failing_cells(self, runner, frames, stream_params) -> None:
        factory, created = _counting_factory(ReleaseTrackingExtractor)

        with pytest.raises(MatrixFailure):
            runner.assert_throws(factory, build_stream(frames, **stream_params), EOFError)

        assert len(created) == 8
        assert all(extractor.released for extractor in created)
