"""
Fault matrix runner.

Runs a verification protocol once per SimulationConfig combination, each
cell with a fresh extractor and a fresh input. The extractor is released
when its cell finishes, whether or not it passed. A failing cell never stops
the others; failures are collected and raised together once all cells ran.
"""

import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime

from extractor_harness.config import HarnessSettings, get_settings
from extractor_harness.domain import SimulationConfig
from extractor_harness.errors import HarnessError, MatrixFailure
from extractor_harness.golden import GoldenStore
from extractor_harness.harness.models import CellResult, MatrixMode, MatrixReport
from extractor_harness.harness.verifier import GoldenVerifier, VerificationResult
from extractor_harness.interfaces import ExtractorFactory
from extractor_harness.logging import clear_cell_id, get_logger, set_cell_id

logger = get_logger(__name__)

CellFn = Callable[[SimulationConfig], VerificationResult]
CellOutcome = tuple[CellResult, BaseException | None]


class FaultMatrixRunner:
    """
    Runs golden and expected-failure protocols across all eight cells.

    Usage:
        runner = FaultMatrixRunner(GoldenStore(Path("assets")))
        runner.assert_output(FrameStreamExtractor, "stream/sample.xtrm")
        runner.assert_throws(FrameStreamExtractor, corrupt_bytes, ParserException)
    """

    def __init__(
        self,
        store: GoldenStore | None = None,
        settings: HarnessSettings | None = None,
    ):
        """
        Initialize fault matrix runner.

        Args:
            store: Golden store (defaults to one rooted at settings.golden_dir)
            settings: Harness settings (defaults to get_settings())
        """
        self._settings = settings or get_settings()
        self._store = store or GoldenStore(self._settings.golden_dir)
        self._verifier = GoldenVerifier(self._store, self._settings)

    @property
    def store(self) -> GoldenStore:
        return self._store

    def assert_output(
        self,
        factory: ExtractorFactory,
        sample: str,
        data: bytes | None = None,
    ) -> MatrixReport:
        """
        Verify sample against its golden dumps under every cell.

        Args:
            factory: Creates a fresh extractor per cell
            sample: Sample file name the dumps are keyed by
            data: Sample bytes (read from the store when None)

        Returns:
            MatrixReport with all eight passing cells.

        Raises:
            MatrixFailure: If any cell failed
        """
        if data is None:
            data = self._store.read_sample(sample)

        def run_cell(config: SimulationConfig) -> VerificationResult:
            extractor = factory()
            try:
                return self._verifier.assert_output(extractor, sample, data, config)
            finally:
                extractor.release()

        return self._run_matrix(sample, MatrixMode.ASSERT_OUTPUT, run_cell)

    def assert_throws(
        self,
        factory: ExtractorFactory,
        data: bytes | str,
        expected: type[BaseException],
    ) -> MatrixReport:
        """
        Verify consuming data raises expected under every cell.

        Args:
            factory: Creates a fresh extractor per cell
            data: Input bytes, or a sample file name read from the store
            expected: Exception class every cell must raise

        Returns:
            MatrixReport with all eight passing cells.

        Raises:
            MatrixFailure: If any cell failed
        """
        if isinstance(data, str):
            sample = data
            data = self._store.read_sample(sample)
        else:
            sample = f"<{len(data)} bytes>"
        payload = data

        def run_cell(config: SimulationConfig) -> VerificationResult:
            extractor = factory()
            try:
                return self._verifier.assert_throws(extractor, payload, expected, config)
            finally:
                extractor.release()

        return self._run_matrix(sample, MatrixMode.ASSERT_THROWS, run_cell)

    # =========================================================================
    # Execution
    # =========================================================================

    def _run_matrix(self, sample: str, mode: MatrixMode, run_cell: CellFn) -> MatrixReport:
        configs = SimulationConfig.all_combinations()
        report = MatrixReport(sample=sample, mode=mode)

        parallel = self._settings.parallel_cells and not self._settings.writes_goldens
        logger.info(
            "Running %s for %s over %d cells (%s)",
            mode.value,
            sample,
            len(configs),
            "parallel" if parallel else "serial",
        )

        if parallel:
            with ThreadPoolExecutor(max_workers=self._settings.max_workers) as executor:
                outcomes = list(
                    executor.map(lambda c: self._run_cell(sample, c, run_cell), configs)
                )
        else:
            outcomes = [self._run_cell(sample, config, run_cell) for config in configs]

        report.cells = [cell for cell, _ in outcomes]
        report.completed_at = datetime.now(UTC)
        if report.total_cells != len(configs):
            raise HarnessError(f"Expected {len(configs)} cells, ran {report.total_cells}")

        if self._settings.report_dir is not None:
            report.write(self._settings.report_dir)

        failures = [(cell.config, exc) for cell, exc in outcomes if exc is not None]
        logger.info(
            "%s for %s: %d/%d cells passed",
            mode.value,
            sample,
            report.total_cells - len(failures),
            report.total_cells,
        )
        if failures:
            raise MatrixFailure(report, failures)
        return report

    def _run_cell(self, sample: str, config: SimulationConfig, run_cell: CellFn) -> CellOutcome:
        set_cell_id(f"{sample}:{config.label}")
        start_time = time.time()
        try:
            result = run_cell(config)
        except Exception as e:
            logger.warning("Cell %s failed: %s", config.label, e, exc_info=True)
            return (
                CellResult(
                    config=config,
                    ok=False,
                    error_type=type(e).__name__,
                    error=str(e),
                    duration_s=time.time() - start_time,
                ),
                e,
            )
        finally:
            clear_cell_id()

        stats = result.stats
        logger.debug("Cell %s passed: %s", config.label, stats.to_dict())
        return (
            CellResult(
                config=config,
                ok=True,
                duration_s=time.time() - start_time,
                sniff_faults=stats.sniff_faults,
                read_calls=stats.read_calls,
                read_faults=stats.read_faults,
                seek_requests=stats.seek_requests,
                restarts=stats.restarts,
                dumps_checked=result.dumps_checked,
            ),
            None,
        )
