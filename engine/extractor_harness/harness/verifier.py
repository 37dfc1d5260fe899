"""
Golden verifier.

Runs one extractor over one fault matrix cell and checks its output against
the stored dumps: the full run first, then one probe per seek target
duration * j / 3 for j in 0..3 when the emitted seek map is seekable.
"""

from dataclasses import dataclass, field

from extractor_harness.config import DumpAction, HarnessSettings, get_settings
from extractor_harness.domain import SimulationConfig
from extractor_harness.errors import ExpectedFailureNotRaised, SniffFailed, WrongFailureKind
from extractor_harness.fakes import FakeExtractorInput, FakeExtractorOutput
from extractor_harness.golden import GoldenStore
from extractor_harness.harness.driver import ConsumptionDriver, DriverStats
from extractor_harness.interfaces import Extractor
from extractor_harness.logging import get_logger

logger = get_logger(__name__)

SEEK_PROBE_COUNT = 4


@dataclass
class VerificationResult:
    """What a single-cell verification produced."""

    output: FakeExtractorOutput | None
    stats: DriverStats
    dumps_checked: list[str] = field(default_factory=list)


class GoldenVerifier:
    """Applies the golden comparison and expected-failure protocols to one cell."""

    def __init__(self, store: GoldenStore, settings: HarnessSettings | None = None):
        """
        Initialize golden verifier.

        Args:
            store: Store resolving and holding golden dumps
            settings: Harness settings (defaults to get_settings())
        """
        self._store = store
        self._settings = settings or get_settings()

    def _new_driver(self, extractor: Extractor, input: FakeExtractorInput) -> ConsumptionDriver:
        return ConsumptionDriver(
            extractor,
            input,
            max_read_retries=self._settings.max_read_retries,
            max_sniff_retries=self._settings.max_sniff_retries,
        )

    def _dump_action(self, config: SimulationConfig) -> DumpAction:
        # Unknown-length runs only ever compare; they must not overwrite the default dumps.
        if config.simulate_unknown_length:
            return DumpAction.COMPARE
        return self._settings.dump_action

    def assert_output(
        self,
        extractor: Extractor,
        sample: str,
        data: bytes,
        config: SimulationConfig,
    ) -> VerificationResult:
        """
        Check that extractor reproduces the golden dumps for sample under config.

        Args:
            extractor: Fresh extractor instance
            sample: Sample file name the dumps are keyed by
            data: Sample bytes
            config: Simulated I/O conditions

        Returns:
            VerificationResult with the final output and driver counters.

        Raises:
            SniffFailed: If the extractor does not recognise the sample
            GoldenMismatch: If any recorded output differs from its dump
        """
        input = FakeExtractorInput.from_config(data, config)
        driver = self._new_driver(extractor, input)
        action = self._dump_action(config)
        result = VerificationResult(output=None, stats=driver.stats)

        if not driver.sniff():
            raise SniffFailed(f"{type(extractor).__name__} did not recognise {sample}")
        input.reset_peek_position()

        output = driver.consume(0, retry_from_start_if_live=True)
        result.output = output

        name = self._store.select_full_run(sample, config.simulate_unknown_length)
        self._store.assert_dump(sample, name, output.dump(), action)
        result.dumps_checked.append(name)

        seek_map = output.seek_map_value
        if seek_map is None or not seek_map.is_seekable():
            return result
        if not seek_map.has_finite_duration:
            logger.warning("%s: seekable seek map without duration, skipping seek probes", sample)
            return result

        duration_us = seek_map.get_duration_us()
        for j in range(SEEK_PROBE_COUNT):
            time_us = duration_us * j // (SEEK_PROBE_COUNT - 1)
            position = seek_map.get_position(time_us)
            logger.debug("%s: seek probe %d at %d us -> byte %d", sample, j, time_us, position)

            input.set_position(position)
            output.clear_tracks()
            driver.consume(time_us, output, retry_from_start_if_live=False)

            name = self._store.probe_name(sample, j)
            self._store.assert_dump(sample, name, output.dump(), action)
            result.dumps_checked.append(name)

        return result

    def assert_throws(
        self,
        extractor: Extractor,
        data: bytes,
        expected: type[BaseException],
        config: SimulationConfig,
    ) -> VerificationResult:
        """
        Check that consuming data raises exactly the expected exception type.

        Args:
            extractor: Fresh extractor instance
            data: Input bytes
            expected: Exception class that must be raised
            config: Simulated I/O conditions

        Returns:
            VerificationResult with the driver counters.

        Raises:
            ExpectedFailureNotRaised: If the input was consumed to the end
            WrongFailureKind: If a different exception type was raised
        """
        input = FakeExtractorInput.from_config(data, config)
        driver = self._new_driver(extractor, input)

        try:
            driver.consume(0, retry_from_start_if_live=True)
        except Exception as e:
            if type(e) is expected:
                logger.debug("Raised expected %s: %s", expected.__name__, e)
                return VerificationResult(output=None, stats=driver.stats)
            raise WrongFailureKind(expected, e) from e

        raise ExpectedFailureNotRaised(expected)
