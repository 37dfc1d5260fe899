"""
Consumption driver.

Runs an extractor through sniff, seek and read against a fault-injecting
input:

    SNIFFING -> SEEKING(time_us) -> READING -> DONE

Transient faults are the only errors handled here. While sniffing, and while
reading an on-demand stream, the failed call is simply repeated. A live
stream (length unknown and no seek map with a finite duration) that faults
while reading is restarted from byte 0 with every track sink cleared, so the
extractor's resynchronisation path is exercised.
"""

from dataclasses import asdict, dataclass

from extractor_harness.domain import (
    LENGTH_UNSET,
    MAX_SEEK_POSITION,
    PositionHolder,
    ReadOutcome,
)
from extractor_harness.errors import ProtocolViolation, RetryLimitExceeded, TransientFault
from extractor_harness.fakes import FakeExtractorInput, FakeExtractorOutput
from extractor_harness.interfaces import Extractor
from extractor_harness.logging import get_logger

logger = get_logger(__name__)


@dataclass
class DriverStats:
    """Counters describing what one driver observed."""

    sniff_calls: int = 0
    sniff_faults: int = 0
    read_calls: int = 0
    read_faults: int = 0
    seek_requests: int = 0
    restarts: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


class ConsumptionDriver:
    """
    Drives one extractor over one input.

    The same driver is reused for the full run and every seek probe of a
    matrix cell, so its stats accumulate across them.
    """

    def __init__(
        self,
        extractor: Extractor,
        input: FakeExtractorInput,
        max_read_retries: int | None = None,
        max_sniff_retries: int | None = None,
    ):
        """
        Initialize consumption driver.

        Args:
            extractor: Extractor under test
            input: Input to drive it over
            max_read_retries: Consecutive faults tolerated per read (None = unbounded)
            max_sniff_retries: Consecutive faults tolerated while sniffing (None = unbounded)
        """
        self._extractor = extractor
        self._input = input
        self._max_read_retries = max_read_retries
        self._max_sniff_retries = max_sniff_retries
        self.stats = DriverStats()

    @property
    def input(self) -> FakeExtractorInput:
        return self._input

    def sniff(self) -> bool:
        """
        Ask the extractor whether it recognises the input.

        Returns:
            The extractor's answer once a call completes without a transient fault.
        """
        consecutive_faults = 0
        while True:
            self.stats.sniff_calls += 1
            try:
                return self._extractor.sniff(self._input)
            except TransientFault as e:
                self.stats.sniff_faults += 1
                consecutive_faults += 1
                logger.debug("Transient fault while sniffing at %d, retrying", e.position)
                _check_retry_limit("sniff", consecutive_faults, self._max_sniff_retries)

    def consume(
        self,
        time_us: int,
        output: FakeExtractorOutput | None = None,
        retry_from_start_if_live: bool = False,
    ) -> FakeExtractorOutput:
        """
        Seek to time_us at the input's current position and read to the end.

        Args:
            time_us: Media time passed to Extractor.seek
            output: Existing output to keep recording into; when None a new one
                is created and passed to Extractor.init
            retry_from_start_if_live: Restart live streams from byte 0 on a fault

        Returns:
            The output holding everything the extractor emitted.
        """
        if output is None:
            output = FakeExtractorOutput()
            self._extractor.init(output)

        self._extractor.seek(self._input.get_position(), time_us)

        seek_position = PositionHolder()
        outcome = ReadOutcome.CONTINUE
        consecutive_faults = 0
        while outcome != ReadOutcome.END_OF_INPUT:
            try:
                seek_position.arm()
                self.stats.read_calls += 1
                outcome = self._extractor.read(self._input, seek_position)
                consecutive_faults = 0
                if outcome == ReadOutcome.SEEK:
                    self._apply_seek(seek_position)
            except TransientFault as e:
                self.stats.read_faults += 1
                consecutive_faults += 1
                _check_retry_limit("read", consecutive_faults, self._max_read_retries)
                if not retry_from_start_if_live or self._is_on_demand(output):
                    logger.debug("Transient fault at %d, retrying read", e.position)
                    continue
                logger.debug("Transient fault at %d on live stream, restarting from 0", e.position)
                self._restart_from_zero(output)

        return output

    def _apply_seek(self, seek_position: PositionHolder) -> None:
        position = seek_position.position
        if not 0 <= position <= MAX_SEEK_POSITION:
            raise ProtocolViolation(f"Invalid seek position: {position}", value=position)
        self.stats.seek_requests += 1
        logger.debug("Extractor requested seek to %d", position)
        self._input.set_position(position)

    def _is_on_demand(self, output: FakeExtractorOutput) -> bool:
        if self._input.get_length() != LENGTH_UNSET:
            return True
        seek_map = output.seek_map_value
        return seek_map is not None and seek_map.has_finite_duration

    def _restart_from_zero(self, output: FakeExtractorOutput) -> None:
        self._input.set_position(0)
        output.clear_tracks()
        self._extractor.seek(0, 0)
        self.stats.restarts += 1


def _check_retry_limit(operation: str, consecutive_faults: int, limit: int | None) -> None:
    if limit is not None and consecutive_faults > limit:
        raise RetryLimitExceeded(operation, limit)


def sniff_test_data(extractor: Extractor, data: bytes | FakeExtractorInput) -> bool:
    """
    Sniff data, retrying transient faults without bound.

    Args:
        extractor: Extractor under test
        data: Raw bytes (wrapped in a fault-free input) or a prepared input

    Returns:
        The extractor's sniff result.
    """
    input = data if isinstance(data, FakeExtractorInput) else FakeExtractorInput(data)
    return ConsumptionDriver(extractor, input).sniff()


def consume_test_data(
    extractor: Extractor,
    input: FakeExtractorInput,
    time_us: int = 0,
    retry_from_start_if_live: bool = False,
) -> FakeExtractorOutput:
    """
    Initialize extractor with a fresh output and read input to the end.

    Args:
        extractor: Extractor under test
        input: Input positioned where reading starts
        time_us: Media time passed to Extractor.seek
        retry_from_start_if_live: Restart live streams from byte 0 on a fault

    Returns:
        The populated output.
    """
    return ConsumptionDriver(extractor, input).consume(
        time_us, retry_from_start_if_live=retry_from_start_if_live
    )
