"""
Fault-injecting in-memory extractor input.

Faults are deterministic: the first read-side access at a read position and
the first peek-side access at a peek position raise TransientFault, and every
later access at the same position succeeds. Partial reads work the same way,
keyed on the end position a read or skip targets.
"""

from extractor_harness.domain import LENGTH_UNSET, RESULT_END_OF_INPUT, SimulationConfig
from extractor_harness.errors import TransientFault
from extractor_harness.interfaces import ExtractorInput


class FakeExtractorInput(ExtractorInput):
    """In-memory ExtractorInput with simulated I/O adversity."""

    def __init__(
        self,
        data: bytes,
        simulate_io_errors: bool = False,
        simulate_unknown_length: bool = False,
        simulate_partial_reads: bool = False,
    ):
        self._data = bytes(data)
        self._simulate_io_errors = simulate_io_errors
        self._simulate_unknown_length = simulate_unknown_length
        self._simulate_partial_reads = simulate_partial_reads

        self._read_position = 0
        self._peek_position = 0

        self._failed_read_positions: set[int] = set()
        self._failed_peek_positions: set[int] = set()
        self._partially_satisfied_targets: set[int] = set()

        self.fault_count = 0
        self.partial_read_count = 0

    @classmethod
    def from_config(cls, data: bytes, config: SimulationConfig) -> "FakeExtractorInput":
        """Build an input simulating the conditions of one matrix cell."""
        return cls(
            data,
            simulate_io_errors=config.inject_io_faults,
            simulate_unknown_length=config.simulate_unknown_length,
            simulate_partial_reads=config.simulate_partial_reads,
        )

    @property
    def data_length(self) -> int:
        """Actual size of the wrapped data, regardless of simulation."""
        return len(self._data)

    # =========================================================================
    # Position
    # =========================================================================

    def set_position(self, position: int) -> None:
        """
        Move both read and peek positions.

        Raises:
            ValueError: If position lies outside the data.
        """
        if not 0 <= position <= len(self._data):
            raise ValueError(f"Position {position} outside [0, {len(self._data)}]")
        self._read_position = position
        self._peek_position = position

    def get_position(self) -> int:
        return self._read_position

    def get_peek_position(self) -> int:
        return self._peek_position

    def get_length(self) -> int:
        if self._simulate_unknown_length:
            return LENGTH_UNSET
        return len(self._data)

    def reset_peek_position(self) -> None:
        self._peek_position = self._read_position

    # =========================================================================
    # Reading
    # =========================================================================

    def read(self, length: int) -> bytes:
        self._check_io_error(self._read_position, self._failed_read_positions)
        length = self._get_read_length(length)
        if length == 0:
            return b""
        return self._read_fully_internal(length, allow_end_of_input=False) or b""

    def read_fully(self, length: int, allow_end_of_input: bool = False) -> bytes | None:
        self._check_io_error(self._read_position, self._failed_read_positions)
        return self._read_fully_internal(length, allow_end_of_input)

    def skip(self, length: int) -> int:
        self._check_io_error(self._read_position, self._failed_read_positions)
        if self._read_position == len(self._data) and length > 0:
            return RESULT_END_OF_INPUT
        length = self._get_read_length(length)
        self._skip_fully_internal(length, allow_end_of_input=False)
        return length

    def skip_fully(self, length: int, allow_end_of_input: bool = False) -> bool:
        self._check_io_error(self._read_position, self._failed_read_positions)
        return self._skip_fully_internal(length, allow_end_of_input)

    # =========================================================================
    # Peeking
    # =========================================================================

    def peek_fully(self, length: int, allow_end_of_input: bool = False) -> bytes | None:
        self._check_io_error(self._peek_position, self._failed_peek_positions)
        if not self._check_x_fully(allow_end_of_input, self._peek_position, length):
            return None
        chunk = self._data[self._peek_position : self._peek_position + length]
        self._peek_position += length
        return chunk

    def advance_peek_position(self, length: int, allow_end_of_input: bool = False) -> bool:
        self._check_io_error(self._peek_position, self._failed_peek_positions)
        if not self._check_x_fully(allow_end_of_input, self._peek_position, length):
            return False
        self._peek_position += length
        return True

    # =========================================================================
    # Internals
    # =========================================================================

    def _check_x_fully(self, allow_end_of_input: bool, position: int, length: int) -> bool:
        if allow_end_of_input and position == len(self._data):
            return False
        if position + length > len(self._data):
            raise EOFError(
                f"Attempted to move past end of data: ({position} + {length}) > {len(self._data)}"
            )
        return True

    def _get_read_length(self, requested_length: int) -> int:
        available = len(self._data) - self._read_position
        if available == 0:
            return 0
        target_position = self._read_position + requested_length
        if (
            self._simulate_partial_reads
            and requested_length > 1
            and target_position not in self._partially_satisfied_targets
        ):
            self._partially_satisfied_targets.add(target_position)
            self.partial_read_count += 1
            return 1
        return min(requested_length, available)

    def _read_fully_internal(self, length: int, allow_end_of_input: bool) -> bytes | None:
        if not self._check_x_fully(allow_end_of_input, self._read_position, length):
            return None
        chunk = self._data[self._read_position : self._read_position + length]
        self._read_position += length
        self._peek_position = self._read_position
        return chunk

    def _skip_fully_internal(self, length: int, allow_end_of_input: bool) -> bool:
        if not self._check_x_fully(allow_end_of_input, self._read_position, length):
            return False
        self._read_position += length
        self._peek_position = self._read_position
        return True

    def _check_io_error(self, position: int, failed_positions: set[int]) -> None:
        if self._simulate_io_errors and position not in failed_positions:
            failed_positions.add(position)
            self._peek_position = self._read_position
            self.fault_count += 1
            raise TransientFault(position)
