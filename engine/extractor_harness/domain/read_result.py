"""
Read outcome and seek slot.

One call to Extractor.read returns a ReadOutcome; when it is SEEK the
extractor has written the requested byte offset into the PositionHolder.
"""

from enum import Enum

from extractor_harness.errors import ProtocolViolation

LENGTH_UNSET = -1
TIME_UNSET = -(2**63) + 1
RESULT_END_OF_INPUT = -1

# Written into the seek slot before every read; no extractor may produce it.
POSITION_SENTINEL = -(2**63)
MAX_SEEK_POSITION = 2**31 - 1

BUFFER_FLAG_KEY_FRAME = 1
BUFFER_FLAG_ENCRYPTED = 1 << 30
BUFFER_FLAG_DECODE_ONLY = 1 << 31


class ReadOutcome(str, Enum):
    """Result of a single Extractor.read call."""

    CONTINUE = "continue"
    SEEK = "seek"
    END_OF_INPUT = "end_of_input"


class PositionHolder:
    """
    Mutable slot an extractor writes its requested seek position into.

    While armed, reading the slot raises ProtocolViolation: an extractor that
    consults it before writing is acting on stale seek state.
    """

    def __init__(self, position: int = 0) -> None:
        self._position = position

    @property
    def position(self) -> int:
        if self._position == POSITION_SENTINEL:
            raise ProtocolViolation(
                "Seek position read before it was written", value=POSITION_SENTINEL
            )
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        self._position = value

    def arm(self) -> None:
        """Overwrite the slot with a value no valid seek can produce."""
        self._position = POSITION_SENTINEL

    @property
    def is_armed(self) -> bool:
        return self._position == POSITION_SENTINEL

    def __repr__(self) -> str:
        shown = "<armed>" if self.is_armed else self._position
        return f"PositionHolder(position={shown})"
