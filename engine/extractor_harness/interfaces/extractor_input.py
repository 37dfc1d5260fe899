"""
ExtractorInput interface.

Defines the byte source an extractor reads from. Reads advance the read
position; peeks advance a separate peek position that is reset to the read
position by reset_peek_position or by any read.
"""

from abc import ABC, abstractmethod


class ExtractorInput(ABC):
    """Abstract base class for extractor byte sources."""

    # =========================================================================
    # Reading
    # =========================================================================

    @abstractmethod
    def read(self, length: int) -> bytes:
        """
        Read up to length bytes. May return fewer; returns b"" at end of input.
        """
        pass

    @abstractmethod
    def read_fully(self, length: int, allow_end_of_input: bool = False) -> bytes | None:
        """
        Read exactly length bytes.

        Returns:
            The bytes, or None if allow_end_of_input and the input was already
            at its end.

        Raises:
            EOFError: If the end of input is hit part way through.
        """
        pass

    @abstractmethod
    def skip(self, length: int) -> int:
        """Skip up to length bytes, returning the count or RESULT_END_OF_INPUT."""
        pass

    @abstractmethod
    def skip_fully(self, length: int, allow_end_of_input: bool = False) -> bool:
        """Skip exactly length bytes. Returns False at end of input if allowed."""
        pass

    # =========================================================================
    # Peeking
    # =========================================================================

    @abstractmethod
    def peek_fully(self, length: int, allow_end_of_input: bool = False) -> bytes | None:
        """Peek exactly length bytes from the peek position."""
        pass

    @abstractmethod
    def advance_peek_position(self, length: int, allow_end_of_input: bool = False) -> bool:
        """Advance the peek position without returning data."""
        pass

    @abstractmethod
    def reset_peek_position(self) -> None:
        """Move the peek position back to the read position."""
        pass

    @abstractmethod
    def get_peek_position(self) -> int:
        pass

    # =========================================================================
    # Position
    # =========================================================================

    @abstractmethod
    def get_position(self) -> int:
        """Current read position."""
        pass

    @abstractmethod
    def get_length(self) -> int:
        """Total length in bytes, or LENGTH_UNSET if unknown."""
        pass
