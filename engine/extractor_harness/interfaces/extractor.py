"""
Extractor interface.

Defines the contract for container parsers driven by the harness.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from extractor_harness.domain import PositionHolder, ReadOutcome
from extractor_harness.interfaces.extractor_input import ExtractorInput
from extractor_harness.interfaces.extractor_output import ExtractorOutput


class Extractor(ABC):
    """
    Abstract base class for streaming container parsers.

    Every method may raise TransientFault when the input does; an extractor
    must leave its state such that repeating the same call is valid.
    """

    @abstractmethod
    def sniff(self, input: ExtractorInput) -> bool:
        """
        Check whether the input is in a format this extractor understands.

        Only peek operations may be used; the read position must not move.

        Args:
            input: Input positioned at the start of the stream

        Returns:
            True if the format is recognised.
        """
        pass

    @abstractmethod
    def init(self, output: ExtractorOutput) -> None:
        """
        Attach the output that tracks and samples are published to.

        Args:
            output: Output receiving tracks, samples and the seek map
        """
        pass

    @abstractmethod
    def seek(self, position: int, time_us: int) -> None:
        """
        Notify the extractor that reading restarts at a new position.

        Args:
            position: Byte offset the next read will start from
            time_us: Media time the seek targets
        """
        pass

    @abstractmethod
    def read(self, input: ExtractorInput, seek_position: PositionHolder) -> ReadOutcome:
        """
        Consume some input and publish what it yields.

        Args:
            input: Input to read from
            seek_position: Slot to write the requested offset into when returning SEEK

        Returns:
            CONTINUE, SEEK or END_OF_INPUT.
        """
        pass

    def release(self) -> None:
        """Release any resources held by the extractor."""
        pass


ExtractorFactory = Callable[[], Extractor]
