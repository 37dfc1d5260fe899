"""
ExtractorOutput and TrackOutput interfaces.

Define where an extractor publishes what it parses.
"""

from abc import ABC, abstractmethod

from extractor_harness.domain import Format, SeekMap
from extractor_harness.interfaces.extractor_input import ExtractorInput


class TrackOutput(ABC):
    """Receives the format and samples of one track."""

    @abstractmethod
    def format(self, format: Format) -> None:
        """Announce or update the track format."""
        pass

    @abstractmethod
    def sample_data(self, input: ExtractorInput, length: int, allow_end_of_input: bool) -> int:
        """
        Append sample bytes read from input.

        Args:
            input: Input to read from
            length: Maximum number of bytes to append
            allow_end_of_input: Return RESULT_END_OF_INPUT instead of raising at end

        Returns:
            Number of bytes appended, or RESULT_END_OF_INPUT.
        """
        pass

    @abstractmethod
    def sample_data_bytes(self, data: bytes) -> None:
        """Append sample bytes the extractor already holds."""
        pass

    @abstractmethod
    def sample_metadata(self, time_us: int, flags: int, size: int, offset: int) -> None:
        """
        Commit a sample.

        Args:
            time_us: Presentation time
            flags: BUFFER_FLAG_* bit set
            size: Sample size in bytes
            offset: Bytes appended after the end of this sample
        """
        pass


class ExtractorOutput(ABC):
    """Receives tracks and the seek map from an extractor."""

    @abstractmethod
    def track(self, id: int) -> TrackOutput:
        """Return the output for track id, creating it on first use."""
        pass

    @abstractmethod
    def end_tracks(self) -> None:
        """Signal that no further tracks will be created."""
        pass

    @abstractmethod
    def seek_map(self, seek_map: SeekMap) -> None:
        """Publish the stream's seek map."""
        pass
