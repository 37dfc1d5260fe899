"""
Seek map models.

A SeekMap is emitted by an extractor once it knows how time maps onto
byte offsets. It is immutable once produced.
"""

from abc import ABC, abstractmethod
from bisect import bisect_right

from pydantic import BaseModel, ConfigDict, Field, model_validator

from extractor_harness.domain.read_result import TIME_UNSET


class SeekMap(ABC):
    """Maps a media time onto the byte offset reading should resume from."""

    @abstractmethod
    def is_seekable(self) -> bool:
        """Whether get_position is meaningful for times other than zero."""

    @abstractmethod
    def get_duration_us(self) -> int:
        """Stream duration in microseconds, or TIME_UNSET."""

    @abstractmethod
    def get_position(self, time_us: int) -> int:
        """Byte offset to resume reading from for time_us."""

    @property
    def has_finite_duration(self) -> bool:
        return self.get_duration_us() != TIME_UNSET


class Unseekable(BaseModel, SeekMap):
    """Seek map for streams that can only be read from the start."""

    model_config = ConfigDict(frozen=True)

    duration_us: int = TIME_UNSET
    start_position: int = Field(default=0, ge=0)

    def is_seekable(self) -> bool:
        return False

    def get_duration_us(self) -> int:
        return self.duration_us

    def get_position(self, time_us: int) -> int:
        return self.start_position


class IndexSeekMap(BaseModel, SeekMap):
    """
    Seek map backed by a table of (time, position) entries.

    Lookups resolve to the last entry at or before the requested time, so
    positions are monotonic non-decreasing in time.
    """

    model_config = ConfigDict(frozen=True)

    times_us: tuple[int, ...] = Field(..., min_length=1)
    positions: tuple[int, ...] = Field(..., min_length=1)
    duration_us: int = TIME_UNSET

    @model_validator(mode="after")
    def check_table(self) -> "IndexSeekMap":
        """Validate the table is consistent and sorted."""
        if len(self.times_us) != len(self.positions):
            raise ValueError("times_us and positions must have the same length")
        if list(self.times_us) != sorted(self.times_us):
            raise ValueError("times_us must be sorted")
        if list(self.positions) != sorted(self.positions):
            raise ValueError("positions must be sorted")
        if self.positions[0] < 0:
            raise ValueError("positions must be non-negative")
        return self

    def is_seekable(self) -> bool:
        return True

    def get_duration_us(self) -> int:
        return self.duration_us

    def get_position(self, time_us: int) -> int:
        index = max(bisect_right(self.times_us, time_us) - 1, 0)
        return self.positions[index]
