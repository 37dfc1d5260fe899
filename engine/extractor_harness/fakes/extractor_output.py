"""
Recording extractor output.

Keeps every track, sample and seek map an extractor publishes so the
verifier can dump and compare them. Track sinks keep their identity for the
whole test; clear() only drops their recorded samples.
"""

import hashlib
from dataclasses import dataclass
from typing import Any

from extractor_harness.domain import RESULT_END_OF_INPUT, Format, SeekMap
from extractor_harness.interfaces import ExtractorInput, ExtractorOutput, TrackOutput


def _digest(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()[:16]


@dataclass(frozen=True)
class _SampleInfo:
    time_us: int
    flags: int
    start: int
    end: int


class FakeTrackOutput(TrackOutput):
    """Records the format and samples of one track."""

    def __init__(self) -> None:
        self.format_value: Format | None = None
        self._sample_data = bytearray()
        self._samples: list[_SampleInfo] = []

    def format(self, format: Format) -> None:
        self.format_value = format

    def sample_data(self, input: ExtractorInput, length: int, allow_end_of_input: bool) -> int:
        chunk = input.read(length)
        if not chunk and length > 0:
            if allow_end_of_input:
                return RESULT_END_OF_INPUT
            raise EOFError("End of input while reading sample data")
        self._sample_data.extend(chunk)
        return len(chunk)

    def sample_data_bytes(self, data: bytes) -> None:
        self._sample_data.extend(data)

    def sample_metadata(self, time_us: int, flags: int, size: int, offset: int) -> None:
        end = len(self._sample_data) - offset
        start = end - size
        if start < 0:
            raise ValueError(f"Sample of size {size} at offset {offset} exceeds appended data")
        self._samples.append(_SampleInfo(time_us=time_us, flags=flags, start=start, end=end))

    def clear(self) -> None:
        """Drop recorded sample bytes and metadata, keeping the format."""
        self._sample_data = bytearray()
        self._samples = []

    @property
    def sample_count(self) -> int:
        return len(self._samples)

    @property
    def sample_times_us(self) -> list[int]:
        return [sample.time_us for sample in self._samples]

    def get_sample_data(self, index: int) -> bytes:
        sample = self._samples[index]
        return bytes(self._sample_data[sample.start : sample.end])

    def get_sample_flags(self, index: int) -> int:
        return self._samples[index].flags

    def dump(self) -> dict[str, Any]:
        return {
            "format": self.format_value.dump() if self.format_value else None,
            "total_output_bytes": len(self._sample_data),
            "sample_count": len(self._samples),
            "samples": [
                {
                    "time_us": sample.time_us,
                    "flags": sample.flags,
                    "size": sample.end - sample.start,
                    "data": _digest(bytes(self._sample_data[sample.start : sample.end])),
                }
                for sample in self._samples
            ],
        }


class FakeExtractorOutput(ExtractorOutput):
    """
    Records tracks and the seek map published by an extractor.

    Tracks are kept in the order they were first requested.
    """

    def __init__(self) -> None:
        self.track_outputs: dict[int, FakeTrackOutput] = {}
        self.tracks_ended = False
        self.seek_map_value: SeekMap | None = None

    def track(self, id: int) -> FakeTrackOutput:
        output = self.track_outputs.get(id)
        if output is None:
            if self.tracks_ended:
                raise AssertionError(f"Track {id} created after end_tracks()")
            output = FakeTrackOutput()
            self.track_outputs[id] = output
        return output

    def end_tracks(self) -> None:
        self.tracks_ended = True

    def seek_map(self, seek_map: SeekMap) -> None:
        self.seek_map_value = seek_map

    @property
    def number_of_tracks(self) -> int:
        return len(self.track_outputs)

    def clear_tracks(self) -> None:
        """Clear the samples of every track sink."""
        for track_output in self.track_outputs.values():
            track_output.clear()

    def dump(self) -> dict[str, Any]:
        """Structural record compared against golden dumps."""
        seek_map = self.seek_map_value
        return {
            "seek_map": (
                {
                    "is_seekable": seek_map.is_seekable(),
                    "duration_us": seek_map.get_duration_us(),
                    "position_at_0": seek_map.get_position(0),
                }
                if seek_map is not None
                else None
            ),
            "number_of_tracks": self.number_of_tracks,
            "tracks_ended": self.tracks_ended,
            "tracks": {
                str(track_id): track_output.dump()
                for track_id, track_output in self.track_outputs.items()
            },
        }
