"""
Domain models for the extractor harness.

These models represent the values exchanged between harness and extractor:
- ReadOutcome / PositionHolder: result of one read call and its seek slot
- SimulationConfig: one cell of the fault matrix
- SeekMap: time to byte-position mapping emitted by an extractor
- Format: description of one track
"""

from extractor_harness.domain.format import Format
from extractor_harness.domain.read_result import (
    BUFFER_FLAG_DECODE_ONLY,
    BUFFER_FLAG_ENCRYPTED,
    BUFFER_FLAG_KEY_FRAME,
    LENGTH_UNSET,
    MAX_SEEK_POSITION,
    POSITION_SENTINEL,
    RESULT_END_OF_INPUT,
    TIME_UNSET,
    PositionHolder,
    ReadOutcome,
)
from extractor_harness.domain.seek_map import IndexSeekMap, SeekMap, Unseekable
from extractor_harness.domain.simulation import SimulationConfig

__all__ = [
    "BUFFER_FLAG_DECODE_ONLY",
    "BUFFER_FLAG_ENCRYPTED",
    "BUFFER_FLAG_KEY_FRAME",
    "Format",
    "IndexSeekMap",
    "LENGTH_UNSET",
    "MAX_SEEK_POSITION",
    "POSITION_SENTINEL",
    "PositionHolder",
    "RESULT_END_OF_INPUT",
    "ReadOutcome",
    "SeekMap",
    "SimulationConfig",
    "TIME_UNSET",
    "Unseekable",
]
