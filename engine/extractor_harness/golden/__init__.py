"""
Golden dump storage and comparison.
"""

from extractor_harness.golden.compare import find_first_divergence
from extractor_harness.golden.store import (
    DUMP_EXTENSION,
    UNKNOWN_LENGTH_EXTENSION,
    GoldenStore,
)

__all__ = [
    "DUMP_EXTENSION",
    "GoldenStore",
    "UNKNOWN_LENGTH_EXTENSION",
    "find_first_divergence",
]
