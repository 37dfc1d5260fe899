"""
Interfaces (abstract base classes) consumed by the harness.

These define the contracts between the harness and the code under test:
- Extractor: the parser being verified
- ExtractorInput: the byte source an extractor reads from
- ExtractorOutput / TrackOutput: where an extractor publishes tracks and samples
"""

from extractor_harness.interfaces.extractor import Extractor, ExtractorFactory
from extractor_harness.interfaces.extractor_input import ExtractorInput
from extractor_harness.interfaces.extractor_output import ExtractorOutput, TrackOutput

__all__ = [
    "Extractor",
    "ExtractorFactory",
    "ExtractorInput",
    "ExtractorOutput",
    "TrackOutput",
]
