"""
Fake collaborators used to drive extractors under test.

- FakeExtractorInput: in-memory input that injects transient faults,
  hides its length and shortens reads on demand
- FakeExtractorOutput / FakeTrackOutput: record everything an extractor emits
"""

from extractor_harness.fakes.extractor_input import FakeExtractorInput
from extractor_harness.fakes.extractor_output import FakeExtractorOutput, FakeTrackOutput

__all__ = ["FakeExtractorInput", "FakeExtractorOutput", "FakeTrackOutput"]
