"""
Extraction harness.

- ConsumptionDriver: sniff/seek/read state machine with fault recovery
- GoldenVerifier: golden comparison and expected-failure protocols for one cell
- FaultMatrixRunner: both protocols across all eight simulation cells
"""

from extractor_harness.harness.driver import (
    ConsumptionDriver,
    DriverStats,
    consume_test_data,
    sniff_test_data,
)
from extractor_harness.harness.matrix import FaultMatrixRunner
from extractor_harness.harness.models import CellResult, MatrixMode, MatrixReport
from extractor_harness.harness.verifier import GoldenVerifier, VerificationResult

__all__ = [
    "CellResult",
    "ConsumptionDriver",
    "DriverStats",
    "FaultMatrixRunner",
    "GoldenVerifier",
    "MatrixMode",
    "MatrixReport",
    "VerificationResult",
    "consume_test_data",
    "sniff_test_data",
]
