"""
Fault matrix result models.

Defines per-cell results and the report for one sample's matrix run.
"""

import json
import re
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

import pandas as pd
from pydantic import BaseModel, Field

from extractor_harness.domain import SimulationConfig
from extractor_harness.logging import get_logger

logger = get_logger(__name__)


def _safe_file_stem(name: str) -> str:
    """Replace characters that are not portable in file names with underscores."""
    return re.sub(r"[^A-Za-z0-9._-]", "_", name)


class MatrixMode(str, Enum):
    """Which verification protocol a matrix ran."""

    ASSERT_OUTPUT = "assert_output"
    ASSERT_THROWS = "assert_throws"


class CellResult(BaseModel):
    """Outcome of one fault matrix cell."""

    config: SimulationConfig
    ok: bool
    error_type: str | None = Field(default=None, description="Exception class name on failure")
    error: str | None = Field(default=None, description="Exception message on failure")
    duration_s: float = 0.0

    # Driver counters
    sniff_faults: int = 0
    read_calls: int = 0
    read_faults: int = 0
    seek_requests: int = 0
    restarts: int = 0

    dumps_checked: list[str] = Field(default_factory=list)

    @property
    def label(self) -> str:
        return self.config.label


class MatrixReport(BaseModel):
    """All cell results for one sample under one protocol."""

    sample: str
    mode: MatrixMode
    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None
    cells: list[CellResult] = Field(default_factory=list)

    @property
    def total_cells(self) -> int:
        return len(self.cells)

    @property
    def failed_cells(self) -> list[CellResult]:
        return [cell for cell in self.cells if not cell.ok]

    @property
    def ok(self) -> bool:
        return not self.failed_cells

    def to_frame(self) -> pd.DataFrame:
        """One row per cell, flags expanded into columns."""
        return pd.DataFrame(
            [
                {
                    "cell": cell.label,
                    "inject_io_faults": cell.config.inject_io_faults,
                    "simulate_unknown_length": cell.config.simulate_unknown_length,
                    "simulate_partial_reads": cell.config.simulate_partial_reads,
                    "ok": cell.ok,
                    "error_type": cell.error_type,
                    "error": cell.error,
                    "duration_s": cell.duration_s,
                    "read_calls": cell.read_calls,
                    "read_faults": cell.read_faults,
                    "seek_requests": cell.seek_requests,
                    "restarts": cell.restarts,
                }
                for cell in self.cells
            ]
        )

    def write(self, report_dir: Path) -> Path:
        """
        Write the report as CSV plus JSON.

        Args:
            report_dir: Output directory

        Returns:
            Path to the CSV file.
        """
        report_dir.mkdir(parents=True, exist_ok=True)
        stem = f"{_safe_file_stem(self.sample)}.{self.mode.value}.matrix"

        csv_path = report_dir / f"{stem}.csv"
        self.to_frame().to_csv(csv_path, index=False)

        with open(report_dir / f"{stem}.json", "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, default=str)

        logger.debug("Wrote matrix report to %s", csv_path)
        return csv_path
