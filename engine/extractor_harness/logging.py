"""
Harness log setup.

Every record carries the matrix cell that emitted it, so output from cells
running on a thread pool can still be attributed. Records are written to
stdout as plain text, or as one JSON object per line for CI collectors.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import UTC, datetime

# Label of the matrix cell running in the current thread or task
current_cell_id: ContextVar[str | None] = ContextVar("current_cell_id", default=None)

TEXT_FORMAT = "%(timestamp)s | %(levelname)-8s | %(name)s | %(cell_id)s%(message)s"


class HarnessFormatter(logging.Formatter):
    """Adds a UTC timestamp and the active cell label to each record."""

    def __init__(self, fmt: str | None = TEXT_FORMAT, json_output: bool = False):
        super().__init__(fmt)
        self._json_output = json_output

    def format(self, record: logging.LogRecord) -> str:
        record.timestamp = datetime.now(UTC).isoformat()

        cell_id = current_cell_id.get()
        record.cell_id = f"[{cell_id}] " if cell_id else ""

        if not self._json_output:
            return super().format(record)

        entry = {
            "timestamp": record.timestamp,
            "level": record.levelname,
            "module": record.name,
            "cell": cell_id,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(level: str = "INFO", json_output: bool = False) -> logging.Logger:
    """
    Install a single stdout handler on the extractor_harness logger.

    Calling it again replaces the handler, so tests may reconfigure freely.

    Args:
        level: Level name, case-insensitive; unknown names fall back to INFO
        json_output: Emit JSON lines instead of pipe-separated text

    Returns:
        The extractor_harness logger
    """
    logger = logging.getLogger("extractor_harness")
    logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(HarnessFormatter(json_output=json_output))
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a harness module; pass __name__ so records nest under extractor_harness."""
    return logging.getLogger(name)


def set_cell_id(cell_id: str) -> None:
    """Tag subsequent records from this context with cell_id."""
    current_cell_id.set(cell_id)


def clear_cell_id() -> None:
    """Stop tagging records with a cell label."""
    current_cell_id.set(None)
