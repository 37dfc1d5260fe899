"""
Tests for harness logging setup.
"""

import json
import logging

import pytest

from extractor_harness.logging import (
    HarnessFormatter,
    clear_cell_id,
    current_cell_id,
    set_cell_id,
    setup_logging,
)


@pytest.fixture
def record() -> logging.LogRecord:
    return logging.LogRecord("extractor_harness.test", logging.INFO, __file__, 1, "hello", None, None)


class TestHarnessFormatter:
    def test_includes_cell_id(self, record: logging.LogRecord) -> None:
        set_cell_id("sample:io+unklen-partial-")
        try:
            line = HarnessFormatter("%(cell_id)s%(message)s").format(record)
        finally:
            clear_cell_id()

        assert line == "[sample:io+unklen-partial-] hello"

    def test_without_cell_id(self, record: logging.LogRecord) -> None:
        line = HarnessFormatter("%(cell_id)s%(message)s").format(record)

        assert line == "hello"
        assert current_cell_id.get() is None

    def test_json_line_escapes_message(self) -> None:
        record = logging.LogRecord(
            "extractor_harness.test", logging.WARNING, __file__, 1, "bad \"%s\"", ("x",), None
        )
        set_cell_id("clip:io-unklen+partial-")
        try:
            line = HarnessFormatter(json_output=True).format(record)
        finally:
            clear_cell_id()

        entry = json.loads(line)
        assert entry["message"] == 'bad "x"'
        assert entry["cell"] == "clip:io-unklen+partial-"
        assert entry["level"] == "WARNING"


class TestSetupLogging:
    def test_configures_package_logger(self) -> None:
        logger = setup_logging("debug")

        assert logger.name == "extractor_harness"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, HarnessFormatter)

    def test_repeated_setup_replaces_handler(self) -> None:
        setup_logging("INFO")
        logger = setup_logging("WARNING", json_output=True)

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
