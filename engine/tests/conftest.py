"""
Pytest configuration and shared fixtures.
"""

import os
from collections.abc import Generator
from pathlib import Path

import pytest

from extractor_harness.config import HarnessSettings, get_settings
from extractor_harness.golden import GoldenStore
from extractor_harness.logging import setup_logging


def pytest_configure(config: pytest.Config) -> None:
    """Route harness logs through the harness formatter."""
    setup_logging(HarnessSettings(_env_file=None).log_level)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Ensure no local XHARNESS_ settings leak into tests."""
    for var in list(os.environ):
        if var.upper().startswith("XHARNESS_"):
            monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def golden_dir(tmp_path: Path) -> Path:
    """Directory holding samples and dumps for one test."""
    path = tmp_path / "goldens"
    path.mkdir()
    return path


@pytest.fixture
def golden_store(golden_dir: Path) -> GoldenStore:
    return GoldenStore(golden_dir)


@pytest.fixture
def settings(golden_dir: Path) -> HarnessSettings:
    """Default settings rooted at the test's golden directory."""
    return HarnessSettings(_env_file=None, golden_dir=golden_dir)
