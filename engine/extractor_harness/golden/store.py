"""
Golden dump storage.

Sample files and their dumps live side by side under one root:

    {root}/
        {sample}                  # raw sample bytes
        {sample}.dump             # full run (optional; falls back to .0.dump)
        {sample}.{j}.dump         # seek probe j in 0..3
        {sample}.unklen.dump      # full run when the length is unknown (optional)
"""

import json
from pathlib import Path
from typing import Any

from extractor_harness.config import DumpAction
from extractor_harness.errors import GoldenMismatch, GoldenMissing
from extractor_harness.golden.compare import find_first_divergence
from extractor_harness.logging import get_logger

logger = get_logger(__name__)

DUMP_EXTENSION = ".dump"
UNKNOWN_LENGTH_EXTENSION = ".unklen" + DUMP_EXTENSION


class GoldenStore:
    """Resolves, loads, compares and writes golden dumps."""

    def __init__(self, root: Path) -> None:
        """
        Initialize golden store.

        Args:
            root: Directory holding samples and dumps
        """
        self.root = Path(root)

    # =========================================================================
    # Naming
    # =========================================================================

    @staticmethod
    def probe_name(sample: str, index: int) -> str:
        return f"{sample}.{index}{DUMP_EXTENSION}"

    @staticmethod
    def unknown_length_name(sample: str) -> str:
        return sample + UNKNOWN_LENGTH_EXTENSION

    def full_run_name(self, sample: str) -> str:
        """Dump for a full run, preferring a dedicated file over probe 0."""
        dedicated = sample + DUMP_EXTENSION
        if self.exists(dedicated):
            return dedicated
        return self.probe_name(sample, 0)

    def select_full_run(self, sample: str, simulate_unknown_length: bool) -> str:
        """
        Pick the dump a full run is compared against.

        Args:
            sample: Sample file name
            simulate_unknown_length: Whether the input hid its length

        Returns:
            Dump file name.
        """
        if simulate_unknown_length:
            unknown_length = self.unknown_length_name(sample)
            if self.exists(unknown_length):
                return unknown_length
        return self.full_run_name(sample)

    # =========================================================================
    # File access
    # =========================================================================

    def exists(self, name: str) -> bool:
        return (self.root / name).is_file()

    def read_sample(self, name: str) -> bytes:
        path = self.root / name
        if not path.is_file():
            raise FileNotFoundError(f"Sample not found: {path}")
        return path.read_bytes()

    def load_dump(self, name: str) -> dict[str, Any]:
        path = self.root / name
        if not path.is_file():
            raise GoldenMissing(f"Golden dump not found: {path}")
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    def write_dump(self, name: str, dump: dict[str, Any]) -> Path:
        path = self.root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(dump, f, indent=2)
            f.write("\n")
        logger.info("Wrote golden dump %s", path)
        return path

    # =========================================================================
    # Verification
    # =========================================================================

    def assert_dump(
        self,
        sample: str,
        name: str,
        dump: dict[str, Any],
        action: DumpAction = DumpAction.COMPARE,
    ) -> None:
        """
        Compare a recorded dump with the stored one, or record it.

        Args:
            sample: Sample file name, for error reporting
            name: Dump file name
            dump: Recorded dump
            action: COMPARE to assert equality, WRITE to store the dump

        Raises:
            GoldenMissing: If comparing and the dump file does not exist
            GoldenMismatch: If the dumps differ
        """
        if action == DumpAction.WRITE:
            self.write_dump(name, dump)
            return

        # Round-trip through JSON so tuples and lists compare alike
        recorded = json.loads(json.dumps(dump))
        divergence = find_first_divergence(self.load_dump(name), recorded)
        if divergence:
            variant = name[len(sample) :].lstrip(".") if name.startswith(sample) else name
            raise GoldenMismatch(sample, variant, divergence)
        logger.debug("Dump %s matches", name)
