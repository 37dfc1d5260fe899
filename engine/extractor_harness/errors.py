"""
Exception types raised by the harness.

TransientFault is the only recoverable kind; it is injected by the fake
input and absorbed by the consumption driver. Everything else derives from
HarnessError, an AssertionError, so test runners report it as a failure.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from extractor_harness.domain.simulation import SimulationConfig
    from extractor_harness.harness.models import MatrixReport


class TransientFault(OSError):
    """Simulated I/O error raised by the fault-injecting input."""

    def __init__(self, position: int):
        super().__init__(f"Simulated IO error at position: {position}")
        self.position = position


class HarnessError(AssertionError):
    """Base class for failures reported by the harness."""

    pass


class ProtocolViolation(HarnessError):
    """Raised when an extractor breaks the read/seek contract."""

    def __init__(self, message: str, value: int | None = None):
        super().__init__(message)
        self.value = value


class SniffFailed(HarnessError):
    """Raised when an extractor does not recognise its own sample."""

    pass


class RetryLimitExceeded(HarnessError):
    """Raised when a configured transient-fault retry ceiling is hit."""

    def __init__(self, operation: str, limit: int):
        super().__init__(f"{operation} failed with {limit} consecutive transient faults")
        self.operation = operation
        self.limit = limit


class GoldenMissing(HarnessError):
    """Raised when the selected dump file does not exist."""

    pass


class GoldenMismatch(HarnessError):
    """Raised when a recorded output differs from its stored dump."""

    def __init__(self, sample: str, variant: str, divergence: str):
        super().__init__(f"{sample} [{variant}] differs from golden dump: {divergence}")
        self.sample = sample
        self.variant = variant
        self.divergence = divergence


class ExpectedFailureNotRaised(HarnessError):
    """Raised when assert_throws reaches end of input without an error."""

    def __init__(self, expected: type[BaseException]):
        super().__init__(f"{expected.__name__} expected but not thrown")
        self.expected = expected


class WrongFailureKind(HarnessError):
    """Raised when assert_throws observes an error of another type."""

    def __init__(self, expected: type[BaseException], actual: BaseException):
        super().__init__(
            f"{expected.__name__} expected but {type(actual).__name__} was thrown: {actual}"
        )
        self.expected = expected
        self.actual = actual


class MatrixFailure(HarnessError):
    """Raised after a fault matrix run in which at least one cell failed."""

    def __init__(
        self,
        report: "MatrixReport",
        failures: list[tuple["SimulationConfig", BaseException]],
    ):
        lines = [f"{len(failures)}/{report.total_cells} cells failed for {report.sample}:"]
        lines.extend(f"  {config.label}: {_describe(exc)}" for config, exc in failures)
        super().__init__("\n".join(lines))
        self.report = report
        self.failures = failures


def _describe(exc: Any) -> str:
    return f"{type(exc).__name__}: {exc}"
