"""
Simulation configuration.

Three orthogonal flags select which I/O adversity the fake input injects.
Every sample is exercised under all eight combinations.
"""

from itertools import product

from pydantic import BaseModel, ConfigDict, Field


class SimulationConfig(BaseModel):
    """One cell of the fault matrix."""

    model_config = ConfigDict(frozen=True)

    inject_io_faults: bool = Field(
        default=False,
        description="Raise a transient fault on the first access at each position",
    )
    simulate_unknown_length: bool = Field(
        default=False,
        description="Report the input length as unset",
    )
    simulate_partial_reads: bool = Field(
        default=False,
        description="Satisfy the first multi-byte read at each target with one byte",
    )

    @classmethod
    def all_combinations(cls) -> list["SimulationConfig"]:
        """
        All eight configurations, I/O faults varying fastest.

        Returns:
            Configurations in canonical matrix order.
        """
        return [
            cls(
                inject_io_faults=io,
                simulate_unknown_length=unknown_length,
                simulate_partial_reads=partial,
            )
            for partial, unknown_length, io in product((False, True), repeat=3)
        ]

    @property
    def label(self) -> str:
        """Stable short id, e.g. 'io+unklen-partial-'."""
        return "".join(
            f"{name}{'+' if flag else '-'}"
            for name, flag in (
                ("io", self.inject_io_faults),
                ("unklen", self.simulate_unknown_length),
                ("partial", self.simulate_partial_reads),
            )
        )
