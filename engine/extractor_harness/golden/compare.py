"""
Structural comparison of dumps.

Reports the first point where a recorded dump departs from the stored one,
as a dotted path plus both values.
"""

from typing import Any


def find_first_divergence(expected: Any, actual: Any, path: str = "") -> str | None:
    """
    Walk two dump structures in order and describe their first difference.

    Dict keys are visited in the expected dump's order, then keys only the
    actual dump has. Lists are compared element by element before length.

    Args:
        expected: Stored dump (or a sub-tree of it)
        actual: Recorded dump (or the matching sub-tree)
        path: Location of this sub-tree, used in the report

    Returns:
        Description of the first divergence, or None if equal.
    """
    where = path or "<root>"

    if isinstance(expected, dict) and isinstance(actual, dict):
        for key, value in expected.items():
            child = f"{path}.{key}" if path else str(key)
            if key not in actual:
                return f"{child}: missing (expected {value!r})"
            divergence = find_first_divergence(value, actual[key], child)
            if divergence:
                return divergence
        for key in actual:
            if key not in expected:
                child = f"{path}.{key}" if path else str(key)
                return f"{child}: unexpected (got {actual[key]!r})"
        return None

    if isinstance(expected, list) and isinstance(actual, list):
        for index, (left, right) in enumerate(zip(expected, actual, strict=False)):
            divergence = find_first_divergence(left, right, f"{path}[{index}]")
            if divergence:
                return divergence
        if len(expected) != len(actual):
            return f"{where}: expected {len(expected)} entries, got {len(actual)}"
        return None

    if type(expected) is not type(actual) or expected != actual:
        return f"{where}: expected {expected!r}, got {actual!r}"
    return None
