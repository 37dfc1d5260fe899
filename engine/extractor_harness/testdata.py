"""
Helpers for building test inputs.

Deterministic pseudo-random data and small byte-array utilities.
"""

import random


def build_test_data(length: int, seed: int | random.Random | None = None) -> bytes:
    """
    Build length pseudo-random bytes.

    Args:
        length: Number of bytes
        seed: Seed or Random instance (defaults to length, so the result is
            stable for a given size)

    Returns:
        The generated bytes.
    """
    rng = seed if isinstance(seed, random.Random) else random.Random(length if seed is None else seed)
    return rng.randbytes(length)


def build_test_string(max_length: int, rng: random.Random) -> str:
    """Build a random string shorter than max_length from arbitrary BMP code points."""
    length = rng.randrange(max_length) if max_length > 0 else 0
    return "".join(chr(rng.randrange(0xD800)) for _ in range(length))


def create_byte_array(*values: int) -> bytes:
    """
    Convert integers in [0, 255] into bytes.

    Raises:
        ValueError: If any value is out of range.
    """
    for value in values:
        if not 0x00 <= value <= 0xFF:
            raise ValueError(f"Byte value out of range: {value}")
    return bytes(values)


def join_byte_arrays(*arrays: bytes) -> bytes:
    """Concatenate byte arrays in order."""
    return b"".join(arrays)
