"""Seed formatting and parsing helpers.

Seeds are unsigned 64-bit integers. Python ints are unbounded, so every
entry point masks its input to 64 bits before doing arithmetic on it.
"""

from __future__ import annotations

import secrets

from blockmon.core.constants import SEED_BITS, SEED_MASK
from blockmon.core.exceptions import SeedError


def mask_seed(seed: int) -> int:
    """Reduce any integer to its unsigned 64-bit value."""
    return seed & SEED_MASK


def generate_seed() -> int:
    """Draw a fresh 64-bit seed for callers that need one.

    The engine itself never calls this; it only consumes seeds.
    """
    return secrets.randbits(SEED_BITS)


def format_seed(seed: int) -> str:
    """Format a seed as 16 lowercase, zero-padded hex chars."""
    return f"{mask_seed(seed):016x}"


def format_dna(seed: int) -> str:
    """Format a seed as grouped uppercase hex, e.g. ``0000-0000-0000-0001``."""
    text = format_seed(seed).upper()
    return "-".join(text[i : i + 4] for i in range(0, 16, 4))


def parse_seed(text: str) -> int:
    """Parse hex seed text back into an integer.

    Accepts an optional ``0x`` prefix and DNA-style dashes.

    Args:
        text: Hex seed text.

    Returns:
        The seed value.

    Raises:
        SeedError: If the text is empty, not hex, or wider than 64 bits.
    """
    cleaned = text.strip().lower().replace("-", "")
    if cleaned.startswith("0x"):
        cleaned = cleaned[2:]
    if not cleaned or len(cleaned) > 16:
        raise SeedError("Seed must be 1-16 hex digits", field_name="seed", invalid_value=text)
    try:
        return int(cleaned, 16)
    except ValueError as exc:
        raise SeedError("Seed is not valid hex", field_name="seed", invalid_value=text) from exc


__all__ = [
    "mask_seed",
    "generate_seed",
    "format_seed",
    "format_dna",
    "parse_seed",
]
