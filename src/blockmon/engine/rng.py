"""Seeded pseudo-random generator.

Every random decision in the engine comes from one 64-bit linear
congruential generator. The multiplier, increment and output shift are
fixed: the same seed must yield the same stream in every implementation
of the game, so this generator must never be swapped for ``random``.

The generator is exposed two ways: a pure state-passing pair
(``new_generator`` / ``next_value``) and the ``SeededRng`` wrapper the
engine components use internally. Both produce the identical stream.

Example:
    >>> rng = SeededRng(1)
    >>> value = rng.random()
    >>> 0.0 <= value <= 1.0
    True
"""

from __future__ import annotations

from blockmon.core.constants import (
    LCG_INCREMENT,
    LCG_MULTIPLIER,
    LCG_OUTPUT_DIVISOR,
    SEED_MASK,
)
from blockmon.core.seeds import mask_seed


def new_generator(seed: int) -> int:
    """Create generator state from a seed.

    Args:
        seed: Any integer; it is reduced to 64 bits.

    Returns:
        The initial generator state.
    """
    return mask_seed(seed)


def advance(state: int) -> int:
    """Step the LCG state once, modulo 2**64."""
    return (LCG_MULTIPLIER * state + LCG_INCREMENT) & SEED_MASK


def next_value(state: int) -> tuple[float, int]:
    """Draw the next value of the stream.

    The output divides the upper 32 bits of the new state by
    ``2**32 - 1``. A state whose upper half is all ones yields exactly
    1.0; callers flooring ``value * n`` must tolerate ``n`` in that case.

    Args:
        state: Current generator state.

    Returns:
        Tuple of (value, new state).
    """
    new_state = advance(state)
    return (new_state >> 32) / LCG_OUTPUT_DIVISOR, new_state


class SeededRng:
    """Stateful view of the generator stream, local to one engine call."""

    def __init__(self, seed: int) -> None:
        self._state = new_generator(seed)

    @property
    def state(self) -> int:
        """Current raw generator state."""
        return self._state

    def random(self) -> float:
        """Draw the next value of the stream."""
        value, self._state = next_value(self._state)
        return value

    def below(self, bound: int) -> int:
        """Draw ``floor(random() * bound)``."""
        return int(self.random() * bound)

    def next_seed(self) -> int:
        """Advance once and return the raw 64-bit state as a derived seed."""
        self._state = advance(self._state)
        return self._state

    def __iter__(self) -> SeededRng:
        return self

    def __next__(self) -> float:
        return self.random()


__all__ = [
    "new_generator",
    "advance",
    "next_value",
    "SeededRng",
]
