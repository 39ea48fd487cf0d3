"""Numeric rules shared by fusion and battle.

Formulas take already-drawn random components as arguments so they stay
pure; the caller owns the draw order.
"""

from __future__ import annotations

import math

from blockmon.core.constants import (
    CRIT_THRESHOLD,
    HIT_TOLERANCE,
    MIN_BASE_DAMAGE,
    MIN_FINAL_DAMAGE,
)
from blockmon.models.species import StatBlock


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity.

    ``round`` uses banker's rounding, which would diverge from other
    implementations of the game on exact halves.
    """
    return math.floor(value + 0.5)


def accuracy(stats: StatBlock, roll: int) -> float:
    return stats.dexterity + stats.intelligence / 2 + roll


def evasion(stats: StatBlock, roll: int) -> float:
    return stats.dexterity + stats.wisdom / 2 + roll


def is_hit(attack: float, dodge: float) -> bool:
    """An attack hits unless it falls more than the tolerance short."""
    return attack >= dodge - HIT_TOLERANCE


def is_critical(stats: StatBlock, roll: int) -> bool:
    return stats.charisma / 2 + roll > CRIT_THRESHOLD


def base_damage(stats: StatBlock, roll: int, *, critical: bool) -> int:
    """Pre-mitigation damage: ``str + int/3 + roll``, floored, doubled on crit."""
    damage = max(MIN_BASE_DAMAGE, round_half_up(stats.strength + stats.intelligence / 3 + roll))
    return damage * 2 if critical else damage


def mitigate(raw: int, defender: StatBlock) -> int:
    """Subtract half the defender's constitution, never below the damage floor."""
    return max(MIN_FINAL_DAMAGE, round_half_up(raw - defender.constitution / 2))


__all__ = [
    "clamp",
    "round_half_up",
    "accuracy",
    "evasion",
    "is_hit",
    "is_critical",
    "base_damage",
    "mitigate",
]
