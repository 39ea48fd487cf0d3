"""Engine-wide constants for the Blockmon engine.

Values that must stay fixed for cross-implementation determinism live
here. Balance knobs that an operator may tune belong in core.config.
"""

from __future__ import annotations

# =============================================================================
# Seeds & Generator
# =============================================================================

SEED_BITS = 64
"""Width of a seed in bits."""

SEED_MASK = (1 << SEED_BITS) - 1
"""Mask applied to every seed and generator state."""

LCG_MULTIPLIER = 6364136223846793005
"""Multiplier of the 64-bit linear congruential generator."""

LCG_INCREMENT = 1442695040888963407
"""Increment of the 64-bit linear congruential generator."""

LCG_OUTPUT_DIVISOR = 0xFFFFFFFF
"""Divisor applied to the upper 32 bits of each state."""

# =============================================================================
# Synthesis
# =============================================================================

HP_VARIANCE_RANGE = 24
"""Exclusive upper bound of the random HP bonus on synthesis."""

STAT_VARIANCE_BASE = 6
"""Variance range of the first stat; each later stat adds one."""

SEED_CHUNK_BITS = 5
"""Width of the seed bit chunk read for each stat bonus."""

SEED_CHUNK_DIVISOR = 4
"""Divisor turning a seed chunk (0-31) into a stat bonus (0-7)."""

HP_STAT_DIVISOR = 12
"""Stat sum per extra hit point on synthesis."""

# =============================================================================
# Fusion
# =============================================================================

FUSION_MIN_PARENTS = 2
"""Smallest parent set a fusion accepts."""

FUSION_DOMINANT_PULL = 0.6
"""Fraction of the gap to the dominant parent that offspring inherit."""

FUSION_STAT_BONUS_PER_PARENT = 0.75
"""Flat stat bonus per parent."""

FUSION_STAT_VARIANCE_BASE = 4
"""Variance range of the first fused stat; each later stat adds one."""

FUSION_MIN_STAT = 4
"""Floor of every fused stat."""

FUSION_HP_BONUS_PER_PARENT = 10
"""Flat HP bonus per parent."""

FUSION_HP_VARIANCE = 12
"""Scale of the random HP bonus on fusion."""

FUSION_MIN_HP = 10
"""Floor of fused HP."""

FUSION_RARITY_HP_DIVISOR = 3
"""HP per rarity point when ranking a fused creature."""

FUSION_RARITY_BONUS_PER_PARENT = 6
"""Rarity points granted per parent."""

# =============================================================================
# Battle
# =============================================================================

INITIATIVE_VARIANCE = 6
"""Range of the random initiative swing."""

INITIATIVE_OFFSET = 3
"""Centering offset subtracted from the initiative swing."""

ACCURACY_VARIANCE = 12
"""Range of the random accuracy bonus."""

EVASION_VARIANCE = 10
"""Range of the random evasion bonus."""

HIT_TOLERANCE = 2
"""Accuracy may fall this far short of evasion and still hit."""

CRIT_VARIANCE = 100
"""Range of the random critical roll."""

CRIT_THRESHOLD = 110
"""A critical roll strictly above this value doubles damage."""

DAMAGE_VARIANCE = 10
"""Range of the random damage bonus."""

MIN_BASE_DAMAGE = 4
"""Floor of pre-mitigation damage."""

MIN_FINAL_DAMAGE = 3
"""Floor of post-mitigation damage."""

HEAL_TRIGGER_RATIO = 0.2
"""HP fraction below which the self-heal skill fires."""

HEAL_TARGET_RATIO = 0.5
"""HP fraction the self-heal skill restores to."""

DEFAULT_SHIELD_TURNS = 2
"""Incoming attacks absorbed by one shield activation."""


__all__ = [
    "SEED_BITS",
    "SEED_MASK",
    "LCG_MULTIPLIER",
    "LCG_INCREMENT",
    "LCG_OUTPUT_DIVISOR",
    "HP_VARIANCE_RANGE",
    "STAT_VARIANCE_BASE",
    "SEED_CHUNK_BITS",
    "SEED_CHUNK_DIVISOR",
    "HP_STAT_DIVISOR",
    "FUSION_MIN_PARENTS",
    "FUSION_DOMINANT_PULL",
    "FUSION_STAT_BONUS_PER_PARENT",
    "FUSION_STAT_VARIANCE_BASE",
    "FUSION_MIN_STAT",
    "FUSION_HP_BONUS_PER_PARENT",
    "FUSION_HP_VARIANCE",
    "FUSION_MIN_HP",
    "FUSION_RARITY_HP_DIVISOR",
    "FUSION_RARITY_BONUS_PER_PARENT",
    "INITIATIVE_VARIANCE",
    "INITIATIVE_OFFSET",
    "ACCURACY_VARIANCE",
    "EVASION_VARIANCE",
    "HIT_TOLERANCE",
    "CRIT_VARIANCE",
    "CRIT_THRESHOLD",
    "DAMAGE_VARIANCE",
    "MIN_BASE_DAMAGE",
    "MIN_FINAL_DAMAGE",
    "HEAL_TRIGGER_RATIO",
    "HEAL_TARGET_RATIO",
    "DEFAULT_SHIELD_TURNS",
]
