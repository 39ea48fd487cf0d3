"""Deterministic game engine for Blockmon.

Every operation is a pure function of its inputs and a 64-bit seed:
the same creatures and seed always give the same result.

Submodules:
    rng: Seeded 64-bit linear congruential generator
    rules: Shared numeric formulas (hit, crit, damage, rounding)
    synthesis: Creature generation from a seed
    fusion: Fusion cost, chance, offspring synthesis
    battle: Turn-based battle simulator
    expedition: Multi-encounter team runs with capture
    squad: Averaged team contender for squad matches

Example:
    >>> from blockmon.engine import synthesize, simulate
    >>> player, opponent = synthesize(1), synthesize(2)
    >>> result = simulate(player, opponent, seed=42)
    >>> result.turns <= 40
    True
"""

from __future__ import annotations

# =============================================================================
# Generator
# =============================================================================
from blockmon.engine.rng import (
    SeededRng,
    advance,
    new_generator,
    next_value,
)

# =============================================================================
# Synthesis & Fusion
# =============================================================================
from blockmon.engine.synthesis import default_name, synthesize
from blockmon.engine.fusion import (
    dominant_parent,
    evaluate_recipe,
    fuse,
    resolve_fusion,
    validate_parents,
)

# =============================================================================
# Battle
# =============================================================================
from blockmon.engine.battle import BattleEffects, BattleSimulator, simulate
from blockmon.engine.expedition import run_expedition
from blockmon.engine.squad import assemble_squad, run_squad_match


__all__ = [
    # Generator
    "new_generator",
    "advance",
    "next_value",
    "SeededRng",
    # Synthesis
    "synthesize",
    "default_name",
    # Fusion
    "dominant_parent",
    "validate_parents",
    "evaluate_recipe",
    "fuse",
    "resolve_fusion",
    # Battle
    "BattleEffects",
    "BattleSimulator",
    "simulate",
    "run_expedition",
    "assemble_squad",
    "run_squad_match",
]
