"""Blockmon - deterministic creature engine.

Creatures are derived from 64-bit seeds, fused into stronger offspring,
and pitted against each other in seeded, reproducible battles.

DETERMINISM:
- One 64-bit LCG drives every random decision
- Same inputs + same seed = same creature, fusion and battle trace
- The engine never touches wall-clock time or global random state

Example:
    >>> from blockmon import synthesize, simulate, BattleOptions
    >>>
    >>> player = synthesize(1)          # a Plankton
    >>> opponent = synthesize(0)        # an Orca
    >>> result = simulate(player, opponent, seed=7, options=BattleOptions(potions_available=1))
    >>> result.outcome in ("win", "defeat")
    True

Modules:
    core: Configuration, logging, seeds and base exceptions.
    models: Pydantic V2 schemas (species, creatures, battle traces).
    engine: Generator, synthesis, fusion, battle, expeditions, squads.
"""

from __future__ import annotations

# Core
from blockmon.core.config import Settings, get_settings
from blockmon.core.exceptions import BlockmonError
from blockmon.core.logging import configure_logging, get_logger
from blockmon.core.seeds import format_dna, format_seed, generate_seed, parse_seed

# Models
from blockmon.models import (
    BattleOptions,
    BattleResult,
    BattleRound,
    ChainRecord,
    Creature,
    ExpeditionResult,
    FusionOutcome,
    FusionRecord,
    Rarity,
    SkillKind,
    SpeciesCatalog,
    Stat,
    default_catalog,
)

# Engine
from blockmon.engine import (
    SeededRng,
    assemble_squad,
    evaluate_recipe,
    fuse,
    new_generator,
    next_value,
    resolve_fusion,
    run_expedition,
    run_squad_match,
    simulate,
    synthesize,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "BlockmonError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "format_seed",
    "format_dna",
    "generate_seed",
    "parse_seed",
    # Models
    "Stat",
    "SkillKind",
    "Rarity",
    "SpeciesCatalog",
    "default_catalog",
    "Creature",
    "BattleOptions",
    "BattleRound",
    "BattleResult",
    "FusionOutcome",
    "FusionRecord",
    "ExpeditionResult",
    "ChainRecord",
    # Engine
    "new_generator",
    "next_value",
    "SeededRng",
    "synthesize",
    "evaluate_recipe",
    "fuse",
    "resolve_fusion",
    "simulate",
    "run_expedition",
    "assemble_squad",
    "run_squad_match",
]
