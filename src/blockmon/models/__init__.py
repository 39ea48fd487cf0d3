"""Pydantic V2 schemas for the Blockmon engine.

Submodules:
    enums: Enumeration types (Stat, SkillKind, Rarity, Origin, trace tags)
    species: Species reference data and the catalog
    creature: Creature snapshots and lineage
    battle: Battle options, rounds and results
    fusion: Fusion outcomes and records
    expedition: Expedition results
    records: On-chain record mapping

Example:
    >>> from blockmon.models import default_catalog, Stat
    >>> catalog = default_catalog()
    >>> catalog.by_index(1).name
    'Plankton'
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from blockmon.models.enums import (
    ActionKind,
    Actor,
    BattleOutcome,
    DetailKind,
    Origin,
    Rarity,
    SkillKind,
    Stat,
)

# =============================================================================
# Reference Data
# =============================================================================
from blockmon.models.species import (
    Skill,
    SpeciesCatalog,
    SpeciesDefinition,
    StatBlock,
    default_catalog,
)

# =============================================================================
# Entities & Results
# =============================================================================
from blockmon.models.creature import Creature, ParentRef
from blockmon.models.battle import (
    BattleOptions,
    BattleResult,
    BattleRound,
    MessageResolver,
)
from blockmon.models.fusion import FusionOutcome, FusionRecord
from blockmon.models.expedition import (
    ExpeditionBattle,
    ExpeditionResult,
    MemberRecord,
)
from blockmon.models.records import ChainRecord


__all__ = [
    # Enums
    "Stat",
    "SkillKind",
    "Rarity",
    "Origin",
    "Actor",
    "BattleOutcome",
    "ActionKind",
    "DetailKind",
    # Reference data
    "StatBlock",
    "Skill",
    "SpeciesDefinition",
    "SpeciesCatalog",
    "default_catalog",
    # Entities
    "Creature",
    "ParentRef",
    # Battle
    "MessageResolver",
    "BattleOptions",
    "BattleRound",
    "BattleResult",
    # Fusion
    "FusionOutcome",
    "FusionRecord",
    # Expedition
    "MemberRecord",
    "ExpeditionBattle",
    "ExpeditionResult",
    # Chain
    "ChainRecord",
]
