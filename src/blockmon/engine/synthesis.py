"""Creature synthesis from a seed.

A creature is a pure function of its seed (and optional overrides).
Stats combine three sources: the species base, a variance drawn from the
generator stream, and a bonus read straight from 5-bit chunks of the
seed. The seed bits make neighbouring seeds visibly different even
where the stream happens to agree.
"""

from __future__ import annotations

from blockmon.core.constants import (
    HP_STAT_DIVISOR,
    HP_VARIANCE_RANGE,
    SEED_CHUNK_BITS,
    SEED_CHUNK_DIVISOR,
    STAT_VARIANCE_BASE,
)
from blockmon.core.logging import get_logger
from blockmon.core.seeds import format_dna, format_seed, mask_seed
from blockmon.engine.rng import SeededRng
from blockmon.models.creature import Creature
from blockmon.models.enums import Origin, Rarity, Stat
from blockmon.models.species import SpeciesCatalog, SpeciesDefinition, StatBlock, default_catalog


logger = get_logger(__name__)

_CHUNK_MASK = (1 << SEED_CHUNK_BITS) - 1


def default_name(species_name: str, seed: int) -> str:
    """Build the automatic nickname ``{species}-{last 4 hex, uppercase}``."""
    return f"{species_name}-{format_seed(seed)[-4:].upper()}"


def seed_stat_bonus(seed: int, index: int) -> int:
    """Read the stat bonus hidden in the seed for the stat at ``index``."""
    chunk = (seed >> (index * SEED_CHUNK_BITS)) & _CHUNK_MASK
    return chunk // SEED_CHUNK_DIVISOR


def synthesize(
    seed: int,
    *,
    species_override: SpeciesDefinition | None = None,
    id: str | None = None,  # noqa: A002
    name: str | None = None,
    origin: Origin = Origin.WILD,
    catalog: SpeciesCatalog | None = None,
) -> Creature:
    """Derive a fully specified creature from a seed.

    Args:
        seed: 64-bit seed (wider values are masked).
        species_override: Species to use instead of ``seed mod N``.
        id: Identifier to use instead of ``dna-{seed hex}``.
        name: Name to use instead of the automatic nickname.
        origin: Provenance tag.
        catalog: Species catalog; defaults to the canonical one.

    Returns:
        A new creature at full HP.

    Example:
        >>> creature = synthesize(1)
        >>> creature.species
        'Plankton'
    """
    seed = mask_seed(seed)
    catalog = catalog or default_catalog()
    species = species_override or catalog.by_index(seed)
    rng = SeededRng(seed)

    hp_variance = rng.below(HP_VARIANCE_RANGE)

    values: dict[Stat, int] = {}
    for index, stat in enumerate(Stat):
        variance = rng.below(STAT_VARIANCE_BASE + index)
        values[stat] = species.base.get(stat) + variance + seed_stat_bonus(seed, index)

    stats = StatBlock.from_values(values)
    stat_sum = stats.total
    hp = species.base_hp + hp_variance + stat_sum // HP_STAT_DIVISOR

    creature = Creature(
        id=id or f"dna-{format_seed(seed)}",
        dna=format_dna(seed),
        seed=format_seed(seed),
        species=species.name,
        name=name or default_name(species.name, seed),
        hp=hp,
        max_hp=hp,
        stats=stats,
        skill=species.skill,
        rank=Rarity.from_score(stat_sum),
        origin=origin,
    )
    logger.debug(
        "Creature synthesized",
        seed=creature.seed,
        species=creature.species,
        rank=creature.rank,
        power=creature.power,
    )
    return creature


__all__ = [
    "synthesize",
    "default_name",
    "seed_stat_bonus",
]
