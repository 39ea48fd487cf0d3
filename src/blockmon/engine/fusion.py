"""Fusion evaluation and synthesis.

Fusion merges two or more creatures of one species into an offspring
pulled toward the dominant (highest power) parent. Evaluating a recipe
gives its token cost and success chance; the success roll itself is an
independent draw owned by the caller, and ``resolve_fusion`` applies it.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import reduce
from operator import xor

from blockmon.core.config import FusionSettings, get_settings
from blockmon.core.constants import (
    FUSION_DOMINANT_PULL,
    FUSION_HP_BONUS_PER_PARENT,
    FUSION_HP_VARIANCE,
    FUSION_MIN_HP,
    FUSION_MIN_PARENTS,
    FUSION_MIN_STAT,
    FUSION_RARITY_BONUS_PER_PARENT,
    FUSION_RARITY_HP_DIVISOR,
    FUSION_STAT_BONUS_PER_PARENT,
    FUSION_STAT_VARIANCE_BASE,
)
from blockmon.core.exceptions import ValidationError
from blockmon.core.logging import get_logger
from blockmon.core.seeds import format_dna, format_seed, mask_seed
from blockmon.engine.rng import SeededRng
from blockmon.engine.rules import clamp, round_half_up
from blockmon.engine.synthesis import default_name
from blockmon.models.creature import Creature
from blockmon.models.enums import Origin, Rarity, Stat
from blockmon.models.fusion import FusionOutcome, FusionRecord
from blockmon.models.species import StatBlock


logger = get_logger(__name__)


def dominant_parent(parents: Sequence[Creature]) -> Creature:
    """Return the parent with the highest power; the earliest wins ties."""
    return max(parents, key=lambda parent: parent.power)


def validate_parents(parents: Sequence[Creature]) -> None:
    """Check the fusion preconditions.

    Raises:
        ValidationError: If there are fewer than two parents or the
            parents do not all share one species.
    """
    if len(parents) < FUSION_MIN_PARENTS:
        raise ValidationError(
            f"Fusion requires at least {FUSION_MIN_PARENTS} parents",
            field_name="parents",
            invalid_value=len(parents),
        )
    species = {parent.species for parent in parents}
    if len(species) != 1:
        raise ValidationError(
            "Fusion parents must share one species",
            field_name="parents",
            invalid_value=sorted(species),
        )


def evaluate_recipe(
    parents: Sequence[Creature],
    *,
    settings: FusionSettings | None = None,
) -> FusionOutcome:
    """Compute the cost and success chance of a fusion recipe.

    Args:
        parents: Candidate parents.
        settings: Fusion coefficients; defaults to the loaded settings.

    Returns:
        The recipe outcome, or the zeroed outcome for fewer than two
        parents (callers gate on parent count before paying).
    """
    if len(parents) < FUSION_MIN_PARENTS:
        return FusionOutcome.zeroed()

    settings = settings or get_settings().fusion
    count = len(parents)
    power = dominant_parent(parents).power

    base_cost = max(1, count - 1)
    power_cost = power // settings.cost_power_divisor
    raw_chance = (
        settings.chance_base
        - power / settings.chance_power_divisor
        - (count - 2) * settings.chance_per_extra_parent
    )
    return FusionOutcome(
        cost=base_cost + power_cost,
        success_chance=clamp(raw_chance, settings.min_chance, settings.max_chance),
        dominant_power=power,
    )


def fuse(parents: Sequence[Creature], seed: int) -> Creature:
    """Blend parents of one species into a new creature.

    The generator is seeded with ``seed`` XOR every parent's seed, so the
    same call with different parents yields different offspring. The
    offspring's identity (id, dna, seed, name) comes from ``seed`` alone.

    Args:
        parents: Two or more creatures of the same species.
        seed: Caller-supplied 64-bit fusion seed.

    Returns:
        The fused creature at full HP.

    Raises:
        ValidationError: If the parent set violates the preconditions.
    """
    validate_parents(parents)

    seed = mask_seed(seed)
    fusion_seed = reduce(xor, (parent.seed_value for parent in parents), seed)
    rng = SeededRng(fusion_seed)
    dominant = dominant_parent(parents)
    count = len(parents)

    values: dict[Stat, int] = {}
    for index, stat in enumerate(Stat):
        average = sum(parent.stats.get(stat) for parent in parents) / count
        swing = (dominant.stats.get(stat) - average) * FUSION_DOMINANT_PULL
        variance = rng.below(FUSION_STAT_VARIANCE_BASE + index)
        values[stat] = max(
            FUSION_MIN_STAT,
            round_half_up(average + swing + count * FUSION_STAT_BONUS_PER_PARENT + variance),
        )
    stats = StatBlock.from_values(values)

    average_hp = sum(parent.max_hp for parent in parents) / count
    hp = max(
        FUSION_MIN_HP,
        round_half_up(
            average_hp
            + (dominant.max_hp - average_hp) * FUSION_DOMINANT_PULL
            + count * FUSION_HP_BONUS_PER_PARENT
            + rng.random() * FUSION_HP_VARIANCE
        ),
    )
    rarity_score = (
        stats.total + hp // FUSION_RARITY_HP_DIVISOR + count * FUSION_RARITY_BONUS_PER_PARENT
    )

    species = parents[0].species
    offspring = Creature(
        id=f"fusion-{format_seed(seed)}",
        dna=format_dna(seed),
        seed=format_seed(seed),
        species=species,
        name=default_name(species, seed),
        hp=hp,
        max_hp=hp,
        stats=stats,
        skill=parents[0].skill,
        rank=Rarity.from_score(rarity_score),
        origin=Origin.FUSED,
        parents=tuple(parent.to_parent_ref() for parent in parents),
        fusion_count=count,
    )
    logger.info(
        "Fusion completed",
        seed=offspring.seed,
        species=species,
        parents=count,
        rank=offspring.rank,
        power=offspring.power,
    )
    return offspring


def resolve_fusion(
    parents: Sequence[Creature],
    seed: int,
    success_roll: float,
    *,
    settings: FusionSettings | None = None,
) -> FusionRecord:
    """Apply a success roll to a fusion recipe.

    On success every parent is consumed and replaced by the offspring.
    On failure only the dominant parent survives.

    Args:
        parents: Two or more creatures of the same species.
        seed: Fusion seed used on success.
        success_roll: Uniform draw in [0, 1), independent of ``seed``.
        settings: Fusion coefficients; defaults to the loaded settings.

    Returns:
        The fusion record.

    Raises:
        ValidationError: If the parent set violates the preconditions.
    """
    validate_parents(parents)
    outcome = evaluate_recipe(parents, settings=settings)

    if success_roll <= outcome.success_chance:
        offspring = fuse(parents, seed)
        return FusionRecord(
            success=True,
            outcome=outcome,
            offspring=offspring,
            consumed_ids=tuple(parent.id for parent in parents),
        )

    dominant = dominant_parent(parents)
    logger.info(
        "Fusion failed",
        chance=outcome.success_chance,
        roll=success_roll,
        survivor=dominant.id,
    )
    return FusionRecord(
        success=False,
        outcome=outcome,
        survivor_ids=(dominant.id,),
        consumed_ids=tuple(parent.id for parent in parents if parent.id != dominant.id),
    )


__all__ = [
    "dominant_parent",
    "validate_parents",
    "evaluate_recipe",
    "fuse",
    "resolve_fusion",
]
