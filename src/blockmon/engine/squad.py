"""Squad matches.

A squad fights as one contender: stats are the team average, HP is the
team's combined maximum, and no skill applies.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import reduce
from operator import xor

from blockmon.core.exceptions import ValidationError
from blockmon.core.logging import get_logger, log_context
from blockmon.core.seeds import format_dna, format_seed, mask_seed
from blockmon.engine.battle import simulate
from blockmon.engine.rules import round_half_up
from blockmon.engine.synthesis import synthesize
from blockmon.models.battle import BattleOptions, BattleResult
from blockmon.models.creature import Creature
from blockmon.models.enums import Origin, Rarity, Stat
from blockmon.models.species import SpeciesCatalog, StatBlock


logger = get_logger(__name__)


def assemble_squad(team: Sequence[Creature], *, name: str = "Squad") -> Creature:
    """Merge a team into a single contender.

    Args:
        team: One or more creatures.
        name: Display name of the squad.

    Returns:
        The squad creature at full HP.

    Raises:
        ValidationError: If the team is empty.
    """
    if not team:
        raise ValidationError("Squad requires at least one member", field_name="team")

    values = {
        stat: max(1, round_half_up(sum(member.stats.get(stat) for member in team) / len(team)))
        for stat in Stat
    }
    stats = StatBlock.from_values(values)
    hp = sum(member.max_hp for member in team)
    seed = reduce(xor, (member.seed_value for member in team), 0)

    return Creature(
        id=f"squad-{format_seed(seed)}",
        dna=format_dna(seed),
        seed=format_seed(seed),
        species="Squad",
        name=name,
        hp=hp,
        max_hp=hp,
        stats=stats,
        rank=Rarity.from_score(stats.total),
        origin=Origin.SQUAD,
    )


def run_squad_match(
    team: Sequence[Creature],
    seed: int,
    *,
    catalog: SpeciesCatalog | None = None,
) -> tuple[Creature, BattleResult]:
    """Battle a squad against an opponent synthesized from ``seed``.

    The same seed drives both the opponent and the battle.

    Returns:
        Tuple of (opponent, battle result).
    """
    seed = mask_seed(seed)
    squad = assemble_squad(team)
    with log_context(squad_id=squad.id):
        opponent = synthesize(seed, origin=Origin.OPPONENT, catalog=catalog)
        result = simulate(squad, opponent, seed, BattleOptions())
        logger.info(
            "Squad match resolved",
            seed=format_seed(seed),
            members=len(team),
            opponent=opponent.species,
            outcome=result.outcome,
        )
    return opponent, result


__all__ = [
    "assemble_squad",
    "run_squad_match",
]
