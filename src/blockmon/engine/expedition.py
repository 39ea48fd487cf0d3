"""Expedition runner.

A team walks into a series of wild encounters. The first member still
able to fight takes on the wild creature; damage on both sides carries
over from battle to battle. Beating a wild creature captures it. The
expedition ends once nobody can fight or the encounter limit is reached.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from blockmon.core.config import ExpeditionSettings, Settings, get_settings
from blockmon.core.logging import get_logger, log_context
from blockmon.core.seeds import format_seed, mask_seed
from blockmon.engine.battle import simulate
from blockmon.engine.rng import SeededRng
from blockmon.engine.synthesis import synthesize
from blockmon.models.battle import BattleOptions
from blockmon.models.creature import Creature
from blockmon.models.enums import Origin
from blockmon.models.expedition import ExpeditionBattle, ExpeditionResult, MemberRecord
from blockmon.models.species import SpeciesCatalog, default_catalog


logger = get_logger(__name__)


@dataclass
class _Member:
    creature: Creature
    hp: int
    knocked_out: bool = False
    withdrawn: bool = False
    potion_used: bool = False

    @property
    def can_fight(self) -> bool:
        return not (self.knocked_out or self.withdrawn)

    def to_record(self) -> MemberRecord:
        return MemberRecord(
            id=self.creature.id,
            name=self.creature.name,
            species=self.creature.species,
            remaining_hp=max(self.hp, 0),
            max_hp=self.creature.max_hp,
            knocked_out=self.knocked_out,
            withdrawn=self.withdrawn,
            potion_used=self.potion_used,
        )


def _next_fighter(members: Sequence[_Member]) -> _Member | None:
    return next((member for member in members if member.can_fight), None)


def run_expedition(
    team: Sequence[Creature],
    seed: int,
    *,
    potions: int = 0,
    catalog: SpeciesCatalog | None = None,
    settings: Settings | None = None,
) -> ExpeditionResult:
    """Run an expedition to completion.

    Args:
        team: Creatures to send; only the first ``max_team_size`` go.
        seed: 64-bit expedition seed. Encounter and battle seeds are
            derived from it in order.
        potions: Potions offered; at most one per member is carried.
        catalog: Species catalog for wild creatures.
        settings: Application settings; defaults to the loaded settings.

    Returns:
        The expedition summary, including every battle and capture.
    """
    settings = settings or get_settings()
    expedition: ExpeditionSettings = settings.expedition
    catalog = catalog or default_catalog()
    seed = mask_seed(seed)
    seed_hex = format_seed(seed)
    rng = SeededRng(seed)

    members = [_Member(creature, creature.hp) for creature in team[: expedition.max_team_size]]
    potions_carried = max(0, min(potions, len(members)))
    potions_left = potions_carried

    expedition_id = f"adv-{seed_hex}"
    battles: list[ExpeditionBattle] = []
    captured: list[Creature] = []
    encounters = 0
    defeats = 0

    with log_context(expedition_id=expedition_id):
        logger.info(
            "Expedition started",
            seed=seed_hex,
            team=[member.creature.species for member in members],
            potions=potions_carried,
        )

        while encounters < expedition.max_encounters and _next_fighter(members):
            wild = synthesize(rng.next_seed(), origin=Origin.WILD, catalog=catalog)
            wild_hp = wild.hp
            encounter = encounters
            encounters += 1
            logger.debug("Wild encounter", encounter=encounter, species=wild.species, seed=wild.seed)

            while wild_hp > 0:
                member = _next_fighter(members)
                if member is None:
                    break

                battle_seed = rng.next_seed()
                opponent = wild.with_hp(wild_hp)
                options = BattleOptions(
                    potions_available=1 if not member.potion_used and potions_left > 0 else 0,
                    player_max_hp=member.creature.max_hp,
                )
                result = simulate(
                    member.creature.with_hp(member.hp),
                    opponent,
                    battle_seed,
                    options,
                    settings=settings.battle,
                )
                battles.append(
                    ExpeditionBattle(
                        seed=format_seed(battle_seed),
                        encounter=encounter,
                        member_id=member.creature.id,
                        opponent=opponent,
                        result=result,
                    )
                )

                if not result.won:
                    defeats += 1
                if result.potions_used and potions_left > 0:
                    potions_left -= 1
                    member.potion_used = True

                member.hp = result.remaining_hp
                wild_hp = result.opponent_remaining_hp
                if member.hp <= 0:
                    member.knocked_out = True
                    logger.debug("Member knocked out", member=member.creature.id)
                elif result.timed_out:
                    member.withdrawn = True
                    logger.debug("Member withdrawn", member=member.creature.id)

            if wild_hp <= 0:
                captured.append(
                    wild.model_copy(update={"origin": Origin.CAPTURED}).restored()
                )
                logger.debug("Wild creature captured", species=wild.species, id=wild.id)

        summary = ExpeditionResult(
            id=expedition_id,
            seed=seed_hex,
            team=tuple(member.to_record() for member in members),
            battles=tuple(battles),
            captured=tuple(captured),
            encounters=encounters,
            defeats=defeats,
            potions_carried=potions_carried,
            potions_used=potions_carried - potions_left,
        )
        logger.info(
            "Expedition finished",
            encounters=encounters,
            battles=len(battles),
            captured=len(captured),
            defeats=defeats,
            potions_used=summary.potions_used,
        )
    return summary


__all__ = [
    "run_expedition",
]
