"""Pydantic V2 schemas for expedition results."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from blockmon.models.battle import BattleResult
from blockmon.models.creature import Creature


class MemberRecord(BaseModel):
    """Final state of one expedition team member.

    Attributes:
        id: Creature id.
        name: Creature name.
        species: Species name.
        remaining_hp: HP when the expedition ended.
        max_hp: Maximum HP.
        knocked_out: The member fell to 0 HP.
        withdrawn: The member left after a battle hit the turn cap.
        potion_used: The member drank a potion during the expedition.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str
    species: str
    remaining_hp: Annotated[int, Field(ge=0)]
    max_hp: Annotated[int, Field(ge=0)]
    knocked_out: bool = False
    withdrawn: bool = False
    potion_used: bool = False


class ExpeditionBattle(BaseModel):
    """One battle fought during an expedition.

    Attributes:
        seed: Battle seed as hex.
        encounter: Zero-based index of the wild encounter.
        member_id: Team member who fought.
        opponent: Wild creature snapshot as it entered the battle.
        result: Battle result.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    seed: str
    encounter: Annotated[int, Field(ge=0)]
    member_id: str
    opponent: Creature
    result: BattleResult


class ExpeditionResult(BaseModel):
    """Summary of a finished expedition.

    Attributes:
        id: Expedition identifier derived from the seed.
        seed: Expedition seed as hex.
        team: Final member records, in team order.
        battles: Battles in the order they were fought.
        captured: Wild creatures captured, at full HP.
        encounters: Number of wild encounters started.
        defeats: Battles that did not end in a win.
        potions_carried: Potions taken along.
        potions_used: Potions consumed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    seed: str
    team: tuple[MemberRecord, ...]
    battles: tuple[ExpeditionBattle, ...] = ()
    captured: tuple[Creature, ...] = ()
    encounters: Annotated[int, Field(ge=0)] = 0
    defeats: Annotated[int, Field(ge=0)] = 0
    potions_carried: Annotated[int, Field(ge=0)] = 0
    potions_used: Annotated[int, Field(ge=0)] = 0

    @property
    def potions_remaining(self) -> int:
        """Potions to hand back to the inventory."""
        return self.potions_carried - self.potions_used


__all__ = [
    "MemberRecord",
    "ExpeditionBattle",
    "ExpeditionResult",
]
