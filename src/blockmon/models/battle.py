"""Pydantic V2 schemas for battle input options and the battle trace."""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from blockmon.models.enums import ActionKind, Actor, BattleOutcome, DetailKind


MessageResolver = Callable[[str, dict[str, Any]], str]
"""Signature of the caller-supplied ``t(key, params)`` text resolver."""


class BattleOptions(BaseModel):
    """Caller-supplied battle options.

    Attributes:
        potions_available: Potions the player may draw on (at most one
            is used per battle).
        player_max_hp: HP a potion restores the player to. Defaults to
            the player's own max HP.
        language: Language code forwarded to nothing but the resolver's
            owner; kept for parity with the service layer.
        t: Optional message resolver. Without it, rounds carry tags only.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    potions_available: Annotated[int, Field(ge=0)] = 0
    player_max_hp: int | None = Field(default=None, ge=0)
    language: str | None = None
    t: MessageResolver | None = None


class BattleRound(BaseModel):
    """One ordered battle trace entry.

    HP values are snapshots taken after the entry resolved.

    Attributes:
        actor: Side that produced the entry.
        actor_species: Species name of the acting creature.
        action: Action tag.
        detail: Detail tag.
        amount: Numeric payload (damage, healed HP, shield turns).
        skill: Message key of the skill involved, if any.
        player_hp: Player HP after the entry.
        opponent_hp: Opponent HP after the entry.
        action_text: Resolved action text, when a resolver was supplied.
        detail_text: Resolved detail text, when a resolver was supplied.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    actor: Actor
    actor_species: str
    action: ActionKind
    detail: DetailKind
    amount: int | None = None
    skill: str | None = None
    player_hp: int
    opponent_hp: int
    action_text: str | None = None
    detail_text: str | None = None


class BattleResult(BaseModel):
    """Outcome and full trace of one battle.

    Attributes:
        rounds: Ordered trace entries.
        outcome: ``win`` iff the opponent reached 0 HP.
        remaining_hp: Player HP at the end, clamped to >= 0.
        opponent_remaining_hp: Opponent HP at the end, clamped to >= 0.
        potions_used: 0 or 1.
        timed_out: True when the turn cap stopped a battle with both
            sides still standing.
        turns: Number of turns the state machine ran.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    rounds: tuple[BattleRound, ...] = ()
    outcome: BattleOutcome
    remaining_hp: Annotated[int, Field(ge=0)]
    opponent_remaining_hp: Annotated[int, Field(ge=0)]
    potions_used: Annotated[int, Field(ge=0, le=1)] = 0
    timed_out: bool = False
    turns: Annotated[int, Field(ge=0)] = 0

    @property
    def won(self) -> bool:
        """True if the player won."""
        return self.outcome == BattleOutcome.WIN


__all__ = [
    "MessageResolver",
    "BattleOptions",
    "BattleRound",
    "BattleResult",
]
