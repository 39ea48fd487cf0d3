"""Turn-based battle simulator.

The simulator is a small state machine (ongoing, then win or defeat)
driven by one seeded generator. Each turn the attacker runs its skill
phase, may lose its action to a pending skip, and otherwise attacks.
After each opponent attack the player may auto-drink one potion. The
loop stops when either side reaches 0 HP or the turn cap is hit.

Every random draw happens in a fixed order, so the same creatures, seed
and options always reproduce the same trace.

Example:
    >>> from blockmon.engine.synthesis import synthesize
    >>> result = simulate(synthesize(1), synthesize(2), seed=7)
    >>> result.outcome in ("win", "defeat")
    True
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from blockmon.core.config import BattleSettings, get_settings
from blockmon.core.constants import (
    ACCURACY_VARIANCE,
    CRIT_VARIANCE,
    DAMAGE_VARIANCE,
    DEFAULT_SHIELD_TURNS,
    EVASION_VARIANCE,
    HEAL_TARGET_RATIO,
    HEAL_TRIGGER_RATIO,
    INITIATIVE_OFFSET,
    INITIATIVE_VARIANCE,
)
from blockmon.core.logging import get_logger, log_context
from blockmon.core.seeds import format_seed
from blockmon.engine import rules
from blockmon.engine.rng import SeededRng
from blockmon.models.battle import BattleOptions, BattleResult, BattleRound
from blockmon.models.creature import Creature
from blockmon.models.enums import ActionKind, Actor, BattleOutcome, DetailKind, SkillKind
from blockmon.models.species import Skill, StatBlock


logger = get_logger(__name__)


# =============================================================================
# Per-Combatant State
# =============================================================================


@dataclass
class BattleEffects:
    """Skill state of one combatant for the duration of one battle.

    Attributes:
        shield_turns: Incoming attacks still nullified.
        skip_pending: The combatant loses its next action.
        forced_miss_pending: The next attack against the combatant misses.
        used: Skills that already fired this battle.
    """

    shield_turns: int = 0
    skip_pending: bool = False
    forced_miss_pending: bool = False
    used: set[SkillKind] = field(default_factory=set)

    def can_use(self, skill: Skill | None) -> bool:
        """True if the skill exists and has not fired this battle."""
        return skill is not None and skill.kind not in self.used


@dataclass
class Combatant:
    """Mutable battle view of a creature. Never leaves the simulator."""

    side: Actor
    creature: Creature
    hp: int
    max_hp: int
    effects: BattleEffects = field(default_factory=BattleEffects)

    @property
    def stats(self) -> StatBlock:
        return self.creature.stats

    @property
    def skill(self) -> Skill | None:
        return self.creature.skill

    @property
    def species(self) -> str:
        return self.creature.species


def _skill_key(combatant: Combatant) -> str | None:
    return combatant.skill.name if combatant.skill else None


# =============================================================================
# Simulator
# =============================================================================


class BattleSimulator:
    """Resolve one battle between a player creature and an opponent.

    A simulator is single-use: construct it, call ``run`` once.
    """

    def __init__(
        self,
        player: Creature,
        opponent: Creature,
        seed: int,
        options: BattleOptions | None = None,
        *,
        settings: BattleSettings | None = None,
    ) -> None:
        """Initialize the simulator.

        Args:
            player: The player's creature (current HP is used).
            opponent: The opposing creature (current HP is used).
            seed: 64-bit battle seed.
            options: Potion and message-resolution options.
            settings: Battle tunables; defaults to the loaded settings.
        """
        self._options = options or BattleOptions()
        self._settings = settings or get_settings().battle
        self._seed = seed
        self._rng = SeededRng(seed)
        self._player = Combatant(Actor.PLAYER, player, player.hp, player.max_hp)
        self._opponent = Combatant(Actor.OPPONENT, opponent, opponent.hp, opponent.max_hp)
        self._potion_max_hp = (
            self._options.player_max_hp
            if self._options.player_max_hp is not None
            else player.max_hp
        )
        self._potions_used = 0
        self._rounds: list[BattleRound] = []

    def run(self) -> BattleResult:
        """Run the battle to completion.

        Returns:
            The battle result with the full round trace.
        """
        with log_context(battle_seed=format_seed(self._seed)):
            return self._run()

    def _run(self) -> BattleResult:
        logger.debug(
            "Battle started",
            player=self._player.species,
            opponent=self._opponent.species,
        )
        attacker, defender = self._initiative()
        turns = 0

        while self._player.hp > 0 and self._opponent.hp > 0 and turns < self._settings.max_rounds:
            turns += 1

            if self._skill_phase(attacker, defender):
                break

            if attacker.effects.skip_pending:
                attacker.effects.skip_pending = False
                self._record(
                    attacker,
                    ActionKind.SKIP,
                    DetailKind.NO_ACTION,
                    skill=_skill_key(defender),
                    other=defender,
                )
                attacker, defender = defender, attacker
                continue

            self._attack_phase(attacker, defender)
            if defender.hp <= 0:
                break

            if attacker is self._opponent:
                self._maybe_use_potion()

            attacker, defender = defender, attacker

        return self._result(turns)

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def _initiative(self) -> tuple[Combatant, Combatant]:
        score = (
            self._player.stats.dexterity
            - self._opponent.stats.dexterity
            + self._rng.below(INITIATIVE_VARIANCE)
            - INITIATIVE_OFFSET
        )
        if score >= 0:
            return self._player, self._opponent
        return self._opponent, self._player

    def _skill_phase(self, attacker: Combatant, defender: Combatant) -> bool:
        """Run the attacker's pre-attack skill.

        Returns:
            True if the skill ended the battle.
        """
        skill = attacker.skill
        if skill is None or not attacker.effects.can_use(skill):
            return False
        kind = skill.kind

        if kind == SkillKind.INSTANT_DEFEAT:
            if self._rng.random() >= skill.chance:
                return False
            attacker.effects.used.add(kind)
            if defender.effects.shield_turns > 0:
                self._record(
                    attacker,
                    ActionKind.SKILL_ACTIVATE,
                    DetailKind.BLOCKED,
                    skill=skill.name,
                    other=defender,
                    detail_skill=_skill_key(defender),
                )
                return False
            defender.hp = 0
            self._record(attacker, ActionKind.SKILL_ACTIVATE, DetailKind.INSTANT, skill=skill.name)
            return True

        if kind == SkillKind.SHIELD:
            if self._rng.random() >= skill.chance:
                return False
            attacker.effects.used.add(kind)
            attacker.effects.shield_turns = skill.duration or DEFAULT_SHIELD_TURNS
            self._record(
                attacker,
                ActionKind.SKILL_USE,
                DetailKind.SHELL,
                amount=attacker.effects.shield_turns,
                skill=skill.name,
            )
        elif kind == SkillKind.SKIP_TURN:
            if self._rng.random() >= skill.chance:
                return False
            attacker.effects.used.add(kind)
            defender.effects.skip_pending = True
            self._record(attacker, ActionKind.SKILL_USE, DetailKind.SKIP, skill=skill.name)
        elif kind == SkillKind.FORCED_MISS:
            if self._rng.random() >= skill.chance:
                return False
            attacker.effects.used.add(kind)
            attacker.effects.forced_miss_pending = True
            self._record(attacker, ActionKind.SKILL_USE, DetailKind.MISS, skill=skill.name)
        elif kind == SkillKind.SELF_HEAL:
            if not 0 < attacker.hp < attacker.max_hp * HEAL_TRIGGER_RATIO:
                return False
            attacker.effects.used.add(kind)
            attacker.hp = max(attacker.hp, math.floor(attacker.max_hp * HEAL_TARGET_RATIO))
            self._record(
                attacker,
                ActionKind.SKILL_ACTIVATE,
                DetailKind.HEAL,
                amount=attacker.hp,
                skill=skill.name,
            )
        return False

    def _attack_phase(self, attacker: Combatant, defender: Combatant) -> None:
        if defender.effects.shield_turns > 0:
            defender.effects.shield_turns -= 1
            self._record(
                attacker,
                ActionKind.ATTACK,
                DetailKind.NULLIFIED,
                amount=0,
                other=defender,
                detail_skill=_skill_key(defender),
            )
            return

        if defender.effects.forced_miss_pending:
            defender.effects.forced_miss_pending = False
            self._record(
                attacker,
                ActionKind.MISS,
                DetailKind.FORCED_MISS,
                amount=0,
                other=defender,
                detail_skill=_skill_key(defender),
            )
            return

        attack = rules.accuracy(attacker.stats, self._rng.below(ACCURACY_VARIANCE))
        dodge = rules.evasion(defender.stats, self._rng.below(EVASION_VARIANCE))
        if not rules.is_hit(attack, dodge):
            self._record(attacker, ActionKind.MISS, DetailKind.NO_DAMAGE, amount=0)
            return

        critical = rules.is_critical(attacker.stats, self._rng.below(CRIT_VARIANCE))
        raw = rules.base_damage(
            attacker.stats,
            self._rng.below(DAMAGE_VARIANCE),
            critical=critical,
        )

        skill = attacker.skill
        doubled = False
        if (
            skill is not None
            and skill.kind == SkillKind.DAMAGE_DOUBLE
            and attacker.effects.can_use(skill)
            and self._rng.random() < skill.chance
        ):
            attacker.effects.used.add(skill.kind)
            raw *= 2
            doubled = True

        damage = rules.mitigate(raw, defender.stats)
        defender.hp = max(0, defender.hp - damage)

        if doubled:
            action = ActionKind.DAMAGE_DOUBLE
        elif critical:
            action = ActionKind.CRIT
        else:
            action = ActionKind.ATTACK
        self._record(
            attacker,
            action,
            DetailKind.DAMAGE,
            amount=damage,
            skill=skill.name if doubled and skill else None,
            other=defender,
        )

    def _maybe_use_potion(self) -> None:
        player = self._player
        if self._potions_used or self._options.potions_available < 1:
            return
        if player.hp <= 0 or player.hp >= self._potion_max_hp * self._settings.potion_hp_ratio:
            return
        player.hp = self._potion_max_hp
        self._potions_used = 1
        self._record(
            player,
            ActionKind.POTION,
            DetailKind.HEAL,
            amount=player.hp,
            actor=Actor.POTION,
        )
        logger.debug("Potion used", hp=player.hp, max_hp=self._potion_max_hp)

    # -------------------------------------------------------------------------
    # Trace & Result
    # -------------------------------------------------------------------------

    def _record(
        self,
        source: Combatant,
        action: ActionKind,
        detail: DetailKind,
        *,
        amount: int | None = None,
        skill: str | None = None,
        other: Combatant | None = None,
        detail_skill: str | None = None,
        actor: Actor | None = None,
    ) -> None:
        action_text = detail_text = None
        resolve = self._options.t
        if resolve is not None:
            action_params: dict[str, Any] = {
                "name": source.creature.name if action == ActionKind.POTION else source.species,
                "skill": resolve(skill, {}) if skill else "",
                "source": other.species if other else "",
                "hp": amount,
            }
            detail_params: dict[str, Any] = {
                "value": amount,
                "hp": amount,
                "turns": amount,
                "defender": other.species if other else "",
                "skill": resolve(detail_skill, {}) if detail_skill else "",
            }
            action_text = resolve(action.value, action_params)
            detail_text = resolve(detail.value, detail_params)

        self._rounds.append(
            BattleRound(
                actor=actor or source.side,
                actor_species=source.species,
                action=action,
                detail=detail,
                amount=amount,
                skill=skill or detail_skill,
                player_hp=self._player.hp,
                opponent_hp=self._opponent.hp,
                action_text=action_text,
                detail_text=detail_text,
            )
        )

    def _result(self, turns: int) -> BattleResult:
        won = self._opponent.hp <= 0
        timed_out = self._player.hp > 0 and self._opponent.hp > 0
        result = BattleResult(
            rounds=tuple(self._rounds),
            outcome=BattleOutcome.WIN if won else BattleOutcome.DEFEAT,
            remaining_hp=max(self._player.hp, 0),
            opponent_remaining_hp=max(self._opponent.hp, 0),
            potions_used=self._potions_used,
            timed_out=timed_out,
            turns=turns,
        )
        logger.info(
            "Battle resolved",
            outcome=result.outcome,
            turns=turns,
            rounds=len(result.rounds),
            timed_out=timed_out,
            potions_used=result.potions_used,
        )
        return result


def simulate(
    player: Creature,
    opponent: Creature,
    seed: int,
    options: BattleOptions | None = None,
    *,
    settings: BattleSettings | None = None,
) -> BattleResult:
    """Simulate a battle between two creatures.

    Args:
        player: The player's creature.
        opponent: The opposing creature.
        seed: 64-bit battle seed.
        options: Potion and message-resolution options.
        settings: Battle tunables; defaults to the loaded settings.

    Returns:
        The battle result. ``outcome`` is ``win`` iff the opponent
        reached 0 HP; a battle stopped by the turn cap is a ``defeat``
        with ``timed_out`` set.
    """
    return BattleSimulator(player, opponent, seed, options, settings=settings).run()


__all__ = [
    "BattleEffects",
    "Combatant",
    "BattleSimulator",
    "simulate",
]
