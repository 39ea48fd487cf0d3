"""Enumeration types for the Blockmon engine.

Battle trace tags (ActionKind, DetailKind) are message keys of the
game's localization catalogue. The engine emits them as opaque,
language-agnostic identifiers; resolving them to text is the job of the
message resolver supplied by the caller.
"""

from __future__ import annotations

from enum import StrEnum


class Stat(StrEnum):
    """Creature stats in their canonical order.

    Synthesis and fusion walk the stats in declaration order; the index
    of a stat feeds both its variance range and its seed bit chunk.
    """

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def abbreviation(self) -> str:
        """Get the three-letter key used on the wire (e.g. 'str')."""
        return self.name.lower()


class SkillKind(StrEnum):
    """Closed set of species skills."""

    DAMAGE_DOUBLE = "damage_double"
    """Once per battle, 50% chance to double a landed hit."""

    SELF_HEAL = "self_heal"
    """Once per battle, heal to half of max HP when below 20%."""

    SHIELD = "shield"
    """Nullify the next incoming attacks for a number of turns."""

    INSTANT_DEFEAT = "instant_defeat"
    """Rare chance to drop the defender to 0 HP, blocked by a shield."""

    FORCED_MISS = "forced_miss"
    """The next attack against the owner misses."""

    SKIP_TURN = "skip_turn"
    """The defender loses their next action."""


class Rarity(StrEnum):
    """Rarity tiers, highest first."""

    LEGENDARY = "Legendary"
    EPIC = "Epic"
    RARE = "Rare"
    UNCOMMON = "Uncommon"
    COMMON = "Common"

    @property
    def threshold(self) -> int:
        """Minimum score that earns this tier."""
        return _RARITY_THRESHOLDS[self]

    @classmethod
    def from_score(cls, score: int) -> Rarity:
        """Map a stat-derived score onto the highest tier it reaches.

        Args:
            score: Stat sum (or fusion rarity score).

        Returns:
            The first tier, in descending order, whose threshold the
            score meets. Scores below every threshold are Common.
        """
        for tier in cls:
            if score >= tier.threshold:
                return tier
        return cls.COMMON


_RARITY_THRESHOLDS: dict[Rarity, int] = {
    Rarity.LEGENDARY: 88,
    Rarity.EPIC: 78,
    Rarity.RARE: 66,
    Rarity.UNCOMMON: 54,
    Rarity.COMMON: 0,
}


class Origin(StrEnum):
    """Provenance tags. Opaque to the engine, translated by the UI."""

    WILD = "wild"
    STARTER = "starter"
    CAPTURED = "captured"
    FUSED = "fused"
    OPPONENT = "opponent"
    ONCHAIN = "onchain"
    SQUAD = "squad"


class Actor(StrEnum):
    """Who produced a battle trace entry."""

    PLAYER = "player"
    OPPONENT = "opponent"
    POTION = "potion"


class BattleOutcome(StrEnum):
    """Terminal states of the battle state machine."""

    WIN = "win"
    DEFEAT = "defeat"


class ActionKind(StrEnum):
    """What happened in a battle round."""

    ATTACK = "battleLog.action.basic"
    CRIT = "battleLog.action.crit"
    MISS = "battleLog.action.miss"
    SKILL_ACTIVATE = "battleLog.skill.activate"
    SKILL_USE = "battleLog.skill.use"
    DAMAGE_DOUBLE = "battleLog.skill.orca"
    SKIP = "battleLog.skill.effect.skipTurn"
    POTION = "battleLog.entry.potion"


class DetailKind(StrEnum):
    """Secondary detail of a battle round."""

    DAMAGE = "battleLog.detail.damage"
    NO_DAMAGE = "battleLog.detail.noDamage"
    NO_ACTION = "battleLog.detail.noAction"
    SHELL = "battleLog.skill.detail.shell"
    SKIP = "battleLog.skill.detail.skip"
    MISS = "battleLog.skill.detail.miss"
    HEAL = "battleLog.skill.detail.heal"
    INSTANT = "battleLog.skill.detail.instant"
    BLOCKED = "battleLog.skill.detail.blocked"
    NULLIFIED = "battleLog.skill.detail.nullified"
    FORCED_MISS = "battleLog.skill.detail.forcedMiss"


__all__ = [
    "Stat",
    "SkillKind",
    "Rarity",
    "Origin",
    "Actor",
    "BattleOutcome",
    "ActionKind",
    "DetailKind",
]
