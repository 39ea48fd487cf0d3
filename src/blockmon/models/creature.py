"""Pydantic V2 schema for creatures.

A Creature is an immutable snapshot. The engine never mutates one in
place: HP changes after a battle or an expedition produce a new
snapshot through ``with_hp`` or ``restored``.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from blockmon.models.enums import Origin, Rarity
from blockmon.models.species import Skill, StatBlock


class ParentRef(BaseModel):
    """Lineage entry recorded on a fused creature.

    Attributes:
        id: Parent creature id.
        dna: Parent DNA string.
        species: Parent species name.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    dna: str
    species: str


class Creature(BaseModel):
    """A fully specified creature.

    Attributes:
        id: Stable identifier (seed-derived or assigned by the chain).
        dna: Seed as grouped uppercase hex, e.g. ``0000-0000-0000-0001``.
        seed: Seed as 16 lowercase hex chars.
        species: Display name of the species.
        name: Display name.
        hp: Current hit points.
        max_hp: Maximum hit points.
        stats: Stat block.
        skill: Species skill, if any.
        rank: Rarity tier.
        origin: Provenance tag.
        parents: Lineage of a fused creature.
        fusion_count: Number of parents merged into a fused creature.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1, description="Creature identifier")
    dna: str = Field(description="Grouped hex DNA")
    seed: str = Field(pattern=r"^[0-9a-f]{16}$", description="Hex seed")
    species: str = Field(min_length=1, description="Species display name")
    name: str = Field(min_length=1, description="Display name")
    hp: Annotated[int, Field(ge=0, description="Current HP")]
    max_hp: Annotated[int, Field(ge=0, description="Maximum HP")]
    stats: StatBlock = Field(description="Stats")
    skill: Skill | None = Field(default=None, description="Species skill")
    rank: Rarity = Field(default=Rarity.COMMON, description="Rarity tier")
    origin: Origin = Field(default=Origin.WILD, description="Provenance tag")
    parents: tuple[ParentRef, ...] = Field(default=(), description="Fusion lineage")
    fusion_count: Annotated[int, Field(ge=0, description="Parents merged")] = 0

    @model_validator(mode="before")
    @classmethod
    def drop_computed_power(cls, data: Any) -> Any:
        """Accept dumps that carry the computed ``power`` score."""
        if isinstance(data, dict) and "power" in data:
            return {key: value for key, value in data.items() if key != "power"}
        return data

    @computed_field  # type: ignore[prop-decorator]
    @property
    def power(self) -> int:
        """Overall strength score: stat sum plus current HP."""
        return self.stats.total + self.hp

    @property
    def seed_value(self) -> int:
        """The seed as an integer."""
        return int(self.seed, 16)

    def with_hp(self, hp: int) -> Creature:
        """Return a snapshot with HP set, clamped to ``[0, max_hp]``."""
        return self.model_copy(update={"hp": max(0, min(hp, self.max_hp))})

    def restored(self) -> Creature:
        """Return a snapshot healed to full HP."""
        return self.model_copy(update={"hp": self.max_hp})

    def to_parent_ref(self) -> ParentRef:
        """Describe this creature as a fusion parent."""
        return ParentRef(id=self.id, dna=self.dna, species=self.species)


__all__ = [
    "ParentRef",
    "Creature",
]
