"""Mapping between on-chain creature records and engine creatures.

The chain stores a creature as a flat record (mon id, name, HP, the six
stats and the skill keys). This module only translates between that shape
and Creature; building, signing and submitting transactions belongs to
the service layer.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from blockmon.core.seeds import format_dna, format_seed
from blockmon.models.creature import Creature
from blockmon.models.enums import Origin, Rarity, Stat
from blockmon.models.species import Skill, SpeciesCatalog, StatBlock


class ChainRecord(BaseModel):
    """Flat creature record as stored on chain.

    Attributes:
        object_id: Chain object id (``0x``-prefixed hex), if minted.
        mon_id: Species identifier.
        name: Creature name.
        hp: Hit points.
        str_, dex, con, int_, wis, cha: Stats.
        skill_name: Skill name message key.
        skill_description: Skill description message key.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    object_id: str | None = None
    mon_id: str
    name: str
    hp: Annotated[int, Field(ge=0)]
    str_: Annotated[int, Field(ge=0, alias="str")] = 0
    dex: Annotated[int, Field(ge=0)] = 0
    con: Annotated[int, Field(ge=0)] = 0
    int_: Annotated[int, Field(ge=0, alias="int")] = 0
    wis: Annotated[int, Field(ge=0)] = 0
    cha: Annotated[int, Field(ge=0)] = 0
    skill_name: str = ""
    skill_description: str = ""

    @classmethod
    def from_fields(cls, object_id: str, fields: dict[str, Any]) -> ChainRecord:
        """Build a record from a chain object's ``fields`` payload.

        The payload nests stats under ``base.fields`` and the skill under
        ``skill.fields``; the species key has appeared under several
        spellings.
        """
        base = (fields.get("base") or {}).get("fields", {})
        skill = (fields.get("skill") or {}).get("fields", {})
        mon_id = next(
            (fields[key] for key in ("monId", "mon_id", "monID", "monid") if fields.get(key)),
            "",
        )
        return cls(
            object_id=object_id,
            mon_id=str(mon_id),
            name=str(fields.get("name") or mon_id),
            hp=int(base.get("hp", 0)),
            **{key: int(base.get(key, 0)) for key in ("str", "dex", "con", "int", "wis", "cha")},
            skill_name=str(skill.get("name", "")),
            skill_description=str(skill.get("description", "")),
        )

    @classmethod
    def from_creature(cls, creature: Creature, catalog: SpeciesCatalog) -> ChainRecord:
        """Build the mint payload for a creature."""
        species = catalog.find(creature.species)
        stats = {stat.abbreviation: value for stat, value in creature.stats.items()}
        return cls(
            object_id=creature.id if creature.id.startswith("0x") else None,
            mon_id=species.id if species else creature.species,
            name=creature.name,
            hp=creature.max_hp,
            **stats,
            skill_name=creature.skill.name if creature.skill else "",
            skill_description=creature.skill.description if creature.skill else "",
        )

    def to_creature(self, catalog: SpeciesCatalog) -> Creature:
        """Convert the record into an engine creature.

        The seed is taken from the low 64 bits of the object id, so the
        creature keeps a stable identity in fusion seed derivation.
        Unknown mon ids keep the raw id as species name and get no
        skill: a skill needs a catalog-defined behaviour to fight with,
        so the record's skill keys are dropped.
        """
        species = catalog.find(self.mon_id)
        object_hex = (self.object_id or "0x0").lower().removeprefix("0x") or "0"
        seed = int(object_hex[-16:], 16)
        stats = StatBlock.from_values(
            {
                Stat.STR: self.str_,
                Stat.DEX: self.dex,
                Stat.CON: self.con,
                Stat.INT: self.int_,
                Stat.WIS: self.wis,
                Stat.CHA: self.cha,
            }
        )
        skill: Skill | None = species.skill if species else None
        return Creature(
            id=self.object_id or f"dna-{format_seed(seed)}",
            dna=format_dna(seed),
            seed=format_seed(seed),
            species=species.name if species else (self.mon_id or "unknown"),
            name=self.name or (species.name if species else self.mon_id or "unknown"),
            hp=self.hp,
            max_hp=self.hp,
            stats=stats,
            skill=skill,
            rank=Rarity.from_score(stats.total),
            origin=Origin.ONCHAIN,
        )


__all__ = [
    "ChainRecord",
]
