"""Species reference data.

A species fixes a creature's base stats, base HP and skill. The catalog
is an immutable, ordered configuration value: synthesis picks a species
by position (``seed mod len(catalog)``), while fusion, chain mapping and
the UI look species up by id or display name. Components receive the
catalog explicitly, so tests can inject a controlled table.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from blockmon.core.constants import DEFAULT_SHIELD_TURNS
from blockmon.core.exceptions import CatalogError
from blockmon.models.enums import SkillKind, Stat


class StatBlock(BaseModel):
    """The six creature stats.

    Fields are addressed by full name in Python and by the three-letter
    key (``str``, ``dex``, ...) on the wire.

    Attributes:
        strength: Raw damage.
        dexterity: Initiative, accuracy and evasion.
        constitution: Damage mitigation.
        intelligence: Accuracy and damage.
        wisdom: Evasion.
        charisma: Critical chance.
    """

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        populate_by_name=True,
    )

    strength: Annotated[int, Field(ge=0, alias="str")]
    dexterity: Annotated[int, Field(ge=0, alias="dex")]
    constitution: Annotated[int, Field(ge=0, alias="con")]
    intelligence: Annotated[int, Field(ge=0, alias="int")]
    wisdom: Annotated[int, Field(ge=0, alias="wis")]
    charisma: Annotated[int, Field(ge=0, alias="cha")]

    @classmethod
    def from_values(cls, values: dict[Stat, int]) -> StatBlock:
        """Build a stat block from a Stat-keyed mapping."""
        return cls(**{stat.value: values[stat] for stat in Stat})

    def get(self, stat: Stat) -> int:
        """Get the value of a single stat."""
        return getattr(self, stat.value)

    def items(self) -> Iterator[tuple[Stat, int]]:
        """Iterate over (stat, value) pairs in canonical order."""
        for stat in Stat:
            yield stat, self.get(stat)

    @property
    def total(self) -> int:
        """Sum of all six stats."""
        return sum(value for _, value in self.items())


class Skill(BaseModel):
    """A species skill.

    ``name`` and ``description`` are message keys, never resolved text.

    Attributes:
        name: Message key of the skill name.
        description: Message key of the skill description.
        kind: Behaviour the battle simulator dispatches on.
        chance: Trigger probability per eligible turn.
        duration: Turns the effect lasts (shield only).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, description="Skill name message key")
    description: str = Field(default="", description="Skill description message key")
    kind: SkillKind = Field(description="Skill behaviour")
    chance: float = Field(default=1.0, ge=0, le=1, description="Trigger probability")
    duration: int = Field(default=0, ge=0, description="Effect length in turns")


class SpeciesDefinition(BaseModel):
    """Static record describing one species.

    Attributes:
        id: Stable identifier (also the on-chain mon id).
        name: Display name, copied onto every creature of the species.
        base: Base stat block.
        base_hp: Base hit points.
        skill: The species skill.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1, description="Species identifier")
    name: str = Field(min_length=1, description="Display name")
    base: StatBlock = Field(description="Base stats")
    base_hp: Annotated[int, Field(ge=1, description="Base HP")]
    skill: Skill = Field(description="Species skill")


@dataclass(frozen=True)
class SpeciesCatalog:
    """Immutable, ordered collection of species.

    Attributes:
        species: Species in selection order.
    """

    species: tuple[SpeciesDefinition, ...]

    def __post_init__(self) -> None:
        if not self.species:
            raise CatalogError("Species catalog must not be empty")
        ids = [entry.id for entry in self.species]
        names = [entry.name for entry in self.species]
        if len(set(ids)) != len(ids) or len(set(names)) != len(names):
            raise CatalogError("Species ids and names must be unique")

    def __len__(self) -> int:
        return len(self.species)

    def __iter__(self) -> Iterator[SpeciesDefinition]:
        return iter(self.species)

    def by_index(self, seed: int) -> SpeciesDefinition:
        """Select the species at ``seed mod len(catalog)``.

        Args:
            seed: Any non-negative integer, usually a creature seed.

        Returns:
            The species at that position.
        """
        return self.species[seed % len(self.species)]

    def by_id(self, species_id: str) -> SpeciesDefinition:
        """Look a species up by identifier.

        Raises:
            CatalogError: If no species has this id.
        """
        for entry in self.species:
            if entry.id == species_id:
                return entry
        raise CatalogError("Unknown species id", species=species_id)

    def by_name(self, name: str) -> SpeciesDefinition:
        """Look a species up by display name.

        Raises:
            CatalogError: If no species has this name.
        """
        for entry in self.species:
            if entry.name == name:
                return entry
        raise CatalogError("Unknown species name", species=name)

    def find(self, key: str) -> SpeciesDefinition | None:
        """Look a species up by id or display name, returning None on a miss."""
        for entry in self.species:
            if key in (entry.id, entry.name):
                return entry
        return None


def _species(
    species_id: str,
    name: str,
    *,
    hp: int,
    stats: tuple[int, int, int, int, int, int],
    kind: SkillKind,
    chance: float,
    duration: int = 0,
) -> SpeciesDefinition:
    return SpeciesDefinition(
        id=species_id,
        name=name,
        base=StatBlock.from_values(dict(zip(Stat, stats))),
        base_hp=hp,
        skill=Skill(
            name=f"skill.{species_id}.name",
            description=f"skill.{species_id}.description",
            kind=kind,
            chance=chance,
            duration=duration,
        ),
    )


def default_catalog() -> SpeciesCatalog:
    """Build the canonical six-species catalog.

    Order matters: it decides which species a seed selects.

    Returns:
        A fresh SpeciesCatalog.
    """
    return SpeciesCatalog(
        species=(
            _species(
                "orca", "Orca",
                hp=120, stats=(14, 8, 13, 6, 7, 10),
                kind=SkillKind.DAMAGE_DOUBLE, chance=0.5,
            ),
            _species(
                "plankton", "Plankton",
                hp=70, stats=(6, 14, 7, 12, 11, 9),
                kind=SkillKind.SELF_HEAL, chance=1.0,
            ),
            _species(
                "turtle", "Turtle",
                hp=140, stats=(11, 6, 16, 8, 12, 6),
                kind=SkillKind.SHIELD, chance=0.25, duration=DEFAULT_SHIELD_TURNS,
            ),
            _species(
                "kraken", "Kraken",
                hp=150, stats=(17, 9, 14, 9, 8, 7),
                kind=SkillKind.FORCED_MISS, chance=0.4,
            ),
            _species(
                "leviathan", "Leviathan",
                hp=168, stats=(18, 11, 15, 10, 10, 9),
                kind=SkillKind.INSTANT_DEFEAT, chance=0.05,
            ),
            _species(
                "mermaid", "Mermaid",
                hp=104, stats=(10, 13, 9, 13, 14, 16),
                kind=SkillKind.SKIP_TURN, chance=0.3,
            ),
        )
    )


__all__ = [
    "StatBlock",
    "Skill",
    "SpeciesDefinition",
    "SpeciesCatalog",
    "default_catalog",
]
