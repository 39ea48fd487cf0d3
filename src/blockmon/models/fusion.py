"""Pydantic V2 schemas for fusion recipes and fusion records."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from blockmon.models.creature import Creature


class FusionOutcome(BaseModel):
    """Cost and odds of a fusion recipe.

    A pure function of the parent set. Parent sets smaller than two
    produce the zeroed outcome.

    Attributes:
        cost: Token cost of attempting the fusion.
        success_chance: Probability that the fusion succeeds.
        dominant_power: Power of the strongest parent.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    cost: Annotated[int, Field(ge=0)]
    success_chance: Annotated[float, Field(ge=0, le=1)]
    dominant_power: int

    @classmethod
    def zeroed(cls) -> FusionOutcome:
        """The neutral outcome returned for under-sized recipes."""
        return cls(cost=0, success_chance=0.0, dominant_power=0)


class FusionRecord(BaseModel):
    """Result of applying a success roll to a fusion recipe.

    Attributes:
        success: Whether the roll met the success chance.
        outcome: The evaluated recipe.
        offspring: The fused creature on success.
        survivor_ids: Parents the caller keeps.
        consumed_ids: Parents the caller discards.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    success: bool
    outcome: FusionOutcome
    offspring: Creature | None = None
    survivor_ids: tuple[str, ...] = ()
    consumed_ids: tuple[str, ...] = ()


__all__ = [
    "FusionOutcome",
    "FusionRecord",
]
