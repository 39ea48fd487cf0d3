"""Tests for squad assembly and squad matches."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from blockmon.core.exceptions import ValidationError
from blockmon.engine.squad import assemble_squad, run_squad_match
from blockmon.engine.synthesis import synthesize
from blockmon.models.creature import Creature
from blockmon.models.enums import Origin


class TestAssembleSquad:
    """Tests for assemble_squad."""

    def test_averages_stats(self, make_creature: Callable[..., Creature]) -> None:
        """Test stats are rounded averages and HP is summed."""
        team = [
            make_creature("A", seed=1, hp=50, stats=(10, 1, 4, 0, 7, 3)),
            make_creature("B", seed=2, hp=70, stats=(11, 2, 4, 0, 8, 3)),
        ]

        squad = assemble_squad(team)

        assert [value for _, value in squad.stats.items()] == [11, 2, 4, 1, 8, 3]
        assert squad.hp == squad.max_hp == 120
        assert squad.skill is None
        assert squad.origin == Origin.SQUAD
        assert squad.name == "Squad"
        assert squad.seed_value == 1 ^ 2

    def test_empty_team(self) -> None:
        """Test an empty team is rejected."""
        with pytest.raises(ValidationError):
            assemble_squad([])


class TestRunSquadMatch:
    """Tests for run_squad_match."""

    def test_opponent_from_seed(self) -> None:
        """Test the opponent is synthesized from the match seed."""
        team = [synthesize(seed) for seed in (1, 2, 3)]

        opponent, result = run_squad_match(team, seed=77)

        assert opponent.seed == synthesize(77).seed
        assert opponent.stats == synthesize(77).stats
        assert opponent.origin == Origin.OPPONENT
        assert result.turns <= 40

    def test_deterministic(self) -> None:
        """Test the same team and seed replay identically."""
        team = [synthesize(seed) for seed in (4, 5)]

        assert run_squad_match(team, seed=8) == run_squad_match(team, seed=8)
