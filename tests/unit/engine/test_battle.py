"""Tests for the battle simulator."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from blockmon.core.config import BattleSettings
from blockmon.engine.battle import BattleEffects, simulate
from blockmon.engine.synthesis import synthesize
from blockmon.models.battle import BattleOptions, BattleRound
from blockmon.models.creature import Creature
from blockmon.models.enums import ActionKind, Actor, BattleOutcome, DetailKind, SkillKind
from blockmon.models.species import Skill


# Player moves first: a 40-point dexterity lead beats the initiative swing.
FAST = (10, 40, 10, 10, 10, 0)
SLOW = (10, 0, 10, 10, 10, 0)


def _skill(kind: SkillKind, *, chance: float = 1.0, duration: int = 0) -> Skill:
    return Skill(name=f"skill.{kind.value}.name", kind=kind, chance=chance, duration=duration)


def _rounds_by(rounds: tuple[BattleRound, ...], actor: Actor) -> list[BattleRound]:
    return [entry for entry in rounds if entry.actor == actor]


class TestBattleInvariants:
    """Tests for properties every battle must satisfy."""

    def test_terminates_within_cap(self) -> None:
        """Test every battle ends within the turn cap."""
        for seed in range(60):
            result = simulate(synthesize(seed), synthesize(seed * 7 + 3), seed)

            assert result.turns <= 40
            assert result.remaining_hp >= 0
            assert result.opponent_remaining_hp >= 0
            if not result.timed_out:
                assert result.remaining_hp == 0 or result.opponent_remaining_hp == 0

    def test_outcome_matches_hp(self) -> None:
        """Test outcome is win iff the opponent reached 0 HP."""
        for seed in range(60):
            result = simulate(synthesize(seed + 1000), synthesize(seed + 2000), seed)

            assert result.won == (result.opponent_remaining_hp == 0)
            assert (result.outcome == BattleOutcome.WIN) == result.won

    def test_deterministic(self) -> None:
        """Test the same inputs reproduce the same trace."""
        player, opponent = synthesize(10), synthesize(20)
        options = BattleOptions(potions_available=1)

        assert simulate(player, opponent, 99, options) == simulate(player, opponent, 99, options)

    def test_seed_changes_trace(self) -> None:
        """Test different battle seeds give different traces."""
        player, opponent = synthesize(10), synthesize(20)

        traces = {simulate(player, opponent, seed).rounds for seed in range(5)}

        assert len(traces) > 1

    def test_strong_beats_weak(self, strong_creature: Creature, weak_creature: Creature) -> None:
        """Test a clearly stronger creature wins at least 95% of battles."""
        wins = sum(simulate(strong_creature, weak_creature, seed).won for seed in range(200))

        assert wins >= 190

    def test_zero_hp_player(self, make_creature: Callable[..., Creature]) -> None:
        """Test a player starting at 0 HP loses without a turn."""
        player = make_creature("Down", hp=0, max_hp=100)

        result = simulate(player, make_creature("Foe", seed=2), 1)

        assert result.outcome == BattleOutcome.DEFEAT
        assert result.turns == 0
        assert result.rounds == ()
        assert not result.timed_out


class TestTurnCap:
    """Tests for battles stopped by the turn cap."""

    def test_timeout_is_defeat(self, make_creature: Callable[..., Creature]) -> None:
        """Test a stalemate ends as a timed-out defeat."""
        player = make_creature("Wall", seed=1, hp=10000)
        opponent = make_creature("Rock", seed=2, hp=10000)

        result = simulate(player, opponent, 5)

        assert result.turns == 40
        assert result.timed_out
        assert result.outcome == BattleOutcome.DEFEAT
        assert result.remaining_hp > 0
        assert result.opponent_remaining_hp > 0

    def test_cap_from_settings(self, make_creature: Callable[..., Creature]) -> None:
        """Test the cap is read from battle settings."""
        player = make_creature("Wall", seed=1, hp=10000)
        opponent = make_creature("Rock", seed=2, hp=10000)

        result = simulate(player, opponent, 5, settings=BattleSettings(max_rounds=5))

        assert result.turns == 5
        assert len(result.rounds) == 5


class TestPotion:
    """Tests for the auto-potion."""

    def test_single_potion_round(self, make_creature: Callable[..., Creature]) -> None:
        """Test a damaged player drinks exactly one potion."""
        player = make_creature("Hurt", seed=1, hp=60, max_hp=200, stats=(12, 10, 30, 10, 10, 0))
        opponent = make_creature("Foe", seed=2, hp=500, stats=(5, 10, 5, 5, 5, 0))

        result = simulate(player, opponent, 3, BattleOptions(potions_available=1))

        potion_rounds = _rounds_by(result.rounds, Actor.POTION)
        assert len(potion_rounds) == 1
        assert result.potions_used == 1
        assert potion_rounds[0].action == ActionKind.POTION
        assert potion_rounds[0].detail == DetailKind.HEAL
        assert potion_rounds[0].amount == 200
        assert potion_rounds[0].player_hp == 200

    @pytest.mark.parametrize("seed", [1, 2, 3, 17, 99])
    def test_second_drop_uses_no_potion(
        self,
        make_creature: Callable[..., Creature],
        seed: int,
    ) -> None:
        """Test falling below the threshold again does not drink a second potion."""
        # Opponent always hits, never crits and deals 37 to 47 per hit.
        player = make_creature("Hurt", seed=1, hp=60, max_hp=200, stats=(10, 10, 10, 10, 10, 0))
        opponent = make_creature("Brute", seed=2, hp=900, stats=(40, 40, 5, 5, 5, 0))

        result = simulate(player, opponent, seed, BattleOptions(potions_available=5))

        potion_rounds = _rounds_by(result.rounds, Actor.POTION)
        assert len(potion_rounds) == 1
        assert result.potions_used == 1
        after = result.rounds[result.rounds.index(potion_rounds[0]) + 1 :]
        assert min(entry.player_hp for entry in after) < 100
        assert result.outcome == BattleOutcome.DEFEAT
        assert result.remaining_hp == 0

    def test_potion_follows_opponent_attack(self, make_creature: Callable[..., Creature]) -> None:
        """Test the potion entry comes right after an opponent action."""
        player = make_creature("Hurt", seed=1, hp=60, max_hp=200, stats=(12, 10, 30, 10, 10, 0))
        opponent = make_creature("Foe", seed=2, hp=500, stats=(5, 10, 5, 5, 5, 0))

        rounds = simulate(player, opponent, 4, BattleOptions(potions_available=1)).rounds
        index = next(i for i, entry in enumerate(rounds) if entry.actor == Actor.POTION)

        assert index > 0
        assert rounds[index - 1].actor == Actor.OPPONENT

    def test_external_max_hp(self, make_creature: Callable[..., Creature]) -> None:
        """Test the potion restores to the supplied max HP."""
        player = make_creature("Hurt", seed=1, hp=60, max_hp=200, stats=(12, 10, 30, 10, 10, 0))
        opponent = make_creature("Foe", seed=2, hp=500, stats=(5, 10, 5, 5, 5, 0))
        options = BattleOptions(potions_available=1, player_max_hp=150)

        result = simulate(player, opponent, 3, options)

        assert _rounds_by(result.rounds, Actor.POTION)[0].amount == 150

    def test_no_potion_without_stock(self, make_creature: Callable[..., Creature]) -> None:
        """Test no potion is used when none is available."""
        player = make_creature("Hurt", seed=1, hp=60, max_hp=200, stats=(12, 10, 30, 10, 10, 0))
        opponent = make_creature("Foe", seed=2, hp=500, stats=(5, 10, 5, 5, 5, 0))

        result = simulate(player, opponent, 3)

        assert result.potions_used == 0
        assert not _rounds_by(result.rounds, Actor.POTION)

    def test_no_potion_when_healthy(
        self,
        strong_creature: Creature,
        weak_creature: Creature,
    ) -> None:
        """Test a player above the threshold keeps the potion."""
        result = simulate(strong_creature, weak_creature, 8, BattleOptions(potions_available=1))

        assert result.potions_used == 0


class TestSkills:
    """Tests for each skill behaviour."""

    def test_instant_defeat(self, make_creature: Callable[..., Creature]) -> None:
        """Test instant defeat ends the battle in the skill phase."""
        player = make_creature(
            "Levi", seed=1, stats=FAST, skill=_skill(SkillKind.INSTANT_DEFEAT)
        )
        opponent = make_creature("Foe", seed=2, hp=999, stats=SLOW)

        result = simulate(player, opponent, 1)

        assert result.outcome == BattleOutcome.WIN
        assert result.turns == 1
        assert len(result.rounds) == 1
        assert result.rounds[0].detail == DetailKind.INSTANT
        assert result.opponent_remaining_hp == 0

    def test_shield_blocks_instant_defeat(self, make_creature: Callable[..., Creature]) -> None:
        """Test a raised shield blocks instant defeat and absorbs attacks."""
        player = make_creature(
            "Shell", seed=1, hp=300, stats=FAST, skill=_skill(SkillKind.SHIELD, duration=2)
        )
        opponent = make_creature(
            "Levi", seed=2, hp=999, stats=SLOW, skill=_skill(SkillKind.INSTANT_DEFEAT)
        )

        result = simulate(player, opponent, 1)
        opponent_rounds = _rounds_by(result.rounds, Actor.OPPONENT)

        assert result.rounds[0].detail == DetailKind.SHELL
        assert result.rounds[0].amount == 2
        assert opponent_rounds[0].detail == DetailKind.BLOCKED
        assert opponent_rounds[1].detail == DetailKind.NULLIFIED
        assert result.remaining_hp > 0

    def test_shield_absorbs_duration(self, make_creature: Callable[..., Creature]) -> None:
        """Test a shield nullifies exactly its duration of attacks."""
        player = make_creature(
            "Shell", seed=1, hp=300, stats=FAST, skill=_skill(SkillKind.SHIELD, duration=2)
        )
        opponent = make_creature("Foe", seed=2, hp=999, stats=SLOW)

        result = simulate(player, opponent, 2)
        details = [entry.detail for entry in _rounds_by(result.rounds, Actor.OPPONENT)]

        assert details[:2] == [DetailKind.NULLIFIED, DetailKind.NULLIFIED]
        assert DetailKind.NULLIFIED not in details[2:]

    def test_skip_turn(self, make_creature: Callable[..., Creature]) -> None:
        """Test the opponent loses its next action."""
        player = make_creature("Siren", seed=1, hp=300, stats=FAST, skill=_skill(SkillKind.SKIP_TURN))
        opponent = make_creature("Foe", seed=2, hp=999, stats=SLOW)

        result = simulate(player, opponent, 3)
        first_opponent = _rounds_by(result.rounds, Actor.OPPONENT)[0]

        assert result.rounds[0].detail == DetailKind.SKIP
        assert first_opponent.action == ActionKind.SKIP
        assert first_opponent.detail == DetailKind.NO_ACTION
        assert first_opponent.skill == "skill.skip_turn.name"

    def test_forced_miss(self, make_creature: Callable[..., Creature]) -> None:
        """Test the next attack against the skill owner misses."""
        player = make_creature("Ink", seed=1, hp=300, stats=FAST, skill=_skill(SkillKind.FORCED_MISS))
        opponent = make_creature("Foe", seed=2, hp=999, stats=SLOW)

        result = simulate(player, opponent, 4)
        first_opponent = _rounds_by(result.rounds, Actor.OPPONENT)[0]

        assert result.rounds[0].detail == DetailKind.MISS
        assert first_opponent.action == ActionKind.MISS
        assert first_opponent.detail == DetailKind.FORCED_MISS
        assert first_opponent.amount == 0

    def test_self_heal(self, make_creature: Callable[..., Creature]) -> None:
        """Test self-heal restores half of max HP once."""
        player = make_creature(
            "Tiny", seed=1, hp=10, max_hp=100, stats=FAST, skill=_skill(SkillKind.SELF_HEAL)
        )
        opponent = make_creature("Foe", seed=2, hp=999, stats=SLOW)

        result = simulate(player, opponent, 5)
        heals = [entry for entry in result.rounds if entry.detail == DetailKind.HEAL]

        assert result.rounds[0].detail == DetailKind.HEAL
        assert result.rounds[0].amount == 50
        assert result.rounds[0].player_hp == 50
        assert len(heals) == 1

    def test_self_heal_waits_for_low_hp(self, make_creature: Callable[..., Creature]) -> None:
        """Test self-heal does not fire at healthy HP."""
        player = make_creature("Tiny", seed=1, hp=100, stats=FAST, skill=_skill(SkillKind.SELF_HEAL))
        opponent = make_creature("Foe", seed=2, hp=999, stats=SLOW)

        result = simulate(player, opponent, 5)

        assert result.rounds[0].detail != DetailKind.HEAL

    def test_damage_double_once(self, make_creature: Callable[..., Creature]) -> None:
        """Test damage doubling fires on the first hit only."""
        player = make_creature(
            "Orca", seed=1, hp=300, stats=FAST, skill=_skill(SkillKind.DAMAGE_DOUBLE)
        )
        opponent = make_creature("Foe", seed=2, hp=999, stats=SLOW)

        result = simulate(player, opponent, 6)
        player_actions = [entry.action for entry in _rounds_by(result.rounds, Actor.PLAYER)]

        assert player_actions[0] == ActionKind.DAMAGE_DOUBLE
        assert ActionKind.DAMAGE_DOUBLE not in player_actions[1:]

    def test_zero_chance_never_fires(self, make_creature: Callable[..., Creature]) -> None:
        """Test a skill with chance 0 never triggers."""
        player = make_creature(
            "Levi", seed=1, stats=FAST, skill=_skill(SkillKind.INSTANT_DEFEAT, chance=0.0)
        )
        opponent = make_creature("Foe", seed=2, hp=999, stats=SLOW)

        result = simulate(player, opponent, 1)

        assert all(entry.detail != DetailKind.INSTANT for entry in result.rounds)


class TestMessageResolution:
    """Tests for resolved trace text."""

    def test_without_resolver(self) -> None:
        """Test rounds carry tags only when no resolver is given."""
        result = simulate(synthesize(1), synthesize(2), 1)

        assert all(entry.action_text is None for entry in result.rounds)

    def test_with_resolver(
        self,
        make_creature: Callable[..., Creature],
        recording_resolver: tuple[Callable[[str, dict[str, Any]], str], list[str]],
    ) -> None:
        """Test the resolver renders action, detail and skill keys."""
        resolve, calls = recording_resolver
        player = make_creature("Siren", seed=1, hp=300, stats=FAST, skill=_skill(SkillKind.SKIP_TURN))
        opponent = make_creature("Foe", seed=2, hp=999, stats=SLOW)

        result = simulate(player, opponent, 3, BattleOptions(t=resolve))

        first = result.rounds[0]
        assert first.action_text == f"<{ActionKind.SKILL_USE.value}>"
        assert first.detail_text == f"<{DetailKind.SKIP.value}>"
        assert "skill.skip_turn.name" in calls
        assert all(entry.action_text for entry in result.rounds)


class TestBattleEffects:
    """Tests for the per-combatant effect state."""

    def test_can_use_once(self) -> None:
        """Test a skill becomes unusable once recorded."""
        effects = BattleEffects()
        skill = _skill(SkillKind.SHIELD)

        assert effects.can_use(skill)

        effects.used.add(skill.kind)

        assert not effects.can_use(skill)
        assert not effects.can_use(None)
