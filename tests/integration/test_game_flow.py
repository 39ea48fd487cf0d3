"""Integration tests for end-to-end game flows.

These tests drive the public engine API the way a game service would:
mint starters, battle, fuse, run an expedition and map creatures to and
from chain records.
"""

from __future__ import annotations

from blockmon import (
    BattleOptions,
    ChainRecord,
    default_catalog,
    evaluate_recipe,
    resolve_fusion,
    run_expedition,
    run_squad_match,
    simulate,
    synthesize,
)
from blockmon.engine.rng import SeededRng
from blockmon.models.enums import Origin, Rarity


class TestStarterToFusion:
    """Mint starters, battle them, then fuse the survivors."""

    def test_full_flow(self) -> None:
        """Test a typical session from starters to a fused creature."""
        catalog = default_catalog()
        orca = catalog.by_id("orca")
        starters = [
            synthesize(seed, species_override=orca, origin=Origin.STARTER)
            for seed in (1001, 1002, 1003)
        ]

        # Each starter fights a seed-derived opponent.
        rng = SeededRng(2024)
        for starter in starters:
            opponent = synthesize(rng.next_seed(), origin=Origin.OPPONENT)
            result = simulate(starter, opponent, rng.next_seed(), BattleOptions(potions_available=1))
            assert result.turns <= 40

        outcome = evaluate_recipe(starters)
        assert outcome.cost >= 2
        assert 0.25 <= outcome.success_chance <= 0.95

        record = resolve_fusion(starters, seed=rng.next_seed(), success_roll=0.1)
        assert record.success
        assert record.offspring is not None
        assert record.offspring.fusion_count == 3
        assert record.offspring.species == "Orca"


class TestExpeditionToChain:
    """Run an expedition and mint the captures."""

    def test_captures_map_to_chain_records(self) -> None:
        """Test captured creatures survive a chain record round trip."""
        catalog = default_catalog()
        team = [synthesize(seed) for seed in (31, 32, 33, 34)]

        result = run_expedition(team, seed=77, potions=2, catalog=catalog)

        for captured in result.captured:
            record = ChainRecord.from_creature(captured, catalog)
            restored = ChainRecord.model_validate(
                {**record.model_dump(by_alias=True), "object_id": "0x" + captured.seed}
            ).to_creature(catalog)

            assert restored.species == captured.species
            assert restored.stats == captured.stats
            assert restored.max_hp == captured.max_hp
            assert restored.seed == captured.seed
            assert restored.rank == Rarity.from_score(captured.stats.total)


class TestSquadMatch:
    """Squad matches across many seeds."""

    def test_squad_matches_terminate(self) -> None:
        """Test squad matches end within the cap for any seed."""
        team = [synthesize(seed) for seed in (5, 6, 7)]

        for seed in range(25):
            _, result = run_squad_match(team, seed=seed)
            assert result.turns <= 40
