"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Blockmon engine test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from blockmon.models.creature import Creature
from blockmon.models.enums import Origin, Rarity, Stat
from blockmon.models.species import Skill, SpeciesCatalog, StatBlock, default_catalog


if TYPE_CHECKING:
    from collections.abc import Callable, Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from blockmon.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "BLOCKMON_LOG_LEVEL": "DEBUG",
        "BLOCKMON_JSON_LOGS": "true",
        "BLOCKMON_BATTLE_MAX_ROUNDS": "25",
        "BLOCKMON_FUSION_MIN_CHANCE": "0.3",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def catalog() -> SpeciesCatalog:
    """Provide the canonical species catalog."""
    return default_catalog()


@pytest.fixture
def make_creature() -> Callable[..., Creature]:
    """Provide a factory for hand-built creatures.

    The factory takes flat stat values so tests can pin exact numbers
    without going through synthesis.

    Returns:
        Factory ``(name, *, seed, hp, max_hp, stats, skill, species)``.
    """

    def _make(
        name: str = "Test",
        *,
        seed: int = 1,
        hp: int = 100,
        max_hp: int | None = None,
        stats: tuple[int, int, int, int, int, int] = (10, 10, 10, 10, 10, 10),
        skill: Skill | None = None,
        species: str = "Orca",
    ) -> Creature:
        block = StatBlock.from_values(dict(zip(Stat, stats)))
        return Creature(
            id=f"test-{name.lower()}-{seed}",
            dna="0000-0000-0000-0000",
            seed=f"{seed:016x}",
            species=species,
            name=name,
            hp=hp,
            max_hp=max_hp if max_hp is not None else hp,
            stats=block,
            skill=skill,
            rank=Rarity.from_score(block.total),
            origin=Origin.STARTER,
        )

    return _make


@pytest.fixture
def strong_creature(make_creature: Callable[..., Creature]) -> Creature:
    """A creature that should beat ``weak_creature`` almost always."""
    return make_creature("Strong", seed=11, hp=250, stats=(30, 20, 25, 15, 15, 12))


@pytest.fixture
def weak_creature(make_creature: Callable[..., Creature]) -> Creature:
    """A creature with minimal stats and low HP."""
    return make_creature("Weak", seed=12, hp=50, stats=(5, 5, 5, 5, 5, 5))


# =============================================================================
# Resolver Fixtures
# =============================================================================


@pytest.fixture
def recording_resolver() -> tuple[Callable[[str, dict[str, Any]], str], list[str]]:
    """Provide a message resolver that echoes keys and records every call.

    Returns:
        Tuple of (resolver, list of resolved keys).
    """
    calls: list[str] = []

    def _resolve(key: str, params: dict[str, Any]) -> str:
        calls.append(key)
        return f"<{key}>"

    return _resolve, calls
