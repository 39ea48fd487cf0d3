"""Configuration management for the Blockmon engine.

Tunables for battles, fusion and expeditions are loaded with
pydantic-settings, so an embedding service can adjust thresholds through
environment variables or a .env file without touching engine code. The
defaults reproduce the canonical game balance.

Example:
    >>> from blockmon.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.battle.max_rounds
    40

Environment Variables:
    BLOCKMON_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    BLOCKMON_JSON_LOGS: Emit JSON logs instead of console output
    BLOCKMON_BATTLE_MAX_ROUNDS: Turn cap for a single battle
    BLOCKMON_BATTLE_POTION_HP_RATIO: HP fraction below which a potion is used
    BLOCKMON_FUSION_*: Fusion cost and success-chance coefficients
    BLOCKMON_EXPEDITION_*: Expedition team and encounter limits
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from blockmon.core.exceptions import ConfigurationError


class BattleSettings(BaseSettings):
    """Configuration for the battle simulator.

    Attributes:
        max_rounds: Maximum number of turns before the loop stops.
        potion_hp_ratio: Player HP fraction (of max) below which the
            carried potion is auto-used after an opponent's attack.
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOCKMON_BATTLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_rounds: int = Field(
        default=40,
        ge=1,
        le=1000,
        description="Turn cap for a single battle",
    )
    potion_hp_ratio: float = Field(
        default=0.5,
        gt=0,
        le=1,
        description="HP fraction that triggers the auto-potion",
    )


class FusionSettings(BaseSettings):
    """Coefficients of the fusion cost and success-chance formulas.

    Attributes:
        cost_power_divisor: Dominant power per extra token of cost.
        chance_base: Success chance before penalties.
        chance_power_divisor: Dominant power per unit of chance penalty.
        chance_per_extra_parent: Penalty for each parent beyond two.
        min_chance: Lower clamp of the success chance.
        max_chance: Upper clamp of the success chance.
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOCKMON_FUSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    cost_power_divisor: int = Field(default=150, ge=1, description="Power per token")
    chance_base: float = Field(default=0.98, gt=0, le=1, description="Base success chance")
    chance_power_divisor: float = Field(
        default=520.0,
        gt=0,
        description="Power per unit of chance penalty",
    )
    chance_per_extra_parent: float = Field(
        default=0.05,
        ge=0,
        le=1,
        description="Chance penalty per parent beyond two",
    )
    min_chance: float = Field(default=0.25, ge=0, le=1, description="Lower chance clamp")
    max_chance: float = Field(default=0.95, ge=0, le=1, description="Upper chance clamp")

    @model_validator(mode="after")
    def validate_chance_bounds(self) -> "FusionSettings":
        """Ensure the chance clamp is a non-empty interval.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If min_chance > max_chance.
        """
        if self.min_chance > self.max_chance:
            raise ConfigurationError(
                f"min_chance ({self.min_chance}) must not exceed "
                f"max_chance ({self.max_chance})",
                config_key="min_chance",
            )
        return self


class ExpeditionSettings(BaseSettings):
    """Configuration for expeditions.

    Attributes:
        max_team_size: Number of creatures that may join one expedition.
        max_encounters: Wild encounters after which the expedition returns.
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOCKMON_EXPEDITION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_team_size: int = Field(default=4, ge=1, le=16, description="Team size limit")
    max_encounters: int = Field(default=12, ge=1, le=500, description="Encounter limit")


class Settings(BaseSettings):
    """Main engine settings aggregating all configuration domains.

    Attributes:
        log_level: Level passed to ``configure_logging``.
        json_logs: Render log events as JSON instead of console lines.
        battle: Battle simulator settings.
        fusion: Fusion formula settings.
        expedition: Expedition settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOCKMON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Emit JSON logs")

    battle: BattleSettings = Field(default_factory=BattleSettings)
    fusion: FusionSettings = Field(default_factory=FusionSettings)
    expedition: ExpeditionSettings = Field(default_factory=ExpeditionSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the engine settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If the environment holds invalid values.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load engine settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "BattleSettings",
    "FusionSettings",
    "ExpeditionSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
