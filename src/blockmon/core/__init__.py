"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        BlockmonError: Base exception for all engine errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Precondition violations.
        SeedError: Malformed seed text.
        EngineError: Generation and simulation errors.
        CatalogError: Unknown species lookups.

    Configuration:
        Settings: Main engine settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up engine logging.
        get_logger: Get a configured logger instance.
        log_context: Tag log entries emitted inside a block.
"""

from __future__ import annotations

from blockmon.core.config import (
    BattleSettings,
    ExpeditionSettings,
    FusionSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from blockmon.core.exceptions import (
    BlockmonError,
    CatalogError,
    ConfigurationError,
    EngineError,
    SeedError,
    ValidationError,
)
from blockmon.core.logging import (
    configure_logging,
    get_logger,
    log_context,
)


__all__ = [
    # Exceptions
    "BlockmonError",
    "ConfigurationError",
    "ValidationError",
    "SeedError",
    "EngineError",
    "CatalogError",
    # Configuration
    "Settings",
    "BattleSettings",
    "FusionSettings",
    "ExpeditionSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "log_context",
]
