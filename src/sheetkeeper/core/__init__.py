"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        SheetkeeperError: Base exception for all package errors.
        MissingClassDataError: Level-up requested without class data.
        StorageError: Character store failures.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        configure_logging_from_settings: Set up logging from Settings.
        get_logger: Get a configured logger instance.
"""

from __future__ import annotations

from sheetkeeper.core.config import (
    RulesSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from sheetkeeper.core.exceptions import (
    CharacterNotFoundError,
    ConfigurationError,
    CorruptRecordError,
    DiceRollError,
    EngineError,
    MissingClassDataError,
    ProgressionError,
    SheetkeeperError,
    StorageError,
)
from sheetkeeper.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


__all__ = [
    # Exceptions
    "SheetkeeperError",
    "ConfigurationError",
    "EngineError",
    "ProgressionError",
    "MissingClassDataError",
    "DiceRollError",
    "StorageError",
    "CharacterNotFoundError",
    "CorruptRecordError",
    # Configuration
    "Settings",
    "StorageSettings",
    "RulesSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
