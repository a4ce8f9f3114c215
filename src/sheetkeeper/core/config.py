"""Configuration management for sheetkeeper.

Settings are loaded with pydantic-settings from environment variables and an
optional ``.env`` file.

Example:
    >>> from sheetkeeper.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.rules.max_attunement
    3

Environment Variables:
    SHEETKEEPER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    SHEETKEEPER_LOG_JSON: Emit JSON log lines instead of console output
    SHEETKEEPER_STORAGE_BACKEND: Character store backend ('sqlite' or 'memory')
    SHEETKEEPER_STORAGE_DATABASE_PATH: Path to the SQLite database file
    SHEETKEEPER_RULES_MAX_ATTUNEMENT: Maximum simultaneously attuned items
    SHEETKEEPER_RULES_TOUGH_REGRANTS_PER_LEVEL: Re-grant per-level HP feats on level-up
    SHEETKEEPER_RULES_DICE_SEED: Fixed seed for the dice roller
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sheetkeeper.core.constants import MAX_ATTUNEMENT, MAX_CHARACTER_LEVEL
from sheetkeeper.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for the character store.

    Attributes:
        backend: Which store implementation to build.
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHEETKEEPER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["sqlite", "memory"] = Field(
        default="sqlite",
        description="Character store backend",
    )
    database_path: Path = Field(
        default=Path.home() / ".sheetkeeper" / "characters.db",
        description="Path to SQLite database",
    )

    @field_validator("database_path", mode="after")
    @classmethod
    def expand_user(cls, value: Path) -> Path:
        """Expand ``~`` in the configured database path."""
        return value.expanduser()


class RulesSettings(BaseSettings):
    """Configuration for table-rule variants.

    Attributes:
        max_attunement: Maximum number of attuned items.
        tough_regrants_per_level: Whether per-level HP feats grant their bonus
            again on every later level-up instead of only when taken.
        dice_seed: Optional fixed seed for reproducible dice.
        max_level: Terminal character level.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHEETKEEPER_RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_attunement: int = Field(
        default=MAX_ATTUNEMENT,
        ge=0,
        le=10,
        description="Maximum simultaneously attuned items",
    )
    tough_regrants_per_level: bool = Field(
        default=False,
        description="Re-grant per-level HP feat bonuses on each level-up",
    )
    dice_seed: int | None = Field(
        default=None,
        description="Fixed dice seed",
    )
    max_level: int = Field(
        default=MAX_CHARACTER_LEVEL,
        ge=1,
        description="Terminal character level",
    )

    @model_validator(mode="after")
    def validate_max_level(self) -> "RulesSettings":
        """Ensure the level cap stays inside the class tables.

        Raises:
            ConfigurationError: If max_level exceeds the tabulated levels.
        """
        if self.max_level > MAX_CHARACTER_LEVEL:
            raise ConfigurationError(
                f"max_level ({self.max_level}) cannot exceed {MAX_CHARACTER_LEVEL}",
                config_key="max_level",
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Render logs as JSON.
        storage: Character store settings.
        rules: Rules variant settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHEETKEEPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="sheetkeeper",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    rules: RulesSettings = Field(default_factory=RulesSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "RulesSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
