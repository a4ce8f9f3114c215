"""Custom exception hierarchy for sheetkeeper.

Every error raised by the package inherits from SheetkeeperError so callers
can catch the whole family at the application boundary. Most engine
operations never raise: missing reference data and bad numeric input degrade
to defaults. Only progression preconditions, dice parsing, configuration and
storage surface errors.

Example:
    >>> from sheetkeeper.core.exceptions import MissingClassDataError
    >>> raise MissingClassDataError("No class table", class_id="bard")
"""

from __future__ import annotations

from typing import Any


class SheetkeeperError(Exception):
    """Base exception for all sheetkeeper errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Engine Exceptions
# =============================================================================


class EngineError(SheetkeeperError):
    """Base exception for rules engine errors."""


class ProgressionError(EngineError):
    """Raised when a level-up cannot be computed."""

    def __init__(
        self,
        message: str,
        *,
        character_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize progression error with character context.

        Args:
            message: Human-readable error description.
            character_id: ID of the character being advanced.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if character_id:
            combined_details["character_id"] = character_id
        super().__init__(message, details=combined_details)


class MissingClassDataError(ProgressionError):
    """Raised when a character has no class table to advance against.

    This is fatal: there is no valid level-up target, and continuing would
    leave the snapshot half-updated.
    """

    def __init__(
        self,
        message: str,
        *,
        class_id: str | None = None,
        character_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        combined_details["class_id"] = class_id
        super().__init__(message, character_id=character_id, details=combined_details)


class DiceRollError(EngineError):
    """Raised when a dice expression cannot be parsed or rolled."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that failed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression is not None:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(SheetkeeperError):
    """Base exception for character store failures."""

    def __init__(
        self,
        message: str,
        *,
        character_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if character_id:
            combined_details["character_id"] = character_id
        super().__init__(message, details=combined_details)


class CharacterNotFoundError(StorageError):
    """Raised when a character id is required but absent from the store."""


class CorruptRecordError(StorageError):
    """Raised when a stored record no longer parses into a snapshot."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(SheetkeeperError):
    """Raised when there are configuration issues.

    This includes invalid setting values and environment variables that
    fail validation.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


__all__ = [
    "SheetkeeperError",
    "EngineError",
    "ProgressionError",
    "MissingClassDataError",
    "DiceRollError",
    "StorageError",
    "CharacterNotFoundError",
    "CorruptRecordError",
    "ConfigurationError",
]
