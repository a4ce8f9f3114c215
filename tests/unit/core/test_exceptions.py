"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

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


class TestSheetkeeperError:
    """Tests for the base SheetkeeperError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = SheetkeeperError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = SheetkeeperError("Test error", details={"key": "value", "count": 42})
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(SheetkeeperError("Test", details={"x": 1}))
        assert "SheetkeeperError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestEngineExceptions:
    """Tests for rules engine exceptions."""

    def test_missing_class_data_context(self) -> None:
        """Test MissingClassDataError carries class and character ids."""
        exc = MissingClassDataError("No class table", class_id="bard", character_id="abc")
        assert exc.details["class_id"] == "bard"
        assert exc.details["character_id"] == "abc"

    def test_missing_class_data_without_class(self) -> None:
        """Test a character with no class at all is still reported."""
        exc = MissingClassDataError("No class table")
        assert exc.details == {"class_id": None}

    def test_dice_roll_error_expression(self) -> None:
        """Test DiceRollError records the failing expression."""
        exc = DiceRollError("Bad dice", expression="2d")
        assert exc.details["expression"] == "2d"

    def test_hierarchy(self) -> None:
        """Test engine errors share a base."""
        assert issubclass(MissingClassDataError, ProgressionError)
        assert issubclass(ProgressionError, EngineError)
        assert issubclass(DiceRollError, EngineError)
        assert issubclass(EngineError, SheetkeeperError)


class TestStorageExceptions:
    """Tests for character store exceptions."""

    def test_not_found_character_id(self) -> None:
        """Test CharacterNotFoundError records the id."""
        exc = CharacterNotFoundError("Missing", character_id="abc123")
        assert exc.details["character_id"] == "abc123"

    def test_hierarchy(self) -> None:
        """Test storage errors share a base."""
        assert issubclass(CharacterNotFoundError, StorageError)
        assert issubclass(CorruptRecordError, StorageError)
        assert issubclass(StorageError, SheetkeeperError)


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_config_key(self) -> None:
        """Test ConfigurationError with a config key."""
        exc = ConfigurationError("Invalid value", config_key="max_level")
        assert exc.details["config_key"] == "max_level"

    def test_catchable_as_base(self) -> None:
        """Test every error can be caught at the package boundary."""
        with pytest.raises(SheetkeeperError):
            raise ConfigurationError("Invalid value")
