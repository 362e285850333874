"""Tests for error handler."""

import logging
import pytest
from agmip_reshaper.error_handler import ErrorHandler
from agmip_reshaper.types import ErrorType, ReshapeError, WarningType


class TestErrorHandler:
    """Tests for ErrorHandler class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.error_handler = ErrorHandler()

    def test_report_returns_warning(self):
        """Test that a report becomes a warning for the caller."""
        warning = self.error_handler.report(WarningType.DROPPED_FIELD, "Dropped value", "soil.elev")

        assert warning.type == WarningType.DROPPED_FIELD
        assert warning.message == "Dropped value"
        assert warning.location == "soil.elev"

    def test_data_loss_logged_as_error(self, caplog):
        """Test that dropped values are logged at ERROR."""
        with caplog.at_level(logging.WARNING):
            self.error_handler.report(WarningType.LIST_TYPE_MISMATCH, "Bad list", "soil.soilLayer")

        assert caplog.records[0].levelno == logging.ERROR
        assert "soil.soilLayer" in caplog.text

    def test_collision_logged_as_warning(self, caplog):
        """Test that overwritten values are logged at WARNING."""
        with caplog.at_level(logging.WARNING):
            self.error_handler.report(WarningType.KEY_COLLISION, "Overwritten")

        assert caplog.records[0].levelno == logging.WARNING
        assert caplog.records[0].getMessage() == "Overwritten"

    def test_strict_raises(self):
        """Test that a strict handler raises."""
        handler = ErrorHandler(strict=True)

        with pytest.raises(ReshapeError, match="Bad list") as exc_info:
            handler.report(WarningType.LIST_TYPE_MISMATCH, "Bad list", "soil.soilLayer")

        assert exc_info.value.warning_type == WarningType.LIST_TYPE_MISMATCH
        assert exc_info.value.location == "soil.soilLayer"

    def test_custom_logger(self, caplog):
        """Test that the given logger is used."""
        handler = ErrorHandler(logging.getLogger("translator.dssat"))

        with caplog.at_level(logging.WARNING):
            handler.report(WarningType.SCHEMA_GROWTH, "New key")

        assert caplog.records[0].name == "translator.dssat"

    def test_validate_input_valid_json(self):
        """Test validation of a valid document."""
        result = self.error_handler.validate_input('{"exname": "E1", "soil": {}}')

        assert result.is_valid
        assert len(result.errors) == 0
        assert result.warnings == []

    def test_validate_input_invalid_json(self):
        """Test validation of invalid JSON input."""
        result = self.error_handler.validate_input('{"exname": "E1"')

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.SYNTAX
        assert result.errors[0].location.startswith("line 1")

    def test_validate_input_empty(self):
        """Test validation of an empty string."""
        result = self.error_handler.validate_input("   ")

        assert not result.is_valid
        assert result.errors[0].message == "JSON string is empty"

    def test_validate_input_non_object_root(self):
        """Test that a document must be an object."""
        result = self.error_handler.validate_input('[{"a": "1"}]')

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.STRUCTURE
        assert "list" in result.errors[0].message

    def test_validate_input_empty_object(self):
        """Test that an empty document is valid with a warning."""
        result = self.error_handler.validate_input("{}")

        assert result.is_valid
        assert result.warnings == ["Document is empty"]
