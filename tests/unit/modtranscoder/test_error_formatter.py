# -*- coding: utf-8 -*-
"""Location: ./tests/unit/modtranscoder/test_error_formatter.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Unit tests for the validation error formatter and the exception hierarchy.
"""

# Third-Party
from pydantic import ValidationError
import pytest

# First-Party
from modtranscoder.errors import DocumentValidationError, EmptyCommandError, NotationParseError, TranscoderError, UnsupportedNotationError
from modtranscoder.models import Command, MateDocument
from modtranscoder.utils.error_formatter import ErrorFormatter


def _validation_error(model, data) -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        model.model_validate(data)
    return exc_info.value


class TestErrorFormatter:
    """ErrorFormatter.format_validation_error."""

    def test_field_path_and_message(self):
        """Nested locations are joined with dots."""
        result = ErrorFormatter.format_validation_error(_validation_error(Command, {"Args": ["ok", 3]}))
        assert result["success"] is False
        assert result["details"] == [{"field": "Args.1", "message": "Args.1 must be text"}]
        assert result["message"] == "Validation failed: Args.1 must be text"

    def test_list_expected(self):
        """A scalar where a list is expected gets a readable message."""
        result = ErrorFormatter.format_validation_error(_validation_error(Command, {"Args": "Foo"}))
        assert result["details"][0]["message"] == "Args must be a list"

    def test_multiple_errors_reported(self):
        """Every failing field is reported; the first is the summary."""
        result = ErrorFormatter.format_validation_error(_validation_error(MateDocument, {"Version": "x", "Name": 4}))
        fields = [d["field"] for d in result["details"]]
        assert "Version" in fields
        assert "Name" in fields
        assert result["message"].startswith("Validation failed: ")

    def test_unknown_message_fallback(self):
        """Unmapped messages keep the technical text."""
        assert ErrorFormatter._get_user_message("x", "Something odd") == "Invalid x: Something odd"

    def test_root_location(self):
        """An empty location names the whole document."""
        assert ErrorFormatter._format_location(()) == "document"


class TestErrors:
    """Exception hierarchy."""

    @pytest.mark.parametrize("exc", [UnsupportedNotationError("x"), NotationParseError("inline", "x"), DocumentValidationError("x"), EmptyCommandError(0)])
    def test_common_base(self, exc):
        """All errors derive from TranscoderError."""
        assert isinstance(exc, TranscoderError)

    def test_parse_error_attributes(self):
        """NotationParseError keeps notation, details and cause."""
        cause = ValueError("boom")
        err = NotationParseError("structured", "bad text", details=[{"field": "Args", "message": "m"}], cause=cause)
        assert str(err) == "[structured] bad text"
        assert err.notation == "structured"
        assert err.details[0]["field"] == "Args"
        assert err.cause is cause

    def test_parse_error_defaults(self):
        """Details default to an empty list."""
        err = NotationParseError("structured", "bad")
        assert err.details == []
        assert err.cause is None

    def test_empty_command_error(self):
        """EmptyCommandError names the offending position."""
        err = EmptyCommandError(2)
        assert err.index == 2
        assert "#2" in str(err)
