"""Tests for function call errors."""

import pytest

from actionbridge.errors import (
    FunctionCallError,
    InputValidationError,
    MalformedArgumentsError,
    MissingArgumentsError,
    MissingNameError,
    UnknownActionError,
)


class TestFunctionCallErrors:
    """Tests for the error hierarchy."""

    @pytest.mark.parametrize("error_class, args, code", [
        (MissingNameError, (), "missing_name"),
        (UnknownActionError, ("x",), "unknown_action"),
        (MissingArgumentsError, ("x",), "missing_arguments"),
        (MalformedArgumentsError, ("x", "bad"), "malformed_arguments"),
        (InputValidationError, ("x",), "invalid_input"),
    ])
    def test_codes_and_base_class(self, error_class, args, code):
        """Test every error has a code and shares the base class."""
        error = error_class(*args)

        assert isinstance(error, FunctionCallError)
        assert isinstance(error, ValueError)
        assert error.code == code
        assert error.to_dict()["error"] == code

    def test_missing_name_has_no_action(self):
        """Test the missing name error does not name an action."""
        assert MissingNameError().to_dict() == {
            "error": "missing_name",
            "message": "Missing function name.",
        }

    def test_input_validation_to_dict(self):
        """Test validation errors expose field details."""
        error = InputValidationError(
            "getWeather",
            missing_fields=["location"],
            invalid_fields={"unit": "Input should be a valid string"},
        )
        data = error.to_dict()

        assert data["action"] == "getWeather"
        assert data["missing_fields"] == ["location"]
        assert data["invalid_fields"] == {"unit": "Input should be a valid string"}
        assert "Missing required fields: `location`" in data["message"]
        assert "`unit`: Input should be a valid string" in data["message"]

    def test_malformed_arguments_detail(self):
        """Test the JSON decoder message is kept."""
        error = MalformedArgumentsError("getWeather", "Expecting value: line 1 column 1 (char 0)")

        assert error.to_dict()["detail"].startswith("Expecting value")
        assert 'function "getWeather"' in str(error)
