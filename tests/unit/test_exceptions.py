"""Unit tests for exception classes."""

import pytest

from streamjson.exceptions import CliRunError, InputError, StreamJsonError


@pytest.mark.unit
class TestStreamJsonError:
    """Test cases for base StreamJsonError class."""

    def test_basic_error_creation(self):
        error = StreamJsonError("Test error message")

        assert str(error) == "Test error message"
        assert error.message == "Test error message"
        assert error.code is None
        assert error.details == {}

    def test_error_with_all_params(self):
        details = {"field": "value"}
        error = StreamJsonError("Test message", code="TEST_CODE", details=details)

        assert error.code == "TEST_CODE"
        assert error.details == details


@pytest.mark.unit
class TestCliRunError:
    def test_defaults(self):
        error = CliRunError("Something went wrong", session_id="abc")

        assert isinstance(error, StreamJsonError)
        assert error.session_id == "abc"
        assert error.code == "cli_run_failed"

    def test_code_override(self):
        error = CliRunError("x", code="custom")
        assert error.code == "custom"
        assert error.session_id is None


@pytest.mark.unit
class TestInputError:
    def test_not_found(self):
        error = InputError.not_found("missing.jsonl")

        assert isinstance(error, StreamJsonError)
        assert error.code == "input_not_found"
        assert "missing.jsonl" in error.message
        assert error.details == {"path": "missing.jsonl"}

    def test_unreadable(self):
        error = InputError.unreadable("dir/", "Is a directory")

        assert error.code == "input_unreadable"
        assert error.details["reason"] == "Is a directory"

    def test_can_be_raised_and_caught_as_base(self):
        with pytest.raises(StreamJsonError):
            raise InputError.not_found("x")
