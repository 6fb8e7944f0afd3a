"""Unit tests for error codes and exceptions."""

import copy
import json
import logging
import pickle

import pytest

from cleanblog.core.codes import ErrorCode, lookup
from cleanblog.core.exceptions import (
    BusinessError,
    CleanBlogError,
    ConfigurationError,
    DetailError,
    new_error,
)


@pytest.mark.unit
class TestErrorCodes:
    """Test the error code table."""

    @pytest.mark.parametrize(
        "code,message,status,level",
        [
            (ErrorCode.SUCCESS, "Success", 200, logging.INFO),
            (ErrorCode.INTERNAL_SERVER_ERROR, "Internal Server Error", 500, logging.ERROR),
            (ErrorCode.INVALID_PARAMS, "Invalid Parameters", 400, logging.WARNING),
            (ErrorCode.UNAUTHORIZED, "Unauthorized", 401, logging.WARNING),
            (ErrorCode.NOT_FOUND, "Resource Not Found", 404, logging.WARNING),
            (ErrorCode.USER_ALREADY_EXISTS, "User already exists", 400, logging.WARNING),
            (ErrorCode.USER_NOT_FOUND, "User not found", 404, logging.WARNING),
            (ErrorCode.INVALID_CREDENTIALS, "Invalid username or password", 401, logging.WARNING),
            (ErrorCode.ARTICLE_NOT_FOUND, "Article not found", 404, logging.WARNING),
        ],
    )
    def test_table_entries(self, code, message, status, level):
        """Test each code maps to its message, status and level."""
        entry = lookup(code)

        assert entry.code == code
        assert entry.message == message
        assert entry.http_status == status
        assert entry.log_level == level

    def test_code_ranges(self):
        """Test codes fall in their category ranges."""
        assert 10000 < ErrorCode.INVALID_PARAMS < 20000
        assert 20000 < ErrorCode.INVALID_CREDENTIALS < 30000
        assert 30000 < ErrorCode.ARTICLE_NOT_FOUND < 40000

    def test_unknown_code_falls_back_to_internal(self):
        """Test unknown codes resolve to the internal error."""
        assert lookup(99999) == lookup(ErrorCode.INTERNAL_SERVER_ERROR)


@pytest.mark.unit
class TestNewError:
    """Test DetailError construction."""

    def test_without_cause_uses_table_message(self):
        """Test error without a cause."""
        error = new_error(ErrorCode.USER_ALREADY_EXISTS)

        assert str(error) == "User already exists"
        assert error.code == ErrorCode.USER_ALREADY_EXISTS
        assert error.http_status == 400
        assert error.cause is not None

    def test_with_cause(self):
        """Test error wrapping a cause."""
        cause = ValueError("title is required")
        error = new_error(ErrorCode.INVALID_PARAMS, cause)

        assert str(error) == "title is required"
        assert error.cause is cause
        assert error.__cause__ is cause
        assert error.message == "Invalid Parameters"
        assert error.log_level == logging.WARNING

    def test_unknown_code(self):
        """Test error for an unknown code."""
        error = new_error(424242)

        assert error.code == ErrorCode.INTERNAL_SERVER_ERROR
        assert error.http_status == 500
        assert str(error) == "Internal Server Error"

    def test_is_exception(self):
        """Test DetailError can be raised and caught."""
        with pytest.raises(DetailError) as exc_info:
            raise new_error(ErrorCode.NOT_FOUND)

        assert exc_info.value.business_error == BusinessError(10004, "Resource Not Found")

    def test_with_message_overrides_business_message(self):
        """Test overriding the business message."""
        error = new_error(ErrorCode.INVALID_PARAMS).with_message("title is too long")

        assert error.message == "title is too long"
        assert error.code == ErrorCode.INVALID_PARAMS

    def test_business_error_serialization(self):
        """Test business error serialization."""
        error = new_error(ErrorCode.ARTICLE_NOT_FOUND, LookupError("row 7 missing"))

        assert error.business_error.to_dict() == {"code": 30001, "message": "Article not found"}
        assert json.loads(error.business_error.to_json()) == {
            "code": 30001,
            "message": "Article not found",
        }
        # internal cause stays out of the response body
        assert "row 7" not in error.business_error.to_json()

    def test_repr_mentions_cause(self):
        """Test repr includes code and cause."""
        error = new_error(ErrorCode.INTERNAL_SERVER_ERROR, RuntimeError("db down"))

        assert "db down" in repr(error)
        assert "10001" in repr(error)

    def test_copy_keeps_fields(self):
        """Test copying a DetailError."""
        error = new_error(ErrorCode.INVALID_PARAMS, ValueError("title is required")).with_message("bad title")

        copied = copy.copy(error)

        assert copied.code == ErrorCode.INVALID_PARAMS
        assert copied.message == "bad title"
        assert copied.http_status == 400
        assert copied.log_level == logging.WARNING
        assert str(copied) == "title is required"

    def test_pickle_round_trip(self):
        """Test pickling a DetailError."""
        error = new_error(ErrorCode.ARTICLE_NOT_FOUND, LookupError("row 7 missing"))

        restored = pickle.loads(pickle.dumps(error))

        assert restored.business_error == error.business_error
        assert restored.http_status == 404
        assert restored.log_level == logging.WARNING
        assert str(restored) == "row 7 missing"
        assert isinstance(restored.__cause__, LookupError)


@pytest.mark.unit
class TestConfigurationError:
    """Test ConfigurationError."""

    def test_details(self):
        """Test message and details."""
        error = ConfigurationError("bad config", details={"key": "jwt"})

        assert isinstance(error, CleanBlogError)
        assert str(error) == "bad config"
        assert error.details == {"key": "jwt"}
