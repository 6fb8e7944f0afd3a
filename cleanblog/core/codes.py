"""
Business error codes.

Codes are partitioned by numeric range:
- 10xxx: generic errors
- 20xxx: user errors
- 30xxx: article errors

Each code maps to a display message, an HTTP status and a log level.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict


class ErrorCode(IntEnum):
    """Predefined business error codes."""

    SUCCESS = 0

    # Common errors (10xxx)
    INTERNAL_SERVER_ERROR = 10001
    INVALID_PARAMS = 10002
    UNAUTHORIZED = 10003
    NOT_FOUND = 10004

    # User errors (20xxx)
    USER_ALREADY_EXISTS = 20001
    USER_NOT_FOUND = 20002
    INVALID_CREDENTIALS = 20003

    # Article errors (30xxx)
    ARTICLE_NOT_FOUND = 30001


@dataclass(frozen=True)
class ErrorSpec:
    """Table entry for a single error code."""
    code: int
    message: str
    http_status: int
    log_level: int


_CODES: Dict[int, ErrorSpec] = {
    ErrorCode.SUCCESS: ErrorSpec(ErrorCode.SUCCESS, "Success", 200, logging.INFO),
    ErrorCode.INTERNAL_SERVER_ERROR: ErrorSpec(
        ErrorCode.INTERNAL_SERVER_ERROR, "Internal Server Error", 500, logging.ERROR
    ),
    ErrorCode.INVALID_PARAMS: ErrorSpec(
        ErrorCode.INVALID_PARAMS, "Invalid Parameters", 400, logging.WARNING
    ),
    ErrorCode.UNAUTHORIZED: ErrorSpec(
        ErrorCode.UNAUTHORIZED, "Unauthorized", 401, logging.WARNING
    ),
    ErrorCode.NOT_FOUND: ErrorSpec(
        ErrorCode.NOT_FOUND, "Resource Not Found", 404, logging.WARNING
    ),
    ErrorCode.USER_ALREADY_EXISTS: ErrorSpec(
        ErrorCode.USER_ALREADY_EXISTS, "User already exists", 400, logging.WARNING
    ),
    ErrorCode.USER_NOT_FOUND: ErrorSpec(
        ErrorCode.USER_NOT_FOUND, "User not found", 404, logging.WARNING
    ),
    ErrorCode.INVALID_CREDENTIALS: ErrorSpec(
        ErrorCode.INVALID_CREDENTIALS, "Invalid username or password", 401, logging.WARNING
    ),
    ErrorCode.ARTICLE_NOT_FOUND: ErrorSpec(
        ErrorCode.ARTICLE_NOT_FOUND, "Article not found", 404, logging.WARNING
    ),
}


def lookup(code: int) -> ErrorSpec:
    """Get the table entry for a code, falling back to the internal error entry."""
    return _CODES.get(code, _CODES[ErrorCode.INTERNAL_SERVER_ERROR])
