"""Core exceptions for cleanblog."""

import json
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .codes import lookup


class CleanBlogError(Exception):
    """Base exception for infrastructure and configuration errors."""

    def __init__(self, message: str, details: dict = None):
        """Initialize the exception."""
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(CleanBlogError):
    """Raised when configuration is invalid."""

    pass


@dataclass(frozen=True)
class BusinessError:
    """The user-facing part of an error: safe to put in an API response."""
    code: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return asdict(self)

    def to_json(self) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_dict())


class DetailError(Exception):
    """
    Full error object used internally.

    Carries the business error together with the transport status, the
    log level and the original underlying failure. The boundary decides
    which view to expose: responses get ``business_error`` only, logs get
    everything.
    """

    def __init__(
        self,
        business_error: BusinessError,
        http_status: int,
        log_level: int,
        cause: BaseException,
    ):
        self.business_error = business_error
        self.http_status = http_status
        self.log_level = log_level
        self.cause = cause
        # args mirror the constructor so copy and pickle can rebuild the error
        super().__init__(business_error, http_status, log_level, cause)
        self.__cause__ = cause

    @property
    def code(self) -> int:
        return self.business_error.code

    @property
    def message(self) -> str:
        return self.business_error.message

    def with_message(self, message: str) -> "DetailError":
        """Override the default business message for this error."""
        self.business_error = BusinessError(code=self.business_error.code, message=message)
        return self

    def __str__(self) -> str:
        return str(self.cause)

    def __repr__(self) -> str:
        return (
            f"DetailError(code={self.code}, message={self.message!r}, "
            f"http_status={self.http_status}, cause={self.cause!r})"
        )


def new_error(code: int, cause: Optional[BaseException] = None) -> DetailError:
    """
    Create a DetailError for a business code.

    Unknown codes fall back to the internal server error entry. When no
    cause is supplied, the table message becomes the cause so the error
    always carries one.
    """
    entry = lookup(code)
    if cause is None:
        cause = Exception(entry.message)

    return DetailError(
        business_error=BusinessError(code=int(entry.code), message=entry.message),
        http_status=entry.http_status,
        log_level=entry.log_level,
        cause=cause,
    )
