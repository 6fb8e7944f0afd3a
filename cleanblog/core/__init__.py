"""Core error taxonomy shared by every layer."""

from .codes import ErrorCode, ErrorSpec, lookup
from .exceptions import (
    BusinessError,
    CleanBlogError,
    ConfigurationError,
    DetailError,
    new_error,
)

__all__ = [
    "ErrorCode",
    "ErrorSpec",
    "lookup",
    "BusinessError",
    "CleanBlogError",
    "ConfigurationError",
    "DetailError",
    "new_error",
]
