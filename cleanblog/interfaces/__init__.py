"""
Interfaces Layer

Framework-neutral helpers for whatever transport hosts the use cases:
deriving the request identity and rendering errors.
"""

from .auth import authenticate
from .errors import handle_error


__all__ = [
    "authenticate",
    "handle_error",
]
