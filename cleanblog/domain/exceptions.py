"""
Domain Exceptions

Custom exceptions for the domain layer.
These represent business rule violations.
"""


class DomainError(Exception):
    """Base class for domain exceptions."""

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


class ArticleValidationError(DomainError):
    """Raised when an article breaks one of its invariants."""

    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_ARTICLE")


class UserValidationError(DomainError):
    """Raised when a user breaks one of its invariants."""

    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_USER")
