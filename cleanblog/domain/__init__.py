"""
Domain Layer

Entities and business rule violations. This layer has NO dependencies
on persistence, caching or transport.
"""

from .entities import Article, Tag, User, UserProfile, Comment, AuditEvent
from .exceptions import DomainError, ArticleValidationError, UserValidationError

__all__ = [
    # Entities
    'Article', 'Tag', 'User', 'UserProfile', 'Comment', 'AuditEvent',
    # Exceptions
    'DomainError', 'ArticleValidationError', 'UserValidationError',
]
