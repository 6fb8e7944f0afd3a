"""
Application Layer - Ports (Interfaces)

Ports define the contracts between the application layer and infrastructure.
They follow the Dependency Inversion Principle - high-level modules don't
depend on low-level modules, both depend on abstractions.

Implementations must tolerate concurrent calls from simultaneous requests;
the use-cases add no locking of their own.
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, List, Optional

from ..domain.entities import Article, AuditEvent, Comment, Tag, User
from .dtos import RequestContext


class RecordNotFoundError(Exception):
    """Raised by repositories when the requested record does not exist."""

    def __init__(self, message: str = "not found"):
        super().__init__(message)


class AuthenticationError(Exception):
    """Raised by the auth service when no valid identity can be established."""

    pass


class ArticleRepository(ABC):
    """
    Repository interface for Article persistence.

    Missing records raise ``RecordNotFoundError``; every other exception
    is a storage failure.
    """

    @abstractmethod
    async def create(self, article: Article) -> None:
        """Insert an article and assign its id in place."""
        pass

    @abstractmethod
    async def get_by_id(self, article_id: int) -> Article:
        """Get an article by its ID."""
        pass

    @abstractmethod
    async def get_all(self) -> List[Article]:
        """Get every article."""
        pass

    @abstractmethod
    async def update(self, article: Article) -> None:
        """Persist changes to an existing article."""
        pass

    @abstractmethod
    async def delete(self, article_id: int) -> None:
        """Delete an article."""
        pass


class UserRepository(ABC):
    """Repository interface for User persistence."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> User:
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> User:
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> User:
        pass

    @abstractmethod
    async def create(self, user: User) -> None:
        """Insert a user and assign its id in place."""
        pass

    @abstractmethod
    async def save(self, user: User) -> None:
        """Insert or update a user."""
        pass


class TagRepository(ABC):
    """Repository interface for Tag persistence. Names are unique."""

    @abstractmethod
    async def find_all(self) -> List[Tag]:
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Tag:
        pass

    @abstractmethod
    async def save(self, tag: Tag) -> None:
        pass


class CommentRepository(ABC):
    """Repository interface for Comment persistence."""

    @abstractmethod
    async def find_by_article_id(self, article_id: int) -> List[Comment]:
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> None:
        pass


class ArticleCacheRepository(ABC):
    """
    Cache interface for articles.

    A miss is ``None`` with no exception; an exception means the cache
    itself is unavailable.
    """

    @abstractmethod
    async def get_article(self, article_id: int) -> Optional[Article]:
        pass

    @abstractmethod
    async def set_article(self, article: Article, expiration: timedelta) -> None:
        pass

    @abstractmethod
    async def get_articles(self, key: str) -> Optional[List[Article]]:
        pass

    @abstractmethod
    async def set_articles(self, key: str, articles: List[Article], expiration: timedelta) -> None:
        pass

    @abstractmethod
    async def delete_article(self, article_id: int) -> None:
        pass


class AuthService(ABC):
    """
    Service interface for token issuance and identity extraction.

    Every failure raises ``AuthenticationError``.
    """

    @abstractmethod
    def generate_token(self, user_id: int) -> str:
        """Issue a signed token for a user."""
        pass

    @abstractmethod
    def validate_token(self, token: str) -> int:
        """Return the user id carried by a token (bad signature, expired or malformed raise)."""
        pass

    @abstractmethod
    def get_user_id_from_context(self, ctx: RequestContext) -> int:
        """Return the authenticated user id of a request."""
        pass


class PasswordHasher(ABC):
    """Service interface for slow, salted one-way password hashing."""

    @abstractmethod
    async def hash(self, password: str) -> str:
        pass

    @abstractmethod
    async def verify(self, password: str, hashed: str) -> bool:
        pass


class Logger(ABC):
    """
    Leveled structured logger.

    Fields are passed as keyword arguments; ``bind`` returns a new logger
    that carries the given fields on every record.
    """

    @abstractmethod
    def info(self, msg: str, **fields: Any) -> None:
        pass

    @abstractmethod
    def warning(self, msg: str, **fields: Any) -> None:
        pass

    @abstractmethod
    def error(self, msg: str, **fields: Any) -> None:
        pass

    @abstractmethod
    def log(self, level: int, msg: str, **fields: Any) -> None:
        """Log at an explicit stdlib level."""
        pass

    @abstractmethod
    def bind(self, **fields: Any) -> "Logger":
        pass


class AuditService(ABC):
    """Service interface for recording business events."""

    @abstractmethod
    def record_event(self, event: AuditEvent) -> None:
        pass
