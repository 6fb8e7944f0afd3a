"""
Application Layer - DTOs (Data Transfer Objects)

DTOs are used to transfer data between layers.
They decouple the boundary from the domain layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import uuid

from ..domain.entities import Article, Tag, User


# ==================== Request Context ====================

@dataclass(frozen=True)
class RequestContext:
    """
    Per-request context derived once at the boundary.

    ``user_id`` is set only after a successful authentication step.
    """
    user_id: Optional[int] = None
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    request_uri: Optional[str] = None

    @classmethod
    def anonymous(cls, request_uri: Optional[str] = None) -> 'RequestContext':
        return cls(request_uri=request_uri)

    @classmethod
    def authenticated(cls, user_id: int, request_uri: Optional[str] = None) -> 'RequestContext':
        return cls(user_id=user_id, request_uri=request_uri)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


# ==================== Request DTOs ====================

@dataclass
class CreateArticleRequest:
    """Request to create an article."""
    title: str
    content: str
    tags: List[str] = field(default_factory=list)

    def to_entity(self) -> Article:
        return Article(
            title=self.title,
            content=self.content,
            tags=[Tag(name=name) for name in self.tags],
        )


@dataclass
class UpdateArticleRequest:
    """Request to update an article."""
    article_id: int
    title: str
    content: str
    tags: Optional[List[str]] = None

    def to_entity(self) -> Article:
        return Article(
            id=self.article_id,
            title=self.title,
            content=self.content,
            tags=[Tag(name=name) for name in self.tags or []],
        )


@dataclass
class RegisterRequest:
    """Request to register a new user."""
    username: str
    password: str
    email: str

    def to_entity(self) -> User:
        # The plaintext travels in password_hash until register() hashes it
        return User(username=self.username, email=self.email, password_hash=self.password)


@dataclass
class LoginRequest:
    """Request to log in."""
    username: str
    password: str


# ==================== Response DTOs ====================

@dataclass
class LoginResponse:
    """Response for a successful login."""
    token: str

    def to_dict(self) -> Dict[str, Any]:
        return {"token": self.token}


@dataclass
class ArticleDTO:
    """DTO for an article."""
    id: int
    title: str
    content: str
    author_id: int
    tags: List[str]

    @classmethod
    def from_entity(cls, entity: Article) -> 'ArticleDTO':
        """Create DTO from domain entity."""
        return cls(
            id=entity.id,
            title=entity.title,
            content=entity.content,
            author_id=entity.author_id,
            tags=entity.tag_names,
        )


@dataclass
class UserDTO:
    """DTO for a user. Never carries the password hash."""
    id: int
    username: str
    email: str
    nickname: str = ""
    avatar: str = ""

    @classmethod
    def from_entity(cls, entity: User) -> 'UserDTO':
        """Create DTO from domain entity."""
        return cls(
            id=entity.id,
            username=entity.username,
            email=entity.email,
            nickname=entity.profile.nickname,
            avatar=entity.profile.avatar,
        )
