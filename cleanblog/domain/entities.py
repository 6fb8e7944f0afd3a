"""
Domain Entities

Plain validated structures with no persistence knowledge.
Identifiers are assigned by the persistence layer; ``0`` means "not yet
stored".
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
import re

from .exceptions import ArticleValidationError, UserValidationError


EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+\-]+@[a-z0-9.\-]+\.[a-z]{2,4}$")


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


@dataclass
class Tag:
    """A named label attached to articles (many-to-many)."""
    id: int = 0
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tag":
        return cls(id=data.get("id", 0), name=data.get("name", ""))


@dataclass
class Article:
    """
    A blog article.

    Invariant: title, content and author must all be present before the
    article is persisted (see ``validate``).
    """
    id: int = 0
    title: str = ""
    content: str = ""
    author_id: int = 0
    tags: List[Tag] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def validate(self) -> None:
        """Check the article's business rules, raising on the first violation."""
        if not self.title:
            raise ArticleValidationError("title is required")
        if not self.content:
            raise ArticleValidationError("content is required")
        if not self.author_id:
            raise ArticleValidationError("author is required")

    def is_owned_by(self, user_id: int) -> bool:
        """Check whether the given user authored this article."""
        return self.author_id == user_id

    @property
    def tag_names(self) -> List[str]:
        return [tag.name for tag in self.tags]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author_id": self.author_id,
            "tags": [tag.to_dict() for tag in self.tags],
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Article":
        """Rebuild an article from ``to_dict`` output."""
        return cls(
            id=data.get("id", 0),
            title=data.get("title", ""),
            content=data.get("content", ""),
            author_id=data.get("author_id", 0),
            tags=[Tag.from_dict(t) for t in data.get("tags") or []],
            created_at=_parse_datetime(data.get("created_at")),
            updated_at=_parse_datetime(data.get("updated_at")),
        )


@dataclass
class UserProfile:
    """Optional profile information for a user."""
    nickname: str = ""
    avatar: str = ""


@dataclass
class User:
    """
    A registered user.

    ``password_hash`` holds the plaintext password only between the
    boundary and registration; after ``UserUseCase.register`` it is
    always a hash.
    """
    id: int = 0
    username: str = ""
    email: str = ""
    password_hash: str = ""
    profile: UserProfile = field(default_factory=UserProfile)

    def validate(self) -> None:
        """Check the user's business rules, raising on the first violation."""
        if not self.username:
            raise UserValidationError("username is required")
        if not EMAIL_PATTERN.fullmatch(self.email or ""):
            raise UserValidationError("invalid email format")


@dataclass
class Comment:
    """A comment on an article. No use-case logic is attached to comments."""
    id: int = 0
    article_id: int = 0
    user_id: int = 0
    content: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class AuditEvent:
    """
    A business event to be audited.

    Immutable after creation - audit records should never be modified.
    """
    user_id: int
    action: str
    entity: str
    entity_id: int
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def create(
        cls,
        user_id: int,
        action: str,
        entity: str,
        entity_id: int,
        details: Optional[Dict[str, Any]] = None,
    ) -> "AuditEvent":
        """Factory method to create an audit event."""
        return cls(
            user_id=user_id,
            action=action,
            entity=entity,
            entity_id=entity_id,
            details=details or {},
        )
