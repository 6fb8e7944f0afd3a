"""
Infrastructure Layer

This layer contains implementations of interfaces defined in the application layer.
It handles external concerns like the database, the cache, tokens and hashing.
"""

from .db_models import Base, UserModel, TagModel, ArticleModel, CommentModel
from .database import create_engine, create_session_factory, init_models, drop_models
from .repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyUserRepository,
    SQLAlchemyTagRepository,
    SQLAlchemyCommentRepository,
)
from .cache import RedisArticleCacheRepository, create_redis_client
from .auth import JWTAuthService
from .security import BcryptPasswordHasher
from .log_adapter import StdlibLogger


__all__ = [
    # Database Models
    "Base",
    "UserModel",
    "TagModel",
    "ArticleModel",
    "CommentModel",
    # Database
    "create_engine",
    "create_session_factory",
    "init_models",
    "drop_models",
    # Repositories
    "SQLAlchemyArticleRepository",
    "SQLAlchemyUserRepository",
    "SQLAlchemyTagRepository",
    "SQLAlchemyCommentRepository",
    # Cache
    "RedisArticleCacheRepository",
    "create_redis_client",
    # Services
    "JWTAuthService",
    "BcryptPasswordHasher",
    "StdlibLogger",
]
