"""
Application Layer

This layer contains the application business rules (use cases).
It orchestrates the flow of data between the domain and infrastructure layers.
"""

from .ports import (
    RecordNotFoundError,
    AuthenticationError,
    ArticleRepository,
    UserRepository,
    TagRepository,
    CommentRepository,
    ArticleCacheRepository,
    AuthService,
    PasswordHasher,
    Logger,
    AuditService,
)

from .dtos import (
    RequestContext,
    # Request DTOs
    CreateArticleRequest,
    UpdateArticleRequest,
    RegisterRequest,
    LoginRequest,
    # Response DTOs
    LoginResponse,
    ArticleDTO,
    UserDTO,
)

from .audit import LoggingAuditService

from .use_cases import (
    ARTICLE_CACHE_TTL,
    ALL_ARTICLES_CACHE_KEY,
    ArticleUseCase,
    UserUseCase,
)


__all__ = [
    # Ports (Interfaces)
    "RecordNotFoundError",
    "AuthenticationError",
    "ArticleRepository",
    "UserRepository",
    "TagRepository",
    "CommentRepository",
    "ArticleCacheRepository",
    "AuthService",
    "PasswordHasher",
    "Logger",
    "AuditService",
    # Context
    "RequestContext",
    # Request DTOs
    "CreateArticleRequest",
    "UpdateArticleRequest",
    "RegisterRequest",
    "LoginRequest",
    # Response DTOs
    "LoginResponse",
    "ArticleDTO",
    "UserDTO",
    # Services
    "LoggingAuditService",
    # Use Cases
    "ARTICLE_CACHE_TTL",
    "ALL_ARTICLES_CACHE_KEY",
    "ArticleUseCase",
    "UserUseCase",
]
