"""
Dependency Injection Container

Provides dependency injection for the clean architecture components.
This follows the Composition Root pattern.
"""

from datetime import timedelta
from typing import Optional

from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from .application.audit import LoggingAuditService
from .application.ports import Logger
from .application.use_cases import ArticleUseCase, UserUseCase
from .config import Settings, load_settings
from .core.exceptions import ConfigurationError
from .infrastructure.auth import JWTAuthService
from .infrastructure.cache import RedisArticleCacheRepository, create_redis_client
from .infrastructure.database import create_engine, create_session_factory, init_models
from .infrastructure.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyCommentRepository,
    SQLAlchemyTagRepository,
    SQLAlchemyUserRepository,
)
from .infrastructure.security import BcryptPasswordHasher
from .utils.logger import get_logger, setup_logging


class Container:
    """
    Dependency Injection Container.

    Manages the lifecycle of dependencies and provides
    factory methods for use cases.

    Usage:
        container = Container.from_config()
        user_uc = container.user_use_case()
        token = await user_uc.login("alice", "secret")
        await container.close()
    """

    def __init__(self, settings: Settings, configure_logging: bool = False):
        self.settings = settings
        if configure_logging:
            setup_logging(
                level=settings.logger.level,
                log_file=settings.logger.file.filename,
                audit_file=settings.audit_log.file,
                max_bytes=settings.logger.file.max_size_mb * 1024 * 1024,
                backup_count=settings.logger.file.max_backups,
            )

        # Lazy-initialized components
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._redis: Optional[Redis] = None
        self._auth_service: Optional[JWTAuthService] = None
        self._password_hasher: Optional[BcryptPasswordHasher] = None
        self._logger: Optional[Logger] = None
        self._audit_service: Optional[LoggingAuditService] = None

    @classmethod
    def from_config(cls, path: Optional[str] = None) -> "Container":
        """Create container from a config file plus environment overrides."""
        return cls(load_settings(path), configure_logging=True)

    # ==================== Infrastructure Components ====================

    @property
    def engine(self) -> AsyncEngine:
        """Get the database engine."""
        if self._engine is None:
            self._engine = create_engine(self.settings.database.dsn, echo=self.settings.database.echo)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get SQLAlchemy session factory."""
        if self._session_factory is None:
            self._session_factory = create_session_factory(self.engine)
        return self._session_factory

    @property
    def redis(self) -> Redis:
        """Get Redis client."""
        if self._redis is None:
            self._redis = create_redis_client(self.settings.redis.dsn)
        return self._redis

    @property
    def auth_service(self) -> JWTAuthService:
        """Get auth service."""
        if self._auth_service is None:
            jwt = self.settings.jwt
            if not jwt.secret:
                raise ConfigurationError("JWT secret is not configured")
            self._auth_service = JWTAuthService(
                secret=jwt.secret,
                expires_in=timedelta(minutes=jwt.expires_in_minutes),
                algorithm=jwt.algorithm,
            )
        return self._auth_service

    @property
    def password_hasher(self) -> BcryptPasswordHasher:
        """Get password hasher."""
        if self._password_hasher is None:
            self._password_hasher = BcryptPasswordHasher()
        return self._password_hasher

    @property
    def logger(self) -> Logger:
        """Get application logger."""
        if self._logger is None:
            self._logger = get_logger("cleanblog.app")
        return self._logger

    @property
    def audit_service(self) -> LoggingAuditService:
        """Get audit service."""
        if self._audit_service is None:
            self._audit_service = LoggingAuditService(get_logger("cleanblog.audit"))
        return self._audit_service

    # ==================== Repositories ====================

    def article_repository(self) -> SQLAlchemyArticleRepository:
        return SQLAlchemyArticleRepository(self.session_factory)

    def user_repository(self) -> SQLAlchemyUserRepository:
        return SQLAlchemyUserRepository(self.session_factory)

    def tag_repository(self) -> SQLAlchemyTagRepository:
        return SQLAlchemyTagRepository(self.session_factory)

    def comment_repository(self) -> SQLAlchemyCommentRepository:
        return SQLAlchemyCommentRepository(self.session_factory)

    def article_cache(self) -> RedisArticleCacheRepository:
        return RedisArticleCacheRepository(self.redis)

    # ==================== Use Case Factories ====================

    def article_use_case(self) -> ArticleUseCase:
        """Create the ArticleUseCase."""
        return ArticleUseCase(
            repo=self.article_repository(),
            cache=self.article_cache(),
            auth_service=self.auth_service,
            logger=self.logger,
            audit=self.audit_service,
        )

    def user_use_case(self) -> UserUseCase:
        """Create the UserUseCase."""
        return UserUseCase(
            user_repo=self.user_repository(),
            auth_service=self.auth_service,
            password_hasher=self.password_hasher,
            logger=self.logger,
            audit=self.audit_service,
        )

    # ==================== Lifecycle ====================

    async def init_db(self) -> None:
        """Create database tables."""
        await init_models(self.engine)

    async def close(self) -> None:
        """Release the Redis client and the database engine."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
