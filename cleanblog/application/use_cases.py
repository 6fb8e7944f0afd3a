"""
Application Layer - Use Cases

Use cases orchestrate the flow of data to and from entities,
and direct those entities to use their domain logic to achieve
the goals of the use case.

Every failure leaves a use case as a ``DetailError`` chaining the
original cause. The only failures that are tolerated are cache reads and
cache repopulation on the read paths: the store of record stays the
fallback, so an unavailable cache never fails a read.
"""

from datetime import timedelta
from typing import Any, Dict, List, Optional

from ..core.codes import ErrorCode
from ..core.exceptions import new_error
from ..domain.entities import Article, AuditEvent, User
from ..domain.exceptions import ArticleValidationError, UserValidationError
from .dtos import RequestContext
from .ports import (
    ArticleCacheRepository,
    ArticleRepository,
    AuditService,
    AuthService,
    AuthenticationError,
    Logger,
    PasswordHasher,
    RecordNotFoundError,
    UserRepository,
)


ARTICLE_CACHE_TTL = timedelta(minutes=5)
ALL_ARTICLES_CACHE_KEY = "articles:all"


class ArticleUseCase:
    """
    Use cases for articles.

    Reads are cache-aside: cache first, store of record on a miss, then
    best-effort repopulation. Writes go to the store and then evict the
    single-article cache entry; a failed eviction is reported to the
    caller because the stale entry would otherwise be served until it
    expires.
    """

    def __init__(
        self,
        repo: ArticleRepository,
        cache: ArticleCacheRepository,
        auth_service: AuthService,
        logger: Logger,
        audit: Optional[AuditService] = None,
    ):
        self.repo = repo
        self.cache = cache
        self.auth_service = auth_service
        self.logger = logger.bind(component="ArticleUseCase")
        self.audit = audit

    async def create_article(self, ctx: RequestContext, article: Article) -> Article:
        """Create an article authored by the acting user."""
        user_id = self._acting_user_id(ctx)
        article.author_id = user_id

        self._validate(article)

        try:
            await self.repo.create(article)
        except Exception as e:
            self.logger.error("failed to create article", error=str(e))
            raise new_error(ErrorCode.INTERNAL_SERVER_ERROR, e) from e

        self.logger.info("article created successfully", article_id=article.id)
        self._record(user_id, "article.created", article.id, {"title": article.title})
        return article

    async def get_article_by_id(self, ctx: RequestContext, article_id: int) -> Article:
        """Get a single article, serving from cache when possible."""
        try:
            cached = await self.cache.get_article(article_id)
        except Exception as e:
            self.logger.error("failed to get article from cache", article_id=article_id, error=str(e))
            cached = None

        if cached is not None:
            self.logger.info("article cache hit", article_id=article_id)
            return cached

        self.logger.info("article cache miss", article_id=article_id)
        article = await self._load(article_id)

        try:
            await self.cache.set_article(article, ARTICLE_CACHE_TTL)
        except Exception as e:
            self.logger.error("failed to set article to cache", article_id=article_id, error=str(e))

        return article

    async def get_all_articles(self, ctx: RequestContext) -> List[Article]:
        """Get every article, serving from cache when possible."""
        try:
            cached = await self.cache.get_articles(ALL_ARTICLES_CACHE_KEY)
        except Exception as e:
            self.logger.error("failed to get articles from cache", error=str(e))
            cached = None

        if cached is not None:
            self.logger.info("articles cache hit")
            return cached

        self.logger.info("articles cache miss")
        try:
            articles = await self.repo.get_all()
        except Exception as e:
            self.logger.error("failed to get articles", error=str(e))
            raise new_error(ErrorCode.INTERNAL_SERVER_ERROR, e) from e

        try:
            await self.cache.set_articles(ALL_ARTICLES_CACHE_KEY, articles, ARTICLE_CACHE_TTL)
        except Exception as e:
            self.logger.error("failed to set articles to cache", error=str(e))

        return articles

    async def update_article(self, ctx: RequestContext, article: Article) -> Article:
        """
        Update an article owned by the acting user.

        The stored author is kept; tags are carried over from the stored
        article when the update names none.
        """
        user_id = self._acting_user_id(ctx)
        existing = await self._load(article.id)
        self._authorize(existing, user_id, "update")

        article.author_id = existing.author_id
        if not article.tags:
            article.tags = existing.tags
        self._validate(article)

        try:
            await self.repo.update(article)
        except Exception as e:
            self.logger.error("failed to update article", article_id=article.id, error=str(e))
            raise new_error(ErrorCode.INTERNAL_SERVER_ERROR, e) from e

        await self._evict(article.id)

        self.logger.info("article updated successfully", article_id=article.id)
        self._record(user_id, "article.updated", article.id, {"title": article.title})
        return article

    async def delete_article(self, ctx: RequestContext, article_id: int) -> None:
        """Delete an article owned by the acting user."""
        user_id = self._acting_user_id(ctx)
        existing = await self._load(article_id)
        self._authorize(existing, user_id, "delete")

        try:
            await self.repo.delete(article_id)
        except Exception as e:
            self.logger.error("failed to delete article", article_id=article_id, error=str(e))
            raise new_error(ErrorCode.INTERNAL_SERVER_ERROR, e) from e

        await self._evict(article_id)

        self.logger.info("article deleted successfully", article_id=article_id)
        self._record(user_id, "article.deleted", article_id)

    # ==================== Helpers ====================

    def _acting_user_id(self, ctx: RequestContext) -> int:
        try:
            return self.auth_service.get_user_id_from_context(ctx)
        except AuthenticationError as e:
            self.logger.error("failed to get user ID from context", error=str(e))
            raise new_error(ErrorCode.UNAUTHORIZED, e) from e

    def _validate(self, article: Article) -> None:
        try:
            article.validate()
        except ArticleValidationError as e:
            self.logger.warning("article validation failed", error=str(e))
            raise new_error(ErrorCode.INVALID_PARAMS, e) from e

    def _authorize(self, existing: Article, user_id: int, action: str) -> None:
        if existing.is_owned_by(user_id):
            return
        self.logger.warning(
            f"user not authorized to {action} article",
            article_id=existing.id,
            user_id=user_id,
        )
        raise new_error(
            ErrorCode.UNAUTHORIZED,
            PermissionError(f"user not authorized to {action} this article"),
        )

    async def _load(self, article_id: int) -> Article:
        try:
            return await self.repo.get_by_id(article_id)
        except RecordNotFoundError as e:
            raise new_error(ErrorCode.ARTICLE_NOT_FOUND, e) from e
        except Exception as e:
            self.logger.error("failed to get article", article_id=article_id, error=str(e))
            raise new_error(ErrorCode.INTERNAL_SERVER_ERROR, e) from e

    async def _evict(self, article_id: int) -> None:
        try:
            await self.cache.delete_article(article_id)
        except Exception as e:
            self.logger.error("failed to evict article from cache", article_id=article_id, error=str(e))
            raise new_error(ErrorCode.INTERNAL_SERVER_ERROR, e) from e

    def _record(
        self,
        user_id: int,
        action: str,
        article_id: int,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        if self.audit is None:
            return
        self.audit.record_event(
            AuditEvent.create(
                user_id=user_id,
                action=action,
                entity="article",
                entity_id=article_id,
                details=details,
            )
        )


class UserUseCase:
    """
    Use cases for users: registration and login.

    Users are looked up by username. A login for an unknown username and
    a login with a wrong password fail with the same code so account
    existence is not revealed.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        auth_service: AuthService,
        password_hasher: PasswordHasher,
        logger: Logger,
        audit: Optional[AuditService] = None,
    ):
        self.user_repo = user_repo
        self.auth_service = auth_service
        self.password_hasher = password_hasher
        self.logger = logger.bind(component="UserUseCase")
        self.audit = audit

    async def register(self, user: User) -> User:
        """
        Register a new user.

        ``user.password_hash`` carries the plaintext password on input and
        is replaced by its hash before the user is stored.
        """
        try:
            user.validate()
        except UserValidationError as e:
            self.logger.warning("user validation failed", error=str(e))
            raise new_error(ErrorCode.INVALID_PARAMS, e) from e

        if await self._username_taken(user.username):
            self.logger.warning("user already exists", username=user.username)
            raise new_error(ErrorCode.USER_ALREADY_EXISTS)

        try:
            hashed = await self.password_hasher.hash(user.password_hash)
        except Exception as e:
            self.logger.error("failed to hash password", error=str(e))
            raise new_error(ErrorCode.INTERNAL_SERVER_ERROR, e) from e
        user.password_hash = hashed

        try:
            await self.user_repo.create(user)
        except Exception as e:
            self.logger.error("failed to create user", username=user.username, error=str(e))
            raise new_error(ErrorCode.INTERNAL_SERVER_ERROR, e) from e

        self.logger.info("user registered successfully", username=user.username)
        self._record(user.id, "user.registered", {"username": user.username})
        return user

    async def login(self, username: str, password: str) -> str:
        """Verify credentials and return a signed token."""
        try:
            user = await self.user_repo.find_by_username(username)
        except RecordNotFoundError as e:
            self.logger.warning("login for unknown user", username=username)
            raise new_error(ErrorCode.INVALID_CREDENTIALS, e) from e
        except Exception as e:
            self.logger.warning("failed to get user by username", username=username, error=str(e))
            raise new_error(ErrorCode.INTERNAL_SERVER_ERROR, e) from e

        try:
            matches = await self.password_hasher.verify(password, user.password_hash)
        except Exception as e:
            self.logger.error("failed to verify password", username=username, error=str(e))
            raise new_error(ErrorCode.INTERNAL_SERVER_ERROR, e) from e
        if not matches:
            self.logger.warning("invalid password", username=username)
            raise new_error(ErrorCode.INVALID_CREDENTIALS, ValueError("password mismatch"))

        try:
            token = self.auth_service.generate_token(user.id)
        except Exception as e:
            self.logger.error("failed to generate token", username=username, error=str(e))
            raise new_error(ErrorCode.INTERNAL_SERVER_ERROR, e) from e

        self.logger.info("user logged in successfully", username=username)
        self._record(user.id, "user.logged_in")
        return token

    async def _username_taken(self, username: str) -> bool:
        try:
            await self.user_repo.find_by_username(username)
        except RecordNotFoundError:
            return False
        except Exception as e:
            self.logger.error("failed to get user by username during registration", error=str(e))
            raise new_error(ErrorCode.INTERNAL_SERVER_ERROR, e) from e
        return True

    def _record(self, user_id: int, action: str, details: Optional[Dict[str, Any]] = None) -> None:
        if self.audit is None:
            return
        self.audit.record_event(
            AuditEvent.create(
                user_id=user_id,
                action=action,
                entity="user",
                entity_id=user_id,
                details=details,
            )
        )
