"""Test fixtures and utilities."""

import logging
from datetime import datetime
from unittest.mock import AsyncMock, Mock

import pytest

from cleanblog.application.dtos import RequestContext
from cleanblog.application.ports import (
    ArticleCacheRepository,
    ArticleRepository,
    AuditService,
    AuthenticationError,
    AuthService,
    Logger,
    PasswordHasher,
    UserRepository,
)
from cleanblog.domain.entities import Article, Tag, User


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no external services")


class RecordingLogger(Logger):
    """Logger port that keeps every record in memory; bound children share the list."""

    def __init__(self, records=None, fields=None):
        self.records = records if records is not None else []
        self.fields = dict(fields or {})

    def info(self, msg, **fields):
        self.log(logging.INFO, msg, **fields)

    def warning(self, msg, **fields):
        self.log(logging.WARNING, msg, **fields)

    def error(self, msg, **fields):
        self.log(logging.ERROR, msg, **fields)

    def log(self, level, msg, **fields):
        self.records.append((level, msg, {**self.fields, **fields}))

    def bind(self, **fields):
        return RecordingLogger(self.records, {**self.fields, **fields})

    def messages(self, level=None):
        return [msg for lvl, msg, _ in self.records if level is None or lvl == level]


class FakeAuthService(AuthService):
    """Auth service issuing predictable tokens."""

    def generate_token(self, user_id):
        return f"token-{user_id}"

    def validate_token(self, token):
        if not token.startswith("token-"):
            raise AuthenticationError("invalid token")
        return int(token[len("token-"):])

    def get_user_id_from_context(self, ctx):
        if ctx is None or ctx.user_id is None:
            raise AuthenticationError("user ID not found in context")
        return ctx.user_id


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def auth_service():
    return FakeAuthService()


@pytest.fixture
def article_repo():
    return AsyncMock(spec=ArticleRepository)


@pytest.fixture
def article_cache():
    """Cache mock that misses by default."""
    cache = AsyncMock(spec=ArticleCacheRepository)
    cache.get_article.return_value = None
    cache.get_articles.return_value = None
    return cache


@pytest.fixture
def user_repo():
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def password_hasher():
    return AsyncMock(spec=PasswordHasher)


@pytest.fixture
def audit():
    return Mock(spec=AuditService)


@pytest.fixture
def user_ctx():
    """Context for an authenticated user with id 1."""
    return RequestContext.authenticated(1, request_uri="/articles")


@pytest.fixture
def anonymous_ctx():
    return RequestContext.anonymous()


@pytest.fixture
def sample_article():
    """Create a stored article owned by user 1."""
    return Article(
        id=1,
        title="Hello",
        content="First post",
        author_id=1,
        tags=[Tag(id=1, name="intro")],
        created_at=datetime(2024, 1, 1, 12, 0, 0),
        updated_at=datetime(2024, 1, 1, 12, 0, 0),
    )


@pytest.fixture
def sample_user():
    """Create a stored user with a hashed password."""
    return User(id=1, username="alice", email="alice@example.com", password_hash="hashed")
