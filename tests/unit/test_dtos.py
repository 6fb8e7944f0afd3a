"""Unit tests for request context and DTOs."""

import pytest

from cleanblog.application.dtos import (
    ArticleDTO,
    CreateArticleRequest,
    LoginResponse,
    RegisterRequest,
    RequestContext,
    UpdateArticleRequest,
    UserDTO,
)
from cleanblog.domain.entities import User


@pytest.mark.unit
class TestRequestContext:
    """Test RequestContext."""

    def test_anonymous(self):
        """Test an anonymous context."""
        ctx = RequestContext.anonymous("/articles")

        assert not ctx.is_authenticated
        assert ctx.request_uri == "/articles"
        assert ctx.request_id

    def test_authenticated(self):
        """Test an authenticated context."""
        ctx = RequestContext.authenticated(9)

        assert ctx.is_authenticated
        assert ctx.user_id == 9

    def test_request_ids_differ(self):
        """Test each context gets its own request ID."""
        assert RequestContext().request_id != RequestContext().request_id


@pytest.mark.unit
class TestDTOs:
    """Test the request and response DTOs."""

    def test_create_request_to_entity(self):
        """Test CreateArticleRequest.to_entity."""
        article = CreateArticleRequest(title="t", content="c", tags=["a", "b"]).to_entity()

        assert article.id == 0
        assert article.tag_names == ["a", "b"]

    def test_update_request_without_tags(self):
        """Test an update request without tags."""
        article = UpdateArticleRequest(article_id=3, title="t", content="c").to_entity()

        assert article.id == 3
        assert article.tags == []

    def test_register_request_carries_plaintext(self):
        """Test RegisterRequest keeps the plaintext password."""
        user = RegisterRequest(username="alice", password="pw", email="a@example.com").to_entity()

        assert user.password_hash == "pw"

    def test_article_dto(self, sample_article):
        """Test ArticleDTO.from_entity."""
        dto = ArticleDTO.from_entity(sample_article)

        assert dto.tags == ["intro"]
        assert dto.author_id == 1

    def test_user_dto_hides_hash(self):
        """Test UserDTO omits the password hash."""
        dto = UserDTO.from_entity(User(id=1, username="alice", email="a@example.com", password_hash="secret"))

        assert "secret" not in repr(dto)

    def test_login_response(self):
        """Test LoginResponse."""
        assert LoginResponse(token="abc").to_dict() == {"token": "abc"}
