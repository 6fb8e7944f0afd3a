"""
Infrastructure Layer - Repository Implementations

Concrete implementations of repository interfaces using SQLAlchemy.
Each call runs in its own session; missing records raise
``RecordNotFoundError`` and every other failure propagates unchanged.
"""

from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..application.ports import (
    ArticleRepository, CommentRepository, RecordNotFoundError,
    TagRepository, UserRepository,
)
from ..domain.entities import Article, Comment, Tag, User, UserProfile
from .db_models import ArticleModel, CommentModel, TagModel, UserModel


_TAG_UPSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def _tag_to_entity(model: TagModel) -> Tag:
    return Tag(id=model.id, name=model.name)


async def _resolve_tags(session: AsyncSession, names: Iterable[str]) -> List[TagModel]:
    """
    Get-or-create tag rows for the given names, keeping their order.

    Missing names are inserted with ON CONFLICT DO NOTHING and then read
    back, so concurrent requests adding the same new tag both succeed.
    """
    wanted = list(dict.fromkeys(name for name in names if name))
    if not wanted:
        return []

    insert = _TAG_UPSERTS.get(session.bind.dialect.name)
    if insert is not None:
        await session.execute(
            insert(TagModel)
            .values([{"name": name} for name in wanted])
            .on_conflict_do_nothing(index_elements=["name"])
        )

    result = await session.execute(select(TagModel).where(TagModel.name.in_(wanted)))
    existing = {tag.name: tag for tag in result.scalars().all()}

    return [existing.get(name) or TagModel(name=name) for name in wanted]


class SQLAlchemyArticleRepository(ArticleRepository):
    """SQLAlchemy implementation of ArticleRepository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def create(self, article: Article) -> None:
        """Insert an article; tags are matched by name and created when missing."""
        async with self.session_factory() as session:
            model = ArticleModel(
                title=article.title,
                content=article.content,
                author_id=article.author_id,
            )
            model.tags = await _resolve_tags(session, article.tag_names)
            session.add(model)
            await session.commit()

            article.id = model.id
            article.tags = [_tag_to_entity(t) for t in model.tags]
            article.created_at = model.created_at
            article.updated_at = model.updated_at

    async def get_by_id(self, article_id: int) -> Article:
        """Get an article by ID."""
        async with self.session_factory() as session:
            model = await session.get(ArticleModel, article_id)
            if model is None:
                raise RecordNotFoundError(f"article {article_id} not found")
            return self._to_entity(model)

    async def get_all(self) -> List[Article]:
        """Get every article, oldest first."""
        async with self.session_factory() as session:
            result = await session.execute(select(ArticleModel).order_by(ArticleModel.id))
            return [self._to_entity(m) for m in result.scalars().all()]

    async def update(self, article: Article) -> None:
        """Update title, content and tags of an existing article."""
        async with self.session_factory() as session:
            model = await session.get(ArticleModel, article.id)
            if model is None:
                raise RecordNotFoundError(f"article {article.id} not found")

            model.title = article.title
            model.content = article.content
            model.tags = await _resolve_tags(session, article.tag_names)
            await session.commit()

            article.tags = [_tag_to_entity(t) for t in model.tags]
            article.created_at = model.created_at
            article.updated_at = model.updated_at

    async def delete(self, article_id: int) -> None:
        """Delete an article together with its tag links and comments."""
        async with self.session_factory() as session:
            model = await session.get(ArticleModel, article_id)
            if model is None:
                raise RecordNotFoundError(f"article {article_id} not found")
            await session.delete(model)
            await session.commit()

    def _to_entity(self, model: ArticleModel) -> Article:
        """Convert model to entity."""
        return Article(
            id=model.id,
            title=model.title,
            content=model.content,
            author_id=model.author_id,
            tags=[_tag_to_entity(t) for t in model.tags],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class SQLAlchemyUserRepository(UserRepository):
    """SQLAlchemy implementation of UserRepository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def find_by_id(self, user_id: int) -> User:
        async with self.session_factory() as session:
            model = await session.get(UserModel, user_id)
            if model is None:
                raise RecordNotFoundError(f"user {user_id} not found")
            return self._to_entity(model)

    async def find_by_username(self, username: str) -> User:
        return await self._find_one(UserModel.username == username, f"user {username!r} not found")

    async def find_by_email(self, email: str) -> User:
        return await self._find_one(UserModel.email == email, f"user with email {email!r} not found")

    async def create(self, user: User) -> None:
        """Insert a new user."""
        async with self.session_factory() as session:
            model = UserModel(
                username=user.username,
                password_hash=user.password_hash,
                email=user.email,
                nickname=user.profile.nickname,
                avatar=user.profile.avatar,
            )
            session.add(model)
            await session.commit()
            user.id = model.id

    async def save(self, user: User) -> None:
        """Save a user (insert or update based on existence)."""
        if not user.id:
            await self.create(user)
            return

        async with self.session_factory() as session:
            existing = await session.get(UserModel, user.id)
            if existing is None:
                raise RecordNotFoundError(f"user {user.id} not found")

            existing.username = user.username
            existing.password_hash = user.password_hash
            existing.email = user.email
            existing.nickname = user.profile.nickname
            existing.avatar = user.profile.avatar
            await session.commit()

    async def _find_one(self, criterion, not_found_message: str) -> User:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(criterion))
            model = result.scalar_one_or_none()
            if model is None:
                raise RecordNotFoundError(not_found_message)
            return self._to_entity(model)

    def _to_entity(self, model: UserModel) -> User:
        """Convert model to entity."""
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            profile=UserProfile(
                nickname=model.nickname or "",
                avatar=model.avatar or "",
            ),
        )


class SQLAlchemyTagRepository(TagRepository):
    """SQLAlchemy implementation of TagRepository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def find_all(self) -> List[Tag]:
        async with self.session_factory() as session:
            result = await session.execute(select(TagModel).order_by(TagModel.name))
            return [_tag_to_entity(m) for m in result.scalars().all()]

    async def find_by_name(self, name: str) -> Tag:
        async with self.session_factory() as session:
            result = await session.execute(select(TagModel).where(TagModel.name == name))
            model = result.scalar_one_or_none()
            if model is None:
                raise RecordNotFoundError(f"tag {name!r} not found")
            return _tag_to_entity(model)

    async def save(self, tag: Tag) -> None:
        """Save a tag (insert or rename based on existence)."""
        async with self.session_factory() as session:
            model = await session.get(TagModel, tag.id) if tag.id else None
            if model is None:
                model = TagModel(name=tag.name)
                session.add(model)
            else:
                model.name = tag.name
            await session.commit()
            tag.id = model.id


class SQLAlchemyCommentRepository(CommentRepository):
    """SQLAlchemy implementation of CommentRepository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def find_by_article_id(self, article_id: int) -> List[Comment]:
        async with self.session_factory() as session:
            stmt = (
                select(CommentModel)
                .where(CommentModel.article_id == article_id)
                .order_by(CommentModel.created_at, CommentModel.id)
            )
            result = await session.execute(stmt)
            return [self._to_entity(m) for m in result.scalars().all()]

    async def save(self, comment: Comment) -> None:
        """Save a comment (insert or update based on existence)."""
        async with self.session_factory() as session:
            model = await session.get(CommentModel, comment.id) if comment.id else None
            if model is None:
                model = CommentModel(
                    article_id=comment.article_id,
                    user_id=comment.user_id,
                    content=comment.content,
                    created_at=comment.created_at,
                )
                session.add(model)
            else:
                model.content = comment.content
            await session.commit()
            comment.id = model.id

    def _to_entity(self, model: CommentModel) -> Comment:
        """Convert model to entity."""
        return Comment(
            id=model.id,
            article_id=model.article_id,
            user_id=model.user_id,
            content=model.content,
            created_at=model.created_at,
        )
