"""
Infrastructure Layer - SQLAlchemy Models

Database models for persistence. These are infrastructure concerns
and should not leak into the domain layer.
"""

from datetime import datetime
from sqlalchemy import (
    Column, String, Integer, BigInteger, DateTime, Text, ForeignKey, Table
)
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()

# SQLite only autoincrements INTEGER primary keys
IdType = BigInteger().with_variant(Integer, "sqlite")


article_tags = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", IdType, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", IdType, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class UserModel(Base):
    """SQLAlchemy model for users."""

    __tablename__ = "users"

    id = Column(IdType, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    nickname = Column(String(255), default="")
    avatar = Column(String(500), default="")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    articles = relationship("ArticleModel", back_populates="author")


class TagModel(Base):
    """SQLAlchemy model for tags."""

    __tablename__ = "tags"

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)


class ArticleModel(Base):
    """SQLAlchemy model for articles."""

    __tablename__ = "articles"

    id = Column(IdType, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(IdType, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    author = relationship("UserModel", back_populates="articles")
    tags = relationship("TagModel", secondary=article_tags, lazy="selectin")
    comments = relationship(
        "CommentModel", back_populates="article", cascade="all, delete-orphan", passive_deletes=True
    )


class CommentModel(Base):
    """SQLAlchemy model for comments."""

    __tablename__ = "comments"

    id = Column(IdType, primary_key=True, autoincrement=True)
    article_id = Column(IdType, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(IdType, ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    article = relationship("ArticleModel", back_populates="comments")
