from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from ncnews.db.base import Base


class Topic(Base):
    __tablename__ = "topics"

    slug: Mapped[str] = mapped_column(Text, primary_key=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)


class User(Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    avatar_url: Mapped[str] = mapped_column(Text, nullable=False)


class Article(Base):
    __tablename__ = "articles"

    article_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    # Foreign key names are matched by the error handlers, keep them in sync.
    topic: Mapped[str] = mapped_column(
        Text, ForeignKey("topics.slug", name="articles_topic_fkey"), nullable=False, index=True
    )
    author: Mapped[str] = mapped_column(
        Text, ForeignKey("users.username", name="articles_author_fkey"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )


class Comment(Base):
    __tablename__ = "comments"

    comment_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author: Mapped[str] = mapped_column(
        Text, ForeignKey("users.username", name="comments_author_fkey"), nullable=False
    )
    article_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("articles.article_id", name="comments_article_id_fkey", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
