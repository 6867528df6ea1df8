"""SQLAlchemy ORM model for the posts table."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from blog_backend.app.db.base import Base

DEFAULT_AUTHOR = "Admin"


class PostRecord(Base):
    """Authoritative storage for a blog post."""

    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_created_at", "created_at"),
        CheckConstraint(
            "length(trim(title)) > 0",
            name="ck_posts_title_not_empty",
        ),
        CheckConstraint(
            "length(markdown_content) > 0",
            name="ck_posts_markdown_content_not_empty",
        ),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    markdown_content: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(
        String(200), nullable=False, default=DEFAULT_AUTHOR,
        server_default=DEFAULT_AUTHOR,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
