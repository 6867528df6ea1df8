"""Declarative base shared by the post table and Alembic's autogenerate."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for the blog's ORM records."""
