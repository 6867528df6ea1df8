"""Session factory and the post-store dependency built on it."""

from sqlalchemy.orm import sessionmaker

from blog_backend.app.db.engine import engine
from blog_backend.app.services.post_store import PostStore

SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)


def get_post_store() -> PostStore:
    """FastAPI dependency returning a store bound to the application engine."""
    return PostStore(SessionLocal)
