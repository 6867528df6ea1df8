"""create posts table

Revision ID: a1f0c3e5b7d9
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1f0c3e5b7d9"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "posts",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("markdown_content", sa.Text(), nullable=False),
        sa.Column(
            "author", sa.String(length=200), nullable=False, server_default="Admin",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "length(trim(title)) > 0", name="ck_posts_title_not_empty",
        ),
        sa.CheckConstraint(
            "length(markdown_content) > 0",
            name="ck_posts_markdown_content_not_empty",
        ),
    )
    op.create_index(
        "ix_posts_created_at",
        "posts",
        ["created_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_posts_created_at", table_name="posts")
    op.drop_table("posts")
