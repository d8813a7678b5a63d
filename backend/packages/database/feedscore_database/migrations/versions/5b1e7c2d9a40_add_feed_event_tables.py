"""add feed event tables and article rollup columns

Revision ID: 5b1e7c2d9a40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5b1e7c2d9a40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "articles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=500), nullable=True),
        sa.Column("feed_impressions_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("feed_clicks_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("feed_success_score", sa.Float(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "feed_events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("article_id", sa.Integer(), nullable=True),
        sa.Column("category", sa.String(length=16), nullable=False),
        sa.Column("context_type", sa.String(length=16), nullable=False),
        sa.Column("article_position", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["article_id"], ["articles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.CheckConstraint("article_position > 0", name="ck_feed_events_article_position_positive"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_feed_events_user_id", "feed_events", ["user_id"], unique=False)
    op.create_index(
        "ix_feed_events_article_created",
        "feed_events",
        ["article_id", "created_at"],
        unique=False,
    )
    op.create_index(
        "ix_feed_events_user_article_created",
        "feed_events",
        ["user_id", "article_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_feed_events_user_article_created", table_name="feed_events")
    op.drop_index("ix_feed_events_article_created", table_name="feed_events")
    op.drop_index("ix_feed_events_user_id", table_name="feed_events")
    op.drop_table("feed_events")

    op.drop_table("articles")
    op.drop_table("users")
