"""create_livestream_tables

Revision ID: 1f4e2b7c9a01
Revises:
Create Date: 2026-10-17
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "1f4e2b7c9a01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_name"), "users", ["name"], unique=True)

    op.create_table(
        "livestreams",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("playlist_url", sa.String(length=255), nullable=False),
        sa.Column("thumbnail_url", sa.String(length=255), nullable=False),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_livestreams_user_id"), "livestreams", ["user_id"], unique=False)

    op.create_table(
        "reactions",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("livestream_id", sa.BigInteger(), nullable=False),
        sa.Column("emoji_name", sa.String(length=255), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["livestream_id"], ["livestreams.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_reactions_livestream_id"), "reactions", ["livestream_id"], unique=False)

    op.create_table(
        "livecomments",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("livestream_id", sa.BigInteger(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("tip", sa.BigInteger(), nullable=False, server_default="0"),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["livestream_id"], ["livestreams.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_livecomments_livestream_id"), "livecomments", ["livestream_id"], unique=False)

    op.create_table(
        "livecomment_reports",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("livestream_id", sa.BigInteger(), nullable=False),
        sa.Column("livecomment_id", sa.BigInteger(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["livestream_id"], ["livestreams.id"]),
        sa.ForeignKeyConstraint(["livecomment_id"], ["livecomments.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_livecomment_reports_livestream_id"),
        "livecomment_reports",
        ["livestream_id"],
        unique=False,
    )

    op.create_table(
        "livestream_viewers_history",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("livestream_id", sa.BigInteger(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["livestream_id"], ["livestreams.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_livestream_viewers_history_livestream_id"),
        "livestream_viewers_history",
        ["livestream_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_livestream_viewers_history_livestream_id"), table_name="livestream_viewers_history")
    op.drop_table("livestream_viewers_history")
    op.drop_index(op.f("ix_livecomment_reports_livestream_id"), table_name="livecomment_reports")
    op.drop_table("livecomment_reports")
    op.drop_index(op.f("ix_livecomments_livestream_id"), table_name="livecomments")
    op.drop_table("livecomments")
    op.drop_index(op.f("ix_reactions_livestream_id"), table_name="reactions")
    op.drop_table("reactions")
    op.drop_index(op.f("ix_livestreams_user_id"), table_name="livestreams")
    op.drop_table("livestreams")
    op.drop_index(op.f("ix_users_name"), table_name="users")
    op.drop_table("users")
