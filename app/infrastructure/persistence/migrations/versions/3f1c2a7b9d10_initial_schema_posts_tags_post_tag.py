"""Initial schema: post, tag, post_tag

Revision ID: 3f1c2a7b9d10
Revises:
Create Date: 2026-10-16 09:12:40.118204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a7b9d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create post, tag and the post_tag association."""
    op.create_table(
        "post",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("store_name", sa.String(length=100), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("rating", sa.SmallInteger(), nullable=True),
        sa.Column("address", sa.String(length=255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "tag",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_tag_name"),
    )

    op.create_table(
        "post_tag",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("post_id", sa.String(), nullable=False),
        sa.Column("tag_id", sa.String(), nullable=False),
        sa.Column(
            "attached_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tag.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("post_id", "tag_id", name="uq_post_tag"),
    )
    # uq_post_tag covers lookups by post_id; this one serves name -> tag -> posts.
    op.create_index("ix_post_tag_tag_id_post_id", "post_tag", ["tag_id", "post_id"])


def downgrade() -> None:
    """Drop post_tag, tag and post."""
    op.drop_index("ix_post_tag_tag_id_post_id", table_name="post_tag")
    op.drop_table("post_tag")
    op.drop_table("tag")
    op.drop_table("post")
