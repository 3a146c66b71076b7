"""Create poem tables

Revision ID: 001_create_poem_tables
Revises:
Create Date: 2026-10-17

"""
import sqlalchemy as sa
from alembic import op

# revision identifiers
revision = "001_create_poem_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "poems",
        sa.Column("id", sa.String(12), primary_key=True),
        sa.Column("total_lines", sa.Integer, nullable=False),
        sa.Column("seed_line", sa.Text, nullable=False),
        sa.Column("title", sa.Text, nullable=False, server_default=""),
        sa.Column(
            "status",
            sa.Enum("active", "complete", "revealed", name="poem_status"),
            nullable=False,
            server_default="active",
        ),
        sa.Column("version", sa.Integer, nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_poems_status", "poems", ["status"])
    op.create_index("ix_poems_created_at", "poems", ["created_at"])

    op.create_table(
        "poem_lines",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "poem_id",
            sa.String(12),
            sa.ForeignKey("poems.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("line_number", sa.Integer, nullable=False),
        sa.Column("full_text", sa.Text, nullable=False),
        sa.Column("visible_hint", sa.Text, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint(
            "poem_id", "line_number", name="uq_poem_lines_poem_line"
        ),
    )
    op.create_index("ix_poem_lines_poem_id", "poem_lines", ["poem_id"])


def downgrade() -> None:
    op.drop_index("ix_poem_lines_poem_id", table_name="poem_lines")
    op.drop_table("poem_lines")
    op.drop_index("ix_poems_created_at", table_name="poems")
    op.drop_index("ix_poems_status", table_name="poems")
    op.drop_table("poems")
    sa.Enum(name="poem_status").drop(op.get_bind(), checkfirst=True)
