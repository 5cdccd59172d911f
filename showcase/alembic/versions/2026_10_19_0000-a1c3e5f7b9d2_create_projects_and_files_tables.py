"""create_projects_and_files_tables

Revision ID: a1c3e5f7b9d2
Revises:
Create Date: 2026-10-19 00:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "a1c3e5f7b9d2"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create projects and files tables."""
    op.create_table(
        "projects",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("shortDesc", sa.Text(), nullable=False),
        sa.Column("desc", sa.Text(), nullable=False),
        sa.Column("thumbnail", sa.Text(), nullable=False),
        sa.Column(
            "createdAt",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updatedAt",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )
    op.create_index(op.f("ix_projects_createdAt"), "projects", ["createdAt"])

    op.create_table(
        "files",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("filename", sa.String(255), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column(
            "createdAt",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )
    op.create_index(op.f("ix_files_filename"), "files", ["filename"])
    op.create_index(op.f("ix_files_createdAt"), "files", ["createdAt"])


def downgrade() -> None:
    """Drop projects and files tables."""
    op.drop_index(op.f("ix_files_createdAt"), table_name="files")
    op.drop_index(op.f("ix_files_filename"), table_name="files")
    op.drop_table("files")
    op.drop_index(op.f("ix_projects_createdAt"), table_name="projects")
    op.drop_table("projects")
