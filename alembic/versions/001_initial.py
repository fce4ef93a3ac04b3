"""Create users and movies tables.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, sa.Identity(), primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=False, unique=True),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("role", sa.Text, nullable=False),
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
    op.create_check_constraint(
        "ck_users_role",
        "users",
        "role IN ('MANAGER', 'TEAMLEADER', 'FLOORSTAFF')",
    )

    op.create_table(
        "movies",
        sa.Column("id", sa.Integer, sa.Identity(), primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("rating", sa.Text, nullable=False),
        sa.Column("release_date", sa.Date, nullable=False),
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
    op.create_check_constraint(
        "ck_movies_rating",
        "movies",
        "rating IN ('G', 'PG', 'M', 'MA', 'R')",
    )
    op.create_check_constraint(
        "ck_movies_title_not_blank",
        "movies",
        "length(btrim(title)) > 0",
    )
    op.create_index("ix_movies_created_at", "movies", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_movies_created_at", table_name="movies")
    op.drop_table("movies")
    op.drop_table("users")
