"""Initial schema

Revision ID: 3f1c9a2d7b40
Revises:
Create Date: 2026-10-19 09:30:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a2d7b40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# Slugs checked by the admin routes
ADMIN_PERMISSIONS = [
    {"slug": "medals_decorate", "name": "Award medals"},
    {"slug": "medals_view", "name": "View medals"},
    {"slug": "medals_create", "name": "Create medals"},
    {"slug": "users_view", "name": "View users"},
    {"slug": "users_create", "name": "Create users"},
    {"slug": "permissions_create", "name": "Create permissions"},
]


def upgrade() -> None:
    """Upgrade schema."""
    # Create base tables (no dependencies)
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("github_login", sa.String(length=39), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("t_shirt_size", sa.String(length=10), nullable=True),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_users_github_login"), ["github_login"], unique=True)

    permissions = op.create_table(
        "permissions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("slug", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("permissions", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_permissions_slug"), ["slug"], unique=True)

    op.create_table(
        "medals",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("image", sa.String(length=500), nullable=False),
        sa.Column("image_disabled", sa.String(length=500), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("sort_key", sa.String(length=50), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("secret", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("points >= 0", name="ck_medal_points_unsigned"),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("medals", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_medals_sort_key"), ["sort_key"], unique=False)

    op.create_table(
        "sessions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("slug", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("apply_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("apply_end", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("sessions", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_sessions_slug"), ["slug"], unique=True)

    # Create dependent tables
    op.create_table(
        "user_permissions",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("permission_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["permission_id"], ["permissions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "permission_id"),
    )

    op.create_table(
        "decorations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("medal_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["medal_id"], ["medals.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("decorations", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_decorations_medal_id"), ["medal_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_decorations_user_id"), ["user_id"], unique=False)

    op.create_table(
        "applications",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("github_login", sa.String(length=39), nullable=False),
        sa.Column("repo", sa.String(length=255), nullable=False),
        sa.Column("project_description", sa.Text(), nullable=False),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["session_id"], ["sessions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("applications", schema=None) as batch_op:
        batch_op.create_index(
            batch_op.f("ix_applications_github_login"), ["github_login"], unique=False
        )
        batch_op.create_index(batch_op.f("ix_applications_session_id"), ["session_id"], unique=False)

    op.bulk_insert(permissions, ADMIN_PERMISSIONS)


def downgrade() -> None:
    """Downgrade schema."""
    # Drop dependent tables first
    with op.batch_alter_table("applications", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_applications_session_id"))
        batch_op.drop_index(batch_op.f("ix_applications_github_login"))
    op.drop_table("applications")

    with op.batch_alter_table("decorations", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_decorations_user_id"))
        batch_op.drop_index(batch_op.f("ix_decorations_medal_id"))
    op.drop_table("decorations")

    op.drop_table("user_permissions")

    with op.batch_alter_table("sessions", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_sessions_slug"))
    op.drop_table("sessions")

    with op.batch_alter_table("medals", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_medals_sort_key"))
    op.drop_table("medals")

    with op.batch_alter_table("permissions", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_permissions_slug"))
    op.drop_table("permissions")

    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_users_github_login"))
    op.drop_table("users")
