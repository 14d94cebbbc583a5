"""initial schema"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create organizations, users, memberships, SSO configs and group permissions."""
    op.create_table(
        "organizations",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("domain", sa.String(length=255), nullable=True),
        sa.Column("enable_sign_up", sa.Boolean(), nullable=False),
        sa.Column("auto_assign", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "sso_configs",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("organization_id", sa.String(length=128), nullable=False),
        sa.Column("sso", sa.String(length=32), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column("configs", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("organization_id", "sso", name="uq_sso_configs_org_sso"),
    )
    op.create_index("ix_sso_configs_organization_id", "sso_configs", ["organization_id"])

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("password_digest", sa.Text(), nullable=True),
        sa.Column("forgot_password_token", sa.String(length=128), nullable=True),
        sa.Column("default_organization_id", sa.String(length=128), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["default_organization_id"], ["organizations.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_forgot_password_token", "users", ["forgot_password_token"])

    op.create_table(
        "organization_users",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("organization_id", sa.String(length=128), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("role", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("invitation_token", sa.String(length=128), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_organization_users_organization_id", "organization_users", ["organization_id"])
    op.create_index("ix_organization_users_user_id", "organization_users", ["user_id"])

    op.create_table(
        "group_permissions",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("organization_id", sa.String(length=128), nullable=False),
        sa.Column("group", sa.String(length=100), nullable=False),
        sa.Column("app_create", sa.Boolean(), nullable=False),
        sa.Column("app_delete", sa.Boolean(), nullable=False),
        sa.Column("folder_create", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("organization_id", "group", name="uq_group_permissions_org_group"),
    )
    op.create_index("ix_group_permissions_organization_id", "group_permissions", ["organization_id"])

    op.create_table(
        "user_group_permissions",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("group_permission_id", sa.String(length=128), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["group_permission_id"], ["group_permissions.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_group_permissions_user_id", "user_group_permissions", ["user_id"])
    op.create_index(
        "ix_user_group_permissions_group_permission_id",
        "user_group_permissions",
        ["group_permission_id"],
    )


def downgrade() -> None:
    op.drop_table("user_group_permissions")
    op.drop_table("group_permissions")
    op.drop_table("organization_users")
    op.drop_table("users")
    op.drop_table("sso_configs")
    op.drop_table("organizations")
