"""Authorization schema - profiles, permissions, field permissions, client sharing.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index("ix_profiles_name", "profiles", ["name"], unique=True)

    op.create_table(
        "user_profiles",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column(
            "profile_id",
            sa.UUID(),
            sa.ForeignKey("profiles.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index("ix_user_profiles_user_id", "user_profiles", ["user_id"], unique=True)

    op.create_table(
        "permissions",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "profile_id",
            sa.UUID(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("resource", sa.String(50), nullable=False),
        sa.Column("can_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("can_create", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("can_update", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("can_delete", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint("profile_id", "resource", name="uq_permissions_profile_resource"),
    )

    op.create_table(
        "field_permissions",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "profile_id",
            sa.UUID(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("table_name", sa.String(50), nullable=False),
        sa.Column("field_name", sa.String(100), nullable=False),
        sa.Column("can_read", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("can_write", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint(
            "profile_id",
            "table_name",
            "field_name",
            name="uq_field_permissions_profile_table_field",
        ),
    )
    op.create_index(
        "ix_field_permissions_profile_table",
        "field_permissions",
        ["profile_id", "table_name"],
    )

    op.create_table(
        "client_sharing",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("client_id", sa.UUID(), nullable=False),
        sa.Column("shared_by_user_id", sa.String(255), nullable=False),
        sa.Column("shared_with_user_id", sa.String(255), nullable=False),
        sa.Column("access_level", sa.String(10), nullable=False, server_default="read"),
        sa.Column("field_restrictions", postgresql.JSONB(), nullable=True),
        sa.Column("shared_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            "client_id",
            "shared_with_user_id",
            name="uq_client_sharing_client_grantee",
        ),
        sa.CheckConstraint(
            "access_level IN ('read', 'write')", name="ck_client_sharing_access_level"
        ),
    )
    op.create_index(
        "ix_client_sharing_shared_with", "client_sharing", ["shared_with_user_id"]
    )


def downgrade() -> None:
    op.drop_table("client_sharing")
    op.drop_table("field_permissions")
    op.drop_table("permissions")
    op.drop_table("user_profiles")
    op.drop_table("profiles")
