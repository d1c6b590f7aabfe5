"""Initial schema - operation, users/entities groups, permission.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "operation",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
    )
    op.create_index("ix_operation_name", "operation", ["name"], unique=True)

    op.create_table(
        "users_group",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("parent_id", sa.UUID(), sa.ForeignKey("users_group.id", ondelete="SET NULL"), nullable=True),
    )
    op.create_index("ix_users_group_name", "users_group", ["name"], unique=True)

    op.create_table(
        "users_group_member",
        sa.Column("users_group_id", sa.UUID(), sa.ForeignKey("users_group.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_id", sa.String(255), primary_key=True),
    )
    op.create_index("ix_users_group_member_user", "users_group_member", ["user_id"])

    op.create_table(
        "entities_group",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
    )
    op.create_index("ix_entities_group_name", "entities_group", ["name"], unique=True)

    op.create_table(
        "entities_group_member",
        sa.Column("entities_group_id", sa.UUID(), sa.ForeignKey("entities_group.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("entity_security_key", sa.UUID(), primary_key=True),
    )
    op.create_index("ix_entities_group_member_key", "entities_group_member", ["entity_security_key"])

    op.create_table(
        "permission",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("operation_id", sa.UUID(), sa.ForeignKey("operation.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("users_group_id", sa.UUID(), sa.ForeignKey("users_group.id", ondelete="CASCADE"), nullable=True),
        sa.Column("entity_security_key", sa.UUID(), nullable=True),
        sa.Column("entities_group_id", sa.UUID(), sa.ForeignKey("entities_group.id", ondelete="CASCADE"), nullable=True),
        sa.Column("level", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("allow", sa.Boolean(), nullable=False),
        sa.CheckConstraint(
            "(user_id IS NULL) <> (users_group_id IS NULL)",
            name="ck_permission_one_subject",
        ),
        sa.CheckConstraint(
            "entity_security_key IS NULL OR entities_group_id IS NULL",
            name="ck_permission_one_scope",
        ),
    )
    op.create_index("ix_permission_user", "permission", ["user_id"])
    op.create_index("ix_permission_users_group", "permission", ["users_group_id"])
    op.create_index("ix_permission_operation", "permission", ["operation_id"])
    op.create_index("ix_permission_entity_key", "permission", ["entity_security_key"])


def downgrade() -> None:
    op.drop_table("permission")
    op.drop_table("entities_group_member")
    op.drop_table("entities_group")
    op.drop_table("users_group_member")
    op.drop_table("users_group")
    op.drop_table("operation")
