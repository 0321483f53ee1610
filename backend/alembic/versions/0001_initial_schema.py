"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-17

Creates all tables for MenuX:
users, admin_requests, user_roles, role_mutations, menu_items.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLE = sa.Enum("admin", "user", name="role")
REQUEST_STATUS = sa.Enum("pending", "approved", "rejected", name="requeststatus")
MUTATION_SOURCE = sa.Enum("direct", "request", "signup", name="mutationsource")
ITEM_CATEGORY = sa.Enum("food", "alcohol", name="itemcategory")


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"])

    # --- admin_requests ---
    op.create_table(
        "admin_requests",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("requested_by", sa.String(36), nullable=True),
        sa.Column("status", REQUEST_STATUS, nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("resolved_by", sa.String(36), nullable=True),
    )
    op.create_index("ix_admin_requests_email", "admin_requests", ["email"])
    op.create_index("ix_admin_requests_status", "admin_requests", ["status"])

    # --- user_roles ---
    op.create_table(
        "user_roles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False, unique=True),
        sa.Column("role", ROLE, nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- role_mutations ---
    op.create_table(
        "role_mutations",
        sa.Column("mutation_id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("before_role", ROLE, nullable=True),
        sa.Column("after_role", ROLE, nullable=False),
        sa.Column("actor_user_id", sa.String(36), nullable=True),
        sa.Column("source", MUTATION_SOURCE, nullable=False),
        sa.Column("request_email", sa.String(320), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_role_mutations_user_id", "role_mutations", ["user_id"])

    # --- menu_items ---
    op.create_table(
        "menu_items",
        sa.Column("item_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("category", ITEM_CATEGORY, nullable=False, server_default="food"),
        sa.Column("description", sa.String(1000), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("is_available", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("menu_items")
    op.drop_index("ix_role_mutations_user_id", table_name="role_mutations")
    op.drop_table("role_mutations")
    op.drop_table("user_roles")
    op.drop_index("ix_admin_requests_status", table_name="admin_requests")
    op.drop_index("ix_admin_requests_email", table_name="admin_requests")
    op.drop_table("admin_requests")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    bind = op.get_bind()
    for enum_type in (ITEM_CATEGORY, MUTATION_SOURCE, REQUEST_STATUS, ROLE):
        enum_type.drop(bind, checkfirst=True)
