"""create shipping by weight tables

Revision ID: a7c1e2f3b4d5
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "a7c1e2f3b4d5"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:  # type: ignore[type-arg]
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "organizations",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("default_currency", sa.String(length=3), nullable=False, server_default="GBP"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "shipping_rule_sets",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("organization_id", sa.String(length=36), nullable=False),
        sa.Column("default_weight", sa.Numeric(12, 4), nullable=False, server_default="0"),
        sa.Column("default_cost", sa.Numeric(12, 4), nullable=False, server_default="0"),
        sa.Column("is_per_kg", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("countries", sa.JSON(), nullable=False, server_default="[]"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_shipping_rule_sets_organization_id"),
        "shipping_rule_sets",
        ["organization_id"],
        unique=True,
    )

    op.create_table(
        "shipping_methods",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("organization_id", sa.String(length=36), nullable=False),
        sa.Column("code", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("base_fee_without_vat", sa.Numeric(12, 4), nullable=False, server_default="0"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("organization_id", "code", name="uq_shipping_method_code"),
    )
    op.create_index(
        op.f("ix_shipping_methods_organization_id"),
        "shipping_methods",
        ["organization_id"],
        unique=False,
    )

    op.create_table(
        "orders",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("organization_id", sa.String(length=36), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("country", sa.String(length=255), nullable=True),
        sa.Column("shipping_method_id", sa.String(length=36), nullable=True),
        sa.Column(
            "shipping_fee_without_vat", sa.Numeric(12, 4), nullable=False, server_default="0"
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(
            ["shipping_method_id"], ["shipping_methods.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_orders_organization_id"), "orders", ["organization_id"], unique=False)

    op.create_table(
        "order_lines",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("order_id", sa.String(length=36), nullable=False),
        sa.Column("product_code", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("product_weight", sa.Numeric(12, 4), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_order_lines_order_id"), "order_lines", ["order_id"], unique=False)

    op.create_table(
        "order_properties",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("order_id", sa.String(length=36), nullable=False),
        sa.Column("alias", sa.String(length=255), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("order_id", "alias", name="uq_order_property_alias"),
    )
    op.create_index(
        op.f("ix_order_properties_order_id"), "order_properties", ["order_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_order_properties_order_id"), table_name="order_properties")
    op.drop_table("order_properties")
    op.drop_index(op.f("ix_order_lines_order_id"), table_name="order_lines")
    op.drop_table("order_lines")
    op.drop_index(op.f("ix_orders_organization_id"), table_name="orders")
    op.drop_table("orders")
    op.drop_index(op.f("ix_shipping_methods_organization_id"), table_name="shipping_methods")
    op.drop_table("shipping_methods")
    op.drop_index(op.f("ix_shipping_rule_sets_organization_id"), table_name="shipping_rule_sets")
    op.drop_table("shipping_rule_sets")
    op.drop_table("organizations")
