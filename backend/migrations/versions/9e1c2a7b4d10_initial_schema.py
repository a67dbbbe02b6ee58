"""initial_schema

Revision ID: 9e1c2a7b4d10
Revises:
Create Date: 2026-10-19 10:12:31.482190

"""

from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "9e1c2a7b4d10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _ulid_pk() -> sa.Column:
    return sa.Column("id", sa.Uuid(), nullable=False)


def upgrade() -> None:
    # Reference data
    op.create_table(
        "product_types",
        _ulid_pk(),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_product_types_name"), "product_types", ["name"], unique=False)

    op.create_table(
        "brands",
        _ulid_pk(),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("type_id", sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(["type_id"], ["product_types.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_brands_name"), "brands", ["name"], unique=False)

    op.create_table(
        "brand_type",
        _ulid_pk(),
        sa.Column("brand_id", sa.Uuid(), nullable=False),
        sa.Column("type_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["brand_id"], ["brands.id"]),
        sa.ForeignKeyConstraint(["type_id"], ["product_types.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("brand_id", "type_id", name="uq_brand_type_pair"),
    )
    op.create_index(op.f("ix_brand_type_brand_id"), "brand_type", ["brand_id"], unique=False)
    op.create_index(op.f("ix_brand_type_type_id"), "brand_type", ["type_id"], unique=False)

    op.create_table(
        "colors",
        _ulid_pk(),
        sa.Column("value", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "sizes",
        _ulid_pk(),
        sa.Column("value", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "size_availability",
        _ulid_pk(),
        sa.Column("size_id", sa.Uuid(), nullable=False),
        sa.Column("brand_type_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["size_id"], ["sizes.id"]),
        sa.ForeignKeyConstraint(["brand_type_id"], ["brand_type.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("size_id", "brand_type_id", name="uq_size_brand_type"),
    )
    op.create_index(op.f("ix_size_availability_size_id"), "size_availability", ["size_id"], unique=False)
    op.create_index(op.f("ix_size_availability_brand_type_id"), "size_availability", ["brand_type_id"], unique=False)

    op.create_table(
        "products",
        _ulid_pk(),
        sa.Column("product_name", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("image", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("brand_id", sa.Uuid(), nullable=True),
        sa.Column("color_id", sa.Uuid(), nullable=True),
        sa.Column("product_type_id", sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(["brand_id"], ["brands.id"]),
        sa.ForeignKeyConstraint(["color_id"], ["colors.id"]),
        sa.ForeignKeyConstraint(["product_type_id"], ["product_types.id"]),
        sa.PrimaryKeyConstraint("id"),
    )

    # Orders
    op.create_table(
        "customers",
        _ulid_pk(),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("contact_number", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("address", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_customers_email"), "customers", ["email"], unique=False)

    op.create_table(
        "product_orders",
        _ulid_pk(),
        sa.Column("customer_id", sa.Uuid(), nullable=False),
        sa.Column("brand_type_id", sa.Uuid(), nullable=False),
        sa.Column("color_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"]),
        sa.ForeignKeyConstraint(["brand_type_id"], ["brand_type.id"]),
        sa.ForeignKeyConstraint(["color_id"], ["colors.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_product_orders_customer_id"), "product_orders", ["customer_id"], unique=False)
    op.create_index(op.f("ix_product_orders_created_at"), "product_orders", ["created_at"], unique=False)

    op.create_table(
        "product_sizes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("order_id", sa.Uuid(), nullable=False),
        sa.Column("size_id", sa.Uuid(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["order_id"], ["product_orders.id"]),
        sa.ForeignKeyConstraint(["size_id"], ["sizes.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("quantity > 0", name="ck_product_sizes_positive_quantity"),
    )
    op.create_index(op.f("ix_product_sizes_order_id"), "product_sizes", ["order_id"], unique=False)

    op.create_table(
        "product_images",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("order_id", sa.Uuid(), nullable=False),
        sa.Column("url", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("placement", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("file_ref", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.ForeignKeyConstraint(["order_id"], ["product_orders.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_product_images_order_id"), "product_images", ["order_id"], unique=False)

    # Back-office users
    op.create_table(
        "roles",
        _ulid_pk(),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "users",
        _ulid_pk(),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("password", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("role_id", sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
    op.drop_table("roles")
    op.drop_index(op.f("ix_product_images_order_id"), table_name="product_images")
    op.drop_table("product_images")
    op.drop_index(op.f("ix_product_sizes_order_id"), table_name="product_sizes")
    op.drop_table("product_sizes")
    op.drop_index(op.f("ix_product_orders_created_at"), table_name="product_orders")
    op.drop_index(op.f("ix_product_orders_customer_id"), table_name="product_orders")
    op.drop_table("product_orders")
    op.drop_index(op.f("ix_customers_email"), table_name="customers")
    op.drop_table("customers")
    op.drop_table("products")
    op.drop_index(op.f("ix_size_availability_brand_type_id"), table_name="size_availability")
    op.drop_index(op.f("ix_size_availability_size_id"), table_name="size_availability")
    op.drop_table("size_availability")
    op.drop_table("sizes")
    op.drop_table("colors")
    op.drop_index(op.f("ix_brand_type_type_id"), table_name="brand_type")
    op.drop_index(op.f("ix_brand_type_brand_id"), table_name="brand_type")
    op.drop_table("brand_type")
    op.drop_index(op.f("ix_brands_name"), table_name="brands")
    op.drop_table("brands")
    op.drop_index(op.f("ix_product_types_name"), table_name="product_types")
    op.drop_table("product_types")
