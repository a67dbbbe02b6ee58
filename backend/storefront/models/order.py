"""Customer, ProductOrder, size line and asset models.

Rows are written once per order submission and never updated by the application.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey
from sqlmodel import Field, Relationship, SQLModel

from storefront.models.types import S3ObjectRef, S3ObjectRefData, ULIDType, new_ulid
from storefront.utils.datetime_utils import utc_now


class Customer(SQLModel, table=True):
    """Contact details captured with an order. One row per submission (no dedup by email)."""

    __tablename__ = "customers"

    id: str = Field(default_factory=new_ulid, max_length=26, sa_column=Column(ULIDType, primary_key=True))
    name: str
    email: str = Field(index=True)
    contact_number: str = ""
    address: str = ""
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))

    orders: list["ProductOrder"] = Relationship(back_populates="customer")


class ProductOrder(SQLModel, table=True):
    """Submitted order for one brand/type pair in one color."""

    __tablename__ = "product_orders"

    id: str = Field(default_factory=new_ulid, max_length=26, sa_column=Column(ULIDType, primary_key=True))
    customer_id: str = Field(sa_column=Column(ULIDType, ForeignKey("customers.id"), index=True, nullable=False))
    brand_type_id: str = Field(sa_column=Column(ULIDType, ForeignKey("brand_type.id"), nullable=False))
    color_id: str = Field(sa_column=Column(ULIDType, ForeignKey("colors.id"), nullable=False))
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), index=True, nullable=False),
    )

    customer: Customer = Relationship(back_populates="orders")
    size_lines: list["OrderSizeLine"] = Relationship(back_populates="order")
    assets: list["OrderAsset"] = Relationship(back_populates="order")


class OrderSizeLine(SQLModel, table=True):
    """Ordered quantity for one size. Only quantities above zero are stored."""

    __tablename__ = "product_sizes"
    __table_args__ = (CheckConstraint("quantity > 0", name="ck_product_sizes_positive_quantity"),)

    id: int | None = Field(default=None, primary_key=True)
    order_id: str = Field(sa_column=Column(ULIDType, ForeignKey("product_orders.id"), index=True, nullable=False))
    size_id: str = Field(sa_column=Column(ULIDType, ForeignKey("sizes.id"), nullable=False))
    quantity: int

    order: ProductOrder = Relationship(back_populates="size_lines")


class OrderAsset(SQLModel, table=True):
    """Uploaded design file attached to one print placement."""

    __tablename__ = "product_images"

    id: int | None = Field(default=None, primary_key=True)
    order_id: str = Field(sa_column=Column(ULIDType, ForeignKey("product_orders.id"), index=True, nullable=False))
    url: str
    placement: str  # Human-readable label, e.g. "Front - Center"

    file_ref: S3ObjectRefData | None = Field(default=None, sa_column=Column(S3ObjectRef, nullable=True))

    order: ProductOrder = Relationship(back_populates="assets")
