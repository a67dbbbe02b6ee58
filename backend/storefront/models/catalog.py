"""Product taxonomy models: product types, brands, colors, sizes and availability.

These tables are reference data populated out of band (see the admin CLI).
The application only reads them.
"""

from sqlalchemy import Column, ForeignKey, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from storefront.models.types import ULIDType, new_ulid


class ProductType(SQLModel, table=True):
    """Garment or item type (T-Shirt, Hoodie, Mug)."""

    __tablename__ = "product_types"

    id: str = Field(default_factory=new_ulid, max_length=26, sa_column=Column(ULIDType, primary_key=True))
    name: str = Field(index=True)


class Brand(SQLModel, table=True):
    """Blank garment manufacturer."""

    __tablename__ = "brands"

    id: str = Field(default_factory=new_ulid, max_length=26, sa_column=Column(ULIDType, primary_key=True))
    name: str = Field(index=True)
    # Legacy single-type association; the many-to-many lives in brand_type
    type_id: str | None = Field(
        default=None,
        sa_column=Column(ULIDType, ForeignKey("product_types.id"), nullable=True),
    )


BRAND_TYPE_CONSTRAINT = UniqueConstraint("brand_id", "type_id", name="uq_brand_type_pair")


class BrandType(SQLModel, table=True):
    """Association of a brand with a product type. Scoping unit for size availability."""

    __tablename__ = "brand_type"
    __table_args__ = (BRAND_TYPE_CONSTRAINT,)

    id: str = Field(default_factory=new_ulid, max_length=26, sa_column=Column(ULIDType, primary_key=True))
    brand_id: str = Field(sa_column=Column(ULIDType, ForeignKey("brands.id"), index=True, nullable=False))
    type_id: str = Field(sa_column=Column(ULIDType, ForeignKey("product_types.id"), index=True, nullable=False))


class Color(SQLModel, table=True):
    """Garment color."""

    __tablename__ = "colors"

    id: str = Field(default_factory=new_ulid, max_length=26, sa_column=Column(ULIDType, primary_key=True))
    value: str


class Size(SQLModel, table=True):
    """Garment size. Display order is domain-specific, see services.catalog.sizes."""

    __tablename__ = "sizes"

    id: str = Field(default_factory=new_ulid, max_length=26, sa_column=Column(ULIDType, primary_key=True))
    value: str


SIZE_AVAILABILITY_CONSTRAINT = UniqueConstraint("size_id", "brand_type_id", name="uq_size_brand_type")


class SizeAvailability(SQLModel, table=True):
    """Size orderable for a given brand/type pair."""

    __tablename__ = "size_availability"
    __table_args__ = (SIZE_AVAILABILITY_CONSTRAINT,)

    id: str = Field(default_factory=new_ulid, max_length=26, sa_column=Column(ULIDType, primary_key=True))
    size_id: str = Field(sa_column=Column(ULIDType, ForeignKey("sizes.id"), index=True, nullable=False))
    brand_type_id: str = Field(sa_column=Column(ULIDType, ForeignKey("brand_type.id"), index=True, nullable=False))


class Product(SQLModel, table=True):
    """Showcase product displayed on the storefront."""

    __tablename__ = "products"

    id: str = Field(default_factory=new_ulid, max_length=26, sa_column=Column(ULIDType, primary_key=True))
    product_name: str
    image: str = ""
    brand_id: str | None = Field(default=None, sa_column=Column(ULIDType, ForeignKey("brands.id"), nullable=True))
    color_id: str | None = Field(default=None, sa_column=Column(ULIDType, ForeignKey("colors.id"), nullable=True))
    product_type_id: str | None = Field(
        default=None,
        sa_column=Column(ULIDType, ForeignKey("product_types.id"), nullable=True),
    )

    # Relationships (loaded explicitly by ProductService)
    brand: Brand | None = Relationship()
    color: Color | None = Relationship()
    product_type: ProductType | None = Relationship()
