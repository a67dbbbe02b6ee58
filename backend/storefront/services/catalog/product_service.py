"""Storefront product read model.

Product rows are read together with their brand, color and product type in
one outer-joined query and flattened by `to_product_record`.
"""

from typing import NamedTuple

import structlog
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from storefront.models.catalog import Brand, Color, Product, ProductType
from storefront.models.types import is_ulid
from storefront.services.catalog.exceptions import LookupFailed, ProductNotFound

logger = structlog.get_logger(__name__)


class BrandRef(BaseModel):
    id: str
    name: str


class ColorRef(BaseModel):
    id: str
    value: str


class ProductTypeRef(BaseModel):
    id: str
    name: str


class ProductRecord(BaseModel):
    """Canonical product view served by the API."""

    id: str
    product_name: str
    image: str
    brand: BrandRef | None = None
    color: ColorRef | None = None
    product_type: ProductTypeRef | None = None


class ProductJoinRow(NamedTuple):
    """One row of the product query: the product and its optional references."""

    product: Product
    brand: Brand | None
    color: Color | None
    product_type: ProductType | None


def to_product_record(row: ProductJoinRow) -> ProductRecord:
    """Map a joined product row to the canonical product view."""
    return ProductRecord(
        id=row.product.id,
        product_name=row.product.product_name,
        image=row.product.image,
        brand=BrandRef(id=row.brand.id, name=row.brand.name) if row.brand else None,
        color=ColorRef(id=row.color.id, value=row.color.value) if row.color else None,
        product_type=(
            ProductTypeRef(id=row.product_type.id, name=row.product_type.name) if row.product_type else None
        ),
    )


class ProductService:
    """Service for storefront product reads."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _base_statement(self):  # type: ignore[no-untyped-def]
        return (
            select(Product, Brand, Color, ProductType)
            .outerjoin(Brand, Brand.id == Product.brand_id)  # type: ignore[arg-type]
            .outerjoin(Color, Color.id == Product.color_id)  # type: ignore[arg-type]
            .outerjoin(ProductType, ProductType.id == Product.product_type_id)  # type: ignore[arg-type]
        )

    async def list_products(self) -> list[ProductRecord]:
        """List all products by name."""
        statement = self._base_statement().order_by(Product.product_name)
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error("Product lookup failed", error=str(e))
            raise LookupFailed(f"Failed to fetch products: {e}") from e
        return [to_product_record(ProductJoinRow(*row)) for row in result.all()]

    async def get_product(self, product_id: str) -> ProductRecord:
        """Get a single product by id."""
        if not is_ulid(product_id):
            raise ProductNotFound()
        statement = self._base_statement().where(Product.id == product_id)
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error("Product lookup failed", product_id=product_id, error=str(e))
            raise LookupFailed(f"Failed to fetch product: {e}") from e
        row = result.first()
        if row is None:
            raise ProductNotFound()
        return to_product_record(ProductJoinRow(*row))
