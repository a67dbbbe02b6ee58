"""Read-only lookups over product taxonomy reference data.

Every read is idempotent and sorted: product types and brands by name,
colors by value, sizes in garment order.
"""

from typing import Any, Final

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from storefront.models.catalog import Brand, BrandType, Color, ProductType, Size, SizeAvailability
from storefront.models.types import is_ulid
from storefront.services.catalog.exceptions import LookupFailed
from storefront.services.catalog.sizes import sort_sizes

logger = structlog.get_logger(__name__)

# Served when the product type table cannot be read, so the storefront stays usable
FALLBACK_PRODUCT_TYPES: Final[tuple[tuple[str, str], ...]] = (
    ("1", "T-Shirt"),
    ("2", "Hoodie"),
    ("3", "Mug"),
)


class LookupService:
    """Service for product taxonomy reads."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_product_types(self) -> list[ProductType]:
        """List product types by name. Falls back to a static set on database errors."""
        statement = select(ProductType).order_by(ProductType.name)
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.warning("Product type lookup failed, serving fallback types", error=str(e))
            return [ProductType(id=type_id, name=name) for type_id, name in FALLBACK_PRODUCT_TYPES]
        return list(result.scalars().all())

    async def list_brands(self, type_id: str | None = None) -> list[Brand]:
        """List brands by name, optionally only those paired with a product type."""
        if type_id and not is_ulid(type_id):
            return []
        statement = select(Brand)
        if type_id:
            statement = (
                statement.join(BrandType, BrandType.brand_id == Brand.id)  # type: ignore[arg-type]
                .where(BrandType.type_id == type_id)
                .distinct()
            )
        statement = statement.order_by(Brand.name)
        return await self._fetch_all(statement, "brands")

    async def list_colors(self) -> list[Color]:
        """List colors by value."""
        return await self._fetch_all(select(Color).order_by(Color.value), "colors")

    async def list_sizes(self, type_id: str | None = None, brand_id: str | None = None) -> list[Size]:
        """List sizes in garment order.

        With both filters, only sizes available for that exact brand/type pair
        are returned. With one filter, sizes available for any brand/type pair
        matching it. With none, every size.
        """
        if any(value and not is_ulid(value) for value in (type_id, brand_id)):
            return []
        statement = select(Size)
        if type_id or brand_id:
            statement = statement.join(SizeAvailability, SizeAvailability.size_id == Size.id).join(  # type: ignore[arg-type]
                BrandType,
                BrandType.id == SizeAvailability.brand_type_id,  # type: ignore[arg-type]
            )
            if type_id:
                statement = statement.where(BrandType.type_id == type_id)
            if brand_id:
                statement = statement.where(BrandType.brand_id == brand_id)
            statement = statement.distinct()

        sizes = await self._fetch_all(statement, "sizes")
        return sort_sizes(sizes, key=lambda size: size.value)

    async def _fetch_all(self, statement: Any, what: str) -> list[Any]:
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error("Lookup failed", lookup=what, error=str(e))
            raise LookupFailed(f"Failed to fetch {what}: {e}") from e
        return list(result.scalars().all())
