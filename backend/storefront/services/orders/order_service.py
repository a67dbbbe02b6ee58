"""Order submission service.

Persists an order in strict dependency order, committing after each step:

1. Customer row (fatal on failure)
2. BrandType resolution for the brand/product type pair (fatal if missing)
3. ProductOrder row (fatal on failure)
4. Size lines for quantities above zero
5. Asset uploads to S3 plus asset rows (per-file failures are skipped)

There is no transaction spanning the steps: a failure in step 2 leaves the
customer from step 1 in place. The notification email is dispatched by the
API route after this service returns.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from storefront.models.catalog import BrandType, Size
from storefront.models.enums import AssetPlacement
from storefront.models.order import Customer, OrderAsset, OrderSizeLine, ProductOrder
from storefront.models.types import is_ulid
from storefront.services.catalog.sizes import canonical_size, size_rank
from storefront.services.orders.exceptions import (
    AssetUploadFailed,
    BrandTypeNotFound,
    CustomerCreateFailed,
    OrderCreateFailed,
    OrderPersistenceFailed,
    SizeLinesCreateFailed,
    UnknownSize,
)
from storefront.services.orders.payload import AssetUpload, ContactInformation, OrderDescriptor, SizeSelectionItem
from storefront.services.storage.paths import asset_key
from storefront.services.storage.storage_service import S3StorageService

logger = structlog.get_logger(__name__)


@dataclass
class OrderResult:
    """Rows created for a submitted order."""

    customer: Customer
    order: ProductOrder
    size_lines: list[OrderSizeLine]
    assets: list[OrderAsset]


class OrderService:
    """Service for order submission.

    Note: This service does NOT send the notification email.
    API routes should schedule it after a successful submission.
    """

    def __init__(self, session: AsyncSession, storage: S3StorageService):
        self.session = session
        self.storage = storage

    async def submit_order(
        self,
        descriptor: OrderDescriptor,
        assets: Iterable[AssetUpload] = (),
    ) -> OrderResult:
        """Persist customer, order, size lines and assets for one submission."""
        customer = await self.create_customer(descriptor.contact_information)

        try:
            brand_type = await self.get_brand_type(descriptor.brand_id, descriptor.product_type_id)
        except BrandTypeNotFound:
            logger.warning(
                "Brand/type pair not found, customer left without order",
                customer_id=customer.id,
                brand_id=descriptor.brand_id,
                product_type_id=descriptor.product_type_id,
            )
            raise

        order = await self.create_order(customer.id, brand_type.id, descriptor.color_id)
        size_lines = await self.create_size_lines(order.id, descriptor.size_selection)
        stored_assets = await self.store_assets(order.id, assets)

        logger.info(
            "Order submitted",
            order_id=order.id,
            customer_id=customer.id,
            size_lines=len(size_lines),
            assets=len(stored_assets),
        )
        return OrderResult(customer=customer, order=order, size_lines=size_lines, assets=stored_assets)

    async def create_customer(self, contact: ContactInformation) -> Customer:
        """Insert a fresh customer row for this submission."""
        customer = Customer(
            name=contact.full_name,
            email=contact.email,
            contact_number=contact.contact_number,
            address=contact.address,
        )
        try:
            self.session.add(customer)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to create customer", error=str(e))
            raise CustomerCreateFailed(str(e)) from e

        logger.info("Created customer", customer_id=customer.id)
        return customer

    async def get_brand_type(self, brand_id: str, type_id: str) -> BrandType:
        """Resolve the brand/type association for the selected brand and product type."""
        if not (is_ulid(brand_id) and is_ulid(type_id)):
            raise BrandTypeNotFound(f"No brand/type pair for brand={brand_id} type={type_id}")

        statement = select(BrandType).where(BrandType.brand_id == brand_id, BrandType.type_id == type_id)
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error("Failed to resolve brand/type pair", brand_id=brand_id, type_id=type_id, error=str(e))
            raise BrandTypeNotFound(str(e)) from e

        brand_type = result.scalars().first()
        if brand_type is None:
            raise BrandTypeNotFound(f"No brand/type pair for brand={brand_id} type={type_id}")
        return brand_type

    async def create_order(self, customer_id: str, brand_type_id: str, color_id: str) -> ProductOrder:
        """Insert the order row."""
        if not is_ulid(color_id):
            raise OrderCreateFailed(f"Invalid color id: {color_id}")

        order = ProductOrder(customer_id=customer_id, brand_type_id=brand_type_id, color_id=color_id)
        try:
            self.session.add(order)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to create order", customer_id=customer_id, error=str(e))
            raise OrderCreateFailed(str(e)) from e

        logger.info("Created order", order_id=order.id, customer_id=customer_id)
        return order

    async def create_size_lines(self, order_id: str, selection: Iterable[SizeSelectionItem]) -> list[OrderSizeLine]:
        """Insert one size line per size with a positive quantity.

        Zero quantities are dropped. An order without any positive quantity is
        still accepted and simply gets no size lines.
        """
        positive = [item for item in selection if item.quantity > 0]
        if not positive:
            logger.info("Order has no sized items", order_id=order_id)
            return []

        resolved = zip(await self._resolve_sizes(positive), positive, strict=True)
        lines = [
            OrderSizeLine(order_id=order_id, size_id=size.id, quantity=item.quantity)
            for size, item in sorted(resolved, key=lambda pair: size_rank(pair[0].value))
        ]
        try:
            self.session.add_all(lines)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to create size lines", order_id=order_id, error=str(e))
            raise SizeLinesCreateFailed(str(e)) from e

        logger.info("Created size lines", order_id=order_id, count=len(lines))
        return lines

    async def _resolve_sizes(self, items: list[SizeSelectionItem]) -> list[Size]:
        """Map each selection to its Size row, by id when given, otherwise by size value or abbreviation."""
        try:
            result = await self.session.execute(select(Size))
        except SQLAlchemyError as e:
            raise SizeLinesCreateFailed(str(e)) from e
        sizes = list(result.scalars().all())
        by_id = {size.id: size for size in sizes}
        by_value = {canonical_size(size.value): size for size in sizes}

        resolved: list[Size] = []
        for item in items:
            size = by_id.get(item.size_id) if item.size_id else None
            if size is None:
                size = by_value.get(canonical_size(item.size))
            if size is None:
                raise UnknownSize(item.size_id or item.size)
            resolved.append(size)
        return resolved

    async def store_assets(self, order_id: str, assets: Iterable[AssetUpload]) -> list[OrderAsset]:
        """Upload every non-empty asset and record it against the order.

        Uploads run one placement at a time. A failed upload is logged and
        skipped; the remaining placements are still processed.
        """
        by_placement = {asset.placement: asset for asset in assets if not asset.is_empty}

        rows: list[OrderAsset] = []
        for placement in AssetPlacement:
            asset = by_placement.get(placement)
            if asset is None:
                continue
            try:
                rows.append(await self._upload_asset(order_id, asset))
            except AssetUploadFailed as e:
                logger.warning(
                    "Skipping asset after failed upload",
                    order_id=order_id,
                    placement=placement.value,
                    filename=asset.filename,
                    error=str(e),
                )

        if not rows:
            return []

        try:
            self.session.add_all(rows)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to record uploaded assets", order_id=order_id, error=str(e))
            raise OrderPersistenceFailed(str(e)) from e

        return rows

    async def _upload_asset(self, order_id: str, asset: AssetUpload) -> OrderAsset:
        key = asset_key(asset.filename)
        try:
            file_ref = await self.storage.upload(
                key,
                asset.data,
                asset.content_type,
                original_filename=asset.filename,
            )
        except Exception as e:
            raise AssetUploadFailed(str(e)) from e

        return OrderAsset(
            order_id=order_id,
            url=self.storage.get_public_url(file_ref),
            placement=asset.placement.label,
            file_ref=file_ref,
        )

