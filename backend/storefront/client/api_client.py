"""HTTP client for the storefront API."""

from collections.abc import Iterable
from types import TracebackType
from typing import Any, Self, TypeVar

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter

from storefront.api.catalog.schemas import BrandResponse, ColorResponse, ProductTypeResponse, SizeResponse
from storefront.api.orders.schemas import OrderCreatedResponse
from storefront.client.exceptions import LookupFailed, OrderSubmissionFailed
from storefront.services.orders.payload import AssetUpload, OrderDescriptor

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class StorefrontClient:
    """Async client for the storefront lookup and order endpoints.

    Usage:
        async with StorefrontClient("https://shop.example.com") as client:
            types = await client.list_product_types()
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_list(self, path: str, model: type[ModelT], params: dict[str, str] | None = None) -> list[ModelT]:
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("Lookup failed", path=path, status_code=e.response.status_code)
            raise LookupFailed(f"{path} returned {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.warning("Lookup failed", path=path, error=str(e))
            raise LookupFailed(f"{path}: {e}") from e
        return TypeAdapter(list[model]).validate_python(response.json())  # type: ignore[valid-type]

    async def list_product_types(self) -> list[ProductTypeResponse]:
        return await self._get_list("/api/product-types", ProductTypeResponse)

    async def list_brands(self, type_id: str | None = None) -> list[BrandResponse]:
        params = {"typeId": type_id} if type_id else None
        return await self._get_list("/api/brands", BrandResponse, params)

    async def list_colors(self) -> list[ColorResponse]:
        return await self._get_list("/api/colors", ColorResponse)

    async def list_sizes(self) -> list[SizeResponse]:
        return await self._get_list("/api/sizes", SizeResponse)

    async def list_sizes_by_type(self, type_id: str, brand_id: str | None = None) -> list[SizeResponse]:
        params = {"typeId": type_id}
        if brand_id:
            params["brandId"] = brand_id
        return await self._get_list("/api/sizes-by-type", SizeResponse, params)

    async def submit_order(self, descriptor: OrderDescriptor, assets: Iterable[AssetUpload] = ()) -> OrderCreatedResponse:
        """Post the order as multipart: `orderData` JSON plus one file field per attached placement."""
        data = {"orderData": descriptor.model_dump_json(by_alias=True)}
        files: list[tuple[str, Any]] = [
            (asset.placement.value, (asset.filename, asset.data, asset.content_type))
            for asset in assets
            if not asset.is_empty
        ]

        try:
            response = await self._client.post("/api/orders", data=data, files=files)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Order submission rejected", status_code=e.response.status_code)
            raise OrderSubmissionFailed("Failed to submit order", status_code=e.response.status_code) from e
        except httpx.RequestError as e:
            logger.error("Order submission failed", error=str(e))
            raise OrderSubmissionFailed(f"Failed to submit order: {e}") from e

        return OrderCreatedResponse.model_validate(response.json())
