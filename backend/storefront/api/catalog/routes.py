"""Product taxonomy and product read endpoints."""

from typing import Annotated

import structlog
from fastapi import APIRouter, HTTPException, Query

from storefront.api.catalog.schemas import BrandResponse, ColorResponse, ProductTypeResponse, SizeResponse
from storefront.api.dependencies import LookupServiceDep, ProductServiceDep
from storefront.services.catalog.exceptions import LookupFailed, ProductNotFound
from storefront.services.catalog.product_service import ProductRecord

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["catalog"])


@router.get("/product-types", response_model=list[ProductTypeResponse], operation_id="listProductTypes")
async def list_product_types(service: LookupServiceDep) -> list[ProductTypeResponse]:
    """List product types. Serves a static fallback set if the database is unavailable."""
    return [ProductTypeResponse.from_model(t) for t in await service.list_product_types()]


@router.get("/brands", response_model=list[BrandResponse], operation_id="listBrands")
async def list_brands(
    service: LookupServiceDep,
    type_id: Annotated[str | None, Query(alias="typeId")] = None,
) -> list[BrandResponse]:
    """List brands, optionally only those offered for a product type."""
    try:
        brands = await service.list_brands(type_id)
    except LookupFailed as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [BrandResponse.from_model(b) for b in brands]


@router.get("/colors", response_model=list[ColorResponse], operation_id="listColors")
async def list_colors(service: LookupServiceDep) -> list[ColorResponse]:
    """List colors."""
    try:
        colors = await service.list_colors()
    except LookupFailed as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [ColorResponse.from_model(c) for c in colors]


@router.get("/sizes", response_model=list[SizeResponse], operation_id="listSizes")
async def list_sizes(service: LookupServiceDep) -> list[SizeResponse]:
    """List every size in garment order."""
    try:
        sizes = await service.list_sizes()
    except LookupFailed as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [SizeResponse.from_model(s) for s in sizes]


@router.get("/sizes-by-type", response_model=list[SizeResponse], operation_id="listSizesByType")
async def list_sizes_by_type(
    service: LookupServiceDep,
    type_id: Annotated[str | None, Query(alias="typeId")] = None,
    brand_id: Annotated[str | None, Query(alias="brandId")] = None,
) -> list[SizeResponse]:
    """List sizes available for a product type, narrowed to a brand when given."""
    if not type_id:
        raise HTTPException(status_code=400, detail="typeId is required")
    try:
        sizes = await service.list_sizes(type_id=type_id, brand_id=brand_id or None)
    except LookupFailed as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [SizeResponse.from_model(s) for s in sizes]


@router.get("/products", response_model=ProductRecord | list[ProductRecord], operation_id="getProducts")
async def get_products(
    service: ProductServiceDep,
    id: str | None = None,
) -> ProductRecord | list[ProductRecord]:
    """Get one product by id, or all products when no id is given."""
    try:
        if id:
            return await service.get_product(id)
        return await service.list_products()
    except ProductNotFound:
        raise HTTPException(status_code=404, detail="Product not found")
    except LookupFailed as e:
        raise HTTPException(status_code=500, detail=str(e))
