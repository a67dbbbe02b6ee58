"""Catalog API package: product taxonomy lookups and storefront products."""

from storefront.api.catalog.routes import router

__all__ = ["router"]
