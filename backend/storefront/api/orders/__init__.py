"""Orders API package."""

from storefront.api.orders.routes import router

__all__ = ["router"]
