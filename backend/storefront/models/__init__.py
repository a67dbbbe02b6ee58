"""Database models."""

from sqlmodel import SQLModel

from storefront.models.catalog import Brand, BrandType, Color, Product, ProductType, Size, SizeAvailability
from storefront.models.enums import ActivityType, AssetPlacement, UserRole
from storefront.models.order import Customer, OrderAsset, OrderSizeLine, ProductOrder
from storefront.models.user import Role, User

__all__ = [
    "SQLModel",
    "ProductType",
    "Brand",
    "BrandType",
    "Color",
    "Size",
    "SizeAvailability",
    "Product",
    "Customer",
    "ProductOrder",
    "OrderSizeLine",
    "OrderAsset",
    "Role",
    "User",
    "AssetPlacement",
    "ActivityType",
    "UserRole",
]
