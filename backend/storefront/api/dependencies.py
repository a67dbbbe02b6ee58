"""FastAPI dependencies for service injection and access control."""

from typing import Annotated

from fastapi import Cookie, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.db import get_session, get_session_maker
from storefront.models.enums import UserRole
from storefront.services.auth.auth_service import AuthService
from storefront.services.catalog.lookup_service import LookupService
from storefront.services.catalog.product_service import ProductService
from storefront.services.dashboard.dashboard_service import DashboardService
from storefront.services.notifications.order_email import OrderNotificationService
from storefront.services.orders.order_service import OrderService
from storefront.services.storage.storage_service import S3StorageService

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_storage_service() -> S3StorageService:
    """Get a S3StorageService instance."""
    return S3StorageService()


def get_notification_service() -> OrderNotificationService:
    """Get an OrderNotificationService instance."""
    return OrderNotificationService()


async def get_lookup_service(session: SessionDep) -> LookupService:
    """Get a LookupService instance with the current session."""
    return LookupService(session)


async def get_product_service(session: SessionDep) -> ProductService:
    """Get a ProductService instance with the current session."""
    return ProductService(session)


async def get_order_service(
    session: SessionDep,
    storage: Annotated[S3StorageService, Depends(get_storage_service)],
) -> OrderService:
    """Get an OrderService instance with the current session and storage."""
    return OrderService(session, storage)


async def get_dashboard_service(
    session_maker: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_maker)],
) -> DashboardService:
    """Get a DashboardService instance with the session factory."""
    return DashboardService(session_maker)


async def get_auth_service(session: SessionDep) -> AuthService:
    """Get an AuthService instance with the current session."""
    return AuthService(session)


async def require_admin(user_role: Annotated[str | None, Cookie()] = None) -> str:
    """Allow the request only when the role cookie says admin."""
    if user_role != UserRole.ADMIN:
        raise HTTPException(status_code=401, detail="Admin access required")
    return user_role


# Type aliases for cleaner endpoint signatures
LookupServiceDep = Annotated[LookupService, Depends(get_lookup_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
NotificationServiceDep = Annotated[OrderNotificationService, Depends(get_notification_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
AdminRoleDep = Annotated[str, Depends(require_admin)]
