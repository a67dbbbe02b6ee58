"""Admin dashboard aggregation.

All metrics are independent, so they are queried concurrently, each in its own
session. A metric that cannot be read degrades to 0 (or an empty activity
list) instead of failing the dashboard.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypeVar

import structlog
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import SQLModel, select

from storefront.models.catalog import Brand, Color, ProductType, SizeAvailability
from storefront.models.enums import ActivityType
from storefront.models.order import Customer, ProductOrder
from storefront.utils.datetime_utils import ensure_utc

logger = structlog.get_logger(__name__)

T = TypeVar("T")

RECENT_ORDERS = 3
RECENT_CUSTOMERS = 2
ACTIVITY_LIMIT = 5


@dataclass
class DashboardStats:
    total_orders: int = 0
    total_users: int = 0
    active_products: int = 0  # brand/type/size combinations
    total_brands: int = 0
    total_colors: int = 0
    total_types: int = 0


@dataclass
class ActivityItem:
    id: str
    type: ActivityType
    title: str
    description: str
    timestamp: datetime


@dataclass
class RecentOrder:
    id: str
    created_at: datetime
    customer_name: str | None


@dataclass
class RecentCustomer:
    id: str
    email: str
    created_at: datetime


@dataclass
class DashboardData:
    stats: DashboardStats = field(default_factory=DashboardStats)
    recent_activity: list[ActivityItem] = field(default_factory=list)


def merge_recent_activity(
    orders: Sequence[RecentOrder],
    customers: Sequence[RecentCustomer],
    *,
    limit: int = ACTIVITY_LIMIT,
) -> list[ActivityItem]:
    """Merge recent orders and customers into one feed, newest first."""
    activities = [
        ActivityItem(
            id=f"order-{order.id}",
            type=ActivityType.ORDER,
            title="New order received",
            description=f"Order #{order.id[-6:]} - {order.customer_name or 'Unknown Customer'}",
            timestamp=ensure_utc(order.created_at),
        )
        for order in orders
    ]
    activities.extend(
        ActivityItem(
            id=f"user-{customer.id}",
            type=ActivityType.USER,
            title="New user registered",
            description=customer.email,
            timestamp=ensure_utc(customer.created_at),
        )
        for customer in customers
    )
    activities.sort(key=lambda item: item.timestamp, reverse=True)
    return activities[:limit]


class DashboardService:
    """Service for admin dashboard statistics and the recent activity feed."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    async def get_dashboard(self) -> DashboardData:
        """Aggregate counts and recent activity."""
        (
            total_orders,
            total_users,
            active_products,
            total_brands,
            total_colors,
            total_types,
            recent_orders,
            recent_customers,
        ) = await asyncio.gather(
            self._count(ProductOrder),
            self._count(Customer),
            self._count(SizeAvailability),
            self._count(Brand),
            self._count(Color),
            self._count(ProductType),
            self._safe("recent_orders", self._recent_orders, []),
            self._safe("recent_customers", self._recent_customers, []),
        )

        return DashboardData(
            stats=DashboardStats(
                total_orders=total_orders,
                total_users=total_users,
                active_products=active_products,
                total_brands=total_brands,
                total_colors=total_colors,
                total_types=total_types,
            ),
            recent_activity=merge_recent_activity(recent_orders, recent_customers),
        )

    async def _safe(self, metric: str, query: Callable[[AsyncSession], Awaitable[T]], default: T) -> T:
        """Run one query in its own session, returning `default` if the database is unavailable."""
        try:
            async with self.session_maker() as session:
                return await query(session)
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Dashboard metric unavailable", metric=metric, error=str(e))
            return default

    async def _count(self, model: type[SQLModel]) -> int:
        async def query(session: AsyncSession) -> int:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar() or 0

        return await self._safe(f"count:{model.__tablename__}", query, 0)

    async def _recent_orders(self, session: AsyncSession) -> list[RecentOrder]:
        statement: Any = (
            select(ProductOrder.id, ProductOrder.created_at, Customer.name)
            .outerjoin(Customer, Customer.id == ProductOrder.customer_id)  # type: ignore[arg-type]
            .order_by(ProductOrder.created_at.desc())  # type: ignore[attr-defined]
            .limit(RECENT_ORDERS)
        )
        result = await session.execute(statement)
        return [
            RecentOrder(id=order_id, created_at=created_at, customer_name=name)
            for order_id, created_at, name in result.all()
        ]

    async def _recent_customers(self, session: AsyncSession) -> list[RecentCustomer]:
        statement: Any = (
            select(Customer.id, Customer.email, Customer.created_at)
            .order_by(Customer.created_at.desc())  # type: ignore[attr-defined]
            .limit(RECENT_CUSTOMERS)
        )
        result = await session.execute(statement)
        return [
            RecentCustomer(id=customer_id, email=email, created_at=created_at)
            for customer_id, email, created_at in result.all()
        ]
