from datetime import UTC, datetime, timedelta

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import select

from storefront.db import get_session_maker
from storefront.main import app
from storefront.models.catalog import BrandType
from storefront.models.enums import ActivityType
from storefront.models.order import Customer, ProductOrder
from storefront.services.dashboard.dashboard_service import (
    DashboardService,
    RecentCustomer,
    RecentOrder,
    merge_recent_activity,
)
from tests.helpers import CatalogIds

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def test_merge_recent_activity_newest_first():
    orders = [
        RecentOrder(id="01HZX00000000000000000ORD1", created_at=T0 + timedelta(minutes=5), customer_name="Ana"),
        RecentOrder(id="01HZX00000000000000000ORD2", created_at=T0 + timedelta(minutes=1), customer_name=None),
        RecentOrder(id="01HZX00000000000000000ORD3", created_at=T0, customer_name="Ben"),
    ]
    customers = [
        # Naive timestamps are treated as UTC
        RecentCustomer(id="C1", email="c1@example.com", created_at=(T0 + timedelta(minutes=3)).replace(tzinfo=None)),
        RecentCustomer(id="C2", email="c2@example.com", created_at=T0 - timedelta(minutes=1)),
    ]

    activity = merge_recent_activity(orders, customers)

    assert [item.id for item in activity] == [
        "order-01HZX00000000000000000ORD1",
        "user-C1",
        "order-01HZX00000000000000000ORD2",
        "order-01HZX00000000000000000ORD3",
        "user-C2",
    ]
    assert activity[0].type == ActivityType.ORDER
    assert activity[0].title == "New order received"
    assert activity[0].description == "Order #00ORD1 - Ana"
    assert activity[1].title == "New user registered"
    assert activity[1].description == "c1@example.com"
    assert activity[2].description == "Order #00ORD2 - Unknown Customer"


def test_merge_recent_activity_is_limited():
    orders = [RecentOrder(id=f"O{i}", created_at=T0 + timedelta(minutes=i), customer_name="x") for i in range(4)]
    customers = [RecentCustomer(id=f"C{i}", email="e", created_at=T0 + timedelta(minutes=i)) for i in range(4)]
    assert len(merge_recent_activity(orders, customers)) == 5


async def test_dashboard_counts(session: AsyncSession, catalog: CatalogIds, session_maker):
    brand_type = (await session.execute(select(BrandType))).scalars().first()
    assert brand_type is not None
    for minute in range(4):
        customer = Customer(name=f"Customer {minute}", email=f"c{minute}@example.com")
        session.add(customer)
        await session.flush()
        session.add(
            ProductOrder(
                customer_id=customer.id,
                brand_type_id=brand_type.id,
                color_id=catalog.colors["Black"],
                created_at=T0 + timedelta(minutes=minute),
            )
        )
    await session.commit()

    data = await DashboardService(session_maker).get_dashboard()

    assert data.stats.total_orders == 4
    assert data.stats.total_users == 4
    assert data.stats.active_products == 8  # Gildan T-Shirt 4 + Hoodie 2, Bella T-Shirt 2
    assert data.stats.total_brands == 3
    assert data.stats.total_colors == 3
    assert data.stats.total_types == 3
    # 3 recent orders + 2 recent customers
    assert len(data.recent_activity) == 5
    assert sum(item.type == ActivityType.ORDER for item in data.recent_activity) == 3


async def test_dashboard_degrades_to_zeros(broken_session_maker: async_sessionmaker[AsyncSession]):
    data = await DashboardService(broken_session_maker).get_dashboard()

    assert data.stats.total_orders == 0
    assert data.stats.total_types == 0
    assert data.recent_activity == []


async def test_dashboard_requires_admin_cookie(api: httpx.AsyncClient):
    response = await api.get("/api/dashboard")
    assert response.status_code == 401
    assert response.json() == {"detail": "Admin access required"}

    api.cookies.set("user_role", "user")
    response = await api.get("/api/dashboard")
    assert response.status_code == 401


async def test_dashboard_endpoint(api: httpx.AsyncClient, catalog: CatalogIds):
    api.cookies.set("user_role", "admin")
    response = await api.get("/api/dashboard")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store"
    assert response.json() == {
        "success": True,
        "data": {
            "stats": {
                "totalOrders": 0,
                "totalUsers": 0,
                "activeProducts": 8,
                "totalBrands": 3,
                "totalColors": 3,
                "totalTypes": 3,
            },
            "recentActivity": [],
        },
    }


async def test_dashboard_endpoint_with_database_down(
    api: httpx.AsyncClient,
    broken_session_maker: async_sessionmaker[AsyncSession],
):
    app.dependency_overrides[get_session_maker] = lambda: broken_session_maker

    api.cookies.set("user_role", "admin")
    response = await api.get("/api/dashboard")

    assert response.status_code == 200
    assert response.json()["data"]["stats"]["totalOrders"] == 0
