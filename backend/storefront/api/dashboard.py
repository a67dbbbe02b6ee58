"""Admin dashboard endpoint."""

from datetime import datetime

from fastapi import APIRouter, Response

from storefront.api.dependencies import AdminRoleDep, DashboardServiceDep
from storefront.models.enums import ActivityType
from storefront.services.dashboard.dashboard_service import ActivityItem, DashboardData, DashboardStats
from storefront.services.orders.payload import CamelModel

router = APIRouter(tags=["dashboard"])


class DashboardStatsResponse(CamelModel):
    total_orders: int
    total_users: int
    active_products: int
    total_brands: int
    total_colors: int
    total_types: int

    @classmethod
    def from_stats(cls, stats: DashboardStats) -> "DashboardStatsResponse":
        return cls(
            total_orders=stats.total_orders,
            total_users=stats.total_users,
            active_products=stats.active_products,
            total_brands=stats.total_brands,
            total_colors=stats.total_colors,
            total_types=stats.total_types,
        )


class ActivityItemResponse(CamelModel):
    id: str
    type: ActivityType
    title: str
    description: str
    timestamp: datetime

    @classmethod
    def from_item(cls, item: ActivityItem) -> "ActivityItemResponse":
        return cls(
            id=item.id,
            type=item.type,
            title=item.title,
            description=item.description,
            timestamp=item.timestamp,
        )


class DashboardDataResponse(CamelModel):
    stats: DashboardStatsResponse
    recent_activity: list[ActivityItemResponse]


class DashboardResponse(CamelModel):
    success: bool = True
    data: DashboardDataResponse

    @classmethod
    def from_data(cls, data: DashboardData) -> "DashboardResponse":
        return cls(
            data=DashboardDataResponse(
                stats=DashboardStatsResponse.from_stats(data.stats),
                recent_activity=[ActivityItemResponse.from_item(item) for item in data.recent_activity],
            )
        )


@router.get("/dashboard", response_model=DashboardResponse, operation_id="getDashboard")
async def get_dashboard(
    service: DashboardServiceDep,
    _admin: AdminRoleDep,
    response: Response,
) -> DashboardResponse:
    """Counts and the recent activity feed. Degrades to zeros when the database is unreachable."""
    response.headers["Cache-Control"] = "no-store"
    return DashboardResponse.from_data(await service.get_dashboard())
