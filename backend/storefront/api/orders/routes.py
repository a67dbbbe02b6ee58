"""Order submission endpoint."""

import structlog
from fastapi import APIRouter, BackgroundTasks, HTTPException, Request
from starlette.datastructures import FormData, UploadFile

from storefront.api.dependencies import NotificationServiceDep, OrderServiceDep
from storefront.api.orders.schemas import OrderCreatedResponse
from storefront.models.enums import AssetPlacement
from storefront.services.orders.exceptions import InvalidOrderPayload, OrderPersistenceFailed
from storefront.services.orders.payload import AssetUpload, OrderDescriptor

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["orders"])


async def read_asset_fields(form: FormData) -> list[AssetUpload]:
    """Collect the non-empty file fields, one per placement."""
    assets: list[AssetUpload] = []
    for placement in AssetPlacement:
        value = form.get(placement.value)
        if not isinstance(value, UploadFile):
            continue
        data = await value.read()
        if not data:
            continue
        assets.append(
            AssetUpload(
                placement=placement,
                filename=value.filename or placement.value,
                content_type=value.content_type or "application/octet-stream",
                data=data,
            )
        )
    return assets


@router.post("/orders", response_model=OrderCreatedResponse, operation_id="createOrder")
async def create_order(
    request: Request,
    service: OrderServiceDep,
    notifier: NotificationServiceDep,
    background_tasks: BackgroundTasks,
) -> OrderCreatedResponse:
    """Place an order from a multipart payload.

    Fields: `orderData` (JSON order descriptor) and up to four files named
    front-top-left, front-center, back-top and back-bottom. The operator
    notification is sent after the response.
    """
    form = await request.form()
    raw = form.get("orderData")
    try:
        if isinstance(raw, UploadFile):
            raise InvalidOrderPayload("orderData must be a text field")
        descriptor = OrderDescriptor.from_json(raw)
    except InvalidOrderPayload as e:
        raise HTTPException(status_code=400, detail=str(e))

    assets = await read_asset_fields(form)

    try:
        result = await service.submit_order(descriptor, assets)
    except OrderPersistenceFailed as e:
        logger.error("Order submission failed", error=str(e), error_type=type(e).__name__)
        raise HTTPException(status_code=500, detail="Internal server error")

    background_tasks.add_task(
        notifier.send_order_notification,
        descriptor,
        order_id=result.order.id,
        customer_id=result.customer.id,
        attached=assets,
    )

    return OrderCreatedResponse(order_id=result.order.id, customer_id=result.customer.id)
