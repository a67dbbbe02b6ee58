import json

import httpx
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from storefront.models.order import Customer, OrderAsset, ProductOrder
from tests.helpers import CatalogIds, FakeNotifier, FakeStorage, order_data


async def post_order(api: httpx.AsyncClient, data: dict | str, files: list | None = None) -> httpx.Response:
    payload = data if isinstance(data, str) else json.dumps(data)
    # A dummy file part forces multipart encoding when no assets are attached
    return await api.post("/api/orders", data={"orderData": payload}, files=files or [("unused", ("x", b""))])


async def test_create_order(
    api: httpx.AsyncClient,
    catalog: CatalogIds,
    session: AsyncSession,
    storage: FakeStorage,
    notifier: FakeNotifier,
):
    response = await post_order(
        api,
        order_data(catalog),
        files=[
            ("front-center", ("front.png", b"front-bytes", "image/png")),
            ("back-top", ("back.svg", b"<svg/>", "image/svg+xml")),
        ],
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True

    order = (await session.execute(select(ProductOrder))).scalars().one()
    assert body == {"success": True, "orderId": order.id, "customerId": order.customer_id}

    assets = (await session.execute(select(OrderAsset))).scalars().all()
    assert sorted(a.placement for a in assets) == ["Back - Top", "Front - Center"]
    assert sorted(storage.uploads.values()) == [b"<svg/>", b"front-bytes"]

    assert len(notifier.calls) == 1
    call = notifier.calls[0]
    assert call["order_id"] == order.id
    assert call["customer_id"] == order.customer_id
    assert call["descriptor"].contact_information.full_name == "Jordan Reyes"
    assert [a.filename for a in call["attached"]] == ["front.png", "back.svg"]


async def test_empty_file_fields_are_ignored(api: httpx.AsyncClient, catalog: CatalogIds, storage: FakeStorage):
    response = await post_order(api, order_data(catalog), files=[("front-top-left", ("blank.png", b"", "image/png"))])

    assert response.status_code == 200
    assert storage.uploads == {}


async def test_malformed_order_data(api: httpx.AsyncClient, catalog: CatalogIds, session: AsyncSession):
    response = await post_order(api, "{not json")
    assert response.status_code == 400

    response = await post_order(api, {"contactInformation": {}})
    assert response.status_code == 400

    assert (await session.execute(select(Customer))).scalars().all() == []


async def test_missing_order_data(api: httpx.AsyncClient):
    response = await api.post("/api/orders", files=[("front-center", ("front.png", b"x", "image/png"))])
    assert response.status_code == 400
    assert response.json() == {"detail": "Missing orderData"}


async def test_unknown_brand_type_returns_500(
    api: httpx.AsyncClient,
    catalog: CatalogIds,
    session: AsyncSession,
    notifier: FakeNotifier,
):
    data = order_data(catalog, productTypeId=catalog.types["Mug"])

    response = await post_order(api, data)

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert notifier.calls == []
    # The customer row from the first step stays behind
    assert len((await session.execute(select(Customer))).scalars().all()) == 1
    assert (await session.execute(select(ProductOrder))).scalars().all() == []
