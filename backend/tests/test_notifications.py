from datetime import UTC, datetime
from email.message import EmailMessage

import pytest

from storefront.config import settings
from storefront.models.enums import AssetPlacement
from storefront.services.notifications.order_email import OrderNotificationService, render_order_email
from storefront.services.orders.payload import AssetUpload, OrderDescriptor

DESCRIPTOR = OrderDescriptor.model_validate(
    {
        "productTypeId": "01HZX0000000000000000000T1",
        "brandId": "01HZX0000000000000000000B1",
        "colorId": "01HZX0000000000000000000C1",
        "productType": "T-Shirt",
        "brand": "Gildan",
        "color": "Black",
        "sizeSelection": [
            {"size": "Large", "quantity": 1},
            {"size": "Small", "quantity": 0},
            {"size": "Extra Small", "quantity": 4},
        ],
        "contactInformation": {
            "fullName": "Jordan <Reyes>",
            "email": "jordan@example.com",
            "contactNumber": "+1 555 0100",
            "address": "12 Harbor Road",
        },
    }
)

ASSETS = [
    AssetUpload(AssetPlacement.BACK_BOTTOM, "back.png", "image/png", b"1"),
    AssetUpload(AssetPlacement.FRONT_TOP_LEFT, "pocket.png", "image/png", b"2"),
    AssetUpload(AssetPlacement.FRONT_CENTER, "empty.png", "image/png", b""),
]


@pytest.fixture
def mail_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "smtp_host", "smtp.test")
    monkeypatch.setattr(settings, "smtp_user", "shop@example.com")
    monkeypatch.setattr(settings, "company_owner_email", "owner@example.com")


def test_render_order_email():
    html = render_order_email(
        DESCRIPTOR,
        order_id="ORDER1",
        customer_id="CUSTOMER1",
        attached=ASSETS,
        submitted_at=datetime(2024, 5, 1, 12, 30, tzinfo=UTC),
    )

    assert "ORDER1" in html and "CUSTOMER1" in html
    assert "2024-05-01 12:30:00" in html
    assert "Jordan &lt;Reyes&gt;" in html
    assert "<strong>Total Items:</strong> 5" in html
    # Only positive quantities, in garment order
    assert html.index("Extra Small") < html.index("Large")
    assert ">Small<" not in html
    # Assets in placement order, empty files omitted
    assert html.index("pocket.png") < html.index("back.png")
    assert "Front - Top Left" in html and "Back - Bottom" in html
    assert "empty.png" not in html


def test_render_without_assets_has_no_asset_table():
    html = render_order_email(DESCRIPTOR, order_id="O", customer_id="C")
    assert "Uploaded Assets" not in html


async def test_notification_skipped_without_mail_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "smtp_host", "")
    service = OrderNotificationService()

    assert await service.send_order_notification(DESCRIPTOR, order_id="O", customer_id="C") is False


async def test_notification_sends_html_message(mail_configured: None, monkeypatch: pytest.MonkeyPatch):
    sent: list[EmailMessage] = []

    async def fake_send(self: OrderNotificationService, message: EmailMessage) -> None:
        sent.append(message)

    monkeypatch.setattr(OrderNotificationService, "_send", fake_send)

    ok = await OrderNotificationService().send_order_notification(
        DESCRIPTOR, order_id="O", customer_id="C", attached=ASSETS
    )

    assert ok is True
    assert len(sent) == 1
    message = sent[0]
    assert message["Subject"] == "New Order Received - Jordan <Reyes>"
    assert message["To"] == "owner@example.com"
    assert message["From"] == "shop@example.com"
    html = message.get_body(preferencelist=("html",))
    assert html is not None
    assert "pocket.png" in html.get_content()


async def test_notification_failure_is_swallowed(mail_configured: None, monkeypatch: pytest.MonkeyPatch):
    async def failing_send(self: OrderNotificationService, message: EmailMessage) -> None:
        raise ConnectionRefusedError("smtp down")

    monkeypatch.setattr(OrderNotificationService, "_send", failing_send)

    ok = await OrderNotificationService().send_order_notification(DESCRIPTOR, order_id="O", customer_id="C")

    assert ok is False
