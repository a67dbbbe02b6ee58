"""Order notification email.

Delivery is best effort and at most once: failures are logged and swallowed,
nothing is retried or queued, and the order submission is never affected.
"""

from collections.abc import Iterable
from datetime import datetime
from email.message import EmailMessage

import aiosmtplib
import structlog
from jinja2 import Environment, PackageLoader, select_autoescape

from storefront.config import settings
from storefront.models.enums import AssetPlacement
from storefront.services.catalog.sizes import size_rank
from storefront.services.orders.payload import AssetUpload, OrderDescriptor
from storefront.utils.datetime_utils import to_api_timezone, utc_now

logger = structlog.get_logger(__name__)

_templates = Environment(
    loader=PackageLoader("storefront.services.notifications", "templates"),
    autoescape=select_autoescape(["html"]),
)


def render_order_email(
    descriptor: OrderDescriptor,
    *,
    order_id: str,
    customer_id: str,
    attached: Iterable[AssetUpload] = (),
    submitted_at: datetime | None = None,
) -> str:
    """Render the HTML body of the operator notification."""
    files = {asset.placement: asset.filename for asset in attached if not asset.is_empty}
    timestamp = to_api_timezone(submitted_at or utc_now())
    assert timestamp is not None

    return _templates.get_template("order_email.html").render(
        order=descriptor,
        contact=descriptor.contact_information,
        order_id=order_id,
        customer_id=customer_id,
        submitted_at=timestamp.strftime("%Y-%m-%d %H:%M:%S %Z"),
        sizes=sorted(descriptor.ordered_sizes, key=lambda item: size_rank(item.size)),
        total_items=descriptor.total_items,
        assets=[(files[placement], placement.label) for placement in AssetPlacement if placement in files],
    )


class OrderNotificationService:
    """Service for emailing new orders to the shop operator."""

    async def _send(self, message: EmailMessage) -> None:
        await aiosmtplib.send(
            message,
            hostname=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user or None,
            password=settings.smtp_pass or None,
            use_tls=settings.smtp_secure,
            timeout=settings.smtp_timeout,
        )

    async def send_order_notification(
        self,
        descriptor: OrderDescriptor,
        *,
        order_id: str,
        customer_id: str,
        attached: Iterable[AssetUpload] = (),
    ) -> bool:
        """Email the order summary to the configured operator address.

        Returns:
            True if the message was handed to the SMTP server, False otherwise
        """
        log = logger.bind(order_id=order_id, customer_id=customer_id)

        if not settings.mail_enabled:
            log.warning("Order notification skipped, mail is not configured")
            return False

        try:
            message = EmailMessage()
            message["From"] = settings.mail_from or settings.smtp_user
            message["To"] = settings.company_owner_email
            message["Subject"] = f"New Order Received - {descriptor.contact_information.full_name}"
            message.set_content(
                f"New order {order_id} from {descriptor.contact_information.full_name}. View this email as HTML."
            )
            message.add_alternative(
                render_order_email(descriptor, order_id=order_id, customer_id=customer_id, attached=attached),
                subtype="html",
            )
            await self._send(message)
        except Exception as e:
            log.error("Failed to send order notification", error=str(e))
            return False

        log.info("Order notification sent", recipient=settings.company_owner_email)
        return True
