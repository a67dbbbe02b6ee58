"""API schemas for the orders endpoint."""

from storefront.services.orders.payload import CamelModel


class OrderCreatedResponse(CamelModel):
    success: bool = True
    order_id: str
    customer_id: str
