"""Order domain exceptions.

Any OrderPersistenceFailed means the order was not placed from the caller's
perspective. Rows written by earlier steps are not rolled back.
"""

from storefront.services.exceptions import NotFoundError, ServiceError, ValidationError


class InvalidOrderPayload(ValidationError):
    """The order descriptor is not valid JSON or does not match the expected shape."""

    pass


class OrderPersistenceFailed(ServiceError):
    """A fatal step of order submission failed."""

    pass


class CustomerCreateFailed(OrderPersistenceFailed):
    """Inserting the customer row failed."""

    pass


class BrandTypeNotFound(OrderPersistenceFailed, NotFoundError):
    """No brand/type association exists for the selected brand and product type."""

    pass


class OrderCreateFailed(OrderPersistenceFailed):
    """Inserting the order row failed."""

    pass


class UnknownSize(OrderPersistenceFailed, NotFoundError):
    """A size line references a size that does not exist."""

    def __init__(self, size: str):
        self.size = size
        super().__init__(f"Unknown size: {size}")


class SizeLinesCreateFailed(OrderPersistenceFailed):
    """Inserting the size lines failed."""

    pass


class AssetUploadFailed(ServiceError):
    """Uploading a single asset failed. Logged and skipped, never escalated."""

    pass
