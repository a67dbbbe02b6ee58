"""Catalog domain exceptions."""

from storefront.services.exceptions import NotFoundError, ServiceError


class LookupFailed(ServiceError):
    """Reading reference data from the database failed."""

    pass


class ProductNotFound(NotFoundError):
    """Product not found."""

    pass
