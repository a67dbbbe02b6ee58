"""Storefront client exceptions."""


class StorefrontClientError(Exception):
    """Base client exception."""

    pass


class LookupFailed(StorefrontClientError):
    """A reference data request failed (network error or non-2xx response)."""

    pass


class OrderSubmissionFailed(StorefrontClientError):
    """The orders endpoint did not accept the order."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ComposerError(Exception):
    """Base exception for invalid composer operations."""

    pass


class InvalidTransition(ComposerError):
    """The operation is not allowed in the composer's current step."""

    pass


class IncompleteOrder(ComposerError):
    """Product type, brand, color or contact information is missing at submission."""

    pass


class SizeNotEditable(ComposerError):
    """The size is not available for the selected brand and product type."""

    pass
