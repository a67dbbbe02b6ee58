"""Storefront client: HTTP API wrapper and the order composer state machine."""

from storefront.client.api_client import StorefrontClient
from storefront.client.composer import ComposerStep, OrderComposer, ReviewSummary, SizeEntry
from storefront.client.exceptions import (
    ComposerError,
    IncompleteOrder,
    InvalidTransition,
    LookupFailed,
    OrderSubmissionFailed,
    SizeNotEditable,
    StorefrontClientError,
)

__all__ = [
    "StorefrontClient",
    "OrderComposer",
    "ComposerStep",
    "ReviewSummary",
    "SizeEntry",
    "StorefrontClientError",
    "LookupFailed",
    "OrderSubmissionFailed",
    "ComposerError",
    "InvalidTransition",
    "IncompleteOrder",
    "SizeNotEditable",
]
