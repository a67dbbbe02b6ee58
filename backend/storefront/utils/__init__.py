"""Utility functions and helpers."""

from storefront.utils.datetime_utils import ensure_utc, to_api_timezone, utc_now

__all__ = [
    "ensure_utc",
    "to_api_timezone",
    "utc_now",
]
