"""Datetime utility functions."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from storefront.config import settings

# Timezone for API responses and emails (from config)
API_TIMEZONE = ZoneInfo(settings.timezone)


def utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC. Some drivers (SQLite) drop the offset on read."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def to_api_timezone(dt: datetime | None) -> datetime | None:
    """Convert a datetime to API timezone (from config).

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Datetime in API timezone, or None if input was None
    """
    if dt is None:
        return None
    return ensure_utc(dt).astimezone(API_TIMEZONE)
