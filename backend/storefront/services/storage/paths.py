"""S3 key generation for uploaded design assets."""

import re
import time
from pathlib import PurePath

from ulid import ULID

from storefront.config import settings

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_filename(filename: str) -> str:
    """Reduce a client-supplied filename to a safe final path segment."""
    name = PurePath(filename.replace("\\", "/")).name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "asset"


def asset_key(
    filename: str,
    *,
    now_ms: int | None = None,
    prefix: str | None = None,
    token: str | None = None,
) -> str:
    """Build the object key for an uploaded asset: {prefix}/{epoch_ms}-{token}-{filename}.

    `token` is the random tail of a fresh ULID, so two uploads of the same
    filename within one millisecond still get distinct keys.
    """
    timestamp = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    token = token if token is not None else str(ULID())[-8:].lower()
    base = (prefix if prefix is not None else settings.s3_asset_prefix).strip("/")
    key = f"{timestamp}-{token}-{sanitize_filename(filename)}"
    return f"{base}/{key}" if base else key
