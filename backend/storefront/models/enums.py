"""Enum definitions for database models and API contracts."""

from enum import StrEnum


class AssetPlacement(StrEnum):
    """Fixed print locations a design asset can be attached to.

    The value doubles as the multipart field name of the uploaded file.
    """

    FRONT_TOP_LEFT = "front-top-left"
    FRONT_CENTER = "front-center"
    BACK_TOP = "back-top"
    BACK_BOTTOM = "back-bottom"

    @property
    def label(self) -> str:
        """Human-readable placement label stored with the asset and shown in emails."""
        return _PLACEMENT_LABELS[self]


_PLACEMENT_LABELS: dict[AssetPlacement, str] = {
    AssetPlacement.FRONT_TOP_LEFT: "Front - Top Left",
    AssetPlacement.FRONT_CENTER: "Front - Center",
    AssetPlacement.BACK_TOP: "Back - Top",
    AssetPlacement.BACK_BOTTOM: "Back - Bottom",
}


class ActivityType(StrEnum):
    """Kind of entry in the admin dashboard activity feed."""

    ORDER = "order"
    USER = "user"


class UserRole(StrEnum):
    """Role names used for admin access control."""

    ADMIN = "admin"
    USER = "user"
