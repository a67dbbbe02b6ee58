"""Apparel size ordering.

Sizes are displayed in garment order (Extra Small .. 3XL), not alphabetically.
"""

from collections.abc import Callable, Iterable
from typing import Final, TypeVar

T = TypeVar("T")

SIZE_ORDER: Final[tuple[str, ...]] = (
    "Extra Small",
    "Small",
    "Medium",
    "Large",
    "Extra Large",
    "2XL",
    "3XL",
)

_ALIASES: Final[dict[str, str]] = {
    "xs": "Extra Small",
    "s": "Small",
    "m": "Medium",
    "l": "Large",
    "xl": "Extra Large",
    "xxl": "2XL",
    "xxxl": "3XL",
}

_RANK: Final[dict[str, int]] = {value.lower(): index for index, value in enumerate(SIZE_ORDER)}


def canonical_size(value: str) -> str:
    """Case-insensitive comparison key for a size value, with abbreviations expanded (" m " and "Medium" match)."""
    key = value.strip().lower()
    return _ALIASES.get(key, key).lower()


def size_rank(value: str) -> int:
    """Position of a size value in garment order. Unknown values rank after all known ones."""
    return _RANK.get(canonical_size(value), len(SIZE_ORDER))


def sort_sizes(items: Iterable[T], key: Callable[[T], str]) -> list[T]:
    """Sort items by garment size order.

    Stable: unknown sizes keep their relative input order after the known ones.
    """
    return sorted(items, key=lambda item: size_rank(key(item)))
