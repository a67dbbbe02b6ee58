"""Test data builders."""

from dataclasses import dataclass, field
from typing import Any

from storefront.models.types import S3ObjectRefData
from storefront.scripts.seed import BrandSeed, CatalogSeed

CATALOG = CatalogSeed(
    product_types=["T-Shirt", "Hoodie", "Mug"],
    colors=["White", "Black", "Navy"],
    # Deliberately not in garment order
    sizes=["Large", "3XL", "Small", "Extra Large", "Medium", "2XL", "Extra Small"],
    brands=[
        BrandSeed(name="Gildan", types={"T-Shirt": ["Small", "Medium", "Large", "2XL"], "Hoodie": ["Medium", "Large"]}),
        BrandSeed(name="Bella", types={"T-Shirt": ["Extra Small", "Small"]}),
        BrandSeed(name="Anvil", types={}),
    ],
)


@dataclass
class CatalogIds:
    """Ids of the seeded reference rows, keyed by name/value."""

    types: dict[str, str]
    brands: dict[str, str]
    colors: dict[str, str]
    sizes: dict[str, str]


def order_data(catalog: CatalogIds, **overrides: Any) -> dict[str, Any]:
    """A valid order descriptor in wire format."""
    data: dict[str, Any] = {
        "productTypeId": catalog.types["T-Shirt"],
        "brandId": catalog.brands["Gildan"],
        "colorId": catalog.colors["Black"],
        "productType": "T-Shirt",
        "brand": "Gildan",
        "color": "Black",
        "sizeSelection": [
            {"size": "Small", "quantity": 0},
            {"size": "Medium", "quantity": 3},
        ],
        "contactInformation": {
            "fullName": "Jordan Reyes",
            "email": "jordan@example.com",
            "contactNumber": "+1 555 0100",
            "address": "12 Harbor Road",
        },
    }
    data.update(overrides)
    return data


@dataclass
class FakeStorage:
    """In-memory stand-in for S3StorageService."""

    fail_for: set[str] = field(default_factory=set)
    uploads: dict[str, bytes] = field(default_factory=dict)

    async def upload(
        self,
        upload_to: str,
        data: bytes,
        content_type: str,
        original_filename: str | None = None,
    ) -> S3ObjectRefData:
        if original_filename in self.fail_for:
            raise ConnectionError(f"upload of {original_filename} refused")
        self.uploads[upload_to] = data
        return S3ObjectRefData(
            key=upload_to,
            bucket="product-images",
            content_type=content_type,
            size=len(data),
            original_filename=original_filename,
        )

    def get_public_url(self, file_ref: S3ObjectRefData) -> str:
        return f"http://cdn.test/{file_ref.key}"


@dataclass
class FakeNotifier:
    """Records notification calls instead of sending mail."""

    calls: list[dict[str, Any]] = field(default_factory=list)

    async def send_order_notification(self, descriptor: Any, **kwargs: Any) -> bool:
        self.calls.append({"descriptor": descriptor, **kwargs})
        return True
