"""Order descriptor exchanged between the storefront client and the orders endpoint.

The descriptor travels as the JSON `orderData` field of a multipart request,
next to up to four file fields named after their AssetPlacement.
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from storefront.models.enums import AssetPlacement
from storefront.services.orders.exceptions import InvalidOrderPayload


class CamelModel(BaseModel):
    """Base model using camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactInformation(CamelModel):
    full_name: str
    email: str
    contact_number: str = ""
    address: str = ""


class SizeSelectionItem(CamelModel):
    """Requested quantity for one size. `size` is the size value, `size_id` its id when known."""

    size: str
    size_id: str | None = None
    quantity: int = Field(default=0, ge=0)


class OrderDescriptor(CamelModel):
    """Everything needed to persist an order except the binary assets."""

    # Ids for persistence
    product_type_id: str
    brand_id: str
    color_id: str
    # Display names for the notification email
    product_type: str = ""
    brand: str = ""
    color: str = ""
    size_selection: list[SizeSelectionItem] = Field(default_factory=list)
    contact_information: ContactInformation

    @property
    def ordered_sizes(self) -> list[SizeSelectionItem]:
        """Size lines with a positive quantity."""
        return [item for item in self.size_selection if item.quantity > 0]

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.size_selection)

    @classmethod
    def from_json(cls, raw: str | bytes | None) -> "OrderDescriptor":
        """Parse the `orderData` form field."""
        if not raw:
            raise InvalidOrderPayload("Missing orderData")
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise InvalidOrderPayload(str(e)) from e


@dataclass(frozen=True)
class AssetUpload:
    """Binary design file for one placement."""

    placement: AssetPlacement
    filename: str
    content_type: str
    data: bytes

    @property
    def is_empty(self) -> bool:
        return len(self.data) == 0
