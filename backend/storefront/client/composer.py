"""Order composer: the two-step customize → contact flow as an explicit state machine.

States:
    CUSTOMIZING         product type, brand, color, per-size quantities, assets
    REVIEWING_CONTACT   contact details and submission

Transitions:
    next()    CUSTOMIZING → REVIEWING_CONTACT (no field validation, see submit)
    back()    REVIEWING_CONTACT → CUSTOMIZING
    submit()  REVIEWING_CONTACT → CUSTOMIZING (fresh state) on success,
              stays in REVIEWING_CONTACT with `last_error` set on failure

Lookup failures never raise out of the composer; the affected list is left
empty and every size stays disabled.
"""

import re
from collections.abc import Awaitable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeVar

import structlog

from storefront.api.catalog.schemas import BrandResponse, ColorResponse, ProductTypeResponse, SizeResponse
from storefront.api.orders.schemas import OrderCreatedResponse
from storefront.client.api_client import StorefrontClient
from storefront.client.exceptions import (
    IncompleteOrder,
    InvalidTransition,
    LookupFailed,
    OrderSubmissionFailed,
    SizeNotEditable,
)
from storefront.models.enums import AssetPlacement
from storefront.services.catalog.sizes import sort_sizes
from storefront.services.orders.payload import (
    AssetUpload,
    ContactInformation,
    OrderDescriptor,
    SizeSelectionItem,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_NON_DIGITS = re.compile(r"\D")


class ComposerStep(StrEnum):
    CUSTOMIZING = "customizing"
    REVIEWING_CONTACT = "reviewing_contact"


@dataclass
class SizeEntry:
    """Quantity requested for one size."""

    size_id: str
    size: str
    quantity: int = 0


@dataclass(frozen=True)
class ReviewSummary:
    """What the contact step shows: selections with their display names resolved."""

    product_type: str
    brand: str
    color: str
    sizes: list[SizeEntry]
    assets: dict[AssetPlacement, str]  # placement -> filename
    total_items: int


@dataclass
class ComposerState:
    """All in-progress selections. Owned by one OrderComposer."""

    step: ComposerStep = ComposerStep.CUSTOMIZING
    product_type_id: str = ""
    brand_id: str = ""
    color_id: str = ""
    sizes: list[SizeEntry] = field(default_factory=list)
    assets: dict[AssetPlacement, AssetUpload | None] = field(
        default_factory=lambda: dict.fromkeys(AssetPlacement, None)
    )
    contact: ContactInformation | None = None
    last_error: str | None = None


def parse_quantity(raw: str | int) -> int:
    """Sanitize quantity input: keep digits only, anything unparseable is 0."""
    if isinstance(raw, int):
        return max(raw, 0)
    digits = _NON_DIGITS.sub("", raw)
    return int(digits) if digits else 0


class OrderComposer:
    """Holds the selections of one customer's order across both steps.

    Call `start()` once to load reference data before using the other methods.
    """

    def __init__(self, client: StorefrontClient) -> None:
        self.client = client
        self.state = ComposerState()

        # Reference data fetched from the API
        self.product_types: list[ProductTypeResponse] = []
        self.brands: list[BrandResponse] = []
        self.colors: list[ColorResponse] = []
        self.all_sizes: list[SizeResponse] = []
        self.available_size_ids: set[str] = set()

    @property
    def step(self) -> ComposerStep:
        return self.state.step

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self) -> None:
        """Load product types, colors and sizes, and enter CUSTOMIZING with empty selections."""
        self.product_types = await self._lookup(self.client.list_product_types(), "product_types")
        self.colors = await self._lookup(self.client.list_colors(), "colors")
        sizes = await self._lookup(self.client.list_sizes(), "sizes")
        self.all_sizes = sort_sizes(sizes, key=lambda size: size.value)
        self.reset()

    def reset(self) -> None:
        """Return to a fresh CUSTOMIZING state. Reference lists are kept."""
        self.state = ComposerState(
            sizes=[SizeEntry(size_id=size.id, size=size.value) for size in self.all_sizes],
        )
        self.brands = []
        self.available_size_ids = set()

    async def _lookup(self, request: Awaitable[list[T]], what: str) -> list[T]:
        try:
            return await request
        except LookupFailed as e:
            logger.warning("Lookup failed, showing empty list", lookup=what, error=str(e))
            return []

    # -------------------------------------------------------------------------
    # CUSTOMIZING
    # -------------------------------------------------------------------------

    def _require(self, step: ComposerStep) -> None:
        if self.state.step != step:
            raise InvalidTransition(f"Not allowed while {self.state.step.value}")

    async def select_product_type(self, product_type_id: str) -> None:
        """Choose a product type. Clears the brand and reloads brands and size availability."""
        self._require(ComposerStep.CUSTOMIZING)
        changed = product_type_id != self.state.product_type_id
        self.state.product_type_id = product_type_id
        if changed:
            self.state.brand_id = ""
        self.brands = (
            await self._lookup(self.client.list_brands(product_type_id), "brands") if product_type_id else []
        )
        await self._refresh_availability()

    async def select_brand(self, brand_id: str) -> None:
        """Choose a brand and reload size availability."""
        self._require(ComposerStep.CUSTOMIZING)
        self.state.brand_id = brand_id
        await self._refresh_availability()

    def select_color(self, color_id: str) -> None:
        self._require(ComposerStep.CUSTOMIZING)
        self.state.color_id = color_id

    async def _refresh_availability(self) -> None:
        """Recompute which sizes are editable. Unavailable sizes are forced to quantity 0."""
        if self.state.product_type_id and self.state.brand_id:
            sizes = await self._lookup(
                self.client.list_sizes_by_type(self.state.product_type_id, self.state.brand_id),
                "sizes_by_type",
            )
            known = {entry.size_id for entry in self.state.sizes}
            self.available_size_ids = {size.id for size in sizes} & known
        else:
            self.available_size_ids = set()

        for entry in self.state.sizes:
            if entry.size_id not in self.available_size_ids:
                entry.quantity = 0

    def is_size_editable(self, size_id: str) -> bool:
        return size_id in self.available_size_ids

    def set_quantity(self, size_id: str, raw: str | int) -> int:
        """Set the quantity of one size from raw input. Returns the stored quantity."""
        self._require(ComposerStep.CUSTOMIZING)
        if not self.is_size_editable(size_id):
            raise SizeNotEditable(f"Size {size_id} is not available for the current selection")
        entry = next((entry for entry in self.state.sizes if entry.size_id == size_id), None)
        if entry is None:
            raise SizeNotEditable(f"Size {size_id} is not in the size list")
        entry.quantity = parse_quantity(raw)
        return entry.quantity

    def attach_asset(
        self,
        placement: AssetPlacement,
        filename: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> None:
        """Put a file into a placement slot, replacing any previous file."""
        self._require(ComposerStep.CUSTOMIZING)
        self.state.assets[placement] = AssetUpload(
            placement=placement,
            filename=filename,
            content_type=content_type,
            data=data,
        )

    def remove_asset(self, placement: AssetPlacement) -> None:
        """Empty a placement slot. The same file can be attached again afterwards."""
        self._require(ComposerStep.CUSTOMIZING)
        self.state.assets[placement] = None

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def next(self) -> ReviewSummary:
        """Advance to the contact step and return the review summary."""
        self._require(ComposerStep.CUSTOMIZING)
        self.state.step = ComposerStep.REVIEWING_CONTACT
        return self.summary()

    def back(self) -> None:
        self._require(ComposerStep.REVIEWING_CONTACT)
        self.state.step = ComposerStep.CUSTOMIZING

    def summary(self) -> ReviewSummary:
        """Current selections with display names looked up from the fetched lists."""
        product_type = next((t.name for t in self.product_types if t.id == self.state.product_type_id), "")
        brand = next((b.name for b in self.brands if b.id == self.state.brand_id), "")
        color = next((c.value for c in self.colors if c.id == self.state.color_id), "")
        sizes = [SizeEntry(e.size_id, e.size, e.quantity) for e in self.state.sizes if e.quantity > 0]
        return ReviewSummary(
            product_type=product_type,
            brand=brand,
            color=color,
            sizes=sizes,
            assets={p: a.filename for p, a in self.state.assets.items() if a is not None},
            total_items=sum(entry.quantity for entry in sizes),
        )

    # -------------------------------------------------------------------------
    # REVIEWING_CONTACT
    # -------------------------------------------------------------------------

    def set_contact(self, *, full_name: str, email: str, contact_number: str = "", address: str = "") -> None:
        self._require(ComposerStep.REVIEWING_CONTACT)
        self.state.contact = ContactInformation(
            full_name=full_name,
            email=email,
            contact_number=contact_number,
            address=address,
        )

    def build_descriptor(self) -> OrderDescriptor:
        """Assemble the submission payload.

        Raises:
            IncompleteOrder: product type, brand, color or contact details missing
        """
        state = self.state
        missing = [
            name
            for name, value in (
                ("product type", state.product_type_id),
                ("brand", state.brand_id),
                ("color", state.color_id),
                ("contact information", state.contact),
            )
            if not value
        ]
        if missing:
            raise IncompleteOrder(f"Missing {', '.join(missing)}")
        assert state.contact is not None

        summary = self.summary()
        return OrderDescriptor(
            product_type_id=state.product_type_id,
            brand_id=state.brand_id,
            color_id=state.color_id,
            product_type=summary.product_type,
            brand=summary.brand,
            color=summary.color,
            size_selection=[
                SizeSelectionItem(size=entry.size, size_id=entry.size_id, quantity=entry.quantity)
                for entry in state.sizes
            ],
            contact_information=state.contact,
        )

    async def submit(self) -> OrderCreatedResponse:
        """Send the order. On success the composer starts over; on failure all input is kept for a retry."""
        self._require(ComposerStep.REVIEWING_CONTACT)
        try:
            descriptor = self.build_descriptor()
        except IncompleteOrder as e:
            self.state.last_error = str(e)
            raise
        assets = [asset for asset in self.state.assets.values() if asset is not None]

        try:
            result = await self.client.submit_order(descriptor, assets)
        except OrderSubmissionFailed as e:
            self.state.last_error = "Failed to submit order. Please try again."
            logger.warning("Order submission failed, keeping input for retry", error=str(e))
            raise

        logger.info("Order submitted", order_id=result.order_id)
        self.reset()
        return result
