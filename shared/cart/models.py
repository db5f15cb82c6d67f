"""Cart data models"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .money import ZERO


@dataclass(frozen=True)
class CartLineItemInput:
    """Catalog item the caller wants to put in the cart"""
    id: str
    title: str
    unit_price: Decimal
    seller_id: str
    quantity: int = 1
    image_ref: Optional[str] = None
    weight_oz: Optional[float] = None


@dataclass
class CartLineItem:
    """One distinct product entry in the cart, keyed by catalog id"""
    id: str
    title: str
    unit_price: Decimal
    quantity: int
    seller_id: str
    image_ref: Optional[str] = None
    weight_oz: Optional[float] = None

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class ShippingMethod:
    """Carrier/service option with the flat cost chosen for this cart"""
    id: str
    display_name: str
    provider: str
    base_cost: Decimal = ZERO


@dataclass(frozen=True)
class CartSnapshot:
    """Read-only view of the cart with derived totals populated"""
    items: tuple[CartLineItem, ...]
    selected_shipping_method: Optional[ShippingMethod]
    tax_rate: Decimal
    subtotal: Decimal
    shipping_cost: Decimal
    tax: Decimal
    total: Decimal
    item_count: int

    @property
    def is_empty(self) -> bool:
        return not self.items
