"""
Seller-aware shipping quotes.

Each seller in the cart ships its own items. A seller's policy decides
between free shipping, a flat standard fee, or a carrier rate computed from
total parcel weight. The resulting cost is handed to the cart engine as a
ShippingMethod; the engine never computes carrier rates itself.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Optional

from .models import CartLineItem, ShippingMethod
from .money import ZERO

DEFAULT_ITEM_WEIGHT_OZ = 4
DEFAULT_SELLER_FEE = Decimal("5.00")
OUNCES_PER_POUND = 16


@dataclass(frozen=True)
class SellerShippingPolicy:
    """How a seller charges for shipping"""
    offers_free_shipping: bool = False
    standard_shipping_fee: Decimal = ZERO
    uses_calculated_shipping: bool = False
    shipping_policy: str = ""


@dataclass(frozen=True)
class CarrierRate:
    """Weight-tiered carrier pricing"""
    up_to_one_pound: Decimal
    up_to_two_pounds: Decimal
    heavy_base: Decimal
    per_extra_pound: Decimal
    estimated_delivery_days: int

    def cost_for(self, weight_oz: float) -> Decimal:
        if weight_oz <= OUNCES_PER_POUND:
            return self.up_to_one_pound
        if weight_oz <= 2 * OUNCES_PER_POUND:
            return self.up_to_two_pounds
        extra_pounds = int(weight_oz // OUNCES_PER_POUND) - 2
        return self.heavy_base + extra_pounds * self.per_extra_pound


CARRIER_RATES: dict[str, CarrierRate] = {
    "USPS": CarrierRate(Decimal("4.50"), Decimal("5.50"), Decimal("7.50"), Decimal("1.25"), 3),
    "UPS": CarrierRate(Decimal("7.50"), Decimal("9.50"), Decimal("12.50"), Decimal("2.25"), 2),
    "FedEx": CarrierRate(Decimal("8.50"), Decimal("10.50"), Decimal("14.50"), Decimal("2.50"), 1),
}


@dataclass(frozen=True)
class SellerShippingCharge:
    """Shipping charged by one seller"""
    seller_id: str
    item_count: int
    free_shipping: bool
    shipping_cost: Decimal


@dataclass(frozen=True)
class ShippingQuote:
    """Total shipping for a cart under one shipping method"""
    shipping_method_id: str
    provider: str
    service: str
    cost: Decimal
    estimated_delivery_days: int
    breakdown: tuple[SellerShippingCharge, ...] = field(default_factory=tuple)

    def as_method(self, display_name: Optional[str] = None) -> ShippingMethod:
        return ShippingMethod(
            id=self.shipping_method_id,
            display_name=display_name or self.service,
            provider=self.provider,
            base_cost=self.cost,
        )


def parcel_weight(items: Iterable[CartLineItem]) -> float:
    """Total weight in ounces; items without a weight count as 4 oz each"""
    return sum(
        (item.weight_oz if item.weight_oz is not None else DEFAULT_ITEM_WEIGHT_OZ) * item.quantity
        for item in items
    )


def carrier_cost(provider: str, weight_oz: float) -> Decimal:
    """Carrier rate for a parcel. Unknown carriers cost nothing"""
    rate = CARRIER_RATES.get(provider)
    return rate.cost_for(weight_oz) if rate else ZERO


def estimated_delivery_days(provider: str) -> int:
    rate = CARRIER_RATES.get(provider)
    return rate.estimated_delivery_days if rate else 1


def seller_shipping_cost(
    items: list[CartLineItem],
    provider: str,
    policy: SellerShippingPolicy,
) -> Decimal:
    if policy.offers_free_shipping:
        return ZERO
    if policy.standard_shipping_fee > 0:
        return policy.standard_shipping_fee
    if policy.uses_calculated_shipping:
        return carrier_cost(provider, parcel_weight(items))
    return DEFAULT_SELLER_FEE


def group_by_seller(items: Iterable[CartLineItem]) -> dict[str, list[CartLineItem]]:
    groups: dict[str, list[CartLineItem]] = {}
    for item in items:
        groups.setdefault(item.seller_id, []).append(item)
    return groups


def quote_shipping(
    items: Iterable[CartLineItem],
    shipping_method_id: str,
    provider: str,
    service: str,
    policies: dict[str, SellerShippingPolicy],
) -> ShippingQuote:
    """
    Quote shipping for every seller in the cart.

    Sellers without a stored policy get the default policy, which charges
    the flat default fee.
    """
    breakdown = []
    total = ZERO

    for seller_id, seller_items in group_by_seller(items).items():
        policy = policies.get(seller_id, SellerShippingPolicy())
        cost = seller_shipping_cost(seller_items, provider, policy)
        total += cost
        breakdown.append(
            SellerShippingCharge(
                seller_id=seller_id,
                item_count=len(seller_items),
                free_shipping=policy.offers_free_shipping,
                shipping_cost=cost,
            )
        )

    return ShippingQuote(
        shipping_method_id=shipping_method_id,
        provider=provider,
        service=service,
        cost=total,
        estimated_delivery_days=estimated_delivery_days(provider),
        breakdown=tuple(breakdown),
    )
