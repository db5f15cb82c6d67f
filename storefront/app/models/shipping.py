"""Shipping models for the storefront"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from cart.money import round2
from cart.shipping import SellerShippingPolicy, ShippingQuote


class ShippingMethodInfo(BaseModel):
    """Carrier service offered at checkout"""
    id: str
    name: str
    display_name: str
    provider: str
    service_code: str
    description: str = ""
    is_active: bool = True


class ShippingPolicy(BaseModel):
    """Seller shipping preferences"""
    offers_free_shipping: bool = False
    standard_shipping_fee: Decimal = Field(default=Decimal("0"), ge=0)
    shipping_policy: str = ""
    uses_calculated_shipping: bool = False

    def to_policy(self) -> SellerShippingPolicy:
        return SellerShippingPolicy(
            offers_free_shipping=self.offers_free_shipping,
            standard_shipping_fee=self.standard_shipping_fee,
            uses_calculated_shipping=self.uses_calculated_shipping,
            shipping_policy=self.shipping_policy,
        )


class ShippingCalculateRequest(BaseModel):
    """Request to quote shipping for a cart"""
    cart_id: str
    shipping_method_id: Optional[str] = None


class SellerShippingBreakdown(BaseModel):
    seller_id: str
    item_count: int
    free_shipping: bool
    shipping_cost: Decimal


class ShippingCalculateResponse(BaseModel):
    """Quoted shipping cost with per-seller breakdown"""
    shipping_method_id: str
    provider: str
    service: str
    cost: Decimal
    estimated_delivery_days: int
    breakdown: list[SellerShippingBreakdown]

    @classmethod
    def from_quote(cls, quote: ShippingQuote) -> "ShippingCalculateResponse":
        return cls(
            shipping_method_id=quote.shipping_method_id,
            provider=quote.provider,
            service=quote.service,
            cost=round2(quote.cost),
            estimated_delivery_days=quote.estimated_delivery_days,
            breakdown=[
                SellerShippingBreakdown(
                    seller_id=charge.seller_id,
                    item_count=charge.item_count,
                    free_shipping=charge.free_shipping,
                    shipping_cost=round2(charge.shipping_cost),
                )
                for charge in quote.breakdown
            ],
        )
