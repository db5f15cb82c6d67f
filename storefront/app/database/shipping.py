"""Shipping methods and seller shipping policies"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from cart import CartEngine, CartLineItem
from cart.shipping import ShippingQuote, quote_shipping

from ..models.shipping import ShippingMethodInfo, ShippingPolicy

logger = logging.getLogger(__name__)

SHIPPING_METHODS: list[ShippingMethodInfo] = [
    ShippingMethodInfo(
        id="ship-usps-priority",
        name="Priority Mail",
        display_name="USPS Priority Mail",
        provider="USPS",
        service_code="PRIORITY",
        description="1-3 business days",
    ),
    ShippingMethodInfo(
        id="ship-ups-ground",
        name="Ground",
        display_name="UPS Ground",
        provider="UPS",
        service_code="03",
        description="1-5 business days",
    ),
    ShippingMethodInfo(
        id="ship-fedex-overnight",
        name="Standard Overnight",
        display_name="FedEx Standard Overnight",
        provider="FedEx",
        service_code="STANDARD_OVERNIGHT",
        description="Next business day by 8pm",
    ),
]

SELLER_POLICIES: dict[str, ShippingPolicy] = {
    "seller-001": ShippingPolicy(uses_calculated_shipping=True),
    "seller-002": ShippingPolicy(
        offers_free_shipping=True,
        shipping_policy="Free shipping on all prints and originals.",
    ),
    "seller-003": ShippingPolicy(standard_shipping_fee=Decimal("3.99")),
}


class ShippingDatabase:
    """In-memory shipping methods and seller policies"""

    def __init__(
        self,
        methods: Optional[list[ShippingMethodInfo]] = None,
        policies: Optional[dict[str, ShippingPolicy]] = None,
    ):
        self.methods = [m.model_copy() for m in (SHIPPING_METHODS if methods is None else methods)]
        source = SELLER_POLICIES if policies is None else policies
        self.policies = {sid: p.model_copy() for sid, p in source.items()}

    def list_methods(self) -> list[ShippingMethodInfo]:
        """Active methods ordered by provider, then display name"""
        active = [m for m in self.methods if m.is_active]
        return sorted(active, key=lambda m: (m.provider, m.display_name))

    def get_method(self, method_id: str) -> Optional[ShippingMethodInfo]:
        """Get an active shipping method by ID"""
        return next((m for m in self.methods if m.id == method_id and m.is_active), None)

    def default_method(self) -> Optional[ShippingMethodInfo]:
        methods = self.list_methods()
        return methods[0] if methods else None

    def deactivate_method(self, method_id: str) -> bool:
        """Stop offering a method; carts holding it become stale"""
        method = self.get_method(method_id)
        if not method:
            return False
        method.is_active = False
        logger.info(f"Shipping method {method_id} deactivated")
        return True

    def get_policy(self, seller_id: str) -> Optional[ShippingPolicy]:
        return self.policies.get(seller_id)

    def update_policy(self, seller_id: str, policy: ShippingPolicy) -> ShippingPolicy:
        self.policies[seller_id] = policy
        logger.info(f"Updated shipping policy for seller {seller_id}")
        return policy

    def quote(self, items: Iterable[CartLineItem], method: ShippingMethodInfo) -> ShippingQuote:
        """Quote shipping for cart items under a method"""
        return quote_shipping(
            items,
            shipping_method_id=method.id,
            provider=method.provider,
            service=method.name,
            policies={sid: p.to_policy() for sid, p in self.policies.items()},
        )

    def select(self, engine: CartEngine, method: ShippingMethodInfo) -> ShippingQuote:
        """Quote a method for the cart's items and make it the cart's selection"""
        quote = self.quote(engine.items, method)
        engine.set_shipping_method(quote.as_method(method.display_name))
        return quote

    def refresh_selection(self, engine: CartEngine) -> Optional[ShippingQuote]:
        """
        Re-quote the cart's selected method after its items changed.

        A selection that is no longer offered is left untouched; checkout
        reports it as stale.
        """
        selected = engine.selected_shipping_method
        if selected is None:
            return None

        method = self.get_method(selected.id)
        if method is None:
            logger.warning(f"Cart {engine.key}: selected shipping method {selected.id} is no longer offered")
            return None

        quote = self.quote(engine.items, method)
        if quote.cost != selected.base_cost:
            engine.set_shipping_method(quote.as_method(method.display_name))
        return quote
