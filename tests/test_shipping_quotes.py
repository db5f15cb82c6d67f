"""Seller-aware shipping quote tests"""

from decimal import Decimal

import pytest

from cart import CartLineItem
from cart.shipping import (
    DEFAULT_SELLER_FEE,
    SellerShippingPolicy,
    carrier_cost,
    estimated_delivery_days,
    group_by_seller,
    parcel_weight,
    quote_shipping,
)


def line(item_id, seller_id, quantity=1, weight_oz=None, unit_price="10.00"):
    return CartLineItem(
        id=item_id,
        title=item_id,
        unit_price=Decimal(unit_price),
        quantity=quantity,
        seller_id=seller_id,
        weight_oz=weight_oz,
    )


CALCULATED = SellerShippingPolicy(uses_calculated_shipping=True)


class TestCarrierRates:
    """Weight-tiered carrier tables"""

    @pytest.mark.parametrize(
        "provider,weight,expected",
        [
            ("USPS", 16, "4.50"),
            ("USPS", 17, "5.50"),
            ("USPS", 32, "5.50"),
            ("USPS", 48, "8.75"),
            ("UPS", 10, "7.50"),
            ("UPS", 30, "9.50"),
            ("UPS", 40, "12.50"),
            ("UPS", 80, "19.25"),
            ("FedEx", 1, "8.50"),
            ("FedEx", 20, "10.50"),
            ("FedEx", 64, "19.50"),
        ],
    )
    def test_tiers(self, provider, weight, expected):
        assert carrier_cost(provider, weight) == Decimal(expected)

    def test_unknown_carrier_costs_nothing(self):
        assert carrier_cost("DHL", 10) == 0

    def test_delivery_estimates(self):
        assert estimated_delivery_days("USPS") == 3
        assert estimated_delivery_days("UPS") == 2
        assert estimated_delivery_days("FedEx") == 1
        assert estimated_delivery_days("DHL") == 1


class TestParcels:
    def test_weight_defaults_to_four_ounces(self):
        items = [line("a", "s1", quantity=3), line("b", "s1", quantity=2, weight_oz=10)]
        assert parcel_weight(items) == 3 * 4 + 2 * 10

    def test_group_by_seller_keeps_first_seen_order(self):
        items = [line("a", "s2"), line("b", "s1"), line("c", "s2")]
        groups = group_by_seller(items)
        assert list(groups) == ["s2", "s1"]
        assert [i.id for i in groups["s2"]] == ["a", "c"]


class TestQuoteShipping:
    """Per-seller policy precedence and totals"""

    def quote(self, items, policies, provider="USPS"):
        return quote_shipping(
            items,
            shipping_method_id="ship-1",
            provider=provider,
            service="Priority Mail",
            policies=policies,
        )

    def test_free_shipping_wins(self):
        policy = SellerShippingPolicy(
            offers_free_shipping=True,
            standard_shipping_fee=Decimal("9.99"),
            uses_calculated_shipping=True,
        )
        quote = self.quote([line("a", "s1")], {"s1": policy})
        assert quote.cost == 0
        assert quote.breakdown[0].free_shipping is True

    def test_standard_fee_before_calculated(self):
        policy = SellerShippingPolicy(
            standard_shipping_fee=Decimal("3.99"),
            uses_calculated_shipping=True,
        )
        quote = self.quote([line("a", "s1", quantity=10)], {"s1": policy})
        assert quote.cost == Decimal("3.99")

    def test_calculated_uses_total_seller_weight(self):
        items = [line("a", "s1", quantity=3, weight_oz=14)]
        quote = self.quote(items, {"s1": CALCULATED})
        # 42 oz: more than two pounds
        assert quote.cost == Decimal("7.50")

    def test_seller_without_policy_pays_default_fee(self):
        quote = self.quote([line("a", "unknown")], {})
        assert quote.cost == DEFAULT_SELLER_FEE == Decimal("5.00")

    def test_costs_add_up_across_sellers(self):
        items = [
            line("a", "s1", weight_oz=14),
            line("b", "s2"),
            line("c", "s3"),
            line("d", "s1", weight_oz=1),
        ]
        policies = {
            "s1": CALCULATED,
            "s2": SellerShippingPolicy(offers_free_shipping=True),
        }
        quote = self.quote(items, policies, provider="UPS")

        assert quote.cost == Decimal("7.50") + Decimal("0") + Decimal("5.00")
        assert [(c.seller_id, c.item_count) for c in quote.breakdown] == [
            ("s1", 2),
            ("s2", 1),
            ("s3", 1),
        ]
        assert quote.estimated_delivery_days == 2

    def test_empty_cart_quotes_zero(self):
        quote = self.quote([], {})
        assert quote.cost == 0
        assert quote.breakdown == ()

    def test_as_method_carries_quoted_cost(self):
        quote = self.quote([line("a", "x")], {})
        method = quote.as_method("USPS Priority Mail")

        assert method.id == "ship-1"
        assert method.display_name == "USPS Priority Mail"
        assert method.provider == "USPS"
        assert method.base_cost == Decimal("5.00")
        assert quote.as_method().display_name == "Priority Mail"
