"""Order storage for the storefront"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from cart import CartSnapshot
from cart.money import round2

from ..models.checkout import GuestInfo, Order, OrderItem, OrderStatus, ShippingAddress


class OrderDatabase:
    """In-memory order storage"""

    def __init__(self):
        self.orders: dict[str, Order] = {}

    def create_order(
        self,
        snapshot: CartSnapshot,
        shipping_address: ShippingAddress,
        payment_id: str,
        currency: str,
        user_id: Optional[str] = None,
    ) -> Order:
        """Create an order from a priced cart snapshot"""
        now = datetime.now(timezone.utc)
        method = snapshot.selected_shipping_method

        order_items = [
            OrderItem(
                product_id=item.id,
                title=item.title,
                seller_id=item.seller_id,
                quantity=item.quantity,
                unit_price=round2(item.unit_price),
                total_price=round2(item.line_total),
            )
            for item in snapshot.items
        ]

        guest_info = None
        if user_id is None:
            guest_info = GuestInfo(
                name=shipping_address.name,
                email=shipping_address.email,
                phone=shipping_address.phone,
            )

        order = Order(
            order_id=f"ORD-{uuid.uuid4().hex[:8].upper()}",
            status=OrderStatus.COMPLETED,
            user_id=user_id,
            guest_info=guest_info,
            items=order_items,
            subtotal=round2(snapshot.subtotal),
            tax_rate=snapshot.tax_rate,
            tax=round2(snapshot.tax),
            shipping_method_id=method.id if method else "",
            shipping_cost=round2(snapshot.shipping_cost),
            total=round2(snapshot.total),
            currency=currency,
            shipping_address=shipping_address,
            payment_id=payment_id,
            created_at=now,
            updated_at=now,
        )

        self.orders[order.order_id] = order
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        """Get an order by ID"""
        return self.orders.get(order_id)

    def list_orders(self, user_id: Optional[str] = None, limit: int = 50) -> list[Order]:
        """List recent orders, optionally for one buyer"""
        orders = list(self.orders.values())
        if user_id is not None:
            orders = [o for o in orders if o.user_id == user_id]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders[:limit]
