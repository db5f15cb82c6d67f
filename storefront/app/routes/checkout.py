"""Checkout API routes for the storefront"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from cart import CartEngine
from cart.money import to_cents
from cart.tax import tax_rate_for_region

from ..core.config import Settings
from ..database import (
    CartDatabase,
    OrderDatabase,
    PaymentGateway,
    ProductDatabase,
    ShippingDatabase,
)
from ..dependencies import (
    get_cart_db,
    get_order_db,
    get_payment_gateway,
    get_product_db,
    get_settings,
    get_shipping_db,
)
from ..models.checkout import (
    PaymentIntent,
    CheckoutRequest,
    CheckoutResponse,
    Order,
    PaymentIntentItem,
    PaymentIntentRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


@router.post("", response_model=CheckoutResponse)
async def checkout(
    request: CheckoutRequest,
    cart_db: CartDatabase = Depends(get_cart_db),
    product_db: ProductDatabase = Depends(get_product_db),
    shipping_db: ShippingDatabase = Depends(get_shipping_db),
    order_db: OrderDatabase = Depends(get_order_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    settings: Settings = Depends(get_settings),
):
    """
    Process checkout.

    Prices the cart for the shipping address, charges the buyer through
    the payment gateway and, once the payment succeeds, records the order
    and empties the cart. A declined payment leaves the cart as it was.
    """
    engine = cart_db.get_cart(request.cart_id)
    if engine is None:
        raise HTTPException(status_code=404, detail="Cart not found")

    if len(engine) == 0:
        raise HTTPException(status_code=400, detail="Cart is empty")

    selected = engine.selected_shipping_method
    if selected is None:
        raise HTTPException(status_code=400, detail="Please select a shipping method")

    # The selection may have been withdrawn since it was quoted
    if shipping_db.get_method(selected.id) is None:
        logger.warning(f"Checkout of cart {request.cart_id} with stale shipping method {selected.id}")
        raise HTTPException(
            status_code=409,
            detail="Selected shipping method is no longer available",
        )

    # Price a detached copy so a refused or declined checkout leaves the cart as it was
    priced = CartEngine.from_dict(engine.to_dict(), key=engine.key)
    shipping_db.refresh_selection(priced)

    rate = tax_rate_for_region(request.shipping_address.state)
    if rate is not None and rate != priced.tax_rate:
        priced.set_tax_rate(rate)

    for item in priced.items:
        product = product_db.get_product(item.id)
        if not product or product.stock_quantity < item.quantity:
            raise HTTPException(
                status_code=400,
                detail=f"Insufficient stock for {item.title}",
            )

    snapshot = priced.get_snapshot()
    intent_request = PaymentIntentRequest(
        amount=to_cents(snapshot.total),
        currency=settings.currency,
        items=[
            PaymentIntentItem(id=item.id, quantity=item.quantity, price=item.unit_price)
            for item in snapshot.items
        ],
        tax=snapshot.tax,
        shipping_cost=snapshot.shipping_cost,
        shipping_method_id=snapshot.selected_shipping_method.id,
        user_id=request.user_id,
    )

    intent = gateway.create_and_confirm(intent_request, request.payment_method_id)
    if not intent.succeeded:
        return CheckoutResponse(
            success=False,
            payment_id=intent.id,
            error_message=intent.error_message or "Payment failed",
        )

    for item in snapshot.items:
        product_db.update_stock(item.id, -item.quantity)

    order = order_db.create_order(
        snapshot=snapshot,
        shipping_address=request.shipping_address,
        payment_id=intent.id,
        currency=settings.currency,
        user_id=request.user_id,
    )

    # The paid destination rate carries over to the emptied cart
    if priced.tax_rate != engine.tax_rate:
        engine.set_tax_rate(priced.tax_rate)
    engine.clear()

    logger.info(
        f"Order {order.order_id} created: {order.total} {order.currency} - "
        f"{'user ' + request.user_id if request.user_id else 'guest'} checkout"
    )

    return CheckoutResponse(
        success=True,
        order=order,
        payment_id=intent.id,
    )


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    order_db: OrderDatabase = Depends(get_order_db),
):
    """Get order details"""
    order = order_db.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.get("/orders", response_model=list[Order])
async def list_orders(
    user_id: Optional[str] = None,
    limit: int = 50,
    order_db: OrderDatabase = Depends(get_order_db),
):
    """List recent orders"""
    return order_db.list_orders(user_id=user_id, limit=limit)


@router.get("/payments/{intent_id}", response_model=PaymentIntent)
async def get_payment(
    intent_id: str,
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """Get a payment intent, including declined ones"""
    intent = gateway.get_intent(intent_id)
    if not intent:
        raise HTTPException(status_code=404, detail="Payment not found")
    return intent
