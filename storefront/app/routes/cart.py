"""Cart API routes for the storefront"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from cart import CartEngine, CartLineItemInput, InvalidCartInput
from cart.tax import tax_rate_for_region

from ..core.config import Settings
from ..database import CartDatabase, ProductDatabase, ShippingDatabase
from ..dependencies import get_cart_db, get_product_db, get_settings, get_shipping_db
from ..models.cart import (
    AddToCartRequest,
    Cart,
    CartResponse,
    DestinationRequest,
    SelectShippingRequest,
    TaxRateRequest,
    UpdateCartItemRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def _get_engine(cart_db: CartDatabase, cart_id: str) -> CartEngine:
    engine = cart_db.get_cart(cart_id)
    if engine is None:
        raise HTTPException(status_code=404, detail="Cart not found")
    return engine


def _response(
    cart_id: str,
    engine: CartEngine,
    settings: Settings,
    message: Optional[str] = None,
) -> CartResponse:
    return CartResponse(
        cart=Cart.from_snapshot(cart_id, engine.get_snapshot(), settings.currency),
        message=message,
    )


@router.post("", response_model=CartResponse)
async def create_cart(
    cart_db: CartDatabase = Depends(get_cart_db),
    shipping_db: ShippingDatabase = Depends(get_shipping_db),
    settings: Settings = Depends(get_settings),
):
    """Create a new shopping cart"""
    cart_id, engine = cart_db.create_cart()

    if settings.auto_select_shipping:
        method = shipping_db.default_method()
        if method:
            shipping_db.select(engine, method)

    return _response(cart_id, engine, settings, "Cart created")


@router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(
    cart_id: str,
    cart_db: CartDatabase = Depends(get_cart_db),
    settings: Settings = Depends(get_settings),
):
    """Get cart by ID"""
    engine = _get_engine(cart_db, cart_id)
    return _response(cart_id, engine, settings)


@router.post("/{cart_id}/items", response_model=CartResponse)
async def add_to_cart(
    cart_id: str,
    request: AddToCartRequest,
    cart_db: CartDatabase = Depends(get_cart_db),
    product_db: ProductDatabase = Depends(get_product_db),
    shipping_db: ShippingDatabase = Depends(get_shipping_db),
    settings: Settings = Depends(get_settings),
):
    """Add a listing to the cart"""
    engine = _get_engine(cart_db, cart_id)

    product = product_db.get_product(request.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    existing = engine.get_item(product.id)
    wanted = request.quantity + (existing.quantity if existing else 0)
    if not product.in_stock or product.stock_quantity < wanted:
        raise HTTPException(
            status_code=400,
            detail=f"Insufficient stock. Available: {product.stock_quantity}",
        )

    try:
        engine.add_item(
            CartLineItemInput(
                id=product.id,
                title=product.title,
                unit_price=product.price,
                seller_id=product.seller_id,
                quantity=request.quantity,
                image_ref=product.image_url,
                weight_oz=product.weight_oz,
            )
        )
    except InvalidCartInput as e:
        logger.warning(f"Rejected add to cart {cart_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    shipping_db.refresh_selection(engine)
    return _response(
        cart_id,
        engine,
        settings,
        f"Added {request.quantity}x {product.title} to cart",
    )


@router.put("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    cart_id: str,
    product_id: str,
    request: UpdateCartItemRequest,
    cart_db: CartDatabase = Depends(get_cart_db),
    product_db: ProductDatabase = Depends(get_product_db),
    shipping_db: ShippingDatabase = Depends(get_shipping_db),
    settings: Settings = Depends(get_settings),
):
    """Set item quantity in cart; zero or less removes the item"""
    engine = _get_engine(cart_db, cart_id)

    if product_id not in engine:
        return _response(cart_id, engine, settings, "Item not in cart")

    product = product_db.get_product(product_id)
    if product and request.quantity > product.stock_quantity:
        raise HTTPException(
            status_code=400,
            detail=f"Insufficient stock. Available: {product.stock_quantity}",
        )

    try:
        engine.update_quantity(product_id, request.quantity)
    except InvalidCartInput as e:
        raise HTTPException(status_code=400, detail=str(e))

    shipping_db.refresh_selection(engine)
    message = "Item removed" if request.quantity <= 0 else "Cart updated"
    return _response(cart_id, engine, settings, message)


@router.delete("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    cart_id: str,
    product_id: str,
    cart_db: CartDatabase = Depends(get_cart_db),
    shipping_db: ShippingDatabase = Depends(get_shipping_db),
    settings: Settings = Depends(get_settings),
):
    """Remove an item from the cart. Removing an absent item is not an error"""
    engine = _get_engine(cart_db, cart_id)

    engine.remove_item(product_id)
    shipping_db.refresh_selection(engine)
    return _response(cart_id, engine, settings, "Item removed")


@router.delete("/{cart_id}", response_model=CartResponse)
async def clear_cart(
    cart_id: str,
    cart_db: CartDatabase = Depends(get_cart_db),
    settings: Settings = Depends(get_settings),
):
    """Clear all items and the shipping selection"""
    engine = _get_engine(cart_db, cart_id)

    engine.clear()
    return _response(cart_id, engine, settings, "Cart cleared")


@router.put("/{cart_id}/shipping", response_model=CartResponse)
async def select_shipping_method(
    cart_id: str,
    request: SelectShippingRequest,
    cart_db: CartDatabase = Depends(get_cart_db),
    shipping_db: ShippingDatabase = Depends(get_shipping_db),
    settings: Settings = Depends(get_settings),
):
    """Pick a shipping method for the cart, or clear it with null"""
    engine = _get_engine(cart_db, cart_id)

    if request.shipping_method_id is None:
        engine.set_shipping_method(None)
        return _response(cart_id, engine, settings, "Shipping method cleared")

    method = shipping_db.get_method(request.shipping_method_id)
    if not method:
        raise HTTPException(status_code=404, detail="Shipping method not found")

    shipping_db.select(engine, method)
    return _response(cart_id, engine, settings, f"Shipping via {method.display_name}")


@router.put("/{cart_id}/destination", response_model=CartResponse)
async def set_destination(
    cart_id: str,
    request: DestinationRequest,
    cart_db: CartDatabase = Depends(get_cart_db),
    settings: Settings = Depends(get_settings),
):
    """Apply the tax rate of the destination state"""
    engine = _get_engine(cart_db, cart_id)

    rate = tax_rate_for_region(request.state)
    if rate is None:
        logger.warning(f"No tax rate for region {request.state!r}, cart {cart_id} keeps {engine.tax_rate}")
        return _response(
            cart_id,
            engine,
            settings,
            f"No tax rate for {request.state.upper()}; keeping current rate",
        )

    engine.set_tax_rate(rate)
    return _response(cart_id, engine, settings, f"Tax rate for {request.state.upper()} applied")


@router.put("/{cart_id}/tax-rate", response_model=CartResponse)
async def set_tax_rate(
    cart_id: str,
    request: TaxRateRequest,
    cart_db: CartDatabase = Depends(get_cart_db),
    settings: Settings = Depends(get_settings),
):
    """Set an explicit tax rate (0 <= rate < 1)"""
    engine = _get_engine(cart_db, cart_id)

    engine.set_tax_rate(request.tax_rate)
    return _response(cart_id, engine, settings, "Tax rate updated")
