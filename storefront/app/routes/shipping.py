"""Shipping API routes for the storefront"""

from fastapi import APIRouter, Depends, HTTPException

from ..database import CartDatabase, ShippingDatabase
from ..dependencies import get_cart_db, get_shipping_db
from ..models.shipping import (
    ShippingCalculateRequest,
    ShippingCalculateResponse,
    ShippingMethodInfo,
    ShippingPolicy,
)

router = APIRouter(prefix="/api/shipping", tags=["Shipping"])


@router.get("/methods", response_model=list[ShippingMethodInfo])
async def list_shipping_methods(
    shipping_db: ShippingDatabase = Depends(get_shipping_db),
):
    """List active shipping methods"""
    return shipping_db.list_methods()


@router.post("/calculate", response_model=ShippingCalculateResponse)
async def calculate_shipping(
    request: ShippingCalculateRequest,
    cart_db: CartDatabase = Depends(get_cart_db),
    shipping_db: ShippingDatabase = Depends(get_shipping_db),
):
    """
    Quote shipping for a cart without changing its selection.

    Uses the cart's selected method when no method is given.
    """
    engine = cart_db.get_cart(request.cart_id)
    if engine is None:
        raise HTTPException(status_code=404, detail="Cart not found")

    if len(engine) == 0:
        raise HTTPException(status_code=400, detail="No items provided")

    method_id = request.shipping_method_id
    if method_id is None and engine.selected_shipping_method:
        method_id = engine.selected_shipping_method.id
    if method_id is None:
        raise HTTPException(status_code=400, detail="No shipping method selected")

    method = shipping_db.get_method(method_id)
    if not method:
        raise HTTPException(status_code=404, detail="Shipping method not found")

    quote = shipping_db.quote(engine.items, method)
    return ShippingCalculateResponse.from_quote(quote)


@router.get("/policy/{seller_id}", response_model=ShippingPolicy)
async def get_seller_policy(
    seller_id: str,
    shipping_db: ShippingDatabase = Depends(get_shipping_db),
):
    """Get a seller's shipping policy"""
    policy = shipping_db.get_policy(seller_id)
    if not policy:
        raise HTTPException(status_code=404, detail="Seller not found")
    return policy


@router.put("/policy/{seller_id}", response_model=ShippingPolicy)
async def update_seller_policy(
    seller_id: str,
    policy: ShippingPolicy,
    shipping_db: ShippingDatabase = Depends(get_shipping_db),
):
    """Replace a seller's shipping policy"""
    return shipping_db.update_policy(seller_id, policy)
