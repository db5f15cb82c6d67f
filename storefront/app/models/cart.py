"""Cart API models"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, StrictInt, field_validator

from cart import CartSnapshot
from cart.money import round2
from cart.tax import validate_tax_rate


class CartItem(BaseModel):
    """Line item in a shopping cart"""
    product_id: str
    title: str
    seller_id: str
    quantity: int = Field(gt=0)
    unit_price: Decimal
    line_total: Decimal
    image_url: Optional[str] = None


class SelectedShippingMethod(BaseModel):
    """Shipping method chosen for the cart with its quoted cost"""
    id: str
    display_name: str
    provider: str
    cost: Decimal


class Cart(BaseModel):
    """Shopping cart with derived totals"""
    cart_id: str
    items: list[CartItem] = []
    item_count: int = 0
    subtotal: Decimal = Decimal("0.00")
    tax_rate: Decimal = Decimal("0")
    tax: Decimal = Decimal("0.00")
    shipping_method: Optional[SelectedShippingMethod] = None
    shipping_cost: Decimal = Decimal("0.00")
    total: Decimal = Decimal("0.00")
    currency: str = "usd"

    @classmethod
    def from_snapshot(cls, cart_id: str, snapshot: CartSnapshot, currency: str = "usd") -> "Cart":
        """Render an engine snapshot, rounding money for display"""
        method = snapshot.selected_shipping_method
        return cls(
            cart_id=cart_id,
            items=[
                CartItem(
                    product_id=item.id,
                    title=item.title,
                    seller_id=item.seller_id,
                    quantity=item.quantity,
                    unit_price=round2(item.unit_price),
                    line_total=round2(item.line_total),
                    image_url=item.image_ref,
                )
                for item in snapshot.items
            ],
            item_count=snapshot.item_count,
            subtotal=round2(snapshot.subtotal),
            tax_rate=snapshot.tax_rate,
            tax=round2(snapshot.tax),
            shipping_method=SelectedShippingMethod(
                id=method.id,
                display_name=method.display_name,
                provider=method.provider,
                cost=round2(method.base_cost),
            ) if method else None,
            shipping_cost=round2(snapshot.shipping_cost),
            total=round2(snapshot.total),
            currency=currency,
        )


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    product_id: str
    quantity: StrictInt = Field(default=1, gt=0)


class UpdateCartItemRequest(BaseModel):
    """Request to set an item's quantity; zero or less removes it"""
    quantity: StrictInt


class SelectShippingRequest(BaseModel):
    """Request to pick a shipping method, or null to clear it"""
    shipping_method_id: Optional[str] = None


class DestinationRequest(BaseModel):
    """Destination region used to pick the tax rate"""
    state: str = Field(min_length=2, max_length=2)


class TaxRateRequest(BaseModel):
    """Explicit tax rate override"""
    tax_rate: Decimal

    @field_validator("tax_rate")
    @classmethod
    def rate_in_range(cls, value: Decimal) -> Decimal:
        return validate_tax_rate(value)


class CartResponse(BaseModel):
    """Cart API response"""
    cart: Cart
    message: Optional[str] = None
