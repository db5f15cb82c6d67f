"""Checkout models for the storefront"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    SUCCEEDED = "succeeded"
    REQUIRES_PAYMENT_METHOD = "requires_payment_method"


class ShippingAddress(BaseModel):
    """Shipping address for order"""
    name: str = Field(min_length=1)
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    country: str = "US"
    email: str = Field(min_length=3)
    phone: str = Field(min_length=1)


class CheckoutRequest(BaseModel):
    """Request to checkout"""
    cart_id: str
    shipping_address: ShippingAddress
    # Payment method from the hosted card widget
    payment_method_id: str = "pm_card_visa"
    user_id: Optional[str] = None


class PaymentIntentItem(BaseModel):
    id: str
    quantity: int
    price: Decimal


class PaymentIntentRequest(BaseModel):
    """Payment-intent request built from the cart snapshot"""
    amount: int = Field(ge=0, description="Total in minor units (cents)")
    currency: str
    items: list[PaymentIntentItem]
    tax: Decimal
    shipping_cost: Decimal
    shipping_method_id: str
    user_id: Optional[str] = None


class PaymentIntent(BaseModel):
    """Result of confirming a payment intent"""
    id: str
    client_secret: str
    amount: int
    currency: str
    status: PaymentStatus
    error_message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == PaymentStatus.SUCCEEDED


class GuestInfo(BaseModel):
    """Contact details for buyers without an account"""
    name: str
    email: str
    phone: str


class OrderItem(BaseModel):
    """Item in an order"""
    product_id: str
    title: str
    seller_id: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class Order(BaseModel):
    """Completed order"""
    order_id: str
    status: OrderStatus
    user_id: Optional[str] = None
    guest_info: Optional[GuestInfo] = None
    items: list[OrderItem]
    subtotal: Decimal
    tax_rate: Decimal
    tax: Decimal
    shipping_method_id: str
    shipping_cost: Decimal
    total: Decimal
    currency: str = "usd"
    shipping_address: ShippingAddress
    payment_id: str
    created_at: datetime
    updated_at: datetime


class CheckoutResponse(BaseModel):
    """Response from checkout"""
    success: bool
    order: Optional[Order] = None
    payment_id: Optional[str] = None
    error_message: Optional[str] = None
