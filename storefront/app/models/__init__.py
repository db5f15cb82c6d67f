# Storefront Models

from .product import Product, ProductCategory, ProductSearchResponse
from .cart import (
    Cart,
    CartItem,
    SelectedShippingMethod,
    AddToCartRequest,
    UpdateCartItemRequest,
    SelectShippingRequest,
    DestinationRequest,
    TaxRateRequest,
    CartResponse,
)
from .shipping import (
    ShippingMethodInfo,
    ShippingPolicy,
    ShippingCalculateRequest,
    ShippingCalculateResponse,
    SellerShippingBreakdown,
)
from .checkout import (
    Order,
    OrderItem,
    OrderStatus,
    GuestInfo,
    CheckoutRequest,
    CheckoutResponse,
    ShippingAddress,
    PaymentIntent,
    PaymentIntentItem,
    PaymentIntentRequest,
    PaymentStatus,
)

__all__ = [
    "Product",
    "ProductCategory",
    "ProductSearchResponse",
    "Cart",
    "CartItem",
    "SelectedShippingMethod",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "SelectShippingRequest",
    "DestinationRequest",
    "TaxRateRequest",
    "CartResponse",
    "ShippingMethodInfo",
    "ShippingPolicy",
    "ShippingCalculateRequest",
    "ShippingCalculateResponse",
    "SellerShippingBreakdown",
    "Order",
    "OrderItem",
    "OrderStatus",
    "GuestInfo",
    "CheckoutRequest",
    "CheckoutResponse",
    "ShippingAddress",
    "PaymentIntent",
    "PaymentIntentItem",
    "PaymentIntentRequest",
    "PaymentStatus",
]
