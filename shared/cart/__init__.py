# Cart & Pricing Engine
# Holds cart line items, shipping selection and tax rate; derives totals.

from .engine import CartEngine
from .exceptions import CorruptCartData, InvalidCartInput
from .models import CartLineItem, CartLineItemInput, CartSnapshot, ShippingMethod
from .storage import CartStorage, FileCartStorage, MemoryCartStorage

__all__ = [
    "CartEngine",
    "CartLineItem",
    "CartLineItemInput",
    "CartSnapshot",
    "ShippingMethod",
    "CartStorage",
    "MemoryCartStorage",
    "FileCartStorage",
    "InvalidCartInput",
    "CorruptCartData",
]
