# Database modules

from .products import ProductDatabase
from .carts import CartDatabase
from .shipping import ShippingDatabase
from .orders import OrderDatabase
from .payments import PaymentGateway

__all__ = [
    "ProductDatabase",
    "CartDatabase",
    "ShippingDatabase",
    "OrderDatabase",
    "PaymentGateway",
]
