"""
Request dependencies.

Stores are created once per application in create_app() and kept on
app.state; routes receive them through these functions instead of
importing module-level singletons.
"""

from fastapi import Request

from .core.config import Settings
from .database import (
    CartDatabase,
    OrderDatabase,
    PaymentGateway,
    ProductDatabase,
    ShippingDatabase,
)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_product_db(request: Request) -> ProductDatabase:
    return request.app.state.product_db


def get_cart_db(request: Request) -> CartDatabase:
    return request.app.state.cart_db


def get_shipping_db(request: Request) -> ShippingDatabase:
    return request.app.state.shipping_db


def get_order_db(request: Request) -> OrderDatabase:
    return request.app.state.order_db


def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway
