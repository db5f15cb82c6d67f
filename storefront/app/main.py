"""
Marketplace Storefront Application

Backend-for-frontend for the buyer storefront. Hosts one cart pricing
engine per cart session and provides the catalog, shipping, tax and
checkout collaborators the engine is driven by.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cart import FileCartStorage, MemoryCartStorage

from .core.config import Settings, get_settings
from .database import (
    CartDatabase,
    OrderDatabase,
    PaymentGateway,
    ProductDatabase,
    ShippingDatabase,
)
from .routes import cart_router, checkout_router, products_router, shipping_router

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "..", "config", ".env"))

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings: Settings = app.state.settings
    logger.info("Storefront starting up...")
    logger.info(
        f"Cart storage: {settings.cart_storage_dir if settings.persistent_carts else 'in-memory'}"
    )
    logger.info(f"Default tax rate: {settings.default_tax_rate}")
    yield
    logger.info("Storefront shutting down...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application with its own set of stores"""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Marketplace storefront cart, shipping and checkout API",
        version="1.0.0",
        lifespan=lifespan,
    )

    storage = (
        FileCartStorage(settings.cart_storage_dir)
        if settings.persistent_carts
        else MemoryCartStorage()
    )

    app.state.settings = settings
    app.state.product_db = ProductDatabase()
    app.state.cart_db = CartDatabase(
        storage=storage,
        default_tax_rate=settings.default_tax_rate,
        max_cached=settings.cart_cache_size,
    )
    app.state.shipping_db = ShippingDatabase()
    app.state.order_db = OrderDatabase()
    app.state.payment_gateway = PaymentGateway()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, restrict this
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(shipping_router)
    app.include_router(checkout_router)

    @app.get("/")
    async def home():
        """Storefront API index"""
        return {
            "message": "Marketplace Storefront API",
            "docs": "/docs",
            "endpoints": {
                "products": "/api/products",
                "cart": "/api/cart",
                "shipping": "/api/shipping",
                "checkout": "/api/checkout",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "storefront",
            "persistent_carts": settings.persistent_carts,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.debug,
    )
